"""Route table — ordered patterns plus a pre-tiered lookup index.

Table order is matching priority and is never changed. The index groups
patterns by tier once per snapshot so the matcher and builder never filter
the whole table per call.

Thread Safety:
    Readers take one immutable snapshot per call. ``append`` builds a new
    snapshot and swaps it in only after the store accepted it; callers must
    serialize appends themselves.

"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from waypost.routing.pattern import RoutePattern, Tier
from waypost.store import RouteStore

logger = logging.getLogger("waypost.routing")


@dataclass(frozen=True, slots=True)
class _Snapshot:
    patterns: tuple[RoutePattern, ...]
    tiers: dict[Tier, tuple[RoutePattern, ...]]
    # Generation lookups for the three tiers with a literal token
    by_pair: dict[tuple[str, str], tuple[RoutePattern, ...]]
    by_controller: dict[str, tuple[RoutePattern, ...]]
    by_action: dict[str, tuple[RoutePattern, ...]]


def _index(patterns: tuple[RoutePattern, ...]) -> _Snapshot:
    tiers: dict[Tier, list[RoutePattern]] = {tier: [] for tier in Tier}
    by_pair: defaultdict[tuple[str, str], list[RoutePattern]] = defaultdict(list)
    by_controller: defaultdict[str, list[RoutePattern]] = defaultdict(list)
    by_action: defaultdict[str, list[RoutePattern]] = defaultdict(list)

    for pattern in patterns:
        tier = pattern.tier
        tiers[tier].append(pattern)
        if tier is Tier.LITERAL:
            by_pair[pattern.controller, pattern.action].append(pattern)
        elif tier is Tier.ACTION_BACKREF:
            by_controller[pattern.controller].append(pattern)
        elif tier is Tier.CONTROLLER_BACKREF:
            by_action[pattern.action].append(pattern)

    return _Snapshot(
        patterns=patterns,
        tiers={tier: tuple(group) for tier, group in tiers.items()},
        by_pair={key: tuple(group) for key, group in by_pair.items()},
        by_controller={key: tuple(group) for key, group in by_controller.items()},
        by_action={key: tuple(group) for key, group in by_action.items()},
    )


class RouteTable:
    """Ordered route patterns with an optional backing store.

    Usage::

        table = RouteTable.load(XMLRouteStore("routes.xml"))
        for pattern in table.match_candidates():
            ...
    """

    __slots__ = ("_snapshot", "_store")

    def __init__(self, patterns: Iterable[RoutePattern] = (), store: RouteStore | None = None) -> None:
        self._snapshot = _index(tuple(patterns))
        self._store = store

    @classmethod
    def load(cls, store: RouteStore) -> "RouteTable":
        """Read the ordered pattern list from *store*.

        Raises ``ConfigError`` if the backing document is absent or malformed.
        """
        return cls(store.load(), store=store)

    @property
    def store(self) -> RouteStore | None:
        return self._store

    @property
    def patterns(self) -> tuple[RoutePattern, ...]:
        """All patterns in table order."""
        return self._snapshot.patterns

    def __iter__(self) -> Iterator[RoutePattern]:
        return iter(self._snapshot.patterns)

    def __len__(self) -> int:
        return len(self._snapshot.patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._snapshot.patterns

    def append(self, pattern: RoutePattern) -> None:
        """Add *pattern* at the end and persist the whole table.

        Raises ``PersistError`` if the store could not be written; the
        table then still holds exactly the patterns it had before.
        """
        snapshot = _index((*self._snapshot.patterns, pattern))
        if self._store is not None:
            self._store.save(snapshot.patterns)
        self._snapshot = snapshot
        logger.info(
            "Added route %r -> %s/%s (%d routes)",
            pattern.match,
            pattern.controller,
            pattern.action,
            len(snapshot.patterns),
        )

    def match_candidates(self) -> Iterator[RoutePattern]:
        """Patterns in matching order: tier by tier, table order within."""
        snapshot = self._snapshot
        for tier in Tier:
            yield from snapshot.tiers[tier]

    def build_candidates(self, controller: str, action: str) -> Iterator[RoutePattern]:
        """Patterns that may generate a URL for *controller*/*action*.

        Exact literal pairs first, then literal controller with a
        backreferenced action, then backreferenced controller with a literal
        action, then fully backreferenced patterns.
        """
        snapshot = self._snapshot
        yield from snapshot.by_pair.get((controller, action), ())
        yield from snapshot.by_controller.get(controller, ())
        yield from snapshot.by_action.get(action, ())
        yield from snapshot.tiers[Tier.BACKREF]
