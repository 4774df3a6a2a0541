"""Route parameters (slugs) — positional and named values side by side.

A slug is addressed either by its position among the positional values or
by name. Entries keep the order they were supplied in, which the builder
relies on when filling placeholders.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import TypeAlias

ParamKey: TypeAlias = int | str


class RouteParams(Mapping[ParamKey, str]):
    """Immutable, ordered slug container.

    Positional keys are always ``0..n-1`` in supply order; integer keys
    passed in are only used to mark an entry as positional. Named keys are
    unique.

    Usage::

        params = RouteParams("2024", "hello-world", lang="en")
        params.positional  # ("2024", "hello-world")
        params.named       # {"lang": "en"}
        params[1]          # "hello-world"
    """

    _entries: tuple[tuple[ParamKey, str], ...]

    __slots__ = ("_entries",)

    def __init__(self, *positional: object, **named: object) -> None:
        items: list[tuple[ParamKey, object]] = [(i, v) for i, v in enumerate(positional)]
        items.extend(named.items())
        object.__setattr__(self, "_entries", _normalize(items))

    @classmethod
    def from_items(cls, items: Iterable[tuple[ParamKey, object]]) -> "RouteParams":
        """Build from ``(key, value)`` pairs, keeping their order."""
        params = cls.__new__(cls)
        object.__setattr__(params, "_entries", _normalize(items))
        return params

    @classmethod
    def coerce(
        cls,
        value: "RouteParams | Mapping[ParamKey, object] | Iterable[object] | None",
    ) -> "RouteParams":
        """Accept whatever callers commonly pass as slugs.

        ``None`` gives an empty container, a mapping is read in its
        iteration order, and any other iterable is taken as positional
        values.
        """
        if value is None:
            return cls()
        if isinstance(value, RouteParams):
            return value
        if isinstance(value, Mapping):
            return cls.from_items(value.items())
        if isinstance(value, str | bytes):
            msg = f"Slugs must be a mapping or a sequence of values, got {type(value).__name__}."
            raise TypeError(msg)
        return cls(*value)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "RouteParams is immutable."
        raise AttributeError(msg)

    def __getitem__(self, key: ParamKey) -> str:
        for entry_key, value in self._entries:
            if entry_key == key and type(entry_key) is type(key):
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[ParamKey]:
        return (key for key, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        # Equality ignores entry order, so the hash does too
        return hash(frozenset(self._entries))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._entries)
        return f"RouteParams({{{items}}})"

    @property
    def positional(self) -> tuple[str, ...]:
        """Positional values in order."""
        return tuple(value for key, value in self._entries if isinstance(key, int))

    @property
    def named(self) -> dict[str, str]:
        """Named values, as a fresh dict."""
        return {key: value for key, value in self._entries if isinstance(key, str)}


def _normalize(items: Iterable[tuple[ParamKey, object]]) -> tuple[tuple[ParamKey, str], ...]:
    """Renumber positional keys and stringify values.

    Raises ``TypeError`` for keys that are neither ``int`` nor ``str`` and
    ``ValueError`` for a repeated name.
    """
    entries: list[tuple[ParamKey, str]] = []
    names: set[str] = set()
    position = 0
    for key, value in items:
        if isinstance(key, bool) or not isinstance(key, int | str):
            msg = f"Slug keys must be int or str, got {key!r}."
            raise TypeError(msg)
        if isinstance(key, str):
            if key in names:
                msg = f"Duplicate slug name {key!r}."
                raise ValueError(msg)
            names.add(key)
            entries.append((key, str(value)))
        else:
            entries.append((position, str(value)))
            position += 1
    return tuple(entries)
