"""Forward routing: URL path to controller, action and slugs."""

import logging
import re

from waypost.errors import NotFoundError
from waypost.routing.params import ParamKey, RouteParams
from waypost.routing.pattern import RoutePattern, backref_name, is_backref
from waypost.routing.result import CandidateResult, Rejected, Resolved
from waypost.routing.route import ResolvedRoute
from waypost.routing.table import RouteTable

logger = logging.getLogger("waypost.routing")


class Matcher:
    """Resolve URL paths against a route table.

    Usage::

        matcher = Matcher(table)
        route = matcher.route("/blog/detail/hello-world/")
        route.controller, route.action, route.params[0]
    """

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable) -> None:
        self._table = table

    def route(self, url: str) -> ResolvedRoute:
        """Return the first candidate that fully resolves *url*.

        Raises ``NotFoundError`` if no pattern in any tier resolves it.
        """
        for pattern in self._table.match_candidates():
            result = match_pattern(pattern, url)
            if isinstance(result, Resolved):
                return result.value
            logger.debug("Route %r skipped for %r: %s", pattern.match, url, result.reason)

        logger.debug("No route matches %r", url)
        raise NotFoundError(url=url)


def match_pattern(pattern: RoutePattern, url: str) -> CandidateResult[ResolvedRoute]:
    """Try one pattern against *url*."""
    found = pattern.regex.fullmatch(url)
    if found is None:
        return Rejected("no match")

    captures = found.groupdict()
    controller = _resolve_token(pattern.controller, captures)
    if controller is None:
        return Rejected(f"controller {pattern.controller!r} unresolved")
    action = _resolve_token(pattern.action, captures)
    if action is None:
        return Rejected(f"action {pattern.action!r} unresolved")

    return Resolved(
        ResolvedRoute(
            url=url,
            controller=controller,
            action=action,
            params=_collect_params(pattern, url, found),
        )
    )


def _resolve_token(token: str, captures: dict[str, str | None]) -> str | None:
    """Literal tokens pass through; backreferences take the capture's value.

    ``None`` means unresolved: the capture is unknown, did not take part in
    the match, or still looks like a placeholder. An empty capture resolves.
    """
    if not is_backref(token):
        return token
    value = captures.get(backref_name(token))
    if value is None or is_backref(value):
        return None
    return value


def _collect_params(pattern: RoutePattern, url: str, found: re.Match[str]) -> RouteParams:
    """Gather slugs from named captures and the path segments.

    Values are deduplicated first-seen-wins, with the full match taking
    part but never kept. Captures that resolved the controller or action
    are dropped, as are empty values. Remaining path segments become
    positional slugs.
    """
    consumed = {backref_name(t) for t in (pattern.controller, pattern.action) if is_backref(t)}
    seen = {found.group(0)}
    items: list[tuple[ParamKey, str]] = []

    for name in pattern.names:
        value = found.group(name) or ""
        if value in seen:
            continue
        seen.add(value)
        if value and name not in consumed:
            items.append((name, value))

    position = 0
    for segment in url.strip("/").split("/"):
        if segment in seen:
            continue
        seen.add(segment)
        if segment:
            items.append((position, segment))
            position += 1

    return RouteParams.from_items(items)
