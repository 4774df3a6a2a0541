"""Reverse routing: controller, action and slugs to a URL path.

Generation mirrors matching. Each candidate template is filled from its
tokens: backreferenced controller/action placeholders first, then every
slug in the order given. Named slugs fill their ``:name`` placeholder;
positional slugs fill the next ``?``, or else go right after the first
``*``. Optional groups are always emitted.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import TypeAlias

from waypost.errors import NotFoundError
from waypost.routing.params import ParamKey, RouteParams
from waypost.routing.pattern import RoutePattern, Token, TokenKind, backref_name, is_backref
from waypost.routing.result import CandidateResult, Rejected, Resolved
from waypost.routing.table import RouteTable

logger = logging.getLogger("waypost.routing")

Slugs: TypeAlias = RouteParams | Mapping[ParamKey, object] | Iterable[object] | None


class Builder:
    """Generate URL paths from a route table."""

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable) -> None:
        self._table = table

    def build_url(self, controller: str, action: str, params: Slugs = None) -> str:
        """Return the URL of the first candidate that fully resolves.

        Raises ``NotFoundError`` if no pattern can take *controller*,
        *action* and every slug in *params*.
        """
        slugs = RouteParams.coerce(params)
        for pattern in self._table.build_candidates(controller, action):
            result = build_pattern(pattern, controller, action, slugs)
            if isinstance(result, Resolved):
                return result.value
            logger.debug(
                "Route %r skipped for %s/%s: %s", pattern.match, controller, action, result.reason
            )

        logger.debug("No route builds %s/%s with %r", controller, action, slugs)
        raise NotFoundError(controller=controller, action=action, params=slugs)


def build_pattern(
    pattern: RoutePattern,
    controller: str,
    action: str,
    params: RouteParams,
) -> CandidateResult[str]:
    """Try to fill one pattern's template."""
    backrefs: dict[str, str] = {}
    if is_backref(pattern.controller):
        backrefs[backref_name(pattern.controller)] = controller
    if is_backref(pattern.action):
        backrefs.setdefault(backref_name(pattern.action), action)

    parts: list[Token] = []
    for token in pattern.tokens:
        if token.kind in (TokenKind.OPEN, TokenKind.CLOSE):
            continue
        if token.kind is TokenKind.NAMED and token.value in backrefs:
            token = Token(TokenKind.LITERAL, backrefs[token.value])
        parts.append(token)

    for key, value in params.items():
        if isinstance(key, str):
            index = _first(parts, TokenKind.NAMED, key)
            if index is None:
                return Rejected(f"no ':{key}' placeholder")
            parts[index] = Token(TokenKind.LITERAL, value)
            continue

        index = _first(parts, TokenKind.ONE)
        if index is not None:
            parts[index] = Token(TokenKind.LITERAL, value)
            continue
        index = _first(parts, TokenKind.GREEDY)
        if index is None:
            return Rejected(f"no wildcard left for slug {value!r}")
        # The star stays in front, so later slugs land before this one
        parts.insert(index + 1, Token(TokenKind.LITERAL, f"/{value}/"))

    unfilled = [t for t in parts if t.kind in (TokenKind.NAMED, TokenKind.ONE)]
    if unfilled:
        names = ", ".join(f":{t.value}" if t.kind is TokenKind.NAMED else t.value for t in unfilled)
        return Rejected(f"unfilled placeholders: {names}")

    url = "".join(t.value for t in parts if t.kind is TokenKind.LITERAL)
    # Stray stars go, including any inside values, then doubled slashes
    return Resolved(url.replace("*", "").replace("//", "/"))


def _first(parts: list[Token], kind: TokenKind, value: str | None = None) -> int | None:
    for index, token in enumerate(parts):
        if token.kind is kind and (value is None or token.value == value):
            return index
    return None
