"""Route patterns — one compiled entry of the route table.

A match template mixes literal text with placeholders::

    /blog/:slug/        named placeholder, one path segment
    /files/?/           generic placeholder, one path segment
    /static/*           greedy placeholder, any remaining content
    /:controller/(:action/)   optional group

The template is tokenized once and compiled to an anchored regular
expression when the pattern is created. The builder works on the same
tokens, so matching and generation agree on what a placeholder is.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from waypost.errors import ConfigError

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class TokenKind(Enum):
    LITERAL = "literal"
    NAMED = "named"
    ONE = "one"
    GREEDY = "greedy"
    OPEN = "open"
    CLOSE = "close"


# Regex fragment for each placeholder kind
_FRAGMENTS: dict[TokenKind, str] = {
    TokenKind.ONE: r"(?:[^/]*)",
    TokenKind.GREEDY: r"(?:.*)",
    TokenKind.OPEN: r"(?:",
    TokenKind.CLOSE: r")?",
}


@dataclass(frozen=True, slots=True)
class Token:
    """A parsed piece of a match template.

    Literal:  ``Token(LITERAL, "/blog/")``
    Named:    ``Token(NAMED, "slug")``  (from ``:slug``)
    Generic:  ``Token(ONE, "?")``
    Greedy:   ``Token(GREEDY, "*")``
    """

    kind: TokenKind
    value: str = ""


class Tier(IntEnum):
    """Priority class of a pattern, most specific first."""

    LITERAL = 1
    ACTION_BACKREF = 2
    CONTROLLER_BACKREF = 3
    BACKREF = 4


def is_backref(token: str) -> bool:
    """True if a controller/action token refers to a named capture."""
    return token.startswith(":")


def backref_name(token: str) -> str:
    return token[1:]


def tokenize(template: str) -> tuple[Token, ...]:
    """Split a match template into tokens.

    A ``?`` directly followed by ``:`` is literal text, as is a ``:`` that
    does not start a name.

    Raises ``ConfigError`` for unbalanced parentheses or a placeholder
    name used twice.
    """
    tokens: list[Token] = []
    literal: list[str] = []
    names: set[str] = set()
    depth = 0

    def flush() -> None:
        if literal:
            tokens.append(Token(TokenKind.LITERAL, "".join(literal)))
            literal.clear()

    i = 0
    while i < len(template):
        char = template[i]
        if char == ":" and (name := _NAME.match(template, i + 1)):
            if name.group() in names:
                msg = f"Placeholder ':{name.group()}' appears more than once in {template!r}."
                raise ConfigError(msg)
            names.add(name.group())
            flush()
            tokens.append(Token(TokenKind.NAMED, name.group()))
            i = name.end()
            continue
        if char == "?" and template[i + 1 : i + 2] != ":":
            flush()
            tokens.append(Token(TokenKind.ONE, char))
        elif char == "*":
            flush()
            tokens.append(Token(TokenKind.GREEDY, char))
        elif char == "(":
            flush()
            depth += 1
            tokens.append(Token(TokenKind.OPEN, char))
        elif char == ")":
            if depth == 0:
                msg = f"Unbalanced ')' at position {i} in {template!r}."
                raise ConfigError(msg)
            flush()
            depth -= 1
            tokens.append(Token(TokenKind.CLOSE, char))
        else:
            literal.append(char)
        i += 1

    if depth:
        msg = f"Unclosed '(' in {template!r}."
        raise ConfigError(msg)
    flush()
    return tuple(tokens)


def compile_tokens(tokens: tuple[Token, ...]) -> re.Pattern[str]:
    """Compile tokens to a regex meant for ``fullmatch``.

    Named placeholders are non-greedy so two of them in one segment do not
    swallow each other; everything except named placeholders is
    non-capturing.
    """
    parts: list[str] = []
    for token in tokens:
        if token.kind is TokenKind.LITERAL:
            parts.append(re.escape(token.value))
        elif token.kind is TokenKind.NAMED:
            parts.append(f"(?P<{token.value}>[^/]*?)")
        else:
            parts.append(_FRAGMENTS[token.kind])
    return re.compile("".join(parts))


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """One route table entry.

    ``controller`` and ``action`` are either literal names or ``:name``
    backreferences into ``match``. Created at load time; the template is
    compiled immediately, so a bad template fails fast with ``ConfigError``.
    """

    match: str
    controller: str
    action: str
    tokens: tuple[Token, ...] = field(init=False, repr=False, compare=False)
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        tokens = tokenize(self.match)
        object.__setattr__(self, "tokens", tokens)
        object.__setattr__(self, "regex", compile_tokens(tokens))

    @property
    def tier(self) -> Tier:
        controller_ref = is_backref(self.controller)
        action_ref = is_backref(self.action)
        if controller_ref and action_ref:
            return Tier.BACKREF
        if controller_ref:
            return Tier.CONTROLLER_BACKREF
        if action_ref:
            return Tier.ACTION_BACKREF
        return Tier.LITERAL

    @property
    def names(self) -> tuple[str, ...]:
        """Named placeholders in template order."""
        return tuple(t.value for t in self.tokens if t.kind is TokenKind.NAMED)
