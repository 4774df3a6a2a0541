"""Per-candidate outcomes for the matcher and builder.

Each candidate pattern either resolves or is rejected with a reason; the
caller's loop moves on to the next candidate on ``Rejected``.
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Resolved(Generic[T]):
    """The candidate fully resolved to ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Rejected:
    """The candidate did not resolve. ``reason`` is for debug logging."""

    reason: str


CandidateResult: TypeAlias = Resolved[T] | Rejected
