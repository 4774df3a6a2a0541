"""Waypost exception hierarchy.

Shared across the route table, matcher, builder, and store so every module
raises and catches the same types.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waypost.routing.params import RouteParams


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigError(WaypostError):
    """Raised when the route document is absent or malformed.

    Also raised for a match template that cannot be compiled. Fatal to
    construction of the table; not retried.
    """


@dataclass(frozen=True, slots=True)
class NotFoundError(WaypostError):
    """No route resolved the given input.

    Raised by ``Router.route`` with ``url`` set, and by ``Router.build_url``
    with ``controller``, ``action`` and ``params`` set. Recoverable: the
    caller decides the fallback (usually a 404 page).
    """

    url: str | None = None
    controller: str | None = None
    action: str | None = None
    params: "RouteParams | None" = None

    def __str__(self) -> str:
        if self.url is not None:
            return f'No routes found for "{self.url}".'
        detail = f'No routes found for controller "{self.controller}" with action "{self.action}"'
        if self.params:
            slugs = '", "'.join(value for _, value in self.params.items())
            detail += f' (slugs: "{slugs}")'
        return detail + "."


class PersistError(WaypostError):
    """Raised when an appended route could not be written to the document.

    The in-memory table is left exactly as it was before the append.
    """

    def __init__(self, path: str | Path, detail: str = "") -> None:
        self.path = Path(path)
        default_detail = f'Could not add route. "{self.path}" is not writable.'
        super().__init__(detail or default_detail)
