"""Route document storage.

The route table lives in an XML document::

    <?xml version="1.0" encoding="UTF-8"?>
    <routes>
      <route match="/" controller="core" action="index" />
      <route match="/:controller/" controller=":controller" action="index" />
    </routes>

Entries are read in document order. Saving rewrites the whole document
with the given patterns.
"""

import contextlib
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable
from xml.etree.ElementTree import Element, ParseError, SubElement, fromstring, indent, tostring

from waypost.errors import ConfigError, PersistError
from waypost.routing.pattern import RoutePattern

logger = logging.getLogger("waypost.store")

ROOT_TAG = "routes"
ENTRY_TAG = "route"
_ATTRIBUTES = ("match", "controller", "action")


@runtime_checkable
class RouteStore(Protocol):
    """Where a route table is loaded from and persisted to.

    ``load`` raises ``ConfigError`` if the backing document is absent or
    malformed; ``save`` raises ``PersistError`` if it cannot be written.
    """

    def load(self) -> list[RoutePattern]: ...
    def save(self, patterns: Sequence[RoutePattern]) -> None: ...


class XMLRouteStore:
    """Route table backed by an XML file.

    Args:
        path: Location of the route document.
        encoding: Encoding declared and used when the document is rewritten.
            Reading follows the document's own XML declaration.
        indent: Indentation used when the document is rewritten.

    """

    __slots__ = ("encoding", "indent", "path")

    def __init__(self, path: str | Path, *, encoding: str = "utf-8", indent: str = "  ") -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.indent = indent

    def __repr__(self) -> str:
        return f"XMLRouteStore({str(self.path)!r})"

    def load(self) -> list[RoutePattern]:
        """Parse the document into patterns, in document order."""
        if not self.path.is_file():
            msg = f'Route document "{self.path}" does not exist.'
            raise ConfigError(msg)

        try:
            root = fromstring(self.path.read_bytes())
        except OSError as exc:
            msg = f'Could not read route document "{self.path}": {exc}'
            raise ConfigError(msg) from exc
        except ParseError as exc:
            msg = f'Route document "{self.path}" is not valid XML: {exc}'
            raise ConfigError(msg) from exc

        if root.tag != ROOT_TAG:
            msg = f'Route document "{self.path}" must have a <{ROOT_TAG}> root, found <{root.tag}>.'
            raise ConfigError(msg)

        patterns = [
            _parse_entry(element, position, self.path)
            for position, element in enumerate(root.findall(ENTRY_TAG), start=1)
        ]
        logger.debug("Loaded %d routes from %s", len(patterns), self.path)
        return patterns

    def save(self, patterns: Sequence[RoutePattern]) -> None:
        """Rewrite the document with *patterns*.

        The new content goes to a sibling temporary file first and is then
        renamed over the document, so a failed write leaves the old
        document intact.
        """
        document = render_document(patterns, self.indent, self.encoding)
        staging = self.path.with_name(self.path.name + ".tmp")
        try:
            staging.write_bytes(document.encode(self.encoding, "xmlcharrefreplace"))
            staging.replace(self.path)
        except (OSError, LookupError) as exc:
            logger.warning("Could not write route document %s: %s", self.path, exc)
            with contextlib.suppress(OSError):
                staging.unlink(missing_ok=True)
            raise PersistError(self.path) from exc


def render_document(
    patterns: Sequence[RoutePattern],
    indent_with: str = "  ",
    encoding: str = "utf-8",
) -> str:
    """Serialize patterns to a complete XML document string."""
    root = Element(ROOT_TAG)
    for pattern in patterns:
        entry = SubElement(root, ENTRY_TAG)
        entry.set("match", pattern.match)
        entry.set("controller", pattern.controller)
        entry.set("action", pattern.action)
    if indent_with:
        indent(root, space=indent_with)
    body = tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="{encoding}"?>\n' + body + "\n"


def _parse_entry(element: Element, position: int, path: Path) -> RoutePattern:
    missing = [name for name in _ATTRIBUTES if element.get(name) is None]
    if missing:
        msg = f'Route #{position} in "{path}" is missing attribute(s): {", ".join(missing)}.'
        raise ConfigError(msg)
    try:
        return RoutePattern(
            match=element.get("match", ""),
            controller=element.get("controller", ""),
            action=element.get("action", ""),
        )
    except ConfigError as exc:
        msg = f'Route #{position} in "{path}": {exc}'
        raise ConfigError(msg) from exc
