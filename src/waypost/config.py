"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups. The route document location is always explicit.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    ``routes_file`` is required; everything else has a default::

        config = RouterConfig(routes_file="config/routes.xml")
    """

    # Route document
    routes_file: str | Path

    # Rewrites on add_route
    encoding: str = "utf-8"
    indent: str = "  "  # Empty string writes the document on one line
