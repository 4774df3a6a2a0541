"""Router — one object for both routing directions.

Ties a route table to its matcher and builder and owns runtime additions
to the table.
"""

from pathlib import Path

from waypost.config import RouterConfig
from waypost.routing.builder import Builder, Slugs
from waypost.routing.matcher import Matcher
from waypost.routing.pattern import RoutePattern
from waypost.routing.route import ResolvedRoute
from waypost.routing.table import RouteTable
from waypost.store import XMLRouteStore


class Router:
    """Extract controller/action/slugs from URLs and build URLs from them.

    Usage::

        router = Router.from_file("routes.xml")
        route = router.route("/blog/detail/hello-world/")
        url = router.build_url("blog", "detail", ["hello-world"])
    """

    __slots__ = ("_builder", "_matcher", "_table")

    def __init__(self, table: RouteTable) -> None:
        self._table = table
        self._matcher = Matcher(table)
        self._builder = Builder(table)

    @classmethod
    def from_config(cls, config: RouterConfig) -> "Router":
        """Load the route document named by *config*.

        Raises ``ConfigError`` if the document is absent or malformed.
        """
        store = XMLRouteStore(config.routes_file, encoding=config.encoding, indent=config.indent)
        return cls(RouteTable.load(store))

    @classmethod
    def from_file(cls, path: str | Path) -> "Router":
        return cls.from_config(RouterConfig(routes_file=path))

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def routes(self) -> tuple[RoutePattern, ...]:
        """All patterns in table order."""
        return self._table.patterns

    def route(self, url: str) -> ResolvedRoute:
        """Resolve a URL path. Raises ``NotFoundError`` if nothing matches."""
        return self._matcher.route(url)

    def build_url(self, controller: str, action: str, params: Slugs = None) -> str:
        """Build the URL for *controller*/*action*.

        *params* may be a ``RouteParams``, a mapping of position or name to
        value, or a plain sequence of positional values. Raises
        ``NotFoundError`` if no route can take them.
        """
        return self._builder.build_url(controller, action, params)

    def add_route(self, controller: str, action: str, match: str) -> RoutePattern:
        """Append a route and persist the table.

        Raises ``ConfigError`` if *match* does not compile and
        ``PersistError`` if the document could not be written, in which
        case the router is unchanged.
        """
        pattern = RoutePattern(match=match, controller=controller, action=action)
        self._table.append(pattern)
        return pattern
