"""Tests for waypost.routing.router — both directions over one table."""

from pathlib import Path

import pytest

from waypost.config import RouterConfig
from waypost.errors import ConfigError, NotFoundError, PersistError
from waypost.routing.pattern import RoutePattern
from waypost.routing.router import Router
from waypost.routing.table import RouteTable
from waypost.store import XMLRouteStore

# (url, controller, action, slugs) — each must also build back to url
SCENARIOS = [
    ("/blog/detail/this-is-a-test/", "blog", "detail", {0: "this-is-a-test"}),
    ("/blog/browse/", "blog", "browse", {}),
    ("/blog/", "blog", "index", {}),
    ("/", "core", "index", {}),
]


class TestConstruction:
    def test_from_file(self, routes_file: Path) -> None:
        router = Router.from_file(routes_file)
        assert len(router.routes) == 3

    def test_from_config(self, routes_file: Path) -> None:
        router = Router.from_config(RouterConfig(routes_file=routes_file, indent=""))
        assert isinstance(router.table.store, XMLRouteStore)
        assert router.table.store.indent == ""

    def test_missing_document(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            Router.from_file(tmp_path / "routes.xml")

    def test_in_memory_table(self) -> None:
        router = Router(RouteTable([RoutePattern(match="/", controller="core", action="index")]))
        assert router.route("/").controller == "core"


class TestScenarios:
    @pytest.mark.parametrize(("url", "controller", "action", "slugs"), SCENARIOS)
    def test_route(self, router: Router, url: str, controller: str, action: str, slugs: dict) -> None:
        route = router.route(url)
        assert route.url == url
        assert route.controller == controller
        assert route.action == action
        assert route.params == slugs

    @pytest.mark.parametrize(("url", "controller", "action", "slugs"), SCENARIOS)
    def test_build_url(
        self, router: Router, url: str, controller: str, action: str, slugs: dict
    ) -> None:
        assert router.build_url(controller, action, slugs) == url

    @pytest.mark.parametrize(("url", "controller", "action", "slugs"), SCENARIOS)
    def test_round_trip(
        self, router: Router, url: str, controller: str, action: str, slugs: dict
    ) -> None:
        route = router.route(router.build_url(controller, action, slugs))
        assert (route.controller, route.action) == (controller, action)
        assert route.params == slugs

    def test_round_trip_named_slug(self, tmp_path: Path) -> None:
        store = XMLRouteStore(tmp_path / "routes.xml")
        store.save(
            [
                RoutePattern(
                    match="/:controller/:action/:id/", controller=":controller", action=":action"
                )
            ]
        )
        router = Router.from_file(store.path)

        url = router.build_url("post", "view", {"id": "42"})
        assert url == "/post/view/42/"
        assert router.route(url).params == {"id": "42"}

    def test_not_found(self, router: Router) -> None:
        with pytest.raises(NotFoundError):
            router.route("/a")


class TestAddRoute:
    def test_added_route_is_used_and_persisted(self, router: Router, routes_file: Path) -> None:
        pattern = router.add_route("pages", "about", "/about/")

        assert router.routes[-1] == pattern
        assert router.build_url("pages", "about") == "/about/"
        route = router.route("/about/")
        assert (route.controller, route.action) == ("pages", "about")
        assert Router.from_file(routes_file).routes[-1] == pattern

    def test_added_literal_route_beats_existing_backref(self, router: Router) -> None:
        router.add_route("shop", "cart", "/:controller/:action/*")
        route = router.route("/blog/browse/")
        assert (route.controller, route.action) == ("shop", "cart")

    def test_bad_template_not_added(self, router: Router, routes_file: Path) -> None:
        before = routes_file.read_text(encoding="utf-8")
        with pytest.raises(ConfigError):
            router.add_route("pages", "about", "/about/(")
        assert len(router.routes) == 3
        assert routes_file.read_text(encoding="utf-8") == before

    def test_persist_failure_rolls_back(self, router: Router, routes_file: Path) -> None:
        routes_file.with_name(routes_file.name + ".tmp").mkdir()

        with pytest.raises(PersistError):
            router.add_route("pages", "about", "/about/")

        assert len(router.routes) == 3
        assert router.route("/about/").controller == "about"
        assert "pages" not in routes_file.read_text(encoding="utf-8")
