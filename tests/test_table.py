"""Tests for waypost.routing.table — ordering, tier index, append."""

from collections.abc import Sequence
from pathlib import Path

import pytest

from waypost.errors import ConfigError, PersistError
from waypost.routing.pattern import RoutePattern
from waypost.routing.table import RouteTable
from waypost.store import XMLRouteStore


def _p(match: str, controller: str, action: str) -> RoutePattern:
    return RoutePattern(match=match, controller=controller, action=action)


class _MemoryStore:
    def __init__(self, patterns: Sequence[RoutePattern] = (), *, fail: bool = False) -> None:
        self.saved: list[list[RoutePattern]] = []
        self._patterns = list(patterns)
        self._fail = fail

    def load(self) -> list[RoutePattern]:
        return list(self._patterns)

    def save(self, patterns: Sequence[RoutePattern]) -> None:
        if self._fail:
            raise PersistError("memory://routes")
        self.saved.append(list(patterns))


BACKREF = _p("/:controller/:action/", ":controller", ":action")
ACTION_REF = _p("/blog/:action/", "blog", ":action")
CONTROLLER_REF = _p("/:controller/", ":controller", "index")
LITERAL = _p("/", "core", "index")


class TestOrdering:
    def test_preserves_table_order(self) -> None:
        table = RouteTable([BACKREF, LITERAL, ACTION_REF])
        assert table.patterns == (BACKREF, LITERAL, ACTION_REF)
        assert list(table) == [BACKREF, LITERAL, ACTION_REF]
        assert len(table) == 3

    def test_no_deduplication(self) -> None:
        table = RouteTable([LITERAL, LITERAL])
        assert len(table) == 2

    def test_contains(self) -> None:
        table = RouteTable([LITERAL])
        assert LITERAL in table
        assert BACKREF not in table


class TestCandidates:
    def test_match_candidates_by_tier(self) -> None:
        table = RouteTable([BACKREF, CONTROLLER_REF, ACTION_REF, LITERAL])
        assert list(table.match_candidates()) == [LITERAL, ACTION_REF, CONTROLLER_REF, BACKREF]

    def test_match_candidates_keep_order_within_tier(self) -> None:
        first = _p("/:controller/:action/", ":controller", ":action")
        second = _p("/:action/:controller/", ":controller", ":action")
        table = RouteTable([first, second])
        assert list(table.match_candidates()) == [first, second]

    def test_build_candidates_filter_literals(self) -> None:
        other = _p("/news/:action/", "news", ":action")
        table = RouteTable([BACKREF, other, CONTROLLER_REF, ACTION_REF, LITERAL])
        assert list(table.build_candidates("blog", "index")) == [ACTION_REF, CONTROLLER_REF, BACKREF]
        assert list(table.build_candidates("core", "index")) == [LITERAL, CONTROLLER_REF, BACKREF]

    def test_build_candidates_unknown_pair(self) -> None:
        table = RouteTable([LITERAL, ACTION_REF])
        assert list(table.build_candidates("shop", "cart")) == []


class TestLoad:
    def test_load_from_store(self) -> None:
        store = _MemoryStore([LITERAL, BACKREF])
        table = RouteTable.load(store)
        assert table.patterns == (LITERAL, BACKREF)
        assert table.store is store

    def test_load_propagates_config_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            RouteTable.load(XMLRouteStore(tmp_path / "missing.xml"))


class TestAppend:
    def test_append_persists_whole_table(self) -> None:
        store = _MemoryStore([LITERAL])
        table = RouteTable.load(store)
        table.append(BACKREF)
        assert table.patterns == (LITERAL, BACKREF)
        assert store.saved == [[LITERAL, BACKREF]]

    def test_append_updates_tier_index(self) -> None:
        table = RouteTable([BACKREF])
        table.append(LITERAL)
        assert list(table.match_candidates()) == [LITERAL, BACKREF]
        assert list(table.build_candidates("core", "index")) == [LITERAL, BACKREF]

    def test_append_without_store(self) -> None:
        table = RouteTable()
        table.append(LITERAL)
        assert table.patterns == (LITERAL,)

    def test_persist_failure_rolls_back(self) -> None:
        table = RouteTable.load(_MemoryStore([LITERAL], fail=True))
        with pytest.raises(PersistError):
            table.append(BACKREF)
        assert table.patterns == (LITERAL,)
        assert list(table.match_candidates()) == [LITERAL]

    def test_append_writes_document(self, routes_file: Path) -> None:
        store = XMLRouteStore(routes_file)
        table = RouteTable.load(store)
        table.append(_p("/about/", "pages", "about"))
        assert store.load()[-1] == _p("/about/", "pages", "about")
        assert len(store.load()) == 4
