"""Shared fixtures: the example route document and a router built on it."""

from pathlib import Path

import pytest

from waypost.routing.router import Router

EXAMPLE_ROUTES = """\
<?xml version="1.0" encoding="UTF-8"?>
<routes>
  <route match="/" controller="core" action="index" />
  <route match="/:controller/" controller=":controller" action="index" />
  <route match="/:controller/:action/*" controller=":controller" action=":action" />
</routes>
"""


@pytest.fixture
def routes_file(tmp_path: Path) -> Path:
    path = tmp_path / "routes.xml"
    path.write_text(EXAMPLE_ROUTES, encoding="utf-8")
    return path


@pytest.fixture
def router(routes_file: Path) -> Router:
    return Router.from_file(routes_file)
