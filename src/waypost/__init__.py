"""Waypost — a bidirectional URL router.

Maps URL paths to controller/action/slugs and builds URL paths back from
them, both driven by one ordered route table.

Basic usage::

    from waypost import Router

    router = Router.from_file("routes.xml")

    route = router.route("/blog/detail/hello-world/")
    route.controller  # "blog"
    route.action      # "detail"
    route.slug(0)     # "hello-world"

    router.build_url("blog", "detail", ["hello-world"])
    # "/blog/detail/hello-world/"
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "NotFoundError",
    "PersistError",
    "ResolvedRoute",
    "RouteParams",
    "RoutePattern",
    "RouteTable",
    "Router",
    "RouterConfig",
    "WaypostError",
    "XMLRouteStore",
]

_LAZY_IMPORTS = {
    "ConfigError": "waypost.errors",
    "NotFoundError": "waypost.errors",
    "PersistError": "waypost.errors",
    "WaypostError": "waypost.errors",
    "RouterConfig": "waypost.config",
    "ResolvedRoute": "waypost.routing.route",
    "RouteParams": "waypost.routing.params",
    "RoutePattern": "waypost.routing.pattern",
    "RouteTable": "waypost.routing.table",
    "Router": "waypost.routing.router",
    "XMLRouteStore": "waypost.store",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
