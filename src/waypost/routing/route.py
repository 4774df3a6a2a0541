"""ResolvedRoute frozen dataclass."""

from dataclasses import dataclass, field

from waypost.routing.params import ParamKey, RouteParams


@dataclass(frozen=True, slots=True)
class ResolvedRoute:
    """Result of a successful match: where a URL routes to."""

    url: str
    controller: str
    action: str
    params: RouteParams = field(default_factory=RouteParams)

    def slug(self, key: ParamKey, default: str | None = None) -> str | None:
        """Fetch one slug by position or name."""
        return self.params.get(key, default)
