"""Normalized endpoint registry models.

Both the live discovery document and the bundled fallback are converted
into these models once, when the registry is built.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

DEFAULT_CATEGORY = "default"

HTTP_METHODS = ("GET", "PUT", "POST", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE")


class Param(BaseModel):
    """A single operation parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str = "query"  # path / query; header and cookie are display-only
    required: bool = False  # advisory, never enforced


class Endpoint(BaseModel):
    """One (path, method) operation."""

    model_config = ConfigDict(frozen=True)

    path: str  # /items/{id}
    method: str  # upper case
    parameters: tuple[Param, ...] = ()
    request_body: bool = False
    category: str = DEFAULT_CATEGORY
    summary: str = ""

    @property
    def label(self) -> str:
        return f"{self.method} {self.path}"


class RegistrySource(str, Enum):
    LIVE = "live"
    FALLBACK = "fallback"


class Registry(BaseModel):
    """Endpoints grouped by category, in discovery order.

    Built once per session and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    tags: dict[str, tuple[Endpoint, ...]]
    source: RegistrySource

    def categories(self) -> list[str]:
        return list(self.tags)

    def endpoints(self) -> list[Endpoint]:
        return [ep for group in self.tags.values() for ep in group]

    def find(self, method: str, path: str) -> Endpoint | None:
        """Return the first endpoint matching method and path template."""
        method = method.upper()
        for ep in self.endpoints():
            if ep.method == method and ep.path == path:
                return ep
        return None

    def __len__(self) -> int:
        return sum(len(group) for group in self.tags.values())
