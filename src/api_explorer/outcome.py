"""Request and execution outcome models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class ComposedRequest(BaseModel):
    """A ready-to-send request, relative to the configured base URL."""

    model_config = ConfigDict(frozen=True)

    method: str
    url: str  # path plus encoded query string
    headers: dict[str, str] = {}
    body: str | None = None


class Success(BaseModel):
    """A response was received, whatever its status code."""

    kind: Literal["success"] = "success"
    status: int
    elapsed_ms: float
    data: Any  # parsed JSON, or the raw text when it is not JSON


class CompositionError(BaseModel):
    """The request could not be built; nothing was sent."""

    kind: Literal["composition_error"] = "composition_error"
    message: str


class NetworkError(BaseModel):
    """The transport failed before a response arrived."""

    kind: Literal["network_error"] = "network_error"
    message: str

