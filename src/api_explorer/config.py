"""Runtime settings for api-explorer."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

API_BASE_URL_ENV = "API_BASE_URL"
DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_DISCOVERY_PATH = "/v3/api-docs"


class Settings(BaseModel):
    """Immutable settings, passed explicitly to the builder and executor."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    discovery_path: str = DEFAULT_DISCOVERY_PATH
    timeout: float | None = None  # None keeps the httpx default

    @property
    def discovery_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.discovery_path}"


def load_settings(base_url: str | None = None, env_file: Path | None = None) -> Settings:
    """Build Settings from an explicit base URL, falling back to ``API_BASE_URL``.

    A ``.env`` file is loaded first when present; real environment
    variables are never overridden by it.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    resolved = base_url or os.getenv(API_BASE_URL_ENV) or DEFAULT_BASE_URL
    return Settings(base_url=resolved.strip())
