"""Registry builder: live discovery with a static fallback."""

import logging
from pathlib import Path

import httpx

from api_explorer.config import Settings
from api_explorer.errors import DiscoveryError
from api_explorer.json_util import parse_json

from .base import Registry
from .fallback import FALLBACK_PATH, load_fallback
from .openapi import normalize_openapi

logger = logging.getLogger(__name__)


class RegistryBuilder:
    """Builds the session registry from ``source_url``.

    ``build`` never raises for discovery problems: any retrieval or
    structural error yields the fallback registry, tagged as such.
    """

    def __init__(
        self,
        source_url: str,
        *,
        fallback_path: Path = FALLBACK_PATH,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.source_url = source_url
        self.fallback_path = fallback_path
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "RegistryBuilder":
        kwargs.setdefault("timeout", settings.timeout)
        return cls(settings.discovery_url, **kwargs)

    async def build(self) -> Registry:
        try:
            doc = await self.fetch_description()
            registry = normalize_openapi(doc)
        except DiscoveryError as e:
            logger.warning("Discovery at %s failed, using fallback registry: %s", self.source_url, e)
            return load_fallback(self.fallback_path)

        logger.info("Discovered %d endpoints in %d categories", len(registry), len(registry.tags))
        return registry

    async def fetch_description(self) -> object:
        """GET the raw API description and decode it as JSON."""
        client_kwargs: dict = {"transport": self._transport}
        if self._timeout is not None:
            client_kwargs["timeout"] = self._timeout

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.get(self.source_url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DiscoveryError(f"Could not retrieve API description: {e}") from e

        try:
            return parse_json(response.text)
        except ValueError as e:
            raise DiscoveryError(f"API description is not valid JSON: {e}") from e
