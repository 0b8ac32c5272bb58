"""Executor: send a composed request and classify what came back."""

import logging
import time

import httpx

from api_explorer.config import Settings
from api_explorer.json_util import parse_json
from api_explorer.outcome import ComposedRequest, NetworkError, Success

logger = logging.getLogger(__name__)


class Executor:
    """Sends composed requests against ``base_url``.

    Every call opens its own client, so concurrent executions share no
    mutable state. Calls are never retried or cancelled.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "Executor":
        kwargs.setdefault("timeout", settings.timeout)
        return cls(settings.base_url, **kwargs)

    async def execute(self, request: ComposedRequest) -> Success | NetworkError:
        """Send ``request``; HTTP error statuses are still a Success."""
        url = f"{self.base_url}{request.url}"
        client_kwargs: dict = {"transport": self._transport}
        if self._timeout is not None:
            client_kwargs["timeout"] = self._timeout

        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.request(
                    request.method,
                    url,
                    headers=request.headers,
                    content=request.body,
                )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning("%s %s failed: %r", request.method, url, e)
            return NetworkError(message=str(e) or type(e).__name__)
        elapsed_ms = (time.perf_counter() - start) * 1000

        text = response.text
        try:
            data = parse_json(text)
        except ValueError:
            data = text

        logger.debug("%s %s -> %d in %.1f ms", request.method, url, response.status_code, elapsed_ms)
        return Success(status=response.status_code, elapsed_ms=elapsed_ms, data=data)
