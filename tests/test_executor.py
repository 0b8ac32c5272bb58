import asyncio
import json

import httpx

from api_explorer.config import Settings
from api_explorer.executor import Executor
from api_explorer.outcome import ComposedRequest, NetworkError, Success

BASE_URL = "http://api.test"


def _execute(handler, request: ComposedRequest, base_url: str = BASE_URL):
    executor = Executor(base_url, transport=httpx.MockTransport(handler))
    return asyncio.run(executor.execute(request))


class TestSuccess:
    def test_json_response_is_parsed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert str(request.url) == "http://api.test/api/balance/abc?at=2024"
            return httpx.Response(200, json={"balance": 10})

        outcome = _execute(handler, ComposedRequest(method="GET", url="/api/balance/abc?at=2024"))
        assert isinstance(outcome, Success)
        assert outcome.status == 200
        assert outcome.data == {"balance": 10}
        assert outcome.elapsed_ms >= 0

    def test_error_status_is_still_success(self):
        outcome = _execute(
            lambda request: httpx.Response(404, json={"error": "no such wallet"}),
            ComposedRequest(method="GET", url="/api/balance/x"),
        )
        assert isinstance(outcome, Success)
        assert outcome.status == 404
        assert outcome.data == {"error": "no such wallet"}

    def test_non_json_body_kept_as_text(self):
        outcome = _execute(
            lambda request: httpx.Response(500, text="Internal Server Error"),
            ComposedRequest(method="GET", url="/boom"),
        )
        assert outcome.status == 500
        assert outcome.data == "Internal Server Error"

    def test_empty_body_is_empty_text(self):
        outcome = _execute(lambda request: httpx.Response(204), ComposedRequest(method="DELETE", url="/x"))
        assert outcome.status == 204
        assert outcome.data == ""

    def test_deeply_nested_body_kept_as_text(self):
        text = "[" * 200000
        outcome = _execute(lambda request: httpx.Response(200, text=text), ComposedRequest(method="GET", url="/x"))
        assert isinstance(outcome, Success)
        assert outcome.data == text

    def test_non_standard_constants_kept_as_text(self):
        text = '{"ratio": NaN}'
        outcome = _execute(lambda request: httpx.Response(200, text=text), ComposedRequest(method="GET", url="/x"))
        assert outcome.data == text

    def test_sends_headers_and_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.headers["Content-Type"] == "application/json"
            assert json.loads(request.content.decode("utf-8")) == {"amount": 5}
            return httpx.Response(200, json={"index": 1})

        request = ComposedRequest(
            method="POST",
            url="/api/transaction",
            headers={"Content-Type": "application/json"},
            body='{"amount":5}',
        )
        assert _execute(handler, request).data == {"index": 1}

    def test_base_url_trailing_slash_and_prefix(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "http://api.test/prefix/items"
            return httpx.Response(200, json=[])

        outcome = _execute(handler, ComposedRequest(method="GET", url="/items"), "http://api.test/prefix/")
        assert outcome.data == []

    def test_from_settings(self):
        executor = Executor.from_settings(Settings(base_url="http://api.test/", timeout=3.0))
        assert executor.base_url == "http://api.test"


class TestNetworkError:
    def test_connect_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        outcome = _execute(handler, ComposedRequest(method="GET", url="/x"))
        assert isinstance(outcome, NetworkError)
        assert outcome.message == "connection refused"
        assert not hasattr(outcome, "elapsed_ms")

    def test_empty_exception_text_still_has_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("", request=request)

        outcome = _execute(handler, ComposedRequest(method="GET", url="/x"))
        assert isinstance(outcome, NetworkError)
        assert outcome.message == "ReadTimeout"

    def test_missing_scheme(self):
        outcome = asyncio.run(Executor("").execute(ComposedRequest(method="GET", url="/x")))
        assert isinstance(outcome, NetworkError)
        assert outcome.message
