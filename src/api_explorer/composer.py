"""Request composer: endpoint + form values -> concrete request.

Composition is pure. It never touches the network and the same inputs
always produce the same request.
"""

from collections.abc import Mapping
from urllib.parse import quote, urlencode

from api_explorer.json_util import dump_compact, parse_json
from api_explorer.outcome import ComposedRequest, CompositionError
from api_explorer.registry.base import Endpoint

JSON_CONTENT_TYPE = "application/json"


def compose(
    endpoint: Endpoint,
    values: Mapping[str, str],
    raw_body: str = "",
) -> ComposedRequest | CompositionError:
    """Build the request for ``endpoint`` from user-supplied field values.

    Missing values are sent as empty strings; ``required`` is not checked.
    Returns CompositionError when a declared JSON body cannot be parsed.
    """
    url = endpoint.path
    query: list[tuple[str, str]] = []

    for param in endpoint.parameters:
        value = values.get(param.name) or ""
        if param.location == "path":
            url = url.replace(f"{{{param.name}}}", value, 1)
        elif param.location == "query":
            query.append((param.name, value))

    if query:
        url += "?" + urlencode(query, quote_via=quote, safe="")

    headers: dict[str, str] = {}
    body = None
    if endpoint.request_body and raw_body.strip():
        try:
            body = dump_compact(parse_json(raw_body))
        except ValueError:
            return CompositionError(message="Invalid JSON body")
        headers["Content-Type"] = JSON_CONTENT_TYPE

    return ComposedRequest(method=endpoint.method, url=url, headers=headers, body=body)
