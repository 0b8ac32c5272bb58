"""Bundled fallback registry.

The fallback document is already normalized: ``{tags: {category: [endpoint...]}}``.
"""

from pathlib import Path

import yaml

from .base import Endpoint, Param, Registry, RegistrySource

FALLBACK_PATH = Path(__file__).parent / "manual_endpoints.yaml"


def load_fallback(file_path: Path = FALLBACK_PATH) -> Registry:
    """Load a pre-normalized registry document from ``file_path``."""
    doc = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}

    tags = {}
    for category, endpoints in (doc.get("tags") or {}).items():
        tags[str(category)] = tuple(_parse_endpoint(str(category), ep) for ep in endpoints or [])
    return Registry(tags=tags, source=RegistrySource.FALLBACK)


def _parse_endpoint(category: str, ep: dict) -> Endpoint:
    return Endpoint(
        path=ep["path"],
        method=ep["method"].upper(),
        parameters=tuple(
            Param(name=p["name"], location=p.get("in", "query"), required=p.get("required", False))
            for p in ep.get("parameters") or []
        ),
        request_body=bool(ep.get("requestBody")),
        category=category,
        summary=ep.get("summary", ""),
    )
