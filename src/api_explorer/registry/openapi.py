"""OpenAPI description normalizer.

Turns a raw OpenAPI 3.x document (``/v3/api-docs``) into a Registry.
"""

from typing import Any

from pydantic import ValidationError

from api_explorer.errors import DiscoveryError

from .base import DEFAULT_CATEGORY, HTTP_METHODS, Endpoint, Param, Registry, RegistrySource

PARAMETER_REF_PREFIX = "#/components/parameters/"


def normalize_openapi(doc: Any) -> Registry:
    """Group every path/method operation of ``doc`` by its first tag.

    Raises DiscoveryError when the document does not have the expected shape.
    """
    if not isinstance(doc, dict):
        raise DiscoveryError(f"API description must be a mapping, got {type(doc).__name__}")

    paths = _get(doc, "paths", {})
    if not isinstance(paths, dict):
        raise DiscoveryError("'paths' must be a mapping")

    shared_params = _get(_get(doc, "components", {}), "parameters", {})
    if not isinstance(shared_params, dict):
        raise DiscoveryError("'components.parameters' must be a mapping")

    tags: dict[str, list[Endpoint]] = {}
    for path, methods in paths.items():
        if not isinstance(methods, dict):
            raise DiscoveryError(f"Path item for {path!r} must be a mapping")

        for method, operation in methods.items():
            if str(method).upper() not in HTTP_METHODS:
                continue
            endpoint = _parse_operation(str(path), str(method), operation, shared_params)
            tags.setdefault(endpoint.category, []).append(endpoint)

    return Registry(
        tags={category: tuple(group) for category, group in tags.items()},
        source=RegistrySource.LIVE,
    )


def _get(mapping: Any, key: str, default: Any) -> Any:
    # Only a missing key or an explicit null counts as absent
    if not isinstance(mapping, dict):
        raise DiscoveryError(f"Expected a mapping around {key!r}, got {type(mapping).__name__}")
    value = mapping.get(key)
    return default if value is None else value


def _parse_operation(path: str, method: str, operation: Any, shared_params: dict) -> Endpoint:
    label = f"{method.upper()} {path}"
    if not isinstance(operation, dict):
        raise DiscoveryError(f"Operation {label} must be a mapping")

    declared_tags = _get(operation, "tags", [])
    if not isinstance(declared_tags, list):
        raise DiscoveryError(f"'tags' of {label} must be a list")

    params = _get(operation, "parameters", [])
    if not isinstance(params, list):
        raise DiscoveryError(f"'parameters' of {label} must be a list")

    try:
        return Endpoint(
            path=path,
            method=method.upper(),
            parameters=_parse_parameters(params, shared_params),
            request_body=operation.get("requestBody") is not None,
            category=str(declared_tags[0] or DEFAULT_CATEGORY) if declared_tags else DEFAULT_CATEGORY,
            summary=_get(operation, "summary", ""),
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise DiscoveryError(f"Malformed operation {label}: {e}") from e


def _parse_parameters(params: list, shared_params: dict) -> tuple[Param, ...]:
    result = []
    for p in params:
        if isinstance(p, dict) and "$ref" in p:
            p = _resolve_ref(p["$ref"], shared_params)
            if p is None:
                continue
        result.append(
            Param(
                name=p["name"],
                location=p.get("in", "query"),
                required=bool(p.get("required", False)),
            )
        )
    return tuple(result)


def _resolve_ref(ref: Any, shared_params: dict) -> dict | None:
    """Look up a ``#/components/parameters/<name>`` reference.

    References that point elsewhere or at nothing are skipped.
    """
    if not isinstance(ref, str) or not ref.startswith(PARAMETER_REF_PREFIX):
        return None
    target = shared_params.get(ref[len(PARAMETER_REF_PREFIX):])
    if not isinstance(target, dict) or "$ref" in target:
        return None
    return target
