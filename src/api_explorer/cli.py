"""CLI entry point for api-explorer."""

import asyncio
import json
import logging

import click

from api_explorer.config import Settings, load_settings
from api_explorer.executor import Executor
from api_explorer.form import EndpointForm
from api_explorer.registry.base import Endpoint, Registry
from api_explorer.registry.builder import RegistryBuilder


def _build_registry(settings: Settings) -> Registry:
    return asyncio.run(RegistryBuilder.from_settings(settings).build())


def _format_endpoint(endpoint: Endpoint) -> list[str]:
    lines = [f"  {endpoint.label}" + (f"  - {endpoint.summary}" if endpoint.summary else "")]
    for p in endpoint.parameters:
        marker = "*" if p.required else ""
        lines.append(f"      {p.name}{marker} ({p.location})")
    if endpoint.request_body:
        lines.append("      body (JSON)")
    return lines


def _parse_values(params: tuple[str, ...]) -> dict[str, str]:
    values = {}
    for item in params:
        name, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected name=value, got {item!r}", param_hint="-p")
        values[name] = value
    return values


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Explorer - discover endpoints and execute ad-hoc requests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@main.command()
@click.option("--base-url", default=None, help="Target API base URL (defaults to $API_BASE_URL).")
def endpoints(base_url: str | None):
    """List discovered endpoints grouped by category."""
    registry = _build_registry(load_settings(base_url))
    click.echo(f"Registry source: {registry.source.value} ({len(registry)} endpoints)")
    for category, group in registry.tags.items():
        click.echo(f"\n[{category}]")
        for endpoint in group:
            for line in _format_endpoint(endpoint):
                click.echo(line)


@main.command()
@click.argument("method")
@click.argument("path")
@click.option("-p", "--param", "params", multiple=True, help="Parameter value as name=value (repeatable).")
@click.option("--body", default="", help="Raw JSON request body.")
@click.option("--base-url", default=None, help="Target API base URL (defaults to $API_BASE_URL).")
def call(method: str, path: str, params: tuple[str, ...], body: str, base_url: str | None):
    """Execute one endpoint, e.g. `call GET /api/balance/{address} -p address=abc`."""
    values = _parse_values(params)
    settings = load_settings(base_url)
    registry = _build_registry(settings)

    endpoint = registry.find(method, path)
    if endpoint is None:
        raise click.ClickException(f"Unknown endpoint: {method.upper()} {path}")

    form = EndpointForm(endpoint, Executor.from_settings(settings))
    for name, value in values.items():
        form.set_value(name, value)
    form.set_body(body)

    outcome = asyncio.run(form.run())
    click.echo(json.dumps(outcome.model_dump(), indent=2, ensure_ascii=False, default=str))
