"""Entrypoint for the command line interface."""

import asyncio
import base64
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from iconfinder.bridge.client import BridgeClient
from iconfinder.bridge.handler import IconBridge
from iconfinder.bridge.ports import HttpPort, InProcessPort
from iconfinder.configs import settings
from iconfinder.configs.app_configs.config_logging import configure_logging
from iconfinder.icons.models import SiteInfo
from iconfinder.icons.prober import SourceProber
from iconfinder.icons.resolver import FallbackChainResolver
from iconfinder.icons.utils import domain_from_url
from iconfinder.utils.http_client import create_http_client

logger = logging.getLogger(__name__)

cli = typer.Typer(no_args_is_help=True, add_completion=False)

fallback_only_option = typer.Option(
    False,
    "--fallback-only",
    help="Skip the page's own markup and start at the well-known paths",
)

remote_option = typer.Option(
    False,
    "--remote",
    help="Send requests to the bridge endpoint of a running service (settings.bridge.endpoint)",
)

output_option = typer.Option(
    None,
    "--output",
    "-o",
    help="Write the decoded icon to this file instead of printing its data URI",
)


def split_target(target: str) -> tuple[str, str]:
    """Return (domain, page URL) for a URL or a bare domain."""
    if "://" in target:
        return domain_from_url(target), target
    domain = domain_from_url(target)
    return domain, f"https://{domain}/"


def decode_data_uri(data_uri: str) -> bytes:
    """Return the bytes of a base64 `data:` URI."""
    _, _, data = data_uri.partition(",")
    return base64.b64decode(data)


async def _run_with_client(action, remote: bool = False):
    if remote:
        session = create_http_client(request_timeout=settings.bridge.request_timeout_sec)
        try:
            return await action(BridgeClient(HttpPort(session, settings.bridge.endpoint)))
        finally:
            await session.aclose()

    prober = SourceProber()
    try:
        bridge = IconBridge(prober=prober, resolver=FallbackChainResolver(prober))
        client = BridgeClient(InProcessPort(bridge))
        return await action(client)
    finally:
        await prober.close()


@cli.callback()
def setup():
    """CLI Entrypoint"""
    configure_logging()


@cli.command()
def page(url: str, remote: bool = remote_option):
    """Print the title and ranked icon candidates of a page as JSON."""

    async def action(client: BridgeClient) -> SiteInfo:
        return await client.fetch_page(url)

    site_info: SiteInfo = asyncio.run(_run_with_client(action, remote))
    typer.echo(json.dumps(site_info.model_dump(mode="json"), indent=2))


@cli.command()
def resolve(
    target: str,
    fallback_only: bool = fallback_only_option,
    remote: bool = remote_option,
    output: Optional[Path] = output_option,
):
    """Resolve the best icon for a URL or domain."""
    domain, page_url = split_target(target)

    async def action(client: BridgeClient) -> Optional[str]:
        if fallback_only:
            return await client.resolve_icon_fallback(domain, page_url)
        site_info = await client.fetch_page(page_url)
        return await client.resolve_icon(domain, page_url, site_info.candidates)

    icon: Optional[str] = asyncio.run(_run_with_client(action, remote))
    if icon is None:
        typer.echo(f"No icon found for {target}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(icon)
    else:
        output.write_bytes(decode_data_uri(icon))
        typer.echo(f"Wrote icon for {domain} to {output}")


if __name__ == "__main__":
    cli()
