"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="graph-media Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.access_token:
        table.add_row("Access token", "OK", "Sent as bearer header")
    else:
        table.add_row("Access token", "MISSING", "Run `graph-media doctor setup-token`")
    table.add_row("Graph base_url", "OK", settings.base_url_for())
    table.add_row("Video base_url", "OK", settings.base_url_for("video"))

    ok_http, detail_http = asyncio.run(_check_http(settings.base_url_for() + "/me", settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] every command will fail with `Service unavailable` until the API is reachable."
        )


@app.command(name="setup-token")
def setup_token() -> None:
    """Store an access token (and optional API version) in the user config .env."""

    token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()
    version = typer.prompt("API version (empty for unversioned)", default="", show_default=False).strip()

    if not token:
        raise typer.BadParameter("access token is required")

    values = {"GRAPH_MEDIA_ACCESS_TOKEN": token}
    if version:
        values["GRAPH_MEDIA_API_VERSION"] = version
    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved config to:[/green] {env_path}")
