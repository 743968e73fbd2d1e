"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console

from icm_jobrunner.adapters.http_client import build_client
from icm_jobrunner.cli.ui_components import build_settings_table
from icm_jobrunner.core.config import ENV_PREFIX, JobRunnerSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(
    settings: JobRunnerSettings, transport: httpx.BaseTransport | None = None
) -> tuple[bool, str]:
    url = settings.server().base_url
    try:
        with build_client(
            timeout_seconds=settings.http_timeout_seconds,
            insecure_ssl=settings.insecure_ssl,
            transport=transport,
        ) as client:
            response = client.get(url)
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__
    return True, f"HTTP {response.status_code}"


@app.command()
def check() -> None:
    """Show the effective configuration and check the server."""

    settings = JobRunnerSettings()
    _console.print(build_settings_table(settings))

    if not settings.user().is_configured:
        _console.print(
            f"[yellow]Note:[/yellow] credentials missing, set {ENV_PREFIX}USERNAME and "
            f"{ENV_PREFIX}PASSWORD or run `icm-jobrunner doctor setup-server`."
        )

    ok_http, detail_http = _check_http(settings)
    status = "[green]OK[/green]" if ok_http else "[red]FAIL[/red]"
    _console.print(f"Connectivity {settings.server().base_url}: {status} ({detail_http})")
    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup-server")
def setup_server() -> None:
    """Interactive server setup (stores config in the user config .env)."""

    current = JobRunnerSettings()

    protocol = typer.prompt("Protocol (http/https)", default=current.protocol.value).strip().lower()
    if protocol not in ("http", "https"):
        raise typer.BadParameter("protocol must be http or https")
    host = typer.prompt("Host", default=current.host).strip()
    port = typer.prompt("Port", default=current.port, type=int)
    domain = typer.prompt("Domain", default=current.domain).strip()
    server_group = typer.prompt("Server group", default=current.server_group).strip()
    username = typer.prompt("SMC user", default=current.username or "admin").strip()
    password = typer.prompt("SMC password", hide_input=True, confirmation_prompt=False)

    if not host or not domain or not server_group:
        raise typer.BadParameter("host, domain and server group are required")

    env_path = write_user_env_vars(
        {
            f"{ENV_PREFIX}PROTOCOL": protocol,
            f"{ENV_PREFIX}HOST": host,
            f"{ENV_PREFIX}PORT": str(port),
            f"{ENV_PREFIX}DOMAIN": domain,
            f"{ENV_PREFIX}SERVER_GROUP": server_group,
            f"{ENV_PREFIX}USERNAME": username,
            f"{ENV_PREFIX}PASSWORD": password,
        }
    )

    _console.print(f"[green]Saved server config to:[/green] {env_path}")
