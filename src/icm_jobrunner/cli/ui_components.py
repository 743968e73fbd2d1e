"""Componentes de UI para CLI (Rich).

- Evita mezclar lógica de comandos con detalles visuales.
- Tablas/paneles reutilizables entre `run` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from icm_jobrunner.core.config import JobRunnerSettings
from icm_jobrunner.core.domain.models import JobOutcome, JobRunResult

_OUTCOME_STYLES: dict[JobOutcome, str] = {
    JobOutcome.DONE: "green",
    JobOutcome.CONFIGURATION_ERROR: "yellow",
    JobOutcome.COMMUNICATION_ERROR: "red",
    JobOutcome.TIMED_OUT: "red",
    JobOutcome.INTERRUPTED: "magenta",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite con `--quiet`)."""

    title = Text("ICM JobRunner", style="bold cyan")
    subtitle = Text("Trigger • Poll • Report", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_settings_table(settings: JobRunnerSettings) -> Table:
    """Tabla con la configuración efectiva (password enmascarado)."""

    table = Table(title="Effective configuration")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    password_set = bool(settings.password.get_secret_value())
    table.add_row("Server", settings.server().base_url)
    table.add_row("Domain", settings.domain)
    table.add_row("Server group", settings.server_group)
    table.add_row("User", settings.username or "[red]<not set>[/red]")
    table.add_row("Password", "********" if password_set else "[red]<not set>[/red]")
    table.add_row("Timeout", f"{settings.timeout_ms}ms")
    table.add_row("Poll interval", f"{settings.poll_interval_ms}ms")
    table.add_row("End states", ", ".join(sorted(settings.end_states)))
    table.add_row("Insecure SSL", "[yellow]yes[/yellow]" if settings.insecure_ssl else "no")
    return table


def build_result_panel(result: JobRunResult) -> Panel:
    """Panel para presentar el `JobRunResult` de un `run`."""

    style = _OUTCOME_STYLES[result.outcome]
    title = Text(f"Job {result.job_name}", style=f"bold {style}")
    body = Text()
    body.append("Outcome: ", style="bold")
    body.append(result.outcome.value + "\n", style=style)

    info = result.job_info
    if info is not None:
        body.append(f"Status: {info.status}\n")
        if info.process is not None:
            body.append(f"Process: {info.process.status} after {info.process.duration}ms\n")
    if result.message:
        body.append(result.message, style="dim")

    return Panel(body, title=title, border_style=style)
