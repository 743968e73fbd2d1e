"""CLI entry point (`icm-jobrunner`)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from icm_jobrunner.adapters.json_exporter import export_run_result_json
from icm_jobrunner.cli import doctor
from icm_jobrunner.cli.ui_components import build_result_panel, print_banner
from icm_jobrunner.core.config import JobRunnerSettings
from icm_jobrunner.core.domain.models import JobOutcome
from icm_jobrunner.core.logging_config import setup_logging
from icm_jobrunner.core.services.job_runner import JobRunner

EXIT_CODES: dict[JobOutcome, int] = {
    JobOutcome.DONE: 0,
    JobOutcome.CONFIGURATION_ERROR: 2,
    JobOutcome.COMMUNICATION_ERROR: 3,
    JobOutcome.TIMED_OUT: 4,
    JobOutcome.INTERRUPTED: 130,
}

app = typer.Typer(
    no_args_is_help=True,
    help="Trigger Intershop Commerce Management jobs and wait for them to finish.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_runner(settings: JobRunnerSettings, **overrides: Any) -> JobRunner:
    return JobRunner.from_settings(settings, **overrides)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING or ERROR (default from settings)."
    ),
    json_logs: Optional[bool] = typer.Option(
        None, "--json-logs/--console-logs", help="Render logs as JSON lines."
    ),
) -> None:
    settings = JobRunnerSettings()
    setup_logging(
        log_level=log_level or settings.log_level,
        json_logs=settings.json_logs if json_logs is None else json_logs,
    )
    ctx.obj = settings


@app.command(name="run")
def run_job(
    ctx: typer.Context,
    job_name: str = typer.Argument(..., help="Job name as shown in the SMC overview."),
    timeout: Optional[int] = typer.Option(
        None, "--timeout", min=1, help="Maximum wait for an end state (ms)."
    ),
    poll_interval: Optional[int] = typer.Option(
        None, "--poll-interval", min=1, help="Wait between status polls (ms)."
    ),
    insecure: bool = typer.Option(
        False, "--insecure", help="Accept any certificate and hostname (test servers only)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the run result as JSON to this path."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the banner."),
) -> None:
    """Trigger JOB_NAME and poll it until it is READY or DISABLED."""

    settings: JobRunnerSettings = ctx.obj or JobRunnerSettings()

    overrides: dict[str, Any] = {}
    if timeout is not None:
        overrides["timeout_ms"] = timeout
    if poll_interval is not None:
        overrides["poll_interval_ms"] = poll_interval

    runner = build_runner(settings, **overrides)
    if insecure:
        runner.enable_insecure_ssl()

    if not quiet:
        print_banner(_console)
        _console.print(
            f"Triggering [bold]{job_name}[/bold] on {settings.server().base_url} "
            f"({settings.domain}/{settings.server_group})"
        )

    result = runner.run_job(job_name)

    if output is not None:
        path = export_run_result_json(result=result, output_path=output)
        _console.print(f"[dim]Result written to {path}[/dim]")

    _console.print(build_result_panel(result))
    raise typer.Exit(code=EXIT_CODES[result.outcome])


def run() -> None:
    app()
