"""stageview Command Line Interface.

Entry point for the stageview CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer
from pydantic import ValidationError

from stageview import __version__
from stageview.contracts import SnapshotValidationError, UnrecognizedStatusError
from stageview.core.config import StageViewSettings, load_settings
from stageview.core.logging import configure_logging, get_logger

if TYPE_CHECKING:
    from stageview.core.graph import SnapshotRun

__all__ = ["app"]

logger = get_logger(__name__)

app = typer.Typer(
    name="stageview",
    help="stageview: stage-level summaries of pipeline runs.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"stageview version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


def _fail(message: str, *, json_output: bool) -> NoReturn:
    if json_output:
        typer.echo(json.dumps({"error": message}))
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """stageview: stage-level summaries of pipeline runs."""
    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")
    ctx.obj = {"verbose": verbose, "json_logs": json_logs}

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


@app.command()
def summarize(
    ctx: typer.Context,
    snapshot: Path = typer.Argument(..., help="Path to run snapshot JSON file."),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    now: int | None = typer.Option(
        None,
        "--now",
        help="Observation time in epoch milliseconds (default: current time).",
        min=0,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
) -> None:
    """Summarize a run snapshot into stages, status, and durations.

    Examples:

        stageview summarize ./run-42.json

        stageview summarize ./run-42.json --json --now 1700000000000
    """
    from stageview.core.clock import DEFAULT_CLOCK, Clock, FixedClock
    from stageview.core.formatters import SummaryTextFormatter, summary_to_dict
    from stageview.core.summary import RunSummarizer

    resolved = _resolve_settings(ctx, settings, json_output=json_output)
    run = _load_snapshot(snapshot.expanduser(), json_output=json_output)

    clock: Clock = FixedClock(now) if now is not None else DEFAULT_CLOCK
    try:
        summary = RunSummarizer(resolved, clock=clock).summarize(run)
    except UnrecognizedStatusError as e:
        _fail(str(e), json_output=json_output)

    if json_output:
        typer.echo(json.dumps(summary_to_dict(summary), indent=2))
    else:
        typer.echo(SummaryTextFormatter().format(summary))


@app.command()
def validate(
    snapshot: Path = typer.Argument(..., help="Path to run snapshot JSON file."),
) -> None:
    """Validate a run snapshot without summarizing it."""
    run = _load_snapshot(snapshot.expanduser(), json_output=False)
    node_count = run.execution.snapshot.node_count if run.execution is not None else 0
    typer.secho(f"Snapshot valid: run {run.run_id}, {node_count} node(s)", fg=typer.colors.GREEN)


def _resolve_settings(ctx: typer.Context, path: Path | None, *, json_output: bool) -> StageViewSettings:
    if path is None:
        return StageViewSettings()
    try:
        resolved = load_settings(path.expanduser())
    except FileNotFoundError as e:
        _fail(str(e), json_output=json_output)
    except ValidationError as e:
        _fail(f"Invalid settings: {e}", json_output=json_output)

    flags = ctx.obj or {}
    configure_logging(
        json_output=flags.get("json_logs", False) or resolved.json_logs,
        level="DEBUG" if flags.get("verbose", False) else resolved.log_level,
    )
    return resolved


def _load_snapshot(path: Path, *, json_output: bool) -> SnapshotRun:
    from stageview.core.snapshot import load_run

    try:
        return load_run(path)
    except FileNotFoundError as e:
        _fail(str(e), json_output=json_output)
    except json.JSONDecodeError as e:
        _fail(f"Snapshot is not valid JSON: {e}", json_output=json_output)
    except ValidationError as e:
        _fail(f"Invalid snapshot: {e}", json_output=json_output)
    except SnapshotValidationError as e:
        logger.warning("snapshot_rejected", path=str(path), error=str(e))
        _fail(f"Invalid execution graph: {e}", json_output=json_output)


if __name__ == "__main__":
    app()
