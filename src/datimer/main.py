"""Main entry point for Datimer."""

from pathlib import Path
from typing import Optional

import typer

from datimer import __version__
from datimer.models.exceptions import DatimerError, TerminalInitError
from datimer.models.session import StopwatchSession
from datimer.models.ui import TerminalDisplay
from datimer.services.config_service import get_config_service
from datimer.utils.exit_codes import ERROR_GENERAL, get_exit_code_name
from datimer.utils.logger import get_logger, log_file_path
from datimer.utils.ui.console import get_console, get_error_console

app = typer.Typer(
    name="datimer",
    help="Terminal stopwatch with a pause/resume log",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        get_console().print(f"[bold]Datimer[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


def _report_error(message: object) -> None:
    err_console = get_error_console()
    err_console.print(f"[red]Error: {message}[/red]")
    err_console.print(f"[dim]Details: {log_file_path()}[/dim]", soft_wrap=True)


def open_history_file(path: Path):
    """Create (or truncate) the history log for this session."""
    try:
        return open(path, "w", encoding="utf-8")
    except OSError as e:
        raise TerminalInitError(f"Could not create history file {path}: {e}") from e


@app.command()
def run(
    output: Optional[Path] = typer.Argument(
        None, help="History log file (defaults to the configured hidden file)"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Start the stopwatch. 'p' or space pauses/resumes, 'q' quits."""
    logger = get_logger()
    try:
        config = get_config_service().config
    except RuntimeError as e:
        logger.error("%s", e)
        _report_error(e)
        raise typer.Exit(ERROR_GENERAL) from e

    path = output or Path(config.default_output)
    logger.info("history log: %s", path)

    try:
        with open_history_file(path) as sink:
            display = TerminalDisplay(
                get_console(), time_column=config.time_column
            )
            session = StopwatchSession(
                sink,
                display=display,
                persist_interval=config.persist_interval_seconds,
            )
            code = session.run()
    except DatimerError as e:
        logger.error("%s: %s", get_exit_code_name(e.exit_code), e)
        _report_error(e)
        raise typer.Exit(e.exit_code) from e

    raise typer.Exit(code)


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
