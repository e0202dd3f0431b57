"""Status panel CLI - terminal demo screens with a live progress gauge."""

import logging
from typing import Callable, TypeVar

import typer
from rich.console import Console, RenderableType
from rich.markup import escape

from status_panel.app import gauge_colors, run_gauge, run_progress, run_titles
from status_panel.config import Settings
from status_panel.exceptions import StatusPanelError
from status_panel.keyboard import KeyboardSource
from status_panel.layout import render
from status_panel.state import AppState
from status_panel.terminal import Terminal

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = typer.Typer(
    name="status-panel",
    help="Terminal status panel demos",
    invoke_without_command=True,
)


def configure_logging(settings: Settings) -> None:
    """
    Route log records to the configured file.

    The UI owns the screen while running, so without a log file
    records are discarded.
    """
    handler: logging.Handler
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    else:
        handler = logging.NullHandler()
    root = logging.getLogger("status_panel")
    root.handlers[:] = [handler]
    root.setLevel(settings.log_level)


def _run_screen(
    console: Console,
    initial: RenderableType,
    screen: Callable[[Terminal, KeyboardSource], T],
) -> T:
    """Run screen inside cbreak mode and the alternate screen, reporting failures."""
    try:
        with (
            KeyboardSource() as source,
            Terminal(console, initial=initial) as terminal,
        ):
            return screen(terminal, source)
    except StatusPanelError as e:
        logger.error("%s", e)
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(1)


def _load_settings(console: Console) -> Settings:
    try:
        settings = Settings()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(settings)
    return settings


@app.callback()
def default(ctx: typer.Context) -> None:
    """Run the progress screen when no command is given."""
    if ctx.invoked_subcommand is None:
        progress()


@app.command("progress")
def progress() -> None:
    """Show the process overview with a gauge advancing every tick.

    Keys: q quits, c toggles the gauge color.
    """
    console = Console()
    settings = _load_settings(console)
    initial = render(AppState().snapshot(), colors=gauge_colors(settings))
    _run_screen(
        console,
        initial,
        lambda terminal, source: run_progress(terminal, source, settings),
    )


@app.command("gauge")
def gauge(
    value: float = typer.Option(
        0.5, "--progress", "-p", min=0.0, max=1.0, help="Gauge fill ratio"
    ),
) -> None:
    """Show the process overview with a fixed gauge.

    Keys: q quits, c toggles the gauge color.
    """
    console = Console()
    settings = _load_settings(console)
    initial = render(
        AppState(progress=value).snapshot(), colors=gauge_colors(settings)
    )
    _run_screen(
        console,
        initial,
        lambda terminal, source: run_gauge(terminal, source, value, settings),
    )


@app.command("titles")
def titles() -> None:
    """Show a panel with left, middle and right titles. Any key exits."""
    console = Console()
    settings = _load_settings(console)
    _run_screen(
        console,
        "",
        lambda terminal, source: run_titles(
            terminal, source, settings.key_poll_interval
        ),
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
