"""livetop - Main Textual application."""

import logging
import sys

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container, Vertical
from textual.logging import TextualHandler
from textual.widgets import DataTable, Static
from textual.worker import Worker, WorkerState

from livetop.config import (
    COLUMNS,
    LOG_LEVEL,
    PROCESSES_TITLE,
    REFRESH_INTERVAL,
    SYSTEM_INFO_TITLE,
)
from livetop.errors import DrawError, LivetopError, TerminalInitError
from livetop.input import InputGovernor, from_textual
from livetop.loop import Provider, RunLoop
from livetop.models import AppState, DashboardModel, DisplayRow
from livetop.monitor import MetricsProvider

logger = logging.getLogger(__name__)

RUN_LOOP_WORKER = "run-loop"


class SystemInfo(Static):
    """Top panel showing the CPU and memory summary lines."""

    DEFAULT_CSS = """
    SystemInfo {
        height: 20%;
        border: solid $primary;
        padding: 0 1;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize SystemInfo."""
        super().__init__(*args, **kwargs)
        self.summary = ""

    def on_mount(self) -> None:
        self.border_title = SYSTEM_INFO_TITLE

    def show(self, model: DashboardModel) -> None:
        """Replace the summary with the lines from a model."""
        self.summary = f"{model.cpu_line}\n{model.memory_line}"
        self.update(Text(self.summary, style="green"))


class ProcessTable(Container):
    """Bottom panel holding the process table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 80%;
        border: solid $primary;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table", show_cursor=False)

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        self.border_title = PROCESSES_TITLE
        table = self.query_one("#process-table", DataTable)
        for label, key, width in COLUMNS:
            table.add_column(label, key=key, width=width)

    def show(self, rows: tuple[DisplayRow, ...]) -> None:
        """
        Replace the table contents with the given rows.

        Cells are passed as Text so process names are never parsed as markup.
        """
        table = self.query_one("#process-table", DataTable)
        table.clear()
        table.add_rows([tuple(Text(cell) for cell in row.cells()) for row in rows])


class LivetopApp(App):
    """Main livetop application."""

    TITLE = "livetop"
    SUB_TITLE = "Live System Monitor"

    CSS = """
    #dashboard {
        margin: 1;
    }
    """

    def __init__(
        self,
        provider: Provider | None = None,
        interval: float = REFRESH_INTERVAL,
    ) -> None:
        """Initialize the LivetopApp."""
        super().__init__()
        self.app_state = AppState()
        self._metrics = provider if provider is not None else MetricsProvider()
        self._governor = InputGovernor(self.app_state)
        self.monitor_loop = RunLoop(
            self._metrics,
            self,
            self._governor,
            self.app_state,
            interval=interval,
        )

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Vertical(
            SystemInfo(id="system-info"),
            ProcessTable(id="processes"),
            id="dashboard",
        )

    def on_mount(self) -> None:
        """Start the run loop once the screen exists."""
        self.run_worker(
            self.monitor_loop.run(),
            name=RUN_LOOP_WORKER,
            exit_on_error=False,
        )

    async def on_event(self, event: events.Event) -> None:
        """Hand raw terminal input to the input governor."""
        # Forwarded events are copies bubbling back up from widgets
        if not event.is_forwarded:
            translated = from_textual(event)
            if translated is not None:
                self._governor.push(translated)
        await super().on_event(event)

    def draw(self, model: DashboardModel) -> None:
        """
        Draw one frame.

        Raises:
            DrawError: a widget could not be updated.
        """
        try:
            self.query_one(SystemInfo).show(model)
            self.query_one(ProcessTable).show(model.rows)
        except Exception as error:
            raise DrawError(f"failed to draw frame: {error}") from error

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Exit when the run loop finishes or fails."""
        if event.worker.name != RUN_LOOP_WORKER:
            return
        if event.state == WorkerState.SUCCESS:
            self.exit(return_code=0)
        elif event.state == WorkerState.ERROR:
            error = event.worker.error
            logger.error("Run loop failed: %s", error, exc_info=error)
            self.exit(return_code=1, message=f"livetop: {error}")

    async def action_quit(self) -> None:
        """Treat Textual's own quit binding as a quit signal."""
        self.app_state.request_quit()

    async def action_help_quit(self) -> None:
        """Ctrl+C is a quit key here, not a hint to press Ctrl+Q."""
        self.app_state.request_quit()


def configure_logging(level: int = LOG_LEVEL) -> None:
    """Send log records to the Textual devtools console, not the screen."""
    logging.basicConfig(level=level, handlers=[TextualHandler()])


def check_terminal() -> None:
    """
    Make sure there is a terminal to take over.

    Raises:
        TerminalInitError: stdin or stdout is not a TTY.
    """
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise TerminalInitError("livetop needs an interactive terminal")


def main() -> None:
    """Entry point for livetop application."""
    configure_logging()
    try:
        check_terminal()
        app = LivetopApp(MetricsProvider())
    except LivetopError as error:
        logger.debug("Startup failed: %s", error)
        sys.exit(f"livetop: {error}")

    app.run()
    sys.exit(app.return_code or 0)


if __name__ == "__main__":
    main()
