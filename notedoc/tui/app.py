"""Main notedoc TUI application."""

from rich.console import Console, Group, RenderableType
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table
from rich.text import Text

from notedoc.pipeline.state import UploadState
from notedoc.tui.commands import (
    handle_copy,
    handle_export,
    handle_generate,
    handle_help,
    handle_language,
    handle_open,
    handle_quit,
    handle_raw,
    handle_remove,
    handle_reset,
    handle_select,
    handle_style,
    handle_tone,
    parse_command,
)
from notedoc.tui.panels import (
    render_documentation,
    render_log,
    render_notebooks,
    render_options,
    render_status,
)
from notedoc.tui.state import AppState
from notedoc.tui.watcher import FileWatcher


class NotedocApp:
    """Main TUI application: redraw, read a command, execute, repeat."""

    def __init__(
        self, state: AppState, watcher: FileWatcher, console: Console | None = None
    ):
        self.state = state
        self.watcher = watcher
        self.console = console or Console()
        self._running = True

    def _render(self) -> RenderableType:
        """Compose all panels into one renderable."""
        header = Text(" notedoc - Notebook Documentation Generator ", style="bold white on blue")

        top = Table.grid(expand=True)
        top.add_column(ratio=2)
        top.add_column(ratio=2)
        top.add_column(ratio=3)
        top.add_row(
            render_notebooks(self.state),
            render_options(self.state),
            render_status(self.state),
        )

        return Group(
            header,
            top,
            render_documentation(self.state),
            render_log(self.state),
        )

    def _wait_for_attempt(self) -> None:
        """Show live progress until the background attempt finishes."""
        orchestrator = self.state.orchestrator
        with Progress(
            TextColumn("[yellow]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=self.console,
            transient=True,
        ) as progress:
            upload = orchestrator.state
            task = progress.add_task(
                upload.phase.value, total=100, completed=upload.progress_percent
            )

            def on_change(new: UploadState) -> None:
                progress.update(
                    task, completed=new.progress_percent, description=new.phase.value
                )

            orchestrator.on_change = on_change
            try:
                while not self.state.attempt_complete.wait(0.1):
                    pass
            finally:
                orchestrator.on_change = None

    def _execute_command(self, raw: str) -> bool:
        """Parse and execute a command. Returns False if app should quit."""
        cmd = parse_command(raw)
        if cmd is None:
            self.state.log_lines.append(f"Unknown command: {raw}  (try /help)")
            return True

        self.state.notice = None
        if cmd.name == "select":
            handle_select(self.state, cmd.args)
        elif cmd.name == "open":
            handle_open(self.state, cmd.args)
        elif cmd.name == "remove":
            handle_remove(self.state, cmd.args)
        elif cmd.name == "language":
            handle_language(self.state, cmd.args)
        elif cmd.name == "style":
            handle_style(self.state, cmd.args)
        elif cmd.name == "tone":
            handle_tone(self.state, cmd.args)
        elif cmd.name == "generate":
            if handle_generate(self.state):
                self._wait_for_attempt()
        elif cmd.name == "export":
            handle_export(self.state)
        elif cmd.name == "copy":
            handle_copy(self.state)
        elif cmd.name == "reset":
            handle_reset(self.state)
        elif cmd.name == "raw":
            handle_raw(self.state)
        elif cmd.name == "help":
            handle_help(self.state)
        elif cmd.name == "quit":
            running_ref = [True]
            handle_quit(self.state, running_ref)
            self._running = False
            return False

        return True

    def run(self):
        """Start the TUI application."""
        self.state.log_lines.append("notedoc ready - type /help for commands")
        try:
            while self._running:
                self.console.clear()
                self.console.print(self._render())
                try:
                    line = self.console.input("[bold cyan]> [/]")
                except EOFError:
                    break

                if line.strip():
                    if not self._execute_command(line.strip()):
                        break
        except KeyboardInterrupt:
            pass
        self.console.print("[bold green]Goodbye![/]")
