"""Panel rendering functions for the notedoc TUI."""

from pathlib import Path

from rich.console import RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from notedoc.ingest.files import is_accepted
from notedoc.pipeline.state import Phase
from notedoc.render.renderer import render_for_display
from notedoc.tui.state import AppState

PHASE_STYLES: dict[Phase, str] = {
    Phase.IDLE: "dim",
    Phase.READING: "yellow",
    Phase.SUBMITTING: "yellow",
    Phase.READY: "green",
    Phase.ERROR: "red",
}


def render_notebooks(state: AppState) -> Panel:
    """Detected files with numeric IDs; selected ones are checked."""
    orchestrator = state.orchestrator
    selected = {str(f.path) for f in orchestrator.selection}
    extension = orchestrator.selection.extension

    if not state.detected_files:
        content = Text("(none)", style="dim")
    else:
        content = Text()
        for idx, filepath in enumerate(state.detected_files, start=1):
            if idx > 1:
                content.append("\n")
            name = Path(filepath).name
            style = None if is_accepted(name, extension) else "dim"
            content.append(f"[{idx}] {name}", style=style)
            if filepath in selected:
                content.append(" ✓", style="green")

    return Panel(content, title="Notebooks", border_style="blue")


def render_options(state: AppState) -> Panel:
    """Style options and the selection order for the next submission."""
    orchestrator = state.orchestrator
    options = orchestrator.options
    lines = [
        f"Language: {options.language.value}",
        f"Style:    {options.doc_style.value}",
        f"Tone:     {options.tone.value}",
    ]
    if len(orchestrator.selection):
        lines.append("Selected:")
        for i, name in enumerate(orchestrator.selection.names, start=1):
            lines.append(f"  {i}. {name}")
    else:
        lines.append("Selected: (none)")

    return Panel(Text("\n".join(lines)), title="Options", border_style="green")


def render_status(state: AppState) -> Panel:
    """Phase, progress bar and error message of the current attempt."""
    upload = state.orchestrator.state
    header = Text(upload.phase.value.upper(), style=PHASE_STYLES[upload.phase])
    header.append(f"  {upload.progress_percent}%", style="bold")
    # One grid row per part: a ProgressBar does not end its own line.
    parts: list[RenderableType] = [
        header,
        ProgressBar(total=100, completed=upload.progress_percent),
    ]
    if upload.busy:
        parts.append(Text("Generating documentation... Please wait.", style="yellow"))
    if upload.error_message:
        parts.append(Text(upload.error_message, style="red"))
    if state.notice:
        parts.append(Text(state.notice, style="yellow"))
    export = "available (/export)" if state.orchestrator.export_enabled else "disabled"
    parts.append(Text(f"Export: {export}", style="dim"))

    grid = Table.grid(expand=True)
    grid.add_column()
    for part in parts:
        grid.add_row(part)

    return Panel(grid, title="Status", border_style="magenta")


def render_documentation(state: AppState) -> Panel:
    """The generated documentation in the current display mode."""
    response = state.orchestrator.response
    if response is None:
        content: RenderableType = Text("(none)", style="dim")
    else:
        content = render_for_display(response.documentation_text, state.render_mode)

    return Panel(content, title="Documentation", border_style="cyan")


def render_log(state: AppState, max_lines: int = 10) -> Panel:
    """Render the Log panel with last N log lines."""
    log_lines = state.log_lines[-max_lines:]

    if not log_lines:
        content = Text("(none)", style="dim")
    else:
        content = Text("\n".join(log_lines))

    return Panel(content, title="Log", border_style="yellow")
