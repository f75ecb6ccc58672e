"""Command parsing and handlers for the notedoc TUI."""

import asyncio
import logging
import shlex
from dataclasses import dataclass
from enum import Enum

from notedoc.pipeline.runner import run_attempt_in_background
from notedoc.render.clipboard import copy_raw_text
from notedoc.style.params import DocStyle, Language, Tone, parse_choice
from notedoc.tui.state import AppState
from notedoc.utils.exceptions import (
    ClipboardUnavailable,
    EmptySelection,
    InvalidFileType,
    SelectionLocked,
)

logger = logging.getLogger(__name__)

COMMAND_DESCRIPTIONS: dict[str, str] = {
    "select":   "Select notebooks by ID (or 'all')",
    "open":     "Select notebook files by path",
    "remove":   "Remove a selected notebook by position",
    "language": "Set documentation language",
    "style":    "Set style: concise | explanatory",
    "tone":     "Set tone: professional | creative | casual",
    "generate": "Generate documentation",
    "export":   "Save the PDF export",
    "copy":     "Copy raw documentation text",
    "reset":    "Clear the last result or error and return to idle",
    "raw":      "Toggle plain (marker-stripped) display",
    "help":     "Show all commands",
    "quit":     "Exit notedoc",
}


@dataclass
class Command:
    """Represents a parsed command."""

    name: str
    args: list[str]


def parse_command(raw: str) -> Command | None:
    """Parse a raw command string into a Command object.

    Handles:
    - Quoted arguments: /open "my notebook.ipynb" -> args: ["my notebook.ipynb"]
    - Unquoted arguments: /select 1 3 -> args: ["1", "3"]

    Returns None for unknown commands or parse errors.
    """
    raw = raw.strip()
    if not raw or not raw.startswith("/"):
        return None

    try:
        parts = shlex.split(raw)
    except ValueError:
        return None

    if not parts:
        return None

    name = parts[0].lstrip("/")
    args = parts[1:] if len(parts) > 1 else []

    if name not in COMMAND_DESCRIPTIONS:
        return None

    return Command(name=name, args=args)


def _apply_selection(state: AppState, paths: list[str]) -> None:
    try:
        selected = state.orchestrator.select_files(paths)
    except InvalidFileType as e:
        state.log_lines.append(
            f"Invalid file type: only {e.extension} files can be selected"
        )
        return
    except SelectionLocked as e:
        state.log_lines.append(e.message)
        return
    state.log_lines.append("Selected: " + ", ".join(f.name for f in selected))
    skipped = len(paths) - len(selected)
    if skipped:
        state.log_lines.append(f"Skipped {skipped} file(s) without the notebook extension")


def handle_select(state: AppState, args: list[str]) -> None:
    """Replace the selection with detected files by 1-based ID."""
    if not args:
        state.log_lines.append("Usage: /select <id> [id...] | all")
        return
    if args == ["all"]:
        if not state.detected_files:
            state.log_lines.append("No files detected in the input folder")
            return
        _apply_selection(state, list(state.detected_files))
        return

    paths: list[str] = []
    for arg in args:
        try:
            idx = int(arg) - 1
        except ValueError:
            state.log_lines.append(f"Invalid ID: {arg}")
            return
        if idx < 0 or idx >= len(state.detected_files):
            state.log_lines.append(f"Invalid ID: {arg}")
            return
        paths.append(state.detected_files[idx])
    _apply_selection(state, paths)


def handle_open(state: AppState, args: list[str]) -> None:
    """Replace the selection with explicit file paths."""
    if not args:
        state.log_lines.append("Usage: /open <path> [path...]")
        return
    _apply_selection(state, args)


def handle_remove(state: AppState, args: list[str]) -> None:
    """Remove a selected notebook by 1-based position."""
    if not args:
        state.log_lines.append("Usage: /remove <position>")
        return
    try:
        removed = state.orchestrator.remove_file(int(args[0]) - 1)
    except SelectionLocked as e:
        state.log_lines.append(e.message)
        return
    except (ValueError, IndexError):
        state.log_lines.append(f"Invalid position: {args[0]}")
        return
    state.log_lines.append(f"Removed: {removed.name}")


def _set_option(state: AppState, args: list[str], attr: str, enum_cls: type[Enum]) -> None:
    if not args:
        choices = " | ".join(str(m.value) for m in enum_cls)
        state.log_lines.append(f"Usage: /{attr.replace('doc_', '')} <{choices}>")
        return
    try:
        value = parse_choice(enum_cls, " ".join(args))
    except ValueError as e:
        state.log_lines.append(str(e))
        return
    setattr(state.orchestrator.options, attr, value)
    state.log_lines.append(f"{enum_cls.__name__} set to: {value.value}")
    logger.info("option_set", extra={"option": attr, "value": value.value})


def handle_language(state: AppState, args: list[str]) -> None:
    _set_option(state, args, "language", Language)


def handle_style(state: AppState, args: list[str]) -> None:
    _set_option(state, args, "doc_style", DocStyle)


def handle_tone(state: AppState, args: list[str]) -> None:
    _set_option(state, args, "tone", Tone)


def handle_generate(state: AppState) -> bool:
    """Claim an attempt and run it in the background.

    Returns:
        True if an attempt was started.
    """
    orchestrator = state.orchestrator
    try:
        started = orchestrator.start()
    except EmptySelection as e:
        state.log_lines.append(e.message)
        return False
    if not started:
        state.log_lines.append("Generation already in progress")
        return False

    state.log_lines.append("Generating documentation... Please wait.")
    logger.info(
        "document_generation_started",
        extra={"notebooks": len(orchestrator.selection)},
    )
    run_attempt_in_background(state)
    return True


def handle_export(state: AppState) -> None:
    """Download and save the export artifact."""
    orchestrator = state.orchestrator
    if not orchestrator.export_enabled:
        state.log_lines.append("Nothing to export yet: generate documentation first")
        return
    path = asyncio.run(orchestrator.export())
    if path is None:
        state.notice = f"Export failed: {orchestrator.export_notice} (try /export again)"
        state.log_lines.append(state.notice)
        return
    state.log_lines.append(f"Saved: {path}")


def handle_copy(state: AppState) -> None:
    """Copy the documentation exactly as received."""
    response = state.orchestrator.response
    if response is None:
        state.log_lines.append("No documentation to copy")
        return
    try:
        chars = copy_raw_text(response.documentation_text)
    except ClipboardUnavailable as e:
        state.notice = e.message
        state.log_lines.append(e.message)
        return
    state.log_lines.append(f"Copied {chars} characters to clipboard")


def handle_reset(state: AppState) -> None:
    """Drop the shown documentation or error and go back to idle."""
    if not state.orchestrator.reset():
        state.log_lines.append("Generation in progress: nothing to reset")
        return
    state.log_lines.append("Reset: ready for a new selection")


def handle_raw(state: AppState) -> None:
    """Switch between markdown rendering and the plain legacy display."""
    state.render_mode = "plain" if state.render_mode == "markdown" else "markdown"
    state.log_lines.append(f"Display mode: {state.render_mode}")


def handle_help(state: AppState) -> None:
    """Display help text."""
    state.log_lines.append("─── Commands ───────────────────────────────")
    for cmd, desc in COMMAND_DESCRIPTIONS.items():
        state.log_lines.append(f"  /{cmd:<10} {desc}")
    state.log_lines.append("────────────────────────────────────────────")


def handle_quit(state: AppState, running_ref: list[bool]) -> None:
    """Quit the application."""
    running_ref[0] = False
    state.log_lines.append("Goodbye!")
    logger.info("quit")
