"""Run a generation attempt off the UI thread."""

import asyncio
import logging
import threading

from notedoc.pipeline.state import Phase, UploadState
from notedoc.tui.state import AppState

logger = logging.getLogger(__name__)


def describe_outcome(state: UploadState) -> str:
    """One log line summarising how an attempt ended."""
    if state.phase is Phase.READY:
        return "Documentation ready. /export saves the PDF, /copy copies the text."
    if state.phase is Phase.ERROR:
        return f"Error: {state.error_message}"
    return f"Attempt ended in {state.phase.value}"


def run_attempt(app_state: AppState) -> UploadState:
    """Run an already-started attempt to completion on a fresh event loop."""
    orchestrator = app_state.orchestrator
    try:
        final = asyncio.run(orchestrator.run())
        app_state.log_lines.append(describe_outcome(final))
        logger.info("attempt_complete", extra={"phase": final.phase.value})
        return final
    finally:
        app_state.attempt_complete.set()


def run_attempt_in_background(app_state: AppState) -> threading.Thread:
    """Run the started attempt in a daemon thread.

    The caller must have claimed the attempt with Orchestrator.start() so the
    busy guard is applied on the UI thread before the thread exists.
    """
    app_state.attempt_complete.clear()
    thread = threading.Thread(target=run_attempt, args=(app_state,), daemon=True)
    thread.start()
    return thread
