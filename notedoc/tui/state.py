"""Terminal session state."""

import threading
from dataclasses import dataclass, field

from notedoc.pipeline.orchestrator import Orchestrator


@dataclass
class AppState:
    """UI-side session data. Upload lifecycle state lives in the orchestrator."""

    orchestrator: Orchestrator
    detected_files: list[str] = field(default_factory=list)
    log_lines: list[str] = field(default_factory=list)
    render_mode: str = "markdown"
    # Transient message shown once above the log (export/copy outcomes).
    notice: str | None = None
    # Set by the background attempt thread when it finishes.
    attempt_complete: threading.Event = field(default_factory=threading.Event)
