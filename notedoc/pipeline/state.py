"""Upload lifecycle state and its pure transitions.

UploadState is the single record the UI renders from. Transitions are plain
functions returning a new state:

  idle -> reading -> submitting -> ready
                \\-----------\\----> error

Within one attempt the phase only moves forward and progress never decreases.
begin_attempt is the only transition that lowers progress (back to 0).
"""

from dataclasses import dataclass, replace
from enum import Enum


class Phase(str, Enum):
    IDLE = "idle"
    READING = "reading"
    SUBMITTING = "submitting"
    READY = "ready"
    ERROR = "error"


PHASE_ORDER: dict[Phase, int] = {
    Phase.IDLE: 0,
    Phase.READING: 1,
    Phase.SUBMITTING: 2,
    Phase.READY: 3,
    Phase.ERROR: 3,
}

BUSY_PHASES = frozenset([Phase.READING, Phase.SUBMITTING])

# Progress checkpoints
PROGRESS_START = 0
PROGRESS_READ = 30
PROGRESS_RESPONSE = 70
PROGRESS_DONE = 100


class TransitionError(Exception):
    """Raised when a transition would move the phase backward."""


@dataclass(frozen=True)
class UploadState:
    phase: Phase = Phase.IDLE
    progress_percent: int = 0
    error_message: str | None = None

    @property
    def busy(self) -> bool:
        return self.phase in BUSY_PHASES


def begin_attempt(state: UploadState) -> UploadState:
    """Start a new attempt: reading, progress 0, error cleared."""
    if state.busy:
        raise TransitionError(f"Attempt already in progress ({state.phase.value})")
    return UploadState(phase=Phase.READING, progress_percent=PROGRESS_START)


def advance(state: UploadState, phase: Phase, progress: int) -> UploadState:
    """Move forward to phase, raising progress to at least the given value."""
    if PHASE_ORDER[phase] < PHASE_ORDER[state.phase]:
        raise TransitionError(f"Cannot go from {state.phase.value} to {phase.value}")
    progress = min(max(progress, state.progress_percent), PROGRESS_DONE)
    return replace(state, phase=phase, progress_percent=progress)


def mark_ready(state: UploadState) -> UploadState:
    return advance(state, Phase.READY, PROGRESS_DONE)


def mark_failed(state: UploadState, message: str) -> UploadState:
    """Enter error with a user-facing message; progress is kept as reached."""
    return replace(advance(state, Phase.ERROR, state.progress_percent), error_message=message)


def reset() -> UploadState:
    return UploadState()
