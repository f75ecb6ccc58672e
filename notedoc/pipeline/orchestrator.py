"""Request orchestrator: owns the upload state machine for one session."""

import logging
import uuid
from pathlib import Path
from typing import Any, Callable, Iterable

from notedoc.client.models import GenerationRequest, GenerationResponse
from notedoc.client.service import GenerationClient
from notedoc.config import ClientConfig
from notedoc.export.exporter import DEFAULT_FILENAME, export_artifact
from notedoc.ingest.files import (
    FileContent,
    FileSelection,
    Reader,
    SelectedFile,
    read_all,
    read_bytes,
)
from notedoc.pipeline.state import (
    PROGRESS_READ,
    PROGRESS_RESPONSE,
    Phase,
    UploadState,
    advance,
    begin_attempt,
    mark_failed,
    mark_ready,
    reset as reset_state,
)
from notedoc.style.params import StyleOptions, map_style
from notedoc.utils.exceptions import (
    GENERIC_FAILURE_MESSAGE,
    EmptySelection,
    ExportFailed,
    NotedocError,
    SelectionLocked,
)
from notedoc.utils.logger import AttemptLogger

logger = logging.getLogger(__name__)


def build_request(
    contents: list[FileContent], options: StyleOptions
) -> GenerationRequest:
    """Build the immutable request from read notebooks and current options."""
    return GenerationRequest.build(contents, options, map_style(options))


class Orchestrator:
    """Single owner of UploadState, the file selection and the last response.

    One attempt runs at a time: start() rejects a new attempt while reading or
    submitting, so a second Generate never overwrites in-flight progress. The
    selection is locked for the same window, so the files cleared at the end of
    an attempt are always the ones it submitted.
    Failures are converted to the error phase here and never re-raised.
    """

    def __init__(
        self,
        client: GenerationClient,
        config: ClientConfig | None = None,
        options: StyleOptions | None = None,
        reader: Reader = read_bytes,
        attempt_logger: AttemptLogger | None = None,
        on_change: Callable[[UploadState], None] | None = None,
    ) -> None:
        self.client = client
        self.config = config or ClientConfig()
        self.options = options or StyleOptions()
        self.selection = FileSelection(extension=self.config.accepted_extension)
        self.response: GenerationResponse | None = None
        self.export_notice: str | None = None
        self.last_request: GenerationRequest | None = None
        # Called with every new UploadState, from whichever thread runs the attempt.
        self.on_change = on_change
        self._reader = reader
        self._attempt_logger = attempt_logger
        self._state = UploadState()

    # ------------------------------------------------------------------ #
    #  State
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> UploadState:
        return self._state

    @property
    def export_enabled(self) -> bool:
        return self._state.phase is Phase.READY

    def _set_state(self, new: UploadState) -> None:
        old = self._state
        self._state = new
        if old.phase is not new.phase:
            logger.info(
                "phase_changed",
                extra={
                    "from_phase": old.phase.value,
                    "to_phase": new.phase.value,
                    "progress": new.progress_percent,
                },
            )
            self._record(
                "log_state_transition",
                old.phase.value,
                new.phase.value,
                progress=new.progress_percent,
            )
        if self.on_change is not None:
            self.on_change(new)

    def _record(self, method: str, *args: Any, **kwargs: Any) -> None:
        """Write to the attempt log; an unwritable log never affects the attempt."""
        if self._attempt_logger is None:
            return
        try:
            getattr(self._attempt_logger, method)(*args, **kwargs)
        except OSError as e:
            logger.warning(
                "attempt_log_write_failed", extra={"method": method, "error_msg": str(e)}
            )

    def reset(self) -> bool:
        """Return to idle, dropping the last response and any error.

        Returns:
            False if an attempt is in flight, in which case nothing changes.
        """
        if self._state.busy:
            return False
        self.response = None
        self.export_notice = None
        self._set_state(reset_state())
        return True

    # ------------------------------------------------------------------ #
    #  Selection
    # ------------------------------------------------------------------ #

    def _check_unlocked(self) -> None:
        if self._state.busy:
            raise SelectionLocked()

    def select_files(self, candidates: Iterable[str | Path | SelectedFile]) -> list[SelectedFile]:
        """Replace the selection.

        Raises:
            SelectionLocked: While an attempt is reading or submitting.
            InvalidFileType: If no candidate has the accepted extension.
        """
        self._check_unlocked()
        return self.selection.select(candidates)

    def remove_file(self, index: int) -> SelectedFile:
        self._check_unlocked()
        return self.selection.remove(index)

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def start(self) -> bool:
        """Claim a new attempt.

        Returns:
            True if the attempt started (phase reading, progress 0); False if
            one is already in flight, in which case nothing changes.

        Raises:
            EmptySelection: If no notebook is selected. State is unchanged.
        """
        if self._state.busy:
            logger.info("generate_rejected_busy", extra={"phase": self._state.phase.value})
            return False
        if not len(self.selection):
            raise EmptySelection()

        if self._attempt_logger is not None:
            self._attempt_logger.attempt_id = str(uuid.uuid4())
        self.response = None
        self.export_notice = None
        self._set_state(begin_attempt(self._state))
        return True

    async def run(self) -> UploadState:
        """Drive a started attempt to ready or error."""
        if self._state.phase is not Phase.READING:
            raise RuntimeError("run() called without a started attempt")

        files = list(self.selection)
        try:
            contents = await read_all(files, reader=self._reader)
            self._set_state(advance(self._state, Phase.READING, PROGRESS_READ))

            request = build_request(contents, self.options)
            self.last_request = request
            self._set_state(advance(self._state, Phase.SUBMITTING, PROGRESS_READ))
            self._record(
                "log_event",
                "request_sent",
                notebooks=len(request.notebooks),
                language=request.language,
                temperature=request.temperature,
                max_tokens=request.max_output_tokens,
            )

            result = await self.client.generate(request)
            self._set_state(advance(self._state, Phase.SUBMITTING, PROGRESS_RESPONSE))
            if not result.ok:
                raise result.error

            self.response = result.value
            self._record(
                "log_event",
                "response_received",
                response_length=len(self.response.documentation_text),
            )
            # Cleared before leaving the busy phases, while the lock still holds.
            self.selection.clear()
            self._set_state(mark_ready(self._state))
        except NotedocError as e:
            self._fail(e.code, e.message)
        except Exception as e:
            logger.exception("attempt_unexpected_error")
            self._fail(type(e).__name__, GENERIC_FAILURE_MESSAGE)
        return self._state

    def _fail(self, error_type: str, message: str) -> None:
        self.selection.clear()
        if self._state.busy:
            self._set_state(mark_failed(self._state, message))
        logger.error("attempt_failed", extra={"error_type": error_type, "error_msg": message})
        self._record("log_error", error_type, message)

    async def generate(self) -> UploadState:
        """Start and run an attempt; a no-op returning the current state if busy."""
        if not self.start():
            return self._state
        return await self.run()

    # ------------------------------------------------------------------ #
    #  Export
    # ------------------------------------------------------------------ #

    async def export(self, dest_dir: Path | None = None) -> Path | None:
        """Save the export artifact; failures become a transient notice.

        The phase is never changed by an export, so a failed export can be
        retried without generating again.
        """
        self.export_notice = None
        try:
            path = await export_artifact(
                self.client,
                self._state,
                Path(dest_dir or self.config.output_dir),
                self.config.download_filename or DEFAULT_FILENAME,
            )
        except ExportFailed as e:
            self.export_notice = e.message
            logger.warning("export_failed", extra={"error_msg": e.message})
            self._record("log_error", e.code, e.message)
            return None
        self._record("log_event", "export_saved", output_path=str(path))
        return path
