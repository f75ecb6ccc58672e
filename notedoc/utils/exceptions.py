"""Error taxonomy for the notebook documentation client.

Every failure raised by ingestion, the service client, or the exporter is a
NotedocError carrying the stage where it happened:

- EMPTY_SELECTION: Generate requested with no notebooks chosen.
- INVALID_FILE_TYPE: A selection contained no accepted notebook files.
- BATCH_READ_FAILURE: At least one notebook could not be read or decoded.
- REMOTE_REQUEST_FAILURE: The generation service was unreachable or refused.
- EXPORT_FAILED: The export artifact could not be fetched or saved.
- SELECTION_LOCKED: The selection was changed while an attempt was in flight.

The orchestrator catches these where the operation was issued and turns them
into UploadState or a transient notice; none of them reach the process.
"""

GENERIC_FAILURE_MESSAGE = "Error processing the file."


class NotedocError(Exception):
    """Base error for client-side failures.

    Attributes:
        stage: The stage where the error occurred.
        message: The user-facing error message.
    """

    code = "NOTEDOC_ERROR"

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        self.message = message
        super().__init__(f"[{stage}] {message}")


class EmptySelection(NotedocError):
    """Raised when Generate is requested without any selected notebook."""

    code = "EMPTY_SELECTION"

    def __init__(self, message: str = "Select at least one notebook first") -> None:
        super().__init__("select", message)


class InvalidFileType(NotedocError):
    """Raised when a selection filters down to zero accepted files.

    Attributes:
        rejected: Names that were offered but did not match the extension.
    """

    code = "INVALID_FILE_TYPE"

    def __init__(self, rejected: list[str], extension: str = ".ipynb") -> None:
        self.rejected = list(rejected)
        self.extension = extension
        super().__init__("select", f"No {extension} files in selection")


# Same condition, named after the ingestion contract.
NoValidFiles = InvalidFileType


class BatchReadFailure(NotedocError):
    """Raised when any notebook in a batch fails to read or decode.

    Attributes:
        name: Name of the first file that failed.
        reason: Short description of the underlying error.
    """

    code = "BATCH_READ_FAILURE"

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__("read", f"Could not read {name}: {reason}")


class RemoteRequestFailure(NotedocError):
    """Raised for network errors and non-2xx replies from the generation service.

    Attributes:
        status_code: HTTP status of the reply, None for transport errors.
    """

    code = "REMOTE_REQUEST_FAILURE"

    def __init__(
        self, message: str = GENERIC_FAILURE_MESSAGE, status_code: int | None = None
    ) -> None:
        self.status_code = status_code
        super().__init__("submit", message)


class ExportFailed(NotedocError):
    """Raised when the export artifact cannot be downloaded or written."""

    code = "EXPORT_FAILED"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__("export", message)


class ClipboardUnavailable(NotedocError):
    """Raised when no clipboard mechanism is available on this system."""

    code = "CLIPBOARD_UNAVAILABLE"

    def __init__(self, message: str) -> None:
        super().__init__("copy", message)


class SelectionLocked(NotedocError):
    """Raised when the selection is changed while an attempt is in flight."""

    code = "SELECTION_LOCKED"

    def __init__(
        self, message: str = "Generation in progress: the selection cannot change"
    ) -> None:
        super().__init__("select", message)
