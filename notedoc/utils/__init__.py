"""Shared utilities: exceptions and structured attempt logging."""

from notedoc.utils.exceptions import (
    BatchReadFailure,
    ClipboardUnavailable,
    EmptySelection,
    ExportFailed,
    InvalidFileType,
    NoValidFiles,
    NotedocError,
    RemoteRequestFailure,
    SelectionLocked,
)
from notedoc.utils.logger import AttemptLogger, clear_loggers, get_logger

__all__ = [
    "AttemptLogger",
    "BatchReadFailure",
    "ClipboardUnavailable",
    "EmptySelection",
    "ExportFailed",
    "InvalidFileType",
    "NoValidFiles",
    "NotedocError",
    "RemoteRequestFailure",
    "SelectionLocked",
    "clear_loggers",
    "get_logger",
]
