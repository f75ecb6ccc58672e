"""Notebook selection and reading."""

from notedoc.ingest.files import (
    ACCEPTED_EXTENSION,
    FileContent,
    FileSelection,
    SelectedFile,
    is_accepted,
    read_all,
)

__all__ = [
    "ACCEPTED_EXTENSION",
    "FileContent",
    "FileSelection",
    "SelectedFile",
    "is_accepted",
    "read_all",
]
