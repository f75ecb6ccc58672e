"""Notebook selection and batch reading."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Iterable

from notedoc.utils.exceptions import BatchReadFailure, InvalidFileType

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSION = ".ipynb"

Reader = Callable[["SelectedFile"], Awaitable[bytes]]


@dataclass(frozen=True)
class SelectedFile:
    """A notebook chosen by the user; path is the handle used for reading."""

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: str | Path) -> "SelectedFile":
        p = Path(path)
        return cls(name=p.name, path=p)


@dataclass(frozen=True)
class FileContent:
    """Decoded text of one selected notebook."""

    name: str
    text: str


def is_accepted(name: str, extension: str = ACCEPTED_EXTENSION) -> bool:
    """Check whether a file name carries the accepted extension (case-insensitive)."""
    return name.lower().endswith(extension.lower())


@dataclass
class FileSelection:
    """Ordered set of notebooks picked for the next submission.

    A new selection replaces the previous one; files are not accumulated across
    selections. Individual files can be removed by index before submitting.
    """

    extension: str = ACCEPTED_EXTENSION
    files: list[SelectedFile] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self):
        return iter(self.files)

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.files]

    def select(self, candidates: Iterable[str | Path | SelectedFile]) -> list[SelectedFile]:
        """Replace the selection with the accepted files among candidates.

        Args:
            candidates: Paths or SelectedFile handles, in the order offered.

        Returns:
            The new selection.

        Raises:
            InvalidFileType: If no candidate has the accepted extension. The
                current selection is left untouched.
        """
        offered = [
            c if isinstance(c, SelectedFile) else SelectedFile.from_path(c)
            for c in candidates
        ]
        accepted = [f for f in offered if is_accepted(f.name, self.extension)]
        if not accepted:
            logger.info(
                "selection_rejected", extra={"offered": [f.name for f in offered]}
            )
            raise InvalidFileType([f.name for f in offered], self.extension)

        skipped = len(offered) - len(accepted)
        self.files = accepted
        logger.info(
            "selection_replaced",
            extra={"count": len(accepted), "skipped": skipped},
        )
        return list(self.files)

    def remove(self, index: int) -> SelectedFile:
        """Remove and return the file at a 0-based index."""
        if index < 0 or index >= len(self.files):
            raise IndexError(f"No selected file at position {index + 1}")
        removed = self.files.pop(index)
        logger.info("selection_file_removed", extra={"file_name": removed.name})
        return removed

    def clear(self) -> None:
        self.files.clear()


async def read_bytes(file: SelectedFile) -> bytes:
    """Read a file's bytes without blocking the event loop."""
    return await asyncio.to_thread(file.path.read_bytes)


async def _read_one(file: SelectedFile, reader: Reader) -> FileContent:
    try:
        raw = await reader(file)
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BatchReadFailure(file.name, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise BatchReadFailure(file.name, e.strerror or str(e)) from e
    return FileContent(name=file.name, text=text)


async def read_all(
    files: Iterable[SelectedFile], reader: Reader = read_bytes
) -> list[FileContent]:
    """Read every file concurrently, returning contents in input order.

    All-or-nothing: if any read or decode fails the whole batch fails and no
    partial list is returned.

    Raises:
        BatchReadFailure: For the first failing file in input order.
    """
    files = list(files)
    results = await asyncio.gather(
        *(_read_one(f, reader) for f in files), return_exceptions=True
    )
    for result in results:
        if isinstance(result, BaseException):
            logger.warning(
                "batch_read_failed",
                extra={"files": len(files), "error": str(result)},
            )
            raise result
    logger.info("batch_read_complete", extra={"files": len(files)})
    return list(results)
