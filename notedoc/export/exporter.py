"""Save the server-rendered documentation artifact."""

import asyncio
import logging
from pathlib import Path

from notedoc.client.service import GenerationClient
from notedoc.pipeline.state import Phase, UploadState
from notedoc.utils.exceptions import ExportFailed

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "documentation.pdf"


def _write_artifact(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)


async def export_artifact(
    client: GenerationClient,
    state: UploadState,
    dest_dir: Path,
    filename: str = DEFAULT_FILENAME,
) -> Path:
    """Download the export artifact and save it as dest_dir/filename.

    The artifact is produced by the service; nothing is derived from the
    documentation text held locally.

    Args:
        client: Service client used for GET /download.
        state: Current upload state; must be ready.
        dest_dir: Directory the file is written to (created if missing).
        filename: Name of the saved file.

    Returns:
        Path of the saved file.

    Raises:
        ExportFailed: If not ready, the download fails, or the file cannot be written.
    """
    if state.phase is not Phase.READY:
        raise ExportFailed("Documentation is not ready to export")

    result = await client.download()
    if not result.ok:
        raise result.error

    path = Path(dest_dir) / filename
    try:
        await asyncio.to_thread(_write_artifact, path, result.value)
    except OSError as e:
        raise ExportFailed(f"Could not save {path}: {e.strerror or e}") from e

    logger.info(
        "artifact_saved", extra={"output_path": str(path), "bytes": len(result.value)}
    )
    return path
