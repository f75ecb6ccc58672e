"""Export artifact download."""

from notedoc.export.exporter import DEFAULT_FILENAME, export_artifact

__all__ = ["DEFAULT_FILENAME", "export_artifact"]
