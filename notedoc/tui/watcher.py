"""File watcher for the notebook input folder."""

import time
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer


def scan_input_folder(input_path: Path) -> list[str]:
    """List regular files in the input folder as absolute paths, sorted by name."""
    if not input_path.exists():
        return []
    return [str(f.absolute()) for f in sorted(input_path.iterdir()) if f.is_file()]


class InputFolderHandler(FileSystemEventHandler):
    """Forwards file additions, removals and renames in the folder."""

    def __init__(self, callback: Callable[[str, str], None]):
        self.callback = callback

    def on_created(self, event):
        if not event.is_directory:
            self.callback("created", event.src_path)

    def on_deleted(self, event):
        if not event.is_directory:
            self.callback("deleted", event.src_path)

    def on_moved(self, event):
        if not event.is_directory:
            self.callback("moved", event.dest_path)


class FileWatcher:
    """Watches the input folder so dropped-in notebooks show up in the TUI."""

    def __init__(self, input_path: Path, callback: Callable[[list[str]], None]):
        self.input_path = input_path
        self.callback = callback
        self._observer = Observer()
        self._handler = InputFolderHandler(self._handle_event)

    def _handle_event(self, event_type: str, file_path: str):
        """Refresh the file list after a short settle delay."""
        time.sleep(0.1)
        self.callback(scan_input_folder(self.input_path))

    def start(self):
        """Start watching the input folder in a daemon thread."""
        self._observer.schedule(self._handler, str(self.input_path), recursive=False)
        self._observer.start()

    def stop(self):
        """Stop the file watcher."""
        self._observer.stop()
        self._observer.join()
