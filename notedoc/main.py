"""notedoc - Main entry point."""

import argparse
import logging
import shutil
from pathlib import Path

from notedoc.client.service import GenerationClient
from notedoc.config import ClientConfig
from notedoc.pipeline.orchestrator import Orchestrator
from notedoc.tui.state import AppState
from notedoc.tui.watcher import FileWatcher, scan_input_folder
from notedoc.utils.logger import get_logger


def configure_logging(config: ClientConfig) -> None:
    """Send module logs to a file under log_dir; the terminal belongs to the TUI."""
    if config.log_dir is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    config.log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(config.log_dir / "notedoc.log"),
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_orchestrator(config: ClientConfig) -> Orchestrator:
    attempt_logger = (
        get_logger(config.log_dir, config.log_level) if config.log_dir else None
    )
    return Orchestrator(
        GenerationClient(config), config=config, attempt_logger=attempt_logger
    )


def main(argv: list[str] | None = None):
    """Main entry point for notedoc."""
    parser = argparse.ArgumentParser(prog="notedoc")
    parser.add_argument(
        "--input",
        default="./notebooks",
        help="Input folder path (default: ./notebooks)",
    )
    parser.add_argument("--server", help="Generation service URL (overrides NOTEDOC_SERVER_URL)")
    parser.add_argument("files", nargs="*", help="Files to copy to input folder")

    args = parser.parse_args(argv)

    overrides = {"server_url": args.server} if args.server else {}
    config = ClientConfig(**overrides)
    configure_logging(config)

    print("notedoc starting...")

    input_path = Path(args.input)
    input_path.mkdir(parents=True, exist_ok=True)

    for file_path in args.files:
        src = Path(file_path)
        if src.exists():
            shutil.copy2(src, input_path / src.name)

    state = AppState(
        orchestrator=build_orchestrator(config), render_mode=config.render_mode
    )
    state.detected_files = scan_input_folder(input_path)

    def update_detected_files(files: list[str]):
        state.detected_files = files

    watcher = FileWatcher(input_path, update_detected_files)
    watcher.start()

    from notedoc.tui.app import NotedocApp

    app = NotedocApp(state, watcher)
    try:
        app.run()
    finally:
        watcher.stop()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
