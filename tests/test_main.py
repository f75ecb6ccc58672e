"""Tests for the notedoc entry point."""

import logging
from unittest.mock import patch

import pytest

from notedoc.config import ClientConfig
from notedoc.main import build_orchestrator, configure_logging, main
from notedoc.utils.logger import clear_loggers


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NOTEDOC_SERVER_URL", raising=False)
    monkeypatch.delenv("NOTEDOC_LOG_DIR", raising=False)


class TestMain:
    """Tests for main()."""

    def test_copies_files_and_runs_app(self, tmp_path):
        source = tmp_path / "src" / "demo.ipynb"
        source.parent.mkdir()
        source.write_text('{"cells": []}', encoding="utf-8")
        input_dir = tmp_path / "in"

        with patch("notedoc.main.FileWatcher") as mock_watcher, patch(
            "notedoc.tui.app.NotedocApp"
        ) as mock_app:
            assert main(["--input", str(input_dir), str(source)]) == 0

        assert (input_dir / "demo.ipynb").read_text(encoding="utf-8") == '{"cells": []}'
        state = mock_app.call_args.args[0]
        assert state.detected_files == [str((input_dir / "demo.ipynb").absolute())]
        mock_app.return_value.run.assert_called_once()
        mock_watcher.return_value.start.assert_called_once()
        mock_watcher.return_value.stop.assert_called_once()

    def test_server_flag_overrides_url(self, tmp_path):
        with patch("notedoc.main.FileWatcher"), patch(
            "notedoc.tui.app.NotedocApp"
        ) as mock_app:
            main(["--input", str(tmp_path / "in"), "--server", "http://docs.test:9000/"])

        state = mock_app.call_args.args[0]
        assert state.orchestrator.config.server_url == "http://docs.test:9000"

    def test_watcher_stopped_when_app_fails(self, tmp_path):
        with patch("notedoc.main.FileWatcher") as mock_watcher, patch(
            "notedoc.tui.app.NotedocApp"
        ) as mock_app:
            mock_app.return_value.run.side_effect = RuntimeError("boom")
            with pytest.raises(RuntimeError):
                main(["--input", str(tmp_path / "in")])
        mock_watcher.return_value.stop.assert_called_once()


class TestBuildOrchestrator:
    """Tests for build_orchestrator and configure_logging."""

    def test_attempt_log_only_with_log_dir(self, tmp_path):
        assert build_orchestrator(ClientConfig())._attempt_logger is None
        orch = build_orchestrator(ClientConfig(log_dir=tmp_path / "logs"))
        assert orch._attempt_logger.log_path == tmp_path / "logs" / "attempts.jsonl"

    def test_attempt_log_uses_configured_level(self, tmp_path):
        clear_loggers()
        config = ClientConfig(log_dir=tmp_path / "logs", log_level="ERROR")
        build_orchestrator(config)._attempt_logger.log_event("request_sent")
        assert not (tmp_path / "logs" / "attempts.jsonl").exists()
        clear_loggers()

    def test_configure_logging_without_dir_adds_null_handler(self):
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            configure_logging(ClientConfig())
            assert any(isinstance(h, logging.NullHandler) for h in root.handlers)
        finally:
            root.handlers[:] = before
