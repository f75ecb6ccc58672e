"""Tests for ClientConfig settings loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from notedoc.config import ClientConfig


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test away from any .env file and NOTEDOC_ variables."""
    monkeypatch.chdir(tmp_path)
    for var in ("NOTEDOC_SERVER_URL", "NOTEDOC_TIMEOUT", "NOTEDOC_RENDER_MODE"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.server_url == "http://localhost:5004"
        assert config.timeout == 120.0
        assert config.max_retries == 0
        assert config.accepted_extension == ".ipynb"
        assert config.download_filename == "documentation.pdf"
        assert config.output_dir == Path("./output")
        assert config.render_mode == "markdown"
        assert config.log_dir is None


class TestValidation:
    """Tests for field validators."""

    def test_trailing_slash_stripped(self):
        assert ClientConfig(server_url="http://docs.test:5004/").server_url == (
            "http://docs.test:5004"
        )

    def test_invalid_url_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(server_url="localhost")

    def test_extension_lowercased(self):
        assert ClientConfig(accepted_extension=".IPYNB").accepted_extension == ".ipynb"

    def test_extension_needs_dot(self):
        with pytest.raises(ValidationError):
            ClientConfig(accepted_extension="ipynb")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClientConfig(timeout=0)

    def test_retries_bounded(self):
        with pytest.raises(ValidationError):
            ClientConfig(max_retries=11)

    def test_unknown_render_mode_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(render_mode="html")


class TestEnvironment:
    """Tests for NOTEDOC_ environment overrides."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("NOTEDOC_SERVER_URL", "http://docs.internal:8080")
        monkeypatch.setenv("NOTEDOC_TIMEOUT", "300")
        monkeypatch.setenv("NOTEDOC_RENDER_MODE", "plain")
        config = ClientConfig()
        assert config.server_url == "http://docs.internal:8080"
        assert config.timeout == 300.0
        assert config.render_mode == "plain"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("NOTEDOC_MAX_RETRIES=2\n", encoding="utf-8")
        assert ClientConfig().max_retries == 2
