"""Client configuration: service endpoint, request policy, files, rendering, logs.

All settings are loaded from environment (prefix NOTEDOC_, optional .env).
Override via env vars, e.g.:
  NOTEDOC_SERVER_URL=http://docs.internal:5004
  NOTEDOC_TIMEOUT=300
  NOTEDOC_RENDER_MODE=plain
"""

from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Settings for the generation client and terminal UI."""

    model_config = SettingsConfigDict(
        env_prefix="NOTEDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_url: str = Field(
        default="http://localhost:5004",
        description="Base URL of the documentation generation service.",
    )
    timeout: float | None = Field(
        default=120.0,
        gt=0,
        description="Request timeout in seconds; None leaves the transport default.",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Retries on transport errors. 0 means every retry is user-initiated.",
    )
    accepted_extension: str = Field(
        default=".ipynb", description="Only files with this suffix can be selected."
    )
    download_filename: str = Field(
        default="documentation.pdf", description="File name for the saved export."
    )
    output_dir: Path = Field(
        default=Path("./output"), description="Directory the export is saved to."
    )
    render_mode: Literal["markdown", "plain"] = Field(
        default="markdown",
        description="markdown renders structure; plain strips markers (legacy).",
    )
    log_dir: Path | None = Field(
        default=None, description="Directory for the JSONL attempt log."
    )
    log_level: str = Field(default="INFO", description="Root logging level.")

    @field_validator("server_url")
    @classmethod
    def _validate_server_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("server_url must be a valid URL with scheme and netloc")
        return v.rstrip("/")

    @field_validator("accepted_extension")
    @classmethod
    def _normalize_extension(cls, v: str) -> str:
        v = v.lower()
        if not v.startswith("."):
            raise ValueError(f"Extension must start with '.': {v!r}")
        return v
