"""Shared fixtures: config, notebook files and a fake generation service."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from notedoc.client.service import GenerationClient
from notedoc.config import ClientConfig

SERVER_URL = "http://docs.test"


class FakeService:
    """In-memory stand-in for the generation service, served via httpx.MockTransport."""

    def __init__(
        self,
        documentation: str = "# Title\ntext",
        upload_status: int = 200,
        upload_body: bytes | None = None,
        download_status: int = 200,
        download_body: bytes = b"%PDF-1.4 fake artifact",
    ) -> None:
        self.documentation = documentation
        self.upload_status = upload_status
        self.upload_body = upload_body
        self.download_status = download_status
        self.download_body = download_body
        self.requests: list[httpx.Request] = []

    @property
    def upload_payloads(self) -> list[dict]:
        return [
            json.loads(r.content) for r in self.requests if r.url.path == "/upload"
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/upload":
            if self.upload_body is not None:
                return httpx.Response(self.upload_status, content=self.upload_body)
            if 200 <= self.upload_status < 300:
                return httpx.Response(
                    self.upload_status, json={"documentation": self.documentation}
                )
            return httpx.Response(self.upload_status)
        if request.url.path == "/download":
            if 200 <= self.download_status < 300:
                return httpx.Response(
                    self.download_status,
                    content=self.download_body,
                    headers={"content-type": "application/pdf"},
                )
            return httpx.Response(self.download_status)
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config(tmp_path: Path) -> ClientConfig:
    """GIVEN a config pointing at the fake service and a temp output dir."""
    return ClientConfig(
        server_url=SERVER_URL,
        timeout=5.0,
        output_dir=tmp_path / "output",
    )


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def client(config: ClientConfig, service: FakeService) -> GenerationClient:
    return GenerationClient(config, transport=service.transport())


@pytest.fixture
def notebook_dir(tmp_path: Path) -> Path:
    path = tmp_path / "notebooks"
    path.mkdir()
    return path


@pytest.fixture
def make_notebook(notebook_dir: Path):
    """Factory writing a file into the notebook folder."""

    def _make(name: str, content: str | bytes = '{"cells": []}') -> Path:
        path = notebook_dir / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _make
