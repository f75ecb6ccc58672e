"""HTTP client for the documentation generation service.

Endpoints:
- POST /upload - notebooks + generation parameters, returns {"documentation": str}
- GET /download - the server-rendered export artifact (binary)

Every call returns a Result instead of raising, so callers decide how a failure
is shown. Timeout and retry behaviour come from RequestPolicy.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from notedoc.client.models import GenerationRequest, GenerationResponse
from notedoc.client.result import Err, Ok, Result
from notedoc.config import ClientConfig
from notedoc.utils.exceptions import (
    GENERIC_FAILURE_MESSAGE,
    ExportFailed,
    RemoteRequestFailure,
)

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/upload"
DOWNLOAD_PATH = "/download"


@dataclass(frozen=True)
class RequestPolicy:
    """Timeout and retry settings applied to every service call.

    Attributes:
        timeout: Seconds before a request is abandoned; None keeps httpx's default.
        max_retries: Extra attempts after a transport error. HTTP error replies
            are never retried.
    """

    timeout: float | None = 120.0
    max_retries: int = 0

    @classmethod
    def from_config(cls, config: ClientConfig) -> "RequestPolicy":
        return cls(timeout=config.timeout, max_retries=config.max_retries)


def _error_message(response: httpx.Response) -> str:
    """Extract the service-provided error text, else the generic message."""
    try:
        body = response.json()
    except ValueError:
        return GENERIC_FAILURE_MESSAGE
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return GENERIC_FAILURE_MESSAGE


class GenerationClient:
    """Async client for the generation service.

    A fresh httpx.AsyncClient is opened per call so the client can be used
    from whichever event loop runs the current attempt.

    Example:
        client = GenerationClient(ClientConfig())
        result = await client.generate(request)
        if result.ok:
            print(result.value.documentation_text)
    """

    def __init__(
        self,
        config: ClientConfig,
        policy: RequestPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = config.server_url
        self.policy = policy or RequestPolicy.from_config(config)
        self._transport = transport

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"base_url": self.base_url}
        if self.policy.timeout is not None:
            kwargs["timeout"] = httpx.Timeout(self.policy.timeout)
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request, retrying transport errors per policy.

        Raises:
            httpx.TransportError: When every attempt failed at the transport level.
        """
        attempts = self.policy.max_retries + 1
        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            for attempt in range(1, attempts + 1):
                try:
                    return await client.request(method, path, **kwargs)
                except httpx.TransportError as e:
                    logger.warning(
                        "service_transport_error",
                        extra={"path": path, "attempt": attempt, "error": str(e)},
                    )
                    if attempt == attempts:
                        raise
        raise RuntimeError("unreachable")

    async def generate(
        self, request: GenerationRequest
    ) -> Result[GenerationResponse, RemoteRequestFailure]:
        """Submit notebooks for documentation generation."""
        payload = request.to_payload()
        logger.info(
            "generation_request_start",
            extra={
                "notebooks": len(request.notebooks),
                "payload_chars": sum(len(n) for n in request.notebooks),
                "language": request.language,
                "temperature": request.temperature,
                "max_tokens": request.max_output_tokens,
            },
        )
        try:
            response = await self._send("POST", UPLOAD_PATH, json=payload)
        except httpx.TransportError as e:
            return Err(RemoteRequestFailure(f"Could not reach service: {e}"))

        if not response.is_success:
            message = _error_message(response)
            logger.warning(
                "generation_request_failed",
                extra={"status_code": response.status_code, "error_msg": message},
            )
            return Err(RemoteRequestFailure(message, status_code=response.status_code))

        try:
            body = response.json()
        except ValueError:
            return Err(
                RemoteRequestFailure(
                    "Service returned a malformed response",
                    status_code=response.status_code,
                )
            )
        documentation = body.get("documentation") if isinstance(body, dict) else None
        if not isinstance(documentation, str):
            return Err(
                RemoteRequestFailure(
                    "Service response has no documentation",
                    status_code=response.status_code,
                )
            )

        logger.info(
            "generation_request_complete",
            extra={"response_length": len(documentation)},
        )
        return Ok(GenerationResponse(documentation_text=documentation))

    async def download(self) -> Result[bytes, ExportFailed]:
        """Fetch the export artifact produced by the service."""
        try:
            response = await self._send("GET", DOWNLOAD_PATH)
        except httpx.TransportError as e:
            return Err(ExportFailed(f"Could not reach service: {e}"))

        if not response.is_success:
            logger.warning(
                "download_failed", extra={"status_code": response.status_code}
            )
            return Err(
                ExportFailed(
                    f"Export failed with status {response.status_code}",
                    status_code=response.status_code,
                )
            )

        logger.info(
            "download_complete",
            extra={
                "bytes": len(response.content),
                "content_type": response.headers.get("content-type", ""),
            },
        )
        return Ok(response.content)
