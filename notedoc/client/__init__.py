"""Client for the remote documentation generation service."""

from notedoc.client.models import GenerationRequest, GenerationResponse
from notedoc.client.result import Err, Ok, Result
from notedoc.client.service import GenerationClient, RequestPolicy

__all__ = [
    "Err",
    "GenerationClient",
    "GenerationRequest",
    "GenerationResponse",
    "Ok",
    "RequestPolicy",
    "Result",
]
