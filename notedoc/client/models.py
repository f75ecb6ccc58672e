"""Request and response shapes exchanged with the generation service."""

from dataclasses import dataclass
from typing import Any, Sequence

from notedoc.ingest.files import FileContent
from notedoc.style.params import GenerationParameters, StyleOptions


@dataclass(frozen=True)
class GenerationRequest:
    """One submission: notebook sources in selection order plus parameters."""

    notebooks: tuple[str, ...]
    language: str
    temperature: float
    max_output_tokens: int

    @classmethod
    def build(
        cls,
        contents: Sequence[FileContent],
        options: StyleOptions,
        params: GenerationParameters,
    ) -> "GenerationRequest":
        return cls(
            notebooks=tuple(c.text for c in contents),
            language=getattr(options.language, "value", str(options.language)),
            temperature=params.temperature,
            max_output_tokens=params.max_output_tokens,
        )

    def to_payload(self) -> dict[str, Any]:
        """Wire body for POST /upload."""
        return {
            "notebooks": list(self.notebooks),
            "language": self.language,
            "temperature": self.temperature,
            "max_tokens": self.max_output_tokens,
        }


@dataclass(frozen=True)
class GenerationResponse:
    documentation_text: str
