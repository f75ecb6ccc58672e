"""Style options and their mapping to generation parameters."""

from dataclasses import dataclass, field
from enum import Enum


class Language(str, Enum):
    """Languages the generation service can write documentation in."""

    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"
    GERMAN = "German"
    CHINESE = "Chinese"
    HINDI = "Hindi"
    JAPANESE = "Japanese"


class DocStyle(str, Enum):
    CONCISE = "concise"
    EXPLANATORY = "explanatory"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CREATIVE = "creative"
    CASUAL = "casual"


TEMPERATURE_BY_TONE: dict[Tone, float] = {
    Tone.PROFESSIONAL: 0.3,
    Tone.CREATIVE: 0.8,
    Tone.CASUAL: 0.6,
}

MAX_TOKENS_BY_STYLE: dict[DocStyle, int] = {
    DocStyle.CONCISE: 1500,
    DocStyle.EXPLANATORY: 3000,
}

# Only reached if an option holds a value outside its enum.
DEFAULT_TEMPERATURE = 0.5
DEFAULT_MAX_TOKENS = 2048


@dataclass
class StyleOptions:
    """User-facing style choices; always valid thanks to the defaults."""

    language: Language = Language.ENGLISH
    doc_style: DocStyle = DocStyle.EXPLANATORY
    tone: Tone = Tone.PROFESSIONAL


@dataclass(frozen=True)
class GenerationParameters:
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_TOKENS


def map_style(options: StyleOptions) -> GenerationParameters:
    """Translate style options into sampling temperature and token budget.

    Pure and total: the result depends only on tone and doc_style.
    """
    return GenerationParameters(
        temperature=TEMPERATURE_BY_TONE.get(options.tone, DEFAULT_TEMPERATURE),
        max_output_tokens=MAX_TOKENS_BY_STYLE.get(
            options.doc_style, DEFAULT_MAX_TOKENS
        ),
    )


def parse_choice(enum_cls: type[Enum], raw: str) -> Enum:
    """Resolve a case-insensitive name or value to an enum member.

    Raises:
        ValueError: If raw matches no member.
    """
    needle = raw.strip().lower()
    for member in enum_cls:
        if needle in (member.name.lower(), str(member.value).lower()):
            return member
    choices = ", ".join(str(m.value) for m in enum_cls)
    raise ValueError(f"Unknown {enum_cls.__name__} {raw!r} (choose from: {choices})")
