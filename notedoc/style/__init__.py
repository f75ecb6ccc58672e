"""Style options and parameter mapping."""

from notedoc.style.params import (
    DocStyle,
    GenerationParameters,
    Language,
    StyleOptions,
    Tone,
    map_style,
    parse_choice,
)

__all__ = [
    "DocStyle",
    "GenerationParameters",
    "Language",
    "StyleOptions",
    "Tone",
    "map_style",
    "parse_choice",
]
