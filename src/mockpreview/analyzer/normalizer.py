"""Normalization of raw model text into a ComponentAnalysis."""

import json
from dataclasses import dataclass
from typing import Optional
from pydantic import ValidationError
from ..errors import ResponseFormatError
from ..models import ComponentAnalysis

FENCE_MARKERS = ("```json", "```")


@dataclass
class NormalizedResponse:
    """Parsed analysis plus the reason it fell back, if it did."""

    analysis: ComponentAnalysis
    error: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.error is not None


def strip_code_fences(raw: str) -> str:
    """Remove every Markdown fence marker and surrounding whitespace."""
    text = raw
    for marker in FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def parse_component_analysis(raw: str) -> ComponentAnalysis:
    """Parse model output strictly.

    Raises:
        ResponseFormatError: If the text is not a JSON object with ``props``
    """
    text = strip_code_fences(raw or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(f"response is not valid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, dict):
        raise ResponseFormatError(f"expected a JSON object, got {type(data).__name__}")
    if "props" not in data:
        raise ResponseFormatError("response has no 'props' key")

    try:
        return ComponentAnalysis.model_validate(data)
    except ValidationError as e:
        raise ResponseFormatError(f"response does not match the analysis shape: {e}") from e


def normalize_response(raw: str) -> NormalizedResponse:
    """Parse model output, substituting the fallback analysis on any format error."""
    try:
        return NormalizedResponse(analysis=parse_component_analysis(raw))
    except ResponseFormatError as e:
        return NormalizedResponse(analysis=ComponentAnalysis.fallback(), error=str(e))
