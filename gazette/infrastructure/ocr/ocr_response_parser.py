"""Parse Azure OpenAI OCR responses into OcrResult values."""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from gazette.constants import CONFIDENCE_STEPS
from gazette.domain.value_objects.ocr_result import OcrResult


class OcrResponseParser:
    """Turns the raw model reply into text plus a quantized confidence."""

    def parse(self, content: Optional[str]) -> Optional[OcrResult]:
        payload = extract_json_payload(content or "")
        if payload is None:
            return None
        return self.parse_payload(payload)

    def parse_payload(self, payload: Dict[str, Any]) -> Optional[OcrResult]:
        if not isinstance(payload, dict) or "text" not in payload:
            return None
        text = payload.get("text")
        if isinstance(text, list):
            text = "\n".join(_safe_str(line) for line in text if line is not None)
        confidence = _quantize_confidence(_safe_float(payload.get("confidence")))
        return OcrResult.create(_safe_str(text), confidence if confidence is not None else 0.0)


def extract_json_payload(content: str) -> Optional[dict]:
    text = content.strip()
    if not text:
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Handle fenced code blocks
    if text.startswith("```") and text.endswith("```"):
        body = "\n".join(text.splitlines()[1:-1]).strip()
        if body:
            try:
                return json.loads(body)
            except json.JSONDecodeError:
                pass

    start_index = text.find("{")
    end_index = text.rfind("}")
    if start_index != -1 and end_index > start_index:
        try:
            return json.loads(text[start_index : end_index + 1])
        except json.JSONDecodeError:
            return None
    return None


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _quantize_confidence(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    clamped = max(0.0, min(1.0, value))
    return min(CONFIDENCE_STEPS, key=lambda step: abs(step - clamped))
