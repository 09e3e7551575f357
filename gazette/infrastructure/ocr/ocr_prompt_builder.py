"""Utilities for constructing Azure OpenAI OCR prompts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from gazette.domain.value_objects.language import LanguageHint

DEFAULT_PROMPT_TEMPLATE = (
    "You are an OCR engine for the Official Journal of the Algerian Republic."
    " The image is one region of a scanned gazette page: a text column or a single table cell."
    " Transcribe the text exactly as printed, keeping line breaks and the original script"
    " (Arabic stays Arabic, French stays French, digits as printed)."
    " Do not translate, summarize or correct spelling."
    " Use this exact JSON schema for your response: {\n"
    "  \"text\": string,\n"
    "  \"confidence\": number between 0 and 1\n"
    "}.\n"
    "Confidence must be chosen from [0.0, 0.2, 0.4, 0.6, 0.8, 1.0] (0.0 = unreadable, 1.0 = clean print)."
    " Do not add commentary. If the region holds no text return {\"text\":\"\",\"confidence\":0.0}."
)

_LANGUAGE_INSTRUCTIONS = {
    LanguageHint.AUTO: "The region may contain Arabic, French or both.",
    LanguageHint.ARABIC: "The region is printed in Arabic, read right to left.",
    LanguageHint.FRENCH: "The region is printed in French.",
}


@dataclass(frozen=True)
class OcrPromptAttempt:
    """Messages for one call to the model."""

    messages: List[dict[str, Any]]
    force_json: bool


def build_prompt_attempts(image_data_url: str, language: LanguageHint = LanguageHint.AUTO) -> List[OcrPromptAttempt]:
    """Construct prompt attempts for a region image.

    The model occasionally answers outside JSON, so the first attempt forces a
    JSON response format, the second relaxes it, and the last restates the
    expected shape.
    """

    hint = _LANGUAGE_INSTRUCTIONS[LanguageHint(language)]
    base_messages = [
        {"role": "system", "content": DEFAULT_PROMPT_TEMPLATE},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": f"Transcribe this region. {hint}"},
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ],
        },
    ]

    relaxed_messages = [
        base_messages[0],
        {
            "role": "user",
            "content": [
                {
                    "type": "text",
                    "text": (
                        f"Transcribe this region. {hint}"
                        " Reply with a single JSON object with keys \"text\" and \"confidence\" and nothing else."
                    ),
                },
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ],
        },
    ]

    return [
        OcrPromptAttempt(messages=base_messages, force_json=True),
        OcrPromptAttempt(messages=base_messages, force_json=False),
        OcrPromptAttempt(messages=relaxed_messages, force_json=False),
    ]
