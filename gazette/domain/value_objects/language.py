"""Script language of a text fragment."""
from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    ARABIC = "ar"
    FRENCH = "fr"
    MIXED = "mixed"


class LanguageHint(str, Enum):
    """Hint passed to the OCR collaborator."""
    AUTO = "auto"
    ARABIC = "ar"
    FRENCH = "fr"

    @classmethod
    def for_language(cls, language: Language | None) -> LanguageHint:
        if language == Language.ARABIC:
            return cls.ARABIC
        if language == Language.FRENCH:
            return cls.FRENCH
        return cls.AUTO
