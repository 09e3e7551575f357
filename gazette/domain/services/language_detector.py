"""Script-based language detection for Arabic / French gazette text."""
from __future__ import annotations

import re
from typing import Optional

from gazette.constants import ARABIC_DOMINANT_RATIO, ARABIC_MINOR_RATIO
from gazette.domain.value_objects.language import Language

_ARABIC_LETTER = re.compile(r"[ء-يٱ-ۓ]")
_LATIN_LETTER = re.compile(r"[A-Za-zÀ-ÿ]")


def detect_language(text: str | None) -> Optional[Language]:
    """
    Classify text by its share of Arabic letters; None when it has no letters.

    Examples:
        >>> detect_language("Décret exécutif n° 20-123")
        <Language.FRENCH: 'fr'>
        >>> detect_language("مرسوم تنفيذي رقم 20-123")
        <Language.ARABIC: 'ar'>
    """
    if not text:
        return None
    arabic = len(_ARABIC_LETTER.findall(text))
    latin = len(_LATIN_LETTER.findall(text))
    total = arabic + latin
    if total == 0:
        return None
    ratio = arabic / total
    if ratio >= ARABIC_DOMINANT_RATIO:
        return Language.ARABIC
    if ratio <= ARABIC_MINOR_RATIO:
        return Language.FRENCH
    return Language.MIXED
