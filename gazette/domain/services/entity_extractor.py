"""
EntityExtractor domain service.

Scans recognized gazette text with a fixed, ordered list of bilingual
(French / Arabic) pattern rules. Every match becomes one entity with the fixed
confidence of its entity type; repeated and overlapping matches are all kept.
Choosing among them is the field mapper's job.
"""
from __future__ import annotations

import bisect
import logging
import re
import unicodedata
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from gazette.constants import ENTITY_CONFIDENCE
from gazette.domain.entities.extracted_entity import (
    AnnexeEntity,
    ArticleEntity,
    DateEntity,
    ExtractedEntity,
    InstitutionEntity,
    NumberEntity,
    PublicationEntity,
    ReferenceEntity,
    SignatoryEntity,
)
from gazette.domain.value_objects.entity_type import Calendar, EntityType, NumberScope, PublicationKind

logger = logging.getLogger(__name__)

_DIGIT = r"[0-9٠-٩]"
_NUMBER = rf"{_DIGIT}+(?:\s*[-/]\s*{_DIGIT}+)?"
_NO = r"n\s*[°º]"

FRENCH_MONTHS: Dict[str, int] = {
    "janvier": 1, "fevrier": 2, "mars": 3, "avril": 4, "mai": 5, "juin": 6,
    "juillet": 7, "aout": 8, "septembre": 9, "octobre": 10, "novembre": 11, "decembre": 12,
}

ARABIC_GREGORIAN_MONTHS: Dict[str, int] = {
    "يناير": 1, "جانفي": 1, "فبراير": 2, "فيفري": 2, "مارس": 3, "أبريل": 4, "أفريل": 4,
    "مايو": 5, "ماي": 5, "يونيو": 6, "جوان": 6, "يوليو": 7, "جويلية": 7,
    "غشت": 8, "أوت": 8, "أغسطس": 8, "سبتمبر": 9, "أكتوبر": 10, "نوفمبر": 11, "ديسمبر": 12,
}

HIJRI_MONTHS_AR: Dict[str, int] = {
    "محرم": 1, "صفر": 2, "ربيع الأول": 3, "ربيع الثاني": 4, "جمادى الأولى": 5,
    "جمادى الثانية": 6, "رجب": 7, "شعبان": 8, "رمضان": 9, "شوال": 10,
    "ذو القعدة": 11, "ذو الحجة": 12,
}

HIJRI_MONTHS_FR: Dict[str, int] = {
    "moharram": 1, "safar": 2, "rabie el aouel": 3, "rabi el aouel": 3, "rabie ethani": 4,
    "rabie el thani": 4, "rabi ethani": 4, "djoumada el oula": 5, "djoumada ethania": 6,
    "djoumada el akhira": 6, "radjab": 7, "chaabane": 8, "ramadhan": 9, "ramadan": 9,
    "chaoual": 10, "chaouel": 10, "dhou el kaada": 11, "dhou el hidja": 12,
}

PUBLICATION_KINDS: Dict[str, PublicationKind] = {
    "loi": PublicationKind.LOI,
    "ordonnance": PublicationKind.ORDONNANCE,
    "decret": PublicationKind.DECRET,
    "decret executif": PublicationKind.DECRET_EXECUTIF,
    "decret presidentiel": PublicationKind.DECRET_PRESIDENTIEL,
    "arrete": PublicationKind.ARRETE,
    "arrete interministeriel": PublicationKind.ARRETE_INTERMINISTERIEL,
    "decision": PublicationKind.DECISION,
    "circulaire": PublicationKind.CIRCULAIRE,
    "instruction": PublicationKind.INSTRUCTION,
    "قانون": PublicationKind.LOI,
    "أمر": PublicationKind.ORDONNANCE,
    "مرسوم": PublicationKind.DECRET,
    "مرسوم تنفيذي": PublicationKind.DECRET_EXECUTIF,
    "مرسوم رئاسي": PublicationKind.DECRET_PRESIDENTIEL,
    "قرار": PublicationKind.ARRETE,
    "قرار وزاري مشترك": PublicationKind.ARRETE_INTERMINISTERIEL,
    "مقرر": PublicationKind.DECISION,
    "منشور": PublicationKind.CIRCULAIRE,
    "تعليمة": PublicationKind.INSTRUCTION,
}


def _alternation(words) -> str:
    """Regex alternation, longest first so multi-word names win; spaces match any whitespace."""
    ordered = sorted(set(words), key=len, reverse=True)
    return "|".join(re.escape(word).replace(r"\ ", r"\s+") for word in ordered)


def normalize_key(text: str) -> str:
    """Lowercase, strip Latin accents and collapse whitespace."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not (unicodedata.combining(ch) and ord(ch) < 0x0600))
    return " ".join(unicodedata.normalize("NFKC", stripped).lower().split())


def to_ascii_digits(text: str) -> str:
    return text.translate(str.maketrans("٠١٢٣٤٥٦٧٨٩", "0123456789"))


def _clean_number(raw: str) -> str:
    return re.sub(r"\s+", "", to_ascii_digits(raw))


def _iso(year: int, month: int, day: int) -> Optional[str]:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _hijri_iso(year: int, month: int, day: int) -> Optional[str]:
    if not (1 <= month <= 12 and 1 <= day <= 30):
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def _day(raw: str) -> int:
    return int(to_ascii_digits(raw))


_FRENCH_PUBLICATION_KINDS = [
    r"d[ée]cret\s+ex[ée]cutif", r"d[ée]cret\s+pr[ée]sidentiel", r"d[ée]cret",
    r"arr[êe]t[ée]\s+interminist[ée]riel", r"arr[êe]t[ée]",
    r"loi", r"ordonnance", r"d[ée]cision", r"circulaire", r"instruction",
]

_GREGORIAN_DATE_FR = (
    rf"(?P<day>{_DIGIT}{{1,2}})(?:er)?\s+"
    r"(?P<month>janvier|f[ée]vrier|mars|avril|mai|juin|juillet|ao[ûu]t|septembre|octobre|novembre|d[ée]cembre)"
    rf"\s+(?P<year>{_DIGIT}{{4}})"
)


@dataclass(frozen=True)
class PatternRule:
    """One ordered extraction rule."""

    name: str
    entity_type: EntityType
    pattern: re.Pattern
    build: Callable[[re.Match, Dict], ExtractedEntity]


def _base(match: re.Match, entity_type: EntityType, rule: str, value: str | None = None) -> Dict:
    return {
        "value": (value if value is not None else match.group(0)).strip(),
        "confidence": ENTITY_CONFIDENCE[entity_type.value],
        "start": match.start(),
        "end": match.end(),
        "rule": rule,
    }


def _title(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    text = raw.strip(" ,;:.-\t")
    return text or None


def _build_publication(match: re.Match, common: Dict) -> ExtractedEntity:
    kind = PUBLICATION_KINDS[normalize_key(match.group("kind"))]
    number = _clean_number(match.group("number"))
    head = f"{' '.join(match.group('kind').split())} {match.group('sep')} {number}"
    common["value"] = head
    return PublicationEntity(
        **common,
        publication_kind=kind,
        reference_number=number,
        title=_title(match.groupdict().get("title")),
    )


def _build_hijri(months: Dict[str, int]):
    def build(match: re.Match, common: Dict) -> ExtractedEntity:
        month = months[normalize_key(match.group("month"))]
        year = int(to_ascii_digits(match.group("year")))
        return DateEntity(
            **common,
            calendar=Calendar.HIJRI,
            iso_value=_hijri_iso(year, month, _day(match.group("day"))),
        )
    return build


def _build_gregorian_named(months: Dict[str, int]):
    def build(match: re.Match, common: Dict) -> ExtractedEntity:
        month = months[normalize_key(match.group("month"))]
        year = int(to_ascii_digits(match.group("year")))
        return DateEntity(
            **common,
            calendar=Calendar.GREGORIAN,
            iso_value=_iso(year, month, _day(match.group("day"))),
        )
    return build


def _build_gregorian_numeric(match: re.Match, common: Dict) -> ExtractedEntity:
    return DateEntity(
        **common,
        calendar=Calendar.GREGORIAN,
        iso_value=_iso(
            int(to_ascii_digits(match.group("year"))),
            int(to_ascii_digits(match.group("month"))),
            _day(match.group("day")),
        ),
    )


def _build_number(scope: NumberScope):
    def build(match: re.Match, common: Dict) -> ExtractedEntity:
        return NumberEntity(**common, number=_clean_number(match.group("number")), scope=scope)
    return build


def _build_institution(match: re.Match, common: Dict) -> ExtractedEntity:
    common["value"] = " ".join(match.group(0).split()).rstrip(" ,;:.")
    return InstitutionEntity(**common)


def _build_reference(match: re.Match, common: Dict) -> ExtractedEntity:
    common["value"] = match.group("body").strip().rstrip(" ;،.")
    return ReferenceEntity(**common)


_ARTICLE_ONE = {"1er", "premier", "premiere", "الأولى", "الاولى"}


def _build_article(match: re.Match, common: Dict) -> ExtractedEntity:
    raw_number = normalize_key(match.group("num"))
    number = "1" if raw_number in _ARTICLE_ONE else to_ascii_digits(raw_number)
    return ArticleEntity(**common, article_number=number)


def _build_annexe(match: re.Match, common: Dict) -> ExtractedEntity:
    return AnnexeEntity(**common)


def _build_signatory(match: re.Match, common: Dict) -> ExtractedEntity:
    common["value"] = match.group("name").strip().rstrip(" .")
    return SignatoryEntity(**common)


_FLAGS = re.IGNORECASE | re.MULTILINE

DEFAULT_RULES: Tuple[Tuple[str, EntityType, str, Callable], ...] = (
    (
        "publication_fr",
        EntityType.PUBLICATION_TYPE,
        rf"\b(?P<kind>{'|'.join(_FRENCH_PUBLICATION_KINDS)})\s+(?P<sep>{_NO})\s*(?P<number>{_NUMBER})"
        rf"(?:\s+du\s+[^\n]*?{_DIGIT}{{4}}(?:\s+correspondant\s+au\s+[^\n]*?{_DIGIT}{{4}})?)?"
        r"(?:[ \t]*,?[ \t]*(?P<title>[^\n]+))?",
        _build_publication,
    ),
    (
        "publication_ar",
        EntityType.PUBLICATION_TYPE,
        rf"(?P<kind>{_alternation(k for k in PUBLICATION_KINDS if not k.isascii())})\s+(?P<sep>رقم)\s*(?P<number>{_NUMBER})"
        r"(?:[^\n]*?(?P<title>(?:يتضمن|يتعلق|يحدد|يعدل|يتمم)[^\n]*))?",
        _build_publication,
    ),
    (
        "hijri_date_ar",
        EntityType.DATE,
        rf"(?P<day>{_DIGIT}{{1,2}})\s+(?P<month>{_alternation(HIJRI_MONTHS_AR)})\s+(?:عام\s+)?(?P<year>{_DIGIT}{{4}})",
        _build_hijri(HIJRI_MONTHS_AR),
    ),
    (
        "hijri_date_fr",
        EntityType.DATE,
        rf"(?P<day>{_DIGIT}{{1,2}})(?:er)?\s+(?P<month>{_alternation(HIJRI_MONTHS_FR)})\s+(?P<year>1[34]{_DIGIT}{{2}})",
        _build_hijri(HIJRI_MONTHS_FR),
    ),
    (
        "gregorian_date_fr",
        EntityType.DATE,
        _GREGORIAN_DATE_FR,
        _build_gregorian_named(FRENCH_MONTHS),
    ),
    (
        "gregorian_date_ar",
        EntityType.DATE,
        rf"(?P<day>{_DIGIT}{{1,2}})\s+(?P<month>{_alternation(ARABIC_GREGORIAN_MONTHS)})\s+(?:سنة\s+)?(?P<year>{_DIGIT}{{4}})",
        _build_gregorian_named(ARABIC_GREGORIAN_MONTHS),
    ),
    (
        "gregorian_date_numeric",
        EntityType.DATE,
        rf"(?<![0-9٠-٩])(?P<day>{_DIGIT}{{1,2}})[/.](?P<month>{_DIGIT}{{1,2}})[/.](?P<year>{_DIGIT}{{4}})(?![0-9٠-٩])",
        _build_gregorian_numeric,
    ),
    (
        "journal_number_fr",
        EntityType.NUMBER,
        rf"journal\s+officiel[^\n]{{0,60}}?{_NO}\s*(?P<number>{_DIGIT}+)",
        _build_number(NumberScope.JOURNAL),
    ),
    (
        "journal_number_ar",
        EntityType.NUMBER,
        rf"الجريدة\s+الرسمية[^\n]{{0,60}}?(?:رقم|العدد)\s*(?P<number>{_DIGIT}+)",
        _build_number(NumberScope.JOURNAL),
    ),
    (
        "reference_number_fr",
        EntityType.NUMBER,
        rf"{_NO}\s*(?P<number>{_NUMBER})",
        _build_number(NumberScope.REFERENCE),
    ),
    (
        "reference_number_ar",
        EntityType.NUMBER,
        rf"رقم\s*(?P<number>{_NUMBER})",
        _build_number(NumberScope.REFERENCE),
    ),
    (
        "institution_fr",
        EntityType.INSTITUTION,
        r"\b(?:pr[ée]sidence\s+de\s+la\s+r[ée]publique|premier\s+minist[èe]re|services\s+du\s+premier\s+ministre"
        r"|assembl[ée]e\s+populaire\s+nationale|conseil\s+de\s+la\s+nation|cour\s+constitutionnelle"
        r"|conseil\s+constitutionnel|banque\s+d'alg[ée]rie"
        r"|minist[èe]re\s+(?:de\s+la\s+|de\s+l'|des\s+|du\s+|de\s+)[^\n,.;]{3,80}"
        r"|direction\s+(?:g[ée]n[ée]rale\s+)?(?:de\s+la\s+|de\s+l'|des\s+|du\s+|de\s+)[^\n,.;]{3,80})",
        _build_institution,
    ),
    (
        "institution_ar",
        EntityType.INSTITUTION,
        r"(?:رئاسة\s+الجمهورية|الوزارة\s+الأولى|المجلس\s+الشعبي\s+الوطني|مجلس\s+الأمة|المحكمة\s+الدستورية"
        r"|بنك\s+الجزائر|وزارة\s+[^\n،.؛,]{2,60}|المديرية\s+العامة\s+[^\n،.؛,]{2,60})",
        _build_institution,
    ),
    (
        "reference_fr",
        EntityType.REFERENCE,
        r"^[ \t]*vu\s+(?P<body>[^\n]+)",
        _build_reference,
    ),
    (
        "reference_ar",
        EntityType.REFERENCE,
        r"^[ \t]*(?:و?بمقتضى|و?بناء\s+على)\s+(?P<body>[^\n]+)",
        _build_reference,
    ),
    (
        "article_fr",
        EntityType.ARTICLE,
        rf"^[ \t]*(?:article|art\.)\s+(?P<num>1er|premier|premi[èe]re|{_DIGIT}+)\b[^\n]*",
        _build_article,
    ),
    (
        "article_ar",
        EntityType.ARTICLE,
        rf"^[ \t]*المادة\s+(?P<num>الأولى|الاولى|{_DIGIT}+)[^\n]*",
        _build_article,
    ),
    (
        "annexe",
        EntityType.ANNEXE,
        r"^[ \t]*(?:annexe|الملحق)\b[^\n]*",
        _build_annexe,
    ),
    (
        "signatory_fr",
        EntityType.SIGNATORY,
        r"\bfait\s+[àa]\s+[^\n]+\n(?:[ \t]*\n)*[ \t]*(?P<name>[^\n]{2,80})",
        _build_signatory,
    ),
    (
        "signatory_ar",
        EntityType.SIGNATORY,
        r"حرر\s+ب[^\n]+\n(?:[ \t]*\n)*[ \t]*(?P<name>[^\n]{2,80})",
        _build_signatory,
    ),
)


def compile_rules(definitions=DEFAULT_RULES) -> Tuple[PatternRule, ...]:
    return tuple(
        PatternRule(name=name, entity_type=entity_type, pattern=re.compile(pattern, _FLAGS), build=build)
        for name, entity_type, pattern, build in definitions
    )


class EntityExtractor:
    """Applies the ordered rule set to aggregated text."""

    def __init__(self, rules: Sequence[PatternRule] | None = None):
        self._rules = tuple(rules) if rules is not None else compile_rules()

    @property
    def rules(self) -> Tuple[PatternRule, ...]:
        return self._rules

    def extract(
        self,
        text: str,
        page_offsets: Sequence[Tuple[int, int]] | None = None,
    ) -> List[ExtractedEntity]:
        """
        Extract entities in rule order, then source order within a rule.

        Args:
            text: Aggregated recognized text
            page_offsets: Sorted ``(char_offset, page_number)`` pairs marking where
                each page's text starts; entities default to page 1 without it
        """
        if not text:
            return []

        starts = [offset for offset, _ in page_offsets or ()]
        numbers = [page for _, page in page_offsets or ()]

        entities: List[ExtractedEntity] = []
        for rule in self._rules:
            for match in rule.pattern.finditer(text):
                common = _base(match, rule.entity_type, rule.name)
                common["page_number"] = self._page_for(match.start(), starts, numbers)
                try:
                    entities.append(rule.build(match, common))
                except (KeyError, ValueError) as exc:
                    logger.debug("Rule %s skipped match %r: %s", rule.name, match.group(0)[:60], exc)
        return entities

    @staticmethod
    def _page_for(position: int, starts: List[int], numbers: List[int]) -> int:
        if not starts:
            return 1
        index = bisect.bisect_right(starts, position) - 1
        return numbers[max(0, index)]

    @staticmethod
    def page_offsets(page_texts: Sequence[Tuple[int, str]], separator: str = "\n\n") -> List[Tuple[int, int]]:
        """Offsets of each page's text inside ``separator.join(texts)``."""
        offsets: List[Tuple[int, int]] = []
        cursor = 0
        for page_number, page_text in page_texts:
            offsets.append((cursor, page_number))
            cursor += len(page_text) + len(separator)
        return offsets
