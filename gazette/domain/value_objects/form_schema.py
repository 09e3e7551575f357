"""Target document schemas that extracted entities are mapped onto."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, FrozenSet, Optional, Tuple

from gazette.domain.exceptions import UnknownFormType
from .entity_type import Calendar, EntityType, NumberScope, PublicationKind


class FormType(str, Enum):
    LAW = "law"
    DECREE = "decree"
    ORDER = "order"
    CIRCULAR = "circular"
    GAZETTE_ISSUE = "gazette_issue"

    @classmethod
    def parse(cls, raw: FormType | str) -> FormType:
        """
        Resolve a form type identifier, rejecting anything outside the enumeration.

        Examples:
            >>> FormType.parse("decree")
            <FormType.DECREE: 'decree'>
            >>> FormType.parse("gazette-issue")
            <FormType.GAZETTE_ISSUE: 'gazette_issue'>
        """
        if isinstance(raw, FormType):
            return raw
        normalized = str(raw or "").strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise UnknownFormType(str(raw)) from None


class FieldKind(str, Enum):
    """Shape of the value a mapped field holds."""
    TEXT = "text"
    IDENTIFIER = "identifier"
    DATE = "date"
    LIST = "list"
    COUNT = "count"


class FieldSelector(str, Enum):
    """How a field picks among several candidate entities."""
    FIRST = "first"
    LAST = "last"
    BEST = "best"
    NEAREST_TO_ANCHOR = "nearest_to_anchor"
    ANCHOR = "anchor"
    ALL = "all"
    COUNT = "count"


@dataclass(frozen=True)
class FormFieldDefinition:
    """One slot of a target schema and the rule that fills it."""

    name: str
    label: str
    kind: FieldKind
    entity_type: EntityType
    selector: FieldSelector
    order: int
    required: bool = False
    attribute: str = "value"
    calendar: Optional[Calendar] = None
    scope: Optional[NumberScope] = None


@dataclass(frozen=True)
class FormSchema:
    form_type: FormType
    label: str
    publication_kinds: FrozenSet[PublicationKind]
    fields: Tuple[FormFieldDefinition, ...]

    def field(self, name: str) -> Optional[FormFieldDefinition]:
        for definition in self.fields:
            if definition.name == name:
                return definition
        return None

    def required_fields(self) -> Tuple[FormFieldDefinition, ...]:
        return tuple(definition for definition in self.fields if definition.required)


def _field(
    name: str,
    label: str,
    kind: FieldKind,
    entity_type: EntityType,
    selector: FieldSelector,
    order: int,
    **options,
) -> FormFieldDefinition:
    return FormFieldDefinition(
        name=name,
        label=label,
        kind=kind,
        entity_type=entity_type,
        selector=selector,
        order=order,
        **options,
    )


def _legal_text_fields(number_label: str) -> Tuple[FormFieldDefinition, ...]:
    """Field layout shared by laws, decrees and orders (10 fields)."""
    return (
        _field("title", "Titre", FieldKind.TEXT, EntityType.PUBLICATION_TYPE, FieldSelector.ANCHOR, 1,
               required=True, attribute="title"),
        _field("number", number_label, FieldKind.IDENTIFIER, EntityType.PUBLICATION_TYPE, FieldSelector.ANCHOR, 2,
               required=True, attribute="reference_number"),
        _field("hijri_date", "Date hégirienne", FieldKind.DATE, EntityType.DATE, FieldSelector.NEAREST_TO_ANCHOR, 3,
               calendar=Calendar.HIJRI),
        _field("gregorian_date", "Date grégorienne", FieldKind.DATE, EntityType.DATE, FieldSelector.NEAREST_TO_ANCHOR, 4,
               required=True, calendar=Calendar.GREGORIAN, attribute="iso_value"),
        _field("institution", "Institution", FieldKind.TEXT, EntityType.INSTITUTION, FieldSelector.FIRST, 5,
               required=True),
        _field("signatory", "Signataire", FieldKind.TEXT, EntityType.SIGNATORY, FieldSelector.LAST, 6),
        _field("references", "Visas", FieldKind.LIST, EntityType.REFERENCE, FieldSelector.ALL, 7),
        _field("first_article", "Article premier", FieldKind.TEXT, EntityType.ARTICLE, FieldSelector.FIRST, 8),
        _field("article_count", "Nombre d'articles", FieldKind.COUNT, EntityType.ARTICLE, FieldSelector.COUNT, 9,
               attribute="article_number"),
        _field("annexe", "Annexe", FieldKind.TEXT, EntityType.ANNEXE, FieldSelector.FIRST, 10),
    )


LAW_SCHEMA = FormSchema(
    form_type=FormType.LAW,
    label="Loi",
    publication_kinds=frozenset({PublicationKind.LOI}),
    fields=_legal_text_fields("Numéro de loi"),
)

DECREE_SCHEMA = FormSchema(
    form_type=FormType.DECREE,
    label="Décret",
    publication_kinds=frozenset({
        PublicationKind.DECRET,
        PublicationKind.DECRET_EXECUTIF,
        PublicationKind.DECRET_PRESIDENTIEL,
    }),
    fields=_legal_text_fields("Numéro de décret"),
)

ORDER_SCHEMA = FormSchema(
    form_type=FormType.ORDER,
    label="Ordonnance / Arrêté",
    publication_kinds=frozenset({
        PublicationKind.ORDONNANCE,
        PublicationKind.ARRETE,
        PublicationKind.ARRETE_INTERMINISTERIEL,
        PublicationKind.DECISION,
    }),
    fields=_legal_text_fields("Numéro"),
)

CIRCULAR_SCHEMA = FormSchema(
    form_type=FormType.CIRCULAR,
    label="Circulaire",
    publication_kinds=frozenset({PublicationKind.CIRCULAIRE, PublicationKind.INSTRUCTION}),
    fields=(
        _field("title", "Objet", FieldKind.TEXT, EntityType.PUBLICATION_TYPE, FieldSelector.ANCHOR, 1,
               required=True, attribute="title"),
        _field("number", "Numéro", FieldKind.IDENTIFIER, EntityType.PUBLICATION_TYPE, FieldSelector.ANCHOR, 2,
               attribute="reference_number"),
        _field("gregorian_date", "Date", FieldKind.DATE, EntityType.DATE, FieldSelector.NEAREST_TO_ANCHOR, 3,
               required=True, calendar=Calendar.GREGORIAN, attribute="iso_value"),
        _field("institution", "Émetteur", FieldKind.TEXT, EntityType.INSTITUTION, FieldSelector.FIRST, 4,
               required=True),
        _field("references", "Références", FieldKind.LIST, EntityType.REFERENCE, FieldSelector.ALL, 5),
        _field("signatory", "Signataire", FieldKind.TEXT, EntityType.SIGNATORY, FieldSelector.LAST, 6),
    ),
)

GAZETTE_ISSUE_SCHEMA = FormSchema(
    form_type=FormType.GAZETTE_ISSUE,
    label="Numéro du Journal officiel",
    publication_kinds=frozenset(PublicationKind),
    fields=(
        _field("journal_number", "Numéro du journal", FieldKind.IDENTIFIER, EntityType.NUMBER, FieldSelector.FIRST, 1,
               required=True, scope=NumberScope.JOURNAL, attribute="number"),
        _field("journal_date", "Date de parution", FieldKind.DATE, EntityType.DATE, FieldSelector.FIRST, 2,
               required=True, calendar=Calendar.GREGORIAN, attribute="iso_value"),
        _field("hijri_date", "Date hégirienne", FieldKind.DATE, EntityType.DATE, FieldSelector.FIRST, 3,
               calendar=Calendar.HIJRI),
        _field("publications", "Textes publiés", FieldKind.LIST, EntityType.PUBLICATION_TYPE, FieldSelector.ALL, 4),
        _field("publication_count", "Nombre de textes", FieldKind.COUNT, EntityType.PUBLICATION_TYPE,
               FieldSelector.COUNT, 5),
        _field("institutions", "Institutions", FieldKind.LIST, EntityType.INSTITUTION, FieldSelector.ALL, 6),
    ),
)


class FormSchemaRegistry:
    """Lookup of the fixed schema set by form type."""

    _schemas: ClassVar[Dict[FormType, FormSchema]] = {
        schema.form_type: schema
        for schema in (LAW_SCHEMA, DECREE_SCHEMA, ORDER_SCHEMA, CIRCULAR_SCHEMA, GAZETTE_ISSUE_SCHEMA)
    }

    @classmethod
    def get(cls, form_type: FormType | str) -> FormSchema:
        return cls._schemas[FormType.parse(form_type)]

    @classmethod
    def all(cls) -> Tuple[FormSchema, ...]:
        return tuple(cls._schemas.values())
