"""Enumerations describing extracted legal entities."""
from __future__ import annotations

from enum import Enum


class EntityType(str, Enum):
    PUBLICATION_TYPE = "publication_type"
    DATE = "date"
    NUMBER = "number"
    INSTITUTION = "institution"
    REFERENCE = "reference"
    ARTICLE = "article"
    ANNEXE = "annexe"
    SIGNATORY = "signatory"


class PublicationKind(str, Enum):
    LOI = "loi"
    ORDONNANCE = "ordonnance"
    DECRET = "decret"
    DECRET_EXECUTIF = "decret_executif"
    DECRET_PRESIDENTIEL = "decret_presidentiel"
    ARRETE = "arrete"
    ARRETE_INTERMINISTERIEL = "arrete_interministeriel"
    DECISION = "decision"
    CIRCULAIRE = "circulaire"
    INSTRUCTION = "instruction"


class Calendar(str, Enum):
    GREGORIAN = "gregorian"
    HIJRI = "hijri"


class NumberScope(str, Enum):
    """Whether a number identifies the gazette issue or a cited text."""
    JOURNAL = "journal"
    REFERENCE = "reference"
