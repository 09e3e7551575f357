from __future__ import annotations

# Single source of truth for static constants and versions.

SERIALIZATION_VERSION = 1

# Discrete confidence levels the OCR model reports on.
CONFIDENCE_STEPS = [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]

# Human review adjustments on mapped fields.
ACCEPT_CONFIDENCE_MULTIPLIER = 1.1
ACCEPT_CONFIDENCE_CAP = 0.95
EDIT_CONFIDENCE_MULTIPLIER = 0.9
EDIT_CONFIDENCE_FLOOR = 0.7

# Fixed confidences per entity pattern family.
ENTITY_CONFIDENCE = {
  "publication_type": 0.9,
  "number": 0.9,
  "date": 0.8,
  "institution": 0.85,
  "reference": 0.8,
  "article": 0.85,
  "annexe": 0.75,
  "signatory": 0.7,
}

# Confidence recorded for a region whose OCR call failed or timed out.
FAILED_REGION_CONFIDENCE = 0.0

# Share of Arabic-script letters separating fr / mixed / ar text.
ARABIC_DOMINANT_RATIO = 0.7
ARABIC_MINOR_RATIO = 0.2
