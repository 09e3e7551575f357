"""Application services orchestrating page geometry, OCR and extraction."""

from .document_extractor import DocumentExtractor
from .page_assembler import AssembledPage, OcrClient, PageAssembler
from .page_layout_analyzer import PageLayoutAnalyzer

__all__ = [
    "AssembledPage",
    "DocumentExtractor",
    "OcrClient",
    "PageAssembler",
    "PageLayoutAnalyzer",
]
