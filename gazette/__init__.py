"""Gazette page decomposition and field mapping pipeline."""

__version__ = "0.1.0"
