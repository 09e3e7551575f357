"""OCR infrastructure adapters."""

from .azure_ocr_client import AzureOpenAIOcrClient
from .ocr_prompt_builder import DEFAULT_PROMPT_TEMPLATE, build_prompt_attempts
from .ocr_response_parser import OcrResponseParser

__all__ = [
    "AzureOpenAIOcrClient",
    "OcrResponseParser",
    "build_prompt_attempts",
    "DEFAULT_PROMPT_TEMPLATE",
]
