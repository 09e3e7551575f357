"""Azure OpenAI adapter for the OCR collaborator."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import numpy as np
from azure.identity import DefaultAzureCredential, get_bearer_token_provider
from openai import APITimeoutError, AzureOpenAI, OpenAIError

from gazette.config import Settings, get_settings
from gazette.domain.exceptions import ConfigurationError, ExtractionFailure, ExtractionTimeout
from gazette.domain.value_objects.language import LanguageHint
from gazette.domain.value_objects.ocr_result import OcrResult
from gazette.infrastructure.imaging.raster import region_to_data_url

from .ocr_prompt_builder import OcrPromptAttempt, build_prompt_attempts
from .ocr_response_parser import OcrResponseParser

logger = logging.getLogger(__name__)


class AzureOpenAIOcrClient:
    """Recognizes text in one raster region per call."""

    def __init__(
        self,
        *,
        client: Optional[AzureOpenAI] = None,
        parser: Optional[OcrResponseParser] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        endpoint = settings.ensure_endpoint()
        model = settings.azure_openai_vision_model or settings.azure_openai_deployment_name

        if client is None and not endpoint:
            raise ConfigurationError(
                "AZURE_OPENAI_ENDPOINT must be configured before using the OCR client",
                setting="AZURE_OPENAI_ENDPOINT",
            )
        if not model:
            raise ConfigurationError(
                "AZURE_OPENAI_VISION_MODEL or AZURE_OPENAI_DEPLOYMENT_NAME must be configured",
                setting="AZURE_OPENAI_VISION_MODEL",
            )

        if client is not None:
            self._client = client
        elif settings.azure_openai_api_key:
            self._client = AzureOpenAI(
                api_key=settings.azure_openai_api_key,
                api_version=settings.azure_openai_api_version,
                azure_endpoint=endpoint,
            )
        else:
            token_provider = get_bearer_token_provider(
                DefaultAzureCredential(),
                "https://cognitiveservices.azure.com/.default",
            )
            self._client = AzureOpenAI(
                api_version=settings.azure_openai_api_version,
                azure_endpoint=endpoint,
                azure_ad_token_provider=token_provider,
            )

        self._model = model
        self._timeout = settings.ocr_timeout_seconds
        self._parser = parser or OcrResponseParser()

    def recognize(self, region: np.ndarray, language: LanguageHint = LanguageHint.AUTO) -> OcrResult:
        """Transcribe ``region``.

        Raises ExtractionTimeout when the service does not answer in time and
        ExtractionFailure for any other transport error or an unusable reply.
        """
        attempts = build_prompt_attempts(region_to_data_url(region), language)
        try:
            result = self._run_attempts(attempts)
        except APITimeoutError as exc:
            raise ExtractionTimeout(f"OCR request timed out after {self._timeout}s", exc)
        except OpenAIError as exc:
            raise ExtractionFailure(f"OCR request failed: {exc}", exc)

        if result is None:
            raise ExtractionFailure("OCR model returned no usable payload")
        return result

    def _run_attempts(self, attempts: List[OcrPromptAttempt]) -> Optional[OcrResult]:
        content: Optional[str] = None
        for attempt in attempts:
            content = self._invoke_model(attempt)
            if content:
                result = self._parser.parse(content)
                if result is not None:
                    return result
                logger.debug("OCR attempt yielded invalid JSON (force_json=%s): %.200s", attempt.force_json, content)

        if content:
            logger.warning("Failed to parse OCR payload after %d attempts", len(attempts))
        return None

    def _invoke_model(self, attempt: OcrPromptAttempt) -> Optional[str]:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": attempt.messages,
            "max_completion_tokens": 4000,
            "timeout": self._timeout,
        }
        if attempt.force_json:
            kwargs["response_format"] = {"type": "json_object"}

        response = self._client.chat.completions.create(**kwargs)
        content = response.choices[0].message.content if response.choices else None
        return content or None
