from gazette.config import Settings, get_settings


def test_defaults():
    settings = Settings()

    assert settings.border_band_ratio == 0.10
    assert settings.table_min_width == 100
    assert settings.ocr_max_concurrency == 4
    assert settings.confidence_low_threshold == 0.4


def test_aliases_and_environment(monkeypatch):
    monkeypatch.setenv("OCR_TIMEOUT_SECONDS", "7.5")

    settings = Settings(TABLE_MIN_CELL_SIZE=30)

    assert settings.ocr_timeout_seconds == 7.5
    assert settings.table_min_cell_size == 30


def test_ensure_endpoint_normalizes_trailing_slash():
    assert Settings(AZURE_OPENAI_ENDPOINT=" https://x.openai.azure.com// ").ensure_endpoint() == "https://x.openai.azure.com/"
    assert Settings(AZURE_OPENAI_ENDPOINT="").ensure_endpoint() == ""


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
