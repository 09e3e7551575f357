from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Ensure environment variables from the repository root .env are available
# regardless of the working directory used to start the process.
ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")


class Settings(BaseSettings):
  # Line detection
  line_min_length: int = Field(default=50, alias="LINE_MIN_LENGTH")
  line_max_gap: int = Field(default=10, alias="LINE_MAX_GAP")
  line_hough_threshold: int = Field(default=50, alias="LINE_HOUGH_THRESHOLD")
  line_angle_tolerance_deg: float = Field(default=10.0, alias="LINE_ANGLE_TOLERANCE_DEG")
  line_merge_tolerance: int = Field(default=5, alias="LINE_MERGE_TOLERANCE")
  line_confidence_saturation: int = Field(default=400, alias="LINE_CONFIDENCE_SATURATION")
  line_max_thickness: int = Field(default=25, alias="LINE_MAX_THICKNESS")

  # Border elimination
  border_band_ratio: float = Field(default=0.10, alias="BORDER_BAND_RATIO")
  border_top_cap: int = Field(default=3, alias="BORDER_TOP_CAP")
  border_bottom_cap: int = Field(default=2, alias="BORDER_BOTTOM_CAP")
  border_side_cap: int = Field(default=2, alias="BORDER_SIDE_CAP")
  border_safety_margin: int = Field(default=5, alias="BORDER_SAFETY_MARGIN")
  border_fallback_margin_ratio: float = Field(default=0.05, alias="BORDER_FALLBACK_MARGIN_RATIO")
  border_min_content_size: int = Field(default=100, alias="BORDER_MIN_CONTENT_SIZE")

  # Table detection
  table_intersection_tolerance: int = Field(default=5, alias="TABLE_INTERSECTION_TOLERANCE")
  table_min_width: int = Field(default=100, alias="TABLE_MIN_WIDTH")
  table_min_height: int = Field(default=60, alias="TABLE_MIN_HEIGHT")
  table_min_cell_size: int = Field(default=20, alias="TABLE_MIN_CELL_SIZE")
  table_expected_cell_area: int = Field(default=20000, alias="TABLE_EXPECTED_CELL_AREA")

  # Text zones
  zone_center_band_ratio: float = Field(default=0.10, alias="ZONE_CENTER_BAND_RATIO")
  zone_min_separator_ratio: float = Field(default=0.6, alias="ZONE_MIN_SEPARATOR_RATIO")
  zone_carve_around_tables: bool = Field(default=False, alias="ZONE_CARVE_AROUND_TABLES")

  # OCR collaborator
  ocr_max_concurrency: int = Field(default=4, alias="OCR_MAX_CONCURRENCY")
  ocr_timeout_seconds: float = Field(default=30.0, alias="OCR_TIMEOUT_SECONDS")
  ocr_language_hint: str = Field(default="auto", alias="OCR_LANGUAGE_HINT")

  # Review
  confidence_low_threshold: float = Field(default=0.4, alias="CONFIDENCE_LOW_THRESHOLD")

  # Azure OpenAI OCR adapter
  azure_openai_api_key: str | None = Field(default=None, alias="AZURE_OPENAI_API_KEY")
  azure_openai_endpoint: str = Field(default="", alias="AZURE_OPENAI_ENDPOINT")
  azure_openai_api_version: str = Field(default="2024-12-01-preview", alias="AZURE_OPENAI_API_VERSION")
  azure_openai_deployment_name: str | None = Field(default=None, alias="AZURE_OPENAI_DEPLOYMENT_NAME")
  azure_openai_vision_model: str | None = Field(default=None, alias="AZURE_OPENAI_VISION_MODEL")

  def ensure_endpoint(self) -> str:
    endpoint = (self.azure_openai_endpoint or "").strip()
    if not endpoint:
      return ""
    return endpoint.rstrip("/") + "/"

  class Config:
    case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  return Settings()  # type: ignore[arg-type]
