# =============================================================================
# Application Configuration - Pydantic Settings
# =============================================================================
#
# Pydantic V2's `BaseSettings` loads values in this priority order:
#   1. Environment variables (e.g., `LLM_MODEL=...`)
#   2. Values from the .env file
#   3. Default values defined below
#
# USAGE:
#   from app.config import settings
#   print(settings.llm_model)
# =============================================================================

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Reference corpus shipped with the package
DEFAULT_CASE_STUDIES_PATH = Path(__file__).parent / "data" / "case_studies.txt"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development.
    Only the LLM API key has to be provided before analyses can run.
    """

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = "GCP Gap Analyzer"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # API Keys - External Services
    # -------------------------------------------------------------------------
    # These MUST be set via environment variables or .env file.
    # LLM_API_KEY wins over the provider-specific key when both are set.
    # -------------------------------------------------------------------------
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # -------------------------------------------------------------------------
    # LLM Configuration - Multi-Provider
    # -------------------------------------------------------------------------
    # Two providers are supported:
    #   - "openai_compatible": OpenAI or any OpenAI-compatible API
    #   - "anthropic": Claude via native Anthropic SDK
    #
    # Example configs:
    #   OpenAI:    provider=openai_compatible, model=gpt-4o-mini
    #   DeepSeek:  provider=openai_compatible, base_url=https://api.deepseek.com/v1, model=deepseek-chat
    #   Claude:    provider=anthropic, model=claude-sonnet-4-6
    #
    # The gap analysis wants near-deterministic output, so temperature
    # defaults to 0. Reports with every domain populated run long, hence
    # the 4000-token ceiling.
    # -------------------------------------------------------------------------
    llm_provider: str = "openai_compatible"  # "openai_compatible" or "anthropic"
    llm_base_url: str | None = None  # Only needed for non-OpenAI compatible APIs
    llm_api_key: str | None = None
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.0
    llm_max_tokens: int = 4000

    # -------------------------------------------------------------------------
    # Streaming
    # -------------------------------------------------------------------------
    # stream_timeout_seconds is a hard ceiling on the whole relay, measured
    # from the first upstream read. It is not reset by incoming fragments.
    # stream_per_character=False forwards upstream fragments as-is.
    # -------------------------------------------------------------------------
    stream_timeout_seconds: float = 240.0
    stream_per_character: bool = True
    default_response_mode: Literal["stream", "buffered"] = "stream"

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------
    # pdf_ocr_enabled turns on Docling's OCR pass for scanned PDFs. It is
    # off by default: OCR dominates extraction time on text-based PDFs.
    # -------------------------------------------------------------------------
    case_studies_path: str = str(DEFAULT_CASE_STUDIES_PATH)
    max_upload_bytes: int = 25 * 1024 * 1024
    pdf_ocr_enabled: bool = False

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Module-level convenience instance
# ---------------------------------------------------------------------------
settings = Settings()
