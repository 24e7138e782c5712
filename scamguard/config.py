from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================
    environment: str = "dev"  # "dev", "prod"
    debug: bool = True
    log_file: Optional[str] = None  # Extra JSON log file, e.g. "logs/scamguard.log"

    # ==========================================================================
    # GEMINI (OpenAI-compatible endpoint)
    # ==========================================================================
    gemini_api_key: str = ""
    gemini_model: str = "gemini-flash-latest"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    llm_timeout: float = 30.0  # Seconds before the pitch analyzer gives up
    llm_max_tokens: int = 1500

    # ==========================================================================
    # API SECURITY
    # ==========================================================================
    api_token: str = ""  # Required in production, optional in dev
    api_token_header: str = "X-API-Key"

    # ==========================================================================
    # RATE LIMITING
    # ==========================================================================
    rate_limit_requests: int = 60  # Max requests per window
    rate_limit_window: int = 60  # Window in seconds (60 = per minute)

    # ==========================================================================
    # CORS
    # ==========================================================================
    cors_origins: str = "*"  # Comma-separated origins, or "*" for all

    # ==========================================================================
    # IMAGE UPLOADS / OCR
    # ==========================================================================
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MB
    accepted_image_types: str = "image/png,image/jpeg,image/webp,image/bmp,image/gif"
    ocr_language: str = "eng"
    tesseract_cmd: Optional[str] = None  # Override when tesseract is not on PATH
    ocr_min_text_length: int = 3  # Shorter OCR output counts as "no text found"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "prod"

    @property
    def cors_origins_list(self) -> list:
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def accepted_image_types_list(self) -> List[str]:
        return [t.strip().lower() for t in self.accepted_image_types.split(",") if t.strip()]

    @property
    def max_upload_megabytes(self) -> int:
        return self.max_upload_bytes // (1024 * 1024)


settings = Settings()
