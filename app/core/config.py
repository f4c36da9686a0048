"""
Configuration management for the YouTube SEO Optimizer.
Centralizes environment variable handling and application settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    DEVELOPMENT_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
    PRODUCTION_ORIGINS = ["https://your-frontend-domain.com"]

    def __init__(self):
        # API Configuration
        self.api_title = "YouTube SEO Optimizer"
        self.api_description = (
            "Fetches YouTube video metadata and transcripts and turns them into "
            "SEO titles, descriptions, tags, summaries and hashtags"
        )
        self.api_version = "1.0.0"
        self.environment = os.getenv("APP_ENV", "development").lower()

        # Server
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "3000"))

        # External API Keys
        self.openai_api_key = os.getenv("OPENAI_API_KEY", "")
        self.openai_model = os.getenv("OPENAI_MODEL", "gpt-4")
        self.youtube_api_key = os.getenv("YOUTUBE_API_KEY", "")
        self.provider_timeout = int(os.getenv("PROVIDER_TIMEOUT", "30"))  # seconds
        self.transcript_languages = _split_csv(os.getenv("TRANSCRIPT_LANGUAGES", "en"))

        # CORS
        origins_override = os.getenv("ALLOWED_ORIGINS", "")
        if origins_override:
            self.allowed_origins = _split_csv(origins_override)
        elif self.is_production:
            self.allowed_origins = list(self.PRODUCTION_ORIGINS)
        else:
            self.allowed_origins = list(self.DEVELOPMENT_ORIGINS)

        # Rate Limiting
        self.rate_limit_max_requests = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))
        self.rate_limit_window_seconds = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))  # 15 minutes
        self.rate_limit_message = "Too many requests from this IP, please try again later."

        # Bulk Processing
        self.max_urls_per_batch = int(os.getenv("MAX_URLS_PER_BATCH", "10"))
        self.bulk_delay_seconds = float(os.getenv("BULK_DELAY_SECONDS", "1.0"))

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_format = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def debug_mode(self) -> bool:
        """Verbose error bodies and hot reload outside production."""
        return not self.is_production


# Create global settings instance
settings = Settings()
