"""
Core settings and environment variables for Civic Report Hub.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional, Union


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Civic Report Hub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # CORS - comma-separated origins, "*" allows any origin
    CORS_ORIGINS: str = "*"

    # Durable store: one JSON file holding every report
    REPORTS_DB_PATH: str = "./reports.json"

    # Optional front-end bundle served from this directory (index.html fallback)
    STATIC_DIR: Optional[str] = None

    # Fine issuance amounts (applied together by the fine transition)
    FINE_AMOUNT: Union[int, float] = 600
    REWARD_AMOUNT: Union[int, float] = 500

    # Workflow
    STRICT_SUBMISSION: bool = True  # Reject submissions with empty required fields
    ALLOW_STATUS_OVERRIDE: bool = False  # Admin path that bypasses the transition table

    # Uploaded images arrive base64-encoded inside the JSON body
    MAX_REQUEST_BODY_MB: int = 10

    # AI Configuration
    AI_ENABLED: bool = True  # If False, only the rule-based provider answers
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash-latest"
    GEMINI_API_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    AI_TIMEOUT_SECONDS: float = 15.0
    CITY_NAME: str = "Agra, India"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def max_image_chars(self) -> int:
        return self.MAX_REQUEST_BODY_MB * 1024 * 1024


# Global settings instance
settings = Settings()
