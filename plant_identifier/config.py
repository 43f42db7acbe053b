# plant_identifier/config.py
import os
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application configuration based on environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API configuration
    API_PREFIX: str = "/api"

    # CORS configuration (Frontend URLs)
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8501",  # Streamlit dev server
    ]

    # Gemini credential and model
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-pro"

    # Language of the prompt, the model answer and the UI
    LOCALE: str = "pt-BR"

    # Upper bound for the model call (seconds)
    MODEL_TIMEOUT_SECONDS: float = 60.0

    # Maximum decoded image size (in bytes)
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MB

    # Debug mode
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # Client side (Streamlit page)
    API_BASE_URL: str = "http://localhost:8000"
    CLIENT_TIMEOUT_SECONDS: float = 90.0
    # "browser": st.camera_input on the user's device; "local": OpenCV device on this host
    CAMERA_SOURCE: str = "browser"
    CAMERA_INDEX: int = 0
    CAMERA_WIDTH: int = 1280
    CAMERA_HEIGHT: int = 720
    JPEG_QUALITY: int = 92


@lru_cache()
def get_settings() -> Settings:
    """Return settings with caching"""
    return Settings()
