# storycomic/config/settings.py
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AnyHttpUrl
from typing import Optional

# settings.py lives at storycomic/config/, so the project root is two levels up
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_PATH = PROJECT_ROOT / '.env'

DEFAULT_SEGMENTATION_PROMPT = (
    "Split this story into distinct parts suitable for creating a comic book: {story}"
)


class Settings(BaseSettings):
    """Application settings model"""
    # .env is optional; env variable names are case-insensitive
    model_config = SettingsConfigDict(env_file=ENV_FILE_PATH, extra='ignore', case_sensitive=False)

    # --- Application ---
    APP_NAME: str = "Story Comic Service"
    APP_VERSION: str = "0.1.0"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_CONFIG_PATH: Optional[str] = Field(str(PROJECT_ROOT / "logging_config.yaml"))

    # --- Credential shared by both outbound services ---
    OPENAI_API_KEY: Optional[str] = Field(None)

    # --- Completion service (story segmentation) ---
    LLM_API_ENDPOINT: AnyHttpUrl = Field("https://api.openai.com/v1/completions")
    LLM_MODEL: str = "text-davinci-003"
    LLM_MAX_TOKENS: int = 300
    LLM_API_TIMEOUT: int = 60
    SEGMENTATION_PROMPT_TEMPLATE: str = DEFAULT_SEGMENTATION_PROMPT

    # --- Image generation service ---
    IMAGE_API_ENDPOINT: AnyHttpUrl = Field("https://api.openai.com/v1/images/generations")
    IMAGE_COUNT: int = 1
    IMAGE_SIZE: str = "1024x1024"
    IMAGE_API_TIMEOUT: int = 120
