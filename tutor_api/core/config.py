"""
tutor_api/core/config.py

Centralised configuration loaded from environment variables.
Use a .env file locally; the deployment injects these at runtime.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── Application ────────────────────────────────────────────────────────────
    app_name: str = "ME AI Tutor API"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # ── OpenAI ─────────────────────────────────────────────────────────────────
    openai_api_key: str = ""
    openai_base_url: Optional[str] = None
    gpt_model: str = "gpt-4o"
    gpt_temperature: float = 0.3          # tutor chat only; other prompts pin their own
    vision_model: str = "gpt-4o"
    transcription_model: str = "whisper-1"

    # ── Files ──────────────────────────────────────────────────────────────────
    upload_dir: str = "uploads"
    client_dir: str = "client"

    # ── HTTP ───────────────────────────────────────────────────────────────────
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Single shared instance; import this everywhere.
settings = Settings()
