"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-5-mini"
    openai_reasoning_effort: str | None = "low"
    openai_transcription_model: str = "gpt-4o-mini-transcribe"
    openai_tts_model: str = "gpt-4o-mini-tts"
    openai_tts_voice: str = "alloy"
    openai_image_model: str = "gpt-image-1"
    use_live_speech: bool = False
    use_live_generation: bool = False
    session_max_turns: int = 12
    session_min_transcript_chars: int = 3
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def live_speech_enabled(self) -> bool:
        """Return true when live speech calls are configured."""
        return self.use_live_speech and bool(self.openai_api_key)

    @property
    def live_generation_enabled(self) -> bool:
        """Return true when live text and image generation is configured."""
        return self.use_live_generation and bool(self.openai_api_key)
