"""Pydantic models for API request and response payloads."""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from craftstory.domain.questions import FlowKind
from craftstory.domain.sessions import SessionSnapshot


class TranscribeRequest(BaseModel):
    """Audio upload for transcription."""

    audio_data: str = Field(min_length=1)
    language_code: str = "en"


class SpeechRequest(BaseModel):
    """Text to synthesize."""

    text: str = Field(min_length=1)
    language_code: str = "en"


class GenerationAction(StrEnum):
    """Supported generation actions."""

    EXTRACT_FIELD = "extract_field"
    GENERATE_BIO = "generate_bio"
    GENERATE_PRODUCT_SUMMARY = "generate_product_summary"
    GENERATE_HASHTAGS = "generate_hashtags"
    TRANSLATE = "translate"
    CONVERSATIONAL_RESPONSE = "conversational_response"
    VISUALIZE_STORY = "visualize_story"
    TEST_CONNECTION = "test_connection"


class GenerationRequest(BaseModel):
    """Generation action and its payload."""

    action: GenerationAction
    language_code: str = "en"
    transcript: str | None = None
    flow: FlowKind | None = None
    question_id: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    text: str | None = None
    from_language: str | None = None
    to_language: str | None = None
    context: str = "general"
    history: list[str] = Field(default_factory=list)
    story: str | None = None
    style: str = "traditional"


class StartSessionRequest(BaseModel):
    """Start a voice session for the authenticated caller."""

    flow: FlowKind
    language_code: str = "en"


class AnswerRequest(BaseModel):
    """Answer for the current question, as audio or as text."""

    audio_data: str | None = None
    transcript: str | None = None

    @model_validator(mode="after")
    def _require_one(self) -> "AnswerRequest":
        if (self.audio_data is None) == (self.transcript is None):
            raise ValueError("Provide exactly one of audio_data or transcript")
        return self


class PromptPayload(BaseModel):
    """Next user-facing utterance."""

    text: str
    audio_data_uri: str | None = None


class SessionTurnResponse(BaseModel):
    """Result of a session turn."""

    outcome: str
    prompt: PromptPayload | None = None
    transcript: str | None = None
    snapshot: SessionSnapshot


class CraftPayload(BaseModel):
    """Editable craft fields."""

    title: str | None = None
    description: str | None = None
    materials: list[str] | None = None
    techniques: list[str] | None = None
    story: str | None = None
    cultural_context: str | None = None
    price: str | None = None
    location: str | None = None
    tags: list[str] | None = None
    images: list[str] | None = None
    summary: str | None = None


class PublishRequest(BaseModel):
    """Publish toggle."""

    is_published: bool


class InteractionRequest(BaseModel):
    """Discovery feed interaction."""

    kind: Literal["view", "like", "save", "share"]


class UserUpdateRequest(BaseModel):
    """Updatable user fields."""

    role: str | None = None
    language_code: str | None = None
    favorites: list[str] | None = None
