"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from craftstory.api.auth import router as auth_router
from craftstory.api.crafts import router as crafts_router
from craftstory.api.models import (
    GenerationAction,
    GenerationRequest,
    SpeechRequest,
    TranscribeRequest,
)
from craftstory.api.sessions import router as sessions_router
from craftstory.app_logging import configure_logging
from craftstory.containers import AppContainer
from craftstory.domain.questions import SCRIPTS, Question
from craftstory.services.generation import GenerationService


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting CraftStory API",
            extra={
                "environment": container.settings.environment,
                "live_speech": container.settings.live_speech_enabled,
                "live_generation": container.settings.live_generation_enabled,
            },
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(crafts_router)
    app.include_router(sessions_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/speech/transcribe")
    async def transcribe(
        payload: TranscribeRequest, request: Request
    ) -> dict[str, str]:
        """Transcribe an uploaded recording."""
        state_container: AppContainer = request.app.state.container
        transcript = await state_container.speech_service.transcribe(
            payload.audio_data, payload.language_code
        )
        return {"transcript": transcript}

    @app.post("/speech/tts")
    async def text_to_speech(
        payload: SpeechRequest, request: Request
    ) -> dict[str, str | None]:
        """Synthesize speech for a piece of text."""
        state_container: AppContainer = request.app.state.container
        audio = await state_container.speech_service.synthesize(
            payload.text, payload.language_code
        )
        return {"audio_data_uri": audio}

    @app.post("/generation/process")
    async def process_generation(
        payload: GenerationRequest, request: Request
    ) -> dict[str, object]:
        """Run one generation action."""
        state_container: AppContainer = request.app.state.container
        result = await _run_generation(state_container.generation_service, payload)
        return {"success": True, "action": payload.action.value, "result": result}

    return app


async def _run_generation(  # noqa: PLR0911
    service: GenerationService, payload: GenerationRequest
) -> object:
    language = payload.language_code
    action = payload.action
    if action is GenerationAction.EXTRACT_FIELD:
        question = _resolve_question(payload)
        return await service.extract_field(
            _required(payload.transcript, "transcript"),
            question,
            language,
            payload.data,
        )
    if action is GenerationAction.GENERATE_BIO:
        return await service.generate_bio(payload.data, language)
    if action is GenerationAction.GENERATE_PRODUCT_SUMMARY:
        return await service.generate_product_summary(payload.data, language)
    if action is GenerationAction.GENERATE_HASHTAGS:
        return await service.generate_hashtags(payload.data)
    if action is GenerationAction.TRANSLATE:
        return await service.translate(
            _required(payload.text, "text"),
            payload.from_language or language,
            _required(payload.to_language, "to_language"),
        )
    if action is GenerationAction.CONVERSATIONAL_RESPONSE:
        return await service.conversational_response(
            _required(payload.text, "text"),
            payload.context,
            payload.history,
            language,
        )
    if action is GenerationAction.VISUALIZE_STORY:
        image = await service.visualize_story(
            _required(payload.story, "story"), payload.style
        )
        return asdict(image)
    return asdict(await service.test_connection())


def _resolve_question(payload: GenerationRequest) -> Question:
    if payload.flow is None or payload.question_id is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="extract_field requires flow and question_id",
        )
    for question in SCRIPTS[payload.flow].questions:
        if question.id == payload.question_id:
            return question
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Unknown question: {payload.question_id}",
    )


def _required(value: str | None, name: str) -> str:
    if not value:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Missing {name}",
        )
    return value
