"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from craftstory.adapters.canned_clients import (
    CannedSynthesizer,
    CannedTranscriber,
    OfflineImageGenerator,
    OfflineTextGenerator,
)
from craftstory.adapters.openai_image_generator import OpenAIImageGenerator
from craftstory.adapters.openai_speech_client import OpenAISpeechClient
from craftstory.adapters.openai_text_generator import OpenAITextGenerator
from craftstory.adapters.supabase_craft_repository import SupabaseCraftRepository
from craftstory.adapters.supabase_identity_client import HttpxSupabaseIdentityClient
from craftstory.adapters.supabase_profile_repository import SupabaseProfileRepository
from craftstory.adapters.supabase_session_repository import SupabaseSessionRepository
from craftstory.adapters.supabase_user_repository import SupabaseUserRepository
from craftstory.config import Settings
from craftstory.services.crafts import CraftService
from craftstory.services.generation import (
    GenerationService,
    ImageGenerator,
    TextGenerator,
)
from craftstory.services.profiles import ProfileService
from craftstory.services.sessions import SessionService
from craftstory.services.speech import SpeechService
from craftstory.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    speech_service: SpeechService
    generation_service: GenerationService
    profile_service: ProfileService
    craft_service: CraftService
    user_service: UserService
    session_service: SessionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    closers: list[Callable[[], Awaitable[None]]] = []

    if resolved_settings.live_speech_enabled:
        speech_client = OpenAISpeechClient.create(
            api_key=resolved_settings.openai_api_key,
            transcription_model=resolved_settings.openai_transcription_model,
            tts_model=resolved_settings.openai_tts_model,
            voice=resolved_settings.openai_tts_voice,
        )
        closers.append(speech_client.close)
        speech_service = SpeechService(
            transcriber=speech_client, synthesizer=speech_client
        )
    else:
        speech_service = SpeechService(
            transcriber=CannedTranscriber(), synthesizer=CannedSynthesizer()
        )

    text_generator: TextGenerator
    image_generator: ImageGenerator
    if resolved_settings.live_generation_enabled:
        openai_text = OpenAITextGenerator.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
        )
        openai_image = OpenAIImageGenerator.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_image_model,
        )
        closers.extend([openai_text.close, openai_image.close])
        text_generator, image_generator = openai_text, openai_image
    else:
        text_generator = OfflineTextGenerator()
        image_generator = OfflineImageGenerator()
    generation_service = GenerationService(
        text_generator=text_generator, image_generator=image_generator
    )

    identity_client = HttpxSupabaseIdentityClient.create(
        base_url=resolved_settings.supabase_url,
        service_key=resolved_settings.supabase_service_key,
    )
    closers.append(identity_client.close)

    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    craft_service = CraftService(SupabaseCraftRepository(supabase_client))
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        identity_client=identity_client,
    )
    session_service = SessionService(
        session_repository=SupabaseSessionRepository(supabase_client),
        speech_service=speech_service,
        generation_service=generation_service,
        profile_service=profile_service,
        craft_service=craft_service,
        max_turns=resolved_settings.session_max_turns,
        min_transcript_chars=resolved_settings.session_min_transcript_chars,
    )

    async def close_resources() -> None:
        for close in closers:
            await close()

    return AppContainer(
        settings=resolved_settings,
        speech_service=speech_service,
        generation_service=generation_service,
        profile_service=profile_service,
        craft_service=craft_service,
        user_service=user_service,
        session_service=session_service,
        close_resources=close_resources,
    )
