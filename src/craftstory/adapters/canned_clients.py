"""Offline stand-ins used when live AI calls are disabled."""

import base64
from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import cycle

from craftstory.services.generation import (
    GenerationUnavailableError,
    ImageGenerator,
    TextGenerator,
)
from craftstory.services.speech import SpeechSynthesizer, Transcriber

CANNED_TRANSCRIPTS = (
    "This is a traditional blue pottery bowl from Rajasthan",
    "I am a skilled artisan with 15 years of experience in pottery",
    "My name is Priya and I specialize in traditional Indian crafts",
    "I use natural materials like clay and organic dyes in my work",
)

# Short silent WAV clip.
SILENT_WAV_BASE64 = (
    "UklGRiQAAABXQVZFZm10IBAAAAABAAEAQB8AAEAfAAABAAgAZGF0YQAAAAA="
)


@dataclass
class CannedTranscriber(Transcriber):
    """Returns sample artisan answers in rotation."""

    transcripts: tuple[str, ...] = CANNED_TRANSCRIPTS
    _rotation: Iterator[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rotation = cycle(self.transcripts)

    async def transcribe(self, audio: bytes, mime_type: str, language: str) -> str:
        return next(self._rotation)


@dataclass
class CannedSynthesizer(SpeechSynthesizer):
    """Returns a silent clip for every utterance."""

    async def synthesize(self, text: str, language: str) -> tuple[bytes, str]:
        return base64.b64decode(SILENT_WAV_BASE64), "audio/wav"


_OFFLINE_REASON = (
    "Live generation is disabled; set USE_LIVE_GENERATION and OPENAI_API_KEY."
)


@dataclass
class OfflineTextGenerator(TextGenerator):
    """Text generator that always defers to canned fallbacks."""

    reason: str = _OFFLINE_REASON

    async def generate(self, prompt: str) -> str:
        raise GenerationUnavailableError(self.reason)


@dataclass
class OfflineImageGenerator(ImageGenerator):
    """Image generator that always defers to canned fallbacks."""

    reason: str = _OFFLINE_REASON

    async def generate(self, prompt: str, size: str) -> str:
        raise GenerationUnavailableError(self.reason)
