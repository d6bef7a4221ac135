"""Speech-to-text and text-to-speech with soft failure."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol

from craftstory.domain.languages import get_language_config

logger = logging.getLogger(__name__)


class Transcriber(Protocol):
    """Interface for a speech-to-text backend."""

    async def transcribe(self, audio: bytes, mime_type: str, language: str) -> str:
        """Return the transcript for an audio buffer."""


class SpeechSynthesizer(Protocol):
    """Interface for a text-to-speech backend."""

    async def synthesize(self, text: str, language: str) -> tuple[bytes, str]:
        """Return audio bytes and their MIME type."""


@dataclass
class SpeechService:
    """Wraps the speech backends so failures never block a turn."""

    transcriber: Transcriber
    synthesizer: SpeechSynthesizer

    async def transcribe(self, audio_data: str | bytes, language: str = "en") -> str:
        """Transcribe audio, returning an empty transcript on any failure."""
        try:
            audio, mime_type = decode_audio(audio_data)
        except ValueError:
            logger.warning("Received undecodable audio data")
            return ""
        if not audio:
            return ""
        speech_code = get_language_config(language).speech_code
        try:
            transcript = await self.transcriber.transcribe(
                audio, mime_type, speech_code
            )
        except Exception:
            logger.exception(
                "Speech-to-text failed", extra={"language": speech_code}
            )
            return ""
        return transcript.strip()

    async def synthesize(self, text: str, language: str = "en") -> str | None:
        """Synthesize speech and return a data URI, or None on failure."""
        if not text.strip():
            return None
        speech_code = get_language_config(language).speech_code
        try:
            audio, mime_type = await self.synthesizer.synthesize(text, speech_code)
        except Exception:
            logger.exception(
                "Text-to-speech failed", extra={"language": speech_code}
            )
            return None
        return to_data_url(audio, mime_type)


def decode_audio(audio_data: str | bytes) -> tuple[bytes, str]:
    """Decode a base64 data URL or raw base64 string into bytes and MIME type."""
    if isinstance(audio_data, bytes):
        return audio_data, _detect_audio_mime_type(audio_data)
    mime_type = "audio/webm"
    payload = audio_data.strip()
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        declared = header[len("data:") :].split(";", maxsplit=1)[0]
        if declared:
            mime_type = declared
    try:
        audio = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Audio data is not valid base64") from exc
    return audio, mime_type


def to_data_url(audio: bytes, mime_type: str) -> str:
    """Convert audio bytes to a base64 data URL."""
    encoded = base64.b64encode(audio).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_audio_mime_type(audio: bytes) -> str:
    """Infer a basic audio MIME type from file signatures."""
    if audio[:4] == b"RIFF" and audio[8:12] == b"WAVE":
        return "audio/wav"
    if audio.startswith(b"ID3") or audio[:2] == b"\xff\xfb":
        return "audio/mpeg"
    if audio.startswith(b"OggS"):
        return "audio/ogg"
    return "audio/webm"
