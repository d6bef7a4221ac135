"""OpenAI audio API client for transcription and speech synthesis."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from craftstory.services.speech import SpeechSynthesizer, Transcriber

_EXTENSIONS = {
    "audio/webm": "webm",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/ogg": "ogg",
    "audio/mp4": "m4a",
}


@dataclass
class OpenAISpeechClient(Transcriber, SpeechSynthesizer):
    """Speech-to-text and text-to-speech backed by OpenAI audio endpoints."""

    client: AsyncOpenAI
    transcription_model: str
    tts_model: str
    voice: str = "alloy"

    @classmethod
    def create(
        cls,
        api_key: str,
        transcription_model: str,
        tts_model: str,
        voice: str = "alloy",
    ) -> "OpenAISpeechClient":
        """Create an OpenAI speech client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            transcription_model=transcription_model,
            tts_model=tts_model,
            voice=voice,
        )

    async def transcribe(self, audio: bytes, mime_type: str, language: str) -> str:
        """Transcribe an audio buffer."""
        extension = _EXTENSIONS.get(mime_type, "webm")
        response = await self.client.audio.transcriptions.create(
            model=self.transcription_model,
            file=(f"speech.{extension}", audio, mime_type),
            language=language.split("-", maxsplit=1)[0],
        )
        return response.text

    async def synthesize(self, text: str, language: str) -> tuple[bytes, str]:
        """Synthesize speech as MP3 bytes."""
        response = await self.client.audio.speech.create(
            model=self.tts_model,
            voice=self.voice,
            input=text,
            response_format="mp3",
        )
        audio = response.content
        if not audio:
            raise RuntimeError("OpenAI returned empty audio")
        return audio, "audio/mpeg"

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()
