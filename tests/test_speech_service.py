"""Tests for the speech service."""

import asyncio
import base64

import pytest

from craftstory.services.speech import SpeechService, decode_audio, to_data_url
from tests.conftest import FakeSynthesizer, FakeTranscriber

WAV_HEADER = b"RIFF\x24\x00\x00\x00WAVEfmt "


def test_transcribe_decodes_data_url_and_uses_speech_code() -> None:
    transcriber = FakeTranscriber(transcripts=["  नमस्ते  "])
    service = SpeechService(transcriber=transcriber, synthesizer=FakeSynthesizer())
    data_url = to_data_url(b"ogg-bytes", "audio/ogg")

    transcript = asyncio.run(service.transcribe(data_url, "hi"))

    assert transcript == "नमस्ते"
    assert transcriber.calls == [(b"ogg-bytes", "audio/ogg", "hi-IN")]


def test_transcribe_returns_empty_on_failure() -> None:
    service = SpeechService(
        transcriber=FakeTranscriber(fail=True), synthesizer=FakeSynthesizer()
    )

    assert asyncio.run(service.transcribe("AAAA")) == ""
    assert asyncio.run(service.transcribe("not base64!")) == ""
    assert asyncio.run(service.transcribe("")) == ""


def test_synthesize_returns_data_uri() -> None:
    synthesizer = FakeSynthesizer()
    service = SpeechService(transcriber=FakeTranscriber(), synthesizer=synthesizer)

    audio = asyncio.run(service.synthesize("Hello", "ta"))

    assert audio == to_data_url(b"ID3-fake-mp3", "audio/mpeg")
    assert synthesizer.texts == ["Hello"]


def test_synthesize_returns_none_on_failure_or_blank() -> None:
    service = SpeechService(
        transcriber=FakeTranscriber(), synthesizer=FakeSynthesizer(fail=True)
    )

    assert asyncio.run(service.synthesize("Hello")) is None
    assert asyncio.run(service.synthesize("   ")) is None


def test_decode_audio_detects_raw_bytes() -> None:
    audio, mime_type = decode_audio(WAV_HEADER)
    raw, raw_type = decode_audio(base64.b64encode(b"webm").decode())

    assert audio == WAV_HEADER
    assert mime_type == "audio/wav"
    assert raw == b"webm"
    assert raw_type == "audio/webm"


def test_decode_audio_rejects_invalid_base64() -> None:
    with pytest.raises(ValueError):
        decode_audio("data:audio/webm;base64,@@@")
