"""Conversation state machine for voice onboarding and listing creation."""

import logging
import string
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Protocol
from uuid import UUID, uuid4

from craftstory.domain.languages import normalize_language
from craftstory.domain.profiles import ArtisanProfile, CraftListing
from craftstory.domain.questions import (
    ACKNOWLEDGEMENTS,
    COMPLETION_MESSAGES,
    REASK_PREFIX,
    SCRIPTS,
    SKIP_WORDS,
    ConversationScript,
    FlowKind,
    Question,
    localized,
)
from craftstory.domain.sessions import SessionSnapshot, SessionState, Turn
from craftstory.services.crafts import CraftService
from craftstory.services.generation import GenerationService, hashtags_to_tags
from craftstory.services.profiles import ProfileService
from craftstory.services.speech import SpeechService

logger = logging.getLogger(__name__)

_STRIP_CHARS = string.punctuation + string.whitespace + "।॥“”‘’"
_MAX_SKIP_WORDS = 4


class SessionRepository(Protocol):
    """Persistence interface for session snapshots."""

    def create_session(self, snapshot: SessionSnapshot) -> None:
        """Store a new session snapshot."""

    def get_session(self, session_id: UUID) -> SessionSnapshot | None:
        """Return the latest snapshot for a session, if present."""

    def save_session(self, snapshot: SessionSnapshot) -> None:
        """Replace the stored snapshot for a session."""


class SessionNotFoundError(LookupError):
    """Raised when a session id is unknown."""


class TurnOutcome(StrEnum):
    """What a driver call did to the session."""

    STARTED = "started"
    RESUMED = "resumed"
    RETRY = "retry"
    ANSWERED = "answered"
    SKIPPED = "skipped"
    REASKED = "reasked"
    COMPLETED = "completed"
    DISCARDED = "discarded"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class SessionPrompt:
    """Represents the next user-facing utterance."""

    text: str
    audio_data_uri: str | None = None


@dataclass(frozen=True)
class SessionSummary:
    """Summary generated when a session completes."""

    summary: str
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TurnResult:
    """Result of one driver call."""

    outcome: TurnOutcome
    snapshot: SessionSnapshot
    prompt: SessionPrompt | None = None
    transcript: str | None = None
    record: ArtisanProfile | CraftListing | None = None


@dataclass
class SessionService:
    """Drives a scripted voice conversation one turn at a time.

    Every turn is sequential: transcribe, extract, acknowledge, advance. External
    failures degrade to fallbacks so a non-empty transcript always moves the
    session forward. A turn whose session changed while external calls were in
    flight (for example, it was stopped) is discarded rather than written.

    Live sessions are also kept in process memory, so an unavailable session
    store is logged and the conversation carries on.
    """

    session_repository: SessionRepository
    speech_service: SpeechService
    generation_service: GenerationService
    profile_service: ProfileService
    craft_service: CraftService
    max_turns: int = 12
    min_transcript_chars: int = 3
    _live: dict[UUID, SessionSnapshot] = field(
        default_factory=dict, init=False, repr=False
    )

    async def start_session(
        self, user_id: str, flow: FlowKind, language: str = "en"
    ) -> TurnResult:
        """Create a session, greet the user and ask the first question."""
        snapshot = SessionSnapshot(
            session_id=uuid4(),
            user_id=user_id,
            flow=flow,
            language=normalize_language(language),
            state=SessionState.GREETING,
        )
        self._save(snapshot, create=True)
        script = _script(snapshot)
        text = (
            f"{script.greeting_for(snapshot.language)} "
            f"{script.questions[0].prompt_for(snapshot.language)}"
        )
        prompt = await self._prompt(text, snapshot.language)
        snapshot = _evolve(snapshot, state=SessionState.ASKING)
        self._save(snapshot)
        logger.info(
            "Started session",
            extra={"session_id": str(snapshot.session_id), "flow": flow.value},
        )
        return TurnResult(TurnOutcome.STARTED, snapshot, prompt=prompt)

    def mark_prompt_played(self, session_id: UUID) -> SessionSnapshot:
        """Record that the current question finished playing."""
        snapshot = self._load(session_id)
        if snapshot.state is not SessionState.ASKING:
            return snapshot
        snapshot = _evolve(snapshot, state=SessionState.AWAITING_ANSWER)
        self._save(snapshot)
        return snapshot

    async def handle_audio(
        self, session_id: UUID, audio_data: str | bytes
    ) -> TurnResult:
        """Transcribe an answer recording and handle it as a turn."""
        snapshot = self._load(session_id)
        if snapshot.is_terminal:
            return TurnResult(TurnOutcome.INACTIVE, snapshot)
        transcript = await self.speech_service.transcribe(
            audio_data, snapshot.language
        )
        return await self.handle_transcript(session_id, transcript)

    async def handle_transcript(
        self, session_id: UUID, transcript: str
    ) -> TurnResult:
        """Handle one answer transcript for the current question."""
        loaded = self._load(session_id)
        if loaded.state not in {SessionState.ASKING, SessionState.AWAITING_ANSWER}:
            return TurnResult(TurnOutcome.INACTIVE, loaded, transcript=transcript)

        text = transcript.strip()
        if len(text) < self.min_transcript_chars:
            snapshot = loaded
            if snapshot.state is SessionState.ASKING:
                snapshot = _evolve(snapshot, state=SessionState.AWAITING_ANSWER)
                self._save(snapshot)
            return TurnResult(TurnOutcome.RETRY, snapshot, transcript=text)

        script = _script(loaded)
        question = script.questions[loaded.question_index]
        if is_skip_utterance(text, loaded.language):
            turn = Turn(
                question_id=question.id, answer=text, skipped=question.skippable
            )
            if question.skippable:
                return await self._advance(
                    loaded, turn, dict(loaded.fields), TurnOutcome.SKIPPED, text
                )
            return await self._reask(loaded, turn, question, text)

        value = await self.generation_service.extract_field(
            text, question, loaded.language, dict(loaded.fields)
        )
        fields = dict(loaded.fields)
        fields[question.field.name] = value
        turn = Turn(question_id=question.id, answer=text)
        logger.info(
            "Acknowledging answer",
            extra={
                "session_id": str(loaded.session_id),
                "state": SessionState.ACKNOWLEDGING.value,
                "question_id": question.id,
            },
        )
        return await self._advance(loaded, turn, fields, TurnOutcome.ANSWERED, text)

    def stop_session(self, session_id: UUID) -> SessionSnapshot:
        """Stop a session; late results for it are discarded."""
        snapshot = self._load(session_id)
        if snapshot.is_terminal:
            return snapshot
        snapshot = _evolve(snapshot, state=SessionState.STOPPED)
        self._save(snapshot)
        logger.info("Stopped session", extra={"session_id": str(session_id)})
        return snapshot

    def get_snapshot(self, session_id: UUID) -> SessionSnapshot:
        """Return the stored snapshot for a session."""
        return self._load(session_id)

    async def resume_session(self, snapshot: SessionSnapshot) -> TurnResult:
        """Resume a session and re-ask the current question.

        A session this service already knows always resumes from its own copy;
        the supplied snapshot is only used for sessions it has no record of.
        A session interrupted while completing is completed again.
        """
        current = self._current(snapshot.session_id)
        if current is None:
            current = snapshot
            if current.is_terminal:
                return TurnResult(TurnOutcome.INACTIVE, current)
            self._save(current, create=True)
        elif current.is_terminal:
            return TurnResult(TurnOutcome.INACTIVE, current)

        script = _script(current)
        if (
            current.state is SessionState.COMPLETING
            or current.question_index >= len(script.questions)
        ):
            return await self._complete(current, current.revision, TurnOutcome.RESUMED)

        question = script.questions[current.question_index]
        prompt = await self._prompt(
            question.prompt_for(current.language), current.language
        )
        if self._is_stale(current.session_id, current.revision):
            return self._discarded(current, None)
        resumed = _evolve(current, state=SessionState.ASKING)
        self._save(resumed)
        logger.info("Resumed session", extra={"session_id": str(resumed.session_id)})
        return TurnResult(TurnOutcome.RESUMED, resumed, prompt=prompt)

    async def summarize(self, snapshot: SessionSnapshot) -> SessionSummary:
        """Generate the completion summary for the accumulated fields."""
        fields = dict(snapshot.fields)
        if snapshot.flow is FlowKind.ONBOARDING:
            bio = await self.generation_service.generate_bio(fields, snapshot.language)
            return SessionSummary(summary=bio)
        summary = await self.generation_service.generate_product_summary(
            fields, snapshot.language
        )
        hashtags = await self.generation_service.generate_hashtags(fields)
        return SessionSummary(summary=summary, tags=hashtags_to_tags(hashtags))

    async def _advance(
        self,
        loaded: SessionSnapshot,
        turn: Turn,
        fields: dict[str, object],
        outcome: TurnOutcome,
        transcript: str,
    ) -> TurnResult:
        snapshot = loaded.model_copy(
            update={
                "turns": [*loaded.turns, turn],
                "fields": fields,
                "question_index": loaded.question_index + 1,
                "turn_count": loaded.turn_count + 1,
            }
        )
        script = _script(snapshot)
        if self._should_complete(snapshot, script):
            return await self._complete(snapshot, loaded.revision, outcome, transcript)

        next_question = script.questions[snapshot.question_index]
        text = next_question.prompt_for(snapshot.language)
        if outcome is TurnOutcome.ANSWERED:
            text = f"{localized(ACKNOWLEDGEMENTS, snapshot.language)} {text}"
        prompt = await self._prompt(text, snapshot.language)
        if self._is_stale(loaded.session_id, loaded.revision):
            return self._discarded(loaded, transcript)
        snapshot = _evolve(snapshot, state=SessionState.ASKING)
        self._save(snapshot)
        return TurnResult(outcome, snapshot, prompt=prompt, transcript=transcript)

    async def _reask(
        self,
        loaded: SessionSnapshot,
        turn: Turn,
        question: Question,
        transcript: str,
    ) -> TurnResult:
        snapshot = loaded.model_copy(
            update={
                "turns": [*loaded.turns, turn],
                "turn_count": loaded.turn_count + 1,
            }
        )
        if self._should_complete(snapshot, _script(snapshot)):
            return await self._complete(
                snapshot, loaded.revision, TurnOutcome.REASKED, transcript
            )
        text = (
            f"{localized(REASK_PREFIX, snapshot.language)} "
            f"{question.prompt_for(snapshot.language)}"
        )
        prompt = await self._prompt(text, snapshot.language)
        if self._is_stale(loaded.session_id, loaded.revision):
            return self._discarded(loaded, transcript)
        snapshot = _evolve(snapshot, state=SessionState.ASKING)
        self._save(snapshot)
        return TurnResult(
            TurnOutcome.REASKED, snapshot, prompt=prompt, transcript=transcript
        )

    async def _complete(
        self,
        snapshot: SessionSnapshot,
        loaded_revision: int,
        outcome: TurnOutcome,
        transcript: str | None = None,
    ) -> TurnResult:
        if self._is_stale(snapshot.session_id, loaded_revision):
            return self._discarded(snapshot, transcript)
        snapshot = _evolve(snapshot, state=SessionState.COMPLETING)
        self._save(snapshot)
        logger.info(
            "Completing session",
            extra={
                "session_id": str(snapshot.session_id),
                "turn_count": snapshot.turn_count,
                "missing_fields": _missing_required(snapshot),
            },
        )
        summary = await self.summarize(snapshot)
        message = localized(COMPLETION_MESSAGES, snapshot.language)
        prompt = await self._prompt(message, snapshot.language)
        if self._is_stale(snapshot.session_id, snapshot.revision):
            return self._discarded(snapshot, transcript)

        record: ArtisanProfile | CraftListing
        if snapshot.flow is FlowKind.ONBOARDING:
            record = self.profile_service.save_profile(
                snapshot.user_id,
                dict(snapshot.fields),
                bio=summary.summary,
                language=snapshot.language,
            )
            record_id = record.user_id
        else:
            record = self.craft_service.save_listing(
                snapshot.user_id,
                dict(snapshot.fields),
                summary=summary.summary,
                tags=summary.tags,
            )
            record_id = record.id

        snapshot = _evolve(
            snapshot,
            state=SessionState.DONE,
            summary=summary.summary,
            record_id=record_id,
        )
        self._save(snapshot)
        logger.info(
            "Completed session",
            extra={
                "session_id": str(snapshot.session_id),
                "last_outcome": outcome.value,
                "record_id": record_id,
            },
        )
        return TurnResult(
            TurnOutcome.COMPLETED,
            snapshot,
            prompt=SessionPrompt(
                text=f"{prompt.text} {summary.summary}",
                audio_data_uri=prompt.audio_data_uri,
            ),
            transcript=transcript,
            record=record,
        )

    def _should_complete(
        self, snapshot: SessionSnapshot, script: ConversationScript
    ) -> bool:
        return (
            snapshot.question_index >= len(script.questions)
            or snapshot.turn_count >= self.max_turns
        )

    def _is_stale(self, session_id: UUID, revision: int) -> bool:
        current = self._current(session_id)
        return current is None or current.revision != revision

    def _discarded(
        self, snapshot: SessionSnapshot, transcript: str | None
    ) -> TurnResult:
        current = self._current(snapshot.session_id) or snapshot
        logger.warning(
            "Discarding late turn result",
            extra={
                "session_id": str(snapshot.session_id),
                "state": current.state.value,
            },
        )
        return TurnResult(TurnOutcome.DISCARDED, current, transcript=transcript)

    async def _prompt(self, text: str, language: str) -> SessionPrompt:
        audio = await self.speech_service.synthesize(text, language)
        return SessionPrompt(text=text, audio_data_uri=audio)

    def _load(self, session_id: UUID) -> SessionSnapshot:
        snapshot = self._current(session_id)
        if snapshot is None:
            raise SessionNotFoundError(str(session_id))
        return snapshot

    def _current(self, session_id: UUID) -> SessionSnapshot | None:
        """Return the newest known snapshot from the store or process memory."""
        live = self._live.get(session_id)
        try:
            stored = self.session_repository.get_session(session_id)
        except Exception:
            logger.exception(
                "Session store read failed", extra={"session_id": str(session_id)}
            )
            return live
        if stored is None or (live is not None and live.revision > stored.revision):
            return live
        return stored

    def _save(self, snapshot: SessionSnapshot, create: bool = False) -> None:
        self._live[snapshot.session_id] = snapshot
        try:
            if create:
                self.session_repository.create_session(snapshot)
            else:
                self.session_repository.save_session(snapshot)
        except Exception:
            logger.exception(
                "Session store write failed",
                extra={
                    "session_id": str(snapshot.session_id),
                    "state": snapshot.state.value,
                },
            )
            return
        if snapshot.is_terminal:
            self._live.pop(snapshot.session_id, None)


def is_skip_utterance(text: str, language: str) -> bool:
    """Return true when a short utterance contains a skip word."""
    words = [word.strip(_STRIP_CHARS) for word in text.lower().split()]
    words = [word for word in words if word]
    if not words or len(words) > _MAX_SKIP_WORDS:
        return False
    vocabulary = SKIP_WORDS["en"] | SKIP_WORDS.get(language, frozenset())
    return any(word in vocabulary for word in words)


def _script(snapshot: SessionSnapshot) -> ConversationScript:
    return SCRIPTS[snapshot.flow]


def _missing_required(snapshot: SessionSnapshot) -> list[str]:
    return [
        question.field.name
        for question in _script(snapshot).questions
        if question.required and question.field.name not in snapshot.fields
    ]


def _evolve(snapshot: SessionSnapshot, **changes: object) -> SessionSnapshot:
    """Return a copy with changes applied and a bumped revision."""
    return snapshot.model_copy(
        update={
            **changes,
            "revision": snapshot.revision + 1,
            "updated_at": datetime.now(tz=UTC),
        }
    )
