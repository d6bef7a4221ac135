"""Domain models for voice conversation sessions."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from craftstory.domain.questions import FlowKind

SNAPSHOT_SCHEMA_VERSION = 1


class SessionState(StrEnum):
    """States of the conversation driver.

    ACKNOWLEDGING is transient: it is logged while an answer is acknowledged
    and never stored, so a saved snapshot moves from AWAITING_ANSWER straight
    to ASKING or COMPLETING.
    """

    GREETING = "GREETING"
    ASKING = "ASKING"
    AWAITING_ANSWER = "AWAITING_ANSWER"
    ACKNOWLEDGING = "ACKNOWLEDGING"
    COMPLETING = "COMPLETING"
    DONE = "DONE"
    STOPPED = "STOPPED"


TERMINAL_STATES = frozenset({SessionState.DONE, SessionState.STOPPED})


def _now() -> datetime:
    return datetime.now(tz=UTC)


class Turn(BaseModel):
    """One question/answer exchange."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    answer: str
    timestamp: datetime = Field(default_factory=_now)
    skipped: bool = False


class SessionSnapshot(BaseModel):
    """Serializable state of a session, sufficient to resume it."""

    schema_version: Literal[1] = SNAPSHOT_SCHEMA_VERSION
    session_id: UUID
    user_id: str
    flow: FlowKind
    language: str = "en"
    state: SessionState = SessionState.GREETING
    question_index: int = Field(default=0, ge=0)
    turns: list[Turn] = Field(default_factory=list)
    fields: dict[str, Any] = Field(default_factory=dict)
    turn_count: int = Field(default=0, ge=0)
    revision: int = Field(default=0, ge=0)
    summary: str | None = None
    record_id: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES
