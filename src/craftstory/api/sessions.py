"""Voice session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from craftstory.api.auth import require_user
from craftstory.api.models import (
    AnswerRequest,
    PromptPayload,
    SessionTurnResponse,
    StartSessionRequest,
)
from craftstory.domain.sessions import SessionSnapshot
from craftstory.services.sessions import SessionNotFoundError, TurnResult

if TYPE_CHECKING:
    from craftstory.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def start_session(
    payload: StartSessionRequest, request: Request, uid: str = Depends(require_user)
) -> SessionTurnResponse:
    """Create a session for the caller and return the greeting prompt."""
    container: AppContainer = request.app.state.container
    result = await container.session_service.start_session(
        uid, payload.flow, payload.language_code
    )
    return _turn_response(result)


@router.post("/resume")
async def resume_session(
    snapshot: SessionSnapshot, request: Request, uid: str = Depends(require_user)
) -> SessionTurnResponse:
    """Resume a session from a snapshot and re-ask the current question."""
    container: AppContainer = request.app.state.container
    try:
        stored = container.session_service.get_snapshot(snapshot.session_id)
    except SessionNotFoundError:
        stored = snapshot
    if snapshot.user_id != uid or stored.user_id != uid:
        raise _forbidden()
    result = await container.session_service.resume_session(snapshot)
    return _turn_response(result)


@router.get("/{session_id}")
async def get_session(
    session_id: UUID, request: Request, uid: str = Depends(require_user)
) -> SessionSnapshot:
    """Return the current snapshot."""
    container: AppContainer = request.app.state.container
    try:
        return _owned(container, session_id, uid)
    except SessionNotFoundError as exc:
        raise _not_found() from exc


@router.post("/{session_id}/played")
async def prompt_played(
    session_id: UUID, request: Request, uid: str = Depends(require_user)
) -> SessionSnapshot:
    """Signal that the current prompt finished playing."""
    container: AppContainer = request.app.state.container
    try:
        _owned(container, session_id, uid)
        return container.session_service.mark_prompt_played(session_id)
    except SessionNotFoundError as exc:
        raise _not_found() from exc


@router.post("/{session_id}/answer")
async def answer(
    session_id: UUID,
    payload: AnswerRequest,
    request: Request,
    uid: str = Depends(require_user),
) -> SessionTurnResponse:
    """Handle an answer given as audio or as a transcript."""
    container: AppContainer = request.app.state.container
    service = container.session_service
    try:
        _owned(container, session_id, uid)
        if payload.audio_data is not None:
            result = await service.handle_audio(session_id, payload.audio_data)
        else:
            result = await service.handle_transcript(
                session_id, payload.transcript or ""
            )
    except SessionNotFoundError as exc:
        raise _not_found() from exc
    return _turn_response(result)


@router.post("/{session_id}/stop")
async def stop_session(
    session_id: UUID, request: Request, uid: str = Depends(require_user)
) -> SessionSnapshot:
    """Stop a session."""
    container: AppContainer = request.app.state.container
    try:
        _owned(container, session_id, uid)
        return container.session_service.stop_session(session_id)
    except SessionNotFoundError as exc:
        raise _not_found() from exc


def _owned(container: AppContainer, session_id: UUID, uid: str) -> SessionSnapshot:
    snapshot = container.session_service.get_snapshot(session_id)
    if snapshot.user_id != uid:
        raise _forbidden()
    return snapshot


def _turn_response(result: TurnResult) -> SessionTurnResponse:
    prompt = None
    if result.prompt is not None:
        prompt = PromptPayload(
            text=result.prompt.text, audio_data_uri=result.prompt.audio_data_uri
        )
    return SessionTurnResponse(
        outcome=result.outcome.value,
        prompt=prompt,
        transcript=result.transcript,
        snapshot=result.snapshot,
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
    )


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Session belongs to another user",
    )
