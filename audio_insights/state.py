"""Application state machine for the upload -> analysis flow.

The session is an immutable value. ``transition`` takes the current session
and an event and returns the next session, so the UI only ever swaps one
object in its state container.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from audio_insights.errors import InvalidTransition
from audio_insights.models import AnalysisResult, AppState


@dataclass(frozen=True)
class AppSession:
    """Current state plus whatever is attached to it."""

    state: AppState = AppState.IDLE
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None


# Events

@dataclass(frozen=True)
class FileSelected:
    file_name: str
    file_size: int
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class EncodeCompleted:
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class AnalysisSucceeded:
    result: AnalysisResult


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[FileSelected, EncodeCompleted, AnalysisSucceeded, Failed, Reset]

FAILABLE_STATES = (AppState.IDLE, AppState.UPLOADING, AppState.ANALYZING)


def transition(session: AppSession, event: Event) -> AppSession:
    """
    Apply an event to a session and return the resulting session.

    Raises:
        InvalidTransition: If the current state does not accept the event
    """
    state = session.state

    if isinstance(event, Reset):
        return AppSession()

    if isinstance(event, FileSelected) and state == AppState.IDLE:
        return AppSession(
            state=AppState.UPLOADING,
            file_name=event.file_name,
            file_size=event.file_size,
            mime_type=event.mime_type,
        )

    if isinstance(event, EncodeCompleted) and state == AppState.UPLOADING:
        return replace(session, state=AppState.ANALYZING, mime_type=event.mime_type or session.mime_type)

    if isinstance(event, AnalysisSucceeded) and state == AppState.ANALYZING:
        return replace(session, state=AppState.COMPLETED, result=event.result, error=None)

    if isinstance(event, Failed) and state in FAILABLE_STATES:
        return replace(session, state=AppState.ERROR, result=None, error=event.message)

    raise InvalidTransition(state, event)


def is_busy(session: AppSession) -> bool:
    """True while a file is being read or analyzed."""
    return session.state in (AppState.UPLOADING, AppState.ANALYZING)
