from fastapi import Header, Request

from services.score_store import ResilienceScoreStore
from services.sessions import DEFAULT_SESSION_ID, SessionRegistry


def get_score_store(request: Request) -> ResilienceScoreStore:
    return request.app.state.score_store


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session_id(x_session_id: str = Header(default=DEFAULT_SESSION_ID)) -> str:
    return x_session_id or DEFAULT_SESSION_ID
