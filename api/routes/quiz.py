import logging
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_session_id, get_sessions
from schemas.quiz import OptionSelectRequest, QuizStatus, QuizView
from services.sessions import SessionRegistry

router = APIRouter()


@router.get("/quiz", response_model=QuizView)
async def quiz(
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    """
    Current quiz state. The first visit fetches a batch of questions.
    """
    flow = sessions.quiz_flow(session_id)
    if flow.status == QuizStatus.IDLE:
        return await flow.load()
    return flow.view()


@router.post("/quiz/reload", response_model=QuizView)
async def reload_quiz(
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    try:
        return await sessions.quiz_flow(session_id).load()
    except Exception as e:
        logging.error(f"Quiz reload error: {e}")
        raise HTTPException(status_code=500, detail="Quiz service error")


@router.post("/quiz/select", response_model=QuizView)
async def select_option(
    req: OptionSelectRequest,
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    return sessions.quiz_flow(session_id).select(req.option)


@router.post("/quiz/submit", response_model=QuizView)
async def submit_answer(
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    flow = sessions.quiz_flow(session_id)
    flow.submit()
    return flow.view()


@router.post("/quiz/next", response_model=QuizView)
async def next_question(
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    try:
        return await sessions.quiz_flow(session_id).next()
    except Exception as e:
        logging.error(f"Quiz next question error: {e}")
        raise HTTPException(status_code=500, detail="Quiz service error")
