import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_session_id, get_sessions
from schemas.analysis import (
    RELIABILITY_LABELS,
    AnalysisState,
    RatingLabel,
    TextAnalysisRequest,
)
from services.errors import InputValidationError
from services.sessions import SessionRegistry

router = APIRouter()


@router.post("/text-analysis", response_model=AnalysisState)
async def text_analysis(
    req: TextAnalysisRequest,
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    """
    Rate the credibility of a social media post.
    """
    flow = sessions.analysis_flow(session_id)
    try:
        return await flow.analyze(req.text)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logging.error(f"Text Analysis error: {e}")
        raise HTTPException(
            status_code=500,
            detail="Text Analysis service error",
        )


@router.get("/text-analysis", response_model=AnalysisState)
async def current_text_analysis(
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    return sessions.analysis_flow(session_id).state


@router.delete("/text-analysis", response_model=AnalysisState)
async def clear_text_analysis(
    sessions: SessionRegistry = Depends(get_sessions),
    session_id: str = Depends(get_session_id),
):
    flow = sessions.analysis_flow(session_id)
    flow.reset()
    return flow.state


@router.get("/ratings", response_model=List[RatingLabel])
def ratings():
    """Display labels for every reliability rating."""
    return [RatingLabel(rating=rating, label=label) for rating, label in RELIABILITY_LABELS.items()]
