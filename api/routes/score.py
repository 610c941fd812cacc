from fastapi import APIRouter, Depends

from api.dependencies import get_score_store
from schemas.quiz import ScoreResponse
from services.score_store import ResilienceScoreStore, describe_score

router = APIRouter()


@router.get("/score", response_model=ScoreResponse)
async def resilience_score(store: ResilienceScoreStore = Depends(get_score_store)):
    """Current resilience score with a short encouragement message."""
    score = store.get_score()
    return ScoreResponse(score=score, message=describe_score(score))
