from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from api.routes.text_analysis import router as text_analysis_router
from api.routes.quiz import router as quiz_router
from api.routes.score import router as score_router
from config import settings
from services.analysis_service import request_analysis
from services.quiz_service import request_quiz_batch
from services.score_store import FileKeyValueStorage, ResilienceScoreStore
from services.sessions import SessionRegistry
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    score_store = ResilienceScoreStore(FileKeyValueStorage(settings.SCORE_STORAGE_DIR))
    score_store.load()
    unsubscribe = score_store.subscribe(
        lambda score: logger.info(f"Resilience score is now {score}")
    )

    app.state.score_store = score_store
    app.state.sessions = SessionRegistry(
        score_store,
        analysis_requester=request_analysis,
        quiz_requester=request_quiz_batch,
        max_text_length=settings.MAX_TEXT_LENGTH,
        max_sessions=settings.MAX_SESSIONS,
    )
    try:
        yield
    finally:
        app.state.sessions.clear()
        unsubscribe()
        score_store.close()


app = FastAPI(
    title="Misinformation Checker API",
    version="1.0.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    text_analysis_router,
    prefix="/api",
    tags=["text-analysis"],
)

app.include_router(
    quiz_router,
    prefix="/api",
    tags=["quiz"],
)

app.include_router(
    score_router,
    prefix="/api",
    tags=["score"],
)


# Routes
@app.get("/")
async def root():
    return {"message": "Misinformation Checker API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


def run():
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True, env_file='.env')
