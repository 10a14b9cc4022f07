'''
Eat/Bite vs Bot API

Endpoints:
POST /api/init      -> register the player's secret
POST /api/guess     -> play one round (player guesses, then the bot)
POST /api/restart   -> new game, new bot secret
POST /api/shutdown  -> stop the server after in-flight requests finish

Extras:
GET  /api/state     -> status, turn, history (bot secret once the game is over)

There is exactly one game per process; it lives in app.state.session.
'''

import logging
import os
import signal
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from .config import get_settings
from .engine import format_code, format_score
from .errors import AlreadyShutdown, CodeValidationError, GameError, NoConsistentCandidate
from .random_client import fetch_code
from .schemas import (
    GuessRequest,
    GuessResponse,
    InitRequest,
    MessageOut,
    RoundOut,
    ScoreOut,
    SessionStateOut,
)
from .shutdown import ShutdownSignal
from .store import GameSession, RoundResult

logger = logging.getLogger(__name__)

settings = get_settings()


def interrupt_host() -> None:
    """Ask the hosting server to exit; uvicorn drains in-flight requests on SIGINT."""
    os.kill(os.getpid(), signal.SIGINT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the single game session when the server starts."""
    if getattr(app.state, "session", None) is None:
        # fetch_code may call random.org; keep it off the event loop
        app.state.session = await run_in_threadpool(
            GameSession,
            opponent_secret=settings.default_secret,
            code_factory=fetch_code,
        )
    if getattr(app.state, "shutdown", None) is None:
        # Hosted by plain `uvicorn eatbite.main:app`: stop it the way Ctrl-C would
        app.state.shutdown = ShutdownSignal()
        app.state.shutdown.add_callback(interrupt_host)
    logger.info("game session ready (status=%s)", app.state.session.status)
    yield
    logger.info("server stopped")


app = FastAPI(title="Eat/Bite vs Bot API", version="1.0.0", lifespan=lifespan)

# Allow the local front-end (different port) to call us
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Small accessors so routes get the shared objects (overridden in tests)
def get_session(request: Request) -> GameSession:
    return request.app.state.session

def get_shutdown(request: Request) -> ShutdownSignal:
    return request.app.state.shutdown

# --- DTO builders ---

def _score_out(result) -> ScoreOut:
    return ScoreOut(eat=result.eat, bite=result.bite)

def _to_guess_response(result: RoundResult) -> GuessResponse:
    if result.bot_guess is None:
        return GuessResponse(
            player_result=format_score(result.player_score),
            bot_guess="---",
            bot_result="You win!",
            player_score=_score_out(result.player_score),
            status=result.status,
            turn=result.turn,
        )

    if result.status == "bot_won":
        bot_result = "Bot wins!"
    else:
        bot_result = format_score(result.bot_score)

    return GuessResponse(
        player_result=format_score(result.player_score),
        bot_guess=format_code(result.bot_guess),
        bot_result=bot_result,
        player_score=_score_out(result.player_score),
        bot_score=_score_out(result.bot_score),
        status=result.status,
        turn=result.turn,
    )

def _to_round_out(result: RoundResult) -> RoundOut:
    return RoundOut(
        turn=result.turn,
        player_guess=format_code(result.player_guess),
        player_score=_score_out(result.player_score),
        bot_guess=format_code(result.bot_guess) if result.bot_guess is not None else None,
        bot_score=_score_out(result.bot_score) if result.bot_score is not None else None,
        message=result.message,
        timestamp=result.timestamp,
    )

# ---------------- Routes ----------------

@app.post("/api/init", response_model=MessageOut, summary="Register the player's secret")
def init_game(
    payload: InitRequest,
    session: GameSession = Depends(get_session),
) -> MessageOut:
    try:
        code = session.submit_opponent_secret(payload.player_secret)
    except CodeValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except GameError as ge:
        raise HTTPException(status_code=409, detail=str(ge))
    return MessageOut(message=f"Secret {format_code(code)} registered.")

@app.post("/api/guess", response_model=GuessResponse, summary="Play one round")
def submit_guess(
    payload: GuessRequest,
    session: GameSession = Depends(get_session),
) -> GuessResponse:
    try:
        result = session.play_round(payload.guess)
    except CodeValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except NoConsistentCandidate as nc:
        # The scores the bot received can't all be true; the bot forfeits this round
        raise HTTPException(status_code=409, detail=f"Bot forfeits: {nc}")
    except GameError as ge:
        raise HTTPException(status_code=409, detail=str(ge))
    return _to_guess_response(result)

@app.post("/api/restart", response_model=MessageOut, summary="Start a new game")
def restart_game(session: GameSession = Depends(get_session)) -> MessageOut:
    session.reset()
    return MessageOut(message="Game restarted.")

@app.post("/api/shutdown", response_model=MessageOut, summary="Stop the server")
def shutdown_server(shutdown: ShutdownSignal = Depends(get_shutdown)) -> MessageOut:
    try:
        shutdown.trigger()
    except AlreadyShutdown as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return MessageOut(message="Shutting down.")

@app.get("/api/state", response_model=SessionStateOut, summary="Current game state")
def get_state(session: GameSession = Depends(get_session)) -> SessionStateOut:
    snap = session.snapshot()
    return SessionStateOut(
        status=snap.status,
        turn=snap.turn,
        secret_set=snap.secret_set,
        candidates_left=snap.candidates_left,
        history=[_to_round_out(r) for r in snap.history],
        bot_secret=format_code(snap.bot_secret) if snap.bot_secret is not None else None,
    )
