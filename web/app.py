"""
FastAPI web application for the Sharp engine.

Exposes POST /api/move, which accepts a FEN position and a time or depth
budget, runs the engine search, and returns the best move with its score,
depth, node count and principal variation.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like the search.
- Stateless per request: the client sends the full FEN each time; no PV
  cache or board state is kept between requests.
"""

import logging

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from sharp.config import EngineConfig
from sharp.search import get_best_move

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

_CONFIG = EngineConfig.from_env()

app = FastAPI(title="Sharp", version="2.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        fen: Full FEN string representing the current board position.
        movetime_ms: Milliseconds allocated for iterative deepening, clamped
                     to [1, 30000] so that one request cannot tie up a worker.
        depth: Optional fixed depth. When given, a fixed-depth search runs
               and movetime_ms is ignored.
    """

    fen: str
    movetime_ms: int = 1000
    depth: int | None = None

    @field_validator("movetime_ms")
    @classmethod
    def clamp_movetime(cls, v: int) -> int:
        """Clamp movetime_ms to a safe operating range."""
        return max(1, min(v, 30_000))

    @field_validator("depth")
    @classmethod
    def check_depth(cls, v: int | None) -> int | None:
        if v is not None and not 1 <= v <= 8:
            raise ValueError("depth must be between 1 and 8")
        return v


class MoveResponse(BaseModel):
    """
    Engine response after computing the best move.

    Fields:
        move: Best move in UCI notation (e.g. "e2e4", "e7e8q").
        fen: Board FEN after the engine's move is applied.
        score: Evaluation in centipawns from the engine's perspective.
        depth: Search depth of the returned move.
        nodes: Number of nodes searched.
        pv: Principal variation in UCI notation, starting with `move`.
    """

    move: str
    fen: str
    score: int
    depth: int
    nodes: int
    pv: list[str]


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/health")
def api_health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's best move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: Engine failure or no move returned.
    """
    # --- Parse and validate the FEN ---
    try:
        board = chess.Board(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.result()}",
        )

    # --- Run the engine search ---
    try:
        if request.depth is not None:
            result = get_best_move(board, depth=request.depth, config=_CONFIG)
        else:
            result = get_best_move(board, movetime_ms=request.movetime_ms, config=_CONFIG)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s score=%d depth=%d nodes=%d fen=%s",
        result.move.uci(),
        result.score,
        result.depth,
        result.nodes,
        request.fen[:40],
    )

    # --- Apply the move and return ---
    pv = [move.uci() for move in result.pv]
    board.push(result.move)
    return MoveResponse(
        move=result.move.uci(),
        fen=board.fen(),
        score=result.score,
        depth=result.depth,
        nodes=result.nodes,
        pv=pv,
    )
