"""
Search entry point: principal variation search with late-move reduction,
driven by iterative deepening under a time budget.

This module defines the interface the adapters depend on:
`get_best_move()` takes a board and a depth or time budget and returns a
`SearchResult`. Everything below it is internal machinery.

Search layers:

1. `pvs` - recursive negamax with alpha-beta pruning. The first move at every
   node is searched with the full window; later moves get a null window
   (alpha, alpha + 1) that can only answer "is this better than alpha?". A
   move that answers yes is re-searched with the real window. Quiet moves
   late in the ordering are probed at reduced depth first (LMR); the
   re-search always happens at full depth.

2. `search_root` - one pass over the root moves at a fixed depth. The root is
   searched with a full window for every move because it must also remember
   which move produced the best score, not only the score.

3. `get_best_move` - fixed-depth search (one root pass) or time-bounded
   iterative deepening (depth 1, 2, 3, ... until the clock runs out).

The board is mutated in place. Every `push` is paired with a `pop` through
the `applied()` context manager, so early exits (beta cutoffs, time expiry,
exceptions) always leave the board exactly as they found it.

There is no quiescence search: at depth 0 the static evaluation is returned
as is.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Sequence

import chess

from sharp.config import EngineConfig
from sharp.constants import (
    ALPHA_INIT,
    BETA_INIT,
    DRAW_SCORE,
    LMR_DEEP_INDEX,
    LMR_MIN_DEPTH,
    LMR_MIN_INDEX,
    MATE_DEPTH_BONUS,
    MATE_SCORE,
    MIN_SCORE,
)
from sharp.evaluate import EVALUATORS, Evaluator, evaluate, game_phase
from sharp.move_ordering import is_quiet, order_moves
from sharp.pv_cache import PvCache

_log = logging.getLogger(__name__)


@contextmanager
def applied(board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """Play `move` for the duration of the block; always take it back on exit."""
    board.push(move)
    try:
        yield board
    finally:
        board.pop()


def mated_score(depth: int) -> int:
    """
    Score for the side to move when it is checkmated with `depth` plies to go.

    Mates found closer to the root leave more depth unused and therefore score
    further below -MATE_SCORE, so the winning side prefers the fastest mate.
    """
    return -(MATE_SCORE + depth * MATE_DEPTH_BONUS)


@dataclass
class SearchContext:
    """
    Mutable state for one search (one `go` command).

    A fresh context is created per search and threaded through every
    recursive call, instead of module-level globals.

    Attributes:
        board:      The position being searched. Mutated in place, always
                    restored before a search call returns.
        evaluate:   Static evaluator, returns mover-relative centipawns.
        use_lmr:    Whether late-move reduction is applied. Disabling it makes
                    the search return exactly the full-width negamax score.
        deadline:   `time.monotonic()` value after which the search stops, or
                    None for an unbounded (fixed-depth) search.
        start_time: Monotonic clock reading when the search began.
        nodes:      Number of PVS nodes visited so far.
    """

    board: chess.Board
    evaluate: Evaluator = evaluate
    use_lmr: bool = True
    deadline: float | None = None
    start_time: float = field(default_factory=time.monotonic)
    nodes: int = 0

    def time_expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)


@dataclass(frozen=True)
class SearchInfo:
    """Progress report emitted after every completed depth."""

    depth: int
    nodes: int
    score: int
    pv: tuple[chess.Move, ...]
    time_ms: int
    nps: int


@dataclass
class RootResult:
    """
    Outcome of one root pass.

    Attributes:
        move:      Best root move, or None when the position has no legal moves.
        score:     Score of `move` from the side-to-move's perspective.
        pv:        Principal variation starting with `move`.
        completed: False when the deadline cut the pass short.
        searched:  Root moves whose subtree finished before the deadline.
    """

    move: chess.Move | None
    score: int
    pv: list[chess.Move]
    completed: bool = True
    searched: int = 0


@dataclass
class SearchResult:
    """
    Final answer of `get_best_move`.

    `move` is None only when the root position has no legal moves; `score` is
    then the mate sentinel (checkmate) or 0 (stalemate).
    """

    move: chess.Move | None
    score: int
    depth: int
    nodes: int
    pv: list[chess.Move] = field(default_factory=list)
    elapsed_ms: int = 0


def _child_hint(pv_hint: Sequence[chess.Move], move: chess.Move) -> Sequence[chess.Move]:
    # The hint only stays meaningful while the search follows the hinted line.
    if pv_hint and move == pv_hint[0]:
        return pv_hint[1:]
    return ()


def pvs(
    ctx: SearchContext,
    depth: int,
    alpha: int,
    beta: int,
    pv_hint: Sequence[chess.Move] = (),
) -> tuple[int, list[chess.Move]]:
    """
    Principal variation search (negamax, alpha-beta, LMR, re-search).

    Args:
        ctx:     Search context; its board is restored before returning.
        depth:   Remaining depth in plies. At 0 the static evaluation is
                 returned.
        alpha:   Lower bound of the window (best score the mover is assured of).
        beta:    Upper bound of the window (best score the opponent allows).
        pv_hint: Expected best line from this node, used for ordering only.

    Returns:
        (score, pv): score from the perspective of the side to move at this
        node, and the best line found from here (empty at leaves).
    """
    ctx.nodes += 1
    board = ctx.board

    if depth <= 0 or ctx.time_expired():
        return ctx.evaluate(board), []

    moves = list(board.legal_moves)
    if not moves:
        if board.is_check():
            return mated_score(depth), []
        return DRAW_SCORE, []

    pv_move = pv_hint[0] if pv_hint else None
    best_score = MIN_SCORE
    best_pv: list[chess.Move] = []

    for index, move in enumerate(order_moves(board, moves, pv_move)):
        if index > 0 and ctx.time_expired():
            break

        child_hint = _child_hint(pv_hint, move)

        if index == 0:
            with applied(board, move):
                child_score, child_pv = pvs(ctx, depth - 1, -beta, -alpha, child_hint)
            score = -child_score
        else:
            probe_depth = depth - 1
            if (
                ctx.use_lmr
                and depth >= LMR_MIN_DEPTH
                and index >= LMR_MIN_INDEX
                and is_quiet(board, move)
            ):
                reduction = 1 if index < LMR_DEEP_INDEX else 2
                probe_depth = max(0, depth - 1 - reduction)

            with applied(board, move):
                child_score, child_pv = pvs(ctx, probe_depth, -alpha - 1, -alpha, child_hint)
                score = -child_score

                # The null window could only say "better than alpha"; find out by how much.
                if alpha < score < beta:
                    child_score, child_pv = pvs(ctx, depth - 1, -beta, -score, child_hint)
                    score = -child_score

        if score > best_score:
            best_score = score
            best_pv = [move, *child_pv]

        if best_score > alpha:
            alpha = best_score

        if alpha >= beta:
            break

    return best_score, best_pv


def search_root(
    ctx: SearchContext,
    depth: int,
    pv_hint: Sequence[chess.Move] = (),
) -> RootResult:
    """
    Search every root move to `depth` and pick the best one.

    Each root move is searched with the window (alpha, BETA_INIT) where alpha
    is the best score found so far. If the deadline passes, the pass stops:
    a root move whose subtree was interrupted is dropped, except for the very
    first move, which is kept so that a pass always yields a move.

    Args:
        ctx:     Search context.
        depth:   Depth of the pass in plies (>= 1).
        pv_hint: Expected best line from the root; its first move is searched first.

    Returns:
        RootResult for this pass.
    """
    board = ctx.board
    moves = list(board.legal_moves)
    if not moves:
        score = mated_score(depth) if board.is_check() else DRAW_SCORE
        return RootResult(move=None, score=score, pv=[])

    pv_move = pv_hint[0] if pv_hint else None
    alpha, beta = ALPHA_INIT, BETA_INIT
    result = RootResult(move=None, score=MIN_SCORE, pv=[])

    for index, move in enumerate(order_moves(board, moves, pv_move)):
        if index > 0 and ctx.time_expired():
            result.completed = False
            break

        with applied(board, move):
            child_score, child_pv = pvs(ctx, depth - 1, -beta, -alpha, _child_hint(pv_hint, move))
        score = -child_score

        if ctx.time_expired():
            result.completed = False
            if index > 0:
                break
        else:
            result.searched += 1

        if score > result.score:
            result.move = move
            result.score = score
            result.pv = [move, *child_pv]

        if score > alpha:
            alpha = score

    return result


def resolve_depth(board: chess.Board, depth: int | None, config: EngineConfig) -> int:
    """
    Depth for a fixed-depth search.

    An explicit positive depth wins. Otherwise the configured default is used,
    one ply deeper in late endgames where the move count is small.
    """
    if depth is not None and depth > 0:
        return depth
    search_depth = config.default_depth
    if game_phase(board) >= config.extension_phase:
        search_depth += config.endgame_depth_extension
    return search_depth


def _report(ctx: SearchContext, depth: int, result: RootResult, on_info: Callable[[SearchInfo], None] | None) -> None:
    elapsed = ctx.elapsed_ms()
    nps = ctx.nodes * 1000 // elapsed if elapsed > 0 else 0
    _log.debug("depth %d score %d nodes %d time %dms", depth, result.score, ctx.nodes, elapsed)
    if on_info is not None:
        on_info(SearchInfo(
            depth=depth,
            nodes=ctx.nodes,
            score=result.score,
            pv=tuple(result.pv),
            time_ms=elapsed,
            nps=nps,
        ))


def get_best_move(
    board: chess.Board,
    *,
    depth: int | None = None,
    movetime_ms: int = 0,
    config: EngineConfig | None = None,
    pv_cache: PvCache | None = None,
    on_info: Callable[[SearchInfo], None] | None = None,
) -> SearchResult:
    """
    Return the best move for the current position.

    With `movetime_ms > 0` the search deepens one ply at a time, up to
    `config.max_depth`, until the budget is spent; `depth` is ignored. The
    best move of the deepest pass that produced one is returned, so a move is
    available even if only depth 1 finished. Without a time budget exactly one
    pass at `depth` (or the configured default) is run.

    Args:
        board:       Position to search. Mutated during the search, restored
                     before returning.
        depth:       Fixed search depth; None or 0 selects the default.
        movetime_ms: Time budget in milliseconds; 0 means fixed depth.
        config:      Engine configuration; defaults to `EngineConfig()`.
        pv_cache:    Last-PV cache. Provides the ordering hint for the first
                     pass and receives the new PV afterwards.
        on_info:     Called with a SearchInfo after every completed depth.

    Returns:
        SearchResult. `move` is None when the position has no legal moves.
    """
    config = config or EngineConfig()
    ctx = SearchContext(
        board=board,
        evaluate=EVALUATORS[config.evaluator],
        use_lmr=config.use_lmr,
    )
    hint: Sequence[chess.Move] = pv_cache.hint_for(board) if pv_cache is not None else ()

    if not any(board.legal_moves):
        reported_depth = 0 if movetime_ms > 0 else resolve_depth(board, depth, config)
        score = mated_score(reported_depth) if board.is_check() else DRAW_SCORE
        return SearchResult(move=None, score=score, depth=0, nodes=0)

    if movetime_ms > 0:
        ctx.deadline = ctx.start_time + movetime_ms / 1000
        best: RootResult | None = None
        reached = 0
        for current in range(1, config.max_depth + 1):
            result = search_root(ctx, current, hint)
            if result.completed or result.searched > 0 or best is None:
                best, reached = result, current
                hint = result.pv
            if not result.completed:
                _log.debug("depth %d interrupted after %d root moves", current, result.searched)
                break
            _report(ctx, current, result, on_info)
            if ctx.time_expired():
                break
    else:
        reached = resolve_depth(board, depth, config)
        best = search_root(ctx, reached, hint)
        _report(ctx, reached, best, on_info)

    if pv_cache is not None:
        pv_cache.store(board, best.pv)

    return SearchResult(
        move=best.move,
        score=best.score,
        depth=reached,
        nodes=ctx.nodes,
        pv=best.pv,
        elapsed_ms=ctx.elapsed_ms(),
    )
