"""
Move ordering: try the most promising moves first.

Alpha-beta prunes most when the best move is searched first, so every node
sorts its legal moves by a cheap heuristic score before recursing:

    PV move          10_000_000   best move of the previous iteration
    castling          5_000_000
    captures          1_000_000 + victim * 10 - attacker   (MVV-LVA)
                      + 500_000 when the capture also promotes
    promotions          750_000 + promoted piece * 10
    checks              500_000
    everything else           0

Only the first ORDERED_MOVE_LIMIT moves are put into exact order. Beyond that
point ordering barely changes the cutoff rate, so the remaining moves are left
in generation order. Ordering never changes the score the search returns,
only the number of nodes needed to find it.
"""

import heapq
from typing import Iterable

import chess

from sharp.constants import (
    CAPTURE_BASE_SCORE,
    CAPTURE_PROMOTION_BONUS,
    CASTLING_SCORE,
    CHECK_SCORE,
    ORDERED_MOVE_LIMIT,
    PIECE_VALUES,
    PROMOTION_BASE_SCORE,
    PV_MOVE_SCORE,
)


def _victim_value(board: chess.Board, move: chess.Move) -> int:
    # En passant: the captured pawn is not on move.to_square.
    victim = board.piece_type_at(move.to_square)
    return PIECE_VALUES[victim] if victim is not None else PIECE_VALUES[chess.PAWN]


def score_move(board: chess.Board, move: chess.Move, pv_move: chess.Move | None = None) -> int:
    """
    Heuristic ordering score of a legal move in the current position.

    Args:
        board:   Position before the move. Not modified.
        move:    A legal move in that position.
        pv_move: Move recommended by the principal variation, if any.

    Returns:
        Ordering score; higher is searched earlier.
    """
    if pv_move is not None and move == pv_move:
        return PV_MOVE_SCORE

    if board.is_castling(move):
        return CASTLING_SCORE

    if board.is_capture(move):
        attacker = board.piece_type_at(move.from_square)
        score = CAPTURE_BASE_SCORE + _victim_value(board, move) * 10 - PIECE_VALUES[attacker]
        if move.promotion is not None:
            score += CAPTURE_PROMOTION_BONUS
        return score

    if move.promotion is not None:
        return PROMOTION_BASE_SCORE + PIECE_VALUES[move.promotion] * 10

    if board.gives_check(move):
        return CHECK_SCORE

    return 0


def order_moves(
    board: chess.Board,
    moves: Iterable[chess.Move],
    pv_move: chess.Move | None = None,
    limit: int = ORDERED_MOVE_LIMIT,
) -> list[chess.Move]:
    """
    Order moves most-promising-first.

    The top `limit` moves come out in descending score order (ties keep
    generation order); any further moves follow in generation order.

    Args:
        board:   Position the moves belong to. Not modified.
        moves:   Legal moves to order.
        pv_move: Principal-variation move for this node, searched first if legal.
        limit:   How many moves to bring into exact order.

    Returns:
        A new list with the same moves.
    """
    moves = list(moves)
    scores = [score_move(board, move, pv_move) for move in moves]

    if len(moves) <= limit:
        order = sorted(range(len(moves)), key=lambda i: -scores[i])
        return [moves[i] for i in order]

    # nlargest is stable for equal keys, so ties keep generation order.
    top = heapq.nlargest(limit, range(len(moves)), key=lambda i: scores[i])
    chosen = set(top)
    rest = [moves[i] for i in range(len(moves)) if i not in chosen]
    return [moves[i] for i in top] + rest


def is_quiet(board: chess.Board, move: chess.Move) -> bool:
    """True for moves that neither capture, promote nor give check."""
    return (
        move.promotion is None
        and not board.is_capture(move)
        and not board.gives_check(move)
    )
