"""
Phase-aware static evaluation: material, check bonus and centralization.

The search calls `evaluate` at every leaf, so it must be cheap and must never
modify the board. The score is returned from the perspective of the side to
move (negamax convention): positive means the side to move is ahead.

Scoring works in three steps:

1. Material, White positive, using the centipawn values from constants.
2. A flat bonus for the side that has just delivered check.
3. Centralization. Every piece earns `1 - chebyshev_distance_to_centre / 3.5`
   (1.0 is unreachable, the four centre squares sit at 0.857; corners at 0).
   The per-type sums are weighted by a table chosen from the game phase:
   kings hide in the opening and march to the centre in the endgame, minor
   pieces always like the centre, rooks are pushed away from it.

Two earlier evaluator forms are kept for comparison and benchmarking:
`evaluate_material` (material only) and `evaluate_mobility` (material plus
five centipawns per legal move plus the check bonus).
"""

from typing import Callable

import chess

from sharp.constants import (
    BOARD_CENTER,
    CHECK_BONUS,
    ENDGAME_PHASE,
    ENDGAME_WEIGHTS,
    MAX_CENTER_DISTANCE,
    MIDDLEGAME_WEIGHTS,
    MOBILITY_WEIGHT,
    OPENING_PHASE,
    OPENING_WEIGHTS,
    PHASE_PIECE_VALUES,
    PIECE_VALUES,
    POSITIONAL_SCALE,
    STARTING_PHASE_MATERIAL,
)

Evaluator = Callable[[chess.Board], int]


def centralization(square: chess.Square) -> float:
    """Return how central a square is: 0.0 on the rim corners, 0.857 on d4/e4/d5/e5."""
    file_distance = abs(chess.square_file(square) - BOARD_CENTER)
    rank_distance = abs(chess.square_rank(square) - BOARD_CENTER)
    value = 1.0 - max(file_distance, rank_distance) / MAX_CENTER_DISTANCE
    return min(1.0, max(0.0, value))


# Precomputed once; indexed by python-chess square (a1 = 0, h8 = 63).
CENTRALIZATION: list[float] = [centralization(sq) for sq in chess.SQUARES]


def game_phase(board: chess.Board) -> float:
    """
    Fraction of the starting non-king material that has left the board.

    0.0 is the full starting material, 1.0 means only kings remain. Extra
    material from promotions can push the raw value below zero, so the result
    is clamped to [0, 1].

    Args:
        board: The position to measure. Not modified.

    Returns:
        Game phase in [0.0, 1.0].
    """
    material = 0
    for piece_type, value in PHASE_PIECE_VALUES.items():
        count = len(board.pieces(piece_type, chess.WHITE)) + len(board.pieces(piece_type, chess.BLACK))
        material += value * count
    phase = 1.0 - material / STARTING_PHASE_MATERIAL
    return min(1.0, max(0.0, phase))


def phase_weights(phase: float) -> dict[int, float]:
    """Pick the centralization weight table for a game phase."""
    if phase > ENDGAME_PHASE:
        return ENDGAME_WEIGHTS
    if phase < OPENING_PHASE:
        return OPENING_WEIGHTS
    return MIDDLEGAME_WEIGHTS


def material_balance(board: chess.Board) -> int:
    """Material in centipawns, White minus Black. Kings are not counted."""
    score = 0
    for piece_type in (chess.PAWN, chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN):
        count = len(board.pieces(piece_type, chess.WHITE)) - len(board.pieces(piece_type, chess.BLACK))
        score += count * PIECE_VALUES[piece_type]
    return score


def check_bonus(board: chess.Board) -> int:
    """
    Bonus for the side that delivered check, White positive.

    In a legal position only the side to move can be in check, so the checking
    side is always the opponent of the side to move.
    """
    if not board.is_check():
        return 0
    return -CHECK_BONUS if board.turn == chess.WHITE else CHECK_BONUS


def positional_score(board: chess.Board, phase: float) -> int:
    """
    Centralization score for all pieces, White positive.

    Each piece type's signed centralization sum is multiplied by its scaled
    phase weight and truncated toward zero, type by type. Rooks are subtracted.
    """
    sums: dict[int, float] = {}
    for square, piece in board.piece_map().items():
        value = CENTRALIZATION[square]
        if piece.color == chess.BLACK:
            value = -value
        sums[piece.piece_type] = sums.get(piece.piece_type, 0.0) + value

    score = 0
    for piece_type, weight in phase_weights(phase).items():
        term = int(sums.get(piece_type, 0.0) * weight * POSITIONAL_SCALE)
        if piece_type == chess.ROOK:
            score -= term
        else:
            score += term
    return score


def evaluate(board: chess.Board) -> int:
    """
    Phase-aware centipawn evaluation from the side-to-move's perspective.

    Args:
        board: The current board position. Not modified.

    Returns:
        Centipawn score; positive means the side to move is ahead. The
        magnitude stays far below the mate score, so mates always dominate.

    Example:
        >>> import chess
        >>> evaluate(chess.Board())  # symmetric start
        0
    """
    score = material_balance(board)
    score += check_bonus(board)
    score += positional_score(board, game_phase(board))
    return score if board.turn == chess.WHITE else -score


def evaluate_mobility(board: chess.Board) -> int:
    """Material plus five centipawns per legal move, plus the check bonus (mover-relative)."""
    score = material_balance(board) + check_bonus(board)
    if board.turn == chess.BLACK:
        score = -score
    return score + board.legal_moves.count() * MOBILITY_WEIGHT


def evaluate_material(board: chess.Board) -> int:
    """Material only, from the side-to-move's perspective."""
    score = material_balance(board)
    return score if board.turn == chess.WHITE else -score


EVALUATORS: dict[str, Evaluator] = {
    "centralization": evaluate,
    "mobility": evaluate_mobility,
    "material": evaluate_material,
}
