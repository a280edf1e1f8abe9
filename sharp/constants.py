"""
Engine constants: piece values, ordering tiers, score bounds, phase tables.

All numeric constants used by the search and evaluation live here so that
tuning never means hunting for magic numbers inside the hot loop.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 20_000  # Ordering only; a king is never a legal capture target

# Used by MVV-LVA move ordering. The evaluator skips the king.
PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Move ordering tiers
# ---------------------------------------------------------------------------
# Tiers are spaced far enough apart that no score from a lower tier can
# overtake a higher one (the largest capture score is 1_000_000 + 9000 - 100
# plus the capture-promotion bonus, still below castling).

PV_MOVE_SCORE: int = 10_000_000
CASTLING_SCORE: int = 5_000_000
CAPTURE_BASE_SCORE: int = 1_000_000
CAPTURE_PROMOTION_BONUS: int = 500_000
PROMOTION_BASE_SCORE: int = 750_000
CHECK_SCORE: int = 500_000

# Only this many moves are brought into exact order at each node.
ORDERED_MOVE_LIMIT: int = 30

# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------
# Scores live in the 32-bit signed range. Alpha starts one above the minimum
# so that negating it is still inside the range.

MIN_SCORE: int = -(2 ** 31)
MAX_SCORE: int = 2 ** 31 - 1
ALPHA_INIT: int = MIN_SCORE + 1
BETA_INIT: int = MAX_SCORE

# Being mated with `depth` plies still to go scores -(MATE_SCORE + depth * MATE_DEPTH_BONUS).
MATE_SCORE: int = 1_000_000
MATE_DEPTH_BONUS: int = 100
DRAW_SCORE: int = 0

CHECK_BONUS: int = 50
MOBILITY_WEIGHT: int = 5

# ---------------------------------------------------------------------------
# Game phase
# ---------------------------------------------------------------------------
# Phase material uses whole-pawn units; kings are excluded.
PHASE_PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK:   5,
    chess.QUEEN:  9,
}

# 8P + 2N + 2B + 2R + Q per side
STARTING_PHASE_MATERIAL: int = 2 * (8 * 1 + 2 * 3 + 2 * 3 + 2 * 5 + 9)

ENDGAME_PHASE: float = 0.75
OPENING_PHASE: float = 0.4

# ---------------------------------------------------------------------------
# Centralization weights
# ---------------------------------------------------------------------------
# Nominal weights per phase; every weight is multiplied by POSITIONAL_SCALE.
# The rook entry is subtracted by the evaluator, so a positive weight here
# penalizes central rooks. Pawns carry no endgame term.

POSITIONAL_SCALE: float = 0.75
BOARD_CENTER: float = 3.5
MAX_CENTER_DISTANCE: float = 3.5

OPENING_WEIGHTS: dict[int, float] = {
    chess.KING:   -500.0,
    chess.QUEEN:   100.0,
    chess.ROOK:     80.0,
    chess.BISHOP:  120.0,
    chess.KNIGHT:  200.0,
    chess.PAWN:    120.0,
}

MIDDLEGAME_WEIGHTS: dict[int, float] = {
    chess.KING:   -250.0,
    chess.QUEEN:   150.0,
    chess.ROOK:    100.0,
    chess.BISHOP:  140.0,
    chess.KNIGHT:  165.0,
    chess.PAWN:    100.0,
}

ENDGAME_WEIGHTS: dict[int, float] = {
    chess.KING:    400.0,
    chess.QUEEN:   100.0,
    chess.ROOK:     75.0,
    chess.BISHOP:  125.0,
    chess.KNIGHT:  150.0,
}

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# Hard ceiling for time-bounded iterative deepening.
MAX_DEPTH: int = 256

DEFAULT_DEPTH: int = 6
ENDGAME_DEPTH_EXTENSION: int = 1
EXTENSION_PHASE: float = 0.8

# Late-move reduction: applies from LMR_MIN_DEPTH plies to go, starting at the
# LMR_MIN_INDEX-th move. Moves from LMR_DEEP_INDEX onward are reduced twice.
LMR_MIN_DEPTH: int = 3
LMR_MIN_INDEX: int = 4
LMR_DEEP_INDEX: int = 8

# Best move plus five continuation moves are kept for the next search.
PV_CACHE_LENGTH: int = 6
