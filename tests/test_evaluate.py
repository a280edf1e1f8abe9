"""Static evaluation: material, check bonus, game phase, centralization."""

import chess
import pytest

from sharp.config import EVALUATOR_NAMES
from sharp.constants import (
    CHECK_BONUS,
    ENDGAME_WEIGHTS,
    MIDDLEGAME_WEIGHTS,
    MOBILITY_WEIGHT,
    OPENING_WEIGHTS,
)
from sharp.evaluate import (
    EVALUATORS,
    centralization,
    check_bonus,
    evaluate,
    evaluate_material,
    evaluate_mobility,
    game_phase,
    material_balance,
    phase_weights,
    positional_score,
)

QUEEN_UP_WHITE = "4k3/8/8/8/8/8/8/3QK3 w - - 0 1"
QUEEN_UP_BLACK_TO_MOVE = "4k3/8/8/8/8/8/8/3QK3 b - - 0 1"
BLACK_IN_CHECK = "4k3/8/8/8/8/8/8/4QK2 b - - 0 1"


class TestCentralization:
    def test_corners_are_zero(self):
        for sq in (chess.A1, chess.H1, chess.A8, chess.H8):
            assert centralization(sq) == 0.0

    def test_centre_squares(self):
        for sq in (chess.D4, chess.E4, chess.D5, chess.E5):
            assert centralization(sq) == pytest.approx(1 - 0.5 / 3.5)

    def test_values_in_unit_interval(self):
        assert all(0.0 <= centralization(sq) <= 1.0 for sq in chess.SQUARES)

    def test_chebyshev_rings(self):
        # c3 is one ring further out than d4, b2 two rings.
        assert centralization(chess.C3) == pytest.approx(1 - 1.5 / 3.5)
        assert centralization(chess.B2) == pytest.approx(1 - 2.5 / 3.5)
        assert centralization(chess.B7) == centralization(chess.B2)


class TestGamePhase:
    def test_start_is_opening(self):
        assert game_phase(chess.Board()) == 0.0

    def test_bare_kings_is_endgame(self):
        assert game_phase(chess.Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")) == 1.0

    def test_queen_only(self):
        assert game_phase(chess.Board(QUEEN_UP_WHITE)) == pytest.approx(1 - 9 / 78)

    def test_extra_promoted_material_is_clamped(self):
        board = chess.Board("QQQQkQQQ/8/8/8/8/8/8/QQQQKQQQ w - - 0 1")
        assert game_phase(board) == 0.0

    @pytest.mark.parametrize(
        "phase,expected",
        [
            (0.0, OPENING_WEIGHTS),
            (0.39, OPENING_WEIGHTS),
            (0.4, MIDDLEGAME_WEIGHTS),
            (0.75, MIDDLEGAME_WEIGHTS),
            (0.76, ENDGAME_WEIGHTS),
            (1.0, ENDGAME_WEIGHTS),
        ],
    )
    def test_weight_table_thresholds(self, phase, expected):
        assert phase_weights(phase) is expected

    def test_endgame_table_has_no_pawn_term(self):
        assert chess.PAWN not in ENDGAME_WEIGHTS


class TestMaterialAndCheck:
    def test_material_balance(self):
        assert material_balance(chess.Board()) == 0
        assert material_balance(chess.Board(QUEEN_UP_WHITE)) == 900

    def test_evaluate_material_is_mover_relative(self):
        assert evaluate_material(chess.Board(QUEEN_UP_WHITE)) == 900
        assert evaluate_material(chess.Board(QUEEN_UP_BLACK_TO_MOVE)) == -900

    def test_check_bonus_goes_to_checking_side(self):
        board = chess.Board(BLACK_IN_CHECK)
        assert board.is_check()
        assert check_bonus(board) == CHECK_BONUS

    def test_no_check_no_bonus(self):
        assert check_bonus(chess.Board()) == 0

    def test_check_bonus_in_full_evaluation(self):
        board = chess.Board(BLACK_IN_CHECK)
        white_view = (
            material_balance(board)
            + CHECK_BONUS
            + positional_score(board, game_phase(board))
        )
        assert evaluate(board) == -white_view


class TestEvaluate:
    def test_start_position_is_zero(self):
        assert evaluate(chess.Board()) == 0

    def test_negated_for_black(self):
        white = evaluate(chess.Board(QUEEN_UP_WHITE))
        black = evaluate(chess.Board(QUEEN_UP_BLACK_TO_MOVE))
        assert white == -black
        assert white > 800

    def test_idempotent_and_non_mutating(self):
        board = chess.Board("r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4")
        fen = board.fen()
        first = evaluate(board)
        assert evaluate(board) == first
        assert board.fen() == fen

    def test_central_rook_is_penalized(self):
        central = chess.Board("4k3/8/8/8/3R4/8/8/4K3 w - - 0 1")
        corner = chess.Board("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        assert evaluate(central) < evaluate(corner)

    def test_central_knight_is_rewarded(self):
        central = chess.Board("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1")
        corner = chess.Board("4k3/8/8/8/8/8/8/N3K3 w - - 0 1")
        assert evaluate(central) > evaluate(corner)

    def test_endgame_king_wants_centre(self):
        central = chess.Board("k7/8/8/8/3K4/8/8/8 w - - 0 1")
        rim = chess.Board("k7/8/8/8/8/8/8/K7 w - - 0 1")
        assert evaluate(central) > evaluate(rim)

    def test_opening_king_stays_home(self):
        # Full material, only the white king differs: centre is penalized.
        home = chess.Board()
        exposed = chess.Board("rnbqkbnr/pppppppp/8/8/3K4/8/PPPPPPPP/RNBQ1BNR w kq - 0 1")
        assert evaluate(exposed) < evaluate(home)

    def test_weights_scaled_and_truncated(self):
        # One white knight on d4 in the endgame: int(0.857 * 150 * 0.75) = 96.
        board = chess.Board("k7/8/8/8/3N4/8/8/K7 w - - 0 1")
        assert positional_score(board, game_phase(board)) == int((1 - 0.5 / 3.5) * 150 * 0.75)

    def test_far_below_mate_score(self):
        board = chess.Board("QQQQkQQQ/8/8/8/8/8/8/4K3 w - - 0 1")
        assert abs(evaluate(board)) < 100_000


class TestAlternativeEvaluators:
    def test_mobility_start_position(self):
        assert evaluate_mobility(chess.Board()) == 20 * MOBILITY_WEIGHT

    def test_mobility_includes_material(self):
        board = chess.Board(QUEEN_UP_WHITE)
        expected = 900 + board.legal_moves.count() * MOBILITY_WEIGHT
        assert evaluate_mobility(board) == expected

    def test_registry_covers_config_names(self):
        assert set(EVALUATORS) == set(EVALUATOR_NAMES)
        assert EVALUATORS["centralization"] is evaluate
