import chess

from sharp.pv_cache import PvCache

M = chess.Move.from_uci

LINE = [M(u) for u in ("e2e4", "e7e5", "g1f3", "b8c6", "f1b5", "a7a6", "b5a4", "g8f6")]


def test_empty_cache_has_no_hint():
    assert PvCache().hint_for(chess.Board()) == ()


def test_store_truncates_to_max_length():
    cache = PvCache()
    cache.store(chess.Board(), LINE)
    assert cache.moves == LINE[:6]
    assert cache.root_fen == chess.STARTING_FEN


def test_hint_from_root_position():
    cache = PvCache()
    cache.store(chess.Board(), LINE)
    assert cache.hint_for(chess.Board()) == tuple(LINE[:6])


def test_hint_follows_played_line():
    cache = PvCache()
    cache.store(chess.Board(), LINE)
    board = chess.Board()
    board.push(LINE[0])
    board.push(LINE[1])
    assert cache.hint_for(board) == tuple(LINE[2:6])


def test_hint_empty_when_game_left_the_line():
    cache = PvCache()
    cache.store(chess.Board(), LINE)
    board = chess.Board()
    board.push(M("e2e4"))
    board.push(M("c7c5"))
    assert cache.hint_for(board) == ()


def test_hint_ignores_move_counters():
    cache = PvCache()
    cache.store(chess.Board(), LINE)
    board = chess.Board("rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 7")
    assert cache.hint_for(board) == tuple(LINE[2:6])


def test_clear():
    cache = PvCache()
    cache.store(chess.Board(), LINE)
    cache.clear()
    assert cache.root_fen is None
    assert cache.moves == []
    assert cache.hint_for(chess.Board()) == ()


def test_custom_length():
    cache = PvCache(max_length=2)
    cache.store(chess.Board(), LINE)
    assert cache.moves == LINE[:2]
