"""
Last-PV cache: the principal variation of the most recent search.

Between two `go` commands the game usually advances by two plies (our move and
the reply). If the reply was the one the previous search predicted, the rest
of that line is an excellent ordering hint for the new search. The cache
records the root position together with the line and only hands out the part
of it that continues from the position actually being searched. It is
advisory: a stale or unrelated cache yields an empty hint, never an error.
"""

from dataclasses import dataclass, field

import chess

from sharp.constants import PV_CACHE_LENGTH


@dataclass
class PvCache:
    """
    Engine-lifetime store for the last principal variation.

    Attributes:
        max_length: How many moves of a PV to keep (best move + continuation).
        root_fen:   FEN of the position the cached line starts from, or None.
        moves:      The cached line.
    """

    max_length: int = PV_CACHE_LENGTH
    root_fen: str | None = None
    moves: list[chess.Move] = field(default_factory=list)

    def store(self, board: chess.Board, pv: list[chess.Move]) -> None:
        """Remember `pv` as the line found from `board`'s current position."""
        self.root_fen = board.fen()
        self.moves = list(pv[: self.max_length])

    def clear(self) -> None:
        self.root_fen = None
        self.moves = []

    def hint_for(self, board: chess.Board) -> tuple[chess.Move, ...]:
        """
        Return the cached moves that continue from `board`'s position.

        The cached line is replayed from its root; if `board` matches the
        position after k plies (ignoring move counters), the remaining moves
        are returned. Otherwise the hint is empty.
        """
        if self.root_fen is None or not self.moves:
            return ()

        target = board.epd()
        replay = chess.Board(self.root_fen)
        for index, move in enumerate(self.moves):
            if replay.epd() == target:
                return tuple(self.moves[index:])
            if not replay.is_legal(move):
                return ()
            replay.push(move)
        return ()
