"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that allows chess GUIs and testing
tools (like cutechess-cli) to communicate with chess engines. The engine
reads commands from stdin and writes responses to stdout. All output lines
must be flushed immediately; GUI programs read line by line.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, position, go, stop, quit
    Engine → GUI: id name, id author, uciok, readyok, info, bestmove

Execution model:
    The search runs synchronously on the main thread. "go" blocks until the
    search returns, then prints "bestmove". Time-bounded searches stop on
    their own when the movetime expires, so "stop" has nothing to interrupt
    and is accepted as a no-op.

Critical rule: NEVER print to stdout except for valid UCI responses.
Diagnostics go to stderr through the logging module.
"""

import logging
import sys
import os
from typing import Callable

# ---------------------------------------------------------------------------
# Path setup: make 'sharp' importable when this script is run directly
# (`python interface/uci.py` from the repo root) without installing it.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import chess

from sharp.config import EngineConfig
from sharp.pv_cache import PvCache
from sharp.search import SearchInfo, SearchResult, get_best_move

_log = logging.getLogger(__name__)

# Promotion letters for coordinate notation; anything unexpected becomes a queen.
_PROMOTION_LETTERS: dict[int, str] = {
    chess.QUEEN: "q",
    chess.ROOK: "r",
    chess.BISHOP: "b",
    chess.KNIGHT: "n",
}


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    Args:
        line: The UCI response line to send (without trailing newline).
    """
    print(line, flush=True)


def move_to_uci(move: chess.Move) -> str:
    """Coordinate notation: origin + destination + optional promotion letter."""
    text = chess.square_name(move.from_square) + chess.square_name(move.to_square)
    if move.promotion is not None:
        text += _PROMOTION_LETTERS.get(move.promotion, "q")
    return text


def find_move(board: chess.Board, text: str) -> chess.Move | None:
    """Return the legal move written as `text`, or None if there is none."""
    for move in board.legal_moves:
        if move_to_uci(move) == text:
            return move
    return None


def format_info(info: SearchInfo) -> str:
    """Render a progress report as a UCI info line."""
    pv = " ".join(move_to_uci(move) for move in info.pv)
    return (
        f"info depth {info.depth} nodes {info.nodes} score cp {info.score} "
        f"pv {pv} time {info.time_ms} nps {info.nps}"
    )


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Holds the current board position and the last principal variation. The
    main UCI loop creates one instance and dispatches commands to it.

    Attributes:
        board:    The current board position, updated by "position" commands.
        pv_cache: PV of the previous search, used as an ordering hint.
        config:   Engine configuration (default depth, evaluator, identity).
        send:     Output function for protocol lines.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        send: Callable[[str], None] = _send,
    ) -> None:
        self.config: EngineConfig = config or EngineConfig()
        self.board: chess.Board = chess.Board()
        self.pv_cache: PvCache = PvCache(max_length=self.config.pv_cache_length)
        self.send = send

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Reply with the engine identity and "uciok"."""
        self.send(f"id name {self.config.engine_name}")
        self.send(f"id author {self.config.engine_author}")
        self.send("uciok")

    def handle_isready(self) -> None:
        self.send("readyok")

    def handle_ucinewgame(self) -> None:
        """
        Respond to the "ucinewgame" command.

        Resets the board to the starting position and forgets the cached
        principal variation, which belongs to the previous game.
        """
        self.board = chess.Board()
        self.pv_cache.clear()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos
            position startpos moves e2e4 e7e5 ...
            position fen <6 FEN fields>
            position fen <6 FEN fields> moves e2e4 e7e5 ...

        Moves are matched against the legal moves of the position reached so
        far. A move that matches nothing is skipped and the rest of the list
        is still applied. An invalid FEN raises ValueError from python-chess
        and leaves the current position untouched.

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return

        if tokens[0] == "startpos":
            board = chess.Board()
            rest = tokens[1:]
        elif tokens[0] == "fen":
            board = chess.Board(" ".join(tokens[1:7]))
            rest = tokens[7:]
        else:
            _log.debug("ignoring unknown position type: %s", tokens[0])
            return

        if rest and rest[0] == "moves":
            for text in rest[1:]:
                move = find_move(board, text)
                if move is None:
                    _log.debug("ignoring move not legal here: %s", text)
                    continue
                board.push(move)

        self.board = board

    def handle_go(self, tokens: list[str]) -> None:
        """
        Parse a "go" command, run the search and print the result.

        Supported parameters:
            depth <plies>     fixed-depth search
            movetime <ms>     time-bounded iterative deepening (depth ignored)

        Zero or more "info" lines are printed while searching, followed by
        exactly one "bestmove" line. Without legal moves the reply is
        "bestmove (none)".

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        depth, movetime_ms = self._parse_go(tokens)

        result: SearchResult = get_best_move(
            self.board,
            depth=depth,
            movetime_ms=movetime_ms,
            config=self.config,
            pv_cache=self.pv_cache,
            on_info=lambda info: self.send(format_info(info)),
        )

        if result.move is None:
            self.send("bestmove (none)")
        else:
            self.send(f"bestmove {move_to_uci(result.move)}")

    def handle_quit(self) -> None:
        """Exit the process. The GUI does not expect a reply after "quit"."""
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    @staticmethod
    def _parse_go(tokens: list[str]) -> tuple[int | None, int]:
        """
        Extract depth and movetime from "go" tokens.

        Unknown keys and non-integer values are ignored.

        Returns:
            (depth or None, movetime in milliseconds or 0).
        """
        depth: int | None = None
        movetime_ms = 0
        for key, value in zip(tokens, tokens[1:]):
            try:
                if key == "depth":
                    depth = int(value)
                elif key == "movetime":
                    movetime_ms = int(value)
            except ValueError:
                _log.debug("ignoring non-integer go parameter: %s %s", key, value)
        return depth, movetime_ms

    def dispatch(self, line: str) -> None:
        """Run one protocol line. Unknown commands are ignored."""
        tokens = line.split()
        if not tokens:
            return

        command, args = tokens[0], tokens[1:]
        if command == "uci":
            self.handle_uci()
        elif command == "isready":
            self.handle_isready()
        elif command == "ucinewgame":
            self.handle_ucinewgame()
        elif command == "position":
            self.handle_position(args)
        elif command == "go":
            self.handle_go(args)
        elif command == "stop":
            pass
        elif command == "quit":
            self.handle_quit()
        else:
            _log.debug("ignoring unknown command: %r", command)


def run_uci_loop(config: EngineConfig | None = None) -> None:
    """
    Main UCI protocol loop.

    Reads lines from stdin and dispatches each command to the UciHandler.
    Runs until the "quit" command is received or stdin is closed.

    Error handling:
        Each command is wrapped in a try/except so that a malformed command
        (e.g. an unparsable FEN) does not crash the engine. The error is
        logged to stderr and the loop continues with the next line.
    """
    config = config or EngineConfig.from_env()
    logging.basicConfig(
        stream=sys.stderr,
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    handler = UciHandler(config)

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue
        try:
            handler.dispatch(line)
        except Exception as e:
            _log.error("unhandled error for command %r: %s", line.split()[0], e)


if __name__ == "__main__":
    run_uci_loop()
