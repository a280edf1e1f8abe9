#!/usr/bin/env python3
"""
Benchmark: measure depth, nodes and time per move for a fixed position suite.

Run before and after each search or evaluation change to quantify its effect.
A lower node count at the same depth indicates more effective pruning (better
move ordering, LMR); higher NPS indicates a cheaper evaluation.

Usage:
    python3 tools/bench.py                 # fixed depth 4
    python3 tools/bench.py --depth 5
    python3 tools/bench.py --movetime 2000 # iterative deepening, 2 s per position
"""
import argparse
import subprocess
import sys
import os

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable
ENGINE = os.path.join(REPO, "interface", "uci.py")

# 10 positions spanning opening, middlegame, and endgame.
# Keep this list fixed so that runs stay comparable across versions.
POSITIONS = [
    ("Start",        "startpos"),
    ("After 1.e4",   "startpos moves e2e4"),
    ("Sicilian",     "startpos moves e2e4 c7c5"),
    ("Italian",      "startpos moves e2e4 e7e5 g1f3 b8c6 f1c4"),
    ("London",       "startpos moves d2d4 d7d5 g1f3 g8f6 c1f4"),
    ("Mid-open",     "fen r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Complex mid",  "fen r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Pawn ending",  "fen 6k1/ppp2ppp/8/3p4/3P4/8/PPP2PPP/6K1 w - - 0 1"),
    ("Kingside pawns", "fen 8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "fen 8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def parse_info_line(line: str) -> dict[str, int]:
    """Extract the integer fields of a UCI info line (missing fields read as 0).

    Args:
        line: A line such as "info depth 3 nodes 812 score cp 35 pv ... time 40 nps 20300".

    Returns:
        Dict with keys depth, nodes, score, time_ms, nps.
    """
    parts = line.split()

    def _get(key: str) -> int:
        try:
            return int(parts[parts.index(key) + 1])
        except (ValueError, IndexError):
            return 0

    return {
        "depth": _get("depth"),
        "nodes": _get("nodes"),
        "score": _get("cp"),
        "time_ms": _get("time"),
        "nps": _get("nps"),
    }


def go_command(depth: int | None, movetime: int | None) -> str:
    if movetime:
        return f"go movetime {movetime}"
    return f"go depth {depth or 4}"


def run_position(label: str, pos_spec: str, go: str) -> dict:
    """Run a single position through the engine and return metrics.

    Spawns the UCI engine as a subprocess, sends the position and the go
    command, then keeps the last 'info depth' line seen before 'bestmove'.

    Args:
        label: Human-readable position name for display.
        pos_spec: UCI position string (e.g. "startpos" or "fen <FEN>").
        go: The go command to send.

    Returns:
        Dict with keys: label, move, depth, score, nodes, nps, time_ms.
    """
    env = {**os.environ, "PYTHONPATH": REPO}
    proc = subprocess.Popen(
        [PYTHON, ENGINE],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        env=env,
    )
    proc.stdin.write(f"uci\nisready\nposition {pos_spec}\n{go}\n")
    proc.stdin.flush()

    metrics = parse_info_line("")
    move = "(none)"
    for line in proc.stdout:
        line = line.strip()
        if line.startswith("info depth"):
            metrics = parse_info_line(line)
        elif line.startswith("bestmove"):
            move = line.split()[1]
            break

    proc.stdin.write("quit\n")
    proc.stdin.flush()
    proc.wait(timeout=5)

    return {"label": label, "move": move, **metrics}


def main(argv: list[str] | None = None) -> None:
    """Run all benchmark positions and print a summary table."""
    parser = argparse.ArgumentParser(description="Sharp engine benchmark")
    parser.add_argument("--depth", type=int, default=4, help="fixed search depth")
    parser.add_argument("--movetime", type=int, default=None, help="milliseconds per position")
    args = parser.parse_args(argv)
    go = go_command(args.depth, args.movetime)

    print(f"Sharp engine benchmark - {PYTHON}")
    print(f"Engine: {ENGINE}  ({go})")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Depth':>5} {'Score':>6} "
        f"{'Nodes':>8} {'NPS':>8} {'Time(ms)':>9}"
    )
    print("-" * 68)

    results = []
    for label, pos in POSITIONS:
        r = run_position(label, pos, go)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<7} {r['depth']:>5} {r['score']:>6} "
            f"{r['nodes']:>8,} {r['nps']:>8,} {r['time_ms']:>9,}"
        )

    valid = [r for r in results if r["nodes"] > 0]
    if valid:
        avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
        avg_time = sum(r["time_ms"] for r in valid) // len(valid)
        avg_nps = sum(r["nps"] for r in valid) // len(valid)
        print("-" * 68)
        print(
            f"{'AVERAGE':<14} {'':<7} {'':<5} {'':<6} "
            f"{avg_nodes:>8,} {avg_nps:>8,} {avg_time:>9,}"
        )


if __name__ == "__main__":
    main()
