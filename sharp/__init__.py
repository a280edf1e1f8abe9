"""
Sharp chess engine package.

This package implements the decision-making core of a UCI chess engine:
principal variation search with late-move reduction, iterative deepening
under a time budget, heuristic move ordering, and a phase-aware
centralization evaluation. Board rules (move generation, make/unmake,
check detection, FEN and UCI notation) come from python-chess.

Modules:
    constants     - Piece values, ordering tiers, score bounds, phase tables
    config        - EngineConfig dataclass and SHARP_* environment overrides
    evaluate      - Static evaluation (material, check bonus, centralization)
    move_ordering - PV move, castling, MVV-LVA, promotions, checks
    pv_cache      - Principal variation kept between searches
    search        - PVS, root search, iterative deepening, time management
"""
