"""
Engine configuration.

`EngineConfig` collects the tunables that callers may want to change without
editing `sharp.constants`: the default fixed depth, the endgame extension, the
evaluator in use and the identity reported over UCI. Environment variables
override the defaults so that a GUI or the benchmark script can switch
behaviour without a config file:

    SHARP_DEPTH       default fixed search depth (int)
    SHARP_EVALUATOR   "centralization", "mobility" or "material"
    SHARP_LMR         "0" / "false" disables late-move reduction
    SHARP_LOG_LEVEL   logging level name for stderr diagnostics
"""

import logging
import os
from dataclasses import dataclass

from sharp.constants import (
    DEFAULT_DEPTH,
    ENDGAME_DEPTH_EXTENSION,
    EXTENSION_PHASE,
    MAX_DEPTH,
    PV_CACHE_LENGTH,
)

_log = logging.getLogger(__name__)

EVALUATOR_NAMES: tuple[str, ...] = ("centralization", "mobility", "material")


@dataclass
class EngineConfig:
    default_depth: int = DEFAULT_DEPTH
    endgame_depth_extension: int = ENDGAME_DEPTH_EXTENSION
    extension_phase: float = EXTENSION_PHASE
    max_depth: int = MAX_DEPTH
    pv_cache_length: int = PV_CACHE_LENGTH
    use_lmr: bool = True
    evaluator: str = "centralization"
    engine_name: str = "Sharp"
    engine_author: str = "Sandeep Singh"
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> "EngineConfig":
        """
        Build a config from defaults plus SHARP_* environment overrides.

        Malformed values are logged and skipped rather than raised; a chess
        GUI launching the engine has no way to show a startup traceback.
        """
        env = os.environ if environ is None else environ
        cfg = EngineConfig()

        depth = env.get("SHARP_DEPTH")
        if depth:
            try:
                cfg.default_depth = max(1, int(depth))
            except ValueError:
                _log.warning("ignoring SHARP_DEPTH=%r: not an integer", depth)

        evaluator = env.get("SHARP_EVALUATOR")
        if evaluator:
            if evaluator in EVALUATOR_NAMES:
                cfg.evaluator = evaluator
            else:
                _log.warning("ignoring SHARP_EVALUATOR=%r: expected one of %s", evaluator, EVALUATOR_NAMES)

        lmr = env.get("SHARP_LMR")
        if lmr:
            cfg.use_lmr = lmr.strip().lower() not in ("0", "false", "no", "off")

        level = env.get("SHARP_LOG_LEVEL")
        if level:
            if isinstance(logging.getLevelName(level.upper()), int):
                cfg.log_level = level.upper()
            else:
                _log.warning("ignoring SHARP_LOG_LEVEL=%r: unknown level", level)

        return cfg
