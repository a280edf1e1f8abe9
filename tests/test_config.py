from sharp.config import EngineConfig
from sharp.constants import DEFAULT_DEPTH


class TestEngineConfig:
    def test_defaults(self):
        cfg = EngineConfig.from_env({})
        assert cfg == EngineConfig()
        assert cfg.default_depth == DEFAULT_DEPTH
        assert cfg.use_lmr
        assert cfg.evaluator == "centralization"

    def test_overrides(self):
        cfg = EngineConfig.from_env({
            "SHARP_DEPTH": "3",
            "SHARP_EVALUATOR": "mobility",
            "SHARP_LMR": "off",
            "SHARP_LOG_LEVEL": "debug",
        })
        assert cfg.default_depth == 3
        assert cfg.evaluator == "mobility"
        assert not cfg.use_lmr
        assert cfg.log_level == "DEBUG"

    def test_invalid_values_are_ignored(self, caplog):
        cfg = EngineConfig.from_env({
            "SHARP_DEPTH": "deep",
            "SHARP_EVALUATOR": "neural",
            "SHARP_LOG_LEVEL": "loud",
        })
        assert cfg.default_depth == DEFAULT_DEPTH
        assert cfg.evaluator == "centralization"
        assert cfg.log_level == "WARNING"
        assert len(caplog.records) == 3

    def test_depth_floor(self):
        assert EngineConfig.from_env({"SHARP_DEPTH": "-2"}).default_depth == 1

    def test_lmr_stays_on_for_truthy_values(self):
        assert EngineConfig.from_env({"SHARP_LMR": "1"}).use_lmr
