import pytest

from tools.bench import POSITIONS, go_command, parse_info_line, run_position


def test_parse_info_line():
    line = "info depth 3 nodes 812 score cp -35 pv e2e4 e7e5 g1f3 time 40 nps 20300"
    assert parse_info_line(line) == {
        "depth": 3,
        "nodes": 812,
        "score": -35,
        "time_ms": 40,
        "nps": 20300,
    }


def test_parse_info_line_missing_fields():
    assert parse_info_line("") == {"depth": 0, "nodes": 0, "score": 0, "time_ms": 0, "nps": 0}


def test_go_command():
    assert go_command(5, None) == "go depth 5"
    assert go_command(None, None) == "go depth 4"
    assert go_command(5, 1500) == "go movetime 1500"


def test_position_suite_is_fixed():
    assert len(POSITIONS) == 10
    assert POSITIONS[0] == ("Start", "startpos")


@pytest.mark.slow
def test_run_position_through_uci_subprocess():
    result = run_position("Start", "startpos", "go depth 1")
    assert result["move"] != "(none)"
    assert result["depth"] == 1
    assert result["nodes"] > 0
