"""
Logger Tests

Tests console/file output, level prefixes and verbose gating.
"""

from utils.logger import AnalyzerLogger
from algorithms.avoidance import evaluate_safety
from algorithms.detection import detect_deadlock


def test_level_prefixes(capsys):
    logger = AnalyzerLogger()

    logger.log("plain")
    logger.log("bad", "error")
    logger.log("careful", "warning")
    logger.log("done", "success")

    assert capsys.readouterr().out.splitlines() == [
        "plain", "[ERROR] bad", "[WARNING] careful", "[OK] done"
    ]


def test_debug_needs_verbose(capsys):
    AnalyzerLogger().log_mutation("Added process P1")
    assert capsys.readouterr().out == ""

    AnalyzerLogger(verbose=True).log_mutation("Added process P1")
    assert capsys.readouterr().out == "[DEBUG] Added process P1\n"


def test_deadlock_cycles_listed_when_verbose(classic_deadlock, capsys):
    AnalyzerLogger(verbose=True).log_deadlock(detect_deadlock(classic_deadlock))

    out = capsys.readouterr().out
    assert "[ERROR] DEADLOCK DETECTED! Processes involved: P1, P2" in out
    assert "[DEBUG]   Cycle: P1 → P2 → P1" in out


def test_safe_is_ok(safe_variant, capsys):
    logger = AnalyzerLogger()

    logger.log_safety(evaluate_safety(safe_variant))
    assert capsys.readouterr().out.startswith("[OK] System is SAFE")


def test_unsafe_is_an_error(classic_deadlock, capsys):
    AnalyzerLogger().log_safety(evaluate_safety(classic_deadlock))

    assert capsys.readouterr().out.startswith("[ERROR] System is UNSAFE")


def test_log_file_closed_on_exit(tmp_path):
    path = tmp_path / "run.log"

    with AnalyzerLogger(log_file=str(path)) as logger:
        logger.log("hidden", "debug")
        logger.log("kept")

    assert logger._sink is None
    text = path.read_text(encoding="utf-8")
    assert text.startswith("Graph Analysis Log - ")
    assert "kept" in text
    assert "hidden" not in text
