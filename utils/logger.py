"""
Logger utility for the Resource Allocation Graph Analyzer.

Writes analysis outcomes and graph mutations to the console and,
optionally, to a log file.
"""

from typing import Optional
from datetime import datetime


LEVEL_PREFIXES = {
    "error": "[ERROR] ",
    "warning": "[WARNING] ",
    "debug": "[DEBUG] ",
    "success": "[OK] ",
    "info": "",
}


class AnalyzerLogger:
    """
    Console/file logger for the analyzer.

    Mutations arrive at debug level and are shown only when verbose.
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        self.verbose = verbose
        self.log_file = log_file
        self._sink = None

        if log_file:
            self._sink = open(log_file, 'w', encoding='utf-8')
            started = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self._sink.write(f"Graph Analysis Log - {started}\n{'='*60}\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Emit one message.

        Args:
            message: Text to emit
            level: One of info, success, warning, error, debug
        """
        if level == "debug" and not self.verbose:
            return

        line = LEVEL_PREFIXES.get(level, "") + message
        print(line)
        if self._sink:
            self._sink.write(line + "\n")
            self._sink.flush()

    def log_mutation(self, message: str) -> None:
        """Record a graph mutation (debug level)."""
        self.log(message, "debug")

    def log_deadlock(self, report) -> None:
        """Report a DeadlockReport; cycles are listed at debug level."""
        if not report.deadlocked:
            self.log("No deadlock detected - system is safe", "success")
            return
        self.log(str(report), "error")
        for cycle in report.cycles:
            self.log("  Cycle: " + " → ".join(cycle + cycle[:1]), "debug")

    def log_safety(self, report) -> None:
        """Report a SafetyReport."""
        self.log(str(report), "success" if report.safe else "error")

    def close(self) -> None:
        if self._sink:
            self._sink.close()
            self._sink = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        self.close()
