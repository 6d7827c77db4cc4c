"""
Analysis reports for the Resource Allocation Graph Analyzer.

Reports are plain values computed from one graph snapshot. They are never
updated when the graph changes; callers recompute after a mutation.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class DeadlockReport:
    """
    Result of deadlock detection on the wait-for graph.

    Attributes:
        nodes: Processes lying on the detected cycle(s)
        edge_ids: Request/allocation edges that realise the cycle steps
        cycles: Each detected cycle as an ordered tuple of process ids
        resources: Resources through which the cycle steps run
    """
    nodes: FrozenSet[str] = frozenset()
    edge_ids: FrozenSet[str] = frozenset()
    cycles: Tuple[Tuple[str, ...], ...] = ()
    resources: FrozenSet[str] = frozenset()

    @property
    def deadlocked(self) -> bool:
        """True if at least one cycle was found."""
        return len(self.cycles) > 0

    def __str__(self) -> str:
        if not self.deadlocked:
            return "No deadlock detected"
        return f"DEADLOCK DETECTED! Processes involved: {', '.join(sorted(self.nodes))}"


@dataclass(frozen=True)
class SafetyReport:
    """
    Result of the Banker's safety evaluation.

    Attributes:
        safe: True if every process can finish
        sequence: Completion order when safe, None when unsafe
    """
    safe: bool
    sequence: Optional[Tuple[str, ...]] = None

    def __str__(self) -> str:
        if self.safe:
            return f"System is SAFE. Safe sequence: {' → '.join(self.sequence)}"
        return "System is UNSAFE - no safe sequence exists"
