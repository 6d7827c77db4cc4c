"""
Graph Analysis Library for the Resource Allocation Graph Analyzer.

Called by rag_analyzer.py to run every analysis on one graph snapshot and
render the result as text.
"""

from dataclasses import dataclass
from typing import List

from models.graph import ResourceGraph
from models.reports import DeadlockReport, SafetyReport
from algorithms.avoidance import evaluate_safety
from algorithms.detection import detect_deadlock
from algorithms.projections import (
    AvailabilityVector,
    ResourceTable,
    allocation_matrix,
    availability,
    request_matrix,
)
from analysis.metrics import GraphMetrics


@dataclass
class GraphAnalysis:
    """All analysis results for one graph snapshot."""
    deadlock: DeadlockReport
    safety: SafetyReport
    allocation: ResourceTable
    request: ResourceTable
    available: AvailabilityVector
    metrics: GraphMetrics

    def has_problem(self) -> bool:
        """Check if the graph is deadlocked or unsafe."""
        return self.deadlock.deadlocked or not self.safety.safe

    def display(self) -> str:
        """
        Generate readable string representation of the analysis.

        Returns:
            Formatted string showing both reports, all tables and the metrics
        """
        output = []
        output.append("\n" + "="*60)
        output.append("RESOURCE ALLOCATION GRAPH ANALYSIS")
        output.append("="*60)

        output.append("\nDeadlock Detection:")
        output.append(f"  {self.deadlock}")
        for cycle in self.deadlock.cycles:
            output.append("  Cycle: " + " → ".join(cycle + cycle[:1]))
        if self.deadlock.edge_ids:
            output.append(f"  Cycle edges: {', '.join(sorted(self.deadlock.edge_ids))}")

        output.append("\nBanker's Algorithm:")
        output.append(f"  {self.safety}")

        output.append(format_tables(self.allocation, self.request, self.available))
        output.append(self.metrics.display())
        output.append("\n" + "="*60)
        return "\n".join(output)


def analyze_graph(graph: ResourceGraph) -> GraphAnalysis:
    """
    Run deadlock detection, the safety evaluation and all projections.

    Args:
        graph: Graph snapshot (not modified)

    Returns:
        GraphAnalysis bundling every result
    """
    return GraphAnalysis(
        deadlock=detect_deadlock(graph),
        safety=evaluate_safety(graph),
        allocation=allocation_matrix(graph),
        request=request_matrix(graph),
        available=availability(graph),
        metrics=GraphMetrics.from_graph(graph),
    )


def format_tables(
    allocation: ResourceTable,
    request: ResourceTable,
    available: AvailabilityVector
) -> str:
    """Format the Allocation and Request matrices and the Available vector."""
    output = []
    output.append("\nAllocation Matrix:")
    output.extend(_format_table(allocation))
    output.append("\nRequest Matrix:")
    output.extend(_format_table(request))

    output.append("\nAvailable Resources:")
    if not available.resource_ids:
        output.append("  (no resources)")
    for j, resource_id in enumerate(available.resource_ids):
        output.append(
            f"  {resource_id:>6}: {int(available.values[j])} / {int(available.totals[j])}"
        )
    return "\n".join(output)


def _format_table(table: ResourceTable) -> List[str]:
    if not table.process_ids or not table.resource_ids:
        return ["  (empty)"]
    rows = ["        " + " ".join(f"{r:>5}" for r in table.resource_ids)]
    for i, process_id in enumerate(table.process_ids):
        cells = " ".join(f"{int(v):5}" for v in table.values[i])
        rows.append(f"  {process_id:>5} {cells}")
    return rows
