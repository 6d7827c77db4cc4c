"""
Metrics for the Resource Allocation Graph Analyzer.

Summarizes the size and resource usage of a graph snapshot.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from models.edge import EdgeKind
from models.graph import ResourceGraph
from algorithms.projections import availability


@dataclass
class GraphMetrics:
    """
    Size and utilization figures for one graph snapshot.

    Attributes:
        process_count: Number of process nodes
        resource_count: Number of resource nodes
        request_count: Number of request edges (outstanding demand)
        allocation_count: Number of allocation edges
        total_instances: Sum of resource capacities
        allocated_instances: Instances held, capped at each resource's capacity
        resource_utilization: Per-resource (allocated / instances) × 100
        over_allocated: Resources with more allocation edges than instances
    """
    process_count: int = 0
    resource_count: int = 0
    request_count: int = 0
    allocation_count: int = 0
    total_instances: int = 0
    allocated_instances: int = 0
    resource_utilization: Dict[str, float] = field(default_factory=dict)
    over_allocated: List[str] = field(default_factory=list)

    @classmethod
    def from_graph(cls, graph: ResourceGraph) -> "GraphMetrics":
        """Collect metrics from a graph snapshot."""
        available = availability(graph)
        metrics = cls(
            process_count=len(graph.processes()),
            resource_count=len(available.resource_ids),
            request_count=sum(1 for e in graph.edges if e.kind == EdgeKind.REQUEST),
            allocation_count=sum(1 for e in graph.edges if e.kind == EdgeKind.ALLOCATION),
            total_instances=int(available.totals.sum()),
        )

        for j, resource_id in enumerate(available.resource_ids):
            total = int(available.totals[j])
            held = total - int(available.values[j])
            if held > total:
                metrics.over_allocated.append(resource_id)
            held = min(held, total)
            metrics.allocated_instances += held
            metrics.resource_utilization[resource_id] = (held / total) * 100

        return metrics

    @property
    def node_count(self) -> int:
        return self.process_count + self.resource_count

    @property
    def edge_count(self) -> int:
        return self.request_count + self.allocation_count

    def get_utilization(self) -> float:
        """Overall utilization percentage (allocated / total instances)."""
        if self.total_instances == 0:
            return 0.0
        return (self.allocated_instances / self.total_instances) * 100

    def display(self) -> str:
        """Format metrics for display."""
        result = "\nGraph Metrics:\n"
        result += f"  Processes: {self.process_count}, Resources: {self.resource_count}\n"
        result += f"  Request edges: {self.request_count}, Allocation edges: {self.allocation_count}\n"
        result += (
            f"  Resource Utilization: {self.get_utilization():.2f}% "
            f"({self.allocated_instances}/{self.total_instances} instances)"
        )
        if self.over_allocated:
            result += f"\n  Over-allocated: {', '.join(self.over_allocated)}"
        return result
