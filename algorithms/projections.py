"""
Matrix Projections for the Resource Allocation Graph Analyzer.

Derives the Allocation and Request matrices and the Available vector from the
edge set. Views are recomputed on every call and never cached, so they can
never be stale.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List

from models.edge import EdgeKind
from models.graph import ResourceGraph


@dataclass(frozen=True, eq=False)
class ResourceTable:
    """
    Read-only [P][R] table keyed by process and resource ids.

    Attributes:
        process_ids: Row ids in declared order
        resource_ids: Column ids in declared order
        values: Integer matrix of shape (len(process_ids), len(resource_ids))
    """
    process_ids: List[str]
    resource_ids: List[str]
    values: np.ndarray

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResourceTable):
            return NotImplemented
        return (
            self.process_ids == other.process_ids
            and self.resource_ids == other.resource_ids
            and np.array_equal(self.values, other.values)
        )

    def get(self, process_id: str, resource_id: str) -> int:
        """Cell lookup; unknown ids read as 0."""
        try:
            i = self.process_ids.index(process_id)
            j = self.resource_ids.index(resource_id)
        except ValueError:
            return 0
        return int(self.values[i][j])

    def row(self, process_id: str) -> np.ndarray:
        """Row for one process; an unknown process gives a zero row."""
        if process_id not in self.process_ids:
            return np.zeros(len(self.resource_ids), dtype=int)
        return self.values[self.process_ids.index(process_id)]

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        """Nested {process: {resource: count}} copy of the table."""
        return {
            p: {r: int(self.values[i][j]) for j, r in enumerate(self.resource_ids)}
            for i, p in enumerate(self.process_ids)
        }


@dataclass(frozen=True, eq=False)
class AvailabilityVector:
    """
    Read-only [R] vector of free instances per resource.

    Values may be negative when a resource has more allocation edges than
    instances.

    Attributes:
        resource_ids: Resource ids in declared order
        values: Free instances (capacity minus allocation edges)
        totals: Capacity of each resource
    """
    resource_ids: List[str]
    values: np.ndarray
    totals: np.ndarray

    def __eq__(self, other) -> bool:
        if not isinstance(other, AvailabilityVector):
            return NotImplemented
        return (
            self.resource_ids == other.resource_ids
            and np.array_equal(self.values, other.values)
            and np.array_equal(self.totals, other.totals)
        )

    def get(self, resource_id: str) -> int:
        """Free instances of one resource; unknown ids read as 0."""
        if resource_id not in self.resource_ids:
            return 0
        return int(self.values[self.resource_ids.index(resource_id)])

    def total(self, resource_id: str) -> int:
        """Capacity of one resource; unknown ids read as 0."""
        if resource_id not in self.resource_ids:
            return 0
        return int(self.totals[self.resource_ids.index(resource_id)])

    def as_dict(self) -> Dict[str, int]:
        return {r: int(self.values[j]) for j, r in enumerate(self.resource_ids)}


def allocation_matrix(graph: ResourceGraph) -> ResourceTable:
    """
    Build the Allocation matrix.

    Allocation[p][r] = number of allocation edges r -> p.
    """
    return _count_edges(graph, EdgeKind.ALLOCATION)


def request_matrix(graph: ResourceGraph) -> ResourceTable:
    """
    Build the Request matrix.

    Request[p][r] = number of request edges p -> r.
    """
    return _count_edges(graph, EdgeKind.REQUEST)


def availability(graph: ResourceGraph) -> AvailabilityVector:
    """
    Build the Available vector.

    Available[r] = instances of r minus the allocation edges leaving r.
    """
    resources = graph.resources()
    resource_ids = [r.node_id for r in resources]
    column = {rid: j for j, rid in enumerate(resource_ids)}

    totals = np.array([r.instances for r in resources], dtype=int)
    values = totals.copy()
    for edge in graph.edges:
        if edge.kind == EdgeKind.ALLOCATION and edge.source in column:
            values[column[edge.source]] -= 1

    values.flags.writeable = False
    totals.flags.writeable = False
    return AvailabilityVector(resource_ids=resource_ids, values=values, totals=totals)


def _count_edges(graph: ResourceGraph, kind: EdgeKind) -> ResourceTable:
    process_ids = [p.node_id for p in graph.processes()]
    resource_ids = [r.node_id for r in graph.resources()]
    row = {pid: i for i, pid in enumerate(process_ids)}
    column = {rid: j for j, rid in enumerate(resource_ids)}

    values = np.zeros((len(process_ids), len(resource_ids)), dtype=int)
    for edge in graph.edges:
        if edge.kind != kind:
            continue
        i = row.get(edge.process_id)
        j = column.get(edge.resource_id)
        if i is not None and j is not None:
            values[i][j] += 1

    values.flags.writeable = False
    return ResourceTable(process_ids=process_ids, resource_ids=resource_ids, values=values)
