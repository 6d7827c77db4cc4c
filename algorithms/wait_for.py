"""
Wait-For Graph Builder for the Resource Allocation Graph Analyzer.

Collapses request/allocation pairs into process-to-process "waits-for" edges:
P -> P' when P requests a resource that P' holds.
"""

from typing import Dict, List, Optional, Tuple

from models.edge import Edge, EdgeKind
from models.graph import ResourceGraph


# (request edges by requesting process, allocation edges by resource)
EdgeIndex = Tuple[Dict[str, List[Edge]], Dict[str, List[Edge]]]


def build_wait_for_graph(graph: ResourceGraph) -> Dict[str, List[str]]:
    """
    Build the wait-for adjacency of every process.

    For each request edge P -> R (in insertion order), every allocation edge
    R -> P' with P' != P adds P' to P's neighbours. A holder reached twice
    (through several resources or parallel edges) is listed once, at the
    position it was first added.

    Args:
        graph: Graph snapshot

    Returns:
        Dict mapping each process id (declared order) to its ordered neighbours;
        processes with no outstanding request map to an empty list
    """
    wait_for: Dict[str, List[str]] = {p.node_id: [] for p in graph.processes()}
    _, holders = index_edges(graph)

    for edge in graph.edges:
        if edge.kind != EdgeKind.REQUEST:
            continue
        neighbours = wait_for.get(edge.source)
        if neighbours is None:
            continue
        for allocation in holders.get(edge.target, []):
            holder = allocation.target
            if holder != edge.source and holder not in neighbours:
                neighbours.append(holder)

    return wait_for


def index_edges(graph: ResourceGraph) -> EdgeIndex:
    """Group request edges by process and allocation edges by resource, keeping insertion order."""
    requests: Dict[str, List[Edge]] = {}
    holders: Dict[str, List[Edge]] = {}
    for edge in graph.edges:
        if edge.kind == EdgeKind.REQUEST:
            requests.setdefault(edge.source, []).append(edge)
        else:
            holders.setdefault(edge.source, []).append(edge)
    return requests, holders


def edges_for_step(
    graph: ResourceGraph,
    waiter: str,
    holder: str,
    index: Optional[EdgeIndex] = None
) -> Tuple[List[str], List[str]]:
    """
    Map one wait-for step back to the graph edges that produce it.

    A request edge waiter -> R counts when at least one allocation edge
    R -> holder exists; it is returned together with all such allocation edges.

    Args:
        graph: Graph snapshot
        waiter: Process that waits
        holder: Process that holds the awaited resource
        index: Result of index_edges(graph), to reuse across many steps

    Returns:
        Tuple of (edge ids, resource ids involved)
    """
    requests, holders = index if index is not None else index_edges(graph)
    edge_ids: List[str] = []
    resource_ids: List[str] = []

    for request in requests.get(waiter, []):
        matching = [a for a in holders.get(request.target, []) if a.target == holder]
        if not matching:
            continue
        edge_ids.append(request.edge_id)
        edge_ids.extend(a.edge_id for a in matching)
        if request.target not in resource_ids:
            resource_ids.append(request.target)

    return edge_ids, resource_ids
