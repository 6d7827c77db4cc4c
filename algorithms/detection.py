"""
Deadlock Detection Algorithm for the Resource Allocation Graph Analyzer.

Implements cycle detection by depth-first search over the wait-for graph.
"""

from typing import Dict, Iterator, List, Optional, Set, Tuple

from models.graph import ResourceGraph
from models.reports import DeadlockReport
from algorithms.wait_for import build_wait_for_graph, edges_for_step, index_edges


def detect_deadlock(graph: ResourceGraph) -> DeadlockReport:
    """
    Detect deadlock as a cycle in the wait-for graph.

    Algorithm:
    1. Build the wait-for graph from request/allocation edges
    2. Start a depth-first search from each unvisited process (declared order)
    3. Track the processes on the current search path
    4. A neighbour already on the path closes a cycle: the path slice from
       that neighbour through the current process; the search of this tree stops
    5. Map every step P -> P' of each cycle back to the request edge P -> R
       and allocation edge(s) R -> P' behind it

    At most one cycle is reported per search tree. The question answered is
    "is the system deadlocked", so the first cycle found wins even when it is
    not the shortest.

    Time Complexity: O(P + W) search, where W = wait-for edges

    Args:
        graph: Graph snapshot (not modified)

    Returns:
        DeadlockReport; empty when the wait-for graph is acyclic
    """
    wait_for = build_wait_for_graph(graph)

    visited: Set[str] = set()
    cycles: List[List[str]] = []
    for process_id in wait_for:
        if process_id in visited:
            continue
        cycle = _search_tree(process_id, wait_for, visited)
        if cycle:
            cycles.append(cycle)

    if not cycles:
        return DeadlockReport()

    deadlocked: Set[str] = set()
    index = index_edges(graph)
    edge_ids: Set[str] = set()
    resource_ids: Set[str] = set()
    for cycle in cycles:
        deadlocked.update(cycle)
        for i, waiter in enumerate(cycle):
            holder = cycle[(i + 1) % len(cycle)]
            step_edges, step_resources = edges_for_step(graph, waiter, holder, index)
            edge_ids.update(step_edges)
            resource_ids.update(step_resources)

    return DeadlockReport(
        nodes=frozenset(deadlocked),
        edge_ids=frozenset(edge_ids),
        cycles=tuple(tuple(cycle) for cycle in cycles),
        resources=frozenset(resource_ids)
    )


def _search_tree(
    start: str,
    wait_for: Dict[str, List[str]],
    visited: Set[str]
) -> Optional[List[str]]:
    """
    Depth-first search of one tree with an explicit stack.

    Each stack frame keeps its own neighbour iterator, so neighbours are
    visited in the same order a recursive search would visit them.

    Returns:
        The first cycle found (list of process ids), or None
    """
    path: List[str] = []
    on_path: Set[str] = set()
    stack: List[Tuple[str, Iterator[str]]] = []

    def enter(node: str) -> None:
        visited.add(node)
        on_path.add(node)
        path.append(node)
        stack.append((node, iter(wait_for.get(node, []))))

    enter(start)
    while stack:
        node, neighbours = stack[-1]
        descended = False
        for neighbour in neighbours:
            if neighbour not in visited:
                enter(neighbour)
                descended = True
                break
            if neighbour in on_path:
                return path[path.index(neighbour):]
        if not descended:
            stack.pop()
            on_path.discard(node)
            path.pop()

    return None
