"""
Deadlock Avoidance Algorithm (Banker's Algorithm) for the Resource Allocation Graph Analyzer.

Evaluates whether the current graph is in a safe state and produces a safe
completion sequence.
"""

import numpy as np
from typing import List

from models.graph import ResourceGraph
from models.reports import SafetyReport
from algorithms.projections import allocation_matrix, availability, request_matrix


def evaluate_safety(graph: ResourceGraph) -> SafetyReport:
    """
    Check if the graph is in a safe state using Banker's Algorithm.

    Algorithm:
    1. Initialize Work = Available, Finish = [False] * num_processes
    2. Find the first process i (declared order) where Finish[i] == False
       and Request[i] <= Work
    3. If found: Finish[i] = True, Work += Allocation[i], add it to the
       sequence, restart the scan from the first process
    4. Repeat step 2 until all processes finish (SAFE) or a full scan
       makes no progress (UNSAFE)

    Request edges are the outstanding demand of each process; there is no
    separate maximum-claim matrix.

    Time Complexity: O(P²×R)

    Args:
        graph: Graph snapshot (not modified)

    Returns:
        SafetyReport with the first-fit sequence if safe, no sequence if unsafe
    """
    allocation = allocation_matrix(graph)
    request = request_matrix(graph)
    available = availability(graph)

    # Work = copy of Available (the projection itself is read-only)
    work = np.array(available.values, dtype=int)
    num_processes = len(allocation.process_ids)
    finish = np.zeros(num_processes, dtype=bool)
    safe_sequence: List[str] = []

    made_progress = True
    while made_progress:
        made_progress = False

        for i in range(num_processes):
            if finish[i]:
                continue

            if np.all(request.values[i] <= work):
                work += allocation.values[i]
                finish[i] = True
                safe_sequence.append(allocation.process_ids[i])
                made_progress = True
                break  # Restart search from beginning for determinism

    if np.all(finish):
        return SafetyReport(safe=True, sequence=tuple(safe_sequence))
    return SafetyReport(safe=False, sequence=None)


def verify_safe_sequence(graph: ResourceGraph, sequence: List[str]) -> bool:
    """
    Replay a completion order against the graph.

    Each process must be able to obtain its outstanding request from the
    work vector before its allocation is released back into it.

    Args:
        graph: Graph snapshot (not modified)
        sequence: Candidate completion order of process ids

    Returns:
        True if the order names every process exactly once and never
        blocks, False otherwise
    """
    allocation = allocation_matrix(graph)
    request = request_matrix(graph)

    if sorted(sequence) != sorted(allocation.process_ids):
        return False

    work = np.array(availability(graph).values, dtype=int)
    for process_id in sequence:
        if not np.all(request.row(process_id) <= work):
            return False
        work += allocation.row(process_id)
    return True
