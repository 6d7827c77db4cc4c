"""
Shared fixtures for the Resource Allocation Graph Analyzer tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.graph import ResourceGraph


SCENARIOS_DIR = project_root / "tests" / "scenarios"


@pytest.fixture
def scenarios_dir():
    return SCENARIOS_DIR


@pytest.fixture
def classic_deadlock():
    """P1 holds R1 and requests R2, P2 holds R2 and requests R1."""
    return ResourceGraph.classic_deadlock()


@pytest.fixture
def safe_variant(classic_deadlock):
    """Classic deadlock with P2's request on R1 removed."""
    return classic_deadlock.remove_edge("e4")


@pytest.fixture
def shared_capacity():
    """R1 with 2 instances held by two distinct processes, no requests."""
    graph = ResourceGraph()
    graph.add_process()
    graph.add_process()
    graph.add_resource(instances=2)
    graph.add_edge("R1", "P1", "allocation")
    graph.add_edge("R1", "P2", "allocation")
    return graph


def build_ring(size: int) -> ResourceGraph:
    """Pi holds Ri and requests R(i+1); the last process requests R1."""
    graph = ResourceGraph()
    for i in range(1, size + 1):
        graph.add_process(f"P{i}")
        graph.add_resource(1, f"R{i}")
    for i in range(1, size + 1):
        graph.add_edge(f"R{i}", f"P{i}", "allocation")
        graph.add_edge(f"P{i}", f"R{i % size + 1}", "request")
    return graph
