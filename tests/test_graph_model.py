"""
Graph Model Tests

Tests node/edge mutation, id generation and structural invariants.
"""

import dataclasses

import pytest

from conftest import build_ring
from models.edge import EdgeKind
from models.errors import DuplicateId, GraphError, InvalidEdge, NotFound
from models.graph import ResourceGraph
from models.node import NodeKind
from algorithms.detection import detect_deadlock
from algorithms.avoidance import evaluate_safety
from algorithms.projections import allocation_matrix, availability, request_matrix


def test_generated_ids_use_separate_counters():
    graph = ResourceGraph()

    assert graph.add_process() == "P1"
    assert graph.add_resource() == "R1"
    assert graph.add_process() == "P2"
    assert graph.add_resource(3) == "R2"
    assert graph.add_edge("P1", "R1", EdgeKind.REQUEST) == "e1"
    assert graph.add_edge("R2", "P2", "allocation") == "e2"

    assert [n.node_id for n in graph.processes()] == ["P1", "P2"]
    assert [n.node_id for n in graph.resources()] == ["R1", "R2"]
    assert graph.get_node("R1").instances == 1
    assert graph.get_node("R2").instances == 3


def test_generated_ids_skip_explicit_ids():
    graph = ResourceGraph()
    graph.add_process("P1")
    graph.add_process("P2")

    assert graph.add_process() == "P3"


def test_classic_deadlock_counters_continue_at_three():
    graph = ResourceGraph.classic_deadlock()

    assert graph.add_process() == "P3"
    assert graph.add_resource() == "R3"
    assert graph.add_edge("P3", "R3", "request") == "e5"


def test_duplicate_node_id_rejected():
    graph = ResourceGraph()
    graph.add_process("X")

    with pytest.raises(DuplicateId):
        graph.add_resource(node_id="X")
    assert graph.get_node("X").kind == NodeKind.PROCESS


def test_duplicate_edge_id_rejected(classic_deadlock):
    with pytest.raises(DuplicateId):
        classic_deadlock.add_edge("P1", "R1", "request", edge_id="e1")
    assert len(classic_deadlock.edges) == 4


@pytest.mark.parametrize("source,target,kind", [
    ("P1", "R1", "allocation"),   # allocation must start at a resource
    ("R1", "P1", "request"),      # request must start at a process
    ("P1", "P2", "request"),      # process -> process
    ("R1", "R2", "allocation"),   # resource -> resource
    ("P1", "P1", "request"),      # self-loop
    ("P1", "R9", "request"),      # dangling target
    ("R9", "P1", "allocation"),   # dangling source
    ("P1", "R1", "claim"),        # unknown kind
])
def test_invalid_edges_rejected(classic_deadlock, source, target, kind):
    before = [e.edge_id for e in classic_deadlock.edges]

    with pytest.raises(InvalidEdge):
        classic_deadlock.add_edge(source, target, kind)

    assert [e.edge_id for e in classic_deadlock.edges] == before


def test_error_hierarchy():
    assert issubclass(InvalidEdge, GraphError)
    assert issubclass(NotFound, GraphError)
    assert issubclass(DuplicateId, GraphError)


def test_parallel_edges_allowed():
    graph = ResourceGraph()
    graph.add_process()
    graph.add_resource(3)
    graph.add_edge("R1", "P1", "allocation")
    graph.add_edge("R1", "P1", "allocation")
    graph.add_edge("P1", "R1", "request")
    graph.add_edge("P1", "R1", "request")

    assert allocation_matrix(graph).get("P1", "R1") == 2
    assert request_matrix(graph).get("P1", "R1") == 2
    assert availability(graph).get("R1") == 1


def test_remove_node_removes_touching_edges(classic_deadlock):
    classic_deadlock.remove_node("R1")

    assert not classic_deadlock.has_node("R1")
    assert classic_deadlock.edges_touching("R1") == []
    assert [e.edge_id for e in classic_deadlock.edges] == ["e2", "e3"]


def test_analysis_after_remove_node_never_mentions_it(classic_deadlock):
    classic_deadlock.remove_node("P2")

    deadlock = detect_deadlock(classic_deadlock)
    safety = evaluate_safety(classic_deadlock)
    allocation = allocation_matrix(classic_deadlock)
    request = request_matrix(classic_deadlock)

    assert "P2" not in deadlock.nodes
    assert not deadlock.deadlocked
    assert safety.safe
    assert safety.sequence == ("P1",)
    assert "P2" not in allocation.process_ids
    assert "P2" not in request.process_ids
    assert all("P2" not in (e.source, e.target) for e in classic_deadlock.edges)


def test_remove_missing_ids_raise_not_found(classic_deadlock):
    with pytest.raises(NotFound):
        classic_deadlock.remove_node("P9")
    with pytest.raises(NotFound):
        classic_deadlock.remove_edge("e9")
    with pytest.raises(NotFound):
        classic_deadlock.get_node("P9")
    with pytest.raises(NotFound):
        classic_deadlock.get_edge("e9")


def test_set_instances_clamps_to_one(classic_deadlock):
    classic_deadlock.set_instances("R1", 0)
    assert classic_deadlock.get_node("R1").instances == 1

    classic_deadlock.set_instances("R1", -5)
    assert classic_deadlock.get_node("R1").instances == 1

    classic_deadlock.set_instances("R1", 4)
    assert classic_deadlock.get_node("R1").instances == 4


def test_adjust_instances_uses_same_clamp(classic_deadlock):
    classic_deadlock.adjust_instances("R2", 2)
    assert classic_deadlock.get_node("R2").instances == 3

    classic_deadlock.adjust_instances("R2", -10)
    assert classic_deadlock.get_node("R2").instances == 1


def test_set_instances_on_process_or_missing_raises(classic_deadlock):
    with pytest.raises(NotFound):
        classic_deadlock.set_instances("P1", 2)
    with pytest.raises(NotFound):
        classic_deadlock.set_instances("R9", 2)


def test_add_resource_clamps_initial_capacity():
    graph = ResourceGraph()
    rid = graph.add_resource(0)

    assert graph.get_node(rid).instances == 1


def test_reset_restores_classic_example(classic_deadlock):
    classic_deadlock.add_process()
    classic_deadlock.remove_node("R1")

    classic_deadlock.reset()

    assert [n.node_id for n in classic_deadlock.nodes] == ["P1", "P2", "R1", "R2"]
    assert [e.edge_id for e in classic_deadlock.edges] == ["e1", "e2", "e3", "e4"]
    assert classic_deadlock.add_process() == "P3"


def test_copy_is_independent(classic_deadlock):
    snapshot = classic_deadlock.copy()

    classic_deadlock.remove_node("P1")
    classic_deadlock.set_instances("R2", 5)

    assert snapshot.has_node("P1")
    assert snapshot.get_node("R2").instances == 1
    assert detect_deadlock(snapshot).nodes == {"P1", "P2"}


def test_edge_endpoint_roles():
    graph = build_ring(2)
    edge = graph.get_edge("e1")

    assert edge.kind == EdgeKind.ALLOCATION
    assert edge.resource_id == "R1"
    assert edge.process_id == "P1"


class RecordingLogger:
    def __init__(self):
        self.messages = []

    def log_mutation(self, message):
        self.messages.append(message)


def test_mutations_are_logged():
    logger = RecordingLogger()
    graph = ResourceGraph(logger=logger)
    graph.add_process()
    graph.add_resource()
    graph.add_edge("P1", "R1", "request")
    graph.set_instances("R1", 2)
    with pytest.raises(InvalidEdge):
        graph.add_edge("P1", "P1", "request")
    graph.remove_node("R1")

    assert logger.messages == [
        "Added process P1",
        "Added resource R1 with 1 instance",
        "Created request edge: P1 → R1",
        "Updated R1 instances to 2",
        "Invalid edge connection",
        "Deleted node R1",
    ]


def test_returned_nodes_cannot_be_mutated(classic_deadlock):
    node = classic_deadlock.get_node("R1")

    with pytest.raises(dataclasses.FrozenInstanceError):
        node.instances = 0
    assert classic_deadlock.get_node("R1").instances == 1


def test_set_instances_replaces_node_in_place(classic_deadlock):
    snapshot = classic_deadlock.copy()
    held = classic_deadlock.get_node("R1")

    classic_deadlock.set_instances("R1", 0)
    classic_deadlock.set_instances("R2", 4)

    assert [n.node_id for n in classic_deadlock.nodes] == ["P1", "P2", "R1", "R2"]
    assert classic_deadlock.get_node("R1").instances == 1
    assert classic_deadlock.get_node("R2").instances == 4
    assert held.instances == 1
    assert snapshot.get_node("R2").instances == 1


@pytest.mark.parametrize("source,target,kind", [
    (["P1"], "R1", "request"),
    ("R1", ("P1",), "allocation"),
    (1, "R1", "request"),
])
def test_non_string_endpoints_are_invalid(classic_deadlock, source, target, kind):
    with pytest.raises(InvalidEdge):
        classic_deadlock.add_edge(source, target, kind)
    assert len(classic_deadlock.edges) == 4
