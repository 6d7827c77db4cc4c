"""
Resource Allocation Graph model for the Resource Allocation Graph Analyzer.

Holds processes, resources and the request/allocation edges between them,
and enforces the structural invariants on every mutation. Analyses never
mutate the graph; they read it as a snapshot and return a report.
"""

from typing import Dict, List, Optional, Union

from models.edge import Edge, EdgeKind
from models.errors import DuplicateId, InvalidEdge, NotFound
from models.node import Node, NodeKind


PROCESS_PREFIX = "P"
RESOURCE_PREFIX = "R"
EDGE_PREFIX = "e"


class ResourceGraph:
    """
    Mutable resource-allocation graph owned by the caller.

    Nodes and edges keep their insertion order; that order is the
    "declared order" every algorithm iterates in.

    Attributes:
        logger: Optional AnalyzerLogger receiving one debug line per mutation
    """

    def __init__(self, logger=None):
        self.logger = logger
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._counters = {PROCESS_PREFIX: 1, RESOURCE_PREFIX: 1, EDGE_PREFIX: 1}

    @classmethod
    def classic_deadlock(cls, logger=None) -> "ResourceGraph":
        """
        Build the two-process, two-resource circular wait example.

        P1 holds R1 and requests R2, P2 holds R2 and requests R1.
        """
        graph = cls(logger=logger)
        graph._load_classic_deadlock()
        return graph

    def reset(self) -> "ResourceGraph":
        """Restore the classic deadlock example in place, including id counters."""
        self._nodes = {}
        self._edges = {}
        self._counters = {PROCESS_PREFIX: 1, RESOURCE_PREFIX: 1, EDGE_PREFIX: 1}
        self._load_classic_deadlock()
        self._log("Graph reset to default deadlock example")
        return self

    def _load_classic_deadlock(self) -> None:
        self._nodes["P1"] = Node("P1", NodeKind.PROCESS)
        self._nodes["P2"] = Node("P2", NodeKind.PROCESS)
        self._nodes["R1"] = Node("R1", NodeKind.RESOURCE, 1)
        self._nodes["R2"] = Node("R2", NodeKind.RESOURCE, 1)
        for edge in (
            Edge("e1", "R1", "P1", EdgeKind.ALLOCATION),
            Edge("e2", "P1", "R2", EdgeKind.REQUEST),
            Edge("e3", "R2", "P2", EdgeKind.ALLOCATION),
            Edge("e4", "P2", "R1", EdgeKind.REQUEST),
        ):
            self._edges[edge.edge_id] = edge

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> List[Node]:
        """All nodes in declared order."""
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        """All edges in insertion order."""
        return list(self._edges.values())

    def processes(self) -> List[Node]:
        """Process nodes in declared order."""
        return [n for n in self._nodes.values() if n.kind == NodeKind.PROCESS]

    def resources(self) -> List[Node]:
        """Resource nodes in declared order."""
        return [n for n in self._nodes.values() if n.kind == NodeKind.RESOURCE]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edges

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Node:
        """
        Look up a node.

        Raises:
            NotFound: If no node has this id
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise NotFound(f"Node {node_id} not found")
        return node

    def get_edge(self, edge_id: str) -> Edge:
        """
        Look up an edge.

        Raises:
            NotFound: If no edge has this id
        """
        edge = self._edges.get(edge_id)
        if edge is None:
            raise NotFound(f"Edge {edge_id} not found")
        return edge

    def edges_touching(self, node_id: str) -> List[Edge]:
        """Edges with node_id as either endpoint, in insertion order."""
        return [e for e in self._edges.values() if e.touches(node_id)]

    def copy(self) -> "ResourceGraph":
        """
        Independent snapshot of nodes, edges and id counters.

        The copy carries no logger. Hosts that analyse while another thread
        mutates should hand a copy to the analysis call.
        """
        clone = ResourceGraph()
        clone._nodes = dict(self._nodes)
        clone._edges = dict(self._edges)
        clone._counters = dict(self._counters)
        return clone

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_process(self, node_id: Optional[str] = None) -> str:
        """
        Add a process node.

        Args:
            node_id: Explicit id, or None to generate the next P<n>

        Returns:
            Id of the new process

        Raises:
            DuplicateId: If node_id is already used by another node
        """
        node_id = self._claim_node_id(PROCESS_PREFIX, node_id)
        self._nodes[node_id] = Node(node_id, NodeKind.PROCESS)
        self._log(f"Added process {node_id}")
        return node_id

    def add_resource(self, instances: int = 1, node_id: Optional[str] = None) -> str:
        """
        Add a resource node.

        Args:
            instances: Total capacity, clamped to a minimum of 1
            node_id: Explicit id, or None to generate the next R<n>

        Returns:
            Id of the new resource

        Raises:
            DuplicateId: If node_id is already used by another node
        """
        node_id = self._claim_node_id(RESOURCE_PREFIX, node_id)
        node = Node(node_id, NodeKind.RESOURCE, instances)
        self._nodes[node_id] = node
        suffix = "instance" if node.instances == 1 else "instances"
        self._log(f"Added resource {node_id} with {node.instances} {suffix}")
        return node_id

    def remove_node(self, node_id: str) -> "ResourceGraph":
        """
        Delete a node and every edge touching it.

        Raises:
            NotFound: If no node has this id
        """
        if node_id not in self._nodes:
            raise NotFound(f"Node {node_id} not found")
        del self._nodes[node_id]
        self._edges = {
            edge_id: edge for edge_id, edge in self._edges.items()
            if not edge.touches(node_id)
        }
        self._log(f"Deleted node {node_id}")
        return self

    def add_edge(
        self,
        source: str,
        target: str,
        kind: Union[EdgeKind, str],
        edge_id: Optional[str] = None
    ) -> str:
        """
        Add a request or allocation edge.

        Validation happens before any change, so a rejected edge never
        enters the graph.

        Args:
            source: Id of the start node
            target: Id of the end node
            kind: EdgeKind or its string value ('request' / 'allocation')
            edge_id: Explicit id, or None to generate the next e<n>

        Returns:
            Id of the new edge

        Raises:
            InvalidEdge: Unknown kind, self-loop, dangling endpoint,
                or role/direction mismatch
            DuplicateId: If edge_id is already used
        """
        try:
            kind = EdgeKind(kind)
        except ValueError:
            self._log("Invalid edge connection")
            raise InvalidEdge(f"Unknown edge kind: {kind!r}")

        if source == target:
            self._log("Invalid edge connection")
            raise InvalidEdge(f"Self-loop on {source} is not allowed")

        for endpoint in (source, target):
            if not isinstance(endpoint, str) or endpoint not in self._nodes:
                self._log("Invalid edge connection")
                raise InvalidEdge(f"Edge endpoint {endpoint} does not exist")

        start = self._nodes[source]
        end = self._nodes[target]
        if kind == EdgeKind.REQUEST and not (start.is_process and end.is_resource):
            self._log("Invalid edge connection")
            raise InvalidEdge(
                f"Request edge must run process -> resource, got {source} -> {target}"
            )
        if kind == EdgeKind.ALLOCATION and not (start.is_resource and end.is_process):
            self._log("Invalid edge connection")
            raise InvalidEdge(
                f"Allocation edge must run resource -> process, got {source} -> {target}"
            )

        if edge_id is None:
            edge_id = self._generate_id(EDGE_PREFIX, self._edges)
        elif edge_id in self._edges:
            raise DuplicateId(f"Edge id {edge_id} is already in use")

        self._edges[edge_id] = Edge(edge_id, source, target, kind)
        self._log(f"Created {kind.value} edge: {source} → {target}")
        return edge_id

    def remove_edge(self, edge_id: str) -> "ResourceGraph":
        """
        Delete an edge.

        Raises:
            NotFound: If no edge has this id
        """
        edge = self._edges.pop(edge_id, None)
        if edge is None:
            raise NotFound(f"Edge {edge_id} not found")
        self._log(f"Deleted {edge.kind.value} edge from {edge.source} to {edge.target}")
        return self

    def set_instances(self, node_id: str, instances: int) -> "ResourceGraph":
        """
        Set a resource's capacity, clamped to a minimum of 1.

        Capacity is normalized, never rejected.

        Raises:
            NotFound: If node_id is not a resource in the graph
        """
        node = self._get_resource(node_id)
        node = node.with_instances(int(instances))
        self._nodes[node_id] = node
        self._log(f"Updated {node_id} instances to {node.instances}")
        return self

    def adjust_instances(self, node_id: str, delta: int) -> "ResourceGraph":
        """Change a resource's capacity by delta, with the same clamp as set_instances."""
        node = self._get_resource(node_id)
        return self.set_instances(node_id, node.instances + int(delta))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_resource(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None or not node.is_resource:
            raise NotFound(f"Resource {node_id} not found")
        return node

    def _claim_node_id(self, prefix: str, node_id: Optional[str]) -> str:
        if node_id is None:
            return self._generate_id(prefix, self._nodes)
        if node_id in self._nodes:
            raise DuplicateId(f"Node id {node_id} is already in use")
        return node_id

    def _generate_id(self, prefix: str, taken: Dict) -> str:
        # Skip ids claimed explicitly (e.g. by a loaded graph)
        counter = self._counters[prefix]
        while f"{prefix}{counter}" in taken:
            counter += 1
        self._counters[prefix] = counter + 1
        return f"{prefix}{counter}"

    def _log(self, message: str) -> None:
        if self.logger is not None:
            self.logger.log_mutation(message)

    def __repr__(self) -> str:
        return (
            f"ResourceGraph(processes={len(self.processes())}, "
            f"resources={len(self.resources())}, edges={len(self._edges)})"
        )
