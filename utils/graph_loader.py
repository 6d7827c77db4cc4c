"""
Graph Loader for the Resource Allocation Graph Analyzer.

Loads, validates and saves JSON graph files. Every node and edge is replayed
through the ResourceGraph mutation API, so a loaded graph obeys the same
id-uniqueness and edge-role rules as one built by hand.
"""

import json
from typing import Any, Dict, Optional

from models.errors import GraphError
from models.graph import ResourceGraph
from models.node import NodeKind


class GraphLoadError(Exception):
    """Exception raised when a graph file cannot be loaded or is invalid."""
    pass


def load_graph(
    file_path: str,
    max_nodes: Optional[int] = None,
    max_edges: Optional[int] = None,
    logger=None
) -> ResourceGraph:
    """
    Load a graph from a JSON file.

    Args:
        file_path: Path to graph JSON file
        max_nodes: Reject graphs with more nodes (None or 0 disables)
        max_edges: Reject graphs with more edges (None or 0 disables)
        logger: Optional AnalyzerLogger attached to the loaded graph

    Returns:
        ResourceGraph built from the file

    Raises:
        GraphLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise GraphLoadError(f"Graph file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise GraphLoadError(f"Invalid JSON in graph file: {e}")

    graph = graph_from_dict(data)
    check_size_limits(graph, max_nodes, max_edges)
    graph.logger = logger
    return graph


def graph_from_dict(data: Dict[str, Any]) -> ResourceGraph:
    """
    Build a graph from its node-list/edge-list form.

    Args:
        data: Dict with 'nodes' and 'edges' lists

    Returns:
        ResourceGraph with nodes and edges in file order

    Raises:
        GraphLoadError: If a field is missing or an entry breaks a graph rule
    """
    if not isinstance(data, dict):
        raise GraphLoadError("Graph document must be a JSON object")
    for section in ('nodes', 'edges'):
        if section not in data:
            raise GraphLoadError(f"Graph missing '{section}' field")
        if not isinstance(data[section], list):
            raise GraphLoadError(f"Graph '{section}' field must be a list")

    graph = ResourceGraph()
    for index, node_data in enumerate(data['nodes']):
        _load_node(graph, node_data, index)
    for index, edge_data in enumerate(data['edges']):
        _load_edge(graph, edge_data, index)
    return graph


def _load_node(graph: ResourceGraph, node_data: Dict, index: int) -> None:
    """
    Add a single node from graph data.

    Args:
        graph: Graph being built
        node_data: Node dictionary ({id, kind, instances?})
        index: Position in the node list (for error messages)
    """
    if not isinstance(node_data, dict):
        raise GraphLoadError(f"Node #{index} must be a JSON object")
    for field in ('id', 'kind'):
        if field not in node_data:
            raise GraphLoadError(f"Node #{index} missing required field: {field}")
    if not isinstance(node_data['id'], str):
        raise GraphLoadError(f"Node #{index}: id must be a string, got {node_data['id']!r}")

    try:
        kind = NodeKind(node_data['kind'])
    except ValueError:
        raise GraphLoadError(
            f"Node {node_data['id']}: unknown kind '{node_data['kind']}'"
        )

    try:
        if kind == NodeKind.PROCESS:
            graph.add_process(node_id=node_data['id'])
        else:
            graph.add_resource(
                instances=node_data.get('instances', 1),
                node_id=node_data['id']
            )
    except GraphError as e:
        raise GraphLoadError(f"Node {node_data['id']}: {e}") from e
    except (TypeError, ValueError) as e:
        raise GraphLoadError(
            f"Node {node_data['id']}: invalid instances {node_data.get('instances')!r}"
        ) from e


def _load_edge(graph: ResourceGraph, edge_data: Dict, index: int) -> None:
    """
    Add a single edge from graph data.

    Args:
        graph: Graph being built
        edge_data: Edge dictionary ({id?, from, to, kind})
        index: Position in the edge list (for error messages)
    """
    if not isinstance(edge_data, dict):
        raise GraphLoadError(f"Edge #{index} must be a JSON object")
    for field in ('from', 'to', 'kind'):
        if field not in edge_data:
            raise GraphLoadError(f"Edge #{index} missing required field: {field}")
    for field in ('id', 'from', 'to'):
        if field in edge_data and not isinstance(edge_data[field], str):
            raise GraphLoadError(
                f"Edge #{index}: '{field}' must be a string, got {edge_data[field]!r}"
            )

    label = edge_data.get('id', f"#{index}")
    try:
        graph.add_edge(
            edge_data['from'],
            edge_data['to'],
            edge_data['kind'],
            edge_id=edge_data.get('id')
        )
    except GraphError as e:
        raise GraphLoadError(f"Edge {label}: {e}") from e


def graph_to_dict(graph: ResourceGraph, description: str = "") -> Dict[str, Any]:
    """
    Serialize a graph to its node-list/edge-list form.

    Args:
        graph: Graph to serialize
        description: Optional free-text description stored with the graph

    Returns:
        JSON-ready dictionary
    """
    nodes = []
    for node in graph.nodes:
        entry = {'id': node.node_id, 'kind': node.kind.value}
        if node.kind == NodeKind.RESOURCE:
            entry['instances'] = node.instances
        nodes.append(entry)

    edges = [
        {'id': e.edge_id, 'from': e.source, 'to': e.target, 'kind': e.kind.value}
        for e in graph.edges
    ]

    data = {'nodes': nodes, 'edges': edges}
    if description:
        data = {'description': description, **data}
    return data


def save_graph(graph: ResourceGraph, file_path: str, description: str = "") -> None:
    """
    Write a graph to a JSON file.

    Args:
        graph: Graph to save
        file_path: Destination path
        description: Optional free-text description stored with the graph
    """
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(graph_to_dict(graph, description), f, indent=2)
        f.write("\n")


def check_size_limits(
    graph: ResourceGraph,
    max_nodes: Optional[int] = None,
    max_edges: Optional[int] = None
) -> None:
    """
    Enforce a node/edge ceiling before analysis.

    Neither algorithm can be cancelled mid-traversal, so oversized graphs
    are rejected up front.

    Raises:
        GraphLoadError: If a limit is exceeded
    """
    node_count = len(graph.nodes)
    edge_count = len(graph.edges)
    if max_nodes and node_count > max_nodes:
        raise GraphLoadError(f"Graph has {node_count} nodes, limit is {max_nodes}")
    if max_edges and edge_count > max_edges:
        raise GraphLoadError(f"Graph has {edge_count} edges, limit is {max_edges}")


def get_graph_description(file_path: str) -> str:
    """
    Get description from graph file without full loading.

    Args:
        file_path: Path to graph JSON file

    Returns:
        Description string, or empty string if not present
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
