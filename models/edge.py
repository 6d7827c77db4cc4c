"""
Edge model for the Resource Allocation Graph Analyzer.

Request edges run Process -> Resource, allocation edges run Resource -> Process.
"""

from dataclasses import dataclass
from enum import Enum


class EdgeKind(Enum):
    """Kinds of edge in the graph."""
    REQUEST = "request"
    ALLOCATION = "allocation"


@dataclass(frozen=True)
class Edge:
    """
    Represents a directed edge of the resource-allocation graph.
    
    Parallel edges of the same kind and direction are allowed; each one
    stands for one requested or allocated instance.
    
    Attributes:
        edge_id: Edge identifier (unique)
        source: Id of the node the edge starts at
        target: Id of the node the edge points to
        kind: REQUEST or ALLOCATION
    """
    edge_id: str
    source: str
    target: str
    kind: EdgeKind

    def touches(self, node_id: str) -> bool:
        """Check if either endpoint is node_id."""
        return self.source == node_id or self.target == node_id

    @property
    def process_id(self) -> str:
        """Process endpoint of the edge."""
        return self.source if self.kind == EdgeKind.REQUEST else self.target

    @property
    def resource_id(self) -> str:
        """Resource endpoint of the edge."""
        return self.target if self.kind == EdgeKind.REQUEST else self.source
