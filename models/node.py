"""
Node model for the Resource Allocation Graph Analyzer.

Represents processes and resources in a resource-allocation graph.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class NodeKind(Enum):
    """Kinds of node in the graph."""
    PROCESS = "process"
    RESOURCE = "resource"


@dataclass(frozen=True)
class Node:
    """
    Represents a node of the resource-allocation graph.
    
    Attributes:
        node_id: Node identifier (unique across processes and resources)
        kind: PROCESS or RESOURCE
        instances: Total capacity for a resource, None for a process
        
    Invariant:
        instances >= 1 for resources
    """
    node_id: str
    kind: NodeKind
    instances: Optional[int] = None

    def __post_init__(self):
        """Normalize resource capacity."""
        # frozen: normalize through object.__setattr__
        if self.kind == NodeKind.RESOURCE:
            instances = self.instances if self.instances is not None else 1
            object.__setattr__(self, "instances", max(1, int(instances)))
        else:
            object.__setattr__(self, "instances", None)

    @property
    def is_process(self) -> bool:
        return self.kind == NodeKind.PROCESS

    @property
    def is_resource(self) -> bool:
        return self.kind == NodeKind.RESOURCE

    def with_instances(self, instances: int) -> "Node":
        """Copy of this resource with a new (clamped) capacity."""
        return replace(self, instances=instances)
