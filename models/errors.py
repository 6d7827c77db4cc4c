"""
Error types for the Resource Allocation Graph Analyzer.

All mutation errors are local: the graph is left in its last valid state.
"""


class GraphError(Exception):
    """Base class for errors raised by graph mutations."""
    pass


class InvalidEdge(GraphError):
    """Edge rejected: role/direction mismatch, self-loop or dangling endpoint."""
    pass


class NotFound(GraphError):
    """Operation on a node or edge id that is not in the graph."""
    pass


class DuplicateId(GraphError):
    """Explicit node or edge id is already taken."""
    pass
