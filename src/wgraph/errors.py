"""Exceptions raised by the graph store and the format adapters."""

from pathlib import Path


class GraphError(Exception):
    """Base exception for graph operations."""

    pass


class NotFoundError(GraphError, KeyError):
    """An identifier or graph label is absent."""

    def __str__(self) -> str:
        # KeyError.__str__ would quote the message
        return str(self.args[0]) if self.args else ""


class NodeNotFoundError(NotFoundError):
    """Raised when a node id is not in the graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"{node_id} does not exist in the graph")


class EdgeNotFoundError(NotFoundError):
    """Raised when there is no edge between two existing nodes."""

    def __init__(self, source_id: str, target_id: str):
        self.source_id = source_id
        self.target_id = target_id
        super().__init__(f"there is no edge from {source_id} to {target_id}")


class GraphNotFoundError(NotFoundError):
    """Raised when a requested graph label is missing from decoded input."""

    def __init__(self, graph_id: str):
        self.graph_id = graph_id
        super().__init__(f"{graph_id} does not exist")


class DecodeError(GraphError, ValueError):
    """Raised when serialized graph input is malformed."""

    pass


class UnsupportedFormatError(GraphError, ValueError):
    """Raised when a file suffix is not a known graph format."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"unsupported graph file type: {path.suffix or path.name}")
