"""Thread-safe directed weighted graph store.

Public API:
- GraphStore: Node table plus mirrored parent/child adjacency tables
- create_graph_store: Factory for an empty store
- graph_from_json / graph_from_yaml / load_graph: Build a store from the
  label -> label -> weight adjacency format
- dump_json / dump_yaml / export_graph: Write a store back out

Types:
- NodeId, Node, Edge

Errors:
- NotFoundError (NodeNotFoundError, EdgeNotFoundError, GraphNotFoundError)
- DecodeError, UnsupportedFormatError
"""

from wgraph.codecs import (
    dump_json,
    dump_yaml,
    dumps_json,
    dumps_yaml,
    export_graph,
    graph_from_json,
    graph_from_yaml,
    load_graph,
    populate,
)
from wgraph.errors import (
    DecodeError,
    EdgeNotFoundError,
    GraphError,
    GraphNotFoundError,
    NodeNotFoundError,
    NotFoundError,
    UnsupportedFormatError,
)
from wgraph.store import GraphStore, create_graph_store
from wgraph.types import DEFAULT_WEIGHT, Edge, Node, NodeId

__all__ = [
    "DEFAULT_WEIGHT",
    "DecodeError",
    "Edge",
    "EdgeNotFoundError",
    "GraphError",
    "GraphNotFoundError",
    "GraphStore",
    "Node",
    "NodeId",
    "NodeNotFoundError",
    "NotFoundError",
    "UnsupportedFormatError",
    "create_graph_store",
    "dump_json",
    "dump_yaml",
    "dumps_json",
    "dumps_yaml",
    "export_graph",
    "graph_from_json",
    "graph_from_yaml",
    "load_graph",
    "populate",
]
