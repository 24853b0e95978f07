"""Thread-safe directed weighted graph store.

Nodes live in one table keyed by id. Edges are not stored as objects; they
are entries in two mirrored adjacency tables:

- ``_children[src][tgt] = weight`` (outgoing)
- ``_parents[tgt][src] = weight`` (incoming)

Every write path updates both tables under the write lock, so a reader
never sees one without the other. Ids in either table always exist in the
node table, and inner maps are dropped once empty.
"""

from __future__ import annotations

import logging

from wgraph.config.models import GraphConfig
from wgraph.errors import EdgeNotFoundError, NodeNotFoundError
from wgraph.locking import ReadWriteLock
from wgraph.types import Edge, Node, NodeId

logger = logging.getLogger(__name__)

Adjacency = dict[NodeId, dict[NodeId, float]]


class GraphStore:
    """Directed weighted graph guarded by a single reader/writer lock.

    Queries take the lock in shared mode, mutations in exclusive mode, each
    for exactly the duration of the index access.

    Nodes returned by queries are the store's own objects. Their ``props``
    maps are not protected by the lock; treat them as read-only when the
    store is shared across threads.
    """

    def __init__(self, graph_id: str = "", config: GraphConfig | None = None) -> None:
        self._lock = ReadWriteLock()
        self._id = graph_id
        self._config = config or GraphConfig()
        self._nodes: dict[NodeId, Node] = {}
        self._children: Adjacency = {}
        self._parents: Adjacency = {}

    def init(self) -> None:
        """Reset the store to an empty graph, keeping its identifier."""
        with self._lock.write_locked():
            self._nodes = {}
            self._children = {}
            self._parents = {}
        logger.debug("Graph %r reset", self._id)

    # -- Queries --

    def identifier(self) -> str:
        """Label naming this graph (provenance, not node identity)."""
        with self._lock.read_locked():
            return self._id

    def node_count(self) -> int:
        with self._lock.read_locked():
            return len(self._nodes)

    def edge_count(self) -> int:
        with self._lock.read_locked():
            return sum(len(targets) for targets in self._children.values())

    def has_node(self, node_id: str) -> bool:
        with self._lock.read_locked():
            return node_id in self._nodes

    def get_node(self, node_id: str) -> Node:
        """Look up a node by id.

        Raises:
            NodeNotFoundError: If the id is not in the graph.
        """
        with self._lock.read_locked():
            self._require(node_id)
            return self._nodes[node_id]

    def nodes(self) -> dict[NodeId, Node]:
        """Snapshot of id -> node. Later mutations are not reflected."""
        with self._lock.read_locked():
            return dict(self._nodes)

    def edge_weight(self, source_id: str, target_id: str) -> float:
        """Weight of the edge from source to target.

        Raises:
            NodeNotFoundError: If either endpoint is not in the graph.
            EdgeNotFoundError: If both exist but no edge connects them.
        """
        with self._lock.read_locked():
            self._require(source_id, target_id)
            try:
                return self._children[source_id][target_id]
            except KeyError:
                raise EdgeNotFoundError(source_id, target_id) from None

    def parent_nodes(self, node_id: str) -> dict[NodeId, Node]:
        """Nodes with an edge pointing into ``node_id``."""
        with self._lock.read_locked():
            self._require(node_id)
            return self._neighbors(self._parents, node_id)

    def child_nodes(self, node_id: str) -> dict[NodeId, Node]:
        """Nodes with an edge coming out of ``node_id``."""
        with self._lock.read_locked():
            self._require(node_id)
            return self._neighbors(self._children, node_id)

    def edges(self) -> list[Edge]:
        """Snapshot of every edge, in node insertion order."""
        with self._lock.read_locked():
            return self._edges()

    def render(self, precision: int | None = None) -> str:
        """Human-readable listing, one ``src -- weight -→ tgt`` line per edge.

        For diagnostics only; the layout is not a stable format.
        """
        if precision is None:
            precision = self._config.render_precision
        with self._lock.read_locked():
            edges = self._edges()
        return "".join(f"{edge.format(precision)}\n" for edge in edges)

    def to_mapping(self) -> dict[str, dict[str, dict[str, float]]]:
        """Export as ``{graph_id: {source: {target: weight}}}``.

        Every node is listed as a source, so nodes without outgoing edges
        map to ``{}`` and survive a round trip through the codecs.
        """
        with self._lock.read_locked():
            body = {
                str(node_id): {
                    str(target): weight
                    for target, weight in self._children.get(node_id, {}).items()
                }
                for node_id in self._nodes
            }
            return {self._id: body}

    # -- Mutations --

    def add_node(self, node: Node) -> bool:
        """Insert a node. Returns False, leaving the graph untouched, if the id exists."""
        with self._lock.write_locked():
            if node.id in self._nodes:
                return False
            self._nodes[node.id] = node
        logger.debug("Added node %s to graph %r", node.id, self._id)
        return True

    def delete_node(self, node_id: str) -> bool:
        """Remove a node and every edge touching it.

        Returns False if the node did not exist.
        """
        with self._lock.write_locked():
            if node_id not in self._nodes:
                return False
            del self._nodes[node_id]
            purged = self._purge(self._children, self._parents, node_id)
            purged += self._purge(self._parents, self._children, node_id)
        logger.debug(
            "Deleted node %s from graph %r (%d adjacency entries purged)",
            node_id,
            self._id,
            purged,
        )
        return True

    def add_edge(
        self, source_id: str, target_id: str, weight: float | None = None
    ) -> None:
        """Add weight to the edge from source to target, creating it if needed.

        Adding to an existing edge accumulates: two calls with 1 and 2 leave
        a weight of 3. Use ``replace_edge`` to overwrite.

        Raises:
            NodeNotFoundError: If either endpoint is not in the graph.
        """
        if weight is None:
            weight = self._config.default_weight
        with self._lock.write_locked():
            src, tgt = self._require(source_id, target_id)
            current = self._children.get(src, {}).get(tgt, 0.0)
            self._set_edge(src, tgt, current + weight)

    def replace_edge(
        self, source_id: str, target_id: str, weight: float | None = None
    ) -> None:
        """Set the weight of the edge from source to target, overwriting any prior value.

        Raises:
            NodeNotFoundError: If either endpoint is not in the graph.
        """
        if weight is None:
            weight = self._config.default_weight
        with self._lock.write_locked():
            src, tgt = self._require(source_id, target_id)
            self._set_edge(src, tgt, weight)

    def delete_edge(self, source_id: str, target_id: str) -> None:
        """Remove the edge from source to target. A missing edge is not an error.

        Raises:
            NodeNotFoundError: If either endpoint is not in the graph.
        """
        with self._lock.write_locked():
            src, tgt = self._require(source_id, target_id)
            self._discard(self._children, src, tgt)
            self._discard(self._parents, tgt, src)

    # -- Internals (caller holds the lock) --

    def _require(self, *node_ids: str) -> tuple[NodeId, ...]:
        """Resolve ids to the stored keys, raising for the first absent one."""
        resolved = []
        for node_id in node_ids:
            node = self._nodes.get(node_id)
            if node is None:
                raise NodeNotFoundError(node_id)
            resolved.append(node.id)
        return tuple(resolved)

    def _set_edge(self, src: NodeId, tgt: NodeId, weight: float) -> None:
        self._children.setdefault(src, {})[tgt] = weight
        self._parents.setdefault(tgt, {})[src] = weight

    @staticmethod
    def _discard(table: Adjacency, outer: NodeId, inner: NodeId) -> None:
        neighbors = table.get(outer)
        if neighbors is None:
            return
        neighbors.pop(inner, None)
        if not neighbors:
            del table[outer]

    @classmethod
    def _purge(cls, table: Adjacency, mirror: Adjacency, node_id: str) -> int:
        """Drop ``node_id``'s row from ``table`` and its entries in ``mirror``."""
        neighbors = table.pop(node_id, {})
        for other in neighbors:
            # Self-loops were already removed along with the row
            if other != node_id:
                cls._discard(mirror, other, node_id)
        return len(neighbors)

    def _neighbors(self, table: Adjacency, node_id: str) -> dict[NodeId, Node]:
        return {other: self._nodes[other] for other in table.get(node_id, {})}

    def _edges(self) -> list[Edge]:
        return [
            Edge(src, tgt, weight)
            for src in self._nodes
            for tgt, weight in self._children.get(src, {}).items()
        ]

    # -- Dunder helpers --

    def __len__(self) -> int:
        return self.node_count()

    def __contains__(self, node_id: object) -> bool:
        if not isinstance(node_id, str):
            return False
        return self.has_node(node_id)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        with self._lock.read_locked():
            return (
                f"GraphStore(id={self._id!r}, nodes={len(self._nodes)}, "
                f"edges={sum(len(t) for t in self._children.values())})"
            )


def create_graph_store(
    graph_id: str = "", config: GraphConfig | None = None
) -> GraphStore:
    """Create an empty, initialized GraphStore."""
    return GraphStore(graph_id, config=config)
