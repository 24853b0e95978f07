"""Node, edge and identifier types for the weighted graph store."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_WEIGHT = 1.0


class NodeId(str):
    """Opaque node identifier.

    A plain ``str`` with the same text compares and hashes equal, so callers
    can pass either form to the store.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"NodeId({str.__repr__(self)})"


def as_node_id(value: str) -> NodeId:
    if isinstance(value, NodeId):
        return value
    if not isinstance(value, str):
        raise TypeError(f"node id must be a string, got {type(value).__name__}")
    return NodeId(value)


@dataclass
class Node:
    """A vertex. The id must be unique within a graph and never changes.

    ``id`` is read-only once set; assigning to it raises ``AttributeError``.
    ``props`` is handed out by reference. Mutating it is not synchronized
    by the owning store's lock.
    """

    id: NodeId
    props: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", as_node_id(self.id))

    def __setattr__(self, name: str, value: object) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("node id is fixed at creation")
        super().__setattr__(name, value)

    @classmethod
    def create(cls, id: str, props: dict[str, str] | None = None) -> Node:
        return cls(id=as_node_id(id), props=props if props is not None else {})

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class Edge:
    """Weighted connection from a source node to a target node.

    Edges are snapshots; the store keeps only the adjacency tables.
    Ordering compares weights, so ``sorted(store.edges())`` is lightest first.
    """

    source: NodeId
    target: NodeId
    weight: float = DEFAULT_WEIGHT

    @classmethod
    def unweighted(cls, source: str, target: str) -> Edge:
        return cls(as_node_id(source), as_node_id(target), DEFAULT_WEIGHT)

    def __lt__(self, other: Edge) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.weight < other.weight

    def format(self, precision: int = 3) -> str:
        return f"{self.source} -- {self.weight:.{precision}f} -→ {self.target}"

    def __str__(self) -> str:
        return self.format()
