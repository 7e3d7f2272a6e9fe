"""
Graph Model

Node and edge records shared by the validator and the layout engine.
Records are immutable; the engines produce new records instead of editing
the snapshot they were given.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Collection, Dict, Iterable, List, Optional


class InvalidGraphInput(ValueError):
    """Raised when a snapshot breaks the id uniqueness contract"""


def edge_id_for(source: str, target: str) -> str:
    """
    Deterministic edge id for a connection.

    Two connections between the same ordered pair share an id, so a repeated
    connection collides instead of coexisting unnoticed.
    """
    return f"e{source}-{target}"


def unique_edge_id(source: str, target: str, taken: Collection[str], index: int = 0) -> str:
    """
    Pair-derived edge id that is not in `taken`.

    Falls back to "e<source>-<target>-<n>", starting at n = index, when the
    plain id is already used.
    """
    edge_id = edge_id_for(source, target)
    n = index
    while edge_id in taken:
        edge_id = f"{edge_id_for(source, target)}-{n}"
        n += 1
    return edge_id


@dataclass(frozen=True)
class Position:
    """Where the editor draws a node"""
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Node:
    """
    A named pipeline node.

    Attributes:
        id: Unique, stable identifier (e.g., "node_1")
        label: Display name shown on the canvas; the id when not given
        position: Canvas coordinate
        kind: Role tag; opaque to validation and layout
    """
    id: str
    label: Optional[str] = None
    position: Position = field(default_factory=Position)
    kind: str = "custom"

    def __post_init__(self):
        if self.label is None:
            object.__setattr__(self, "label", self.id)

    def with_position(self, x: float, y: float) -> "Node":
        """Copy of this node with only the position replaced"""
        return replace(self, position=Position(float(x), float(y)))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "position": self.position.to_dict(),
            "kind": self.kind,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """
        Create Node from dictionary.

        Accepts the flat shape ({"id", "label", "position", "kind"}) as well as
        the editor's shape, where the label lives under "data" and the role
        tag is called "type".
        """
        label = data.get("label")
        if label is None:
            label = (data.get("data") or {}).get("label")
        pos = data.get("position") or {}
        return cls(
            id=str(data["id"]),
            label=None if label is None else str(label),
            position=Position(float(pos.get("x", 0.0)), float(pos.get("y", 0.0))),
            kind=data.get("kind") or data.get("type") or "custom",
        )


@dataclass(frozen=True)
class Edge:
    """Directed connection source -> target"""
    id: str
    source: str
    target: str
    kind: str = "default"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        """Create Edge from dictionary; a missing id is derived from the pair"""
        source = str(data["source"])
        target = str(data["target"])
        return cls(
            id=str(data.get("id") or edge_id_for(source, target)),
            source=source,
            target=target,
            kind=data.get("kind") or data.get("type") or "default",
        )


def check_unique_ids(nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
    """
    Enforce the snapshot contract: node ids and edge ids are unique.

    Raises:
        InvalidGraphInput: On the first repeated node id or edge id
    """
    seen: set = set()
    for node in nodes:
        if node.id in seen:
            raise InvalidGraphInput(f"Duplicate node id: '{node.id}'")
        seen.add(node.id)

    seen = set()
    for edge in edges:
        if edge.id in seen:
            raise InvalidGraphInput(f"Duplicate edge id: '{edge.id}'")
        seen.add(edge.id)


def nodes_from_dicts(items: Iterable[Dict[str, Any]]) -> List[Node]:
    return [Node.from_dict(item) for item in items]


def edges_from_dicts(items: Iterable[Dict[str, Any]]) -> List[Edge]:
    """
    Build edges from dictionaries.

    Edges without an id get a pair-derived id that no other edge in the
    batch uses, so a repeated connection sent without ids reaches the
    validator as a duplicate connection rather than a duplicate id.
    """
    items = list(items)
    taken = {str(item["id"]) for item in items if item.get("id")}

    edges = []
    for index, item in enumerate(items):
        edge = Edge.from_dict(item)
        if not item.get("id"):
            edge = replace(edge, id=unique_edge_id(edge.source, edge.target, taken, index))
            taken.add(edge.id)
        edges.append(edge)
    return edges
