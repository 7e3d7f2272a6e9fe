"""
Pipeline Schemas

Pydantic request/response models for the pipeline service. The editor posts
its current node/edge snapshot; responses carry validation reports and laid
out nodes.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from dagcore.graph.model import Edge, Node, edges_from_dicts, nodes_from_dicts


class PositionPayload(BaseModel):
    x: float = 0.0
    y: float = 0.0


class NodePayload(BaseModel):
    """
    Node as sent by the editor.

    Either the flat shape (label, kind) or the editor's own shape, where the
    label sits under data.label and the role tag is called type.
    """
    id: str
    label: Optional[str] = None
    position: PositionPayload = Field(default_factory=PositionPayload)
    kind: Optional[str] = None
    type: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class EdgePayload(BaseModel):
    """Edge as sent by the editor; the id is optional"""
    source: str
    target: str
    id: Optional[str] = None
    kind: Optional[str] = None
    type: Optional[str] = None


class GraphPayload(BaseModel):
    """Node/edge snapshot"""
    nodes: List[NodePayload] = Field(default_factory=list)
    edges: List[EdgePayload] = Field(default_factory=list)

    def to_graph(self) -> tuple[List[Node], List[Edge]]:
        nodes = nodes_from_dicts(n.model_dump(exclude_none=True) for n in self.nodes)
        edges = edges_from_dicts(e.model_dump(exclude_none=True) for e in self.edges)
        return nodes, edges


class ConnectionRequest(GraphPayload):
    """Snapshot plus the proposed connection"""
    source: Optional[str] = None
    target: Optional[str] = None


class NodeResponse(BaseModel):
    id: str
    label: str
    position: PositionPayload
    kind: str


class EdgeResponse(BaseModel):
    id: str
    source: str
    target: str
    kind: str


class ValidationResponse(BaseModel):
    isValid: bool
    errors: List[str]
    warnings: List[str]
    status: str


class LayoutResponse(BaseModel):
    nodes: List[NodeResponse]
    edges: List[EdgeResponse]
    layers: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_graph(
        cls, nodes: List[Node], edges: List[Edge], layers: Optional[Dict[str, int]] = None
    ) -> "LayoutResponse":
        return cls(
            nodes=[NodeResponse(**n.to_dict()) for n in nodes],
            edges=[EdgeResponse(**e.to_dict()) for e in edges],
            layers=layers or {},
        )


class ConnectionResponse(BaseModel):
    allowed: bool
    reason: Optional[str] = None
