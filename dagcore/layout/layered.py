"""
Layered Layout

Sugiyama-style placement: each node's layer is the length of the longest
path reaching it, nodes keep their insertion order within a layer, and
coordinates come from fixed spacing. Cyclic graphs get an approximate
layout instead of an error, since the editor lays out graphs mid-edit.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import logging

from ..config.loader import LayoutSettings
from ..graph.adjacency import Adjacency, build_adjacency
from ..graph.model import Edge, Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutResult:
    """New node records with recomputed positions; edges passed through"""
    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    layers: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "layers": dict(self.layers),
        }


def compute_layers(adj: Adjacency) -> Dict[str, int]:
    """
    Assign every node its longest-path layer.

    Kahn's algorithm in insertion order: a node is placed once all of its
    predecessors are placed, at 1 + the highest predecessor layer (0 for
    sources). When the queue runs dry with nodes left over, they sit on a
    cycle; the first unplaced node in insertion order is placed using the
    predecessors placed so far and its outgoing edges are released. Every node
    is placed exactly once, so this always terminates.

    Args:
        adj: Adjacency from build_adjacency()

    Returns:
        {node_id: layer}
    """
    remaining = dict(adj.indegree)
    layer: Dict[str, int] = {nid: 0 for nid in adj.order}
    placed = set()
    queue = deque(nid for nid in adj.order if remaining[nid] == 0)
    forced = 0

    def place(node_id: str) -> None:
        placed.add(node_id)
        for nxt in adj.successors(node_id):
            if nxt in placed:
                continue
            layer[nxt] = max(layer[nxt], layer[node_id] + 1)
            remaining[nxt] -= 1
            if remaining[nxt] == 0:
                queue.append(nxt)

    cursor = 0
    while len(placed) < len(adj.order):
        while queue:
            node_id = queue.popleft()
            if node_id not in placed:
                place(node_id)

        if len(placed) == len(adj.order):
            break

        # Cycle: fall back to insertion order
        while adj.order[cursor] in placed:
            cursor += 1
        forced += 1
        place(adj.order[cursor])

    if forced:
        logger.debug(f"Layering broke {forced} cycle(s) using insertion order")

    return layer


class LayeredLayout:
    """
    Computes a layered layout for a snapshot.

    Example usage:
        engine = LayeredLayout(nodes, edges)
        result = engine.run()

        print(result.layers)  # {"n1": 0, "n2": 1, "n3": 1}
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        settings: Optional[LayoutSettings] = None,
    ):
        self.nodes = list(nodes)
        self.edges = list(edges)
        self.settings = settings or LayoutSettings()

    def run(self) -> LayoutResult:
        """
        Raises:
            InvalidGraphInput: If node ids or edge ids repeat
        """
        if len(self.nodes) < 2:
            logger.debug(f"Skipping layout for {len(self.nodes)} node(s)")
            return LayoutResult(nodes=self.nodes, edges=self.edges)

        adj = build_adjacency(self.nodes, self.edges)
        layers = compute_layers(adj)

        # Nodes are visited in insertion order, so rows within a layer are stable
        rows: Dict[int, int] = {}
        positioned: List[Node] = []
        for node in self.nodes:
            layer = layers[node.id]
            row = rows.get(layer, 0)
            rows[layer] = row + 1
            positioned.append(node.with_position(
                layer * self.settings.horizontal_spacing,
                row * self.settings.vertical_spacing,
            ))

        logger.debug(
            f"Laid out {len(positioned)} nodes across {len(rows)} layers"
        )
        return LayoutResult(nodes=positioned, edges=self.edges, layers=layers)


def layout(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    settings: Optional[LayoutSettings] = None,
) -> LayoutResult:
    """
    Recompute node positions into a layered arrangement.

    Fewer than two nodes: nodes are returned unchanged. Input is never mutated.
    """
    return LayeredLayout(nodes, edges, settings).run()
