"""
Adjacency Builder

Normalizes a node/edge snapshot into the adjacency structure consumed by the
validator and the layout engine. Structural problems (dangling references,
self-loops, repeated connections) are recorded rather than raised.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple
import logging

from .model import Edge, Node, check_unique_ids

logger = logging.getLogger(__name__)


@dataclass
class Adjacency:
    """
    Normalized view of a graph snapshot.

    Attributes:
        order: Node ids in insertion order
        nodes: Node records keyed by id
        outgoing: {node_id: successor ids}, deduplicated, edge insertion order
        incoming: {node_id: predecessor ids}, deduplicated, edge insertion order
        indegree: {node_id: number of distinct predecessors}
        degree: {node_id: structurally valid edges touching the node}
        dangling: (edge_id, missing_node_id) pairs, in edge order
        self_loops: Edges whose source equals their target
        duplicates: (source, target) pairs seen more than once, each pair once
    """
    order: List[str] = field(default_factory=list)
    nodes: Dict[str, Node] = field(default_factory=dict)
    outgoing: Dict[str, List[str]] = field(default_factory=dict)
    incoming: Dict[str, List[str]] = field(default_factory=dict)
    indegree: Dict[str, int] = field(default_factory=dict)
    degree: Dict[str, int] = field(default_factory=dict)
    dangling: List[Tuple[str, str]] = field(default_factory=list)
    self_loops: List[Edge] = field(default_factory=list)
    duplicates: List[Tuple[str, str]] = field(default_factory=list)

    def successors(self, node_id: str) -> List[str]:
        return self.outgoing.get(node_id, [])

    def predecessors(self, node_id: str) -> List[str]:
        return self.incoming.get(node_id, [])


def build_adjacency(nodes: Sequence[Node], edges: Sequence[Edge]) -> Adjacency:
    """
    Build adjacency lists and indegrees from a snapshot.

    Edge handling, in order:
    - Endpoint not in nodes: recorded in `dangling` once per missing id, edge skipped
    - source == target: recorded in `self_loops`, not added to `outgoing`
    - (source, target) already seen: recorded in `duplicates` once per pair

    Args:
        nodes: Node records in insertion order
        edges: Edge records in insertion order

    Returns:
        Adjacency built in a stable, insertion-ordered way

    Raises:
        InvalidGraphInput: If node ids or edge ids repeat
    """
    check_unique_ids(nodes, edges)

    adj = Adjacency()
    for node in nodes:
        adj.order.append(node.id)
        adj.nodes[node.id] = node
        adj.outgoing[node.id] = []
        adj.incoming[node.id] = []
        adj.indegree[node.id] = 0
        adj.degree[node.id] = 0

    seen_pairs = set()
    reported_pairs = set()

    for edge in edges:
        missing = [
            nid for nid in dict.fromkeys((edge.source, edge.target))
            if nid not in adj.nodes
        ]
        if missing:
            for nid in missing:
                adj.dangling.append((edge.id, nid))
            continue

        adj.degree[edge.source] += 1
        if edge.source != edge.target:
            adj.degree[edge.target] += 1

        if edge.source == edge.target:
            adj.self_loops.append(edge)
            continue

        pair = (edge.source, edge.target)
        if pair in seen_pairs:
            if pair not in reported_pairs:
                reported_pairs.add(pair)
                adj.duplicates.append(pair)
            continue
        seen_pairs.add(pair)

        adj.outgoing[edge.source].append(edge.target)
        adj.incoming[edge.target].append(edge.source)
        adj.indegree[edge.target] += 1

    logger.debug(
        f"Built adjacency: {len(adj.order)} nodes, {len(seen_pairs)} edges, "
        f"{len(adj.dangling)} dangling, {len(adj.self_loops)} self-loops, "
        f"{len(adj.duplicates)} duplicate pairs"
    )
    return adj
