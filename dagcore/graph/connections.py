"""
Connection Checks

Decides whether the editor may draw a new connection, and builds the new
edge list when it may.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from .adjacency import Adjacency, build_adjacency
from .model import Edge, Node, unique_edge_id

logger = logging.getLogger(__name__)


class ConnectionRejected(ValueError):
    """Raised by connect() when a connection is not allowed"""


@dataclass(frozen=True)
class ConnectionCheck:
    allowed: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {"allowed": self.allowed, "reason": self.reason}


def _reaches(adj: Adjacency, start: str, goal: str) -> bool:
    stack = [start]
    visited = {start}
    while stack:
        current = stack.pop()
        if current == goal:
            return True
        for nxt in adj.successors(current):
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return False


def check_connection(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    source: Optional[str],
    target: Optional[str],
) -> ConnectionCheck:
    """
    Check a proposed connection source -> target.

    Reasons, first match wins:
    - "Missing source or target"
    - "Unknown node <id>"
    - "Self connection not allowed"
    - "Connection already exists"
    - "Connection from <source> to <target> would create a cycle"
    """
    if not source or not target:
        return ConnectionCheck(False, "Missing source or target")

    adj = build_adjacency(nodes, edges)
    for nid in (source, target):
        if nid not in adj.nodes:
            return ConnectionCheck(False, f"Unknown node {nid}")

    if source == target:
        return ConnectionCheck(False, "Self connection not allowed")

    if any(e.source == source and e.target == target for e in edges):
        return ConnectionCheck(False, "Connection already exists")

    if _reaches(adj, target, source):
        return ConnectionCheck(
            False, f"Connection from {source} to {target} would create a cycle"
        )

    return ConnectionCheck(True)


def connect(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    source: str,
    target: str,
    kind: str = "default",
) -> List[Edge]:
    """
    Return a new edge list with source -> target appended.

    The new edge id is derived from the pair and made unique within `edges`.

    Raises:
        ConnectionRejected: If check_connection() refuses the connection
    """
    check = check_connection(nodes, edges, source, target)
    if not check.allowed:
        logger.debug(f"Rejected connection {source} -> {target}: {check.reason}")
        raise ConnectionRejected(check.reason)

    edge_id = unique_edge_id(source, target, {e.id for e in edges})
    new_edge = Edge(id=edge_id, source=source, target=target, kind=kind)
    logger.debug(f"Created connection {new_edge.id}")
    return list(edges) + [new_edge]
