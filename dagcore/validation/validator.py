"""
DAG Validator

Checks a pipeline snapshot for structural problems and reports them as data.
Validity is a state for the editor to display, so nothing here raises for
a malformed graph; only broken id uniqueness is treated as a caller bug.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import logging

from ..config.loader import ValidationSettings
from ..graph.adjacency import Adjacency, build_adjacency
from ..graph.model import Edge, Node

logger = logging.getLogger(__name__)

# DFS colours
WHITE, GRAY, BLACK = 0, 1, 2


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate(); valid iff there are no errors"""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    node_count: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def status(self) -> str:
        """Status badge value: empty, valid or invalid"""
        if self.errors:
            return "invalid"
        if self.node_count == 0:
            return "empty"
        return "valid"

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


class DAGValidator:
    """
    Validates a node/edge snapshot.

    Checks run in this order and all of them run:
    1. Dangling edges (unknown endpoints)
    2. Self-loops
    3. Duplicate connections
    4. Cycles (three-colour DFS over the remaining edges)
    5. Isolated nodes (warnings)

    Example usage:
        validator = DAGValidator(nodes, edges)
        result = validator.validate()

        print(result.is_valid)  # False
        print(result.errors)    # ["Cycle detected involving node n1"]
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        settings: Optional[ValidationSettings] = None,
    ):
        """
        Args:
            nodes: Node records in insertion order
            edges: Edge records in insertion order
            settings: Validation thresholds (defaults when omitted)

        Raises:
            InvalidGraphInput: If node ids or edge ids repeat
        """
        self.settings = settings or ValidationSettings()
        self.adjacency: Adjacency = build_adjacency(nodes, edges)

    def validate(self) -> ValidationResult:
        errors: List[str] = []
        warnings: List[str] = []

        errors.extend(self._check_dangling())
        errors.extend(self._check_self_loops())
        errors.extend(self._check_duplicates())
        errors.extend(self._check_cycles())
        warnings.extend(self._check_isolated())

        result = ValidationResult(
            errors=errors, warnings=warnings, node_count=len(self.adjacency.order)
        )
        logger.debug(
            f"Validated {len(self.adjacency.order)} nodes: "
            f"{len(errors)} errors, {len(warnings)} warnings"
        )
        return result

    def _check_dangling(self) -> List[str]:
        return [
            f"Edge {edge_id} references unknown node {node_id}"
            for edge_id, node_id in self.adjacency.dangling
        ]

    def _check_self_loops(self) -> List[str]:
        return [
            f"Node {edge.source} cannot connect to itself"
            for edge in self.adjacency.self_loops
        ]

    def _check_duplicates(self) -> List[str]:
        return [
            f"Duplicate connection from {source} to {target}"
            for source, target in self.adjacency.duplicates
        ]

    def _check_cycles(self) -> List[str]:
        """
        Detect cycles using an iterative three-colour DFS.

        A successor that is still GRAY (on the current path) closes a cycle
        through it. Traversal continues after each report and restarts from
        every WHITE node, so disjoint cycles are all found. Each node is named
        at most once.
        """
        adj = self.adjacency
        color: Dict[str, int] = {nid: WHITE for nid in adj.order}
        cycle_nodes: List[str] = []
        reported = set()

        for root in adj.order:
            if color[root] != WHITE:
                continue

            color[root] = GRAY
            # (node_id, index of next successor to visit)
            stack = [(root, 0)]
            while stack:
                node_id, idx = stack[-1]
                successors = adj.successors(node_id)
                if idx >= len(successors):
                    color[node_id] = BLACK
                    stack.pop()
                    continue

                stack[-1] = (node_id, idx + 1)
                nxt = successors[idx]
                if color[nxt] == WHITE:
                    color[nxt] = GRAY
                    stack.append((nxt, 0))
                elif color[nxt] == GRAY and nxt not in reported:
                    reported.add(nxt)
                    cycle_nodes.append(nxt)

        if cycle_nodes:
            logger.debug(f"Cycles detected through: {cycle_nodes}")

        return [f"Cycle detected involving node {nid}" for nid in cycle_nodes]

    def _check_isolated(self) -> List[str]:
        adj = self.adjacency
        if len(adj.order) < self.settings.isolated_warning_min_nodes:
            return []

        return [
            f"Node {nid} ({adj.nodes[nid].label}) is not connected to the pipeline"
            for nid in adj.order
            if adj.degree[nid] == 0
        ]


def validate(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    settings: Optional[ValidationSettings] = None,
) -> ValidationResult:
    """
    Validate a pipeline snapshot.

    Pure and idempotent: the same input always yields an equal result.

    Raises:
        InvalidGraphInput: If node ids or edge ids repeat
    """
    return DAGValidator(nodes, edges, settings).validate()
