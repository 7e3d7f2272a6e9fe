"""
Graph Module

Node/edge records, adjacency construction, and connection checks.
"""

from .model import (
    Position,
    Node,
    Edge,
    InvalidGraphInput,
    edge_id_for,
    unique_edge_id,
    check_unique_ids,
    nodes_from_dicts,
    edges_from_dicts,
)
from .adjacency import Adjacency, build_adjacency
from .connections import ConnectionCheck, ConnectionRejected, check_connection, connect

__all__ = [
    "Position",
    "Node",
    "Edge",
    "InvalidGraphInput",
    "edge_id_for",
    "unique_edge_id",
    "check_unique_ids",
    "nodes_from_dicts",
    "edges_from_dicts",
    "Adjacency",
    "build_adjacency",
    "ConnectionCheck",
    "ConnectionRejected",
    "check_connection",
    "connect",
]
