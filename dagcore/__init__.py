"""
Pipeline DAG Core

Pure validation and layout for the pipeline editor. Contains:
- graph: node/edge records, adjacency, connection checks
- validation: DAG validator
- layout: layered and grid layouts
- config: YAML/env settings
- service: FastAPI shell exposing the engines over HTTP
"""

from .graph import Node, Edge, Position, InvalidGraphInput, build_adjacency
from .validation import ValidationResult, validate
from .layout import LayoutResult, layout

__all__ = [
    "Node",
    "Edge",
    "Position",
    "InvalidGraphInput",
    "build_adjacency",
    "ValidationResult",
    "validate",
    "LayoutResult",
    "layout",
]
