"""
Service Module

HTTP shell exposing validation and layout to the editor.
"""

from .main import create_app, main

__all__ = [
    "create_app",
    "main",
]
