"""
Command-line interface for es-backend-listener.

Provides commands for building sample documents and checking
timestamp patterns.
"""

from .main import app, main

__all__ = ["main", "app"]
