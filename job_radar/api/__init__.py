"""
HTTP API for the job radar.
"""

from .app import create_app

__all__ = [
    "create_app",
]
