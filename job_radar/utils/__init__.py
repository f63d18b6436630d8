"""
Utility modules for the job radar.
"""

from .config import Config

__all__ = [
    "Config",
]
