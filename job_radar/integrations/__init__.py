"""
Job sources for remote-work boards and the curated fallback.
"""

from .base import JobSource, generate_id
from .curated import CuratedSource
from .indeed import IndeedSource
from .remoteok import RemoteOKSource
from .upwork import UpworkSource
from .weworkremotely import WeWorkRemotelySource
from .aggregator import AggregationResult, JobAggregator

__all__ = [
    "JobSource",
    "generate_id",
    "CuratedSource",
    "IndeedSource",
    "RemoteOKSource",
    "UpworkSource",
    "WeWorkRemotelySource",
    "AggregationResult",
    "JobAggregator",
]
