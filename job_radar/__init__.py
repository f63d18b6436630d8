"""
Job Radar - Remote job aggregation and matching

This application:
1. Collects remote-work listings from job boards and curated platforms
2. Deduplicates them into a local store
3. Scores and ranks them against your skill profile
4. Serves the results over a small HTTP API and a CLI
"""

__version__ = "1.0.0"
__author__ = "Job Radar"
