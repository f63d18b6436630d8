"""Core models, scoring and storage for job matching."""

from .models import (
    Job,
    UserProfile,
    ScraperResult,
    SearchFilters,
)
from .matcher import (
    JobMatcher,
    MatchResult,
    generate_job_summary,
    match_jobs_to_profile,
    score_job,
)
from .store import JobStore

__all__ = [
    "Job",
    "UserProfile",
    "ScraperResult",
    "SearchFilters",
    "JobMatcher",
    "MatchResult",
    "generate_job_summary",
    "match_jobs_to_profile",
    "score_job",
    "JobStore",
]
