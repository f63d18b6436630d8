"""
Ranking and filtering of stored jobs for the read endpoints.
"""

from datetime import datetime
from typing import Optional

from .matcher import extract_salary_number, match_jobs_to_profile
from .models import Job, SearchFilters, UserProfile
from .store import JobStore


DEFAULT_SEARCH_POOL = 100
DEFAULT_RESULT_LIMIT = 25
PROFILE_SEARCH_SKILLS = 5


def _within_salary_band(job: Job, min_salary: Optional[int], max_salary: Optional[int]) -> bool:
    amount = extract_salary_number(job.salary)
    if amount is None:
        return False
    if min_salary is not None and amount < min_salary:
        return False
    if max_salary is not None and amount > max_salary:
        return False
    return True


def search_jobs(
    store: JobStore,
    profile: UserProfile,
    filters: SearchFilters,
    now: Optional[datetime] = None,
) -> list[Job]:
    """
    Search stored jobs, score them against the profile and sort.

    Args:
        store: Job store to query
        profile: Profile to score against
        filters: Keyword, source, salary, limit and sort criteria
        now: Reference time for recency scoring

    Returns:
        Scored jobs, at most filters.limit (default 25)
    """
    keywords = filters.skills or profile.skills[:PROFILE_SEARCH_SKILLS]
    jobs = store.search(keywords, filters.limit or DEFAULT_SEARCH_POOL)

    if filters.sources:
        allowed = set(filters.sources)
        jobs = [job for job in jobs if job.source in allowed]

    if filters.min_salary is not None or filters.max_salary is not None:
        jobs = [
            job for job in jobs
            if _within_salary_band(job, filters.min_salary, filters.max_salary)
        ]

    ranked = match_jobs_to_profile(jobs, profile, now=now)

    if filters.sort_by == "recent":
        ranked.sort(key=lambda j: j.posted, reverse=True)
    elif filters.sort_by == "salary":
        ranked.sort(key=lambda j: extract_salary_number(j.salary) or 0, reverse=True)

    return ranked[:filters.limit or DEFAULT_RESULT_LIMIT]


def recent_jobs(
    store: JobStore,
    profile: UserProfile,
    limit: int = DEFAULT_RESULT_LIMIT,
    now: Optional[datetime] = None,
) -> list[Job]:
    """The newest stored jobs, scored and ranked by match."""
    return match_jobs_to_profile(store.list_jobs(limit), profile, now=now)


def top_jobs(
    store: JobStore,
    profile: UserProfile,
    pool: int = DEFAULT_SEARCH_POOL,
    limit: int = DEFAULT_RESULT_LIMIT,
    now: Optional[datetime] = None,
) -> list[Job]:
    """Best matches among the most recent pool of stored jobs."""
    return match_jobs_to_profile(store.list_jobs(pool), profile, now=now)[:limit]
