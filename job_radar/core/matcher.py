"""
Job Matcher - Scoring of job postings against the user profile.

The score is an additive point budget capped at 100:
- Skill keywords: 10 points per matching profile keyword, at most 60
- Remote: 10 points
- Recency: 15 / 10 / 5 points for postings up to 1 / 3 / 7 days old
- Rate: 15 points when the posted pay meets the profile's hourly floor

The weights are a tunable heuristic, not a derived model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import math
import re

from .models import Job, UserProfile, utcnow
from .skills import extract_user_keywords


MAX_SCORE = 100

WEIGHTS = {
    "keyword_hit": 10,
    "keyword_cap": 60,
    "remote": 10,
    "rate": 15,
}

# (max days since posted, points, reason); first matching tier wins
RECENCY_TIERS = [
    (1, 15, "Posted today"),
    (3, 10, "Posted recently"),
    (7, 5, "Posted this week"),
]

SALARY_NUMBER = re.compile(r"\$?(\d+)")


@dataclass
class MatchResult:
    """Score and the reasons behind it, in the order points were awarded."""
    score: int = 0
    reasons: list[str] = field(default_factory=list)


def extract_salary_number(salary: Optional[str]) -> Optional[int]:
    """First integer in a free-text salary ("$80/hr" -> 80)."""
    if not salary:
        return None
    match = SALARY_NUMBER.search(salary)
    return int(match.group(1)) if match else None


def days_since(posted: datetime, now: Optional[datetime] = None) -> int:
    """Whole days between now and posted, rounded up."""
    now = now or utcnow()
    seconds = abs((now - posted).total_seconds())
    return math.ceil(seconds / 86400)


class JobMatcher:
    """Matches jobs to a profile and calculates fit scores."""

    def __init__(self, profile: UserProfile, now: Optional[datetime] = None):
        self.profile = profile
        self.now = now
        self.keywords = extract_user_keywords(profile)

    def match_job(self, job: Job) -> MatchResult:
        """Calculate the match score and reasons for a job."""
        result = MatchResult()
        total = 0

        points, matched = self._keyword_points(job)
        if matched:
            total += points
            result.reasons.append(f"Matches skills: {', '.join(matched[:3])}")

        if job.remote:
            total += WEIGHTS["remote"]
            result.reasons.append("Remote position")

        points, reason = self._recency_points(job)
        if reason:
            total += points
            result.reasons.append(reason)

        if self._meets_rate(job):
            total += WEIGHTS["rate"]
            result.reasons.append(f"Meets rate: {job.salary}")

        result.score = min(total, MAX_SCORE)
        return result

    def _keyword_points(self, job: Job) -> tuple[int, list[str]]:
        text = f"{job.title} {job.description} {' '.join(job.skills)}".lower()
        matched = [kw for kw in self.keywords if kw in text]
        points = min(WEIGHTS["keyword_cap"], len(matched) * WEIGHTS["keyword_hit"])
        return points, matched

    def _recency_points(self, job: Job) -> tuple[int, Optional[str]]:
        age = days_since(job.posted, self.now)
        for max_days, points, reason in RECENCY_TIERS:
            if age <= max_days:
                return points, reason
        return 0, None

    def _meets_rate(self, job: Job) -> bool:
        if not job.salary or not self.profile.min_hourly_rate:
            return False
        rate = extract_salary_number(job.salary)
        return rate is not None and rate >= self.profile.min_hourly_rate

    def rank_jobs(self, jobs: list[Job]) -> list[Job]:
        """
        Score every job and sort by score, highest first.

        Equal scores keep their input order.

        Returns:
            Copies of the jobs carrying match_score and match_reasons
        """
        scored = []
        for job in jobs:
            result = self.match_job(job)
            scored.append(job.with_match(result.score, result.reasons))

        scored.sort(key=lambda j: j.match_score, reverse=True)
        return scored


def score_job(job: Job, profile: UserProfile, now: Optional[datetime] = None) -> MatchResult:
    return JobMatcher(profile, now=now).match_job(job)


def match_jobs_to_profile(
    jobs: list[Job],
    profile: UserProfile,
    now: Optional[datetime] = None,
) -> list[Job]:
    return JobMatcher(profile, now=now).rank_jobs(jobs)


def generate_job_summary(job: Job) -> str:
    """One-line digest of a job, skipping whatever the job lacks."""
    parts = [f"{job.title} at {job.company}" if job.company else job.title]

    if job.salary:
        parts.append(f"Pay: {job.salary}")
    if job.remote:
        parts.append("Remote")
    if job.skills:
        parts.append(f"Skills: {', '.join(job.skills[:3])}")
    if job.match_score is not None:
        parts.append(f"Match: {job.match_score}%")
    if job.match_reasons:
        parts.append(f"Why: {'; '.join(job.match_reasons[:2])}")

    return " | ".join(parts)
