"""
Job Store - Persisted collection of scraped jobs plus the user profile.

Everything lives in one JSON document, read into memory when the store is
created and written back after every mutation. Writes are serialised by a
lock, but the file itself is overwritten in place: a crash mid-write can
lose the document.
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional, Union
import json
import logging
import threading

from .models import Job, UserProfile, utcnow


DEFAULT_RETENTION_CAP = 500


class JobStore:
    """Repository for jobs and the single user profile."""

    def __init__(
        self,
        db_path: Union[str, Path] = "./data/db.json",
        retention_cap: int = DEFAULT_RETENTION_CAP,
    ):
        """
        Initialize the store and load whatever is on disk.

        Args:
            db_path: Path of the JSON document
            retention_cap: Maximum number of jobs kept after a merge
        """
        self.db_path = Path(db_path)
        self.retention_cap = retention_cap
        self.logger = logging.getLogger(self.__class__.__name__)
        self._lock = threading.Lock()

        self.jobs: list[Job] = []
        self.profile = UserProfile()
        self.load()

    def __len__(self) -> int:
        return len(self.jobs)

    def load(self) -> None:
        """Load the document, falling back to an empty store."""
        self.jobs = []
        self.profile = UserProfile()

        if not self.db_path.exists():
            self.logger.info(f"No database at {self.db_path}, starting empty")
            return

        try:
            with open(self.db_path, "r", encoding="utf-8") as f:
                data = json.load(f)

            jobs = [Job.from_dict(j) for j in data.get("jobs", [])]
            profile = UserProfile.from_dict(data.get("profile") or {})
        except (OSError, ValueError, TypeError, AttributeError) as e:
            self.logger.error(f"Error loading database {self.db_path}: {e}")
            return

        self.jobs = jobs
        self.profile = profile
        self.logger.info(
            f"Database loaded: {len(self.jobs)} jobs, {len(self.profile.skills)} skills"
        )

    def flush(self) -> bool:
        """
        Write the whole document back to disk.

        Failures are logged and leave memory ahead of disk.

        Returns:
            True if the write succeeded
        """
        data = {
            "jobs": [job.to_dict(include_match=False) for job in self.jobs],
            "profile": self.profile.to_dict(),
        }

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.db_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Error saving database {self.db_path}: {e}")
            return False

        return True

    def merge(self, new_jobs: list[Job]) -> None:
        """
        Upsert jobs by id, then enforce the retention cap.

        A job with a known id replaces the stored record whole.
        """
        with self._lock:
            index = {job.id: i for i, job in enumerate(self.jobs)}

            for job in new_jobs:
                stored = job.with_match(None, []) if job.match_score is not None else job
                if job.id in index:
                    self.jobs[index[job.id]] = stored
                else:
                    index[job.id] = len(self.jobs)
                    self.jobs.append(stored)

            if len(self.jobs) > self.retention_cap:
                dropped = len(self.jobs) - self.retention_cap
                self.jobs = self._sorted_recent(self.jobs)[:self.retention_cap]
                self.logger.info(f"Retention cap reached, dropped {dropped} oldest jobs")

            self.flush()

    def list_jobs(self, limit: int = 100, offset: int = 0) -> list[Job]:
        """Jobs newest first, windowed by offset and limit."""
        return self._sorted_recent(self.jobs)[offset:offset + limit]

    def search(self, keywords: list[str], limit: int = 25) -> list[Job]:
        """
        Jobs whose title, description or skills contain any keyword.

        Args:
            keywords: Case-insensitive substrings, OR-matched
            limit: Max results

        Returns:
            Matching jobs newest first
        """
        if not keywords:
            return self.list_jobs(limit, 0)

        lowered = [k.lower() for k in keywords]
        matches = []
        for job in self.jobs:
            text = f"{job.title} {job.description} {' '.join(job.skills)}".lower()
            if any(kw in text for kw in lowered):
                matches.append(job)

        return self._sorted_recent(matches)[:limit]

    def get_profile(self) -> UserProfile:
        return self.profile.copy()

    def save_profile(self, partial: dict) -> UserProfile:
        """Shallow-merge profile fields and persist."""
        with self._lock:
            self.profile = self.profile.merged(partial)
            self.flush()
            return self.profile.copy()

    def update_skills(
        self,
        add: Optional[list[str]] = None,
        remove: Optional[list[str]] = None,
    ) -> UserProfile:
        """
        Add and remove profile skills in one locked read-modify-write.

        Added skills keep first-seen order after the existing ones.
        """
        with self._lock:
            skills = list(dict.fromkeys(self.profile.skills + list(add or [])))
            if remove:
                skills = [s for s in skills if s not in remove]
            self.profile = self.profile.merged({"skills": skills})
            self.flush()
            return self.profile.copy()

    def clear_old_jobs(self, days_old: int = 30) -> int:
        """
        Drop jobs posted more than days_old days ago.

        Returns:
            Number of jobs removed
        """
        cutoff = utcnow() - timedelta(days=days_old)
        with self._lock:
            before = len(self.jobs)
            self.jobs = [job for job in self.jobs if job.posted >= cutoff]
            removed = before - len(self.jobs)
            self.flush()

        self.logger.info(f"Cleared {removed} jobs older than {days_old} days")
        return removed

    def get(self, job_id: str) -> Optional[Job]:
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    @staticmethod
    def _sorted_recent(jobs: list[Job]) -> list[Job]:
        return sorted(jobs, key=lambda j: j.posted, reverse=True)
