"""
Core data models for the job radar.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse a stored or scraped timestamp.

    Accepts datetimes, epoch seconds, ISO-8601 strings (with or without a
    trailing ``Z``) and RFC 2822 strings as found in RSS feeds.

    Returns:
        An aware datetime, or None if the value cannot be parsed
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return ensure_aware(value)

    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return ensure_aware(datetime.fromisoformat(text))
    except ValueError:
        pass

    try:
        return ensure_aware(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        return None


@dataclass
class Job:
    """A normalized job posting."""
    id: str
    title: str = ""
    company: str = ""
    source: str = ""
    url: str = ""
    description: str = ""
    skills: list[str] = field(default_factory=list)
    salary: Optional[str] = None
    posted: datetime = field(default_factory=utcnow)
    remote: bool = False

    # Derived per read against the current profile, never persisted
    match_score: Optional[int] = None
    match_reasons: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.posted = ensure_aware(self.posted)

    def with_match(self, score: int, reasons: list[str]) -> "Job":
        """Return a copy carrying match data."""
        return replace(self, match_score=score, match_reasons=list(reasons))

    def to_dict(self, include_match: bool = True) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "source": self.source,
            "url": self.url,
            "description": self.description,
            "skills": list(self.skills),
            "salary": self.salary,
            "posted": self.posted.isoformat(),
            "remote": self.remote,
        }
        if include_match and self.match_score is not None:
            data["matchScore"] = self.match_score
            data["matchReasons"] = list(self.match_reasons)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Job":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", "") or "",
            company=data.get("company", "") or "",
            source=data.get("source", "") or "",
            url=data.get("url", "") or "",
            description=data.get("description", "") or "",
            skills=list(data.get("skills") or []),
            salary=data.get("salary") or None,
            posted=parse_timestamp(data.get("posted")) or utcnow(),
            remote=bool(data.get("remote", False)),
        )


@dataclass
class UserProfile:
    """The single skill profile jobs are matched against."""
    id: str = "default"
    skills: list[str] = field(default_factory=list)
    experience: str = ""
    min_hourly_rate: Optional[int] = None
    min_project_rate: Optional[int] = None
    preferred_categories: list[str] = field(default_factory=list)

    # Wire name -> attribute name
    FIELD_NAMES = {
        "id": "id",
        "skills": "skills",
        "experience": "experience",
        "minHourlyRate": "min_hourly_rate",
        "minProjectRate": "min_project_rate",
        "preferredCategories": "preferred_categories",
    }

    def copy(self) -> "UserProfile":
        return replace(
            self,
            skills=list(self.skills),
            preferred_categories=list(self.preferred_categories),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "skills": list(self.skills),
            "experience": self.experience,
            "minHourlyRate": self.min_hourly_rate,
            "minProjectRate": self.min_project_rate,
            "preferredCategories": list(self.preferred_categories),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        profile = cls()
        return profile.merged(data)

    def merged(self, partial: dict) -> "UserProfile":
        """
        Shallow-merge a partial wire-form dict over this profile.

        Unknown keys are ignored; attribute names are accepted as well as
        wire names.
        """
        updated = self.copy()
        attribute_names = set(self.FIELD_NAMES.values())

        for key, value in partial.items():
            attr = self.FIELD_NAMES.get(key, key if key in attribute_names else None)
            if attr is None:
                continue
            if attr in ("skills", "preferred_categories"):
                value = list(dict.fromkeys(value or []))
            elif attr in ("min_hourly_rate", "min_project_rate"):
                value = int(value) if value not in (None, "") else None
            elif attr == "experience":
                value = value or ""
            setattr(updated, attr, value)

        return updated


@dataclass
class ScraperResult:
    """Output of one adapter invocation."""
    jobs: list[Job]
    source: str
    scraped_at: datetime = field(default_factory=utcnow)

    def summary(self) -> dict:
        return {
            "name": self.source,
            "count": len(self.jobs),
            "scrapedAt": self.scraped_at.isoformat(),
        }


SORT_OPTIONS = ("match", "recent", "salary")


@dataclass
class SearchFilters:
    """Criteria for the search endpoint."""
    skills: Optional[list[str]] = None
    sources: Optional[list[str]] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    limit: Optional[int] = None
    sort_by: str = "match"

    def __post_init__(self):
        if self.sort_by not in SORT_OPTIONS:
            raise ValueError(
                f"sortBy must be one of {', '.join(SORT_OPTIONS)}, got '{self.sort_by}'"
            )

    def to_dict(self) -> dict:
        return {
            "skills": self.skills,
            "sources": self.sources,
            "minSalary": self.min_salary,
            "maxSalary": self.max_salary,
            "limit": self.limit,
            "sortBy": self.sort_by,
        }
