"""
Base class for job sources.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional
import logging
import re

from job_radar.core.models import Job, ScraperResult, parse_timestamp, utcnow
from job_radar.core.skills import extract_skills_from_text


DEFAULT_USER_AGENT = "JobRadar/1.0 (+personal remote job search)"
DEFAULT_TIMEOUT = 20

_RELATIVE_UNITS = [
    (re.compile(r"(\d+)\s*h(?:ou)?r?s?\s*ago", re.IGNORECASE), timedelta(hours=1)),
    (re.compile(r"(\d+)\s*d(?:ay)?s?\s*ago", re.IGNORECASE), timedelta(days=1)),
    (re.compile(r"(\d+)\s*w(?:ee)?k?s?\s*ago", re.IGNORECASE), timedelta(weeks=1)),
    (re.compile(r"(\d+)\s*mo(?:nth)?s?\s*ago", re.IGNORECASE), timedelta(days=30)),
]


def generate_id(source: str, identifier) -> str:
    """Stable id for a posting, safe as a storage key and URL segment."""
    return re.sub(r"[^a-zA-Z0-9-]", "-", f"{source}-{identifier}")


def matches_keywords(text: str, keywords: Optional[Iterable[str]]) -> bool:
    """True if text contains any keyword (case-insensitive) or no keywords given."""
    keywords = [k for k in (keywords or []) if k]
    if not keywords:
        return True
    lowered = text.lower()
    return any(kw.lower() in lowered for kw in keywords)


def dedupe(jobs: list[Job], key: Callable[[Job], str]) -> list[Job]:
    """Drop later jobs whose key was already seen."""
    seen = set()
    unique_jobs = []
    for job in jobs:
        k = key(job)
        if k not in seen:
            seen.add(k)
            unique_jobs.append(job)
    return unique_jobs


def parse_date(text: Optional[str], now: Optional[datetime] = None) -> datetime:
    """
    Turn a scraped date into a timestamp.

    Handles relative phrases ("just now", "yesterday", "3 days ago",
    "2 weeks ago", "1 month ago") and absolute ISO or RFC 2822 dates.
    Anything unparseable is treated as now.
    """
    now = now or utcnow()
    if not text:
        return now

    lowered = text.strip().lower()
    if "today" in lowered or "just now" in lowered or "just posted" in lowered:
        return now
    if "yesterday" in lowered:
        return now - timedelta(days=1)

    for pattern, unit in _RELATIVE_UNITS:
        match = pattern.search(lowered)
        if match:
            return now - int(match.group(1)) * unit

    return parse_timestamp(text.strip()) or now


class JobSource(ABC):
    """
    Abstract base class for job sources.

    Subclasses implement _scrape(). The public scrape() never raises: any
    failure is logged and produces an empty list, so one broken board cannot
    block the others.
    """

    name: str = ""
    base_url: str = ""
    max_results: int = 50

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, timeout: int = DEFAULT_TIMEOUT):
        self.user_agent = user_agent
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

    def scrape(self, keywords: Optional[list[str]] = None) -> list[Job]:
        """
        Fetch and normalize postings.

        Args:
            keywords: Optional OR-filter over title, description and company

        Returns:
            List of Job objects, empty on any failure
        """
        try:
            return self._scrape(keywords)
        except Exception as e:
            self.logger.error(f"{self.name} scraper error: {e}")
            return []

    @abstractmethod
    def _scrape(self, keywords: Optional[list[str]]) -> list[Job]:
        """Source-specific fetch and parse; may raise."""
        pass

    def get_result(self, keywords: Optional[list[str]] = None) -> ScraperResult:
        jobs = self.scrape(keywords)
        return ScraperResult(jobs=jobs, source=self.name, scraped_at=utcnow())

    def _headers(self, accept: str = "text/html,application/xhtml+xml") -> dict:
        return {"User-Agent": self.user_agent, "Accept": accept}

    def _absolute_url(self, href: str) -> str:
        return href if href.startswith("http") else f"{self.base_url}{href}"

    def _extract_skills(self, text: str) -> list[str]:
        return extract_skills_from_text(text)
