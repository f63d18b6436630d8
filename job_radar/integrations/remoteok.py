"""
RemoteOK job source.

RemoteOK publishes its board as a public JSON API. The first element of the
response array is a legal notice, not a job.
"""

from typing import Optional

from bs4 import BeautifulSoup
import requests

from .base import JobSource, generate_id, matches_keywords, parse_date
from job_radar.core.models import Job


class RemoteOKSource(JobSource):
    """RemoteOK JSON API source."""

    name = "RemoteOK"
    base_url = "https://remoteok.com"
    max_results = 50

    def _scrape(self, keywords: Optional[list[str]]) -> list[Job]:
        try:
            response = requests.get(
                f"{self.base_url}/api",
                headers=self._headers("application/json"),
                timeout=self.timeout,
            )
            if response.status_code != 200:
                self.logger.error(f"RemoteOK API error: {response.status_code}")
                return []

            data = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"RemoteOK scraper error: {e}")
            return []

        listings = data[1:] if isinstance(data, list) else []

        jobs = []
        for listing in listings:
            if not isinstance(listing, dict):
                continue

            tags = listing.get("tags") or []
            search_text = " ".join([
                listing.get("position") or "",
                listing.get("company") or "",
                listing.get("description") or "",
                " ".join(tags),
            ])
            if not matches_keywords(search_text, keywords):
                continue

            job = self._parse_listing(listing)
            if job:
                jobs.append(job)

            if len(jobs) >= self.max_results:
                break

        self.logger.debug(f"RemoteOK: {len(jobs)} jobs")
        return jobs

    def _parse_listing(self, listing: dict) -> Optional[Job]:
        """Parse one API entry into a Job."""
        native_id = listing.get("id") or listing.get("slug")
        if not native_id:
            return None

        title = listing.get("position") or "Unknown Position"
        raw_description = listing.get("description") or ""
        tags = [str(t).lower() for t in listing.get("tags") or []]

        return Job(
            id=generate_id("remoteok", native_id),
            title=title,
            company=listing.get("company") or "Unknown Company",
            source=self.name,
            url=listing.get("url") or f"{self.base_url}/remote-jobs/{listing.get('slug', native_id)}",
            description=self._clean_description(raw_description),
            skills=tags or self._extract_skills(f"{title} {raw_description}"),
            salary=self._format_salary(listing.get("salary_min"), listing.get("salary_max")),
            posted=parse_date(listing.get("date")),
            remote=True,
        )

    @staticmethod
    def _clean_description(html: str) -> str:
        text = BeautifulSoup(html, "html.parser").get_text(" ")
        return " ".join(text.split())[:500]

    @staticmethod
    def _format_salary(salary_min, salary_max) -> Optional[str]:
        try:
            salary_min = int(salary_min or 0)
            salary_max = int(salary_max or 0)
        except (TypeError, ValueError):
            return None

        if salary_min and salary_max:
            return f"${salary_min:,} - ${salary_max:,}"
        if salary_min:
            return f"${salary_min:,}+"
        if salary_max:
            return f"Up to ${salary_max:,}"
        return None
