"""
Upwork job source.

Reads Upwork's per-keyword RSS search feed. Upwork retired the public feed
in 2024 (it answers 410 Gone), so in practice this source reports zero
jobs; the parser is kept for feed-compatible mirrors configured via
``feed_url``.
"""

from typing import Optional
from urllib.parse import urlencode

from bs4 import BeautifulSoup
import feedparser
import requests

from .base import JobSource, dedupe, generate_id, matches_keywords, parse_date
from job_radar.core.models import Job


class UpworkSource(JobSource):
    """Upwork RSS feed source."""

    name = "Upwork"
    base_url = "https://www.upwork.com"
    max_results = 20

    DEFAULT_QUERIES = ["ai automation", "prompt engineering", "no-code"]

    def __init__(self, feed_url: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.feed_url = feed_url or f"{self.base_url}/ab/feed/jobs/rss"

    def _scrape(self, keywords: Optional[list[str]]) -> list[Job]:
        queries = (keywords or self.DEFAULT_QUERIES)[:3]
        jobs = []

        for query in queries:
            url = f"{self.feed_url}?" + urlencode({"q": query, "sort": "recency"})
            try:
                response = requests.get(
                    url,
                    headers=self._headers("application/rss+xml, application/xml"),
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                self.logger.error(f"Upwork feed error '{query}': {e}")
                continue

            if response.status_code == 410:
                self.logger.info("Upwork: RSS feed discontinued, skipping source")
                return []
            if response.status_code != 200:
                self.logger.warning(f"Upwork returned status {response.status_code}")
                continue

            feed = feedparser.parse(response.content)
            if feed.bozo:
                # Malformed feeds are still parsed leniently
                self.logger.debug(f"Upwork feed '{query}' is not well-formed: {feed.bozo_exception}")
            jobs.extend(self._parse_entries(feed.entries, keywords))

        unique_jobs = dedupe(jobs, key=lambda j: f"{j.title}|{j.url}")[:self.max_results]
        self.logger.debug(f"Upwork: {len(unique_jobs)} jobs")
        return unique_jobs

    def _parse_entries(self, entries: list, keywords: Optional[list[str]]) -> list[Job]:
        jobs = []

        for entry in entries:
            title = (entry.get("title") or "").replace(" - Upwork", "").strip()
            link = (entry.get("link") or "").strip()
            if not title or not link:
                continue

            raw_description = entry.get("summary") or entry.get("description") or ""
            description = " ".join(
                BeautifulSoup(raw_description, "html.parser").get_text(" ").split()
            )

            if not matches_keywords(f"{title} {description}", keywords):
                continue

            native_id = (entry.get("id") or link).rstrip("/").rsplit("/", 1)[-1]

            jobs.append(Job(
                id=generate_id("upwork", native_id),
                title=title,
                company="Upwork Client",
                source=self.name,
                url=link,
                description=description[:500],
                skills=self._extract_skills(f"{title} {description}"),
                salary=self._extract_budget(description),
                posted=parse_date(entry.get("published") or entry.get("updated")),
                remote=True,
            ))

        return jobs

    @staticmethod
    def _extract_budget(description: str) -> Optional[str]:
        # Feed descriptions carry "Budget: $500" or "Hourly Range: $25.00-$50.00"
        for label in ("Hourly Range:", "Budget:"):
            if label in description:
                value = description.split(label, 1)[1].strip().split(" ")[0]
                return value or None
        return None
