"""
We Work Remotely job source.

There is no API, so listing pages are scraped with BeautifulSoup. Only the
first few search pages are fetched per refresh.
"""

from typing import Optional

from bs4 import BeautifulSoup
import requests

from .base import JobSource, dedupe, generate_id, matches_keywords
from job_radar.core.models import Job, utcnow


class WeWorkRemotelySource(JobSource):
    """We Work Remotely HTML source."""

    name = "WeWorkRemotely"
    base_url = "https://weworkremotely.com"
    max_results = 30
    max_pages = 3

    LISTING_PATHS = [
        "/remote-jobs/search?term=ai",
        "/remote-jobs/search?term=automation",
        "/remote-jobs/search?term=content",
        "/remote-jobs/search?term=marketing",
        "/categories/remote-programming-jobs",
        "/categories/remote-customer-support-jobs",
        "/categories/remote-marketing-jobs",
    ]

    def _scrape(self, keywords: Optional[list[str]]) -> list[Job]:
        jobs = []

        for path in self.LISTING_PATHS[:self.max_pages]:
            try:
                response = requests.get(
                    f"{self.base_url}{path}",
                    headers=self._headers(),
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                self.logger.error(f"WWR page error {path}: {e}")
                continue

            if response.status_code != 200:
                self.logger.warning(f"WWR returned status {response.status_code} for {path}")
                continue

            try:
                jobs.extend(self._parse_page(response.text, keywords))
            except Exception as e:
                self.logger.error(f"WWR parse error {path}: {e}")

        unique_jobs = dedupe(jobs, key=lambda j: j.url)[:self.max_results]
        self.logger.debug(f"WeWorkRemotely: {len(unique_jobs)} jobs")
        return unique_jobs

    def _parse_page(self, html: str, keywords: Optional[list[str]]) -> list[Job]:
        soup = BeautifulSoup(html, "html.parser")
        jobs = []

        for item in soup.select("li.feature, li.new-listing"):
            link = item.find("a")
            href = link.get("href") if link else None
            if not href or "categories" in href:
                continue

            title_elem = item.select_one(".title")
            company_elem = item.select_one(".company")
            region_elem = item.select_one(".region")

            title = title_elem.get_text(strip=True) if title_elem else ""
            company = company_elem.get_text(strip=True) if company_elem else ""
            region = region_elem.get_text(strip=True) if region_elem else ""

            if not title:
                continue

            if not matches_keywords(f"{title} {company}", keywords):
                continue

            jobs.append(Job(
                id=generate_id("wwr", href),
                title=title,
                company=company,
                source=self.name,
                url=self._absolute_url(href),
                description=f"{title} at {company}. {region}".strip(),
                skills=self._extract_skills(f"{title} {company}"),
                posted=utcnow(),
                remote=True,
            ))

        return jobs
