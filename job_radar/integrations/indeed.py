"""
Indeed job source.

Note: Indeed has no public API and blocks automated requests aggressively;
a 403 here is normal and simply yields no jobs. Selectors cover several of
the page layouts Indeed has served.
"""

from typing import Optional
from urllib.parse import urlencode

from bs4 import BeautifulSoup
import requests

from .base import JobSource, dedupe, generate_id, matches_keywords
from job_radar.core.models import Job, utcnow


class IndeedSource(JobSource):
    """Indeed search page source."""

    name = "Indeed"
    base_url = "https://www.indeed.com"
    max_results = 25
    max_searches = 2

    SEARCH_QUERIES = [
        "ai remote",
        "prompt engineer remote",
        "automation specialist remote",
        "content writer remote",
        "virtual assistant remote",
    ]

    def _scrape(self, keywords: Optional[list[str]]) -> list[Job]:
        jobs = []

        for query in self.SEARCH_QUERIES[:self.max_searches]:
            params = {
                "q": query,
                "l": "Remote",
                "fromage": 7,  # Jobs from the last week
                "remotejob": 1,
            }
            url = f"{self.base_url}/jobs?" + urlencode(params)

            try:
                response = requests.get(url, headers=self._headers(), timeout=self.timeout)
            except requests.RequestException as e:
                self.logger.error(f"Indeed search error '{query}': {e}")
                continue

            if response.status_code != 200:
                self.logger.warning(f"Indeed returned status {response.status_code}, skipping")
                continue

            try:
                jobs.extend(self._parse_results(response.text, keywords))
            except Exception as e:
                self.logger.error(f"Indeed parse error '{query}': {e}")

        unique_jobs = dedupe(jobs, key=lambda j: j.url)[:self.max_results]
        self.logger.debug(f"Indeed: {len(unique_jobs)} jobs")
        return unique_jobs

    def _parse_results(self, html: str, keywords: Optional[list[str]]) -> list[Job]:
        soup = BeautifulSoup(html, "html.parser")
        cards = soup.select("[data-jk], .job_seen_beacon, .jobsearch-ResultsList > li")

        jobs = []
        for card in cards:
            job = self._parse_job_card(card)
            if job and matches_keywords(f"{job.title} {job.company}", keywords):
                jobs.append(job)
        return jobs

    def _parse_job_card(self, card) -> Optional[Job]:
        """Parse a job card HTML element into a Job object."""
        title_elem = card.select_one(".jobTitle span, h2.jobTitle, a[data-jk]")
        company_elem = card.select_one(".companyName, .company, [data-testid='company-name']")
        location_elem = card.select_one(".companyLocation, .location, [data-testid='text-location']")
        salary_elem = card.select_one(".salary-snippet, .salary-snippet-container")

        title = title_elem.get_text(strip=True) if title_elem else ""
        company = company_elem.get_text(strip=True) if company_elem else ""
        location = location_elem.get_text(strip=True) if location_elem else ""
        salary = salary_elem.get_text(strip=True) if salary_elem else ""

        # Job key for a stable ID and canonical URL
        job_key = card.get("data-jk")
        if not job_key:
            inner = card.select_one("a[data-jk]")
            job_key = inner.get("data-jk") if inner else None

        if job_key:
            href = f"{self.base_url}/viewjob?jk={job_key}"
        else:
            link = card.find("a")
            href = link.get("href") if link else None

        if not title or not href:
            return None

        return Job(
            id=generate_id("indeed", job_key or href),
            title=title,
            company=company or "Company",
            source=self.name,
            url=self._absolute_url(href),
            description=f"{title} at {company}. {location}".strip(),
            skills=self._extract_skills(title),
            salary=salary or None,
            posted=utcnow(),
            # Every search is restricted to remote jobs
            remote=True,
        )
