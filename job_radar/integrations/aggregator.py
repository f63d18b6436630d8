"""
Job Aggregator - Combines results from the curated fallback and live sources.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Optional
import logging

from .base import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, JobSource
from .curated import CuratedSource, available_sources
from .indeed import IndeedSource
from .remoteok import RemoteOKSource
from .upwork import UpworkSource
from .weworkremotely import WeWorkRemotelySource
from job_radar.core.models import Job, ScraperResult, UserProfile, utcnow
from job_radar.core.skills import extract_user_keywords


LIVE_SOURCE_CLASSES = {
    cls.name: cls
    for cls in (RemoteOKSource, WeWorkRemotelySource, IndeedSource, UpworkSource)
}


@dataclass
class AggregationResult:
    """Merged jobs plus the per-source results they came from."""
    jobs: list[Job] = field(default_factory=list)
    results: list[ScraperResult] = field(default_factory=list)


class JobAggregator:
    """Aggregates job listings from every configured source."""

    def __init__(
        self,
        live_sources: Optional[list[str]] = None,
        include_live: bool = False,
        parallel: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the aggregator.

        Args:
            live_sources: Names of live sources to build (None = all known)
            include_live: Whether aggregate() scrapes live sources by default
            parallel: Whether live sources run concurrently
            user_agent: User-Agent sent by live sources
            timeout: Per-request timeout in seconds
        """
        self.include_live = include_live
        self.parallel = parallel
        self.logger = logging.getLogger(self.__class__.__name__)

        self.curated = CuratedSource()
        self.sources: list[JobSource] = []

        for name in live_sources if live_sources is not None else LIVE_SOURCE_CLASSES:
            cls = LIVE_SOURCE_CLASSES.get(name)
            if cls is None:
                self.logger.warning(f"Unknown live source '{name}', skipping")
                continue
            self.sources.append(cls(user_agent=user_agent, timeout=timeout))

    @classmethod
    def from_config(cls, config) -> "JobAggregator":
        return cls(
            live_sources=config.get("search.live_sources"),
            include_live=config.include_live(),
            parallel=config.get("search.parallel", True),
            user_agent=config.get("scraping.user_agent", DEFAULT_USER_AGENT),
            timeout=config.get("scraping.timeout", DEFAULT_TIMEOUT),
        )

    def add_source(self, source: JobSource) -> None:
        """Add a custom live source."""
        self.sources.append(source)

    def remove_source(self, name: str) -> bool:
        """Remove a live source by name."""
        for i, source in enumerate(self.sources):
            if source.name.lower() == name.lower():
                self.sources.pop(i)
                return True
        return False

    def available_sources(self) -> list[str]:
        """Names usable as source filters: curated boards and categories, then live sources."""
        names = available_sources()
        for source in self.sources:
            if source.name not in names:
                names.append(source.name)
        return names

    def aggregate(
        self,
        profile_skills: Optional[list[str]] = None,
        limit: int = 50,
        include_live: Optional[bool] = None,
    ) -> AggregationResult:
        """
        Run every source and merge what comes back.

        The curated source always runs. Live sources run when enabled, all
        sharing one keyword list built from the skills; a failing source is
        logged and left out.

        Args:
            profile_skills: Selected skill categories
            limit: Max jobs returned
            include_live: Override the default for live scraping

        Returns:
            Jobs newest first (at most limit) and every non-empty source result
        """
        skills = list(profile_skills or [])
        results: list[ScraperResult] = []

        curated_jobs = self.curated.scrape(skills)
        self.logger.info(f"Curated platforms: found {len(curated_jobs)} job links")
        results.extend(self._group_by_source(curated_jobs))

        use_live = self.include_live if include_live is None else include_live
        if use_live and self.sources:
            keywords = extract_user_keywords(UserProfile(skills=skills))
            if self.parallel:
                live_results = self._scrape_parallel(self.sources, keywords)
            else:
                live_results = self._scrape_sequential(self.sources, keywords)
            results.extend(r for r in live_results if r.jobs)

        all_jobs = [job for result in results for job in result.jobs]
        all_jobs.sort(key=lambda j: j.posted, reverse=True)

        self.logger.info(f"Aggregated {len(all_jobs)} jobs from {len(results)} sources")
        return AggregationResult(jobs=all_jobs[:limit], results=results)

    def scrape_source(self, name: str, profile_skills: Optional[list[str]] = None) -> list[Job]:
        """
        Jobs from a single source.

        Live source names run that source; any other name filters the
        curated output by board or category.
        """
        skills = list(profile_skills or [])
        for source in self.sources:
            if source.name.lower() == name.lower():
                keywords = extract_user_keywords(UserProfile(skills=skills))
                return source.scrape(keywords)

        return [
            job for job in self.curated.scrape(skills)
            if job.source.lower() == name.lower()
        ]

    def _scrape_parallel(self, sources: list[JobSource], keywords: list[str]) -> list[ScraperResult]:
        """Run sources in a thread pool and wait for all of them."""
        results = []

        with ThreadPoolExecutor(max_workers=len(sources)) as executor:
            futures = {
                executor.submit(source.get_result, keywords): source
                for source in sources
            }

            for future in as_completed(futures):
                source = futures[future]
                try:
                    result = future.result()
                    results.append(result)
                    self.logger.debug(f"{source.name}: Found {len(result.jobs)} jobs")
                except Exception as e:
                    self.logger.error(f"{source.name} scrape failed: {e}")

        return results

    def _scrape_sequential(self, sources: list[JobSource], keywords: list[str]) -> list[ScraperResult]:
        results = []

        for source in sources:
            try:
                result = source.get_result(keywords)
                results.append(result)
                self.logger.debug(f"{source.name}: Found {len(result.jobs)} jobs")
            except Exception as e:
                self.logger.error(f"{source.name} scrape failed: {e}")

        return results

    @staticmethod
    def _group_by_source(jobs: list[Job]) -> list[ScraperResult]:
        groups: dict[str, list[Job]] = {}
        for job in jobs:
            groups.setdefault(job.source, []).append(job)

        scraped_at = utcnow()
        return [
            ScraperResult(jobs=group, source=source, scraped_at=scraped_at)
            for source, group in groups.items()
        ]

    def get_stats(self) -> dict:
        """Get statistics about configured sources."""
        return {
            "include_live": self.include_live,
            "parallel": self.parallel,
            "live_sources": [s.name for s in self.sources],
            "curated_sources": available_sources(),
        }
