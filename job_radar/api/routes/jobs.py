"""
Jobs Router - listing, searching and refreshing scored jobs.
"""

from typing import Optional
import logging

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from job_radar.core.matcher import generate_job_summary, match_jobs_to_profile
from job_radar.core.models import Job, SORT_OPTIONS, SearchFilters, utcnow
from job_radar.core.ranker import recent_jobs, search_jobs, top_jobs


router = APIRouter(prefix="/jobs", tags=["jobs"])
logger = logging.getLogger(__name__)

TOP_LIMIT = 25


class RefreshRequest(BaseModel):
    skills: Optional[list[str]] = None


def _split(value: Optional[str]) -> Optional[list[str]]:
    if not value:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


def _serialize(jobs: list[Job]) -> list[dict]:
    return [{**job.to_dict(), "summary": generate_job_summary(job)} for job in jobs]


def _listing(jobs: list[Job]) -> dict:
    return {
        "jobs": _serialize(jobs),
        "total": len(jobs),
        "fetchedAt": utcnow().isoformat(),
    }


@router.get("/recent")
def get_recent(request: Request, limit: int = Query(25, ge=1, le=500)):
    store = request.app.state.store
    return _listing(recent_jobs(store, store.get_profile(), limit=limit))


@router.get("/top")
def get_top(request: Request):
    store = request.app.state.store
    return _listing(top_jobs(store, store.get_profile(), limit=TOP_LIMIT))


@router.get("/search")
def search(
    request: Request,
    skills: Optional[str] = None,
    sources: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[int] = Query(None, alias="maxSalary", ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    sort_by: str = Query("match", alias="sortBy"),
):
    if sort_by not in SORT_OPTIONS:
        raise HTTPException(
            status_code=400,
            detail=f"sortBy must be one of {', '.join(SORT_OPTIONS)}",
        )

    filters = SearchFilters(
        skills=_split(skills),
        sources=_split(sources),
        min_salary=min_salary,
        max_salary=max_salary,
        limit=limit,
        sort_by=sort_by,
    )

    store = request.app.state.store
    jobs = search_jobs(store, store.get_profile(), filters)

    response = _listing(jobs)
    response["filters"] = filters.to_dict()
    return response


@router.post("/refresh")
def refresh(request: Request, body: Optional[RefreshRequest] = None):
    store = request.app.state.store
    aggregator = request.app.state.aggregator
    config = request.app.state.config

    profile = store.get_profile()
    skills = (body.skills if body else None) or profile.skills

    logger.info("Starting job refresh...")
    try:
        aggregated = aggregator.aggregate(skills, limit=int(config.get("search.refresh_limit", 50)))
        store.merge(aggregated.jobs)
    except Exception as e:
        logger.error(f"Error refreshing jobs: {e}", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to refresh jobs") from e

    ranked = match_jobs_to_profile(aggregated.jobs, profile)[:TOP_LIMIT]

    return {
        "jobs": _serialize(ranked),
        "total": len(aggregated.jobs),
        "sources": [result.summary() for result in aggregated.results],
        "message": f"Fetched {len(aggregated.jobs)} jobs from {len(aggregated.results)} sources",
    }


@router.get("/sources")
def get_sources(request: Request):
    return {"sources": request.app.state.aggregator.available_sources()}
