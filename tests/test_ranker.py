import pytest

from job_radar.core.models import SearchFilters, UserProfile
from job_radar.core.ranker import recent_jobs, search_jobs, top_jobs


AI_PROFILE = UserProfile(skills=["AI & Automation"], min_hourly_rate=50)


@pytest.fixture
def seeded(store, make_job, days_ago):
    jobs = {
        "ai_remote": make_job(title="AI Engineer", remote=True, salary="$80/hr", source="RemoteOK"),
        "ai_onsite": make_job(title="AI Analyst", salary="$40/hr", source="Indeed", posted=days_ago(2)),
        "writer": make_job(title="AI Copywriter", source="Upwork", posted=days_ago(5)),
        "support": make_job(title="Support Agent", source="RemoteOK", posted=days_ago(1)),
    }
    store.merge(list(jobs.values()))
    return jobs


def test_search_by_skills_ranks_by_match(store, seeded, now):
    results = search_jobs(store, AI_PROFILE, SearchFilters(skills=["ai"]), now=now)

    assert [j.id for j in results][0] == seeded["ai_remote"].id
    assert seeded["support"].id not in [j.id for j in results]
    scores = [j.match_score for j in results]
    assert scores == sorted(scores, reverse=True)


def test_search_filters_by_source(store, seeded, now):
    filters = SearchFilters(skills=["ai"], sources=["Indeed", "Upwork"])

    results = search_jobs(store, AI_PROFILE, filters, now=now)

    assert {j.source for j in results} == {"Indeed", "Upwork"}


def test_search_salary_band_drops_unparseable(store, seeded, now):
    results = search_jobs(store, AI_PROFILE, SearchFilters(skills=["ai"], min_salary=50), now=now)

    assert [j.id for j in results] == [seeded["ai_remote"].id]


def test_search_max_salary(store, seeded, now):
    results = search_jobs(store, AI_PROFILE, SearchFilters(skills=["ai"], max_salary=50), now=now)

    assert [j.id for j in results] == [seeded["ai_onsite"].id]


def test_search_sort_by_recent(store, seeded, now):
    filters = SearchFilters(skills=["ai"], sort_by="recent")

    results = search_jobs(store, AI_PROFILE, filters, now=now)

    assert [j.id for j in results] == [
        seeded["ai_remote"].id, seeded["ai_onsite"].id, seeded["writer"].id,
    ]


def test_search_sort_by_salary(store, seeded, now):
    filters = SearchFilters(skills=["ai"], sort_by="salary")

    results = search_jobs(store, AI_PROFILE, filters, now=now)

    assert [j.salary for j in results] == ["$80/hr", "$40/hr", None]


def test_search_limit(store, seeded, now):
    results = search_jobs(store, AI_PROFILE, SearchFilters(skills=["ai"], limit=1), now=now)

    assert len(results) == 1


def test_invalid_sort_rejected():
    with pytest.raises(ValueError):
        SearchFilters(sort_by="popularity")


def test_recent_jobs_scores_the_newest_window(store, seeded, now):
    results = recent_jobs(store, AI_PROFILE, limit=2, now=now)

    assert {j.id for j in results} == {seeded["ai_remote"].id, seeded["support"].id}
    assert all(j.match_score is not None for j in results)


def test_top_jobs_limit_and_order(store, seeded, now):
    results = top_jobs(store, AI_PROFILE, limit=2, now=now)

    assert len(results) == 2
    assert results[0].id == seeded["ai_remote"].id
    assert results[0].match_score >= results[1].match_score
