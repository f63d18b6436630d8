from datetime import timedelta

import pytest

from job_radar.core.matcher import (
    JobMatcher,
    days_since,
    extract_salary_number,
    generate_job_summary,
    match_jobs_to_profile,
    score_job,
)
from job_radar.core.models import UserProfile


AI_PROFILE = UserProfile(skills=["AI & Automation"])

RICH_DESCRIPTION = "Machine learning and automation with artificial intelligence. ML ops."


def test_bare_ai_job_scores_keywords_remote_and_recency(make_job, now):
    job = make_job(title="AI Engineer", description="Build ML pipelines", remote=True)

    result = score_job(job, AI_PROFILE, now=now)

    assert result.score == 55
    assert result.reasons == [
        "Matches skills: ai, ml, ai engineer",
        "Remote position",
        "Posted today",
    ]


def test_keyword_points_cap_at_sixty(make_job, now):
    job = make_job(title="AI Engineer", description=RICH_DESCRIPTION, remote=True)

    assert score_job(job, AI_PROFILE, now=now).score == 85


def test_older_posting_loses_recency_points(make_job, now, days_ago):
    job = make_job(
        title="AI Engineer", description=RICH_DESCRIPTION, remote=True, posted=days_ago(10)
    )

    result = score_job(job, AI_PROFILE, now=now)

    assert result.score == 70
    assert not any(r.startswith("Posted") for r in result.reasons)


@pytest.mark.parametrize(
    "age_days,points,reason",
    [
        (0, 15, "Posted today"),
        (1, 15, "Posted today"),
        (2, 10, "Posted recently"),
        (3, 10, "Posted recently"),
        (5, 5, "Posted this week"),
        (7, 5, "Posted this week"),
        (8, 0, None),
    ],
)
def test_recency_tiers(make_job, now, days_ago, age_days, points, reason):
    job = make_job(posted=days_ago(age_days))

    result = score_job(job, UserProfile(), now=now)

    assert result.score == points
    assert result.reasons == ([reason] if reason else [])


def test_days_since_rounds_partial_days_up(now):
    assert days_since(now, now) == 0
    assert days_since(now - timedelta(hours=1), now) == 1
    assert days_since(now - timedelta(days=1, minutes=1), now) == 2
    assert days_since(now + timedelta(hours=2), now) == 1


def test_rate_points_when_salary_meets_floor(make_job, now, days_ago):
    profile = UserProfile(min_hourly_rate=50)
    job = make_job(salary="$80/hr", posted=days_ago(30))

    result = score_job(job, profile, now=now)

    assert result.score == 15
    assert result.reasons == ["Meets rate: $80/hr"]


def test_no_rate_points_below_floor_or_without_salary(make_job, now, days_ago):
    profile = UserProfile(min_hourly_rate=50)

    assert score_job(make_job(salary="$40/hr", posted=days_ago(30)), profile, now=now).score == 0
    assert score_job(make_job(salary=None, posted=days_ago(30)), profile, now=now).score == 0
    assert score_job(make_job(salary="DOE", posted=days_ago(30)), profile, now=now).score == 0


def test_score_never_exceeds_hundred(make_job, now):
    profile = UserProfile(skills=["AI & Automation"], min_hourly_rate=50)
    job = make_job(
        title="AI Engineer", description=RICH_DESCRIPTION, remote=True, salary="$90/hr"
    )

    result = score_job(job, profile, now=now)

    assert 0 <= result.score <= 100
    assert result.score == 100


def test_empty_profile_only_scores_remote_and_recency(make_job, now):
    job = make_job(title="AI Engineer", remote=True)

    result = score_job(job, UserProfile(), now=now)

    assert result.score == 25
    assert result.reasons == ["Remote position", "Posted today"]


def test_preferred_categories_contribute_keywords(make_job, now, days_ago):
    profile = UserProfile(preferred_categories=["Customer Support / Success"])
    job = make_job(title="Customer Success Lead", posted=days_ago(30))

    result = score_job(job, profile, now=now)

    assert result.score == 10
    assert result.reasons == ["Matches skills: customer success"]


def test_match_reasons_list_at_most_three_keywords(make_job, now):
    job = make_job(title="AI Engineer", description=RICH_DESCRIPTION)

    result = score_job(job, AI_PROFILE, now=now)

    assert result.reasons[0] == "Matches skills: ai, automation, artificial intelligence"


def test_rank_jobs_sorts_by_score_and_keeps_ties_in_order(make_job, now, days_ago):
    low = make_job(title="Bookkeeper", posted=days_ago(30))
    tie_a = make_job(title="Writer A", remote=True, posted=days_ago(30))
    high = make_job(title="AI Engineer", remote=True)
    tie_b = make_job(title="Writer B", remote=True, posted=days_ago(30))

    ranked = match_jobs_to_profile([low, tie_a, high, tie_b], AI_PROFILE, now=now)

    assert [j.id for j in ranked] == [high.id, tie_a.id, tie_b.id, low.id]
    assert all(j.match_score is not None for j in ranked)


def test_rank_jobs_returns_copies(make_job, now):
    job = make_job(title="AI Engineer")

    ranked = JobMatcher(AI_PROFILE, now=now).rank_jobs([job])

    assert ranked[0].match_score is not None
    assert job.match_score is None


@pytest.mark.parametrize(
    "salary,expected",
    [
        ("$80/hr", 80),
        ("80 - 120 per hour", 80),
        ("$1,500 fixed", 1),
        ("Competitive", None),
        (None, None),
        ("", None),
    ],
)
def test_extract_salary_number(salary, expected):
    assert extract_salary_number(salary) == expected


def test_summary_includes_available_parts(make_job):
    job = make_job(
        title="AI Engineer",
        company="Acme",
        salary="$80/hr",
        remote=True,
        skills=["python", "ml", "llm", "sql"],
    ).with_match(85, ["Matches skills: ai", "Remote position", "Posted today"])

    summary = generate_job_summary(job)

    assert summary == (
        "AI Engineer at Acme | Pay: $80/hr | Remote | Skills: python, ml, llm"
        " | Match: 85% | Why: Matches skills: ai; Remote position"
    )


def test_summary_skips_missing_parts(make_job):
    job = make_job(title="Tester", company="")

    assert generate_job_summary(job) == "Tester"


@pytest.mark.parametrize("age_days", [0, 2, 6, 30])
def test_remote_adds_exactly_ten_points(make_job, now, days_ago, age_days):
    onsite = make_job(title="AI Engineer", posted=days_ago(age_days))
    remote = make_job(title="AI Engineer", posted=days_ago(age_days), remote=True)

    assert score_job(remote, AI_PROFILE, now=now).score - score_job(onsite, AI_PROFILE, now=now).score == 10


def test_remote_bonus_at_the_top_of_the_scale(make_job, now):
    # 60 keyword + 15 recency + 15 rate leaves exactly 10 of headroom
    profile = UserProfile(skills=["AI & Automation"], min_hourly_rate=50)
    onsite = make_job(title="AI Engineer", description=RICH_DESCRIPTION, salary="$90/hr")
    remote = make_job(
        title="AI Engineer", description=RICH_DESCRIPTION, salary="$90/hr", remote=True
    )

    onsite_score = score_job(onsite, profile, now=now).score
    remote_score = score_job(remote, profile, now=now).score

    assert onsite_score == 90
    assert remote_score == 100
    assert remote_score - onsite_score == 10
