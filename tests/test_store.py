from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
import json

from job_radar.core.models import utcnow
from job_radar.core.store import JobStore


def test_missing_file_starts_empty(tmp_path):
    store = JobStore(tmp_path / "nested" / "db.json")

    assert len(store) == 0
    assert store.get_profile().skills == []


def test_corrupt_file_falls_back_to_empty(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")

    store = JobStore(path)

    assert len(store) == 0
    assert store.get_profile().id == "default"


def test_merge_persists_and_reloads(tmp_path, make_job):
    path = tmp_path / "db.json"
    store = JobStore(path)
    job = make_job(title="Prompt Engineer", skills=["llm"], salary="$60/hr", remote=True)

    store.merge([job])
    reloaded = JobStore(path)

    assert len(reloaded) == 1
    loaded = reloaded.get(job.id)
    assert loaded.title == "Prompt Engineer"
    assert loaded.skills == ["llm"]
    assert loaded.salary == "$60/hr"
    assert loaded.remote is True
    assert loaded.posted == job.posted


def test_merge_is_idempotent(store, make_job):
    jobs = [make_job(), make_job()]

    store.merge(jobs)
    store.merge(jobs)

    assert len(store) == 2


def test_merge_replaces_record_with_same_id(store, make_job):
    store.merge([make_job(id="remoteok-1", title="Old title")])
    store.merge([make_job(id="remoteok-1", title="New title")])

    assert len(store) == 1
    assert store.get("remoteok-1").title == "New title"


def test_merge_strips_match_data(tmp_path, make_job):
    path = tmp_path / "db.json"
    store = JobStore(path)
    job = make_job().with_match(80, ["Remote position"])

    store.merge([job])

    assert store.get(job.id).match_score is None
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert "matchScore" not in raw["jobs"][0]
    assert "matchReasons" not in raw["jobs"][0]


def test_retention_cap_drops_oldest(store, make_job, now):
    jobs = [make_job(posted=now - timedelta(minutes=i)) for i in range(501)]
    oldest = jobs[-1]

    store.merge(jobs)

    assert len(store) == 500
    assert store.get(oldest.id) is None
    assert store.get(jobs[0].id) is not None


def test_custom_retention_cap(tmp_path, make_job, now):
    store = JobStore(tmp_path / "db.json", retention_cap=3)

    store.merge([make_job(posted=now - timedelta(days=i)) for i in range(5)])

    assert len(store) == 3
    assert [j.posted for j in store.list_jobs()] == [now - timedelta(days=i) for i in range(3)]


def test_list_jobs_newest_first_with_offset(store, make_job, days_ago):
    jobs = [make_job(posted=days_ago(d)) for d in (3, 1, 2)]
    store.merge(jobs)

    listed = store.list_jobs(limit=2, offset=1)

    assert [j.posted for j in listed] == [days_ago(2), days_ago(3)]


def test_search_matches_any_keyword_case_insensitively(store, make_job, days_ago):
    writer = make_job(title="SEO Writer", posted=days_ago(2))
    tester = make_job(title="QA Tester", description="Manual testing", posted=days_ago(1))
    tagged = make_job(title="Assistant", skills=["Zapier"], posted=days_ago(3))
    store.merge([writer, tester, tagged])

    results = store.search(["seo", "TESTING", "zapier"])

    assert [j.id for j in results] == [tester.id, writer.id, tagged.id]


def test_search_respects_limit_and_returns_empty_for_no_match(store, make_job):
    store.merge([make_job(title=f"AI Role {i}") for i in range(5)])

    assert len(store.search(["ai"], limit=2)) == 2
    assert store.search(["blockchain"]) == []


def test_search_without_keywords_lists_recent(store, make_job):
    store.merge([make_job(), make_job()])

    assert len(store.search([])) == 2


def test_save_profile_merges_only_given_fields(store):
    store.save_profile({"skills": ["AI & Automation"], "experience": "senior"})

    profile = store.save_profile({"minHourlyRate": 50})

    assert profile.skills == ["AI & Automation"]
    assert profile.experience == "senior"
    assert profile.min_hourly_rate == 50


def test_save_profile_persists(tmp_path):
    path = tmp_path / "db.json"
    JobStore(path).save_profile({"preferredCategories": ["Digital Marketing Manager"]})

    assert JobStore(path).get_profile().preferred_categories == ["Digital Marketing Manager"]


def test_get_profile_returns_copy(store):
    store.save_profile({"skills": ["AI & Automation"]})

    profile = store.get_profile()
    profile.skills.append("Telehealth / Remote Healthcare")

    assert store.get_profile().skills == ["AI & Automation"]


def test_update_skills_adds_and_removes(tmp_path):
    path = tmp_path / "db.json"
    store = JobStore(path)
    store.save_profile({"skills": ["AI & Automation"], "experience": "senior"})

    store.update_skills(add=["Market Research Participant", "AI & Automation"])
    profile = store.update_skills(remove=["AI & Automation"])

    assert profile.skills == ["Market Research Participant"]
    assert profile.experience == "senior"
    assert JobStore(path).get_profile().skills == ["Market Research Participant"]


def test_concurrent_skill_additions_are_all_kept(store):
    skills = [f"skill-{i}" for i in range(20)]

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(lambda s: store.update_skills(add=[s]), skills))

    assert sorted(store.get_profile().skills) == sorted(skills)


def test_clear_old_jobs(store, make_job):
    fresh = make_job(posted=utcnow())
    stale = make_job(posted=utcnow() - timedelta(days=45))
    store.merge([fresh, stale])

    removed = store.clear_old_jobs(days_old=30)

    assert removed == 1
    assert store.get(fresh.id) is not None
    assert store.get(stale.id) is None
