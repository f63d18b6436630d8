from job_radar.core.models import UserProfile
from job_radar.core.skills import (
    SKILL_CATEGORIES,
    SKILL_KEYWORDS,
    expand_categories,
    extract_skills_from_text,
    extract_user_keywords,
)


def test_every_category_has_keywords():
    assert len(SKILL_CATEGORIES) == 30
    assert set(SKILL_CATEGORIES) == set(SKILL_KEYWORDS)


def test_expand_categories_dedupes_in_first_seen_order():
    keywords = expand_categories(["AI & Automation", "AI Prompt Engineering & Optimization"])

    assert keywords[:2] == ["ai", "automation"]
    assert keywords.count("ai") == 1
    assert "prompt engineering" in keywords


def test_unknown_categories_are_ignored():
    assert expand_categories(["Underwater Basket Weaving"]) == []


def test_user_keywords_include_preferred_categories():
    profile = UserProfile(
        skills=["Podcast Production & Editing"],
        preferred_categories=["Telehealth / Remote Healthcare"],
    )

    keywords = extract_user_keywords(profile)

    assert keywords[0] == "podcast"
    assert "telehealth" in keywords


def test_extract_skills_from_text():
    skills = extract_skills_from_text("Senior Python dev: LLM apps, Zapier automation and QA")

    assert skills == ["llm", "python", "zapier", "automation", "qa"]


def test_extract_skills_from_empty_text():
    assert extract_skills_from_text("") == []
