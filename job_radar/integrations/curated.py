"""
Curated platforms - the always-available fallback source.

Live boards block scrapers often enough that a refresh could come back
empty. This source needs no network: for every selected skill category it
emits a search link on each supported board, plus sign-up pages of
platforms that hire remote contributors directly.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional
from urllib.parse import quote, quote_plus
import hashlib
import re

from .base import JobSource, generate_id
from job_radar.core.models import Job, utcnow


# Search terms per curated category key; the first term is the one searched
SKILL_SEARCHES: dict[str, list[str]] = {
    # AI & Automation
    "ai_automation": ["AI automation", "machine learning", "AI engineer", "artificial intelligence"],
    "ai_prompt_engineering": ["prompt engineer", "prompt engineering", "LLM engineer", "AI prompts"],
    "ai_training_rlhf": ["AI training", "data labeling", "RLHF", "AI annotation", "machine learning data"],
    "ai_content_moderation": ["content moderation", "AI moderation", "trust and safety", "content review"],
    "custom_gpt_development": ["GPT developer", "custom GPT", "chatbot developer", "AI assistant developer"],
    "nocode_ai_consulting": ["no-code automation", "Zapier expert", "Make.com", "n8n automation", "workflow automation"],

    # Content & Media
    "ai_copywriting_seo": ["AI copywriter", "SEO content writer", "AI content", "copywriting"],
    "video_script_writing": ["video script writer", "YouTube scriptwriter", "TikTok content", "video content"],
    "podcast_production": ["podcast editor", "podcast producer", "audio editing", "podcast production"],
    "ugc_creation": ["UGC creator", "user generated content", "content creator", "social media content"],
    "social_media_management": ["social media manager", "community manager", "social media marketing"],

    # Testing & Research
    "user_testing": ["user testing", "usability testing", "UX research", "website tester"],
    "beta_testing_qa": ["QA tester", "beta tester", "software testing", "quality assurance"],
    "search_evaluation": ["search evaluator", "search quality", "ads evaluator", "search engine evaluation"],
    "market_research": ["market research", "research participant", "survey taker", "focus group"],
    "competitive_intelligence": ["competitive intelligence", "market analyst", "business intelligence", "competitor research"],

    # Tech & Tools
    "crm_management": ["HubSpot admin", "Salesforce admin", "CRM specialist", "CRM manager"],
    "webflow_framer": ["Webflow developer", "Framer developer", "no-code website", "Webflow designer"],
    "notion_airtable": ["Notion consultant", "Airtable expert", "Notion template", "workspace design"],
    "api_integration": ["API integration", "Zapier integration", "no-code integration", "automation specialist"],
    "spreadsheet_automation": ["Excel automation", "Google Sheets", "spreadsheet expert", "dashboard builder"],

    # Advisory & Consulting
    "fractional_coo": ["fractional COO", "operations consultant", "startup operations", "COO consultant"],
    "process_documentation": ["process documentation", "SOP writer", "business process", "documentation specialist"],
    "executive_coaching": ["executive coach", "business coach", "leadership coach", "career coach"],
    "pitch_deck_creation": ["pitch deck", "investor presentation", "startup pitch", "presentation designer"],
    "course_creation": ["course creator", "online course", "course development", "e-learning developer"],

    # Management & Operations
    "product_project_manager": ["product manager", "project manager", "scrum master", "agile coach", "product owner"],
    "digital_marketing_manager": ["digital marketing manager", "marketing manager", "growth marketing", "performance marketing"],
    "customer_support_success": ["customer support", "customer success manager", "support specialist", "client success"],
    "telehealth_healthcare": ["telehealth", "remote healthcare", "telemedicine", "health coach", "medical remote"],
}

SKILL_DISPLAY_NAMES: dict[str, str] = {
    "ai_automation": "AI & Automation",
    "ai_prompt_engineering": "AI Prompt Engineering & Optimization",
    "ai_training_rlhf": "AI Training Data Labeling & RLHF",
    "ai_content_moderation": "AI-Powered Content Moderation",
    "custom_gpt_development": "Custom GPT/Assistant Development",
    "nocode_ai_consulting": "No-Code AI Automation Consulting",
    "ai_copywriting_seo": "AI-Assisted Copywriting & SEO Content",
    "video_script_writing": "Video Script Writing for YouTube/TikTok",
    "podcast_production": "Podcast Production & Editing",
    "ugc_creation": "UGC (User-Generated Content) Creation",
    "social_media_management": "Social Media Community Management",
    "user_testing": "Website & App User Testing",
    "beta_testing_qa": "Beta Testing & QA for Software",
    "search_evaluation": "Search Engine Evaluation",
    "market_research": "Market Research Participant",
    "competitive_intelligence": "Competitive Intelligence Research",
    "crm_management": "CRM Setup & Management (HubSpot/Salesforce)",
    "webflow_framer": "Webflow/Framer Website Development",
    "notion_airtable": "Notion/Airtable Workspace Design",
    "api_integration": "API Integration Specialist (No-Code Focus)",
    "spreadsheet_automation": "Spreadsheet Automation & Dashboard Building",
    "fractional_coo": "Fractional COO for Startups",
    "process_documentation": "Business Process Documentation",
    "executive_coaching": "Executive Coaching (Remote Sessions)",
    "pitch_deck_creation": "Pitch Deck & Investor Presentation Creation",
    "course_creation": "Online Course Creation & Launch Consulting",
    "product_project_manager": "Product / Project Manager",
    "digital_marketing_manager": "Digital Marketing Manager",
    "customer_support_success": "Customer Support / Success",
    "telehealth_healthcare": "Telehealth / Remote Healthcare",
}

# Skill keys used by older profiles and clients. Order matters: the fuzzy
# fallback in map_skills_to_curated_keys takes the first match.
SKILL_ALIASES: dict[str, str] = {
    "ai_automation": "ai_automation",
    "prompt_engineering": "ai_prompt_engineering",
    "ai_training": "ai_training_rlhf",
    "content_moderation": "ai_content_moderation",
    "gpt_development": "custom_gpt_development",
    "nocode_automation": "nocode_ai_consulting",
    "ai_copywriting": "ai_copywriting_seo",
    "video_scripts": "video_script_writing",
    "podcast_editing": "podcast_production",
    "ugc_content": "ugc_creation",
    "community_management": "social_media_management",
    "user_testing": "user_testing",
    "qa_testing": "beta_testing_qa",
    "search_evaluation": "search_evaluation",
    "market_research": "market_research",
    "competitive_research": "competitive_intelligence",
    "crm_admin": "crm_management",
    "webflow_development": "webflow_framer",
    "notion_design": "notion_airtable",
    "api_integration": "api_integration",
    "spreadsheet_automation": "spreadsheet_automation",
    "fractional_executive": "fractional_coo",
    "process_docs": "process_documentation",
    "executive_coaching": "executive_coaching",
    "pitch_decks": "pitch_deck_creation",
    "course_creation": "course_creation",
    "product_manager": "product_project_manager",
    "project_manager": "product_project_manager",
    "digital_marketing": "digital_marketing_manager",
    "customer_support": "customer_support_success",
    "customer_success": "customer_support_success",
    "telehealth": "telehealth_healthcare",
    "healthcare": "telehealth_healthcare",
}


@dataclass(frozen=True)
class SearchPlatform:
    """A job board that accepts a search query in its URL."""
    name: str
    base_url: str
    search_url: Callable[[str], str]


@dataclass(frozen=True)
class StaticPlatform:
    """A sign-up page for a platform hiring remote contributors."""
    title: str
    url: str
    category: str
    description: str
    skills: tuple[str, ...]


SEARCH_PLATFORMS = [
    SearchPlatform(
        "Upwork", "https://www.upwork.com",
        lambda q: f"https://www.upwork.com/nx/search/jobs/?q={quote_plus(q)}&sort=recency",
    ),
    SearchPlatform(
        "WeWorkRemotely", "https://weworkremotely.com",
        lambda q: f"https://weworkremotely.com/remote-jobs/search?term={quote_plus(q)}",
    ),
    SearchPlatform(
        "RemoteOK", "https://remoteok.com",
        lambda q: "https://remoteok.com/remote-jobs/" + quote(re.sub(r"\s+", "-", q.lower())),
    ),
    SearchPlatform(
        "Indeed", "https://www.indeed.com",
        lambda q: f"https://www.indeed.com/jobs?q={quote_plus(q)}&l=Remote&remotejob=032b3046-06a3-4876-8dfd-474eb5e7ed11",
    ),
    SearchPlatform(
        "LinkedIn", "https://www.linkedin.com",
        lambda q: f"https://www.linkedin.com/jobs/search/?keywords={quote_plus(q)}&f_WT=2",
    ),
    SearchPlatform(
        "FlexJobs", "https://www.flexjobs.com",
        lambda q: f"https://www.flexjobs.com/search?search={quote_plus(q)}&location=Remote",
    ),
    SearchPlatform(
        "Remote.co", "https://remote.co",
        lambda q: f"https://remote.co/remote-jobs/search/?search_keywords={quote_plus(q)}",
    ),
    SearchPlatform(
        "BuiltIn", "https://builtin.com",
        lambda q: f"https://builtin.com/jobs/remote?search={quote_plus(q)}",
    ),
]

STATIC_PLATFORMS = [
    # User testing
    StaticPlatform("UserTesting - Get Paid to Test", "https://www.usertesting.com/get-paid-to-test", "Testing & Research",
                   "Get paid $4-$120 per test to review websites and apps", ("user testing", "ux research", "feedback")),
    StaticPlatform("Testbirds - Become a Tester", "https://www.testbirds.com/en/become-a-tester/", "Testing & Research",
                   "Crowdtesting platform for websites and apps", ("testing", "qa", "bug reporting")),
    StaticPlatform("Trymata - Tester Signup", "https://www.trymata.com/tester/signup", "Testing & Research",
                   "User testing platform paying $5-$30 per test", ("user testing", "usability", "feedback")),
    StaticPlatform("Userlytics - Tester Panel", "https://www.userlytics.com/tester/", "Testing & Research",
                   "Remote usability testing opportunities", ("usability testing", "ux", "research")),
    StaticPlatform("TestingTime - Paid Research", "https://www.testingtime.com/en/become-a-test-user/", "Testing & Research",
                   "Participate in paid user research studies", ("user research", "testing", "feedback")),
    StaticPlatform("PlaybookUX - Tester Signup", "https://www.playbookux.com/tester/", "Testing & Research",
                   "UX research platform for testers", ("ux research", "testing", "usability")),
    StaticPlatform("dScout - Be a Scout", "https://dscout.com/be-a-scout", "Testing & Research",
                   "Mobile research missions paying $10-$100+", ("research", "mobile testing", "feedback")),
    StaticPlatform("Lyssna (UsabilityHub) Panel", "https://www.lyssna.com/panel/", "Testing & Research",
                   "Quick design surveys and tests", ("design feedback", "surveys", "testing")),

    # AI training and data
    StaticPlatform("Appen - AI Contributor", "https://appen.com/join-our-crowd/", "AI & Automation",
                   "AI training data, annotation, and evaluation tasks", ("ai training", "data labeling", "rlhf", "annotation")),
    StaticPlatform("Remotasks - AI Tasks", "https://www.remotasks.com/en", "AI & Automation",
                   "AI training tasks including RLHF and data labeling", ("ai training", "data labeling", "tasks")),
    StaticPlatform("Scale AI - Remote Workers", "https://scale.com/careers#remote", "AI & Automation",
                   "AI data labeling and training opportunities", ("ai training", "data annotation", "labeling")),
    StaticPlatform("Toloka - AI Training", "https://toloka.ai/tolokers/", "AI & Automation",
                   "Crowdsourced AI training tasks", ("ai training", "data tasks", "annotation")),
    StaticPlatform("DataAnnotation.tech", "https://www.dataannotation.tech/", "AI & Automation",
                   "AI training and RLHF opportunities", ("rlhf", "ai training", "data annotation")),
    StaticPlatform("Outlier AI", "https://outlier.ai/", "AI & Automation",
                   "AI training for coding and writing tasks", ("ai training", "coding", "writing", "rlhf")),

    # Expert networks
    StaticPlatform("GLG Expert Council Member", "https://glginsights.com/council-members/", "Advisory & Consulting",
                   "Paid expert consultations $100-500+/hour", ("consulting", "expert", "advisory")),
    StaticPlatform("AlphaSights Strategic Advisor", "https://www.alphasights.com/become-an-advisor/", "Advisory & Consulting",
                   "Expert network for industry consultations", ("consulting", "advisory", "expert")),
    StaticPlatform("Guidepoint Knowledge Advisor", "https://www.guidepoint.com/become-an-advisor/", "Advisory & Consulting",
                   "Share expertise with investors and companies", ("consulting", "advisory", "research")),
    StaticPlatform("Dialectica Expert Advisor", "https://dialectica.com/become-an-expert/", "Advisory & Consulting",
                   "Expert consultations for business insights", ("consulting", "expert", "advisory")),
    StaticPlatform("Techspert.io - Expert Network", "https://www.techspert.io/become-an-expert", "Advisory & Consulting",
                   "Technical expert consultations", ("consulting", "technical", "expert")),
    StaticPlatform("NewtonX Expert Network", "https://www.newtonx.com/become-an-expert/", "Advisory & Consulting",
                   "B2B expert knowledge marketplace", ("consulting", "b2b", "expert")),

    # Freelance marketplaces
    StaticPlatform("Fiverr - Become a Seller", "https://www.fiverr.com/start_selling", "Freelance",
                   "Sell services in AI, automation, content, and more", ("freelance", "gigs", "services")),
    StaticPlatform("Toptal - Apply as Freelancer", "https://www.toptal.com/freelance-jobs", "Freelance",
                   "Top 3% freelance talent network", ("freelance", "expert", "consulting")),
    StaticPlatform("Contra - Join as Independent", "https://contra.com/", "Freelance",
                   "Commission-free freelance platform", ("freelance", "independent", "projects")),
]

SEARCH_LINK_WINDOW = timedelta(days=7)
STATIC_LINK_WINDOW = timedelta(days=14)


def map_skills_to_curated_keys(skills: list[str]) -> list[str]:
    """
    Resolve profile skills to curated category keys.

    Accepts the keys in SKILL_ALIASES, curated keys, display names and the
    first word of a display name, all case-insensitive. Anything else is
    matched on its first segment against SKILL_ALIASES, in table order.
    """
    by_name = {}
    for key, name in SKILL_DISPLAY_NAMES.items():
        by_name[name.lower()] = key
        # A shared first word ("AI") resolves to the last such category
        by_name[name.split(" ")[0].lower()] = key

    mapped = []
    for skill in skills:
        lowered = skill.strip().lower()
        if lowered in SKILL_ALIASES:
            mapped.append(SKILL_ALIASES[lowered])
        elif lowered in SKILL_SEARCHES:
            mapped.append(lowered)
        elif lowered in by_name:
            mapped.append(by_name[lowered])
        else:
            head = lowered.split("_")[0]
            for alias, key in SKILL_ALIASES.items():
                if head and (head in alias or alias.split("_")[0] in lowered):
                    mapped.append(key)
                    break

    return list(dict.fromkeys(mapped))


def _stable_offset(job_id: str, window: timedelta) -> timedelta:
    """Deterministic pseudo-age within the window, derived from the id."""
    digest = int(hashlib.md5(job_id.encode()).hexdigest(), 16)
    return timedelta(minutes=digest % int(window.total_seconds() // 60))


def _is_relevant(platform: StaticPlatform, category_keys: Optional[list[str]]) -> bool:
    if not category_keys:
        return True

    category = platform.category.lower()
    for key in category_keys:
        skill_name = SKILL_DISPLAY_NAMES.get(key, key).lower()
        if category.find(skill_name.split(" ")[0]) >= 0:
            return True
        if any(s in skill_name for s in platform.skills):
            return True
    return False


def get_curated_jobs(
    category_keys: Optional[list[str]] = None,
    now: Optional[datetime] = None,
) -> list[Job]:
    """
    Build search-link and platform postings for the given categories.

    Args:
        category_keys: Curated keys to include (None or empty = all)
        now: Reference time for the synthesized posting dates

    Returns:
        Search links for every board per category, then relevant static platforms
    """
    now = now or utcnow()
    keys = category_keys or list(SKILL_SEARCHES)
    jobs = []

    for key in keys:
        terms = SKILL_SEARCHES.get(key)
        if not terms:
            continue

        category_name = SKILL_DISPLAY_NAMES.get(key, key)
        query = terms[0]

        for platform in SEARCH_PLATFORMS:
            job_id = generate_id("curated", f"{platform.name}-{key}")
            jobs.append(Job(
                id=job_id,
                title=f"{query} Jobs",
                company=platform.name,
                source=platform.name,
                url=platform.search_url(query),
                description=(
                    f"Search for {category_name} opportunities on {platform.name}. "
                    f"Click to view current listings."
                ),
                skills=terms[:4],
                posted=now - _stable_offset(job_id, SEARCH_LINK_WINDOW),
                remote=True,
            ))

    for platform in STATIC_PLATFORMS:
        if not _is_relevant(platform, category_keys):
            continue

        slug = re.sub(r"^https?://(www\.)?", "", platform.url).strip("/")
        job_id = generate_id("static", slug)
        jobs.append(Job(
            id=job_id,
            title=platform.title,
            company="Platform",
            # Category doubles as the source so it can be filtered on
            source=platform.category,
            url=platform.url,
            description=platform.description,
            skills=list(platform.skills),
            posted=now - _stable_offset(job_id, STATIC_LINK_WINDOW),
            remote=True,
        ))

    return jobs


def available_sources() -> list[str]:
    """Board names plus static platform categories, usable as source filters."""
    categories = list(dict.fromkeys(p.category for p in STATIC_PLATFORMS))
    return [p.name for p in SEARCH_PLATFORMS] + categories


class CuratedSource(JobSource):
    """Offline source of curated search links and platform sign-ups."""

    name = "Curated"
    base_url = ""

    def _scrape(self, keywords: Optional[list[str]]) -> list[Job]:
        """
        Args:
            keywords: Profile skills (category names or keys), not free text
        """
        category_keys = map_skills_to_curated_keys(keywords) if keywords else None
        jobs = get_curated_jobs(category_keys)
        self.logger.debug(f"Curated platforms: {len(jobs)} job links")
        return jobs
