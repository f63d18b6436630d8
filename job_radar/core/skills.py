"""
Skill vocabulary: the closed set of profile categories, the keywords each
category expands to, and the pattern table adapters use to tag postings.
"""

import re

from .models import UserProfile


SKILL_CATEGORIES = [
    "AI & Automation",
    "AI Prompt Engineering & Optimization",
    "AI Training Data Labeling & RLHF",
    "AI-Powered Content Moderation",
    "Custom GPT/Assistant Development",
    "No-Code AI Automation Consulting",
    "AI-Assisted Copywriting & SEO Content",
    "Video Script Writing for YouTube/TikTok",
    "Podcast Production & Editing",
    "UGC (User-Generated Content) Creation",
    "Social Media Community Management",
    "Website & App User Testing",
    "Beta Testing & QA for Software",
    "Search Engine Evaluation",
    "Market Research Participant",
    "Competitive Intelligence Research",
    "CRM Setup & Management (HubSpot/Salesforce)",
    "Webflow/Framer Website Development",
    "Notion/Airtable Workspace Design",
    "API Integration Specialist (No-Code Focus)",
    "Spreadsheet Automation & Dashboard Building",
    "Fractional COO for Startups",
    "Business Process Documentation",
    "Executive Coaching (Remote Sessions)",
    "Pitch Deck & Investor Presentation Creation",
    "Online Course Creation & Launch Consulting",
    "Product / Project Manager",
    "Digital Marketing Manager",
    "Customer Support / Success",
    "Telehealth / Remote Healthcare",
]

SKILL_KEYWORDS: dict[str, list[str]] = {
    "AI & Automation": ["ai", "automation", "artificial intelligence", "machine learning", "ml", "ai engineer", "ai developer"],
    "AI Prompt Engineering & Optimization": ["prompt", "chatgpt", "gpt", "llm", "ai", "prompt engineering", "claude", "gemini"],
    "AI Training Data Labeling & RLHF": ["rlhf", "data labeling", "annotation", "training data", "ai training", "labeling"],
    "AI-Powered Content Moderation": ["content moderation", "moderation", "trust safety", "ai moderation"],
    "Custom GPT/Assistant Development": ["gpt", "chatbot", "assistant", "custom gpt", "ai assistant", "bot development"],
    "No-Code AI Automation Consulting": ["no-code", "zapier", "make", "automation", "n8n", "integromat", "ai automation"],
    "AI-Assisted Copywriting & SEO Content": ["copywriting", "seo", "content writing", "blog", "ai writing", "copy"],
    "Video Script Writing for YouTube/TikTok": ["video script", "youtube", "tiktok", "script writing", "content creator"],
    "Podcast Production & Editing": ["podcast", "audio editing", "audio production", "podcast editing"],
    "UGC (User-Generated Content) Creation": ["ugc", "user generated", "content creator", "social content"],
    "Social Media Community Management": ["social media", "community", "community manager", "social management"],
    "Website & App User Testing": ["user testing", "ux testing", "usability", "user research", "testing"],
    "Beta Testing & QA for Software": ["qa", "quality assurance", "beta testing", "software testing", "bug testing"],
    "Search Engine Evaluation": ["search evaluation", "search quality", "seo evaluation", "rater"],
    "Market Research Participant": ["market research", "survey", "research participant", "focus group"],
    "Competitive Intelligence Research": ["competitive intelligence", "competitor analysis", "market intelligence", "research"],
    "CRM Setup & Management (HubSpot/Salesforce)": ["crm", "hubspot", "salesforce", "customer relationship", "crm setup"],
    "Webflow/Framer Website Development": ["webflow", "framer", "web development", "website builder", "no-code web"],
    "Notion/Airtable Workspace Design": ["notion", "airtable", "workspace", "database design", "productivity tools"],
    "API Integration Specialist (No-Code Focus)": ["api integration", "api", "integration", "connector", "webhook"],
    "Spreadsheet Automation & Dashboard Building": ["spreadsheet", "excel", "google sheets", "dashboard", "data visualization"],
    "Fractional COO for Startups": ["fractional", "coo", "operations", "startup operations", "chief operating"],
    "Business Process Documentation": ["documentation", "process", "sop", "business process", "workflow"],
    "Executive Coaching (Remote Sessions)": ["coaching", "executive coaching", "leadership", "mentor", "business coach"],
    "Pitch Deck & Investor Presentation Creation": ["pitch deck", "investor", "presentation", "fundraising", "startup pitch"],
    "Online Course Creation & Launch Consulting": ["course creation", "online course", "e-learning", "course launch", "teaching"],
    "Product / Project Manager": ["product manager", "project manager", "pm", "scrum master", "agile", "product owner"],
    "Digital Marketing Manager": ["digital marketing", "marketing manager", "ppc", "seo manager", "growth marketing", "performance marketing"],
    "Customer Support / Success": ["customer support", "customer success", "support specialist", "client success", "customer service", "help desk"],
    "Telehealth / Remote Healthcare": ["telehealth", "remote healthcare", "telemedicine", "health coach", "medical", "healthcare remote"],
}

# Coarse tagging of free text scraped from job boards
SKILL_PATTERNS = [
    re.compile(r"\b(ai|artificial intelligence|machine learning|ml)\b", re.IGNORECASE),
    re.compile(r"\b(gpt|chatgpt|llm|claude|gemini)\b", re.IGNORECASE),
    re.compile(r"\b(prompt engineering)\b", re.IGNORECASE),
    re.compile(r"\b(python|javascript|typescript|nodejs|react)\b", re.IGNORECASE),
    re.compile(r"\b(no-?code|zapier|make|n8n|automation)\b", re.IGNORECASE),
    re.compile(r"\b(webflow|framer|notion|airtable)\b", re.IGNORECASE),
    re.compile(r"\b(copywriting|seo|content writing)\b", re.IGNORECASE),
    re.compile(r"\b(crm|hubspot|salesforce)\b", re.IGNORECASE),
    re.compile(r"\b(podcast|video editing|youtube)\b", re.IGNORECASE),
    re.compile(r"\b(qa|testing|quality assurance)\b", re.IGNORECASE),
    re.compile(r"\b(ux|user testing|usability)\b", re.IGNORECASE),
    re.compile(r"\b(data labeling|annotation|rlhf)\b", re.IGNORECASE),
    re.compile(r"\b(api|integration|webhook)\b", re.IGNORECASE),
    re.compile(r"\b(excel|spreadsheet|google sheets|dashboard)\b", re.IGNORECASE),
    re.compile(r"\b(coaching|consulting|advisory)\b", re.IGNORECASE),
]


def expand_categories(categories: list[str]) -> list[str]:
    """Expand category tags into lowercase keywords, first-seen order, no repeats."""
    keywords = []
    for category in categories:
        keywords.extend(SKILL_KEYWORDS.get(category, []))
    return list(dict.fromkeys(k.lower() for k in keywords))


def extract_user_keywords(profile: UserProfile) -> list[str]:
    """Keywords for a profile's skills followed by its preferred categories."""
    return expand_categories(list(profile.skills) + list(profile.preferred_categories))


def extract_skills_from_text(text: str) -> list[str]:
    """Collect every distinct pattern match in the text, lowercased."""
    skills = []
    for pattern in SKILL_PATTERNS:
        for match in pattern.finditer(text or ""):
            skills.append(match.group(0).lower())
    return list(dict.fromkeys(skills))
