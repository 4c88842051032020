from __future__ import annotations

from typing import Literal

from letterlab.prompts.common import CONTENT_MARKER, JSON_ONLY_FOOTER

ContentKind = Literal["story", "metrics", "workHistory"]

CONTENT_TAGS_SCHEMA = """{
  "primaryTags": ["tag1", "tag2", "tag3"],
  "skillTags": ["skill1", "skill2"],
  "industryTags": ["industry1", "industry2"],
  "roleLevelTags": ["senior", "leadership"],
  "scopeTags": ["team-management", "cross-functional"],
  "contextTags": ["startup", "enterprise", "remote"],
  "matchingKeywords": ["keyword1", "keyword2", "keyword3"],
  "confidence": "high|medium|low"
}"""

_FOCUS = {
    "story": (
        "Skills demonstrated",
        "Industry/domain",
        "Role level (entry, mid, senior, executive)",
        "Project scope and leadership level",
        "Technical vs business focus",
    ),
    "metrics": (
        "Metric type (revenue, cost, efficiency, growth, team size, etc.)",
        "Industry relevance",
        "Scale/scope and timeframe",
        "Impact level",
    ),
    "workHistory": (
        "Industry and company type/size",
        "Role level and function",
        "Key skills/technologies",
        "Leadership scope",
    ),
}


def build_content_tagging_prompt(content: str, content_type: ContentKind = "story") -> str:
    focus = _FOCUS.get(content_type, _FOCUS["story"])
    focus_lines = "\n".join(f"- {item}" for item in focus)
    return (
        "You are an expert at analyzing professional content and generating relevant tags "
        "for matching and categorization.\n\n"
        f"{CONTENT_MARKER}\n{content}\n\n"
        f"Content Type: {content_type}\n\n"
        "Your task: Generate relevant tags that will help match this content to job descriptions "
        "and opportunities. Focus on:\n"
        f"{focus_lines}\n\n"
        "Return ONLY valid JSON with this structure:\n\n"
        f"{CONTENT_TAGS_SCHEMA}\n\n"
        "TAGGING RULES:\n"
        "- Be specific but not overly narrow\n"
        "- Include both technical and soft skills\n"
        "- Generate 3-5 primary tags, 2-3 of each other category\n"
        "- Confidence should reflect how clear the content is for tagging\n\n"
        f"{JSON_ONLY_FOOTER}"
    )
