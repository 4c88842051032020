"""Map parsed model JSON onto typed records.

Every field is defaulted explicitly: arrays fall back to ``[]``, objects to
their empty record, entities get a ``<prefix>_<index>`` id when the model left
one out. None of these functions raise for any JSON object input.
"""
from __future__ import annotations

import math
from typing import Any, Callable, TypeVar

from pydantic import BaseModel

from letterlab.schemas.analysis import PromptKind
from letterlab.schemas.structured import (
    Certification,
    ContactInfo,
    ContentTags,
    CoverLetterParagraph,
    CoverLetterStories,
    CoverLetterStory,
    CoverLetterTemplate,
    Education,
    JobMatch,
    OverallStructure,
    Project,
    RoleMetric,
    SkillCategory,
    Story,
    StructuredResumeData,
    TemplateSection,
    TemplateSignals,
    WorkExperience,
)

T = TypeVar("T")

_PARAGRAPH_FUNCTIONS = {"intro", "body", "closer", "signature", "other"}
_CONFIDENCE_LEVELS = {"high", "medium", "low"}


def _str(value: Any, default: str = "") -> str:
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return default


def _opt_str(value: Any) -> str | None:
    return _str(value) or None


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _str_list(value: Any) -> list[str]:
    return [text for text in (_str(item) for item in _list(value)) if text]


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            return _int(float(value.strip().rstrip("%")), default)
        except ValueError:
            return default
    return default


def _bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    return bool(value)


def _entities(value: Any, prefix: str, build: Callable[[dict[str, Any], str], T]) -> list[T]:
    items = []
    for index, item in enumerate(_list(value)):
        raw = _dict(item)
        items.append(build(raw, _str(raw.get("id")) or f"{prefix}_{index}"))
    return items


def _metric_type(value: str, declared: Any) -> str:
    declared_text = _str(declared).lower()
    if declared_text in {"increase", "decrease", "absolute"}:
        return declared_text
    if value.startswith("+"):
        return "increase"
    if value.startswith("-"):
        return "decrease"
    return "absolute"


def map_metrics(value: Any, parent_type: str) -> list[RoleMetric]:
    metrics = []
    for item in _list(value):
        if isinstance(item, dict):
            text = _str(item.get("value"))
            if not text:
                continue
            metrics.append(
                RoleMetric(
                    value=text,
                    context=_str(item.get("context")),
                    type=_metric_type(text, item.get("type")),
                    parent_type=parent_type,
                )
            )
        else:
            text = _str(item)
            if text:
                metrics.append(RoleMetric(value=text, type=_metric_type(text, None), parent_type=parent_type))
    return metrics


def _story(raw: dict[str, Any], story_id: str) -> Story:
    return Story(
        id=story_id,
        title=_str(raw.get("title")),
        content=_str(raw.get("content")) or _str(raw.get("description")),
        problem=_opt_str(raw.get("problem")),
        action=_opt_str(raw.get("action")),
        outcome=_opt_str(raw.get("outcome")),
        tags=_str_list(raw.get("tags")),
        linked_to_role=_bool(raw.get("linkedToRole", True)),
        company=_opt_str(raw.get("company")),
        title_role=_opt_str(raw.get("titleRole")),
        metrics=map_metrics(raw.get("metrics"), "story"),
        impact=_opt_str(raw.get("impact")),
        type=_opt_str(raw.get("type")),
    )


def _work_experience(raw: dict[str, Any], work_id: str) -> WorkExperience:
    role_metrics = raw.get("roleMetrics")
    if role_metrics is None:
        role_metrics = raw.get("metrics")
    end_date = _opt_str(raw.get("endDate"))
    return WorkExperience(
        id=work_id,
        company=_str(raw.get("company")),
        title=_str(raw.get("title")),
        start_date=_str(raw.get("startDate")),
        end_date=end_date,
        description=_str(raw.get("description")),
        achievements=_str_list(raw.get("achievements")),
        location=_opt_str(raw.get("location")),
        current=_bool(raw.get("current")),
        role_metrics=map_metrics(role_metrics, "role"),
        stories=_entities(raw.get("stories"), f"{work_id}_story", _story),
        role_tags=_str_list(raw.get("roleTags")),
        role_summary=_opt_str(raw.get("roleSummary")),
        company_tags=_str_list(raw.get("companyTags")),
    )


def _education(raw: dict[str, Any], edu_id: str) -> Education:
    return Education(
        id=edu_id,
        institution=_str(raw.get("institution")),
        degree=_str(raw.get("degree")),
        field_of_study=_opt_str(raw.get("fieldOfStudy")),
        start_date=_str(raw.get("startDate")),
        end_date=_opt_str(raw.get("endDate")),
        gpa=_opt_str(raw.get("gpa")),
        location=_opt_str(raw.get("location")),
    )


def _certification(raw: dict[str, Any], cert_id: str) -> Certification:
    return Certification(
        id=cert_id,
        name=_str(raw.get("name")),
        issuer=_str(raw.get("issuer")),
        issue_date=_str(raw.get("issueDate")),
        expiry_date=_opt_str(raw.get("expiryDate")),
        credential_id=_opt_str(raw.get("credentialId")),
    )


def _project(raw: dict[str, Any], project_id: str) -> Project:
    return Project(
        id=project_id,
        name=_str(raw.get("name")),
        description=_str(raw.get("description")),
        technologies=_str_list(raw.get("technologies")),
        start_date=_str(raw.get("startDate")),
        end_date=_opt_str(raw.get("endDate")),
        url=_opt_str(raw.get("url")),
    )


def map_contact_info(value: Any) -> ContactInfo:
    raw = _dict(value)
    return ContactInfo(
        email=_opt_str(raw.get("email")),
        phone=_opt_str(raw.get("phone")),
        location=_opt_str(raw.get("location")),
        linkedin=_opt_str(raw.get("linkedin")),
        website=_opt_str(raw.get("website")),
        github=_opt_str(raw.get("github")),
        substack=_opt_str(raw.get("substack")),
    )


def map_skills(value: Any) -> tuple[list[str], list[SkillCategory]]:
    """Flatten plain and categorised skills; categories are kept alongside."""
    skills: list[str] = []
    categories: list[SkillCategory] = []
    for item in _list(value):
        if isinstance(item, dict):
            items = _str_list(item.get("items"))
            categories.append(SkillCategory(category=_str(item.get("category")), items=items))
            skills.extend(items)
        else:
            text = _str(item)
            if text:
                skills.append(text)
    return skills, categories


def map_structured_resume(data: dict[str, Any]) -> StructuredResumeData:
    raw = _dict(data)
    skills, categories = map_skills(raw.get("skills"))
    return StructuredResumeData(
        work_history=_entities(raw.get("workHistory"), "work", _work_experience),
        education=_entities(raw.get("education"), "edu", _education),
        skills=skills,
        skill_categories=categories,
        achievements=_str_list(raw.get("achievements")),
        contact_info=map_contact_info(raw.get("contactInfo")),
        location=_opt_str(raw.get("location")),
        summary=_opt_str(raw.get("summary")),
        certifications=_entities(raw.get("certifications"), "cert", _certification),
        projects=_entities(raw.get("projects"), "project", _project),
    )


def _paragraph(raw: dict[str, Any], paragraph_id: str) -> CoverLetterParagraph:
    function = _str(raw.get("function")).lower()
    return CoverLetterParagraph(
        id=paragraph_id,
        text=_str(raw.get("text")),
        function=function if function in _PARAGRAPH_FUNCTIONS else "other",
        purpose=_str(raw.get("purpose")),
        tags=_str_list(raw.get("tags")),
    )


def _cover_letter_story(raw: dict[str, Any], story_id: str) -> CoverLetterStory:
    return CoverLetterStory(
        id=story_id,
        title=_str(raw.get("title")),
        situation=_str(raw.get("situation")),
        task=_str(raw.get("task")),
        action=_str(raw.get("action")),
        result=_str(raw.get("result")),
        metrics=map_metrics(raw.get("metrics"), "story"),
        company=_opt_str(raw.get("company")),
        role=_opt_str(raw.get("role")),
        tags=_str_list(raw.get("tags")),
        paragraph_id=_opt_str(raw.get("paragraphId")),
    )


def map_cover_letter_stories(data: dict[str, Any]) -> CoverLetterStories:
    raw = _dict(data)
    signals = _dict(raw.get("templateSignals"))
    return CoverLetterStories(
        paragraphs=_entities(raw.get("paragraphs"), "p", _paragraph),
        stories=_entities(raw.get("stories"), "story", _cover_letter_story),
        template_signals=TemplateSignals(
            tone=_str(signals.get("tone")),
            greeting=_str(signals.get("greeting")),
            signoff=_str(signals.get("signoff")),
            reusable_phrases=_str_list(signals.get("reusablePhrases")),
            personalization_points=_str_list(signals.get("personalizationPoints")),
            placeholder_count=max(_int(signals.get("placeholderCount")), 0),
        ),
    )


def _template_section(raw: dict[str, Any], section_id: str) -> TemplateSection:
    return TemplateSection(
        id=section_id,
        structure=_str(raw.get("structure")),
        key_elements=_str_list(raw.get("keyElements")),
        content_type=_opt_str(raw.get("contentType")),
        call_to_action=_opt_str(raw.get("callToAction")),
        tone=_str(raw.get("tone")),
        length=_str(raw.get("length")),
        placeholder_count=max(_int(raw.get("placeholderCount")), 0),
    )


def map_template(data: dict[str, Any]) -> CoverLetterTemplate:
    raw = _dict(data)
    overall = _dict(raw.get("overallStructure"))
    body = _entities(raw.get("bodyParagraphs"), "body", _template_section)
    return CoverLetterTemplate(
        intro=_template_section(_dict(raw.get("intro")), "intro"),
        body_paragraphs=body,
        closer=_template_section(_dict(raw.get("closer")), "closer"),
        overall_structure=OverallStructure(
            total_paragraphs=max(_int(overall.get("totalParagraphs"), len(body) + 2), 0),
            flow=_str_list(overall.get("flow")),
            writing_style=_str(overall.get("writingStyle")),
            personalization_level=_str(overall.get("personalizationLevel")),
            template_type=_str(overall.get("templateType")),
        ),
    )


def map_job_match(data: dict[str, Any]) -> JobMatch:
    raw = _dict(data)
    return JobMatch(
        match_score=min(max(_int(raw.get("matchScore")), 0), 100),
        skill_matches=_str_list(raw.get("skillMatches")),
        experience_matches=_str_list(raw.get("experienceMatches")),
        industry_matches=_str_list(raw.get("industryMatches")),
        role_matches=_str_list(raw.get("roleMatches")),
        leadership_matches=_str_list(raw.get("leadershipMatches")),
        technical_matches=_str_list(raw.get("technicalMatches")),
        gap_areas=_str_list(raw.get("gapAreas")),
        strength_areas=_str_list(raw.get("strengthAreas")),
        recommended_emphasis=_str_list(raw.get("recommendedEmphasis")),
    )


def map_content_tags(data: dict[str, Any]) -> ContentTags:
    raw = _dict(data)
    confidence = _str(raw.get("confidence")).lower()
    return ContentTags(
        primary_tags=_str_list(raw.get("primaryTags")),
        skill_tags=_str_list(raw.get("skillTags")),
        industry_tags=_str_list(raw.get("industryTags")),
        role_level_tags=_str_list(raw.get("roleLevelTags")),
        scope_tags=_str_list(raw.get("scopeTags")),
        context_tags=_str_list(raw.get("contextTags")),
        matching_keywords=_str_list(raw.get("matchingKeywords")),
        confidence=confidence if confidence in _CONFIDENCE_LEVELS else "low",
    )


_MAPPERS: dict[PromptKind, Callable[[dict[str, Any]], BaseModel]] = {
    PromptKind.RESUME: map_structured_resume,
    PromptKind.COVER_LETTER: map_structured_resume,
    PromptKind.CASE_STUDY: map_structured_resume,
    PromptKind.LINKEDIN: map_structured_resume,
    PromptKind.COVER_LETTER_STORIES: map_cover_letter_stories,
    PromptKind.COVER_LETTER_TEMPLATE: map_template,
    PromptKind.JOB_MATCHING: map_job_match,
    PromptKind.CONTENT_TAGGING: map_content_tags,
}


def map_to_domain(parsed: dict[str, Any], kind: PromptKind | str) -> BaseModel:
    mapper = _MAPPERS.get(PromptKind(kind), map_structured_resume)
    return mapper(parsed)
