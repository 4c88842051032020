from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Field names are snake_case in Python and camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoleMetric(CamelModel):
    value: str
    context: str = ""
    type: Literal["increase", "decrease", "absolute"] = "absolute"
    parent_type: Literal["role", "story"] = "role"


class Story(CamelModel):
    id: str
    title: str = ""
    content: str = ""
    problem: str | None = None
    action: str | None = None
    outcome: str | None = None
    tags: list[str] = Field(default_factory=list)
    linked_to_role: bool = True
    company: str | None = None
    title_role: str | None = None
    metrics: list[RoleMetric] = Field(default_factory=list)
    impact: str | None = None
    type: str | None = None


class WorkExperience(CamelModel):
    id: str
    company: str = ""
    title: str = ""
    start_date: str = ""
    end_date: str | None = None
    description: str = ""
    achievements: list[str] = Field(default_factory=list)
    location: str | None = None
    current: bool = False
    role_metrics: list[RoleMetric] = Field(default_factory=list)
    stories: list[Story] = Field(default_factory=list)
    role_tags: list[str] = Field(default_factory=list)
    role_summary: str | None = None
    company_tags: list[str] = Field(default_factory=list)


class Education(CamelModel):
    id: str
    institution: str = ""
    degree: str = ""
    field_of_study: str | None = None
    start_date: str = ""
    end_date: str | None = None
    gpa: str | None = None
    location: str | None = None


class ContactInfo(CamelModel):
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    website: str | None = None
    github: str | None = None
    substack: str | None = None


class SkillCategory(CamelModel):
    category: str = ""
    items: list[str] = Field(default_factory=list)


class Certification(CamelModel):
    id: str
    name: str = ""
    issuer: str = ""
    issue_date: str = ""
    expiry_date: str | None = None
    credential_id: str | None = None


class Project(CamelModel):
    id: str
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    start_date: str = ""
    end_date: str | None = None
    url: str | None = None


class StructuredResumeData(CamelModel):
    work_history: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    skill_categories: list[SkillCategory] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    location: str | None = None
    summary: str | None = None
    certifications: list[Certification] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)


# Cover letter story extraction


class CoverLetterParagraph(CamelModel):
    id: str
    text: str = ""
    function: Literal["intro", "body", "closer", "signature", "other"] = "other"
    purpose: str = ""
    tags: list[str] = Field(default_factory=list)


class CoverLetterStory(CamelModel):
    id: str
    title: str = ""
    situation: str = ""
    task: str = ""
    action: str = ""
    result: str = ""
    metrics: list[RoleMetric] = Field(default_factory=list)
    company: str | None = None
    role: str | None = None
    tags: list[str] = Field(default_factory=list)
    paragraph_id: str | None = None


class TemplateSignals(CamelModel):
    tone: str = ""
    greeting: str = ""
    signoff: str = ""
    reusable_phrases: list[str] = Field(default_factory=list)
    personalization_points: list[str] = Field(default_factory=list)
    placeholder_count: int = 0


class CoverLetterStories(CamelModel):
    paragraphs: list[CoverLetterParagraph] = Field(default_factory=list)
    stories: list[CoverLetterStory] = Field(default_factory=list)
    template_signals: TemplateSignals = Field(default_factory=TemplateSignals)


# Cover letter template extraction


class TemplateSection(CamelModel):
    id: str
    structure: str = ""
    key_elements: list[str] = Field(default_factory=list)
    content_type: str | None = None
    call_to_action: str | None = None
    tone: str = ""
    length: str = ""
    placeholder_count: int = 0


class OverallStructure(CamelModel):
    total_paragraphs: int = 0
    flow: list[str] = Field(default_factory=list)
    writing_style: str = ""
    personalization_level: str = ""
    template_type: str = ""


class CoverLetterTemplate(CamelModel):
    intro: TemplateSection = Field(default_factory=lambda: TemplateSection(id="intro"))
    body_paragraphs: list[TemplateSection] = Field(default_factory=list)
    closer: TemplateSection = Field(default_factory=lambda: TemplateSection(id="closer"))
    overall_structure: OverallStructure = Field(default_factory=OverallStructure)


# Job matching and tagging


class JobMatch(CamelModel):
    match_score: int = Field(default=0, ge=0, le=100)
    skill_matches: list[str] = Field(default_factory=list)
    experience_matches: list[str] = Field(default_factory=list)
    industry_matches: list[str] = Field(default_factory=list)
    role_matches: list[str] = Field(default_factory=list)
    leadership_matches: list[str] = Field(default_factory=list)
    technical_matches: list[str] = Field(default_factory=list)
    gap_areas: list[str] = Field(default_factory=list)
    strength_areas: list[str] = Field(default_factory=list)
    recommended_emphasis: list[str] = Field(default_factory=list)


class ContentTags(CamelModel):
    primary_tags: list[str] = Field(default_factory=list)
    skill_tags: list[str] = Field(default_factory=list)
    industry_tags: list[str] = Field(default_factory=list)
    role_level_tags: list[str] = Field(default_factory=list)
    scope_tags: list[str] = Field(default_factory=list)
    context_tags: list[str] = Field(default_factory=list)
    matching_keywords: list[str] = Field(default_factory=list)
    confidence: Literal["high", "medium", "low"] = "low"
