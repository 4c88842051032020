from __future__ import annotations

from letterlab.prompts.common import CASE_STUDY_TEXT_MARKER, JSON_ONLY_FOOTER

CASE_STUDY_SCHEMA = """{
  "workHistory": [
    {
      "id": "unique_id",
      "company": "Company Name",
      "title": "Job Title",
      "startDate": "YYYY-MM-DD",
      "endDate": "YYYY-MM-DD or null if current",
      "description": "Project/case study description",
      "achievements": ["achievement1", "achievement2"],
      "roleMetrics": [
        {"value": "-40%", "context": "what this metric measures", "type": "increase|decrease|absolute", "parentType": "role"}
      ],
      "location": "City, State",
      "current": true/false
    }
  ],
  "education": [],
  "skills": ["skill1", "skill2", "skill3"],
  "achievements": ["achievement1", "achievement2"],
  "contactInfo": {
    "email": "email@example.com",
    "website": "website if mentioned",
    "linkedin": "linkedin if mentioned"
  },
  "projects": [
    {
      "id": "unique_id",
      "name": "Project Name",
      "description": "Problem, approach and outcome",
      "technologies": ["tech1", "tech2"],
      "startDate": "YYYY-MM-DD",
      "endDate": "YYYY-MM-DD or null if ongoing",
      "url": "Project URL if mentioned"
    }
  ],
  "summary": "Brief summary of the case study and its outcomes"
}"""


def build_case_study_prompt(text: str) -> str:
    return (
        "Analyze this case study text and extract structured data. "
        "Return ONLY valid JSON with no additional text.\n\n"
        f"{CASE_STUDY_TEXT_MARKER}\n{text}\n\n"
        "Extract the following information and return as JSON:\n\n"
        f"{CASE_STUDY_SCHEMA}\n\n"
        "Instructions:\n"
        "- Extract project details, methodologies, and outcomes from the case study\n"
        "- Focus on technical skills, problem-solving approaches, and measurable results\n"
        "- Include any specific metrics, tools, or technologies mentioned\n"
        "- Create a summary highlighting the key outcomes and learnings\n"
        "- Ensure all dates are in YYYY-MM-DD format\n"
        "- Generate unique IDs for each item\n"
        f"- {JSON_ONLY_FOOTER}\n"
    )
