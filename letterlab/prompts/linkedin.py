from __future__ import annotations

from letterlab.prompts.common import JSON_ONLY_FOOTER, LINKEDIN_TEXT_MARKER
from letterlab.prompts.resume import RESUME_SCHEMA


def build_linkedin_prompt(text: str) -> str:
    return (
        "Analyze this LinkedIn profile export and extract structured data. "
        "Return ONLY valid JSON with no additional text.\n\n"
        f"{LINKEDIN_TEXT_MARKER}\n{text}\n\n"
        "Extract the following information and return as JSON:\n\n"
        f"{RESUME_SCHEMA}\n\n"
        "Rules:\n"
        "- The \"About\" section becomes \"summary\"\n"
        "- Each position under Experience becomes one workHistory entry, even at the same company\n"
        "- A position listed as \"Present\" has \"endDate\": null and \"current\": true\n"
        "- Endorsed skills go into \"skills\"; Licenses & Certifications go into \"certifications\"\n"
        "- Leave \"stories\" empty unless the position description has distinct bullet points\n"
        "- Ensure all dates are in YYYY-MM-DD format; use the first of the month when only month and year are given\n"
        f"- {JSON_ONLY_FOOTER}\n"
    )
