from __future__ import annotations

from letterlab.prompts.common import CONTENT_MARKER, JSON_ONLY_FOOTER

JOB_MATCH_SCHEMA = """{
  "matchScore": 85,
  "skillMatches": ["skill1", "skill2"],
  "experienceMatches": ["senior-level", "team-leadership"],
  "industryMatches": ["saas", "fintech"],
  "roleMatches": ["product-management", "strategy"],
  "leadershipMatches": ["team-management", "cross-functional"],
  "technicalMatches": ["python", "data-analysis"],
  "gapAreas": ["area1", "area2"],
  "strengthAreas": ["area1", "area2"],
  "recommendedEmphasis": ["point1", "point2"]
}"""


def build_job_matching_prompt(content: str, job_description: str) -> str:
    return (
        "You are an expert at matching professional content to job requirements.\n\n"
        f"{CONTENT_MARKER}\n{content}\n\n"
        f"Job Description:\n{job_description}\n\n"
        "Your task: Score how well this content matches the job and name the matches and gaps.\n\n"
        "Return ONLY valid JSON:\n\n"
        f"{JOB_MATCH_SCHEMA}\n\n"
        "MATCHING RULES:\n"
        "- matchScore is an integer from 0 to 100\n"
        "- gapAreas lists where the content does not meet the job requirements\n"
        "- strengthAreas lists where the content strongly matches\n"
        "- recommendedEmphasis lists what to highlight in an application\n"
        "- Weight recent experience higher\n"
        "- Consider both hard and soft skills\n\n"
        f"{JSON_ONLY_FOOTER}"
    )
