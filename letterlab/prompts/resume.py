from __future__ import annotations

from letterlab.prompts.common import JSON_ONLY_FOOTER, RESUME_TEXT_MARKER

RESUME_SCHEMA = """{
  "workHistory": [
    {
      "id": "unique_id",
      "company": "Company Name",
      "title": "Job Title",
      "startDate": "YYYY-MM-DD",
      "endDate": "YYYY-MM-DD or null if current",
      "current": true/false,
      "location": "City, State",
      "description": "Job description",
      "roleSummary": "One or two sentence summary of the role",
      "achievements": ["achievement1", "achievement2"],
      "roleMetrics": [
        {"value": "+22%", "context": "what this metric measures", "type": "increase|decrease|absolute", "parentType": "role"}
      ],
      "stories": [
        {
          "id": "story_1",
          "title": "Brief story title (5-8 words)",
          "content": "Full text exactly as written",
          "problem": "What challenge or opportunity",
          "action": "What was done",
          "outcome": "What resulted",
          "tags": ["skill1", "skill2"],
          "metrics": [
            {"value": "$50K", "context": "annual savings", "type": "absolute", "parentType": "story"}
          ],
          "impact": "high|medium|low",
          "type": "achievement|challenge|leadership|innovation|problem-solving",
          "linkedToRole": true
        }
      ],
      "roleTags": ["tag1", "tag2"],
      "companyTags": ["industry", "company-stage"]
    }
  ],
  "education": [
    {
      "id": "unique_id",
      "institution": "University Name",
      "degree": "Degree Type",
      "fieldOfStudy": "Field of Study",
      "startDate": "YYYY-MM-DD",
      "endDate": "YYYY-MM-DD",
      "gpa": "GPA if mentioned",
      "location": "City, State"
    }
  ],
  "skills": ["skill1", "skill2", "skill3"],
  "achievements": ["achievement1", "achievement2"],
  "contactInfo": {
    "email": "email@example.com",
    "phone": "phone number",
    "linkedin": "LinkedIn URL",
    "website": "website URL",
    "github": "GitHub URL"
  },
  "location": "City, State",
  "summary": "Professional summary if present",
  "certifications": [
    {
      "id": "unique_id",
      "name": "Certification Name",
      "issuer": "Issuing Organization",
      "issueDate": "YYYY-MM-DD",
      "expiryDate": "YYYY-MM-DD or null if no expiry",
      "credentialId": "Credential ID if mentioned"
    }
  ],
  "projects": [
    {
      "id": "unique_id",
      "name": "Project Name",
      "description": "Project description",
      "technologies": ["tech1", "tech2"],
      "startDate": "YYYY-MM-DD",
      "endDate": "YYYY-MM-DD or null if ongoing",
      "url": "Project URL if mentioned"
    }
  ]
}"""

RESUME_RULES = """Rules:
- Use realistic dates (convert relative dates like "2020-2022" to "2020-01-01" and "2022-12-31")
- A role described as "current", "present" or "now" has "endDate": null and "current": true
- Extract ALL information explicitly mentioned in the text; completeness is critical
- Include every work history entry, education entry, certification, and project found in the resume
- Do not skip or filter any entries based on relevance or recency
- If information is not available, use null or an empty array
- Ensure all dates are in YYYY-MM-DD format
- Generate unique IDs for each item
- Skills should be specific and technical when possible
- The top-level "location" is where the candidate lives; do not copy it into contactInfo

STORY EXTRACTION RULES:
- Each bullet point that carries distinct value becomes its own story
- Each story has problem (situation), action (what was done) and outcome (result)
- Put numbers that belong to one story in that story's metrics
- Put numbers that describe the whole role in roleMetrics
- Do not combine or summarize multiple achievements into a single story
- Populate the "achievements" array of every work history entry with its bullet points"""


def build_resume_prompt(text: str) -> str:
    return (
        "Analyze this resume text and extract structured data. "
        "Return ONLY valid JSON with no additional text.\n\n"
        f"{RESUME_TEXT_MARKER}\n{text}\n\n"
        "Extract the following information and return as JSON. IMPORTANT: Extract ALL work history "
        "entries, education entries, certifications, and projects mentioned in the resume.\n\n"
        f"{RESUME_SCHEMA}\n\n"
        f"{RESUME_RULES}\n\n"
        f"{JSON_ONLY_FOOTER}\n"
    )
