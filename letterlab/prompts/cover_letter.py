from __future__ import annotations

from letterlab.prompts.common import COVER_LETTER_TEXT_MARKER, JSON_ONLY_FOOTER

COVER_LETTER_SCHEMA = """{
  "workHistory": [
    {
      "id": "unique_id",
      "company": "Company Name",
      "title": "Job Title",
      "startDate": "YYYY-MM-DD",
      "endDate": "YYYY-MM-DD or null if current",
      "description": "Job description",
      "achievements": ["achievement1", "achievement2"],
      "location": "City, State",
      "current": true/false
    }
  ],
  "education": [],
  "skills": ["skill1", "skill2", "skill3"],
  "achievements": ["achievement1", "achievement2"],
  "contactInfo": {
    "email": "email@example.com",
    "phone": "phone number if mentioned",
    "website": "website if mentioned",
    "linkedin": "linkedin if mentioned"
  },
  "summary": "Brief summary of the cover letter and its key points"
}"""

STORY_EXTRACTION_SCHEMA = """{
  "paragraphs": [
    {
      "id": "p1",
      "text": "Paragraph text exactly as written",
      "function": "intro|body|closer|signature|other",
      "purpose": "What this paragraph is trying to achieve",
      "tags": ["motivation", "company-fit"]
    }
  ],
  "stories": [
    {
      "id": "story_1",
      "title": "Brief story title (5-8 words)",
      "situation": "Context the story starts from",
      "task": "What needed to be done",
      "action": "What the writer did",
      "result": "What happened as a result",
      "metrics": [
        {"value": "+30%", "context": "what this metric measures", "type": "increase|decrease|absolute", "parentType": "story"}
      ],
      "company": "Company the story happened at, or null",
      "role": "Role the writer held, or null",
      "tags": ["skill1", "skill2"],
      "paragraphId": "p2"
    }
  ],
  "templateSignals": {
    "tone": "professional|conversational|enthusiastic|formal",
    "greeting": "Greeting line as written",
    "signoff": "Sign-off line as written",
    "reusablePhrases": ["phrase that would work in any letter"],
    "personalizationPoints": ["place where the letter is tailored to the company"],
    "placeholderCount": 0
  }
}"""

TEMPLATE_SCHEMA = """{
  "intro": {
    "structure": "Template for opening paragraph with placeholders",
    "keyElements": ["element1", "element2", "element3"],
    "tone": "professional|conversational|enthusiastic|formal",
    "length": "short|medium|long",
    "placeholderCount": 3
  },
  "bodyParagraphs": [
    {
      "id": "body_1",
      "structure": "Template for this body paragraph with placeholders",
      "keyElements": ["element1", "element2"],
      "contentType": "achievement|challenge|skills|experience",
      "tone": "professional|conversational|enthusiastic|formal",
      "length": "short|medium|long",
      "placeholderCount": 2
    }
  ],
  "closer": {
    "structure": "Template for closing paragraph with placeholders",
    "keyElements": ["element1", "element2"],
    "callToAction": "Template for call to action",
    "tone": "professional|conversational|enthusiastic|formal",
    "length": "short|medium|long",
    "placeholderCount": 1
  },
  "overallStructure": {
    "totalParagraphs": 4,
    "flow": ["intro", "body_1", "body_2", "closer"],
    "writingStyle": "achievement-focused|story-driven|skills-based|mixed",
    "personalizationLevel": "high|medium|low",
    "templateType": "traditional|modern|creative"
  }
}"""


def build_cover_letter_prompt(text: str) -> str:
    return (
        "Analyze this cover letter text and extract structured data. "
        "Return ONLY valid JSON with no additional text.\n\n"
        f"{COVER_LETTER_TEXT_MARKER}\n{text}\n\n"
        "Extract the following information and return as JSON:\n\n"
        f"{COVER_LETTER_SCHEMA}\n\n"
        "Instructions:\n"
        "- Extract work experience and achievements mentioned in the cover letter\n"
        "- Focus on specific accomplishments and metrics mentioned\n"
        "- Include any skills or technologies referenced\n"
        "- Extract any contact information if mentioned\n"
        "- Create a summary highlighting the key points and achievements\n"
        "- Ensure all dates are in YYYY-MM-DD format\n"
        "- Generate unique IDs for each item\n"
        f"- {JSON_ONLY_FOOTER}\n"
    )


def build_cover_letter_stories_prompt(text: str) -> str:
    return (
        "You are an expert at reading cover letters and pulling out the stories they tell.\n\n"
        f"{COVER_LETTER_TEXT_MARKER}\n{text}\n\n"
        "Analyze the letter paragraph by paragraph. Return ONLY valid JSON with this structure:\n\n"
        f"{STORY_EXTRACTION_SCHEMA}\n\n"
        "RULES:\n"
        "- Every paragraph of the letter appears once in \"paragraphs\", in order\n"
        "- \"function\" says where the paragraph sits; \"purpose\" says what it is for\n"
        "- A story is a concrete episode with a result; opinions and enthusiasm are not stories\n"
        "- Write stories in STAR form: situation, task, action, result\n"
        "- Copy numbers exactly as written into metrics; never invent numbers\n"
        "- Use null for company or role when the letter does not name them\n"
        "- templateSignals describe how the writer writes, not what they wrote about\n\n"
        f"{JSON_ONLY_FOOTER}"
    )


def build_template_prompt(text: str) -> str:
    return (
        "You are an expert at analyzing cover letters and extracting their structural template.\n\n"
        "Your goal: Extract the STRUCTURAL PATTERNS from this cover letter to create a reusable "
        "template that captures the user's writing style and approach.\n\n"
        f"{COVER_LETTER_TEXT_MARKER}\n{text}\n\n"
        "Analyze the cover letter and extract:\n\n"
        "1. PARAGRAPH STRUCTURE: How is the cover letter organized?\n"
        "2. WRITING STYLE: What's the tone and approach?\n"
        "3. CONTENT PATTERNS: What types of content appear in each paragraph?\n"
        "4. NARRATIVE FLOW: How does the story progress?\n\n"
        "Return ONLY valid JSON with this structure:\n\n"
        f"{TEMPLATE_SCHEMA}\n\n"
        "CRITICAL INSTRUCTIONS:\n"
        "- Extract the STRUCTURAL PATTERNS, not the specific content\n"
        "- Focus on HOW the user writes, not WHAT they wrote\n"
        "- Create templates with [PLACEHOLDER] text that can be filled later\n"
        "- Identify the narrative flow and paragraph purposes\n"
        "- Count placeholders to help with dynamic content insertion\n\n"
        f"{JSON_ONLY_FOOTER}"
    )
