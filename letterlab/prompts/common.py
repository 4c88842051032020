from __future__ import annotations

EXTRACTION_SYSTEM_PROMPT = (
    "You are an expert at parsing resume data and extracting structured information. "
    "You must return ONLY valid JSON with no additional text, no markdown formatting, "
    "no code blocks, and no explanations. The response must be parseable by a strict JSON parser."
)

SIMPLIFIED_SYSTEM_PROMPT = "You are a JSON extraction tool. Return ONLY valid JSON with no additional text."

RESUME_TEXT_MARKER = "Resume Text:"
COVER_LETTER_TEXT_MARKER = "Cover Letter Text:"
CASE_STUDY_TEXT_MARKER = "Case Study Text:"
LINKEDIN_TEXT_MARKER = "LinkedIn Profile Text:"
CONTENT_MARKER = "Content to analyze:"

SOURCE_TEXT_MARKERS = (
    RESUME_TEXT_MARKER,
    COVER_LETTER_TEXT_MARKER,
    CASE_STUDY_TEXT_MARKER,
    LINKEDIN_TEXT_MARKER,
    CONTENT_MARKER,
)

# First line of the instructions that follow the embedded source text.
_SOURCE_TEXT_TERMINATORS = (
    "\n\nExtract the following",
    "\n\nAnalyze the",
    "\n\nContent Type:",
    "\n\nReturn ONLY",
)

JSON_ONLY_FOOTER = "Return valid JSON only, no markdown formatting."

SIMPLIFIED_SCHEMA = """{
  "workHistory": [],
  "education": [],
  "skills": [],
  "achievements": [],
  "contactInfo": {},
  "summary": ""
}"""


def recover_source_text(prompt: str) -> str:
    """Pull the embedded document back out of a full extraction prompt."""
    for marker in SOURCE_TEXT_MARKERS:
        if marker not in prompt:
            continue
        tail = prompt.split(marker, 1)[1]
        cut = len(tail)
        for terminator in _SOURCE_TEXT_TERMINATORS:
            index = tail.find(terminator)
            if index != -1:
                cut = min(cut, index)
        return tail[:cut].strip()
    return prompt.strip()


def build_simplified_prompt(source_text: str) -> str:
    return (
        "Extract the following information from this text and return ONLY valid JSON:\n\n"
        f"{source_text}\n\n"
        "Return this exact JSON structure:\n"
        f"{SIMPLIFIED_SCHEMA}\n\n"
        "IMPORTANT: Return ONLY the JSON object, no other text, no markdown, no explanations."
    )
