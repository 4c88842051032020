from __future__ import annotations

import json
from typing import Any

ORIGINAL_TEXT_PREVIEW_CHARS = 500

EVALUATION_SYSTEM_PROMPT = (
    "You are a strict quality reviewer of structured data extracted from career documents. "
    "Compare the data against the original text and grade it with the given labels only. "
    "Return ONLY a valid JSON object with no markdown and no extra text."
)

_UNIFIED_CRITERIA = (
    "- Work History Deduplication: entries are properly merged without duplicates\n"
    "- Metrics Extraction: quantifiable results and achievements are captured\n"
    "- Story Structure: achievements are organized into coherent narratives"
)
_UNIFIED_LABELS = (
    "✅ Merged / ⚠ Partial / ❌ Duplicates (Work History Deduplication)\n"
    "✅ Complete / ⚠ Limited / ❌ Missing (Metrics Extraction)\n"
    "✅ Clear / ⚠ Weak / ❌ Unclear (Story Structure)"
)
_UNIFIED_EXAMPLE = (
    '  "workHistoryDeduplication": "✅ Merged",\n'
    '  "metricsExtraction": "✅ Complete",\n'
    '  "storyStructure": "✅ Clear",\n'
)

_TEMPLATE_CRITERIA = (
    "- Template Quality: structure is well-designed and logical\n"
    "- Template Reusability: can be easily adapted for different positions\n"
    "- Template Completeness: all necessary sections are included"
)
_TEMPLATE_LABELS = (
    "✅ Excellent / ⚠ Good / ❌ Poor (Template Quality)\n"
    "✅ Highly Reusable / ⚠ Somewhat Reusable / ❌ Not Reusable (Template Reusability)\n"
    "✅ Complete / ⚠ Partial / ❌ Incomplete (Template Completeness)"
)
_TEMPLATE_EXAMPLE = (
    '  "templateQuality": "✅ Excellent",\n'
    '  "templateReusability": "✅ Highly Reusable",\n'
    '  "templateCompleteness": "✅ Complete",\n'
)

ADDITIONAL_CRITERIA_FIELDS = (
    "workHistoryDeduplication",
    "metricsExtraction",
    "storyStructure",
    "templateQuality",
    "templateReusability",
    "templateCompleteness",
)


def build_evaluation_prompt(
    structured_data: Any,
    original_text: str,
    document_type: str,
    *,
    has_unified_work_history: bool = False,
    has_template: bool = False,
) -> str:
    criteria = [
        "- Accuracy: all facts match the original text and are properly extracted",
        "- Relevance: data is relevant to the document type and purpose",
        "- Personalization: data is specific to the individual (not generic)",
        "- Clarity & Tone: data is clear, well-structured, and professional",
        f"- Framework Compliance: follows expected structure for {document_type} data",
        "- Go/No-Go: overall quality is sufficient for use",
    ]
    labels = [
        "✅ Accurate / ⚠ Partially Accurate / ❌ Inaccurate",
        "✅ Relevant / ⚠ Somewhat Relevant / ❌ Not Relevant",
        "✅ Personalized / ⚠ Weak Personalization / ❌ Generic",
        "✅ Clear & Professional / ⚠ Minor Issues / ❌ Unclear or Fluffy",
        "✅ Structured / ⚠ Partial / ❌ Not Structured",
        "✅ Go / ❌ No-Go",
    ]
    extra_example = ""
    if has_unified_work_history:
        criteria.append(_UNIFIED_CRITERIA)
        labels.append(_UNIFIED_LABELS)
        extra_example += _UNIFIED_EXAMPLE
    if has_template:
        criteria.append(_TEMPLATE_CRITERIA)
        labels.append(_TEMPLATE_LABELS)
        extra_example += _TEMPLATE_EXAMPLE

    preview = (original_text or "")[:ORIGINAL_TEXT_PREVIEW_CHARS]
    data_json = json.dumps(structured_data, indent=2, ensure_ascii=False, default=str)
    criteria_text = "\n".join(criteria)
    labels_text = "\n".join(labels)

    return (
        f"You are an evaluator of AI-generated structured data from {document_type} analysis.\n\n"
        f"Definitions:\n{criteria_text}\n\n"
        f"Labels:\n{labels_text}\n\n"
        f"Original Text (first {ORIGINAL_TEXT_PREVIEW_CHARS} chars): {preview}\n\n"
        f"Structured Data: {data_json}\n\n"
        "Respond in JSON only:\n\n"
        "{\n"
        '  "accuracy": "✅ Accurate",\n'
        '  "relevance": "⚠ Somewhat Relevant",\n'
        '  "personalization": "❌ Generic",\n'
        '  "clarity_tone": "✅ Clear & Professional",\n'
        '  "framework": "⚠ Partial",\n'
        '  "go_nogo": "❌ No-Go",\n'
        f"{extra_example}"
        '  "rationale": "Brief explanation of the evaluation"\n'
        "}"
    )
