import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from letterlab.schemas.analysis import AnalysisRequest, DocumentType  # noqa: E402
from letterlab.schemas.structured import (  # noqa: E402
    ContentTags,
    CoverLetterStories,
    CoverLetterTemplate,
    JobMatch,
    StructuredResumeData,
)
from letterlab.services.analysis_service import LLMAnalysisService  # noqa: E402
from letterlab.services.token_budget import estimate_token_budget  # noqa: E402
from tests.fakes import http_error, make_orchestrator, reply  # noqa: E402

RESUME = "Ada Lovelace\nSenior Engineer at Acme Inc, 2019 - present\n- Reduced infra cost 30%"


def service_with(*steps, **overrides):
    orchestrator, client = make_orchestrator(*steps, **overrides)
    return LLMAnalysisService(orchestrator), client


class LLMAnalysisServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_empty_resume_end_to_end(self):
        service, client = service_with(reply("{}"))

        result = await service.analyze(AnalysisRequest(raw_text="", document_type=DocumentType.RESUME))

        self.assertTrue(result.success)
        self.assertIsInstance(result.data, StructuredResumeData)
        self.assertEqual(result.data.work_history, [])
        self.assertEqual(result.raw_data, {})
        self.assertEqual(result.attempt_count, 1)
        self.assertEqual(client.calls[0]["max_tokens"], 2660)

    async def test_fenced_response_end_to_end(self):
        service, _ = service_with(reply('```json\n{"skills": ["A","B",],}\n```'))

        result = await service.analyze_resume(RESUME)

        self.assertTrue(result.success)
        self.assertEqual(result.data.skills, ["A", "B"])
        self.assertEqual(result.data.work_history, [])

    async def test_ceiling_comes_from_token_budget(self):
        service, client = service_with(reply("{}"))

        await service.analyze_case_study(RESUME * 20)

        expected = estimate_token_budget(RESUME * 20, DocumentType.CASE_STUDY).final_token_ceiling
        self.assertEqual(client.calls[0]["max_tokens"], expected)
        self.assertIn("Case Study Text:", client.calls[0]["messages"][1].content)

    async def test_each_document_type_uses_its_prompt(self):
        cases = (
            ("analyze_resume", "Resume Text:"),
            ("analyze_cover_letter", "Cover Letter Text:"),
            ("analyze_linkedin", "LinkedIn Profile Text:"),
        )
        for method, marker in cases:
            with self.subTest(method=method):
                service, client = service_with(reply("{}"))
                result = await getattr(service, method)(RESUME)
                self.assertTrue(result.success)
                self.assertIn(marker, client.calls[0]["messages"][1].content)

    async def test_failure_is_reported_not_raised(self):
        service, _ = service_with(http_error(429, "Rate limit exceeded"))

        result = await service.analyze_resume(RESUME)

        self.assertFalse(result.success)
        self.assertTrue(result.retryable)
        self.assertIsNone(result.data)
        self.assertEqual(result.attempt_count, 1)

    async def test_malformed_answer_uses_simplified_prompt_with_raw_text(self):
        service, client = service_with(reply("I think this is a resume."), reply('{"skills": ["Math"]}'))

        result = await service.analyze_resume(RESUME)

        self.assertTrue(result.success)
        self.assertEqual(result.data.skills, ["Math"])
        self.assertEqual(result.attempt_count, 2)
        self.assertIn(RESUME, client.calls[1]["messages"][1].content)

    async def test_unexpected_exception_is_retryable_failure(self):
        class Exploding:
            async def complete(self, *args, **kwargs):
                raise RuntimeError("kaboom")

        result = await LLMAnalysisService(Exploding()).analyze_resume(RESUME)

        self.assertFalse(result.success)
        self.assertTrue(result.retryable)
        self.assertEqual(result.error, "kaboom")

    async def test_extract_template(self):
        letter = "Dear hiring manager,\nI led the launch of X.\nBest, Ada"
        service, client = service_with(reply('{"intro": {"structure": "[GREETING]"}}'))

        result = await service.extract_template(letter)

        self.assertIsInstance(result.data, CoverLetterTemplate)
        self.assertEqual(result.data.intro.structure, "[GREETING]")
        expected = estimate_token_budget(letter, DocumentType.COVER_LETTER).final_token_ceiling
        self.assertEqual(client.calls[0]["max_tokens"], expected)

    async def test_template_does_not_fall_back_to_resume_shape(self):
        service, client = service_with(reply("not json"), reply("{}"))

        result = await service.extract_template("Dear team")

        self.assertFalse(result.success)
        self.assertEqual(len(client.calls), 1)

    async def test_extract_cover_letter_stories(self):
        service, _ = service_with(reply('{"stories": [{"title": "Launch"}]}'))

        result = await service.extract_cover_letter_stories("Dear team, I launched X.")

        self.assertIsInstance(result.data, CoverLetterStories)
        self.assertEqual(result.data.stories[0].title, "Launch")

    async def test_match_job_uses_default_ceiling(self):
        service, client = service_with(reply('{"matchScore": 72, "gapAreas": ["Rust"]}'), max_tokens=1800)

        result = await service.match_job(RESUME, "Staff engineer, Rust")

        self.assertIsInstance(result.data, JobMatch)
        self.assertEqual(result.data.match_score, 72)
        self.assertEqual(client.calls[0]["max_tokens"], 1800)
        self.assertIn("Staff engineer, Rust", client.calls[0]["messages"][1].content)

    async def test_tag_content(self):
        service, client = service_with(reply('{"primaryTags": ["growth"], "confidence": "medium"}'))

        result = await service.tag_content("Grew ARR 3x", "metrics")

        self.assertIsInstance(result.data, ContentTags)
        self.assertEqual(result.data.confidence, "medium")
        self.assertIn("Content Type: metrics", client.calls[0]["messages"][1].content)

    async def test_result_serializes_with_camel_case(self):
        service, _ = service_with(reply('{"skills": ["A"]}'))

        result = await service.analyze_resume(RESUME)
        payload = result.model_dump(mode="json", by_alias=True)

        self.assertEqual(payload["rawData"], {"skills": ["A"]})
        self.assertEqual(payload["attemptCount"], 1)
        self.assertEqual(payload["data"]["skills"], ["A"])


if __name__ == "__main__":
    unittest.main()
