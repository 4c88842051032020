import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from letterlab.schemas.analysis import DocumentType  # noqa: E402
from letterlab.services.token_budget import (  # noqa: E402
    complexity_multiplier,
    count_keyword_hits,
    estimate_text_tokens,
    estimate_token_budget,
    token_limit_retry_ceiling,
    truncation_retry_ceiling,
)


class TokenBudgetTests(unittest.TestCase):
    def test_empty_resume_gets_structural_floor(self):
        budget = estimate_token_budget("", DocumentType.RESUME)
        self.assertEqual(budget.content_token_estimate, 0)
        self.assertEqual(budget.complexity_multiplier, 1.0)
        self.assertEqual(budget.structural_overhead, 1200)
        self.assertEqual(budget.final_token_ceiling, 2660)

    def test_empty_cover_letter_uses_default_overhead(self):
        budget = estimate_token_budget("", DocumentType.COVER_LETTER)
        self.assertEqual(budget.type_multiplier, 0.7)
        self.assertEqual(budget.structural_overhead, 800)
        self.assertEqual(budget.final_token_ceiling, 1940)

    def test_accepts_plain_string_document_type(self):
        self.assertEqual(estimate_token_budget("", "linkedin").final_token_ceiling, 1940)

    def test_unknown_document_type_is_rejected(self):
        with self.assertRaises(ValueError):
            estimate_token_budget("hello", "spreadsheet")

    def test_single_long_line_resume(self):
        text = "word " * 700
        budget = estimate_token_budget(text, DocumentType.RESUME)
        self.assertEqual(budget.content_token_estimate, 1000)
        self.assertEqual(budget.complexity_multiplier, 1.1)
        self.assertEqual(budget.final_token_ceiling, 4640)

    def test_long_document_is_capped(self):
        budget = estimate_token_budget("word " * 2000, DocumentType.RESUME)
        self.assertEqual(budget.final_token_ceiling, 5000)

    def test_ceiling_stays_in_range_for_all_types(self):
        samples = ["", "short", "Senior engineer at Acme\n" * 40, "word " * 5000]
        for document_type in DocumentType:
            for text in samples:
                ceiling = estimate_token_budget(text, document_type).final_token_ceiling
                self.assertGreaterEqual(ceiling, 800)
                self.assertLessEqual(ceiling, 5000)

    def test_more_text_never_shrinks_the_ceiling(self):
        previous = 0
        for lines in (1, 10, 50, 200):
            text = "Led the platform team at Acme\n" * lines
            ceiling = estimate_token_budget(text, DocumentType.RESUME).final_token_ceiling
            self.assertGreaterEqual(ceiling, previous)
            previous = ceiling

    def test_complexity_is_capped(self):
        text = " ".join(
            ["experience"] * 4 + ["education"] * 3 + ["skills"] * 2 + ["project"] * 3 + ["filler"] * 2500
        )
        self.assertEqual(complexity_multiplier(text), 2.0)

    def test_keyword_sections_raise_complexity(self):
        text = "experience\nmanager\nengineer\ndirector\n"
        self.assertEqual(count_keyword_hits(text, "work_experience"), 4)
        self.assertEqual(complexity_multiplier(text), 1.2)

    def test_keywords_match_whole_words_only(self):
        self.assertEqual(count_keyword_hits("Engineering skillset", "work_experience"), 0)
        self.assertEqual(count_keyword_hits("Engineering skillset", "skills"), 0)

    def test_estimate_text_tokens_rounds_up(self):
        self.assertEqual(estimate_text_tokens(""), 0)
        self.assertEqual(estimate_text_tokens("abcd"), 2)


class RetryCeilingTests(unittest.TestCase):
    def test_token_limit_ceiling_is_bounded(self):
        self.assertEqual(token_limit_retry_ceiling("x" * 35), 800)
        self.assertEqual(token_limit_retry_ceiling("x" * 3500), 2000)
        self.assertEqual(token_limit_retry_ceiling("x" * 35000), 4000)

    def test_truncation_ceiling_grows_from_observed_tokens(self):
        self.assertEqual(truncation_retry_ceiling(1000, 1000), 1500)

    def test_truncation_ceiling_is_capped(self):
        self.assertEqual(truncation_retry_ceiling(2000, 3500), 4000)

    def test_truncation_ceiling_grows_within_ceiling_maximum(self):
        self.assertEqual(truncation_retry_ceiling(4000, 3990), 5000)
        self.assertEqual(truncation_retry_ceiling(4500, 4400), 5000)
        self.assertEqual(truncation_retry_ceiling(1, 0), 2)

    def test_truncation_ceiling_never_exceeds_maximum(self):
        for current in (800, 2000, 3999, 4000, 4800):
            for observed in (0, current // 2, current):
                ceiling = truncation_retry_ceiling(current, observed)
                self.assertIsNotNone(ceiling)
                self.assertGreater(ceiling, current)
                self.assertLessEqual(ceiling, 5000)

    def test_no_truncation_ceiling_at_maximum(self):
        self.assertIsNone(truncation_retry_ceiling(5000, 4800))
        self.assertIsNone(truncation_retry_ceiling(5000, 100))


if __name__ == "__main__":
    unittest.main()
