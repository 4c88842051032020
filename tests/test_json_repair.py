import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from letterlab.services.domain_mapper import map_structured_resume  # noqa: E402
from letterlab.services.json_repair import (  # noqa: E402
    MalformedJsonError,
    drop_trailing_commas,
    parse_json,
    quote_bare_keys,
    quote_bare_values,
    repair_json_text,
    strip_code_fences,
)


class JsonRepairTests(unittest.TestCase):
    def setUp(self):
        self.clean = {"skills": ["Python", "SQL"], "contactInfo": {"email": "ada@example.com"}, "years": 7}

    def test_valid_json_round_trips_unchanged(self):
        result = map_structured_resume(
            {
                "workHistory": [{"company": "Acme", "title": "Engineer", "achievements": ["Cut costs 20%"]}],
                "skills": ["Python"],
            }
        )
        payload = result.model_dump(mode="json", by_alias=True)
        self.assertEqual(parse_json(json.dumps(payload)), payload)

    def test_recovers_fenced_json(self):
        content = "```json\n" + json.dumps(self.clean, indent=2) + "\n```"
        self.assertEqual(parse_json(content), self.clean)

    def test_recovers_plain_fence(self):
        content = "```\n" + json.dumps(self.clean) + "\n```"
        self.assertEqual(parse_json(content), self.clean)

    def test_recovers_trailing_comma(self):
        content = '{"skills": ["Python", "SQL"], "contactInfo": {"email": "ada@example.com"}, "years": 7,}'
        self.assertEqual(parse_json(content), self.clean)

    def test_recovers_unquoted_key(self):
        content = '{skills: ["Python", "SQL"], "contactInfo": {"email": "ada@example.com"}, "years": 7}'
        self.assertEqual(parse_json(content), self.clean)

    def test_fenced_trailing_commas_end_to_end(self):
        content = '```json\n{"skills": ["A","B",],}\n```'
        self.assertEqual(parse_json(content), {"skills": ["A", "B"]})

    def test_quotes_bare_scalar_values_but_keeps_literals(self):
        content = '{"title": Senior Engineer, "current": true, "years": 4, "endDate": null}'
        self.assertEqual(
            parse_json(content),
            {"title": "Senior Engineer", "current": True, "years": 4, "endDate": None},
        )

    def test_ignores_prose_around_the_object(self):
        content = 'Sure! Here is the data: {"skills": ["Go"]} Let me know if you need more.'
        self.assertEqual(parse_json(content), {"skills": ["Go"]})

    def test_unparseable_content_raises(self):
        with self.assertRaises(MalformedJsonError):
            parse_json("I could not read that document.")

    def test_top_level_array_is_rejected(self):
        with self.assertRaises(MalformedJsonError):
            parse_json("[1, 2, 3]")

    def test_none_content_raises(self):
        with self.assertRaises(MalformedJsonError):
            parse_json(None)

    def test_error_keeps_cleaned_text(self):
        with self.assertRaises(MalformedJsonError) as ctx:
            parse_json('```json\n{"skills": [\n```')
        self.assertEqual(ctx.exception.cleaned, '{"skills": [')

    def test_strip_code_fences_leaves_plain_text(self):
        self.assertEqual(strip_code_fences('  {"a": 1}  '), '{"a": 1}')

    def test_trailing_comma_next_to_colon_in_string_value(self):
        content = '{"summary": "Led team, Result: 20% growth", "skills": ["A",]}'
        self.assertEqual(parse_json(content), {"summary": "Led team, Result: 20% growth", "skills": ["A"]})

    def test_trailing_object_comma_next_to_colon_in_string_value(self):
        content = '{"description": "Shipped v2, Impact: reduced churn", "current": true,}'
        self.assertEqual(parse_json(content), {"description": "Shipped v2, Impact: reduced churn", "current": True})

    def test_bare_key_next_to_colon_in_string_value(self):
        content = '{skills: ["Go"], "summary": "Mentored five, Skills: Go, Rust"}'
        self.assertEqual(parse_json(content), {"skills": ["Go"], "summary": "Mentored five, Skills: Go, Rust"})

    def test_bare_value_next_to_colon_in_string_value(self):
        content = '{"title": Staff Engineer, "summary": "Led migration, Outcome: zero downtime"}'
        self.assertEqual(
            parse_json(content),
            {"title": "Staff Engineer", "summary": "Led migration, Outcome: zero downtime"},
        )

    def test_string_with_escaped_quote_is_left_alone(self):
        content = '{"quote": "He said \\"Result: done\\", then left", "tags": ["a",]}'
        self.assertEqual(parse_json(content), {"quote": 'He said "Result: done", then left', "tags": ["a"]})

    def test_repairs_skip_string_contents(self):
        self.assertEqual(drop_trailing_commas('{"a": "x,]"}'), '{"a": "x,]"}')
        self.assertEqual(quote_bare_keys('{"a": "b, c: d"}'), '{"a": "b, c: d"}')
        self.assertEqual(quote_bare_values('{"a": "b", "c": "d: e, f"}'), '{"a": "b", "c": "d: e, f"}')

    def test_repair_does_not_touch_urls_inside_strings(self):
        content = '{"website": "https://example.com", "skills": ["A",]}'
        self.assertEqual(
            json.loads(repair_json_text(content)),
            {"website": "https://example.com", "skills": ["A"]},
        )


if __name__ == "__main__":
    unittest.main()
