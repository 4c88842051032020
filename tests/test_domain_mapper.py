import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from letterlab.schemas.analysis import PromptKind  # noqa: E402
from letterlab.schemas.structured import CoverLetterTemplate, JobMatch, StructuredResumeData  # noqa: E402
from letterlab.services.domain_mapper import (  # noqa: E402
    map_content_tags,
    map_cover_letter_stories,
    map_job_match,
    map_metrics,
    map_structured_resume,
    map_template,
    map_to_domain,
)


class StructuredResumeMappingTests(unittest.TestCase):
    def test_empty_object_maps_to_empty_record(self):
        result = map_structured_resume({})

        self.assertEqual(result.work_history, [])
        self.assertEqual(result.education, [])
        self.assertEqual(result.skills, [])
        self.assertEqual(result.achievements, [])
        self.assertIsNone(result.contact_info.email)
        self.assertIsNone(result.summary)

    def test_skills_only(self):
        result = map_structured_resume({"skills": ["A", "B"]})

        self.assertEqual(result.skills, ["A", "B"])
        self.assertEqual(result.work_history, [])

    def test_work_history_gets_synthesized_ids(self):
        result = map_structured_resume(
            {
                "workHistory": [
                    {"company": "Acme", "title": "Engineer", "startDate": "2019-01-01"},
                    {"id": "w-custom", "company": "Globex"},
                ]
            }
        )

        self.assertEqual([w.id for w in result.work_history], ["work_0", "w-custom"])
        self.assertEqual(result.work_history[0].company, "Acme")
        self.assertEqual(result.work_history[1].title, "")
        self.assertFalse(result.work_history[1].current)

    def test_wrong_types_fall_back_to_defaults(self):
        result = map_structured_resume(
            {
                "workHistory": "none",
                "education": [None, 7],
                "skills": {"python": True},
                "contactInfo": ["ada@example.com"],
                "achievements": ["Shipped v2", 3, None, ""],
            }
        )

        self.assertEqual(result.work_history, [])
        self.assertEqual([e.id for e in result.education], ["edu_0", "edu_1"])
        self.assertEqual(result.skills, [])
        self.assertIsNone(result.contact_info.email)
        self.assertEqual(result.achievements, ["Shipped v2", "3"])

    def test_non_object_input(self):
        self.assertIsInstance(map_structured_resume(None), StructuredResumeData)

    def test_stories_and_metrics(self):
        result = map_structured_resume(
            {
                "workHistory": [
                    {
                        "company": "Acme",
                        "current": "true",
                        "endDate": None,
                        "roleMetrics": [{"value": "+40%", "context": "revenue"}, "", {"context": "no value"}],
                        "stories": [
                            {"title": "Migration", "content": "Moved to k8s", "metrics": ["-30% cost"]},
                        ],
                    }
                ]
            }
        )

        work = result.work_history[0]
        self.assertTrue(work.current)
        self.assertIsNone(work.end_date)
        self.assertEqual(len(work.role_metrics), 1)
        self.assertEqual(work.role_metrics[0].type, "increase")
        self.assertEqual(work.role_metrics[0].parent_type, "role")
        story = work.stories[0]
        self.assertEqual(story.id, "work_0_story_0")
        self.assertTrue(story.linked_to_role)
        self.assertEqual(story.metrics[0].type, "decrease")
        self.assertEqual(story.metrics[0].parent_type, "story")

    def test_plain_metrics_key_is_used_for_role_metrics(self):
        result = map_structured_resume({"workHistory": [{"metrics": ["$2M pipeline"]}]})

        self.assertEqual(result.work_history[0].role_metrics[0].value, "$2M pipeline")
        self.assertEqual(result.work_history[0].role_metrics[0].type, "absolute")

    def test_categorised_skills_are_flattened(self):
        result = map_structured_resume(
            {"skills": ["Leadership", {"category": "Languages", "items": ["Python", "Go"]}]}
        )

        self.assertEqual(result.skills, ["Leadership", "Python", "Go"])
        self.assertEqual(result.skill_categories[0].category, "Languages")

    def test_serializes_with_camel_case_keys(self):
        payload = map_structured_resume({"workHistory": [{"company": "Acme"}]}).model_dump(by_alias=True)

        self.assertIn("workHistory", payload)
        self.assertIn("contactInfo", payload)
        self.assertIn("startDate", payload["workHistory"][0])

    def test_metric_declared_type_wins(self):
        metrics = map_metrics([{"value": "12", "type": "Decrease"}], "role")
        self.assertEqual(metrics[0].type, "decrease")


class OtherShapeMappingTests(unittest.TestCase):
    def test_cover_letter_stories(self):
        result = map_cover_letter_stories(
            {
                "paragraphs": [{"text": "Dear team", "function": "Intro"}, {"text": "Thanks", "function": "outro"}],
                "stories": [{"title": "Launch", "result": "Shipped", "metrics": ["3x"], "paragraphId": "p_0"}],
                "templateSignals": {"tone": "warm", "placeholderCount": "-2"},
            }
        )

        self.assertEqual([p.function for p in result.paragraphs], ["intro", "other"])
        self.assertEqual(result.paragraphs[1].id, "p_1")
        self.assertEqual(result.stories[0].id, "story_0")
        self.assertEqual(result.stories[0].paragraph_id, "p_0")
        self.assertEqual(result.template_signals.tone, "warm")
        self.assertEqual(result.template_signals.placeholder_count, 0)

    def test_template_defaults(self):
        result = map_template({"bodyParagraphs": [{"structure": "[ACHIEVEMENT]"}, {}]})

        self.assertEqual(result.intro.id, "intro")
        self.assertEqual(result.closer.id, "closer")
        self.assertEqual([b.id for b in result.body_paragraphs], ["body_0", "body_1"])
        self.assertEqual(result.overall_structure.total_paragraphs, 4)

    def test_job_match_score_is_clamped(self):
        self.assertEqual(map_job_match({"matchScore": 140}).match_score, 100)
        self.assertEqual(map_job_match({"matchScore": -5}).match_score, 0)
        self.assertEqual(map_job_match({"matchScore": "85%"}).match_score, 85)
        self.assertEqual(map_job_match({"matchScore": True}).match_score, 0)
        self.assertEqual(map_job_match({}).gap_areas, [])

    def test_content_tags_confidence(self):
        self.assertEqual(map_content_tags({"confidence": "HIGH"}).confidence, "high")
        self.assertEqual(map_content_tags({"confidence": "certain"}).confidence, "low")
        self.assertEqual(map_content_tags({"primaryTags": ["growth", 1]}).primary_tags, ["growth", "1"])

    def test_map_to_domain_dispatch(self):
        self.assertIsInstance(map_to_domain({}, PromptKind.LINKEDIN), StructuredResumeData)
        self.assertIsInstance(map_to_domain({}, "coverLetterTemplate"), CoverLetterTemplate)
        self.assertIsInstance(map_to_domain({}, PromptKind.JOB_MATCHING), JobMatch)


if __name__ == "__main__":
    unittest.main()
