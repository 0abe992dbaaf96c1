import unittest

from infrastructure.http.mappers import (
    to_repository_created,
    to_repository_summaries,
    to_repository_summary,
)


SUMMARY_FIELDS = {
    "id",
    "name",
    "full_name",
    "description",
    "private",
    "html_url",
    "default_branch",
    "updated_at",
    "visibility",
    "language",
    "stargazers_count",
}
CREATED_FIELDS = {
    "id",
    "name",
    "full_name",
    "description",
    "private",
    "html_url",
    "default_branch",
    "created_at",
    "visibility",
}


def _raw_repository(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {
        "id": 42,
        "name": "demo",
        "full_name": "octocat/demo",
        "description": None,
        "private": False,
        "html_url": "https://github.com/octocat/demo",
        "default_branch": "main",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-02-01T00:00:00Z",
        "visibility": "public",
        "language": "Python",
        "stargazers_count": 7,
        "owner": {"login": "octocat"},
        "forks_count": 3,
    }
    raw.update(overrides)
    return raw


class ResponseMapperTests(unittest.TestCase):
    def test_summary_projects_exactly_the_listed_fields(self) -> None:
        summary = to_repository_summary(_raw_repository()).model_dump()

        self.assertEqual(set(summary), SUMMARY_FIELDS)
        self.assertEqual(summary["full_name"], "octocat/demo")
        self.assertEqual(summary["stargazers_count"], 7)
        self.assertIsNone(summary["description"])

    def test_created_projects_exactly_the_listed_fields(self) -> None:
        created = to_repository_created(_raw_repository()).model_dump()

        self.assertEqual(set(created), CREATED_FIELDS)
        self.assertEqual(created["created_at"], "2024-01-01T00:00:00Z")

    def test_absent_fields_become_null(self) -> None:
        summary = to_repository_summary({"id": 1}).model_dump()

        self.assertEqual(summary["id"], 1)
        self.assertTrue(all(summary[field] is None for field in SUMMARY_FIELDS - {"id"}))

    def test_values_pass_through_without_coercion(self) -> None:
        summary = to_repository_summary(_raw_repository(id="not-a-number")).model_dump(warnings=False)

        self.assertEqual(summary["id"], "not-a-number")

    def test_non_mapping_input_does_not_raise(self) -> None:
        summary = to_repository_summary("garbage").model_dump()

        self.assertEqual(set(summary), SUMMARY_FIELDS)
        self.assertTrue(all(value is None for value in summary.values()))

    def test_summaries_keep_list_length(self) -> None:
        summaries = to_repository_summaries([_raw_repository(id=index) for index in range(3)])

        self.assertEqual([summary.id for summary in summaries], [0, 1, 2])
        self.assertEqual(to_repository_summaries({"message": "not a list"}), [])


if __name__ == "__main__":
    unittest.main()
