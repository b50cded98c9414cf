import unittest
from datetime import datetime, timezone

from src.infrastructure.acl import GitHubTranslator


def _expected_local_date(value: datetime) -> str:
    local = value.astimezone()
    return f"{local.month}/{local.day}/{local.year}"


class TestGitHubTranslator(unittest.TestCase):
    def test_to_domain_maps_counts_license_and_release(self) -> None:
        repo_data = {
            "stargazers_count": 12345,
            "forks_count": 678,
            "open_issues_count": 90,
            "license": {"spdx_id": "MIT"},
        }
        activity = [{"total": 3}, {"total": 7}]
        releases = [{"published_at": "2024-03-15T12:00:00Z"}]

        stats = GitHubTranslator.to_domain(repo_data, activity, releases)

        self.assertTrue(stats.ok)
        self.assertEqual(stats.stars, 12345)
        self.assertEqual(stats.forks, 678)
        self.assertEqual(stats.open_issues, 90)
        self.assertEqual(stats.weekly_commits, 7)
        self.assertEqual(stats.license, "MIT")
        self.assertEqual(
            stats.last_release,
            _expected_local_date(datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)),
        )

    def test_missing_fields_default_to_zero_and_unknown(self) -> None:
        stats = GitHubTranslator.to_domain({"stargazers_count": None, "license": None}, [], [])

        self.assertEqual(stats.stars, 0)
        self.assertEqual(stats.forks, 0)
        self.assertEqual(stats.open_issues, 0)
        self.assertEqual(stats.weekly_commits, 0)
        self.assertEqual(stats.license, "Unknown")
        self.assertEqual(stats.last_release, "No releases")

    def test_weekly_commits_uses_last_week_of_series(self) -> None:
        activity = [{"total": n} for n in (1, 2, 3, 4, 42)]
        self.assertEqual(GitHubTranslator.weekly_commits(activity), 42)

    def test_empty_series_counts_zero_commits(self) -> None:
        self.assertEqual(GitHubTranslator.weekly_commits([]), 0)
        self.assertEqual(GitHubTranslator.weekly_commits(None), 0)

    def test_release_without_publish_date_is_no_releases(self) -> None:
        self.assertEqual(GitHubTranslator.last_release([{"published_at": None}]), "No releases")

    def test_unparseable_release_date_is_invalid_date(self) -> None:
        self.assertEqual(GitHubTranslator.last_release([{"published_at": "not-a-date"}]), "Invalid Date")
