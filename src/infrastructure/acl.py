from datetime import datetime
from typing import Any, Dict, List, Optional

from src.domain.models import INVALID_DATE, NO_RELEASES, UNKNOWN_LICENSE, RepoStats

class GitHubTranslator:
    """
    Anti-corruption layer that translates raw GitHub REST JSON responses into RepoStats instances.
    """

    @staticmethod
    def to_domain(
        repo_data: Dict[str, Any],
        commit_activity: List[Dict[str, Any]],
        releases: List[Dict[str, Any]],
    ) -> RepoStats:
        """
        Builds a RepoStats from the repository metadata, commit activity series and latest release list.

        Args:
            repo_data (Dict[str, Any]): Body of GET /repos/{owner}/{repo}.
            commit_activity (List[Dict[str, Any]]): Body of GET /repos/{owner}/{repo}/stats/commit_activity.
            releases (List[Dict[str, Any]]): Body of GET /repos/{owner}/{repo}/releases.

        Returns:
            RepoStats: Counts missing from the response default to 0, a missing license to "Unknown".
        """
        license_data = repo_data.get('license') or {}

        return RepoStats(
            stars=repo_data.get('stargazers_count') or 0,
            forks=repo_data.get('forks_count') or 0,
            weekly_commits=GitHubTranslator.weekly_commits(commit_activity),
            open_issues=repo_data.get('open_issues_count') or 0,
            license=license_data.get('spdx_id') or UNKNOWN_LICENSE,
            last_release=GitHubTranslator.last_release(releases),
        )

    @staticmethod
    def weekly_commits(commit_activity: Optional[List[Dict[str, Any]]]) -> int:
        if not commit_activity:
            return 0
        return commit_activity[-1].get('total') or 0

    @staticmethod
    def last_release(releases: Optional[List[Dict[str, Any]]]) -> str:
        if not releases:
            return NO_RELEASES

        raw_date = releases[0].get('published_at')
        if not raw_date:
            return NO_RELEASES
        try:
            published_at = datetime.fromisoformat(str(raw_date).replace("Z", "+00:00"))
        except ValueError:
            return INVALID_DATE
        return GitHubTranslator.format_date(published_at)

    @staticmethod
    def format_date(value: datetime) -> str:
        """Formats a timestamp as M/D/YYYY in the local timezone."""
        local = value.astimezone()
        return f"{local.month}/{local.day}/{local.year}"
