import asyncio
import logging
from typing import List, Sequence

import aiohttp

from src.application.fanout import gather_ordered
from src.domain.models import CommunityStat, FailedRepoStats, RepoIdentifier, RepoSnapshot, RepoStatsResult
from src.infrastructure.acl import GitHubTranslator
from src.infrastructure.github_client import GitHubRestClient
from src.infrastructure.stackexchange_client import StackExchangeClient

logger = logging.getLogger(__name__)


class StatsService:
    """
    Fetches per-repository stats and per-tag community counts.

    Failures never leave this service: a repository that cannot be read becomes a
    FailedRepoStats record and a tag that cannot be read counts as 0.
    """

    def __init__(
            self,
            github_client: GitHubRestClient,
            stackexchange_client: StackExchangeClient,
    ):
        self.github_client = github_client
        self.stackexchange_client = stackexchange_client

    async def fetch_repo_stats(self, session: aiohttp.ClientSession, repo: RepoIdentifier) -> RepoStatsResult:
        """Issues the four reads behind one repository concurrently and normalizes the answers."""
        logger.info(f"Fetching stats for {repo.full_name}...")
        try:
            results = await asyncio.gather(
                self.github_client.get_repository(session, repo.owner, repo.name),
                self.github_client.get_commit_activity(session, repo.owner, repo.name),
                self.github_client.list_releases(session, repo.owner, repo.name, per_page=1),
                self.github_client.list_closed_issues(session, repo.owner, repo.name, per_page=1),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result

            repo_data, commit_activity, releases, _closed_issues = results
            logger.info(f"Successfully fetched data for {repo.full_name}")

            stats = GitHubTranslator.to_domain(repo_data, commit_activity, releases)
            logger.info(f"Stats for {repo.full_name}: {stats.model_dump(exclude={'kind'})}")
            return stats

        except Exception as e:
            logger.error(
                f"Error fetching stats for {repo.full_name}: "
                f"status={getattr(e, 'status', None)} "
                f"message={getattr(e, 'message', None) or e!r} "
                f"documentation_url={getattr(e, 'documentation_url', None)}"
            )
            return FailedRepoStats()

    async def fetch_tag_count(self, session: aiohttp.ClientSession, tag: str) -> int:
        try:
            data = await self.stackexchange_client.get_tag_info(session, tag)
            items = data.get('items') or []
            if not items:
                return 0
            count = items[0].get('count') or 0
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                logger.error(f"Unexpected Stack Overflow question count for {tag}: {count!r}")
                return 0
            return count
        except Exception as e:
            logger.error(f"Error fetching Stack Overflow stats for {tag}: {e!r}")
            return 0

    async def fetch_snapshots(
        self, session: aiohttp.ClientSession, repos: Sequence[RepoIdentifier]
    ) -> List[RepoSnapshot]:
        async def _snapshot(repo: RepoIdentifier) -> RepoSnapshot:
            return RepoSnapshot(repo=repo, stats=await self.fetch_repo_stats(session, repo))

        return await gather_ordered(_snapshot, repos)

    async def fetch_community_stats(self, session: aiohttp.ClientSession, tags: Sequence[str]) -> List[CommunityStat]:
        async def _stat(tag: str) -> CommunityStat:
            return CommunityStat(tag=tag, count=await self.fetch_tag_count(session, tag))

        return await gather_ordered(_stat, tags)
