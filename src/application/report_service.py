import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import aiohttp

from src.application.stats_service import StatsService
from src.application.table_renderer import render_table
from src.domain.catalog import COMMUNITY_TAGS, MAIN_REPOSITORIES, SDKS
from src.domain.models import (
    INVALID_DATE,
    NO_RELEASES,
    CommunityStat,
    RepoIdentifier,
    RepoSnapshot,
    ReportSection,
)

logger = logging.getLogger(__name__)

MAIN_REPO_HEADERS = ["Project", "Stars", "Forks", "Weekly Commits", "Open Issues", "License", "Last Release"]
SDK_HEADERS = ["SDK", "Stars", "Forks", "Weekly Commits", "Last Release"]
COMMUNITY_HEADERS = ["Tag", "Questions"]
# Limit concurrent connections so a report run does not trip secondary rate limits
CONNECTOR_LIMIT = 10


def format_count(value: Any) -> str:
    """Thousands-separated integer, or the value unchanged when it is a sentinel."""
    if isinstance(value, int):
        return f"{value:,}"
    return str(value)


def format_release(value: str) -> str:
    # Anything that is not a date reads as "Invalid Date" and renders as "No Release"
    if value in (NO_RELEASES, INVALID_DATE):
        return INVALID_DATE
    return value


class ReportService:
    """
    Orchestrates one report run: main repositories, SDKs per language, then community tags.
    Groups are fetched one after the other; entries within a group are fetched concurrently.
    """

    def __init__(
            self,
            stats_service: StatsService,
            output_dir: Optional[Path] = None,
            repositories: Sequence[RepoIdentifier] = MAIN_REPOSITORIES,
            sdks: Dict[str, List[RepoIdentifier]] = SDKS,
            tags: Sequence[str] = COMMUNITY_TAGS,
            clock: Callable[[], datetime] = datetime.now,
    ):
        self.stats_service = stats_service
        self.output_dir = Path(output_dir) if output_dir is not None else Path.cwd()
        self.repositories = repositories
        self.sdks = sdks
        self.tags = tags
        self.clock = clock

    async def generate_report(self) -> Path:
        """
        Fetches every metric, renders the markdown report and writes it to disk.

        Returns:
            Path: Location of the written report.
        """
        started_at = self.clock()
        logger.info(
            f"Generating report for {len(self.repositories)} repositories, "
            f"{sum(len(sdk_list) for sdk_list in self.sdks.values())} SDKs and {len(self.tags)} tags."
        )

        async with aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(limit=CONNECTOR_LIMIT),
        ) as session:
            sections = await self.collect_sections(session)

        content = self.render_report(sections, started_at)
        output_path = self.write_report(content, self.clock())
        logger.info(f"Report generated: {output_path}")
        return output_path

    async def collect_sections(self, session: aiohttp.ClientSession) -> List[ReportSection]:
        sections: List[ReportSection] = []

        main_snapshots = await self.stats_service.fetch_snapshots(session, self.repositories)
        sections.append(ReportSection(
            title="1. Main Repository Metrics",
            headers=MAIN_REPO_HEADERS,
            rows=[self._main_repo_row(snapshot) for snapshot in main_snapshots],
        ))

        sections.append(ReportSection(title="2. SDK Statistics", headers=[]))
        for language, sdk_list in self.sdks.items():
            sdk_snapshots = await self.stats_service.fetch_snapshots(session, sdk_list)
            sections.append(ReportSection(
                title=f"{language.upper()} SDKs",
                level=3,
                headers=SDK_HEADERS,
                rows=[self._sdk_row(snapshot) for snapshot in sdk_snapshots],
            ))

        community_stats = await self.stats_service.fetch_community_stats(session, self.tags)
        sections.append(ReportSection(
            title="3. Community Engagement Metrics",
            headers=COMMUNITY_HEADERS,
            rows=[self._community_row(stat) for stat in community_stats],
        ))
        return sections

    def render_report(self, sections: Sequence[ReportSection], now: datetime) -> str:
        report = f"# GitHub Repository Statistics ({now.strftime('%Y-%m-%d')})\n\n"

        for section in sections:
            report += f"{'#' * section.level} {section.title}\n\n"
            # Sections without headers are headings only
            if section.headers:
                report += render_table(section.headers, section.rows)
                report += "\n\n"

        return report.rstrip("\n") + "\n"

    def write_report(self, content: str, now: datetime) -> Path:
        file_name = f"github-stats-{now.strftime('%Y-%m-%d')}-{now.strftime('%H-%M-%S')}.md"
        output_path = self.output_dir / file_name
        output_path.write_text(content, encoding="utf-8")
        return output_path

    @staticmethod
    def _main_repo_row(snapshot: RepoSnapshot) -> List[str]:
        stats = snapshot.stats
        return [
            snapshot.repo.full_name,
            format_count(stats.stars),
            format_count(stats.forks),
            str(stats.weekly_commits),
            format_count(stats.open_issues),
            stats.license,
            format_release(stats.last_release),
        ]

    @staticmethod
    def _sdk_row(snapshot: RepoSnapshot) -> List[str]:
        stats = snapshot.stats
        return [
            snapshot.repo.full_name,
            format_count(stats.stars),
            format_count(stats.forks),
            str(stats.weekly_commits),
            format_release(stats.last_release),
        ]

    @staticmethod
    def _community_row(stat: CommunityStat) -> List[str]:
        return [stat.tag, format_count(stat.count)]
