from typing import Any, List, Literal, Union
from pydantic import BaseModel, Field, ConfigDict

ERROR_SENTINEL = "Error"
NO_RELEASES = "No releases"
INVALID_DATE = "Invalid Date"
UNKNOWN_LICENSE = "Unknown"


class RepoIdentifier(BaseModel):
    """Owner/name pair of a GitHub repository."""
    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Login name of the repository owner")
    name: str = Field(..., description="Name of the repository")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class RepoStats(BaseModel):
    """
    Immutable metrics snapshot of a repository whose every read succeeded.
    Fields missing from the API response are already defaulted to 0 / "Unknown".
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["ok"] = "ok"
    stars: int = Field(0, ge=0, description="Total number of stargazers")
    forks: int = Field(0, ge=0, description="Total number of forks")
    weekly_commits: int = Field(0, ge=0, description="Commits in the most recent week of activity")
    open_issues: int = Field(0, ge=0, description="Open issues and pull requests")
    license: str = Field(UNKNOWN_LICENSE, description="SPDX identifier of the license")
    last_release: str = Field(NO_RELEASES, description="Localized publish date of the latest release")

    @property
    def ok(self) -> bool:
        return True


class FailedRepoStats(BaseModel):
    """
    Placeholder record for a repository whose stats could not be fetched.
    Every field carries the "Error" sentinel so the whole row degrades together.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    stars: Literal["Error"] = ERROR_SENTINEL
    forks: Literal["Error"] = ERROR_SENTINEL
    weekly_commits: Literal["Error"] = ERROR_SENTINEL
    open_issues: Literal["Error"] = ERROR_SENTINEL
    license: Literal["Error"] = ERROR_SENTINEL
    last_release: Literal["Error"] = ERROR_SENTINEL

    @property
    def ok(self) -> bool:
        return False


RepoStatsResult = Union[RepoStats, FailedRepoStats]


class RepoSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    repo: RepoIdentifier
    stats: RepoStatsResult = Field(..., discriminator="kind")


class CommunityStat(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="Stack Overflow tag name")
    count: int = Field(0, ge=0, description="Number of questions carrying the tag")


class ReportSection(BaseModel):
    """A titled table of the markdown report."""
    model_config = ConfigDict(frozen=True)

    title: str
    level: int = Field(2, ge=1, le=6, description="Markdown heading level")
    headers: List[str]
    rows: List[List[Any]] = Field(default_factory=list)
