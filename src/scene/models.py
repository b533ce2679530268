from dataclasses import dataclass
from typing import Tuple

from src.github.models import Contributor, PullRequestStatus, RepoInfo
from src.layout.models import Branch, Commit, PullRequest, Vec3


@dataclass(frozen=True)
class PlacedContributor:
    contributor: Contributor
    position: Vec3
    scale: float


@dataclass(frozen=True)
class TrailSegment:
    start: Vec3
    end: Vec3


@dataclass(frozen=True)
class PullRequestArc:
    number: int
    status: PullRequestStatus
    color: str
    points: Tuple[Vec3, ...]


@dataclass(frozen=True)
class SceneSnapshot:
    """A fully assembled, read-only result of one fetch-and-layout cycle."""
    branches: Tuple[Branch, ...]
    commits: Tuple[Commit, ...]
    contributors: Tuple[PlacedContributor, ...]
    pull_requests: Tuple[PullRequest, ...]
    repo_info: RepoInfo
    commit_trail: Tuple[TrailSegment, ...]
    pr_arcs: Tuple[PullRequestArc, ...]

    def summary(self) -> str:
        return (
            f"{len(self.branches)} branches, {len(self.commits)} commits, "
            f"and {len(self.contributors)} contributors"
        )
