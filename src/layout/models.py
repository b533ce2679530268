from dataclasses import dataclass
from typing import Tuple

from src.github.models import Contributor, PullRequestStatus, RepoInfo

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Branch:
    name: str
    position: Vec3
    commit_count: int


@dataclass(frozen=True)
class Commit:
    message: str
    author: str
    date: str
    position: Vec3


@dataclass(frozen=True)
class PullRequest:
    # Endpoints are random samples, not derived from branches or commits
    start: Vec3
    end: Vec3
    status: PullRequestStatus
    title: str
    number: int
    user: str


@dataclass(frozen=True)
class RepoData:
    """One fetch cycle's entities after layout. Replaced wholesale, never edited."""
    branches: Tuple[Branch, ...]
    commits: Tuple[Commit, ...]
    contributors: Tuple[Contributor, ...]
    pull_requests: Tuple[PullRequest, ...]
    info: RepoInfo
