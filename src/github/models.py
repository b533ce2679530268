from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class PullRequestStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


@dataclass(frozen=True)
class RepoRef:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class BranchRecord:
    name: str
    # Approximated from the pagination header, see RepositoryClient
    commit_count: int = 0


@dataclass(frozen=True)
class CommitRecord:
    message: str
    author: str
    date: str


@dataclass(frozen=True)
class PullRequestRecord:
    status: PullRequestStatus
    title: str
    number: int
    user: str


@dataclass(frozen=True)
class Contributor:
    login: str
    avatar_url: str
    contributions: int


@dataclass(frozen=True)
class RepoInfo:
    full_name: str
    description: str
    star_count: int
    fork_count: int
    open_issue_count: int


@dataclass(frozen=True)
class RepositoryPayload:
    """Everything one fetch cycle returns, unpositioned and in source order."""
    repo: RepoRef
    branches: Tuple[BranchRecord, ...]
    commits: Tuple[CommitRecord, ...]
    contributors: Tuple[Contributor, ...]
    pull_requests: Tuple[PullRequestRecord, ...]
    info: RepoInfo
