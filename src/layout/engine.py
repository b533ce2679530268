"""Deterministic placement of repository entities in 3D space.

Every position except pull-request endpoints is a pure function of the
entity's index and the size of its collection, so laying out the same
collection twice gives identical coordinates.
"""
import math
import random
from typing import Optional, Sequence, Tuple

from src.github.models import BranchRecord, CommitRecord, Contributor, PullRequestRecord, RepositoryPayload
from src.layout.models import Branch, Commit, PullRequest, RepoData, Vec3

BRANCH_RADIUS = 3.0
BRANCH_HEIGHT = 2.0
CONTRIBUTOR_RADIUS = 5.0
CONTRIBUTOR_HEIGHT = 4.0
COMMIT_RADIUS = 1.5
COMMIT_ANGLE_STEP = 0.5
COMMIT_DROP = 0.5
PULL_REQUEST_RADIUS = 3.0
PULL_REQUEST_MAX_HEIGHT = 2.0


def ring_position(i: int, n: int, radius: float, height: float) -> Vec3:
    """Position `i` of `n` evenly spaced points on a horizontal circle."""
    if n <= 0:
        raise ValueError(f"Cannot place index {i} on a ring of {n} points")
    angle = i * (math.pi * 2 / n)
    return (math.cos(angle) * radius, height, math.sin(angle) * radius)


def branch_position(i: int, n: int) -> Vec3:
    return ring_position(i, n, BRANCH_RADIUS, BRANCH_HEIGHT)


def contributor_position(i: int, n: int) -> Vec3:
    return ring_position(i, n, CONTRIBUTOR_RADIUS, CONTRIBUTOR_HEIGHT)


def commit_position(i: int) -> Vec3:
    # Descending spiral: index 0 (newest) sits at the top
    angle = i * COMMIT_ANGLE_STEP
    return (math.cos(angle) * COMMIT_RADIUS, -i * COMMIT_DROP, math.sin(angle) * COMMIT_RADIUS)


def contributor_scale(contributions: int) -> float:
    """Render size hint for a contributor, clamped to [0.3, 1]."""
    return min(1.0, max(0.3, contributions / 1000))


def layout_branches(records: Sequence[BranchRecord]) -> Tuple[Branch, ...]:
    n = len(records)
    return tuple(
        Branch(name=record.name, position=branch_position(i, n), commit_count=record.commit_count)
        for i, record in enumerate(records)
    )


def layout_commits(records: Sequence[CommitRecord]) -> Tuple[Commit, ...]:
    return tuple(
        Commit(message=record.message, author=record.author, date=record.date, position=commit_position(i))
        for i, record in enumerate(records)
    )


def layout_contributors(contributors: Sequence[Contributor]) -> Tuple[Vec3, ...]:
    n = len(contributors)
    return tuple(contributor_position(i, n) for i in range(n))


def random_endpoint(rng: Optional[random.Random] = None) -> Vec3:
    """Samples a point at radius 3 with a uniform angle and height in [0, 2).

    Not reproducible: consumers that need stable pull-request arcs must keep
    the snapshot rather than lay the data out again.
    """
    rng = rng or random
    angle = rng.random() * math.pi * 2
    height = rng.random() * PULL_REQUEST_MAX_HEIGHT
    return (math.cos(angle) * PULL_REQUEST_RADIUS, height, math.sin(angle) * PULL_REQUEST_RADIUS)


def layout_pull_requests(
    records: Sequence[PullRequestRecord], rng: Optional[random.Random] = None
) -> Tuple[PullRequest, ...]:
    return tuple(
        PullRequest(
            start=random_endpoint(rng),
            end=random_endpoint(rng),
            status=record.status,
            title=record.title,
            number=record.number,
            user=record.user,
        )
        for record in records
    )


def layout_repository(payload: RepositoryPayload, rng: Optional[random.Random] = None) -> RepoData:
    # Contributors carry no position; the scene assembler places them
    return RepoData(
        branches=layout_branches(payload.branches),
        commits=layout_commits(payload.commits),
        contributors=tuple(payload.contributors),
        pull_requests=layout_pull_requests(payload.pull_requests, rng),
        info=payload.info,
    )
