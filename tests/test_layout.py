import math
import random

import pytest

from src.github.models import (
    BranchRecord,
    CommitRecord,
    Contributor,
    PullRequestRecord,
    PullRequestStatus,
    RepoInfo,
    RepoRef,
    RepositoryPayload,
)
from src.layout.engine import (
    branch_position,
    commit_position,
    contributor_position,
    contributor_scale,
    layout_branches,
    layout_commits,
    layout_contributors,
    layout_pull_requests,
    layout_repository,
    ring_position,
)


def branches(*names):
    return [BranchRecord(name=n, commit_count=i) for i, n in enumerate(names)]


def commits(*messages):
    return [CommitRecord(message=m, author="me", date="2024-01-01T00:00:00Z") for m in messages]


def test_two_branches_scenario():
    main, dev = layout_branches(branches("main", "dev"))

    assert main.name == "main"
    assert main.position == pytest.approx((3, 2, 0), abs=1e-12)
    assert dev.position == pytest.approx((-3, 2, 0), abs=1e-12)
    assert dev.commit_count == 1


@pytest.mark.parametrize("n", [1, 2, 3, 7, 30])
def test_branches_lie_on_circle(n):
    for b in layout_branches(branches(*[f"b{i}" for i in range(n)])):
        x, y, z = b.position
        assert x * x + z * z == pytest.approx(9)
        assert y == 2


@pytest.mark.parametrize("n", [1, 4, 9])
def test_branch_angular_periodicity(n):
    for i in range(n):
        assert branch_position(i + n, n) == pytest.approx(branch_position(i, n), abs=1e-9)


def test_empty_collections():
    assert layout_branches([]) == ()
    assert layout_commits([]) == ()
    assert layout_contributors([]) == ()
    assert layout_pull_requests([]) == ()


def test_ring_guards_zero_size():
    with pytest.raises(ValueError):
        ring_position(0, 0, 3, 2)


def test_commit_spiral_descends():
    laid_out = layout_commits(commits("c", "b", "a"))

    assert laid_out[0].position == pytest.approx((1.5, 0, 0))
    assert [c.position[1] for c in laid_out] == [0, -0.5, -1.0]
    assert laid_out[2].position == pytest.approx((math.cos(1.0) * 1.5, -1.0, math.sin(1.0) * 1.5))
    assert [c.message for c in laid_out] == ["c", "b", "a"]
    for c in laid_out:
        x, _, z = c.position
        assert x * x + z * z == pytest.approx(2.25)


def test_commit_position_uses_index_only():
    assert commit_position(4) == (math.cos(2.0) * 1.5, -2.0, math.sin(2.0) * 1.5)


def test_contributor_ring():
    people = [Contributor(login=f"u{i}", avatar_url="", contributions=i) for i in range(4)]
    positions = layout_contributors(people)

    assert len(positions) == 4
    assert positions[0] == pytest.approx((5, 4, 0))
    assert positions[1] == pytest.approx((0, 4, 5), abs=1e-12)
    assert contributor_position(2, 4) == pytest.approx((-5, 4, 0), abs=1e-12)


@pytest.mark.parametrize("contributions, expected", [(0, 0.3), (100, 0.3), (500, 0.5), (1000, 1.0), (5000, 1.0)])
def test_contributor_scale(contributions, expected):
    assert contributor_scale(contributions) == pytest.approx(expected)


def test_layout_is_deterministic():
    records = branches("main", "dev", "release")
    history = commits("x", "y", "z", "w")

    assert layout_branches(records) == layout_branches(records)
    assert layout_commits(history) == layout_commits(history)
    people = [Contributor(login=r.name, avatar_url="", contributions=1) for r in records]
    assert layout_contributors(people) == layout_contributors(people)


def test_pull_request_endpoints():
    records = [
        PullRequestRecord(status=PullRequestStatus.OPEN, title=f"pr {i}", number=i, user="ann")
        for i in range(50)
    ]
    laid_out = layout_pull_requests(records, random.Random(7))

    assert [pr.number for pr in laid_out] == list(range(50))
    for pr in laid_out:
        for x, y, z in (pr.start, pr.end):
            assert x * x + z * z == pytest.approx(9)
            assert 0 <= y < 2
    assert any(pr.start != pr.end for pr in laid_out)


def test_pull_request_endpoints_follow_rng():
    records = [PullRequestRecord(status=PullRequestStatus.MERGED, title="t", number=1, user="u")]
    assert layout_pull_requests(records, random.Random(1)) == layout_pull_requests(records, random.Random(1))


def test_layout_repository_keeps_contributors_unpositioned():
    people = (Contributor(login="ann", avatar_url="a", contributions=3),)
    payload = RepositoryPayload(
        repo=RepoRef("octo", "demo"),
        branches=tuple(branches("main")),
        commits=tuple(commits("a", "b")),
        contributors=people,
        pull_requests=(),
        info=RepoInfo("octo/demo", "", 1, 2, 3),
    )
    data = layout_repository(payload)

    assert data.contributors == people
    assert data.branches[0].position == pytest.approx((3, 2, 0))
    assert len(data.commits) == 2
    assert data.info.full_name == "octo/demo"
