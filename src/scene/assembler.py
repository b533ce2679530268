from typing import Sequence, Tuple

from src.github.models import PullRequestStatus
from src.layout.engine import contributor_scale, layout_contributors
from src.layout.models import Commit, PullRequest, RepoData, Vec3
from src.scene.models import PlacedContributor, PullRequestArc, SceneSnapshot, TrailSegment

ARC_STEP = 0.1
ARC_LIFT = 2.0

STATUS_COLORS = {
    PullRequestStatus.OPEN: "#28a745",    # green
    PullRequestStatus.MERGED: "#6f42c1",  # purple
    PullRequestStatus.CLOSED: "#cb2431",  # red
}


def status_color(status: PullRequestStatus) -> str:
    return STATUS_COLORS[PullRequestStatus(status)]


def commit_trail(commits: Sequence[Commit]) -> Tuple[TrailSegment, ...]:
    """Connects each commit to the next older one; n commits give n - 1 segments."""
    return tuple(
        TrailSegment(start=commits[i].position, end=commits[i + 1].position)
        for i in range(len(commits) - 1)
    )


def pull_request_arc(start: Vec3, end: Vec3, step: float = ARC_STEP) -> Tuple[Vec3, ...]:
    """Samples a quadratic Bezier from `start` to `end`.

    The control point is the midpoint of the two ends lifted by ARC_LIFT on y.
    Parameters are k * step for k = 0..round(1 / step), capped at 1, with a
    final t = 1 added when step does not divide 1 evenly. Step 0.1 gives 11
    points; the first is always `start` and the last always `end`.
    """
    if step <= 0 or step > 1:
        raise ValueError(f"Arc step must be in (0, 1], got {step}")

    control = (
        (start[0] + end[0]) / 2,
        (start[1] + end[1]) / 2 + ARC_LIFT,
        (start[2] + end[2]) / 2,
    )
    # Integer sample count avoids float drift dropping the t = 1 endpoint
    samples = round(1 / step)
    params = [min(k * step, 1.0) for k in range(samples + 1)]
    if params[-1] < 1.0:
        params.append(1.0)
    points = []
    for t in params:
        a, b, c = (1 - t) * (1 - t), 2 * (1 - t) * t, t * t
        points.append(tuple(a * s + b * m + c * e for s, m, e in zip(start, control, end)))
    return tuple(points)


def _arc_for(pr: PullRequest) -> PullRequestArc:
    return PullRequestArc(
        number=pr.number,
        status=pr.status,
        color=status_color(pr.status),
        points=pull_request_arc(pr.start, pr.end),
    )


def assemble_scene(data: RepoData) -> SceneSnapshot:
    positions = layout_contributors(data.contributors)
    contributors = tuple(
        PlacedContributor(
            contributor=contributor,
            position=position,
            scale=contributor_scale(contributor.contributions),
        )
        for contributor, position in zip(data.contributors, positions)
    )
    return SceneSnapshot(
        branches=data.branches,
        commits=data.commits,
        contributors=contributors,
        pull_requests=data.pull_requests,
        repo_info=data.info,
        commit_trail=commit_trail(data.commits),
        pr_arcs=tuple(_arc_for(pr) for pr in data.pull_requests),
    )
