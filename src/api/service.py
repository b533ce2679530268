import logging
import random
from typing import Optional

from src.api.schemas import (
    ArcResponse,
    BranchResponse,
    CommitResponse,
    ContributorResponse,
    PullRequestResponse,
    RepoInfoResponse,
    SceneResponse,
    StatusResponse,
    TrailSegmentResponse,
)
from src.github.client import RepositoryClient
from src.github.errors import FetchError
from src.github.urls import parse_repo_url
from src.layout.engine import layout_repository
from src.scene.assembler import assemble_scene
from src.scene.models import SceneSnapshot
from src.scene.store import SnapshotStore

logger = logging.getLogger(__name__)


class SupersededRequest(Exception):
    """Raised when a newer request was submitted while this one was in flight."""
    pass


class VisualizationService:
    def __init__(
        self,
        client: RepositoryClient,
        store: Optional[SnapshotStore] = None,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.store = store or SnapshotStore()
        self.rng = rng

    async def visualize(self, url: str) -> SceneSnapshot:
        """Runs one fetch-and-layout cycle and publishes its snapshot.

        ValidationError is raised before the store is touched. On FetchError
        the store is marked failed and keeps its previous snapshot.
        """
        parse_repo_url(url, self.client.host)
        ticket = self.store.begin(url)

        try:
            payload = await self.client.fetch(url)
        except FetchError as e:
            self.store.fail(ticket, e.message)
            raise

        snapshot = assemble_scene(layout_repository(payload, self.rng))
        if not self.store.resolve(ticket, snapshot):
            raise SupersededRequest(f"Request for {url} was superseded by a newer one")
        logger.info(f"Snapshot ready for {payload.repo.full_name}: {snapshot.summary()}")
        return snapshot

    def current(self) -> Optional[SceneResponse]:
        if self.store.snapshot is None:
            return None
        return self.to_response(self.store.snapshot)

    def get_status(self) -> StatusResponse:
        status = self.store.status
        return StatusResponse(state=status.state, url=status.url, message=status.message)

    def to_response(self, snapshot: SceneSnapshot) -> SceneResponse:
        info = snapshot.repo_info
        return SceneResponse(
            branches=[
                BranchResponse(name=b.name, position=list(b.position), commit_count=b.commit_count)
                for b in snapshot.branches
            ],
            commits=[
                CommitResponse(message=c.message, author=c.author, date=c.date, position=list(c.position))
                for c in snapshot.commits
            ],
            contributors=[
                ContributorResponse(
                    login=p.contributor.login,
                    avatar_url=p.contributor.avatar_url,
                    contributions=p.contributor.contributions,
                    position=list(p.position),
                    scale=p.scale,
                )
                for p in snapshot.contributors
            ],
            pull_requests=[
                PullRequestResponse(
                    number=pr.number,
                    title=pr.title,
                    user=pr.user,
                    status=pr.status,
                    start=list(pr.start),
                    end=list(pr.end),
                )
                for pr in snapshot.pull_requests
            ],
            repo_info=RepoInfoResponse(
                full_name=info.full_name,
                description=info.description,
                star_count=info.star_count,
                fork_count=info.fork_count,
                open_issue_count=info.open_issue_count,
            ),
            commit_trail=[
                TrailSegmentResponse(start=list(s.start), end=list(s.end))
                for s in snapshot.commit_trail
            ],
            pr_arcs=[
                ArcResponse(
                    number=arc.number,
                    status=arc.status,
                    color=arc.color,
                    points=[list(p) for p in arc.points],
                )
                for arc in snapshot.pr_arcs
            ],
            summary=snapshot.summary(),
        )
