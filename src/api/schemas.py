from typing import Dict, List, Optional
from pydantic import BaseModel

from src.api.theme import DisplayMode
from src.github.models import PullRequestStatus
from src.scene.store import SnapshotState

class VisualizeRequest(BaseModel):
    url: str

class BranchResponse(BaseModel):
    name: str
    position: List[float]
    commit_count: int

class CommitResponse(BaseModel):
    message: str
    author: str
    date: str
    position: List[float]

class ContributorResponse(BaseModel):
    login: str
    avatar_url: str
    contributions: int
    position: List[float]
    scale: float

class PullRequestResponse(BaseModel):
    number: int
    title: str
    user: str
    status: PullRequestStatus
    start: List[float]
    end: List[float]

class RepoInfoResponse(BaseModel):
    full_name: str
    description: str
    star_count: int
    fork_count: int
    open_issue_count: int

class TrailSegmentResponse(BaseModel):
    start: List[float]
    end: List[float]

class ArcResponse(BaseModel):
    number: int
    status: PullRequestStatus
    color: str
    points: List[List[float]]

class SceneResponse(BaseModel):
    branches: List[BranchResponse]
    commits: List[CommitResponse]
    contributors: List[ContributorResponse]
    pull_requests: List[PullRequestResponse]
    repo_info: RepoInfoResponse
    commit_trail: List[TrailSegmentResponse]
    pr_arcs: List[ArcResponse]
    summary: str

class StatusResponse(BaseModel):
    state: SnapshotState
    url: Optional[str] = None
    message: Optional[str] = None

class ThemeResponse(BaseModel):
    mode: DisplayMode
    colors: Dict[str, str]
