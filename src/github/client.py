import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from src.github.errors import FetchError
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
from src.github.urls import DEFAULT_HOST, parse_repo_url

logger = logging.getLogger(__name__)


class GitHubApi:
    """Async REST client for the GitHub API.

    Built once with an explicit token and shared read-only by every fetch.
    Every failure (transport error, timeout, non-2xx status) is raised as
    FetchError.
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {path} failed: {e}")
            raise FetchError(f"Request to {path} failed: {e}") from e

        if response.is_success:
            return response

        error = self._error_for(path, response)
        logger.warning(f"GitHub API error for {path}: {error.message}")
        raise error

    def _error_for(self, path: str, response: httpx.Response) -> FetchError:
        status = response.status_code
        try:
            upstream = response.json().get("message", "") or response.text
        except (ValueError, AttributeError):
            upstream = response.text

        if status == 401:
            return FetchError(f"Authentication failed. Check your GitHub token. ({upstream})", status)
        if status == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            reset = response.headers.get("X-RateLimit-Reset", "unknown")
            return FetchError(f"Rate limit exceeded (resets at {reset}): {upstream}", status)
        if status == 404:
            return FetchError(f"{upstream or 'Not Found'}: {path}", status)
        return FetchError(f"GitHub API returned {status} for {path}: {upstream}", status)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self):
        await self._client.aclose()


def _json(response: httpx.Response) -> Any:
    # Some endpoints (e.g. contributors of an empty repo) answer 204 with no body
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise FetchError(f"Invalid JSON from {response.request.url}: {e}") from e


def _json_list(response: httpx.Response) -> List[Dict[str, Any]]:
    data = _json(response)
    if data is None:
        return []
    if not isinstance(data, list):
        raise FetchError(f"Expected a list from {response.request.url}, got {type(data).__name__}")
    return data


def last_page_number(links: Dict[str, Dict[str, str]]) -> int:
    """Returns the page number of the rel="last" link, or 0 if there is none."""
    last = links.get("last")
    if not last or not last.get("url"):
        return 0
    page = httpx.URL(last["url"]).params.get("page")
    if page and page.isdigit():
        return int(page)
    return 0


def commit_count_from_response(response: httpx.Response) -> int:
    """Approximates a branch's commit count from a per_page=1 commit listing.

    With one commit per page the last page number equals the number of
    commits. A branch whose history fits on a single page has no Link header
    and therefore reports 0.
    """
    commits = _json_list(response)
    if not commits:
        return 0
    if not isinstance(commits[0], dict):
        raise FetchError(
            f"Expected a commit object from {response.request.url}, got {type(commits[0]).__name__}"
        )
    if not commits[0].get("sha"):
        return 0
    return last_page_number(response.links)


def to_commit_record(data: Dict[str, Any]) -> CommitRecord:
    commit = data.get("commit") or {}
    git_author = commit.get("author") or {}
    account = data.get("author") or {}
    return CommitRecord(
        message=commit.get("message", ""),
        author=account.get("login") or git_author.get("name") or "Unknown",
        date=git_author.get("date") or "",
    )


def pull_request_status(data: Dict[str, Any]) -> PullRequestStatus:
    if data.get("merged_at"):
        return PullRequestStatus.MERGED
    if data.get("closed_at"):
        return PullRequestStatus.CLOSED
    return PullRequestStatus.OPEN


def to_pull_request_record(data: Dict[str, Any]) -> PullRequestRecord:
    user = data.get("user") or {}
    return PullRequestRecord(
        status=pull_request_status(data),
        title=data.get("title", ""),
        number=data["number"],
        user=user.get("login", ""),
    )


def to_contributor(data: Dict[str, Any]) -> Contributor:
    return Contributor(
        login=data.get("login", ""),
        avatar_url=data.get("avatar_url", ""),
        contributions=data.get("contributions", 0),
    )


def to_repo_info(data: Dict[str, Any]) -> RepoInfo:
    return RepoInfo(
        full_name=data["full_name"],
        description=data.get("description") or "",
        star_count=data.get("stargazers_count", 0),
        fork_count=data.get("forks_count", 0),
        open_issue_count=data.get("open_issues_count", 0),
    )


class RepositoryClient:
    """Retrieves everything one visualization snapshot needs."""

    COMMIT_LIMIT = 20
    PULL_REQUEST_LIMIT = 10

    def __init__(self, api: GitHubApi, host: str = DEFAULT_HOST):
        self.api = api
        self.host = host

    async def fetch(self, url: str) -> RepositoryPayload:
        """Validates `url` and fetches all collections.

        Raises ValidationError before any request is made, and FetchError if
        any request fails. There is no partial result.
        """
        repo = parse_repo_url(url, self.host)
        base = f"/repos/{repo.owner}/{repo.name}"
        logger.info(f"Fetching repository data for {repo.full_name}")

        branches_res, commits_res, contributors_res, repo_res, pulls_res = await asyncio.gather(
            self.api.get(f"{base}/branches"),
            self.api.get(f"{base}/commits", {"per_page": self.COMMIT_LIMIT}),
            self.api.get(f"{base}/contributors"),
            self.api.get(base),
            self.api.get(f"{base}/pulls", {"state": "all", "per_page": self.PULL_REQUEST_LIMIT}),
        )

        try:
            branch_names = [branch["name"] for branch in _json_list(branches_res)]
            commits = tuple(to_commit_record(c) for c in _json_list(commits_res))
            contributors = tuple(to_contributor(c) for c in _json_list(contributors_res))
            pull_requests = tuple(to_pull_request_record(p) for p in _json_list(pulls_res))
            repo_data = _json(repo_res)
            if not isinstance(repo_data, dict):
                raise FetchError(f"Expected repository metadata for {repo.full_name}")
            info = to_repo_info(repo_data)
        except (KeyError, TypeError, AttributeError) as e:
            raise FetchError(f"Unexpected response shape for {repo.full_name}: {e}") from e

        try:
            counts = await asyncio.gather(
                *(self._branch_commit_count(repo, name) for name in branch_names)
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise FetchError(f"Unexpected branch commit listing for {repo.full_name}: {e}") from e
        branches = tuple(
            BranchRecord(name=name, commit_count=count)
            for name, count in zip(branch_names, counts)
        )

        logger.info(
            f"Fetched {repo.full_name}: {len(branches)} branches, {len(commits)} commits, "
            f"{len(contributors)} contributors, {len(pull_requests)} pull requests"
        )
        return RepositoryPayload(
            repo=repo,
            branches=branches,
            commits=commits,
            contributors=contributors,
            pull_requests=pull_requests,
            info=info,
        )

    async def _branch_commit_count(self, repo: RepoRef, branch: str) -> int:
        response = await self.api.get(
            f"/repos/{repo.owner}/{repo.name}/commits",
            {"sha": branch, "per_page": 1},
        )
        return commit_count_from_response(response)
