from typing import Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from src.github.client import GitHubApi, RepositoryClient

OWNER = "octo"
REPO = "demo"
BASE = f"/repos/{OWNER}/{REPO}"
REPO_URL = f"https://github.com/{OWNER}/{REPO}"


def link_header(branch: str, last_page: int) -> str:
    url = f"https://api.github.com/repositories/1/commits?sha={branch}&per_page=1"
    return f'<{url}&page=2>; rel="next", <{url}&page={last_page}>; rel="last"'


class FakeGitHub:
    """Serves canned GitHub REST responses through httpx.MockTransport."""

    def __init__(self):
        self.branches = [{"name": "main"}, {"name": "dev"}]
        self.commits = [
            {
                "sha": "c3",
                "commit": {"message": "c", "author": {"name": "Ann", "date": "2024-03-03T00:00:00Z"}},
                "author": {"login": "ann"},
            },
            {
                "sha": "c2",
                "commit": {"message": "b", "author": {"name": "Bob", "date": "2024-03-02T00:00:00Z"}},
                "author": None,
            },
            {
                "sha": "c1",
                "commit": {"message": "a", "author": None},
                "author": None,
            },
        ]
        self.contributors = [
            {"login": "ann", "avatar_url": "https://avatars.example/ann", "contributions": 1500},
            {"login": "bob", "avatar_url": "https://avatars.example/bob", "contributions": 12},
        ]
        self.repo = {
            "full_name": f"{OWNER}/{REPO}",
            "description": None,
            "stargazers_count": 42,
            "forks_count": 7,
            "open_issues_count": 3,
        }
        self.pulls = [
            {"number": 3, "title": "Open one", "user": {"login": "ann"}, "merged_at": None, "closed_at": None},
            {"number": 2, "title": "Merged one", "user": {"login": "bob"},
             "merged_at": "2024-01-02T00:00:00Z", "closed_at": "2024-01-02T00:00:00Z"},
            {"number": 1, "title": "Closed one", "user": None, "merged_at": None, "closed_at": "2024-01-01T00:00:00Z"},
        ]
        # branch name -> last page of a per_page=1 listing; missing means no Link header
        self.branch_pages: Dict[str, int] = {"main": 120}
        self.failures: Dict[str, Tuple[int, dict, dict]] = {}
        self.requests: List[httpx.Request] = []

    def fail(self, path: str, status: int, message: str, headers: Optional[dict] = None):
        self.failures[path] = (status, {"message": message}, headers or {})

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        path = request.url.path
        params = request.url.params
        if path in self.failures:
            status, body, headers = self.failures[path]
            return httpx.Response(status, json=body, headers=headers)

        if path == f"{BASE}/branches":
            return httpx.Response(200, json=self.branches)
        if path == f"{BASE}/commits" and "sha" in params:
            branch = params["sha"]
            headers = {}
            if branch in self.branch_pages:
                headers["Link"] = link_header(branch, self.branch_pages[branch])
            return httpx.Response(200, json=[{"sha": f"{branch}-tip"}], headers=headers)
        if path == f"{BASE}/commits":
            return httpx.Response(200, json=self.commits)
        if path == f"{BASE}/contributors":
            if not self.contributors:
                return httpx.Response(204)
            return httpx.Response(200, json=self.contributors)
        if path == BASE:
            return httpx.Response(200, json=self.repo)
        if path == f"{BASE}/pulls":
            return httpx.Response(200, json=self.pulls)
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest_asyncio.fixture
async def repository_client(fake_github):
    api = GitHubApi(token="secret-token", transport=httpx.MockTransport(fake_github))
    yield RepositoryClient(api)
    await api.aclose()
