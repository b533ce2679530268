import pytest

from src.github.errors import ValidationError
from src.github.urls import parse_repo_url


@pytest.mark.parametrize("url, owner, name", [
    ("https://github.com/octo/demo", "octo", "demo"),
    ("https://github.com/my-org/my.repo-name", "my-org", "my.repo-name"),
    ("https://github.com/user_1/repo_2", "user_1", "repo_2"),
])
def test_valid_urls(url, owner, name):
    ref = parse_repo_url(url)
    assert ref.owner == owner
    assert ref.name == name
    assert ref.full_name == f"{owner}/{name}"


@pytest.mark.parametrize("url", [
    "",
    "github.com/octo/demo",
    "http://github.com/octo/demo",
    "https:///octo/demo",
    "https://gitlab.com/octo/demo",
    "https://github.com/octo",
    "https://github.com/octo/demo/",
    "https://github.com/octo/demo/issues",
    "https://github.com/octo/demo?tab=readme",
    "https://github.com/octo/demo\n",
    " https://github.com/octo/demo",
    "https://github.com/oct.o/demo",
    "https://github.com/octö/demo",
])
def test_invalid_urls(url):
    with pytest.raises(ValidationError):
        parse_repo_url(url)


def test_non_string_rejected():
    with pytest.raises(ValidationError):
        parse_repo_url(None)


def test_custom_host():
    ref = parse_repo_url("https://git.example.org/team/tool", host="git.example.org")
    assert ref.full_name == "team/tool"
    with pytest.raises(ValidationError):
        parse_repo_url("https://github.com/team/tool", host="git.example.org")
