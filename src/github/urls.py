import re

from src.github.errors import ValidationError
from src.github.models import RepoRef

DEFAULT_HOST = "github.com"


def parse_repo_url(url: str, host: str = DEFAULT_HOST) -> RepoRef:
    """Parses 'https://<host>/<owner>/<repo>' into a RepoRef.

    The whole string must match; anything else (other schemes, extra path
    segments, trailing slashes, query strings) raises ValidationError.
    """
    if not isinstance(url, str):
        raise ValidationError(f"Repository URL must be a string, got {type(url).__name__}")

    pattern = rf"https://{re.escape(host)}/([\w-]+)/([\w.-]+)"
    match = re.fullmatch(pattern, url, flags=re.ASCII)
    if not match:
        raise ValidationError(
            f"Please enter a valid repository URL (e.g., https://{host}/username/repo), got {url!r}"
        )
    return RepoRef(owner=match.group(1), name=match.group(2))
