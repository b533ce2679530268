import asyncio
import logging
import os
import sys

from src.github.client import GitHubApi, RepositoryClient
from src.github.errors import FetchError, ValidationError
from src.layout.engine import layout_repository
from src.scene.assembler import assemble_scene

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

def fmt(position):
    return "(" + ", ".join(f"{v:6.2f}" for v in position) + ")"

async def build(url):
    api = GitHubApi(token=os.getenv("GITHUB_TOKEN"))
    try:
        payload = await RepositoryClient(api).fetch(url)
    finally:
        await api.aclose()
    return assemble_scene(layout_repository(payload))

def main():
    if len(sys.argv) != 2:
        print("Usage: python -m scripts.demo_scene https://github.com/<owner>/<repo>")
        return 1

    try:
        scene = asyncio.run(build(sys.argv[1]))
    except (ValidationError, FetchError) as e:
        print(f"Error: {e}")
        return 1

    info = scene.repo_info
    print(f"{info.full_name} - {info.description}")
    print(f"Stars {info.star_count}  Forks {info.fork_count}  Issues {info.open_issue_count}")

    print("\nBranches:")
    for b in scene.branches:
        print(f"* {b.name:<30} {fmt(b.position)}  ~{b.commit_count} commits")

    print("\nCommits (newest first):")
    for c in scene.commits:
        print(f"* {fmt(c.position)} {c.author}: {c.message.splitlines()[0] if c.message else ''}")

    print("\nContributors:")
    for p in scene.contributors:
        print(f"* {p.contributor.login:<20} {fmt(p.position)}  {p.contributor.contributions} contributions")

    print("\nPull requests:")
    for arc in scene.pr_arcs:
        print(f"* #{arc.number} {arc.status.value:<6} {arc.color}  {len(arc.points)} arc points")

    print(f"\n{scene.summary()}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
