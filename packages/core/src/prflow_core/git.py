"""Thin wrappers over the ``git`` executable.

Every helper shells out once and returns parsed values; failures surface
as GitError carrying git's stderr.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# https://host/owner/repo(.git), ssh://git@host[:port]/owner/repo(.git), git@host:owner/repo(.git)
_URL_RE = re.compile(r"^(?:[a-z+]+://)?(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?[:/](?P<path>.+?)/?$")


class GitError(RuntimeError):
    """A git command failed or produced unusable output."""


@dataclass(frozen=True)
class Commit:
    sha: str
    subject: str


@dataclass(frozen=True)
class RepoTarget:
    """Hosting coordinates of a repository."""

    host: str
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


def git_available() -> bool:
    return shutil.which("git") is not None


def run_git(*args: str, check: bool = True) -> subprocess.CompletedProcess:
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(["git", *args], capture_output=True, text=True)
    except FileNotFoundError as e:
        raise GitError("git is not installed or not on PATH.") from e
    if check and result.returncode != 0:
        raise GitError(result.stderr.strip() or f"git {' '.join(args)} exited with {result.returncode}")
    return result


def current_branch() -> str:
    branch = run_git("symbolic-ref", "--short", "HEAD").stdout.strip()
    if not branch:
        raise GitError("Could not determine the current branch (detached HEAD?).")
    return branch


def ref_exists(ref: str) -> bool:
    return run_git("rev-parse", "--verify", "--quiet", ref, check=False).returncode == 0


def branch_exists(branch: str) -> bool:
    return run_git("show-ref", "--verify", "--quiet", f"refs/heads/{branch}", check=False).returncode == 0


def commit_log(base: str, head: str) -> list[Commit]:
    """Commits reachable from head but not base, newest first."""
    output = run_git("log", f"{base}..{head}", "--pretty=format:%h%x09%s").stdout
    commits = []
    for line in output.splitlines():
        if not line.strip():
            continue
        sha, _, subject = line.partition("\t")
        commits.append(Commit(sha=sha, subject=subject))
    return commits


def commit_count(base: str, head: str) -> int:
    output = run_git("rev-list", "--count", f"{base}..{head}").stdout.strip()
    try:
        return int(output)
    except ValueError:
        raise GitError(f"Unexpected output from git rev-list: {output!r}")


def upstream_remote(branch: str = "HEAD") -> str | None:
    """Remote name of the branch's upstream (``up/main`` -> ``up``), or None without one."""
    result = run_git("rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch}@{{upstream}}", check=False)
    ref = result.stdout.strip()
    if result.returncode != 0 or "/" not in ref:
        return None
    return ref.split("/", 1)[0]


def remote_url(remote: str) -> str:
    return run_git("remote", "get-url", remote).stdout.strip()


def parse_remote_url(url: str) -> RepoTarget:
    """Split a remote URL into host, owner and repository name.

    ``git@github.com:owner/repo.git``  ->  RepoTarget("github.com", "owner", "repo")
    """
    match = _URL_RE.match(url.strip())
    if not match:
        raise GitError(f"Unrecognised remote URL: {url!r}")
    path = match.group("path").removesuffix(".git").strip("/")
    owner, _, name = path.rpartition("/")
    if not owner or not name:
        raise GitError(f"Remote URL does not name an owner/repo: {url!r}")
    return RepoTarget(host=match.group("host"), owner=owner.rsplit("/", 1)[-1], name=name)


def push_branch(remote: str, branch: str) -> None:
    run_git("push", "-u", remote, branch)
