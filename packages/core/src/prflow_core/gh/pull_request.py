from __future__ import annotations

import logging

from github import Auth, Github, GithubException, UnknownObjectException

from prflow_core.git import RepoTarget
from prflow_core.summary import ReviewRecord

logger = logging.getLogger(__name__)

DEFAULT_HOST = "github.com"
DEFAULT_LABEL_COLOR = "0366d6"

_BOT_SUFFIX = "[bot]"


def api_base_url(host: str) -> str | None:
    """REST endpoint for a GitHub Enterprise host; None for github.com."""
    if host in (DEFAULT_HOST, "api.github.com"):
        return None
    return f"https://{host}/api/v3"


def get_repo(target: RepoTarget, token: str):
    kwargs = {}
    base_url = api_base_url(target.host)
    if base_url:
        kwargs["base_url"] = base_url
    return Github(auth=Auth.Token(token), **kwargs).get_repo(target.slug)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def find_pulls_for_branch(repo, owner: str, branch: str, state: str = "open") -> list:
    """Open PRs whose head is owner:branch."""
    return list(repo.get_pulls(state=state, head=f"{owner}:{branch}"))


def create_pull(repo, title: str, body: str, base: str, head: str, draft: bool = False, label: str | None = None):
    pr = repo.create_pull(title=title, body=body, base=base, head=head, draft=draft)
    if label:
        try:
            pr.add_to_labels(label)
        except GithubException as e:
            logger.warning("Could not add label %r to PR #%d: %s", label, pr.number, e)
    return pr


def update_body(pr, body: str) -> None:
    pr.edit(body=body)


def _login(user) -> str:
    login = getattr(user, "login", None) or ""
    return login.removesuffix(_BOT_SUFFIX)


def get_review_records(pr) -> tuple[list[ReviewRecord], list[ReviewRecord]]:
    """Return (reviews, comments) for a PR as ReviewRecords.

    App accounts report their login as ``name[bot]`` through the REST API;
    the suffix is dropped so records carry the plain account name.
    """
    reviews = [ReviewRecord(author=_login(r.user), body=r.body or "") for r in pr.get_reviews()]
    comments = [ReviewRecord(author=_login(c.user), body=c.body or "") for c in pr.get_issue_comments()]
    return reviews, comments


def label_exists(repo, name: str) -> bool:
    try:
        repo.get_label(name)
    except UnknownObjectException:
        return False
    return True


def create_label(repo, name: str, color: str = DEFAULT_LABEL_COLOR, description: str = "") -> None:
    repo.create_label(name=name, color=color, description=description)


def ensure_label_exists(repo, name: str, color: str = DEFAULT_LABEL_COLOR, description: str = "") -> bool:
    """Create the label if it is missing. Returns False only if it still does not exist.

    Never raises for GitHub errors: a missing label must not block PR creation.
    """
    try:
        if label_exists(repo, name):
            return True
    except GithubException as e:
        logger.warning("Could not look up label %r: %s", name, e)

    logger.info("Label %r does not exist, creating it.", name)
    try:
        create_label(repo, name, color, description)
        return True
    except GithubException as e:
        # The label may have been created concurrently.
        try:
            if label_exists(repo, name):
                return True
        except GithubException as recheck_error:
            logger.debug("Label re-check for %r failed: %s", name, recheck_error)
        logger.warning("Could not create label %r: %s", name, e)
        return False
