"""PR creation and description-refresh orchestration.

    gather_branch_context()  commits → change type + issue number
    build_draft()            AI / manual / synthesized title → label
    submit_draft()           ensure label → create PR
    harvest_description()    bot summary → (translated) new PR body

Fatal conditions raise WorkflowError; the CLI turns them into a non-zero exit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prflow_core import git
from prflow_core.ai import translate_summary
from prflow_core.classifier import classify_change_type
from prflow_core.gh.pull_request import DEFAULT_HOST, create_pull, ensure_label_exists, get_review_records
from prflow_core.labels import LabelMapping, map_label
from prflow_core.summary import extract_summary
from prflow_core.title import extract_issue_number, is_usable_suggestion, parse_edited_message, resolve_title

if TYPE_CHECKING:
    from prflow_core.config import Settings
    from prflow_core.providers.base import BaseProvider

logger = logging.getLogger(__name__)


class WorkflowError(RuntimeError):
    """A condition that aborts the current command."""


@dataclass(frozen=True)
class BranchContext:
    """Everything derived from the commit range base..head."""

    head: str
    base: str
    base_ref: str
    commits: tuple[git.Commit, ...]
    change_type: str
    issue_number: int | None

    @property
    def subjects(self) -> list[str]:
        return [c.subject for c in self.commits]

    @property
    def latest_subject(self) -> str:
        return self.commits[0].subject


@dataclass(frozen=True)
class PullRequestDraft:
    title: str
    body: str
    label: str
    source: str  # "manual" | "ai" | "commits"


def resolve_repo_target(settings: Settings) -> git.RepoTarget:
    """Work out which hosted repository to talk to.

    An explicit ``repo`` setting ([HOST/]OWNER/NAME or a URL) wins; otherwise
    the current branch's upstream remote is used, then the configured remote.
    """
    if settings.repo:
        parts = settings.repo.strip("/").split("/")
        if "://" not in settings.repo and "@" not in settings.repo and len(parts) in (2, 3):
            if len(parts) == 2:
                return git.RepoTarget(host=settings.host or DEFAULT_HOST, owner=parts[0], name=parts[1])
            return git.RepoTarget(host=parts[0], owner=parts[1], name=parts[2])
        target = git.parse_remote_url(settings.repo)
    else:
        remote = git.upstream_remote() or settings.remote
        logger.debug("Using remote %r for repository detection", remote)
        target = git.parse_remote_url(git.remote_url(remote))

    if settings.host and settings.host != target.host:
        return git.RepoTarget(host=settings.host, owner=target.owner, name=target.name)
    return target


def gather_branch_context(settings: Settings, head: str | None = None, base: str | None = None) -> BranchContext:
    base = base or settings.base_branch
    try:
        head = head or git.current_branch()
    except git.GitError as e:
        raise WorkflowError(f"Could not determine the current branch: {e}") from e

    remote_base = f"{settings.remote}/{base}"
    if git.ref_exists(remote_base):
        base_ref = remote_base
    elif git.branch_exists(base):
        base_ref = base
    else:
        raise WorkflowError(f"Target branch '{base}' does not exist.")

    try:
        commits = git.commit_log(base_ref, head) if git.commit_count(base_ref, head) else []
    except git.GitError as e:
        raise WorkflowError(f"Could not list commits for {base_ref}..{head}: {e}") from e
    if not commits:
        raise WorkflowError(f"No commits between {base_ref} and {head}; nothing to open a PR for.")

    subjects = [c.subject for c in commits]
    return BranchContext(
        head=head,
        base=base,
        base_ref=base_ref,
        commits=tuple(commits),
        change_type=classify_change_type(subjects),
        issue_number=extract_issue_number(head, subjects),
    )


def build_draft(
    ctx: BranchContext,
    mapping: LabelMapping,
    ai_suggestion: str | None = None,
    edited_text: str | None = None,
) -> PullRequestDraft:
    """Resolve the final title and label. Raises WorkflowError if the title ends up empty."""
    manual_title, body = parse_edited_message(edited_text) if edited_text else ("", "")
    title = resolve_title(
        ai_suggestion=ai_suggestion,
        manual_title=manual_title,
        change_type=ctx.change_type,
        latest_subject=ctx.latest_subject,
        issue_number=ctx.issue_number,
        type_tokens=mapping.type_tokens,
    )
    if not title:
        raise WorkflowError("PR title must not be empty.")

    if manual_title:
        source = "manual"
    elif is_usable_suggestion(ai_suggestion):
        source = "ai"
    else:
        source = "commits"

    return PullRequestDraft(title=title, body=body, label=map_label(ctx.head, title, mapping), source=source)


def submit_draft(repo, settings: Settings, ctx: BranchContext, draft: PullRequestDraft, draft_pr: bool = False):
    """Make sure the label exists, then open the PR. Returns (pr, label_ok)."""
    label_ok = ensure_label_exists(repo, draft.label, settings.label_color, settings.label_description)
    if not label_ok:
        logger.warning("Label %r could not be ensured; the PR will be created anyway.", draft.label)
    pr = create_pull(
        repo,
        title=draft.title,
        body=draft.body,
        base=ctx.base,
        head=ctx.head,
        draft=draft_pr,
        label=draft.label,
    )
    return pr, label_ok


def harvest_description(pr, settings: Settings, translator: BaseProvider | None = None) -> str:
    """Build the new PR body from the bot's summary.

    Raises WorkflowError when the bot never posted a summary or nothing
    usable could be cut out of it.
    """
    reviews, comments = get_review_records(pr)
    logger.debug("PR #%s has %d review(s) and %d comment(s)", pr.number, len(reviews), len(comments))

    summary = extract_summary(reviews, comments, settings.bot_author, settings.summary_marker)
    if summary is None:
        raise WorkflowError(f"No '{settings.summary_marker}' from {settings.bot_author} found in reviews or comments.")
    if not summary.strip():
        raise WorkflowError("The bot summary was found but nothing could be extracted from it.")

    if translator is not None:
        summary = translate_summary(translator, summary, settings.translate_language)
    return summary
