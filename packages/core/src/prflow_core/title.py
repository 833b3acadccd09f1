"""PR title resolution.

A title comes from exactly one source, highest precedence first:

  1. the first line of a manual edit
  2. the AI suggestion (unless empty or the literal "null")
  3. a synthesized ``<type>: <latest commit subject> (#<issue>)``

and is then normalised once by collapse_duplicate_prefix() and trimmed.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

COMMENT_CHAR = "#"

_ISSUE_RE = re.compile(r"#(\d+)")
_DUPLICATE_ISSUE_RE = re.compile(r"( \(#\d+\))(?:\1)+$")

_EDIT_HELP = """\
# Please enter the PR title and body for your change.
# First line should be the title, followed by a blank line, then the body.
# Suggested format: {change_type}: Your title{issue}
# Lines starting with '#' will be ignored."""


def extract_issue_number(branch: str, subjects: Sequence[str]) -> int | None:
    """Return the first ``#<digits>`` reference in the branch name or commit subjects."""
    match = _ISSUE_RE.search(" ".join([branch, "\n".join(subjects)]))
    return int(match.group(1)) if match else None


def synthesize_title(change_type: str, latest_subject: str, issue_number: int | None = None) -> str:
    title = f"{change_type}: {latest_subject}"
    if issue_number is not None:
        title += f" (#{issue_number})"
    return title


def is_usable_suggestion(suggestion: str | None) -> bool:
    return bool(suggestion and suggestion.strip() and suggestion.strip() != "null")


def collapse_duplicate_prefix(title: str, type_tokens: Sequence[str]) -> str:
    """Repair titles that wrap an already-typed title in a second type prefix.

    Handles ``fix: ... feat(scope): rest`` (any two known tokens),
    ``fix: fix: rest`` and a repeated trailing issue reference such as
    ``(#12) (#12)``. Returns the original title when nothing changes or
    the repair would leave an empty string.
    """
    if not type_tokens:
        return title
    types = "|".join(re.escape(token) for token in type_tokens)

    fixed = re.sub(rf"^({types}): .*({types})\([^)]*\): ", r"\1: ", title, count=1)
    fixed = re.sub(rf"^({types}): (?:(?:{types})(?:\([^)]*\))?!?: )+", r"\1: ", fixed, count=1)
    fixed = _DUPLICATE_ISSUE_RE.sub(r"\1", fixed)

    if fixed and fixed != title:
        return fixed
    return title


def resolve_title(
    ai_suggestion: str | None,
    manual_title: str | None,
    change_type: str,
    latest_subject: str,
    issue_number: int | None,
    type_tokens: Sequence[str],
) -> str:
    """Return the final PR title. May be empty; callers must reject that."""
    if manual_title and manual_title.strip():
        title = manual_title.strip().splitlines()[0]
    elif is_usable_suggestion(ai_suggestion):
        title = ai_suggestion
    else:
        title = synthesize_title(change_type, latest_subject, issue_number)
    return collapse_duplicate_prefix(title, type_tokens).strip()


def build_edit_seed(title: str, change_type: str, issue_number: int | None = None) -> str:
    """Buffer shown in the editor when the user asks to edit the title by hand."""
    issue = f" (#{issue_number})" if issue_number is not None else ""
    return f"{title}\n\n" + _EDIT_HELP.format(change_type=change_type, issue=issue) + "\n"


def parse_edited_message(text: str) -> tuple[str, str]:
    """Split edited text into (title, body).

    Comment lines are dropped, the first remaining non-blank line is the
    title and the blank lines between it and the body are removed.
    """
    lines = [line for line in text.splitlines() if not line.lstrip().startswith(COMMENT_CHAR)]
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return "", ""

    title = lines[0].strip()
    body_lines = lines[1:]
    while body_lines and not body_lines[0].strip():
        body_lines.pop(0)
    return title, "\n".join(body_lines).rstrip()
