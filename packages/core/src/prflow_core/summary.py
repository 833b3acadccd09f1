"""Harvest the "Summary of Changes" block a review bot posts on a PR.

The bot body is scanned line by line with a small state machine:

    SEEKING ──"## <marker>"──▶ IN_SUMMARY ──"### Changelog"──▶ CHANGELOG_UNRESOLVED
    CHANGELOG_UNRESOLVED ──"<details>"──▶ IN_DETAILS ──"</details>"──▶ DONE
    CHANGELOG_UNRESOLVED ──"* item"──▶ IN_BULLETS ──blank / "##"──▶ DONE
    IN_BULLETS ──"<details>"──▶ IN_DETAILS

IN_SUMMARY passes lines through. CHANGELOG_UNRESOLVED emits nothing, so a
changelog heading followed by neither a details block nor a bullet list
yields only the relabelled "## Changelog" line.

Bodies without the level-2 marker heading fall back to everything before
the first "<details>" line.
"""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BOT_AUTHOR = "gemini-code-assist"
DEFAULT_MARKER = "Summary of Changes"

_CHANGELOG_HEADING = "### Changelog"
_CHANGELOG_OUTPUT = "## Changelog"
_DETAILS_OPEN = "<details>"
_DETAILS_CLOSE = "</details>"
_BULLET_RE = re.compile(r"^(\* |  \* )")
_BLANK_RUN_RE = re.compile(r"\n(?:[ \t]*\n)+")


@dataclass(frozen=True)
class ReviewRecord:
    """A review or comment body attached to a PR."""

    author: str
    body: str


class ScanState(enum.Enum):
    SEEKING = "seeking"
    IN_SUMMARY = "in_summary"
    CHANGELOG_UNRESOLVED = "changelog_unresolved"
    IN_DETAILS = "in_details"
    IN_BULLETS = "in_bullets"
    DONE = "done"


def find_summary_body(
    reviews: Iterable[ReviewRecord],
    comments: Iterable[ReviewRecord],
    bot_author: str = DEFAULT_BOT_AUTHOR,
    marker: str = DEFAULT_MARKER,
) -> str | None:
    """Return the first bot-authored body mentioning marker; reviews are searched before comments."""
    for source, records in (("reviews", reviews), ("comments", comments)):
        for record in records:
            if record.author == bot_author and marker in (record.body or ""):
                logger.debug("Found %s summary in %s", bot_author, source)
                return record.body
        logger.debug("No %s summary in %s", bot_author, source)
    return None


def _step(state: ScanState, line: str, marker_heading: str) -> tuple[ScanState, list[str]]:
    """Advance the scanner by one line, returning the next state and the lines to emit."""
    if state is ScanState.SEEKING:
        if line == marker_heading:
            return ScanState.IN_SUMMARY, []
        return state, []

    if state is ScanState.IN_SUMMARY:
        if line == _CHANGELOG_HEADING:
            return ScanState.CHANGELOG_UNRESOLVED, [_CHANGELOG_OUTPUT]
        return state, [line]

    if line.startswith(_DETAILS_OPEN) and state is not ScanState.IN_DETAILS:
        return ScanState.IN_DETAILS, ["", line]

    if state is ScanState.CHANGELOG_UNRESOLVED:
        if _BULLET_RE.match(line):
            return ScanState.IN_BULLETS, [line]
        return state, []

    if state is ScanState.IN_BULLETS:
        if not line.strip() or line.startswith("##"):
            return ScanState.DONE, []
        return state, [line]

    if state is ScanState.IN_DETAILS:
        if line.startswith(_DETAILS_CLOSE):
            return ScanState.DONE, [line]
        return state, [line]

    return state, []


def scan_summary(body: str, marker: str = DEFAULT_MARKER) -> list[str]:
    """Run the structured scan over body and return the emitted lines."""
    marker_heading = f"## {marker}"
    state = ScanState.SEEKING
    emitted: list[str] = []
    for line in body.splitlines():
        state, out = _step(state, line, marker_heading)
        emitted.extend(out)
        if state is ScanState.DONE:
            break
    if state is ScanState.CHANGELOG_UNRESOLVED:
        logger.debug("Changelog heading found without a details block or bullet list.")
    return emitted


def _head_before_details(body: str) -> list[str]:
    lines = []
    for line in body.splitlines():
        if line.startswith(_DETAILS_OPEN):
            break
        lines.append(line)
    return lines


def collapse_blank_lines(text: str) -> str:
    """Squeeze runs of blank lines down to one and trim surrounding blank lines."""
    return _BLANK_RUN_RE.sub("\n\n", text).strip("\n")


def slice_summary(body: str, marker: str = DEFAULT_MARKER) -> str:
    """Cut the publishable summary out of a bot body."""
    marker_heading = f"## {marker}"
    if marker_heading in body.splitlines():
        lines = scan_summary(body, marker)
    else:
        logger.debug("No %r heading; using the text before the first details block.", marker_heading)
        lines = _head_before_details(body)
    return collapse_blank_lines("\n".join(lines))


def extract_summary(
    reviews: Sequence[ReviewRecord],
    comments: Sequence[ReviewRecord],
    bot_author: str = DEFAULT_BOT_AUTHOR,
    marker: str = DEFAULT_MARKER,
) -> str | None:
    """Locate the bot summary and return its cleaned text, or None if the bot never posted one."""
    body = find_summary_body(reviews, comments, bot_author, marker)
    if body is None:
        return None
    return slice_summary(body, marker)
