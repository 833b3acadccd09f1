"""Branch change-type classification from commit subjects."""

from __future__ import annotations

from collections.abc import Sequence

# Full conventional-commit vocabulary understood by the title and label steps.
CHANGE_TYPES = ("build", "ci", "docs", "feat", "fix", "perf", "refactor", "style", "test")

DEFAULT_CHANGE_TYPE = "feat"

# Checked in order; the first category with a keyword hit wins, so a branch
# mentioning both "fix" and "feature" is classified as a fix.
_KEYWORD_PRIORITY: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("fix", ("fix", "bug", "hotfix")),
    ("feat", ("feat", "feature")),
    ("refactor", ("refactor",)),
    ("docs", ("docs", "doc")),
)


def classify_change_type(subjects: Sequence[str]) -> str:
    """Return the conventional-commit type that best describes a set of commits.

    Matching is a case-insensitive substring search over all subjects joined
    together. Empty input or no keyword hit yields DEFAULT_CHANGE_TYPE.
    """
    haystack = "\n".join(subjects).lower()
    for change_type, keywords in _KEYWORD_PRIORITY:
        if any(keyword in haystack for keyword in keywords):
            return change_type
    return DEFAULT_CHANGE_TYPE
