"""Tests for bot summary selection and slicing."""

from prflow_core.summary import (
    ReviewRecord,
    ScanState,
    _step,
    collapse_blank_lines,
    extract_summary,
    find_summary_body,
    scan_summary,
    slice_summary,
)

BOT = "gemini-code-assist"

DETAILS_BODY = """\
## Summary of Changes

Hello, this pull request adds a login page.

### Highlights

* **Login**: new form.

### Changelog

<details>
<summary>Click here to see the changelog</summary>

* src/login.py
  * Added form handling.
</details>

### Using Gemini Code Assist
More boilerplate.
"""

BULLET_BODY = """\
## Summary of Changes

Intro paragraph.



### Changelog
* **src/app.py**
  * Added X.
* **README.md**

## Footer
ignored
"""


def _bot(body):
    return ReviewRecord(author=BOT, body=body)


class TestFindSummaryBody:
    def test_reviews_searched_before_comments(self):
        reviews = [_bot("review Summary of Changes")]
        comments = [_bot("comment Summary of Changes")]
        assert find_summary_body(reviews, comments, BOT) == "review Summary of Changes"

    def test_falls_back_to_comments(self):
        reviews = [_bot("no marker here"), ReviewRecord(author="alice", body="Summary of Changes")]
        comments = [_bot("comment Summary of Changes")]
        assert find_summary_body(reviews, comments, BOT) == "comment Summary of Changes"

    def test_first_matching_record_wins(self):
        comments = [_bot("first Summary of Changes"), _bot("second Summary of Changes")]
        assert find_summary_body([], comments, BOT) == "first Summary of Changes"

    def test_none_when_bot_absent(self):
        records = [ReviewRecord(author="alice", body="## Summary of Changes")]
        assert find_summary_body(records, records, BOT) is None

    def test_custom_marker(self):
        assert find_summary_body([_bot("## Overview")], [], BOT, marker="Overview") == "## Overview"


class TestSliceSummary:
    def test_bullet_changelog_exact(self):
        body = "## Summary of Changes\n### Changelog\n* added X\n\nmore"
        assert slice_summary(body) == "## Changelog\n* added X"

    def test_details_changelog(self):
        result = slice_summary(DETAILS_BODY)
        assert result.startswith("Hello, this pull request adds a login page.")
        assert "### Highlights" in result
        assert "## Changelog\n\n<details>" in result
        assert result.endswith("</details>")
        assert "Using Gemini Code Assist" not in result
        assert "## Summary of Changes" not in result

    def test_bullet_list_stops_at_blank_line(self):
        result = slice_summary(BULLET_BODY)
        assert result == "Intro paragraph.\n\n## Changelog\n* **src/app.py**\n  * Added X.\n* **README.md**"

    def test_bullet_list_stops_at_heading(self):
        body = "## Summary of Changes\n### Changelog\n* a\n## Next\n* b"
        assert slice_summary(body) == "## Changelog\n* a"

    def test_no_changelog_passes_everything_through(self):
        body = "preamble\n## Summary of Changes\nline one\n\n\n\nline two\n<details>x</details>"
        assert slice_summary(body) == "line one\n\nline two\n<details>x</details>"

    def test_changelog_without_list_or_details_emits_only_heading(self):
        body = "## Summary of Changes\nintro\n### Changelog\nplain text\nmore text"
        assert slice_summary(body) == "intro\n## Changelog"

    def test_fallback_without_marker_heading(self):
        body = "Summary of Changes in prose\n\n\nSecond line\n<details>\nhidden\n</details>"
        assert slice_summary(body) == "Summary of Changes in prose\n\nSecond line"

    def test_fallback_without_details_keeps_everything(self):
        assert slice_summary("Summary of Changes\nall of it") == "Summary of Changes\nall of it"

    def test_marker_heading_must_be_whole_line(self):
        body = "## Summary of Changes (draft)\nkept\n<details>dropped"
        assert slice_summary(body) == "## Summary of Changes (draft)\nkept"


class TestScanStates:
    def test_seeking_ignores_text_before_marker(self):
        assert scan_summary("before\n## Summary of Changes\nafter") == ["after"]

    def test_unresolved_changelog_is_a_visible_state(self):
        state, out = _step(ScanState.CHANGELOG_UNRESOLVED, "plain text", "## Summary of Changes")
        assert state is ScanState.CHANGELOG_UNRESOLVED
        assert out == []

    def test_details_inside_bullets_switches_to_details(self):
        state, out = _step(ScanState.IN_BULLETS, "<details>", "## Summary of Changes")
        assert state is ScanState.IN_DETAILS
        assert out == ["", "<details>"]

    def test_bullet_lines_inside_details_pass_through(self):
        state, out = _step(ScanState.IN_DETAILS, "* item", "## Summary of Changes")
        assert state is ScanState.IN_DETAILS
        assert out == ["* item"]


class TestCollapseBlankLines:
    def test_runs_collapsed(self):
        assert collapse_blank_lines("a\n\n\n\nb\n \n\t\nc") == "a\n\nb\n\nc"

    def test_single_blank_kept(self):
        assert collapse_blank_lines("a\n\nb") == "a\n\nb"

    def test_surrounding_blank_lines_trimmed(self):
        assert collapse_blank_lines("\n\na\n\n") == "a"


class TestExtractSummary:
    def test_none_when_no_bot_record(self):
        assert extract_summary([ReviewRecord("alice", "## Summary of Changes")], [], BOT) is None

    def test_end_to_end_from_comments(self):
        comments = [_bot("## Summary of Changes\n### Changelog\n* added X\n")]
        assert extract_summary([], comments, BOT) == "## Changelog\n* added X"
