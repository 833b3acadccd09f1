"""Tests for title suggestion and summary translation prompts."""

from unittest.mock import MagicMock

import pytest

from prflow_core.ai import (
    TITLE_MAX_TOKENS,
    TITLE_SYSTEM_PROMPT,
    TRANSLATION_MAX_TOKENS,
    build_title_context,
    strip_markdown_fence,
    suggest_title,
    translate_summary,
)


def _provider(reply):
    provider = MagicMock()
    provider.complete.return_value = reply
    provider.name = "stub:model"
    return provider


def test_title_prompt_lists_change_types():
    assert "feat:" in TITLE_SYSTEM_PROMPT
    assert "chore:" in TITLE_SYSTEM_PROMPT


def test_title_context_contains_branch_and_commits():
    context = build_title_context("fix-123-login", ["fix: a", "fix: b"])
    assert context == "Branch name: fix-123-login\nCommits:\nfix: a\nfix: b"


class TestSuggestTitle:
    def test_returns_first_line(self):
        provider = _provider("fix: null pointer (#123)\nExplanation follows")
        assert suggest_title(provider, "fix-123", ["fix: x"]) == "fix: null pointer (#123)"
        assert provider.complete.call_args.args[2] == TITLE_MAX_TOKENS

    def test_strips_quotes(self):
        assert suggest_title(_provider('"feat: login"'), "b", ["s"]) == "feat: login"

    @pytest.mark.parametrize("reply", [None, "null"])
    def test_unusable_reply(self, reply):
        assert suggest_title(_provider(reply), "b", ["s"]) is None


class TestStripMarkdownFence:
    def test_removes_wrapping_fence(self):
        assert strip_markdown_fence("```markdown\n## Title\ntext\n```") == "## Title\ntext"

    def test_keeps_inner_fences(self):
        text = "intro\n```python\nx = 1\n```\nend"
        assert strip_markdown_fence(text) == text

    def test_plain_text_unchanged(self):
        assert strip_markdown_fence("  plain  ") == "plain"


class TestTranslateSummary:
    def test_returns_translation(self):
        provider = _provider("```\n## 變更日誌\n```")
        assert translate_summary(provider, "## Changelog", "Traditional Chinese (Taiwan)") == "## 變更日誌"
        system, user, max_tokens = provider.complete.call_args.args
        assert "Traditional Chinese (Taiwan)" in system
        assert user == "## Changelog"
        assert max_tokens == TRANSLATION_MAX_TOKENS

    def test_falls_back_to_original_on_failure(self):
        assert translate_summary(_provider(None), "## Changelog", "French") == "## Changelog"

    def test_falls_back_when_only_fence_returned(self):
        assert translate_summary(_provider("```\n```"), "original", "French") == "original"
