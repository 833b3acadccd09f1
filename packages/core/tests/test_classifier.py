"""Tests for change-type classification."""

import pytest

from prflow_core.classifier import DEFAULT_CHANGE_TYPE, classify_change_type


@pytest.mark.parametrize(
    "subjects",
    [
        ["fix: null pointer"],
        ["Hotfix for release"],
        ["squash BUG in parser"],
        ["feat: add feature flag", "fix typo in feature flag"],
        ["feature: new login page", "refactor session", "bugfix"],
    ],
)
def test_fix_keywords_take_priority(subjects):
    assert classify_change_type(subjects) == "fix"


def test_feature_keywords():
    assert classify_change_type(["Add new FEATURE toggle"]) == "feat"


def test_refactor_beats_docs():
    assert classify_change_type(["refactor: split module", "docs: readme"]) == "refactor"


def test_docs_keyword():
    assert classify_change_type(["Update doc strings"]) == "docs"


def test_no_keyword_falls_back_to_default():
    assert classify_change_type(["bump version", "tidy imports"]) == DEFAULT_CHANGE_TYPE == "feat"


def test_empty_commit_list_falls_back_to_default():
    assert classify_change_type([]) == "feat"


def test_match_is_substring_across_words():
    # "prefix" contains "fix".
    assert classify_change_type(["rename prefix option"]) == "fix"
