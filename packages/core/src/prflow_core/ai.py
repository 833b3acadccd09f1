"""Prompts for the two AI-assisted steps: title suggestion and summary translation."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from prflow_core.classifier import CHANGE_TYPES

if TYPE_CHECKING:
    from prflow_core.providers.base import BaseProvider

logger = logging.getLogger(__name__)

TITLE_MAX_TOKENS = 100
TRANSLATION_MAX_TOKENS = 4096

TITLE_SYSTEM_PROMPT = f"""You are a pull request title generator. Based on the provided context, summarize a concise title.

Rules:
- Use English
- Focus only on the main change direction
- Don't list details or use semicolons
- Follow conventional commit format.
  *Only* use one of: {", ".join(f"{t}:" for t in CHANGE_TYPES)}
- Format should be 'type: brief description (#issue)'
- Remove (#issue) if no issue exists
- Return title directly"""

TRANSLATION_SYSTEM_PROMPT = """You are a professional technical translator. Translate the user's Markdown \
document completely into {language}.

Rules:
1. Translate every natural-language sentence.
2. Keep all Markdown structure unchanged: headings, lists, tables and HTML tags such as <details>.
3. Keep code blocks, inline code, links, file paths and identifiers exactly as they are.
4. Use the technical terminology customary for {language}.
5. Return only the translated document."""

_FENCE_OPEN_RE = re.compile(r"\A```(?:markdown|md)?[ \t]*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```[ \t]*\Z")


def build_title_context(branch: str, subjects: Sequence[str]) -> str:
    commits = "\n".join(subjects)
    return f"Branch name: {branch}\nCommits:\n{commits}"


def suggest_title(provider: BaseProvider, branch: str, subjects: Sequence[str]) -> str | None:
    """Ask the provider for a PR title. Returns None if the answer is unusable."""
    text = provider.complete(TITLE_SYSTEM_PROMPT, build_title_context(branch, subjects), TITLE_MAX_TOKENS)
    if not text or text == "null":
        logger.warning("No usable title suggestion from %s.", provider.name)
        return None
    # Models occasionally quote the title.
    return text.splitlines()[0].strip().strip("`\"'")


def strip_markdown_fence(text: str) -> str:
    """Remove a fence wrapping the whole document, keeping fences inside it."""
    cleaned = _FENCE_OPEN_RE.sub("", text.strip(), count=1)
    if cleaned != text.strip():
        cleaned = _FENCE_CLOSE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def translate_summary(provider: BaseProvider, text: str, language: str) -> str:
    """Translate prose in text, falling back to the untranslated text on any failure."""
    translated = provider.complete(TRANSLATION_SYSTEM_PROMPT.format(language=language), text, TRANSLATION_MAX_TOKENS)
    if not translated:
        logger.warning("Translation failed; using the original summary.")
        return text
    cleaned = strip_markdown_fence(translated)
    return cleaned or text
