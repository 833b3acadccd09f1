"""Ordered change-type to label mapping.

The mapping is read from a plain text file (one ``type:label`` entry per
line) when present, otherwise from the ``labels`` list in .prflow.yml, and
finally from DEFAULT_LABEL_CONFIG. Entry order decides match priority; the
default label is picked by position so reordering entries for priority does
not silently change it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from prflow_core.config import ConfigError

if TYPE_CHECKING:
    from prflow_core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_LABEL_CONFIG = (
    "build:build",
    "ci:ci",
    "docs:documentation",
    "feat:feature",
    "fix:bug",
    "perf:enhancement",
    "refactor:enhancement",
    "style:enhancement",
    "test:test",
)

# Index of "feat:feature" in DEFAULT_LABEL_CONFIG.
DEFAULT_LABEL_INDEX = 3


@dataclass(frozen=True)
class LabelEntry:
    type_token: str
    label: str


def parse_entry(line: str) -> LabelEntry:
    """Split ``type:label`` at the first colon.

    A line without a colon maps the token to itself.
    """
    line = line.strip()
    type_token, sep, label = line.partition(":")
    if not sep:
        return LabelEntry(type_token=line, label=line)
    return LabelEntry(type_token=type_token.strip(), label=label.strip())


class LabelMapping:
    """Ordered list of (type token, label) pairs with a positional default."""

    def __init__(self, entries: Iterable[LabelEntry], default_index: int = DEFAULT_LABEL_INDEX):
        self._entries = tuple(entries)
        if not self._entries:
            raise ConfigError("The label mapping must contain at least one entry.")
        self._default_index = default_index

    @classmethod
    def from_lines(cls, lines: Iterable[str], default_index: int = DEFAULT_LABEL_INDEX) -> LabelMapping:
        entries = [parse_entry(line) for line in lines if line.strip() and not line.lstrip().startswith("#")]
        return cls(entries, default_index=default_index)

    def __iter__(self) -> Iterator[LabelEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def type_tokens(self) -> list[str]:
        """Distinct type tokens in mapping order."""
        return list(dict.fromkeys(entry.type_token for entry in self._entries if entry.type_token))

    @property
    def default_label(self) -> str:
        index = self._default_index
        if not 0 <= index < len(self._entries):
            logger.debug(
                "Default label index %d is outside a mapping of %d entries; using the last entry.",
                index,
                len(self._entries),
            )
            index = len(self._entries) - 1
        return self._entries[index].label

    def lookup(self, text: str) -> str | None:
        """Return the label of the first entry whose token occurs in text (case-insensitive)."""
        haystack = text.lower()
        for entry in self._entries:
            if entry.type_token and entry.type_token.lower() in haystack:
                return entry.label
        return None


def load_label_mapping(settings: Settings) -> LabelMapping:
    path = Path(settings.labels_file)
    if path.is_file():
        logger.debug("Loading label mapping from %s", path)
        return LabelMapping.from_lines(path.read_text().splitlines(), settings.default_label_index)
    if settings.labels:
        return LabelMapping.from_lines(settings.labels, settings.default_label_index)
    return LabelMapping.from_lines(DEFAULT_LABEL_CONFIG, settings.default_label_index)


def map_label(branch: str, title: str, mapping: LabelMapping) -> str:
    """Pick the label for a PR from its head branch name and final title."""
    return mapping.lookup(f"{branch} {title}") or mapping.default_label
