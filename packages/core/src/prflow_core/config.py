from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "provider": "openai",
    "model": None,  # None = provider default
    "base_branch": "main",
    "remote": "origin",
    "labels_file": ".pr-labels",
    "labels": None,  # optional list of "type:label" strings
    "default_label_index": 3,
    "label_color": "0366d6",
    "label_description": "",
    "bot_author": "gemini-code-assist",
    "summary_marker": "Summary of Changes",
    "translate": False,
    "translate_language": "Traditional Chinese (Taiwan)",
    "repo": None,  # owner/name; None = infer from the upstream remote
    "host": None,
}

PROVIDERS = ("openai", "anthropic")


class ConfigError(ValueError):
    """Raised when the configuration file or overrides are unusable."""


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one invocation.

    Built once at startup by load_config() and passed explicitly to the
    components that need it.
    """

    provider: str = "openai"
    model: Optional[str] = None
    base_branch: str = "main"
    remote: str = "origin"
    labels_file: str = ".pr-labels"
    labels: Optional[tuple[str, ...]] = None
    default_label_index: int = 3
    label_color: str = "0366d6"
    label_description: str = ""
    bot_author: str = "gemini-code-assist"
    summary_marker: str = "Summary of Changes"
    translate: bool = False
    translate_language: str = "Traditional Chinese (Taiwan)"
    repo: Optional[str] = None
    host: Optional[str] = None
    github_token: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    @property
    def api_key(self) -> Optional[str]:
        """API key for the configured AI provider, if one is set."""
        if self.provider == "anthropic":
            return self.anthropic_api_key
        return self.openai_api_key


def load_config(config_path: str = ".prflow.yml", cli_overrides: Optional[dict] = None) -> Settings:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prflow.yml in the current directory
      3. CLI argument overrides
      4. GH_REPO / GH_HOST from the environment
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping of settings.")
        unknown = sorted(set(file_config) - set(DEFAULT_CONFIG))
        if unknown:
            raise ConfigError(f"Unknown setting(s) in {config_path}: {', '.join(unknown)}")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    if os.environ.get("GH_REPO"):
        config["repo"] = os.environ["GH_REPO"]
    if os.environ.get("GH_HOST"):
        config["host"] = os.environ["GH_HOST"]

    if config["provider"] not in PROVIDERS:
        raise ConfigError(f"Unknown provider {config['provider']!r}. Choose one of: {', '.join(PROVIDERS)}.")
    try:
        config["default_label_index"] = int(config["default_label_index"])
    except (TypeError, ValueError):
        raise ConfigError("default_label_index must be an integer.")
    if config["labels"] is not None:
        if not isinstance(config["labels"], list):
            raise ConfigError("labels must be a list of 'type:label' entries.")
        config["labels"] = tuple(str(entry) for entry in config["labels"])

    return Settings(
        **config,
        github_token=os.environ.get("GITHUB_TOKEN"),
        openai_api_key=os.environ.get("OPENAI_API_KEY"),
        anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY"),
    )
