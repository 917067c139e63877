"""Configuration loading for readmegen (.readmegen.yml and environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".readmegen.yml"

ENV_LLM_API_KEY = "OPENAI_API_KEY"
ENV_LLM_BASE_URL = "OPENAI_BASE_URL"
ENV_LLM_MODEL = "OPENAI_MODEL"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_RELAY_URL = "READMEGEN_RELAY_URL"
ENV_RELAY_KEY = "READMEGEN_RELAY_KEY"

DEFAULT_LLM_BASE_URL = "https://api.openai.com/v1"
DEFAULT_LLM_MODEL = "gpt-4o-mini"


@dataclass(frozen=True)
class RelaySettings:
    """Provider settings the relay reads on every request."""

    api_key: Optional[str]
    base_url: str = DEFAULT_LLM_BASE_URL
    model: str = DEFAULT_LLM_MODEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RelaySettings":
        env = os.environ if environ is None else environ
        base_url = (env.get(ENV_LLM_BASE_URL) or "").strip().rstrip("/")
        return cls(
            api_key=(env.get(ENV_LLM_API_KEY) or "").strip() or None,
            base_url=base_url or DEFAULT_LLM_BASE_URL,
            model=(env.get(ENV_LLM_MODEL) or "").strip() or DEFAULT_LLM_MODEL,
        )


@dataclass
class GitHubConfig:
    """GitHub API access settings."""

    token: Optional[str] = None
    api_url: str = "https://api.github.com"


@dataclass
class RelayClientConfig:
    """Where the CLI sends AI enhancement requests."""

    url: Optional[str] = None
    api_key: Optional[str] = None
    timeout: Optional[float] = None


@dataclass
class GenerationConfig:
    """Default toggles for a generation run."""

    include_tree: bool = True
    use_ai: bool = True


@dataclass
class ReadmeGenConfig:
    """Represents the settings defined in .readmegen.yml plus environment overrides."""

    root: Path
    github: GitHubConfig = field(default_factory=GitHubConfig)
    relay: RelayClientConfig = field(default_factory=RelayClientConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    credentials_path: Optional[Path] = None


def load_config(config_path: Path, environ: Mapping[str, str] | None = None) -> ReadmeGenConfig:
    """Load configuration from disk, then apply environment overrides."""
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    data: Dict[str, Any] = _read_config(config_file) if config_file.exists() else {}

    github_data = _as_dict(data.get("github"))
    github = GitHubConfig(
        token=_as_str(github_data.get("token")),
        api_url=_as_str(github_data.get("api_url")) or GitHubConfig.api_url,
    )

    relay_data = _as_dict(data.get("relay"))
    relay = RelayClientConfig(
        url=_as_str(relay_data.get("url")),
        api_key=_as_str(relay_data.get("api_key")),
        timeout=_as_float(relay_data.get("timeout")),
    )

    generation_data = _as_dict(data.get("generation"))
    generation = GenerationConfig()
    include_tree = _as_bool(generation_data.get("include_tree"))
    if include_tree is not None:
        generation.include_tree = include_tree
    use_ai = _as_bool(generation_data.get("use_ai"))
    if use_ai is not None:
        generation.use_ai = use_ai

    credentials_data = _as_dict(data.get("credentials"))
    credentials_path_str = _as_str(credentials_data.get("path"))
    credentials_path = (root / credentials_path_str).expanduser() if credentials_path_str else None

    github.token = env.get(ENV_GITHUB_TOKEN) or github.token
    relay.url = env.get(ENV_RELAY_URL) or relay.url
    relay.api_key = env.get(ENV_RELAY_KEY) or relay.api_key

    return ReadmeGenConfig(
        root=root,
        github=github,
        relay=relay,
        generation=generation,
        credentials_path=credentials_path,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "ConfigError",
    "CONFIG_FILENAME",
    "GenerationConfig",
    "GitHubConfig",
    "ReadmeGenConfig",
    "RelayClientConfig",
    "RelaySettings",
    "load_config",
]
