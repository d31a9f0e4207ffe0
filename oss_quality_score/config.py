"""
Configuration management for OSS Quality Score.

Loads scoring policy overrides from:
1. .oss-quality-score.toml (local config)
2. pyproject.toml (project-level config)
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, NamedTuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOCAL_CONFIG_NAME = ".oss-quality-score.toml"

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

# Directory searched for config files (default: current working directory)
_CONFIG_ROOT: Path | None = None

# --- Default policy tables ---

# Licenses known to be compatible with LGPL v2.1
DEFAULT_COMPATIBLE_SPDX_IDS = (
    "LGPL-2.1-only",
    "LGPL-2.1-or-later",
    "MIT",
    "BSD-3-Clause",
    "BSD-2-Clause",
    "ISC",
    "Zlib",
    "Artistic-2.0",
    "GPL-2.0-only",
    "GPL-2.0-or-later",
    "GPL-3.0-only",
    "GPL-3.0-or-later",
    "LGPL-3.0-only",
    "LGPL-3.0-or-later",
    "MPL-2.0",
    "Unlicense",
    "CC0-1.0",
)

DEFAULT_COMPATIBLE_LICENSE_NAMES = (
    "mit license",
    "bsd 2-clause license",
    "bsd 3-clause license",
    "apache license, version 2.0",
    "lgpl",
    "gpl",
    "mozilla public license",
    "cc0",
)

DEFAULT_PERMISSIVE_PHRASES = (
    "permission is hereby granted, free of charge",
    "redistribute",
    "without restriction",
    "provided that the above copyright notice",
)

DEFAULT_RESTRICTIVE_PHRASES = (
    "not for use in",
    "not licensed for",
    "proprietary",
)

DEFAULT_METRIC_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "license": 0.25,
        "rampup": 0.25,
        "correctness": 0.25,
        "responsiveness": 0.25,
    }
)


class ScoringPolicy(NamedTuple):
    """Policy tables and constants consumed by the metric calculators."""

    compatible_spdx_ids: tuple[str, ...] = DEFAULT_COMPATIBLE_SPDX_IDS
    compatible_license_names: tuple[str, ...] = DEFAULT_COMPATIBLE_LICENSE_NAMES
    permissive_phrases: tuple[str, ...] = DEFAULT_PERMISSIVE_PHRASES
    restrictive_phrases: tuple[str, ...] = DEFAULT_RESTRICTIVE_PHRASES
    other_license_name: str = "Other"  # GitHub's sentinel for unrecognized licenses
    license_expressions: tuple[str, ...] = ("main:LICENSE", "master:LICENSE")
    commit_window_days: int = 30
    commit_target: int = 30
    responsiveness_threshold_days: int = 7
    responsiveness_sample_size: int = 100
    responsiveness_scores: tuple[float, float, float] = (1.0, 0.7, 0.3)
    rampup_placeholder_score: float = 0.0
    weights: Mapping[str, float] = DEFAULT_METRIC_WEIGHTS


DEFAULT_POLICY = ScoringPolicy()


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_config_root() -> Path:
    """
    Get the directory searched for configuration files.

    Returns:
        Explicitly set root, or the current working directory.
    """
    if _CONFIG_ROOT is not None:
        return _CONFIG_ROOT
    return Path.cwd()


def set_config_root(path: Path | str) -> None:
    """
    Set the configuration root directory explicitly.

    Args:
        path: Directory containing .oss-quality-score.toml or pyproject.toml.
    """
    global _CONFIG_ROOT
    _CONFIG_ROOT = Path(path).expanduser()


def get_policy_overrides() -> dict[str, Any]:
    """
    Load policy overrides from configuration files.

    Priority:
    1. .oss-quality-score.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        Mapping of ScoringPolicy field names to override values.
    """
    root = get_config_root()

    for config_path in (root / LOCAL_CONFIG_NAME, root / "pyproject.toml"):
        if not config_path.exists():
            continue
        overrides: Any = load_config_file(config_path)
        for section in ("tool", "oss-quality-score", "policy"):
            overrides = overrides.get(section, {}) if isinstance(overrides, dict) else {}
        if overrides and not isinstance(overrides, dict):
            raise ValueError(
                f"[tool.oss-quality-score.policy] in {config_path} must be a table."
            )
        if overrides:
            return dict(overrides)

    return {}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_weights(weights: Mapping[str, Any]) -> Mapping[str, float]:
    """Check that metric weights name known metrics, are non-negative and sum to 1."""
    unknown = set(weights) - set(DEFAULT_METRIC_WEIGHTS)
    if unknown:
        raise ValueError(
            f"Unknown metric weight(s): {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(DEFAULT_METRIC_WEIGHTS)}"
        )
    missing = set(DEFAULT_METRIC_WEIGHTS) - set(weights)
    if missing:
        raise ValueError(f"Missing metric weights: {', '.join(sorted(missing))}")
    if not all(_is_number(w) for w in weights.values()):
        raise ValueError("Metric weights must be numbers.")
    if any(w < 0 for w in weights.values()):
        raise ValueError("Metric weights must be non-negative.")
    total = sum(float(w) for w in weights.values())
    if abs(total - 1.0) > 1e-9:
        raise ValueError(f"Metric weights must sum to 1.0, got {total}")
    return MappingProxyType({key: float(w) for key, w in weights.items()})


def _normalize_override(key: str, value: Any) -> Any:
    """Check an override against the type of its default and convert lists."""
    default = getattr(DEFAULT_POLICY, key)

    if key == "weights":
        if not isinstance(value, dict):
            raise ValueError("Policy option 'weights' must be a table.")
        return _validate_weights({**DEFAULT_METRIC_WEIGHTS, **value})

    if isinstance(default, tuple):
        if not isinstance(value, list):
            raise ValueError(f"Policy option '{key}' must be a list.")
        if key == "responsiveness_scores":
            if not all(_is_number(item) for item in value):
                raise ValueError(f"Policy option '{key}' must be a list of numbers.")
            return tuple(float(item) for item in value)
        if not all(isinstance(item, str) for item in value):
            raise ValueError(f"Policy option '{key}' must be a list of strings.")
        return tuple(value)

    if isinstance(default, str):
        if not isinstance(value, str):
            raise ValueError(f"Policy option '{key}' must be a string.")
        return value

    if isinstance(default, int):
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"Policy option '{key}' must be a positive integer.")
        return value

    if not _is_number(value):
        raise ValueError(f"Policy option '{key}' must be a number.")
    return float(value)


def build_policy(overrides: dict[str, Any] | None = None) -> ScoringPolicy:
    """
    Build a ScoringPolicy from defaults plus overrides.

    Args:
        overrides: Field name -> value. Lists are converted to tuples.

    Returns:
        ScoringPolicy instance.

    Raises:
        ValueError: If an override key is unknown, a value has the wrong
            type, or weights are invalid.
    """
    if not overrides:
        return DEFAULT_POLICY

    unknown = set(overrides) - set(ScoringPolicy._fields)
    if unknown:
        raise ValueError(
            f"Unknown policy option(s): {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(ScoringPolicy._fields)}"
        )

    normalized = {
        key: _normalize_override(key, value) for key, value in overrides.items()
    }

    if len(normalized.get("responsiveness_scores", (0, 0, 0))) != 3:
        raise ValueError("responsiveness_scores must have exactly three entries.")

    return DEFAULT_POLICY._replace(**normalized)


def load_scoring_policy() -> ScoringPolicy:
    """Load the scoring policy, applying any configured overrides."""
    return build_policy(get_policy_overrides())


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL


def get_github_token() -> str | None:
    """Return the GitHub token from the environment (or .env), if any."""
    token = os.getenv("GITHUB_TOKEN")
    if token is None or not token.strip():
        return None
    return token.strip()
