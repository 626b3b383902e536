"""Review configuration loader.

Reads ``.swiftformat-review.yml`` from the repository root, or an explicit
path, and merges command-line overrides on top.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from swiftformat_review.types import CheckerConfig

DEFAULT_CONFIG_FILENAME = ".swiftformat-review.yml"

_STRING_KEYS = ("binary_path", "additional_args", "additional_message", "swift_version")
_KNOWN_KEYS = frozenset((*_STRING_KEYS, "exclude", "fail_on_error"))


class ConfigError(RuntimeError):
    """Raised when a configuration file is malformed."""


@dataclass(frozen=True)
class ReviewSettings:
    """Checker configuration plus the fail-on-error switch."""

    checker: CheckerConfig = field(default_factory=CheckerConfig)
    fail_on_error: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewSettings:
        """Validate a parsed config mapping."""
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key in _STRING_KEYS:
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string; quote it, e.g. {key}: \"{value}\"")
            values[key] = value

        exclude = data.get("exclude") or []
        if not isinstance(exclude, list) or not all(isinstance(glob, str) for glob in exclude):
            raise ConfigError("exclude must be a list of glob patterns")
        values["exclude"] = tuple(exclude)

        fail_on_error = data.get("fail_on_error", False)
        if not isinstance(fail_on_error, bool):
            raise ConfigError("fail_on_error must be true or false")

        return cls(checker=CheckerConfig(**values), fail_on_error=fail_on_error)

    def with_overrides(
        self,
        *,
        binary_path: str | None = None,
        additional_args: str | None = None,
        additional_message: str | None = None,
        exclude: list[str] | None = None,
        swift_version: str | None = None,
        fail_on_error: bool | None = None,
    ) -> ReviewSettings:
        """Return settings with any non-None override applied."""
        overrides = {
            "binary_path": binary_path,
            "additional_args": additional_args,
            "additional_message": additional_message,
            "swift_version": swift_version,
        }
        checker = replace(self.checker, **{k: v for k, v in overrides.items() if v is not None})
        if exclude:
            checker = replace(checker, exclude=tuple(exclude))
        return ReviewSettings(
            checker=checker,
            fail_on_error=self.fail_on_error if fail_on_error is None else fail_on_error,
        )


def load_settings(repo_root: Path, config_path: Path | None = None) -> ReviewSettings:
    """Load review settings.

    Args:
        repo_root: Repository root searched for the default config file
        config_path: Explicit config file; must exist when given

    Returns:
        Parsed settings, or defaults when no config file is present

    Raises:
        ConfigError: If the file is missing (explicit path), malformed or invalid
    """
    path = config_path or (repo_root / DEFAULT_CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return ReviewSettings()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML config at {path}: {e}") from e

    if data is None:
        return ReviewSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config structure in {path}: expected a mapping")

    try:
        return ReviewSettings.from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"Invalid config structure in {path}: {e}") from e
