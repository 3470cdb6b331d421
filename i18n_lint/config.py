"""Settings for lint runs: defaults, environment, YAML config file and flags."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Dict

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .errors import ConfigError
from .loaders import DEFAULT_FORMATS, PARSERS
from .reporters import FailurePolicy, OutputFormat

ENV_PREFIX = "I18N_LINT_"
DEFAULT_DIR = Path("assets/i18n")

ConfigDict = Dict[str, Any]


class LintSettings(BaseSettings):
    """Options recognised by a lint run.

    Values come from (highest precedence first) explicit keyword arguments,
    then ``I18N_LINT_*`` environment variables, then the defaults below.
    """

    dir: Path = DEFAULT_DIR
    base: str = Field(default="en", min_length=1)
    strict: bool = False
    format: OutputFormat = "text"
    fail_on_extra: bool = False
    fail_on_placeholder: bool = False
    formats: Annotated[tuple[str, ...], NoDecode] = DEFAULT_FORMATS

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="forbid")

    @field_validator("formats", mode="before")
    @classmethod
    def _split_formats(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            items = (str(item).strip().lstrip(".") for item in value)
            return tuple(item for item in items if item)
        return value

    @field_validator("formats")
    @classmethod
    def _known_formats(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one locale format is required")
        unknown = sorted(set(value) - set(PARSERS))
        if unknown:
            raise ValueError(
                f"unsupported format(s): {', '.join(unknown)}; "
                f"known: {', '.join(sorted(PARSERS))}"
            )
        return tuple(dict.fromkeys(value))

    def policy(self) -> FailurePolicy:
        return FailurePolicy(
            strict=self.strict,
            fail_on_extra=self.fail_on_extra,
            fail_on_placeholder=self.fail_on_placeholder,
        )


def load_config_file(path: Path) -> ConfigDict:
    """Load settings from a YAML mapping; dashed keys are accepted."""

    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"config file {path} must contain a mapping at the top level"
        )
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "settings"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def load_settings(config: Path | None = None, **overrides: Any) -> LintSettings:
    """Build :class:`LintSettings` from a config file plus explicit overrides.

    ``None`` overrides are ignored so unset CLI flags fall through to the
    config file, then the environment, then the defaults.
    """

    values: ConfigDict = load_config_file(config) if config is not None else {}
    values.update(
        {key: value for key, value in overrides.items() if value is not None}
    )
    try:
        return LintSettings(**values)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {_describe(exc)}") from exc


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_DIR",
    "LintSettings",
    "load_config_file",
    "load_settings",
]
