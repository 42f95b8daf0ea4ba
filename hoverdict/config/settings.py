"""Pydantic models and helper utilities for lookup configuration values."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from hoverdict import logging_manager as log_mgr
from hoverdict.errors import SettingsError
from hoverdict.text.classifier import CLASSIFIER_NAMES

logger = log_mgr.get_logger().getChild("config")

VALID_SEGMENTERS: tuple[str, ...] = ("tinysegmenter", "script-runs", "none")


class LookupSettings(BaseModel):
    """Typed representation of the lookup configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    lookup_with_capitalized: bool = False
    max_words: int = Field(default=8, ge=1)
    fixed_script_limit: int = Field(default=40, ge=1)
    text_length_limit: int = Field(default=128, ge=1)
    cache_size: int = Field(default=100, ge=0)
    min_phrase_length: int = Field(default=1, ge=1)
    enable_phrasing: bool = True
    min_identifier_length: int = Field(default=3, ge=1)
    short_word_length: int = Field(default=3, ge=0)
    classifier: str = "latin"
    segmenter: str = "tinysegmenter"
    segmenter_locale: str = "ja-JP"
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("classifier")
    @classmethod
    def _check_classifier(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in CLASSIFIER_NAMES:
            raise ValueError(f"classifier must be one of {', '.join(CLASSIFIER_NAMES)}")
        return normalized

    @field_validator("segmenter")
    @classmethod
    def _check_segmenter(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in VALID_SEGMENTERS:
            raise ValueError(f"segmenter must be one of {', '.join(VALID_SEGMENTERS)}")
        return normalized

    @property
    def effective_cache_size(self) -> int:
        """Cache capacity actually used; debug sessions run uncached."""

        return 0 if self.debug else self.cache_size


class EnvironmentOverrides(BaseSettings):
    """Configuration overrides sourced from ``HOVERDICT_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    lookup_with_capitalized: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_LOOKUP_WITH_CAPITALIZED")
    )
    max_words: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_MAX_WORDS")
    )
    text_length_limit: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_TEXT_LENGTH_LIMIT")
    )
    cache_size: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_CACHE_SIZE")
    )
    enable_phrasing: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_ENABLE_PHRASING")
    )
    classifier: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_CLASSIFIER")
    )
    segmenter: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_SEGMENTER")
    )
    debug: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_DEBUG")
    )
    log_level: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_LOG_LEVEL")
    )
    log_file: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("HOVERDICT_LOG_FILE")
    )


def load_environment_overrides() -> Dict[str, Any]:
    """Return configuration overrides sourced from environment variables."""

    try:
        overrides = EnvironmentOverrides()
    except ValidationError as exc:
        logger.warning(
            "Invalid environment configuration detected; using defaults.",
            extra={"event": "config.env.validation_error", "error": str(exc)},
        )
        return {}
    return overrides.model_dump(exclude_none=True)


def load_settings_file(path: Path) -> Dict[str, Any]:
    """Read a YAML settings document, returning an empty mapping when absent."""

    try:
        with open(path, "r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except FileNotFoundError:
        logger.debug(
            "Settings file not found at %s; skipping.",
            path,
            extra={"event": "config.file.missing"},
        )
        return {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse settings file {path}: {exc}") from exc

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    return dict(payload)


def load_settings(
    path: Optional[Path | str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> LookupSettings:
    """Merge defaults, an optional YAML file, the environment and ``overrides``."""

    merged: Dict[str, Any] = {}
    if path is not None:
        merged.update(load_settings_file(Path(path)))
    merged.update(load_environment_overrides())
    if overrides:
        merged.update(overrides)
    try:
        return LookupSettings.model_validate(merged)
    except ValidationError as exc:
        raise SettingsError(str(exc)) from exc


@lru_cache(maxsize=1)
def get_settings() -> LookupSettings:
    """Return process-wide settings resolved from the environment."""

    return load_settings()


__all__ = [
    "EnvironmentOverrides",
    "LookupSettings",
    "VALID_SEGMENTERS",
    "get_settings",
    "load_environment_overrides",
    "load_settings",
    "load_settings_file",
]
