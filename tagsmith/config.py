from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .templates import DEFAULT_FILENAME_TEMPLATE, DEFAULT_TITLE_TEMPLATE

CONFIG_NAMES = ("tagsmith.yaml", "tagsmith.yml")


class PersistFailurePolicy(str, Enum):
    """What the batch does when writing tags or renaming an accepted file fails."""

    CONTINUE = "continue"
    ABORT = "abort"


class DefaultDecision(str, Enum):
    YES = "yes"
    NO = "no"
    EDIT = "edit"


class TaggingSettings(BaseModel):
    title_template: str = DEFAULT_TITLE_TEMPLATE
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    keep_existing_artist: bool = False
    auto_accept: bool = False
    default_decision: DefaultDecision = DefaultDecision.YES
    persist_failure_policy: PersistFailurePolicy = PersistFailurePolicy.CONTINUE
    include_extensions: List[str] = Field(default_factory=lambda: [".mp3", ".flac", ".m4a"])
    max_filename_length: int = Field(default=255, gt=0)

    @field_validator("title_template", "filename_template")
    @classmethod
    def _require_template(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("template must not be empty")
        return value

    @field_validator("default_decision", mode="before")
    @classmethod
    def _yaml_boolean_decision(cls, value: object) -> object:
        # PyYAML reads bare yes/no as booleans.
        if isinstance(value, bool):
            return DefaultDecision.YES if value else DefaultDecision.NO
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("include_extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, values: List[str]) -> List[str]:
        normalized = []
        for value in values or []:
            ext = str(value).strip().lower()
            if ext and not ext.startswith("."):
                ext = f".{ext}"
            if ext:
                normalized.append(ext)
        return normalized


class Settings(BaseModel):
    tagging: TaggingSettings = TaggingSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for name in CONFIG_NAMES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    path = find_config(explicit_path)
    if path is None:
        return Settings()
    return Settings.load(path)
