"""Configuration management - loads canvas-config.json and environment variables."""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

load_dotenv()

CONFIG_FILENAME = "canvas-config.json"


class ConfigError(Exception):
    """Raised when the config file or a student entry is unusable."""
    pass


class StudentConfig(BaseModel):
    """Credentials and display name for one student."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = ""
    name: str = ""
    domain: str = ""
    token: str = ""
    user_id: Optional[Union[int, str]] = Field(default=None, alias="userId")

    @field_validator("name", "domain", "token", mode="before")
    @classmethod
    def null_is_empty(cls, value):
        return "" if value is None else value


class CanvasConfig(BaseModel):
    """Parsed canvas-config.json."""

    model_config = ConfigDict(populate_by_name=True)

    students: Dict[str, StudentConfig] = Field(default_factory=dict)
    skip_courses: List[str] = Field(default_factory=list, alias="skipCourses")

    @field_validator("skip_courses", mode="before")
    @classmethod
    def null_skips_nothing(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [pattern for pattern in value if pattern is not None]
        return value

    def get_student(self, key: str) -> StudentConfig:
        """Return the student for key, failing when domain or token is missing."""
        student = self.students.get(key)
        if student is None or not student.domain or not student.token:
            raise ConfigError(f"Student '{key}' not found or missing domain/token in config.")
        return student.model_copy(update={"key": key})


def config_search_paths(explicit: Optional[str] = None) -> List[Path]:
    """
    Candidate config locations, most specific first:
      1) explicit path (--config)
      2) CANVAS_CONFIG env var
      3) $OPENCLAW_WORKSPACE/canvas-config.json
      4) ~/.openclaw/workspace/canvas-config.json
    """
    paths: List[Path] = []
    for value in (explicit, os.getenv("CANVAS_CONFIG")):
        if value:
            paths.append(Path(value).expanduser())
    workspace = os.getenv("OPENCLAW_WORKSPACE")
    if workspace:
        paths.append(Path(workspace).expanduser() / CONFIG_FILENAME)
    paths.append(Path.home() / ".openclaw" / "workspace" / CONFIG_FILENAME)
    return paths


def find_config_file(explicit: Optional[str] = None) -> Path:
    if explicit and not Path(explicit).expanduser().is_file():
        raise ConfigError(f"Config file {explicit} not found.")
    for path in config_search_paths(explicit):
        if path.is_file():
            return path
    raise ConfigError(f"{CONFIG_FILENAME} not found. See README.md for setup.")


def load_config(path: Optional[str] = None) -> CanvasConfig:
    """Locate and parse the config file into a CanvasConfig."""
    config_path = find_config_file(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    try:
        return CanvasConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e
