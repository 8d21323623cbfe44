"""Configuration management for review-helper."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .models.project import Author, ProjectConfigFile, TaskRecord

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_PROJECT_DIR = "."


class ReviewHelperSettings(BaseModel):
    """Where the project config and project directory live."""

    config_path: Path = Field(default=Path(DEFAULT_CONFIG_PATH))
    project_dir: Path = Field(default=Path(DEFAULT_PROJECT_DIR))

    model_config = {"frozen": True}

    @classmethod
    def from_env(
        cls,
        cli_config_path: Optional[str] = None,
        cli_project_dir: Optional[str] = None,
    ) -> "ReviewHelperSettings":
        """Resolve settings with the following precedence:

        1. CLI options (if provided)
        2. REVIEW_HELPER_CONFIG / REVIEW_HELPER_PROJECT_DIR environment variables
        3. ./config.json and the current directory
        """
        config_path = cli_config_path or os.environ.get("REVIEW_HELPER_CONFIG") or DEFAULT_CONFIG_PATH
        project_dir = cli_project_dir or os.environ.get("REVIEW_HELPER_PROJECT_DIR") or DEFAULT_PROJECT_DIR
        return cls(config_path=Path(config_path), project_dir=Path(project_dir))


def load_config(config_path: Path) -> ProjectConfigFile:
    """Load and validate the project config file.

    Raises:
        ConfigError: If the file cannot be read or does not match the schema
    """
    config_path = Path(config_path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    try:
        return ProjectConfigFile.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"Malformed config file {config_path}: {e}") from e


def dump_config(config: ProjectConfigFile, config_path: Path) -> None:
    """Write the project config back as pretty-printed JSON."""
    payload = json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False)
    Path(config_path).write_text(payload + "\n", encoding="utf-8")


def new_config(author: Author, tasks: Optional[list[TaskRecord]] = None) -> ProjectConfigFile:
    """Build a config for an author, with no tasks unless given."""
    return ProjectConfigFile(
        author_name=author.name,
        author_contacts=author.contacts,
        tasks=list(tasks or []),
    )
