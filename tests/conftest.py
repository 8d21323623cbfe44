"""Pytest fixtures for review-helper tests."""

import json

import pytest

from review_helper.config import ReviewHelperSettings
from review_helper.context import ProjectContext
from review_helper.paths import ProjectPaths


@pytest.fixture
def project_root(tmp_path):
    """Create a temporary project directory for testing.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path to temporary project root
    """
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def project_paths(project_root):
    """Create ProjectPaths with all project directories in place."""
    paths = ProjectPaths(project_root)
    paths.check_environment()
    return paths


@pytest.fixture
def settings(project_root, tmp_path):
    """Settings pointing at the temporary project and its config file."""
    return ReviewHelperSettings(
        config_path=tmp_path / "config.json",
        project_dir=project_root,
    )


@pytest.fixture
def example_task(project_paths, settings):
    """Write a config with one task whose code file holds four lines.

    Returns:
        Name of the task
    """
    task_dir = project_paths.task_dir("example")
    task_dir.mkdir(parents=True)
    (task_dir / "example.hpp").write_text("a\nb\nc\nd\n", encoding="utf-8")
    project_paths.notes_file("example").touch()

    settings.config_path.write_text(
        json.dumps(
            {
                "author_name": "Ivan Petrov",
                "author_contacts": "@ipetrov",
                "tasks": [
                    {
                        "name": "example",
                        "code_file_name": "example.hpp",
                        "notes_ledger": "notes/example.txt",
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return "example"


@pytest.fixture
def context(settings, example_task):
    """Loaded ProjectContext for the example project."""
    return ProjectContext.load(settings)
