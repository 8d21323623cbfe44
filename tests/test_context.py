"""Tests for config loading and the project context."""

import json

import pytest

from review_helper.config import ReviewHelperSettings, load_config
from review_helper.context import ProjectContext
from review_helper.errors import ConfigError, NotFoundError, ReviewHelperError
from review_helper.models.project import Author
from review_helper.paths import ProjectPaths


class TestSettings:
    def test_cli_values_take_precedence(self, monkeypatch):
        monkeypatch.setenv("REVIEW_HELPER_CONFIG", "/env/config.json")

        settings = ReviewHelperSettings.from_env("cli.json", "proj")

        assert str(settings.config_path) == "cli.json"
        assert str(settings.project_dir) == "proj"

    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("REVIEW_HELPER_CONFIG", "/env/config.json")
        monkeypatch.setenv("REVIEW_HELPER_PROJECT_DIR", "/env/project")

        settings = ReviewHelperSettings.from_env()

        assert str(settings.config_path) == "/env/config.json"
        assert str(settings.project_dir) == "/env/project"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("REVIEW_HELPER_CONFIG", raising=False)
        monkeypatch.delenv("REVIEW_HELPER_PROJECT_DIR", raising=False)

        settings = ReviewHelperSettings.from_env()

        assert str(settings.config_path) == "config.json"
        assert str(settings.project_dir) == "."


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_author(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"author_contacts": "@x", "tasks": []}))

        with pytest.raises(ConfigError):
            load_config(path)

    def test_loads_tasks(self, settings, example_task):
        config = load_config(settings.config_path)

        assert config.author() == Author(name="Ivan Petrov", contacts="@ipetrov")
        assert [t.name for t in config.tasks] == ["example"]


class TestProjectPaths:
    def test_check_environment_creates_directories(self, project_root):
        paths = ProjectPaths(project_root)

        created = paths.check_environment()

        assert set(created) == {paths.tasks, paths.notes, paths.reviews}
        assert paths.check_environment() == []

    def test_check_environment_missing_root(self, tmp_path):
        with pytest.raises(NotFoundError):
            ProjectPaths(tmp_path / "nowhere").check_environment()


class TestProjectContext:
    def test_load(self, context):
        assert context.author.display_line() == "Author: Ivan Petrov(tg: @ipetrov)"
        assert [t.name for t in context.tasks] == ["example"]
        assert context.current_task is None

    def test_switch_to_unknown_task(self, context):
        with pytest.raises(NotFoundError):
            context.switch_to_task("missing")

    def test_take_requires_switch(self, context):
        with pytest.raises(ReviewHelperError):
            context.take_current_task()

    def test_take_current_task(self, context):
        context.switch_to_task("example")

        task = context.take_current_task()

        assert task.name == "example"
        assert context.tasks == []
        assert context.current_task is None

    def test_check_task(self, context, project_paths):
        context.check_task("example")

        project_paths.code_file("example", "example.hpp").unlink()
        with pytest.raises(NotFoundError):
            context.check_task("example")

    def test_check_task_missing_notes_file(self, context, project_paths):
        notes_path = project_paths.notes_file("example")
        notes_path.unlink()

        with pytest.raises(NotFoundError):
            context.check_task("example")
        assert not notes_path.exists()

    def test_add_task_and_dump(self, context, settings):
        context.add_task("lab2", "main.cpp")
        context.dump_state()

        reloaded = ProjectContext.load(settings)
        assert [t.name for t in reloaded.tasks] == ["example", "lab2"]
        assert reloaded.tasks[1].notes_ledger == "notes/lab2.txt"

    def test_add_duplicate_task(self, context):
        with pytest.raises(ReviewHelperError):
            context.add_task("example", "other.hpp")

    def test_init_project(self, tmp_path):
        settings = ReviewHelperSettings(
            config_path=tmp_path / "config.json",
            project_dir=tmp_path / "new_project",
        )

        context = ProjectContext.init_project(Author(name="A", contacts="@a"), settings)

        assert (tmp_path / "new_project" / "reviews").is_dir()
        assert json.loads(settings.config_path.read_text()) == {
            "author_name": "A",
            "author_contacts": "@a",
            "tasks": [],
        }
        assert context.tasks == []

    def test_init_refuses_existing_config(self, settings, example_task):
        with pytest.raises(ConfigError):
            ProjectContext.init_project(Author(name="A", contacts="@a"), settings)
