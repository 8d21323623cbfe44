"""Project context: author identity, task list and the task being reviewed."""

import logging
from pathlib import Path
from typing import Optional

from .config import ReviewHelperSettings, dump_config, load_config, new_config
from .errors import ConfigError, NotFoundError, ReviewHelperError
from .models.project import Author, TaskRecord
from .paths import ProjectPaths
from .task import Task, check_task_files, notes_path_for

logger = logging.getLogger(__name__)


class ProjectContext:
    """Everything loaded from the project config for one CLI invocation.

    Tasks are kept as config records; a task's bank ledger is only parsed
    when the task is opened, so a damaged ledger affects only its own task.
    """

    def __init__(
        self,
        author: Author,
        tasks: list[TaskRecord],
        paths: ProjectPaths,
        config_path: Path,
    ):
        self.author = author
        self.tasks = tasks
        self.paths = paths
        self.config_path = Path(config_path)
        self.current_task: Optional[int] = None

    @classmethod
    def load(cls, settings: ReviewHelperSettings) -> "ProjectContext":
        """Check the project directory and load the config file.

        Raises:
            NotFoundError: If the project directory is missing
            ConfigError: If the config cannot be read or validated
        """
        paths = ProjectPaths(settings.project_dir)
        paths.check_environment()
        logger.debug("Project directories checked")

        logger.debug("Load state from %s", settings.config_path)
        config = load_config(settings.config_path)
        logger.debug("Config loaded: %d task(s)", len(config.tasks))
        return cls(
            author=config.author(),
            tasks=list(config.tasks),
            paths=paths,
            config_path=settings.config_path,
        )

    @classmethod
    def init_project(
        cls,
        author: Author,
        settings: ReviewHelperSettings,
        force: bool = False,
    ) -> "ProjectContext":
        """Create the project directories and a config with no tasks.

        Raises:
            ConfigError: If a config already exists and force is not set
        """
        if settings.config_path.exists() and not force:
            raise ConfigError(f"Config already exists: {settings.config_path}")

        settings.project_dir.mkdir(parents=True, exist_ok=True)
        paths = ProjectPaths(settings.project_dir)
        paths.check_environment()

        context = cls(author=author, tasks=[], paths=paths, config_path=settings.config_path)
        context.dump_state()
        return context

    def find_task_index(self, task_name: str) -> int:
        for index, record in enumerate(self.tasks):
            if record.name == task_name:
                return index
        raise NotFoundError(f"Task not found: {task_name}")

    def switch_to_task(self, task_name: str) -> None:
        """Set the task to review."""
        self.current_task = self.find_task_index(task_name)
        logger.debug("State switched to the task %s", task_name)

    def open_task(self, task_name: str) -> Task:
        """Open a task without removing it from the context."""
        return Task.from_record(self.tasks[self.find_task_index(task_name)], self.paths)

    def check_task(self, task_name: str) -> None:
        """Verify that a task's files are in place without opening its ledger.

        Raises:
            NotFoundError: If the task or any of its files is missing
        """
        record = self.tasks[self.find_task_index(task_name)]
        check_task_files(
            self.paths,
            record.name,
            self.paths.code_file(record.name, record.code_file_name),
            notes_path_for(record, self.paths),
        )

    def take_current_task(self) -> Task:
        """Remove the current task from the task list and open it.

        Raises:
            ReviewHelperError: If no task was switched to
        """
        if self.current_task is None:
            raise ReviewHelperError("Task is not set")
        record = self.tasks.pop(self.current_task)
        self.current_task = None
        return Task.from_record(record, self.paths)

    def add_task(self, task_name: str, code_file_name: str) -> Task:
        """Create a new task and register it in the task list.

        Raises:
            ReviewHelperError: If a task with that name already exists
        """
        logger.debug(
            "Start adding task %s with code_file_name %s", task_name, code_file_name
        )
        if any(record.name == task_name for record in self.tasks):
            raise ReviewHelperError(f"Task already exists: {task_name}")
        task = Task.create(self.paths, task_name, code_file_name)
        self.tasks.append(task.to_record(self.paths))
        return task

    def dump_state(self) -> None:
        """Save the author and task list back to the config file."""
        dump_config(new_config(self.author, self.tasks), self.config_path)
        logger.debug("Config saved to %s", self.config_path)
