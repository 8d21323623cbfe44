"""Path management and project structure for review-helper."""

import logging
from pathlib import Path

from .errors import NotFoundError

logger = logging.getLogger(__name__)


class ProjectPaths:
    """Manages paths within a review project directory."""

    def __init__(self, project_root: Path):
        """Initialize project paths from root directory.

        Args:
            project_root: Root directory of the review project
        """
        self.root = Path(project_root)

        # Top-level directories
        self.tasks = self.root / "tasks"
        self.notes = self.root / "notes"
        self.reviews = self.root / "reviews"

    def get_all_directories(self) -> list[Path]:
        """Get list of all directories that should exist in the project."""
        return [
            self.tasks,
            self.notes,
            self.reviews,
        ]

    def task_dir(self, task_name: str) -> Path:
        """Get path to the directory holding a task's code."""
        return self.tasks / task_name

    def code_file(self, task_name: str, code_file_name: str) -> Path:
        """Get path to a task's code file."""
        return self.task_dir(task_name) / code_file_name

    def notes_file(self, task_name: str) -> Path:
        """Get path to a task's bank ledger."""
        return self.notes / f"{task_name}.txt"

    def review_file(self, task_name: str) -> Path:
        """Get path to a task's curated review ledger."""
        return self.reviews / f"{task_name}.txt"

    def show_file(self, task_name: str, file_name: str) -> Path:
        """Get path of the file a review is shown to instead of the console."""
        return self.task_dir(task_name) / file_name

    def check_environment(self) -> list[Path]:
        """Verify the project root and create missing project directories.

        Idempotent: existing directories are left untouched.

        Returns:
            Directories that were created

        Raises:
            NotFoundError: If the project root is missing or not a directory
        """
        if not self.root.exists():
            raise NotFoundError(f"Project directory doesn't exist: {self.root}")
        if not self.root.is_dir():
            raise NotFoundError(f"Project directory is not a directory: {self.root}")

        created = []
        for directory in self.get_all_directories():
            if not directory.exists():
                directory.mkdir(parents=True, exist_ok=True)
                created.append(directory)
                logger.debug("Directory created %s", directory)
        return created
