"""Reviewable tasks and source excerpt extraction."""

import logging
from pathlib import Path

from .errors import InputParseError, NotFoundError, ReviewHelperError
from .ledger import NoteLedger
from .models.notes import PlainNote
from .models.project import TaskRecord
from .paths import ProjectPaths

logger = logging.getLogger(__name__)


def extract_excerpt(code_path: Path, first: int, second: int) -> str:
    """Extract numbered lines first..second (1-based, inclusive) from a file.

    Each line is rendered as its right-aligned 4-wide line number, ": ", and
    the raw line. Lines past the end of the file are omitted.

    Args:
        code_path: Source file to read
        first: First line number
        second: Last line number

    Returns:
        The numbered lines joined by newlines

    Raises:
        InputParseError: If the range is not a valid 1-based range
        OSError: If the file cannot be read
    """
    if first < 1 or second < 1:
        raise InputParseError(f"Line numbers start at 1, got {first} {second}")
    if first > second:
        raise InputParseError(f"Incorrect reference range: {first} is after {second}")

    excerpt_lines = []
    # Only "\n" ends a line; a stray "\r" stays part of the quoted text.
    with open(code_path, "r", encoding="utf-8", errors="replace", newline="\n") as f:
        for number, line in enumerate(f, start=1):
            if number < first:
                continue
            if number > second:
                break
            raw = line.removesuffix("\n").removesuffix("\r")
            excerpt_lines.append(f"{number:4}: {raw}")

    logger.debug("Reference extracted from %s by rows: %d, %d", code_path, first, second)
    return "\n".join(excerpt_lines)


def notes_path_for(record: TaskRecord, paths: ProjectPaths) -> Path:
    """Resolve a task's notes ledger path, relative paths against the project root."""
    notes_path = Path(record.notes_ledger)
    if not notes_path.is_absolute():
        notes_path = paths.root / notes_path
    return notes_path


def check_task_files(
    paths: ProjectPaths, name: str, code_file_path: Path, notes_path: Path
) -> None:
    """Verify a task's directory, code file and notes file exist.

    Nothing is created or parsed.

    Raises:
        NotFoundError: If any of them is missing or of the wrong kind
    """
    task_dir = paths.task_dir(name)
    logger.debug("Check task directory: %s", task_dir)
    if not task_dir.is_dir():
        raise NotFoundError(f"Task directory doesn't exist: {task_dir}")

    if not paths.notes.is_dir():
        raise NotFoundError(f"Notes directory doesn't exist: {paths.notes}")

    logger.debug("Check task code file: %s", code_file_path)
    if not code_file_path.is_file():
        raise NotFoundError(f"Task code file doesn't exist: {code_file_path}")

    logger.debug("Check notes file: %s", notes_path)
    if not notes_path.is_file():
        raise NotFoundError(f"Notes file doesn't exist: {notes_path}")


class Task:
    """A reviewable unit: one code file plus the reviewer's bank of notes."""

    def __init__(
        self,
        name: str,
        code_file_name: str,
        code_file_path: Path,
        bank: NoteLedger[PlainNote, PlainNote],
    ):
        self.name = name
        self.code_file_name = code_file_name
        self.code_file_path = Path(code_file_path)
        self.bank = bank

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, code_file_path={str(self.code_file_path)!r})"

    @classmethod
    def from_record(cls, record: TaskRecord, paths: ProjectPaths) -> "Task":
        """Open a task listed in the config, parsing its bank ledger."""
        bank = NoteLedger.parse(notes_path_for(record, paths), PlainNote, PlainNote)
        return cls(
            name=record.name,
            code_file_name=record.code_file_name,
            code_file_path=paths.code_file(record.name, record.code_file_name),
            bank=bank,
        )

    @classmethod
    def create(cls, paths: ProjectPaths, name: str, code_file_name: str) -> "Task":
        """Create a new task: its directory, an empty code file and its bank ledger.

        Raises:
            ReviewHelperError: If the code file already exists
        """
        task_dir = paths.task_dir(name)
        task_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Task directory created %s", task_dir)

        code_file_path = paths.code_file(name, code_file_name)
        try:
            with open(code_file_path, "x", encoding="utf-8"):
                pass
        except FileExistsError as e:
            raise ReviewHelperError(
                f"Code file for task {name!r} already exists: {code_file_path}"
            ) from e
        logger.debug("File to code created %s", code_file_path)

        bank = NoteLedger.parse(paths.notes_file(name), PlainNote, PlainNote)
        return cls(name, code_file_name, code_file_path, bank)

    def to_record(self, paths: ProjectPaths) -> TaskRecord:
        """Describe this task as a config entry."""
        notes_path = self.bank.path
        try:
            notes_ledger = notes_path.relative_to(paths.root).as_posix()
        except ValueError:
            notes_ledger = str(notes_path)
        return TaskRecord(
            name=self.name,
            code_file_name=self.code_file_name,
            notes_ledger=notes_ledger,
        )

    def add_note(self, text: str, optional: bool = False) -> int:
        """Record a bank note and persist the bank ledger."""
        return self.bank.append(PlainNote(text=text), optional=optional)

    def find_note(self, index: int, optional: bool = False) -> PlainNote:
        return self.bank.get(index, optional=optional)

    def extract_excerpt(self, first: int, second: int) -> str:
        return extract_excerpt(self.code_file_path, first, second)

    def check_environment(self, paths: ProjectPaths) -> None:
        """Verify the task's directory, code file and notes file exist."""
        check_task_files(paths, self.name, self.code_file_path, self.bank.path)
