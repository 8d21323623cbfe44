"""Interactive review session for a single task.

The reviewer types one command per line. Bank notes are jotted with `new`,
promoted into the review with `add` (optionally quoting source lines), and the
review is shown, dropped or completed.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from .commands import (
    Action,
    AddNote,
    Complete,
    Drop,
    Incorrect,
    NewNote,
    Show,
    parse_command,
)
from .context import ProjectContext
from .errors import ReviewHelperError
from .ledger import NoteLedger
from .models.notes import ReviewNote

logger = logging.getLogger(__name__)

SHOW_SEPARATOR = "+" * 50


# ============================================================================
# Input and output
# ============================================================================


class LineInputSource:
    """Abstraction for line input to enable testing.

    In production: reads from the terminal.
    In tests: reads from an injected sequence of lines.
    """

    def __init__(self, lines: list[str] | None = None):
        """Initialize line input source.

        Args:
            lines: Optional list of lines for testing.
                   If None, reads from the terminal.
        """
        self._lines = lines
        self._index = 0

    def get_line(self) -> str:
        """Get the next line of input.

        Raises:
            EOFError: If the input is exhausted
        """
        if self._lines is not None:
            if self._index >= len(self._lines):
                raise EOFError("end of input")
            line = self._lines[self._index]
            self._index += 1
            return line
        return input()


@dataclass(frozen=True)
class ShowDestination:
    """Where `show` writes the review: the console, or a file."""

    file_path: Optional[Path] = None

    @classmethod
    def console(cls) -> "ShowDestination":
        return cls()

    @classmethod
    def to_file(cls, file_path: Path) -> "ShowDestination":
        return cls(file_path=Path(file_path))

    @property
    def is_console(self) -> bool:
        return self.file_path is None


# ============================================================================
# Review Engine
# ============================================================================


class ReviewState(str, Enum):
    """Lifecycle of a review session."""

    START = "start"
    REVIEWING = "reviewing"
    FINISHED = "finished"


class ReviewEngine:
    """Review session state machine.

    Owns the task under review (taken out of the project context), the
    author identity and the curated review ledger.
    """

    def __init__(
        self,
        context: ProjectContext,
        task_name: str,
        show: ShowDestination | None = None,
        input_source: LineInputSource | None = None,
        output_fn: Callable[[str], None] | None = None,
    ):
        """Start a session for one task.

        Truncates the task's review file and opens an empty review ledger on it.

        Args:
            context: Loaded project context; the task is removed from it
            task_name: Name of the task to review
            show: Destination for `show` (default: console)
            input_source: Optional LineInputSource for testing
            output_fn: Optional output function (default: print)

        Raises:
            NotFoundError: If the task does not exist
            FormatError: If the task's bank ledger is malformed
            OSError: If the review file cannot be created
        """
        context.switch_to_task(task_name)
        self.task = context.take_current_task()
        self.author = context.author
        self.review: NoteLedger[ReviewNote, ReviewNote] = NoteLedger.create(
            context.paths.review_file(self.task.name),
            ReviewNote,
            ReviewNote,
        )
        self.show_destination = show or ShowDestination.console()
        self.input = input_source or LineInputSource()
        self.output = output_fn or print
        self.state = ReviewState.START
        self.input_exhausted = False

    def is_finished(self) -> bool:
        return self.state is ReviewState.FINISHED

    def step(self) -> Optional[Action]:
        """Consume at most one line of input and perform at most one action.

        Errors while interpreting the line are reported to the reviewer and
        never end the session.

        Returns:
            The action performed, or None for the opening step
        """
        if self.state is ReviewState.FINISHED:
            raise RuntimeError("Review session is already finished")

        if self.state is ReviewState.START:
            self.output("Let's start new review:")
            self.state = ReviewState.REVIEWING
            return None

        try:
            line = self.input.get_line()
        except EOFError as e:
            self.input_exhausted = True
            action: Action = Incorrect(f"Reading line fail: {e}")
        except (OSError, UnicodeDecodeError) as e:
            action = Incorrect(f"Reading line fail: {e}")
        else:
            try:
                action = parse_command(line)
                self._perform(action)
                return action
            except (ReviewHelperError, OSError) as e:
                logger.debug("Command %r failed: %s", line, e)
                action = Incorrect(str(e))

        self._perform(action)
        return action

    def _perform(self, action: Action) -> None:
        if isinstance(action, NewNote):
            index = self.task.add_note(action.text, optional=action.optional)
            logger.info("Bank note %d added to task %s", index, self.task.name)
            self.output("Ok")
        elif isinstance(action, AddNote):
            self._add_note(action)
            self.output("Ok")
        elif isinstance(action, Show):
            self._show()
        elif isinstance(action, Drop):
            self.review.clear()
            logger.info("Review of task %s dropped", self.task.name)
            self.output("Ok")
        elif isinstance(action, Complete):
            self.state = ReviewState.FINISHED
            self.output("Review finished")
        elif isinstance(action, Incorrect):
            self.output(action.message)

    def _add_note(self, action: AddNote) -> None:
        bank_note = self.task.find_note(action.index, optional=action.optional)
        note = ReviewNote(text=bank_note.text)
        if action.reference is not None:
            first, second = action.reference
            note = note.with_excerpt(self.task.extract_excerpt(first, second))
        index = self.review.append(note, optional=action.optional)
        logger.info(
            "Bank note %d promoted to review note %d of task %s",
            action.index,
            index,
            self.task.name,
        )

    def show_text(self) -> str:
        """Review as shown to the reader: author line, separator, ledger."""
        return f"{self.author.display_line()}\n{SHOW_SEPARATOR}\n{self.review.render_text()}"

    def _show(self) -> None:
        text = self.show_text()
        self.output(text.removesuffix("\n"))
        if self.show_destination.is_console:
            return
        path = self.show_destination.file_path
        path.write_text(text, encoding="utf-8")
        logger.info("Review of task %s written to %s", self.task.name, path)
        self.output(f"Review written to {path}")


def run_review(engine: ReviewEngine) -> ReviewEngine:
    """Step the engine until the review is completed or input runs out."""
    while not engine.is_finished():
        engine.step()
        if engine.input_exhausted:
            logger.warning("Input closed before the review was completed")
            break
    return engine
