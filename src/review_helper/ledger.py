"""Numbered-notes ledger for review-helper.

A ledger is one human-readable text file holding two ordered lists of notes:

    Necessary:
    0) first necessary note
    1) second necessary note
    Optional:
    0) first optional note

A section header is written only when its list is non-empty, so an empty
ledger is an empty file. Rendered notes may span several lines; any line that
is not a numbered line or a section header continues the previous note.
"""

import io
import logging
import os
import re
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Generic, TextIO, TypeVar

from .errors import FormatError, NotFoundError
from .models.notes import Note

logger = logging.getLogger(__name__)

NECESSARY_HEADER = "Necessary:"
OPTIONAL_HEADER = "Optional:"

_NOTE_LINE = re.compile(r"^(\d+)\) ?(.*)$")

NecessaryT = TypeVar("NecessaryT", bound=Note)
OptionalT = TypeVar("OptionalT", bound=Note)


class NoteLedger(Generic[NecessaryT, OptionalT]):
    """Two ordered note lists persisted to a single file.

    Every mutation rewrites the whole file before returning, so a successful
    call means the new state is on disk.
    """

    def __init__(
        self,
        path: Path,
        necessary_type: type[NecessaryT],
        optional_type: type[OptionalT],
        necessary: list[NecessaryT] | None = None,
        optional: list[OptionalT] | None = None,
    ):
        """Initialize ledger without touching the backing file.

        Args:
            path: Backing file path
            necessary_type: Note class used to rebuild necessary notes
            optional_type: Note class used to rebuild optional notes
            necessary: Initial necessary notes
            optional: Initial optional notes
        """
        self.path = Path(path)
        self.necessary_type = necessary_type
        self.optional_type = optional_type
        self.necessary: list[NecessaryT] = list(necessary or [])
        self.optional: list[OptionalT] = list(optional or [])

    @classmethod
    def parse(
        cls,
        path: Path,
        necessary_type: type[NecessaryT],
        optional_type: type[OptionalT],
    ) -> "NoteLedger[NecessaryT, OptionalT]":
        """Load a ledger from its backing file.

        A missing file is created empty. An empty file is an empty ledger.

        Raises:
            FormatError: If the file is not a well-formed ledger
            OSError: If the file cannot be created or read
        """
        path = Path(path)
        logger.debug("Parsing ledger %s", path)
        if not path.exists():
            path.touch()
            logger.debug("Ledger %s did not exist, created empty", path)
            return cls(path, necessary_type, optional_type)

        content = path.read_text(encoding="utf-8")
        if not content:
            return cls(path, necessary_type, optional_type)

        necessary_texts, optional_texts = _parse_sections(content, path)
        logger.debug(
            "Ledger %s parsed: %d necessary, %d optional",
            path,
            len(necessary_texts),
            len(optional_texts),
        )
        return cls(
            path,
            necessary_type,
            optional_type,
            necessary=[necessary_type.from_text(text) for text in necessary_texts],
            optional=[optional_type.from_text(text) for text in optional_texts],
        )

    @classmethod
    def create(
        cls,
        path: Path,
        necessary_type: type[NecessaryT],
        optional_type: type[OptionalT],
    ) -> "NoteLedger[NecessaryT, OptionalT]":
        """Create (or truncate) the backing file and return an empty ledger."""
        path = Path(path)
        path.write_text("", encoding="utf-8")
        logger.debug("Ledger %s truncated", path)
        return cls(path, necessary_type, optional_type)

    def append(self, note, optional: bool = False) -> int:
        """Append a note to one list and persist the ledger.

        Args:
            note: Note to store
            optional: Store in the optional list instead of the necessary one

        Returns:
            Index of the stored note within its list
        """
        target = self.optional if optional else self.necessary
        target.append(note)
        self.save()
        return len(target) - 1

    def get(self, index: int, optional: bool = False):
        """Return the note at index in the chosen list.

        Raises:
            NotFoundError: If index is out of bounds
        """
        source = self.optional if optional else self.necessary
        if index < 0 or index >= len(source):
            kind = "optional" if optional else "necessary"
            raise NotFoundError(f"Note not found: no {kind} note with number {index}")
        return source[index]

    def clear(self) -> None:
        """Remove every note and persist the empty ledger."""
        self.necessary.clear()
        self.optional.clear()
        self.save()

    def is_empty(self) -> bool:
        return not self.necessary and not self.optional

    def render(self, writer: TextIO) -> None:
        """Write the ledger text to any writer without touching the backing file."""
        if self.necessary:
            writer.write(NECESSARY_HEADER + "\n")
            for num, note in enumerate(self.necessary):
                writer.write(f"{num}) {note.render()}\n")
        if self.optional:
            writer.write(OPTIONAL_HEADER + "\n")
            for num, note in enumerate(self.optional):
                writer.write(f"{num}) {note.render()}\n")
        writer.flush()

    def render_text(self) -> str:
        buffer = io.StringIO()
        self.render(buffer)
        return buffer.getvalue()

    def save(self) -> None:
        """Rewrite the backing file with the current ledger contents.

        Writes a temporary file next to the ledger and renames it over the
        backing path, so readers see either the old or the new ledger.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_name = None
        try:
            with NamedTemporaryFile(
                "w",
                encoding="utf-8",
                delete=False,
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            ) as tmp:
                tmp_name = tmp.name
                self.render(tmp)
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(
            "Ledger %s saved: %d necessary, %d optional",
            self.path,
            len(self.necessary),
            len(self.optional),
        )


def _parse_sections(content: str, path: Path) -> tuple[list[str], list[str]]:
    """Split ledger file content into necessary and optional note texts."""
    lines = content.split("\n")
    # The final newline terminates the last line, it is not an empty line.
    if lines[-1] == "":
        lines.pop()

    first = lines[0]
    if first not in (NECESSARY_HEADER, OPTIONAL_HEADER):
        raise FormatError(f"{path}: first line should be '{NECESSARY_HEADER}', got {first!r}")

    sections: dict[str, list[list[str]]] = {NECESSARY_HEADER: [], OPTIONAL_HEADER: []}
    current = first
    for line_no, line in enumerate(lines[1:], start=2):
        if line == OPTIONAL_HEADER and current == NECESSARY_HEADER:
            current = OPTIONAL_HEADER
            continue
        if line in (NECESSARY_HEADER, OPTIONAL_HEADER):
            raise FormatError(f"{path}:{line_no}: unexpected section header {line!r}")

        notes = sections[current]
        match = _NOTE_LINE.match(line)
        if match:
            parsed_num = int(match.group(1))
            if parsed_num != len(notes):
                raise FormatError(
                    f"{path}:{line_no}: incorrect note number {parsed_num}, "
                    f"expected {len(notes)}"
                )
            notes.append([match.group(2)])
        elif notes:
            notes[-1].append(line)
        else:
            raise FormatError(f"{path}:{line_no}: incorrect line {line!r}")

    return (
        ["\n".join(parts) for parts in sections[NECESSARY_HEADER]],
        ["\n".join(parts) for parts in sections[OPTIONAL_HEADER]],
    )
