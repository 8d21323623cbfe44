"""Pydantic models for notes stored in ledgers.

A note is anything that can render itself to plain text and be rebuilt from
that text. Bank notes are plain text; review notes carry numbered source
excerpts that are inlined between separator lines when rendered.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, Field

NOTE_SEPARATOR = "\n" + "-" * 50 + "\n"

NoteT = TypeVar("NoteT", bound="Note")


@runtime_checkable
class Note(Protocol):
    """Capability shared by every note type a ledger can hold."""

    def render(self) -> str:
        """Return the note's full text as it appears in a ledger file."""
        ...

    @classmethod
    def from_text(cls: type[NoteT], text: str) -> NoteT:
        """Build a note from text previously produced by render()."""
        ...


class PlainNote(BaseModel):
    """A candidate remark recorded against a task."""

    text: str = Field(description="Remark text")

    model_config = {"frozen": True}

    def render(self) -> str:
        return self.text

    @classmethod
    def from_text(cls, text: str) -> "PlainNote":
        return cls(text=text)


class ReviewNote(BaseModel):
    """A remark promoted into a review, optionally with source excerpts."""

    text: str = Field(description="Remark text")
    excerpts: tuple[str, ...] = Field(
        default=(),
        description="Numbered source-line blocks attached to the remark",
    )

    model_config = {"frozen": True}

    def render(self) -> str:
        if not self.excerpts:
            return self.text
        return (
            self.text
            + NOTE_SEPARATOR
            + NOTE_SEPARATOR.join(self.excerpts)
            + NOTE_SEPARATOR
        )

    @classmethod
    def from_text(cls, text: str) -> "ReviewNote":
        # Excerpts are already inlined in stored text, so it is kept whole.
        return cls(text=text)

    def with_excerpt(self, excerpt: str) -> "ReviewNote":
        """Return a copy of this note with one more excerpt attached."""
        return self.model_copy(update={"excerpts": self.excerpts + (excerpt,)})
