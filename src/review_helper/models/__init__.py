"""Pydantic models for review-helper."""

from .notes import NOTE_SEPARATOR, Note, PlainNote, ReviewNote
from .project import Author, ProjectConfigFile, TaskRecord

__all__ = [
    # Notes
    "NOTE_SEPARATOR",
    "Note",
    "PlainNote",
    "ReviewNote",
    # Project config
    "Author",
    "ProjectConfigFile",
    "TaskRecord",
]
