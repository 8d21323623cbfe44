"""Parsing of review session command lines.

One line is one command:

    new [optional] <free text...>
    add [optional] [reference <first> <second>] <note_index>
    show
    drop
    complete

Verbs and modifiers are case-sensitive and accept a one-letter alias.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .errors import InputParseError

OPTIONAL_MODIFIERS = ("optional", "o")
REFERENCE_MODIFIERS = ("reference", "r")


@dataclass(frozen=True)
class NewNote:
    """Record a bank note for the task."""

    text: str
    optional: bool = False


@dataclass(frozen=True)
class AddNote:
    """Promote a bank note into the review, optionally with a line range."""

    index: int
    optional: bool = False
    reference: Optional[tuple[int, int]] = None


@dataclass(frozen=True)
class Show:
    pass


@dataclass(frozen=True)
class Drop:
    pass


@dataclass(frozen=True)
class Complete:
    pass


@dataclass(frozen=True)
class Incorrect:
    """A line that could not be turned into a command."""

    message: str


Action = Union[NewNote, AddNote, Show, Drop, Complete, Incorrect]


def _parse_int(token: Optional[str], what: str) -> int:
    if token is None:
        raise InputParseError(f"No {what}")
    try:
        return int(token)
    except ValueError as e:
        raise InputParseError(f"Incorrect {what}: {token!r}") from e


def _parse_line_number(token: Optional[str], what: str) -> int:
    number = _parse_int(token, what)
    if number < 1:
        raise InputParseError(f"Incorrect {what}: line numbers start at 1")
    return number


def _parse_new(tokens: list[str]) -> NewNote:
    optional = bool(tokens) and tokens[0] in OPTIONAL_MODIFIERS
    if optional:
        tokens = tokens[1:]
    if not tokens:
        raise InputParseError("No text in note")
    return NewNote(text=" ".join(tokens), optional=optional)


def _parse_add(tokens: list[str]) -> AddNote:
    if not tokens:
        raise InputParseError("No number in note")

    stream: Iterator[str] = iter(tokens)
    optional = False
    reference = None
    token = next(stream, None)
    # Modifiers may come in either order, each at most once.
    while token is not None:
        if token in OPTIONAL_MODIFIERS and not optional:
            optional = True
        elif token in REFERENCE_MODIFIERS and reference is None:
            first = _parse_line_number(next(stream, None), "first number in reference")
            second = _parse_line_number(next(stream, None), "second number in reference")
            reference = (first, second)
        else:
            break
        token = next(stream, None)

    index = _parse_int(token, "number of note")
    if index < 0:
        raise InputParseError(f"Incorrect number of note: {index}")

    rest = list(stream)
    if rest:
        raise InputParseError(f"Unexpected tokens after note number: {' '.join(rest)}")
    return AddNote(index=index, optional=optional, reference=reference)


def parse_command(line: str) -> Action:
    """Turn one input line into an action.

    Unknown verbs and blank lines become Incorrect actions.

    Raises:
        InputParseError: If a known verb has malformed arguments
    """
    tokens = line.split()
    if not tokens:
        return Incorrect("Unknown action")

    verb, args = tokens[0], tokens[1:]
    if verb in ("new", "n"):
        return _parse_new(args)
    if verb in ("add", "a"):
        return _parse_add(args)
    if verb in ("show", "s"):
        return Show()
    if verb in ("drop", "d"):
        return Drop()
    if verb in ("complete", "c"):
        return Complete()
    return Incorrect("Unknown action")
