"""Error types for review-helper."""


class ReviewHelperError(Exception):
    """Base class for all review-helper errors."""


class ConfigError(ReviewHelperError):
    """Project config is missing, unreadable or malformed."""


class FormatError(ReviewHelperError):
    """A ledger file does not follow the numbered-notes format."""


class NotFoundError(ReviewHelperError):
    """A referenced task, note or file does not exist."""


class InputParseError(ReviewHelperError):
    """A review command line could not be parsed."""
