"""review-helper: note ledgers and an interactive review loop for code reviewers."""

__version__ = "0.1.0"
