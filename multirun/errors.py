"""multirun.errors

Exception types raised by the planner.

Library code raises; only the CLI turns these into ``SystemExit``. Both concrete
errors also subclass :class:`ValueError` so callers that already guard config
parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations


class MultiRunError(Exception):
    """Base class for planner errors."""


class ConfigurationError(MultiRunError, ValueError):
    """The multi-suite configuration cannot be planned.

    Raised for a missing ``multiple`` section, an unknown suite name, a
    malformed browser entry, an unusable ``chunks`` value or an unreadable
    config file.
    """


class GrepPatternError(MultiRunError, ValueError):
    """A grep fragment does not form a valid regular expression."""

    def __init__(self, grep: str, reason: str) -> None:
        super().__init__(f"Invalid grep fragment {grep!r}: {reason}")
        self.grep = grep
        self.reason = reason
