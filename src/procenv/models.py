"""Data models for procenv."""

from dataclasses import dataclass
from enum import IntEnum


class Kind(IntEnum):
    """Outcome of looking up one variable in one environment record.

    The integer values define the sort order of classifications.
    """

    FAIL = 0
    ABSENT = 1
    VALUE = 2


@dataclass(slots=True, frozen=True, order=True)
class Classification:
    """Result of searching a process environment for a variable.

    Orders as Fail < Absent < Value, with values compared as strings.
    """

    kind: Kind
    value: str = ""

    @classmethod
    def fail(cls) -> "Classification":
        """Environment record could not be read."""
        return cls(Kind.FAIL)

    @classmethod
    def absent(cls) -> "Classification":
        """Environment record was read but has no such variable."""
        return cls(Kind.ABSENT)

    @classmethod
    def of(cls, value: str) -> "Classification":
        """Variable was found with the given (possibly empty) value."""
        return cls(Kind.VALUE, value)


@dataclass(slots=True, frozen=True)
class ResultRecord:
    """Immutable classification of a single process."""

    classification: Classification
    pid: int
    command_line: str | None = None  # Only read in detail mode
