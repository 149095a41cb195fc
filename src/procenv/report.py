"""Text rendering of scan results."""

import json
from collections.abc import Iterable, Iterator
from typing import TextIO

from procenv.models import Classification, Kind, ResultRecord


def _quote(text: str) -> str:
    """Quote a value, escaping control characters so it stays on one line."""
    return json.dumps(text, ensure_ascii=False)


def debug_form(classification: Classification) -> str:
    """Format a classification for histogram output."""
    if classification.kind is Kind.FAIL:
        return "Fail"
    if classification.kind is Kind.ABSENT:
        return "Nothing"
    return f"Value({_quote(classification.value)})"


def display_form(classification: Classification) -> str:
    """Format a classification for detail output."""
    if classification.kind is Kind.FAIL:
        return "Fail"
    if classification.kind is Kind.ABSENT:
        return "Nothing"
    return _quote(classification.value)


def histogram_lines(groups: Iterable[tuple[Classification, frozenset[int]]]) -> Iterator[str]:
    """Yield one ``<count> <classification> ([<pids>])`` line per group."""
    for classification, pids in groups:
        pid_list = ", ".join(str(pid) for pid in sorted(pids))
        yield f"{len(pids):5} {debug_form(classification)} ([{pid_list}])"


def detail_lines(records: Iterable[ResultRecord]) -> Iterator[str]:
    """Yield one ``<pid> <classification> <command line>`` line per record."""
    for record in records:
        yield f"{record.pid:>7} {display_form(record.classification)} {record.command_line or ''}"


def write_lines(lines: Iterable[str], stream: TextIO) -> None:
    """
    Write lines to a text stream.

    Raises:
        OSError: If the stream cannot be written, e.g. a closed pipe.
    """
    for line in lines:
        stream.write(line + "\n")
    stream.flush()
