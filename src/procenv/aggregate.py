"""Grouping and ordering of scan results."""

from collections import defaultdict
from collections.abc import Iterable

from procenv.models import Classification, ResultRecord


def histogram(records: Iterable[ResultRecord]) -> list[tuple[Classification, frozenset[int]]]:
    """
    Group pids by classification.

    Smaller groups come first so rare values stand out; groups of equal size
    follow classification order.
    """
    groups: defaultdict[Classification, set[int]] = defaultdict(set)
    for record in records:
        groups[record.classification].add(record.pid)

    return sorted(
        ((classification, frozenset(pids)) for classification, pids in groups.items()),
        key=lambda group: (len(group[1]), group[0]),
    )


def detail(records: Iterable[ResultRecord]) -> list[ResultRecord]:
    """Order records by classification, then pid."""
    return sorted(records, key=lambda record: (record.classification, record.pid))
