"""Tests for result grouping and ordering."""

from procenv.aggregate import detail, histogram
from procenv.models import Classification, ResultRecord


def _records():
    return [
        ResultRecord(Classification.of("/bin"), 30),
        ResultRecord(Classification.absent(), 11),
        ResultRecord(Classification.of("/bin"), 10),
        ResultRecord(Classification.fail(), 5),
        ResultRecord(Classification.absent(), 3),
        ResultRecord(Classification.of("/usr/bin"), 2),
        ResultRecord(Classification.of("/bin"), 1),
    ]


def test_histogram_end_to_end_example():
    """Test equal-sized groups follow classification order."""
    records = [
        ResultRecord(Classification.of("/bin"), 10),
        ResultRecord(Classification.absent(), 11),
    ]

    assert histogram(records) == [
        (Classification.absent(), frozenset({11})),
        (Classification.of("/bin"), frozenset({10})),
    ]


def test_histogram_orders_by_group_size():
    """Test rare classifications come first."""
    groups = histogram(_records())

    assert [len(pids) for _, pids in groups] == [1, 1, 2, 3]
    assert groups == [
        (Classification.fail(), frozenset({5})),
        (Classification.of("/usr/bin"), frozenset({2})),
        (Classification.absent(), frozenset({3, 11})),
        (Classification.of("/bin"), frozenset({1, 10, 30})),
    ]


def test_histogram_covers_every_pid_once():
    """Test group sizes add up to the number of records."""
    records = _records()
    groups = histogram(records)

    all_pids = [pid for _, pids in groups for pid in pids]
    assert sum(len(pids) for _, pids in groups) == len(records)
    assert sorted(all_pids) == sorted(record.pid for record in records)


def test_histogram_ignores_command_lines():
    """Test command lines do not split groups."""
    records = [
        ResultRecord(Classification.of("x"), 1, "a"),
        ResultRecord(Classification.of("x"), 2, "b"),
    ]

    assert histogram(records) == [(Classification.of("x"), frozenset({1, 2}))]


def test_histogram_empty():
    """Test no records yield no groups."""
    assert histogram([]) == []


def test_histogram_independent_of_input_order():
    """Test the result does not depend on enumeration order."""
    records = _records()

    assert histogram(records) == histogram(reversed(records))


def test_detail_sorts_by_classification_then_pid():
    """Test detail rows are in (classification, pid) order."""
    rows = detail(_records())

    assert [(row.classification, row.pid) for row in rows] == [
        (Classification.fail(), 5),
        (Classification.absent(), 3),
        (Classification.absent(), 11),
        (Classification.of("/bin"), 1),
        (Classification.of("/bin"), 10),
        (Classification.of("/bin"), 30),
        (Classification.of("/usr/bin"), 2),
    ]


def test_detail_keeps_every_record():
    """Test no records are merged or dropped."""
    records = _records()

    assert sorted(detail(records), key=lambda r: r.pid) == sorted(records, key=lambda r: r.pid)


def test_detail_is_idempotent():
    """Test sorting an already sorted listing changes nothing."""
    rows = detail(_records())

    assert detail(rows) == rows
