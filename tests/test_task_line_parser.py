import logging

import pytest

from core import MismatchError, Priority, Task
from infrastructure.task_line_parser import (
    LineMismatch,
    LineOk,
    TaskLineParser,
    check_line,
    collapse_whitespace,
    load_line,
    parse_line,
)


def test_priority_and_name():
    task = parse_line("(A) Buy milk")
    assert task.priority is Priority.A
    assert task.name == "Buy milk"
    assert task.to_line() == "(A) Buy milk"


def test_done_with_two_dates_and_priority_after_dates():
    task = parse_line("x 2024-01-19 2024-01-15 (A) Fix bug +backend @security")
    assert task.done is True
    assert task.completion_date == "2024-01-19"
    assert task.created_date == "2024-01-15"
    assert task.priority is Priority.A
    assert task.name == "Fix bug"
    assert task.projects == ["backend"]
    assert task.contexts == ["security"]


def test_projects_contexts_and_tags():
    task = parse_line("(C) Plan trip +vacation @home cost:1000")
    assert task.projects == ["vacation"]
    assert task.contexts == ["home"]
    assert task.tags == {"cost": "1000"}
    assert task.name == "Plan trip"


def test_space_after_colon_is_not_a_tag():
    task = parse_line("Buy milk cost: 1000")
    assert task.tags == {}
    assert task.name == "Buy milk cost: 1000"


def test_due_tag_keeps_hyphenated_date():
    task = parse_line("Call mom due:2024-01-25")
    assert task.tags == {"due": "2024-01-25"}
    assert task.due_date == "2024-01-25"


def test_lowercase_priority_is_normalized():
    task = parse_line("(b) Water plants")
    assert task.priority is Priority.B
    assert task.to_line() == "(B) Water plants"


def test_pending_line_takes_only_creation_date():
    task = parse_line("2024-01-10 Pay rent")
    assert task.created_date == "2024-01-10"
    assert task.completion_date == ""
    assert task.name == "Pay rent"


def test_pending_line_consumes_second_date():
    result = check_line("2024-01-10 2024-01-12 Pay rent")
    assert result.task.created_date == "2024-01-10"
    assert result.task.completion_date == ""
    assert result.task.name == "Pay rent"
    assert not result.ok
    assert result.canonical == "2024-01-10 Pay rent"


def test_done_line_with_single_date_is_completion():
    task = parse_line("x 2024-02-01 Ship it")
    assert task.done
    assert task.completion_date == "2024-02-01"
    assert task.created_date == ""
    assert task.to_line() == "x 2024-02-01 Ship it"


def test_marker_followed_by_punctuation():
    task = parse_line("Buy +milk, eggs @store.")
    assert task.projects == ["milk"]
    assert task.contexts == ["store"]
    assert task.name == "Buy"
    assert not check_line("Buy +milk, eggs @store.").ok


def test_marker_must_follow_whitespace():
    task = parse_line("Email bob@example.com about a+b")
    assert task.contexts == []
    assert task.projects == []
    assert task.name == "Email bob@example.com about a+b"


def test_metadata_before_name_leaves_empty_name():
    task = parse_line("+garden water roses")
    assert task.name == ""
    assert task.projects == ["garden"]


def test_metadata_scanned_across_whole_body():
    task = parse_line("Fix +web bug @office now")
    assert task.name == "Fix"
    assert task.projects == ["web"]
    assert task.contexts == ["office"]


def test_duplicate_projects_collapse_and_sort():
    task = parse_line("Thing +zeta +alpha +zeta")
    assert task.projects == ["alpha", "zeta"]


def test_bare_done_marker_does_not_crash():
    task = parse_line("x 2024-01-01")
    assert task.done
    assert task.name == ""
    assert task.completion_date == "2024-01-01"


def test_priority_without_trailing_space_is_still_priority():
    task = parse_line("(A)Buy milk")
    assert task.priority is Priority.A
    assert task.name == "Buy milk"
    assert not check_line("(A)Buy milk").ok


def test_id_and_origin_are_carried():
    task = TaskLineParser.parse("Read book", "abc123", "/tmp/todo.txt")
    assert task.id == "abc123"
    assert task.origin == "/tmp/todo.txt"


def test_collapse_whitespace():
    assert collapse_whitespace("  a   b\tc  ") == "a b c"


@pytest.mark.parametrize(
    "line",
    [
        "(A) Buy milk",
        "x (B) 2024-01-19 2024-01-15 Fix bug +backend @security",
        "2024-03-01 Plan trip +vacation @home cost:1000 due:2024-04-01",
        "Buy milk cost: 1000",
        "x 2024-02-01 Ship it",
    ],
)
def test_canonical_lines_round_trip(line):
    result = check_line(line)
    assert isinstance(result, LineOk)
    assert result.ok
    assert result.task.to_line() == line


def test_serialize_is_idempotent():
    first = parse_line("Plan   trip @home +vacation (see notes)").to_line()
    assert parse_line(first).to_line() == first


def test_check_line_reports_mismatch():
    result = check_line("Call mom @phone about dinner")
    assert isinstance(result, LineMismatch)
    assert not result.ok
    assert result.original == "Call mom @phone about dinner"
    assert result.canonical == "Call mom @phone"


def test_check_line_ignores_extra_whitespace():
    assert check_line("  (A)   Buy   milk  ").ok



def test_load_line_raises_on_mismatch():
    with pytest.raises(MismatchError) as excinfo:
        load_line("Call mom @phone about dinner", "id1", "todo.txt", line_number=3)
    err = excinfo.value
    assert err.line_number == 3
    assert err.canonical == "Call mom @phone"
    assert "todo.txt:3" in str(err)


def test_load_line_allow_mismatch_keeps_record_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="plaintasks"):
        task = load_line("Call mom @phone about dinner", "id1", "todo.txt", allow_mismatch=True, line_number=2)
    assert task.name == "Call mom"
    assert task.contexts == ["phone"]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    message = warnings[0].getMessage()
    assert "todo.txt:2" in message
    assert "Call mom @phone about dinner" in message
    assert "canonical: Call mom @phone" in message


def test_load_line_canonical_is_silent(caplog):
    with caplog.at_level(logging.WARNING, logger="plaintasks"):
        load_line("(A) Buy milk", allow_mismatch=True)
    assert not caplog.records


@pytest.mark.parametrize(
    "task",
    [
        Task(name="Buy milk"),
        Task(name="Call mom", priority=Priority.A, projects=["family"], contexts=["phone"]),
        Task(name="Plan trip", created_date="2024-03-01", tags={"cost": "1000", "due": "2024-04-01"}),
        Task(name="Fix bug", done=True, completion_date="2024-01-19", created_date="2024-01-15", priority=Priority.B),
        Task(name="Ship it", done=True, completion_date="2024-02-01", projects=["a", "b"]),
        Task(name="Tidy", contexts=["home", "weekend"], tags={"area": "kitchen"}),
    ],
)
def test_parse_of_serialized_record_is_identity(task):
    assert parse_line(task.to_line()) == task


def test_done_record_without_completion_date_is_not_representable():
    # "x DATE name" always reads the lone date as the completion date, so a
    # done task with only a creation date cannot survive a round trip.
    task = Task(name="Fix", done=True, created_date="2024-01-15")
    parsed = parse_line(task.to_line())
    assert parsed.completion_date == "2024-01-15"
    assert parsed.created_date == ""
    assert parsed.to_line() == task.to_line()
