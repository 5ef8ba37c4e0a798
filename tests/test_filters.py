from datetime import date

import pytest

from core import MalformedDateError, Priority, Task
from core.desktop.devtools.application.task_filter import (
    DateFilter,
    DateFilterMode,
    FilterConfig,
    StatusFilter,
    apply_filters,
    fuzzy_match,
    matches,
)


def _tasks():
    return [
        Task(id="1", name="Write report", projects=["work"], origin="/d/todo.txt"),
        Task(id="2", name="Ship release", projects=["work"], done=True, origin="/d/done.txt"),
        Task(id="3", name="Buy groceries", contexts=["errands"], origin="/d/todo.txt"),
        Task(id="4", name="Review PR", projects=["work", "oss"], priority=Priority.A, tags={"due": "2024-01-10"}, origin="/d/todo.txt"),
        Task(id="5", name="Call mom", contexts=["phone"], priority=Priority.C, tags={"due": "2024-02-01"}, origin="/d/todo.txt"),
    ]


def test_pending_work_tasks_only():
    cfg = FilterConfig(status=StatusFilter.PENDING, projects=["work"])
    assert [t.id for t in apply_filters(_tasks(), cfg)] == ["1", "4"]


def test_empty_config_returns_copy_in_order():
    tasks = _tasks()
    result = apply_filters(tasks, FilterConfig())
    assert result == tasks
    assert result is not tasks


def test_fuzzy_match_subsequence():
    assert fuzzy_match("Buy groceries", "bgr")
    assert not fuzzy_match("Buy groceries", "gbr")
    assert fuzzy_match("anything", "")


def test_search_filter():
    cfg = FilterConfig(search="rvw")
    assert [t.id for t in apply_filters(_tasks(), cfg)] == ["4"]


def test_or_within_category_and_across_categories():
    cfg = FilterConfig(contexts=["phone", "errands"])
    assert [t.id for t in apply_filters(_tasks(), cfg)] == ["3", "5"]
    cfg.priorities = [Priority.C]
    assert [t.id for t in apply_filters(_tasks(), cfg)] == ["5"]


def test_due_filters():
    tasks = _tasks()
    before = FilterConfig(due=DateFilter.parse("before:2024-01-20"))
    assert [t.id for t in apply_filters(tasks, before)] == ["4"]
    on = FilterConfig(due=DateFilter(DateFilterMode.ON, date(2024, 2, 1)))
    assert [t.id for t in apply_filters(tasks, on)] == ["5"]
    after = FilterConfig(due=DateFilter.parse("after:2024-01-10"))
    assert [t.id for t in apply_filters(tasks, after)] == ["5"]
    missing = FilterConfig(due=DateFilter.parse("missing"))
    assert [t.id for t in apply_filters(tasks, missing)] == ["1", "2", "3"]


def test_date_filter_parse_errors():
    with pytest.raises(ValueError):
        DateFilter.parse("soon:2024-01-01")
    with pytest.raises(MalformedDateError):
        DateFilter.parse("before:2024-13-01")


def test_file_filter_matches_origin_suffix():
    cfg = FilterConfig(files=["done.txt"])
    assert [t.id for t in apply_filters(_tasks(), cfg)] == ["2"]


def test_status_done():
    task = _tasks()[1]
    assert matches(task, FilterConfig(status=StatusFilter.DONE))
    assert not matches(task, FilterConfig(status=StatusFilter.PENDING))


def test_cycle_status_and_reset():
    cfg = FilterConfig()
    assert cfg.cycle_status() is StatusFilter.PENDING
    assert cfg.cycle_status() is StatusFilter.DONE
    assert cfg.cycle_status() is StatusFilter.ALL
    cfg.search = "x"
    cfg.projects = ["work"]
    assert not cfg.is_empty()
    cfg.reset()
    assert cfg.is_empty()


def test_summary():
    cfg = FilterConfig(status=StatusFilter.PENDING, projects=["work"], due=DateFilter.parse("before:2024-02-01"))
    assert cfg.summary() == "status=pending | project=work | due:before 2024-02-01"
