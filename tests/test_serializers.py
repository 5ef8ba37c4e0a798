from core import Priority, Task
from core.desktop.devtools.application.task_views import TaskGroup
from core.desktop.devtools.interface.serializers import group_to_dict, groups_to_list, task_to_dict


def test_task_to_dict():
    task = Task(
        id="abc",
        name="Plan trip",
        priority=Priority.B,
        created_date="2024-01-01",
        projects=["vacation"],
        contexts=["home"],
        tags={"due": "2024-02-01", "cost": "100"},
        origin="/home/me/todo.txt",
    )
    data = task_to_dict(task)
    assert data["id"] == "abc"
    assert data["priority"] == "B"
    assert data["due_date"] == "2024-02-01"
    assert list(data["tags"]) == ["cost", "due"]
    assert data["file"] == "todo.txt"
    assert data["line"] == "(B) 2024-01-01 Plan trip +vacation @home cost:100 due:2024-02-01"
    assert data["completion_date"] == ""


def test_task_without_priority_is_null():
    assert task_to_dict(Task(id="1", name="x"))["priority"] is None


def test_group_dicts():
    group = TaskGroup(label="work", tasks=[Task(id="1", name="a"), Task(id="2", name="b")])
    data = group_to_dict(group)
    assert data["label"] == "work"
    assert data["count"] == 2
    assert [t["id"] for t in data["tasks"]] == ["1", "2"]
    assert groups_to_list([group, TaskGroup(label="(none)")])[1]["count"] == 0
