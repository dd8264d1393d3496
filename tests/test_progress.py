# tests/test_progress.py
import pytest

from utils.progress import completion_ratio, member_task_counts, project_status, status_counts

def _tasks(*statuses):
    return [{"id": f"t{i}", "status": s, "assignee": "m1"} for i, s in enumerate(statuses)]

@pytest.mark.parametrize("statuses", [
    (),
    ("todo",),
    ("todo", "in_progress", "completed"),
    ("completed", "completed", "in_progress", "todo", "todo"),
])
def test_status_counts_sum_to_total(statuses):
    tasks = _tasks(*statuses)
    counts = status_counts(tasks)
    assert sum(counts) == len(tasks)
    assert counts == (statuses.count("todo"), statuses.count("in_progress"), statuses.count("completed"))

@pytest.mark.parametrize("done,total,label", [
    (4, 4, "On Track"),
    (2, 4, "At Risk"),
    (1, 4, "Delayed"),
    (10, 10, "On Track"),
    (6, 10, "At Risk"),
    (3, 10, "Delayed"),
    (4, 5, "On Track"),
])
def test_project_status_thresholds(done, total, label):
    tasks = _tasks(*(["completed"] * done + ["todo"] * (total - done)))
    assert project_status(tasks).label == label

def test_empty_project_is_delayed():
    assert completion_ratio([]) == 0.0
    assert project_status([]).label == "Delayed"

def test_member_task_counts_in_member_order():
    members = [{"id": "m2", "name": "Bo"}, {"id": "m1", "name": "Ann"}, {"id": "m3", "name": "Cy"}]
    tasks = [
        {"id": "t1", "status": "todo", "assignee": "m1"},
        {"id": "t2", "status": "todo", "assignee": "m1"},
        {"id": "t3", "status": "completed", "assignee": "m2"},
        {"id": "t4", "status": "todo", "assignee": None},
        {"id": "t5", "status": "todo", "assignee": "gone"},
    ]
    assert member_task_counts(members, tasks) == [("Bo", 1), ("Ann", 2), ("Cy", 0)]
