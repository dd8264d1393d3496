# utils/progress.py
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

STATUS_LABELS = {
    "todo": "To Do",
    "in_progress": "In Progress",
    "completed": "Completed",
}

STATUS_COLORS = {
    "To Do": "#EF4444",        # red-500
    "In Progress": "#F59E0B",  # amber-500
    "Completed": "#10B981",    # emerald-500
}

@dataclass(frozen=True)
class ProjectStatus:
    label: str
    color: str

ON_TRACK = ProjectStatus("On Track", "#16A34A")
AT_RISK = ProjectStatus("At Risk", "#EAB308")
DELAYED = ProjectStatus("Delayed", "#DC2626")

def status_counts(tasks: Iterable[Dict]) -> Tuple[int, int, int]:
    """(todo, in_progress, completed) for the status pie."""
    todo = in_progress = completed = 0
    for t in tasks:
        s = t.get("status")
        if s == "todo":
            todo += 1
        elif s == "in_progress":
            in_progress += 1
        elif s == "completed":
            completed += 1
    return todo, in_progress, completed

def member_task_counts(members: Iterable[Dict], tasks: Iterable[Dict]) -> List[Tuple[str, int]]:
    """(member name, assigned task count) in member order."""
    per_assignee: Dict[str, int] = {}
    for t in tasks:
        a = t.get("assignee")
        if a is not None:
            per_assignee[a] = per_assignee.get(a, 0) + 1
    return [(m.get("name", ""), per_assignee.get(m.get("id"), 0)) for m in members]

def completion_ratio(tasks: List[Dict]) -> float:
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.get("status") == "completed")
    return float(done / len(tasks))

def project_status(tasks: List[Dict]) -> ProjectStatus:
    ratio = completion_ratio(tasks)
    if ratio >= 0.8:
        return ON_TRACK
    if ratio >= 0.5:
        return AT_RISK
    return DELAYED
