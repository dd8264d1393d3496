# ui/tasks_panel.py
import streamlit as st

import controller
from models import TASK_STATUSES
from utils.dates import format_due
from utils.progress import STATUS_LABELS

def _on_task_field(state, field, key):
    controller.set_task_draft(state, **{field: st.session_state[key]})

def _on_add_task(state, store):
    controller.set_task_draft(state, title=st.session_state.get("new_task_title", ""),
                              assignee=st.session_state.get("new_task_assignee", ""),
                              deadline=st.session_state.get("new_task_deadline"))
    controller.submit_task_draft(state, store)
    st.session_state["new_task_title"] = state.task_draft.title
    st.session_state["new_task_assignee"] = state.task_draft.assignee
    st.session_state["new_task_deadline"] = state.task_draft.deadline

def _on_status_change(state, store, task_id, key):
    controller.update_task_status(state, store, task_id, st.session_state[key])

def render_tasks_panel(state, store):
    st.subheader("Tasks")

    members_by_id = {m["id"]: m for m in state.members}

    st.text_input("Task title", placeholder="Task title", key="new_task_title",
                  on_change=_on_task_field, args=(state, "title", "new_task_title"))
    c1, c2, c3 = st.columns([3, 3, 1], vertical_alignment="bottom")
    c1.selectbox(
        "Assignee", [""] + list(members_by_id), key="new_task_assignee",
        format_func=lambda mid: (f"{members_by_id[mid]['name']} ({members_by_id[mid]['role']})"
                                 if mid in members_by_id else "Select Assignee"),
        on_change=_on_task_field, args=(state, "assignee", "new_task_assignee"),
    )
    c2.date_input("Deadline", value=None, key="new_task_deadline",
                  on_change=_on_task_field, args=(state, "deadline", "new_task_deadline"))
    c3.button("➕", key="add_task_btn", help="Add task", use_container_width=True,
              on_click=_on_add_task, args=(state, store))

    if not state.tasks:
        st.info("No tasks yet.")
        return

    for t in state.tasks:
        m = members_by_id.get(t.get("assignee"))
        who = f"{m['name']} ({m['role']})" if m else "—"
        r1, r2 = st.columns([5, 2], vertical_alignment="center")
        r1.markdown(f"**{t['title']}**  \n:gray[Assigned to: {who}]  \n:gray[Due: {format_due(t.get('deadline'))}]")
        key = f"task_status_{t['id']}"
        # keep the widget on the mirrored value when the list was refetched
        st.session_state[key] = t["status"]
        r2.selectbox("Status", TASK_STATUSES, key=key, label_visibility="collapsed",
                     format_func=lambda s: STATUS_LABELS[s],
                     on_change=_on_status_change, args=(state, store, t["id"], key))
