# ui/members_panel.py
import streamlit as st

import controller
from models import MEMBER_ROLES

def _on_member_field(state, field, key):
    controller.set_member_draft(state, **{field: st.session_state[key]})

def _on_add_member(state, store):
    controller.set_member_draft(state, name=st.session_state.get("new_member_name", ""),
                                role=st.session_state.get("new_member_role", ""))
    controller.submit_member_draft(state, store)
    # drafts are cleared on success; keep the inputs in step
    st.session_state["new_member_name"] = state.member_draft.name
    st.session_state["new_member_role"] = state.member_draft.role

def render_members_panel(state, store):
    st.subheader("Team Members")

    c1, c2, c3 = st.columns([3, 3, 1], vertical_alignment="bottom")
    c1.text_input("Name", placeholder="Name", key="new_member_name",
                  on_change=_on_member_field, args=(state, "name", "new_member_name"))
    c2.selectbox("Role", [""] + list(MEMBER_ROLES), key="new_member_role",
                 format_func=lambda r: r or "Select Role",
                 on_change=_on_member_field, args=(state, "role", "new_member_role"))
    c3.button("➕", key="add_member_btn", help="Add member", use_container_width=True,
              on_click=_on_add_member, args=(state, store))

    if not state.members:
        st.info("No members yet.")
        return

    for m in state.members:
        r1, r2 = st.columns([6, 1], vertical_alignment="center")
        r1.markdown(f"**{m['name']}**  \n:gray[{m['role']}]")
        r2.button("🗑", key=f"del_member_{m['id']}", help="Remove member",
                  on_click=controller.delete_member, args=(state, store, m["id"]))
