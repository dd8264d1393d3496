# main.py

#============================================================#
#                          Trawork                           #
#============================================================#
# Purpose     : Trawork is a small team task tracker with    #
#               members, tasks, status charts and a project  #
#               health label (SQLite/Supabase powered)       #
#============================================================#

import logging

import streamlit as st

import controller
import db
from auth import AuthClient
from logging_setup import setup_logging
from ui.analytics_panel import render_analytics_panel
from ui.auth_panel import full_screen_login
from ui.export_panel import render_export_panel
from ui.members_panel import render_members_panel
from ui.tasks_panel import render_tasks_panel

st.set_page_config(
    page_title="Trawork - Team Tasks",
    page_icon="👥",
    layout="wide",
    initial_sidebar_state="collapsed",
)

@st.cache_resource
def _init_once():
    setup_logging(db.get_setting("LOG_LEVEL", "INFO"))
    db.init_db()
    return True

_init_once()
logger = logging.getLogger(__name__)

NOTICE_ICONS = {"success": "✅", "error": "⚠️"}

def _client():
    """Per-browser-session auth, store and state, wired together once."""
    if "app_state" not in st.session_state:
        auth = AuthClient()
        store = db.TableStore(auth)
        state = controller.AppState()
        auth.on_session_change(lambda _event, session: controller.apply_session(state, store, session))
        st.session_state["auth"] = auth
        st.session_state["store"] = store
        st.session_state["app_state"] = state
        logger.debug("new browser session")
    return st.session_state["auth"], st.session_state["store"], st.session_state["app_state"]

def _flush_notices(state):
    for n in controller.drain_notices(state):
        st.toast(n.message, icon=NOTICE_ICONS.get(n.kind))

auth, store, state = _client()

# picks up expiry between reruns
controller.apply_session(state, store, auth.get_session())

if not state.authenticated:
    _flush_notices(state)
    full_screen_login(auth)
    st.stop()

# ---------- Header ----------
h1, h2, h3 = st.columns([6, 1, 1], vertical_alignment="center")
with h1:
    st.title("👥 TRAWORK")
    st.caption(f"Signed in as **{state.session.email}**")
with h2:
    st.button("🔄 Refresh", use_container_width=True, on_click=controller.refresh, args=(state, store))
with h3:
    st.button("Sign Out", type="primary", use_container_width=True, on_click=auth.sign_out)

# ---------- Analytics ----------
render_analytics_panel(state)
st.markdown("---")

# ---------- Members & Tasks ----------
tab1, tab2 = st.tabs(["Team", "Export PDF"])
with tab1:
    col_m, col_t = st.columns(2, gap="large")
    with col_m:
        render_members_panel(state, store)
    with col_t:
        render_tasks_panel(state, store)
with tab2:
    render_export_panel(state)

_flush_notices(state)
