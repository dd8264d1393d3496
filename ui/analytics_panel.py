# ui/analytics_panel.py
import streamlit as st

from utils.charts import member_bar, status_pie
from utils.progress import completion_ratio, project_status

def render_analytics_panel(state):
    health = project_status(state.tasks)
    pct = round(completion_ratio(state.tasks) * 100)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.markdown(f"**Project Status**  \n<span style='color:{health.color};font-size:1.6rem;font-weight:700;'>"
                    f"{health.label}</span>", unsafe_allow_html=True)
    with c2: st.metric("Tasks Completed", f"{pct}%")
    with c3: st.metric("Team Members", len(state.members))

    col1, col2 = st.columns(2, gap="medium")
    with col1:
        st.markdown("**Task Status Distribution**")
        if not state.tasks:
            st.info("Add tasks to see the status distribution.")
        else:
            st.plotly_chart(status_pie(state.tasks), use_container_width=True, config={"displaylogo": False})
    with col2:
        st.markdown("**Tasks per Member**")
        if not state.members:
            st.info("Add members to see their workload.")
        else:
            st.plotly_chart(member_bar(state.members, state.tasks), use_container_width=True,
                            config={"displaylogo": False})
