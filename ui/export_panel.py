# ui/export_panel.py
import logging

import streamlit as st

from utils.report import build_team_pdf

logger = logging.getLogger(__name__)

def render_export_panel(state):
    st.subheader("Export PDF")
    st.caption("Generate a PDF report with project status, charts, members and tasks.")

    include_charts = st.checkbox("Embed charts (requires kaleido)", value=True, key="export_include_charts")
    page_landscape = st.checkbox("Landscape pages", value=False, key="export_landscape")

    if st.button("📄 Generate PDF", key="btn_generate_pdf"):
        try:
            pdf_bytes = build_team_pdf(state.members, state.tasks,
                                       include_charts=include_charts,
                                       page_landscape=page_landscape)
        except Exception as e:
            logger.exception("PDF export failed")
            st.error(f"PDF export failed: {e}")
        else:
            st.download_button(
                label="Download Team Report",
                data=pdf_bytes,
                file_name="trawork_report.pdf",
                mime="application/pdf",
            )
