# utils/report.py
import io
import logging
from datetime import date

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER, landscape as RL_landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfgen import canvas as _rl_canvas
from reportlab.platypus import (
    Image as RLImage, KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle,
)

from utils.charts import member_bar, status_pie
from utils.dates import format_due
from utils.progress import STATUS_LABELS, completion_ratio, member_task_counts, project_status, status_counts

logger = logging.getLogger(__name__)

# Try importing kaleido (optional) for chart images inside PDF
try:
    import plotly.io as pio
    import kaleido  # noqa: F401
    _HAS_KALEIDO = True
except ImportError:
    _HAS_KALEIDO = False


def _page_number(canv: _rl_canvas.Canvas, doc):
    canv.setFont("Helvetica", 8)
    canv.setFillColor(colors.HexColor("#64748b"))
    canv.drawRightString(doc.pagesize[0] - 36, 18, f"Page {canv.getPageNumber()}")


def _grid_table(rows, col_widths, header_bg="#f3f4f6"):
    tbl = Table(rows, repeatRows=1, colWidths=col_widths)
    tbl.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(header_bg)),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 1), (-1, -1), 9),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOX", (0, 0), (-1, -1), 0.5, colors.HexColor("#d1d5db")),
        ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#e5e7eb")),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f8fafc")]),
    ]))
    return tbl


def _chart_image(fig):
    fig.update_layout(template="plotly_white", paper_bgcolor="white", plot_bgcolor="white")
    img = pio.to_image(fig, format="png", width=900, height=420, scale=2)
    return RLImage(io.BytesIO(img), width=480, height=224)


def build_team_pdf(members, tasks, title="Trawork Team Report",
                   include_charts=True, page_landscape=False) -> bytes:
    """Return PDF bytes."""
    buf = io.BytesIO()
    pagesize = RL_landscape(LETTER) if page_landscape else LETTER
    doc = SimpleDocTemplate(buf, pagesize=pagesize, topMargin=36, bottomMargin=36, leftMargin=36, rightMargin=36)

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1", fontSize=18, leading=22, spaceAfter=12, textColor=colors.HexColor("#0f172a")))
    styles.add(ParagraphStyle(name="H2", fontSize=14, leading=18, spaceAfter=8, textColor=colors.HexColor("#1f2937")))
    styles.add(ParagraphStyle(name="Muted", fontSize=9, textColor=colors.HexColor("#6b7280")))
    styles.add(ParagraphStyle(name="Body", fontSize=10.5, leading=14))

    health = project_status(tasks)
    todo, in_progress, completed = status_counts(tasks)

    story = [
        Paragraph(title, styles["H1"]),
        Paragraph(f"Generated {date.today().isoformat()}", styles["Muted"]),
        Spacer(1, 10),
        Paragraph(
            f'Project status: <font color="{health.color}"><b>{health.label}</b></font> '
            f"({round(completion_ratio(tasks) * 100)}% of tasks completed)",
            styles["Body"],
        ),
        Spacer(1, 8),
    ]

    kpi = Table(
        [["Members", "Tasks", STATUS_LABELS["todo"], STATUS_LABELS["in_progress"], STATUS_LABELS["completed"]],
         [str(len(members)), str(len(tasks)), str(todo), str(in_progress), str(completed)]],
        colWidths=[90, 90, 90, 100, 100],
    )
    kpi.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#eef2ff")),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("BOX", (0, 0), (-1, -1), 0.5, colors.HexColor("#d1d5db")),
        ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#e5e7eb")),
    ]))
    story += [kpi, Spacer(1, 12)]

    if include_charts and _HAS_KALEIDO:
        story.append(Paragraph("Task Status Distribution", styles["H2"]))
        story.append(_chart_image(status_pie(tasks)))
        story.append(Paragraph("Tasks per Member", styles["H2"]))
        story.append(_chart_image(member_bar(members, tasks)))
        story.append(Spacer(1, 8))
    elif include_charts:
        logger.info("kaleido not installed, PDF report without charts")
        story.append(Paragraph("Charts not embedded (kaleido not installed).", styles["Muted"]))
        story.append(Spacer(1, 8))

    story.append(Paragraph("Team Members", styles["H2"]))
    if not members:
        story.append(Paragraph("No members.", styles["Body"]))
    else:
        counts = dict(zip((m["id"] for m in members), (c for _, c in member_task_counts(members, tasks))))
        rows = [["Name", "Role", "Tasks"]] + [[m["name"], m["role"], str(counts.get(m["id"], 0))] for m in members]
        story.append(_grid_table(rows, [220, 160, 60]))
    story.append(Spacer(1, 12))

    story.append(Paragraph("Tasks", styles["H2"]))
    if not tasks:
        story.append(Paragraph("No tasks.", styles["Body"]))
    else:
        names = {m["id"]: f'{m["name"]} ({m["role"]})' for m in members}
        rows = [["Task", "Assignee", "Status", "Due"]] + [
            [t["title"], names.get(t.get("assignee"), "—"), STATUS_LABELS.get(t["status"], t["status"]),
             format_due(t.get("deadline"))]
            for t in tasks
        ]
        story.append(KeepTogether(_grid_table(rows, [200, 160, 80, 90])))

    doc.build(story, onFirstPage=_page_number, onLaterPages=_page_number)
    pdf_bytes = buf.getvalue()
    buf.close()
    return pdf_bytes
