# utils/charts.py
import pandas as pd
import plotly.express as px

from utils.progress import STATUS_COLORS, STATUS_LABELS, member_task_counts, status_counts

def status_chart_df(tasks) -> pd.DataFrame:
    counts = status_counts(tasks)
    return pd.DataFrame({
        "Status": [STATUS_LABELS[s] for s in ("todo", "in_progress", "completed")],
        "Count": list(counts),
    })

def member_chart_df(members, tasks) -> pd.DataFrame:
    rows = member_task_counts(members, tasks)
    return pd.DataFrame(rows, columns=["Member", "Tasks Assigned"])

def status_pie(tasks):
    df = status_chart_df(tasks)
    fig = px.pie(df, names="Status", values="Count", color="Status",
                 color_discrete_map=STATUS_COLORS,
                 category_orders={"Status": list(STATUS_LABELS.values())})
    fig.update_traces(sort=False, textinfo="value+percent")
    fig.update_layout(margin=dict(l=10, r=10, t=10, b=10), legend_title_text="Status", height=300)
    return fig

def member_bar(members, tasks):
    df = member_chart_df(members, tasks)
    fig = px.bar(df, x="Member", y="Tasks Assigned", text="Tasks Assigned",
                 color_discrete_sequence=["#6366F1"])
    fig.update_traces(textposition="outside")
    fig.update_yaxes(rangemode="tozero", dtick=1, title=None)
    fig.update_xaxes(title=None)
    fig.update_layout(margin=dict(l=10, r=10, t=10, b=10), height=300)
    return fig
