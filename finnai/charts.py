"""Plotly figures for the dashboard."""

from typing import Iterable

import plotly.graph_objects as go

from finnai.analytics import CategoryTotal, SummaryStats


CATEGORY_COLORS = {
    "Housing": "#6366f1",
    "Food": "#f59e0b",
    "Transport": "#10b981",
    "Shopping": "#ec4899",
    "Entertainment": "#8b5cf6",
    "Health": "#ef4444",
    "Utilities": "#06b6d4",
    "Other": "#64748b",
    "Income": "#22c55e",
}


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def category_pie(breakdown: Iterable[CategoryTotal]) -> go.Figure:
    """Donut of expense totals per category, in breakdown order."""
    entries = list(breakdown)
    if not entries:
        return _empty_figure("No expenses in this timeframe.")

    labels = [entry.category.value for entry in entries]
    fig = go.Figure(
        go.Pie(
            labels=labels,
            values=[float(entry.amount) for entry in entries],
            hole=0.6,
            sort=False,
            marker=dict(colors=[CATEGORY_COLORS.get(label, "#64748b") for label in labels]),
        )
    )
    fig.update_layout(
        title="Spending by category",
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def cash_flow_bar(summary: SummaryStats) -> go.Figure:
    """Income next to expenses for the selected timeframe."""
    if summary.income == 0 and summary.expenses == 0:
        return _empty_figure("No activity in this timeframe.")

    fig = go.Figure()
    fig.add_bar(
        name="Income",
        x=["Income"],
        y=[float(summary.income)],
        marker_color="#2a9d8f",
    )
    fig.add_bar(
        name="Expenses",
        x=["Expenses"],
        y=[float(summary.expenses)],
        marker_color="#e76f51",
    )
    fig.update_layout(
        title="Cash flow",
        showlegend=False,
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig
