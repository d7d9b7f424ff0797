"""Plotly chart builders for the Daily Spends UI.

Each function takes report models produced by the aggregation engine
and returns a `plotly.graph_objects.Figure` that Streamlit renders with
``st.plotly_chart``. Empty inputs give an empty figure titled
"No data to display" rather than raising.
"""

from typing import Optional, Sequence

import plotly.graph_objects as go

from dailyspend.models.reports import CategoryTotal, DateTotal
from dailyspend.utils.dates import parse_date
from dailyspend.utils.money import CURRENCIES


UNCATEGORIZED_COLOR = "#9CA3AF"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_category_pie_chart(
    totals: Sequence[CategoryTotal],
    title: Optional[str] = None,
) -> go.Figure:
    """Donut chart of one day's spending split by category.

    Slices use each category's own color; a category deleted after the
    totals were computed shows as "Unknown".
    """
    if not totals:
        return _empty_figure()

    labels = [t.category.name if t.category else "Unknown" for t in totals]
    colors = [t.category.color if t.category else UNCATEGORIZED_COLOR for t in totals]
    fig = go.Figure(
        go.Pie(
            labels=labels,
            values=[float(t.total) for t in totals],
            marker={"colors": colors},
            hole=0.4,
            sort=False,
        )
    )
    fig.update_layout(title=title or "Spending by category")
    return fig


def create_weekly_bar_chart(
    series: Sequence[DateTotal],
    currency: str = "USD",
    title: Optional[str] = None,
) -> go.Figure:
    """Bar chart of the dense 7-day series, one bar per weekday."""
    if not series:
        return _empty_figure()

    fig = go.Figure(
        go.Bar(
            x=[parse_date(row.date).strftime("%a") for row in series],
            y=[float(row.total) for row in series],
            hovertext=[row.date for row in series],
        )
    )
    fig.update_layout(
        title=title or "Last 7 days",
        xaxis_title="Day",
        yaxis_title=f"Amount ({CURRENCIES.get(currency, '')})",
    )
    return fig


def create_monthly_bar_chart(
    series: Sequence[DateTotal],
    currency: str = "USD",
    title: Optional[str] = None,
) -> go.Figure:
    """Bar chart of the sparse monthly series; only days with spending appear."""
    if not series:
        return _empty_figure()

    fig = go.Figure(
        go.Bar(
            x=[row.date for row in series],
            y=[float(row.total) for row in series],
        )
    )
    fig.update_layout(
        title=title or "Daily spending this month",
        xaxis_title="Date",
        yaxis_title=f"Amount ({CURRENCIES.get(currency, '')})",
    )
    return fig
