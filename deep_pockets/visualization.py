"""Plotly figure builders for category allocations and loan schedules.

Each function takes a DataFrame produced elsewhere in the package
(:meth:`CategoryCatalog.to_frame`, :meth:`Budget.to_frame` or
:func:`formulas.amortization_schedule`) and returns a
`plotly.graph_objects.Figure`. Empty inputs produce an empty figure
titled "No data to display" so callers never need to special-case them.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_allocation_chart(catalog_frame: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Bar chart of allocation percentage per category.

    Parameters
    ----------
    catalog_frame : pandas.DataFrame
        Output of :meth:`CategoryCatalog.to_frame`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bars coloured by category type, percentages on the y axis.
    """
    if catalog_frame.empty:
        return _empty_figure()
    df = catalog_frame.assign(
        allocation=catalog_frame["allocation_percentage"] * 100,
        label=catalog_frame["emoji"] + " " + catalog_frame["name"],
    )
    fig = px.bar(df, x="label", y="allocation", color="type")
    fig.update_layout(
        title=title or "Recommended allocation by category",
        xaxis_title="Category",
        yaxis_title="Allocation (%)",
    )
    return fig


def create_recommendation_pie_chart(catalog_frame: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Pie chart of monthly recommended amounts grouped by category type.

    TOTAL categories are converted to a monthly figure before grouping.
    """
    if catalog_frame.empty:
        return _empty_figure()
    monthly = catalog_frame["recommended_amount"].where(
        catalog_frame["display_type"] != "total",
        catalog_frame["recommended_amount"] / 12,
    )
    grouped = monthly.groupby(catalog_frame["type"]).sum()
    grouped = grouped[grouped > 0]
    if grouped.empty:
        return _empty_figure()
    df = grouped.reset_index()
    df.columns = ["Type", "Monthly"]
    fig = px.pie(df, names="Type", values="Monthly")
    fig.update_layout(title=title or "Monthly recommendations by type")
    return fig


def create_budget_chart(budget_frame: pd.DataFrame, monthly_income: float, title: str | None = None) -> go.Figure:
    """Horizontal bars of a budget's monthly lines with an income marker."""
    if budget_frame.empty:
        return _empty_figure()
    df = budget_frame.sort_values("monthly_amount")
    fig = go.Figure(
        go.Bar(x=df["monthly_amount"], y=df["name"], orientation="h", name="Monthly")
    )
    fig.add_vline(x=monthly_income, line_dash="dash", annotation_text="Income")
    fig.update_layout(
        title=title or "Monthly budget",
        xaxis_title="Amount",
        yaxis_title="Category",
    )
    return fig


def create_amortization_chart(schedule: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Stacked interest/principal bars with the remaining balance as a line.

    Parameters
    ----------
    schedule : pandas.DataFrame
        Output of :func:`deep_pockets.formulas.amortization_schedule`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Figure with the balance on a secondary y axis.
    """
    if schedule.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(x=schedule["Month"], y=schedule["Principal"], name="Principal"))
    fig.add_trace(go.Bar(x=schedule["Month"], y=schedule["Interest"], name="Interest"))
    fig.add_trace(
        go.Scatter(x=schedule["Month"], y=schedule["Balance"], name="Balance", yaxis="y2", mode="lines")
    )
    fig.update_layout(
        title=title or "Loan amortization",
        barmode="stack",
        xaxis_title="Month",
        yaxis=dict(title="Payment"),
        yaxis2=dict(title="Balance", overlaying="y", side="right"),
    )
    return fig
