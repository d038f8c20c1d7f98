"""Smoke tests for deep_pockets.visualization."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from deep_pockets import formulas, visualization
from deep_pockets.budget import generate_smart_budget
from deep_pockets.catalog import FRAME_COLUMNS, load_default_catalog
from deep_pockets.engine import AllocationEngine


def _recomputed_catalog(income: float = 5000):
    catalog = load_default_catalog()
    AllocationEngine().recompute(catalog, income)
    return catalog


def test_empty_frames_give_placeholder():
    empty = pd.DataFrame(columns=FRAME_COLUMNS)
    for fig in (
        visualization.create_allocation_chart(empty),
        visualization.create_recommendation_pie_chart(empty),
        visualization.create_amortization_chart(pd.DataFrame(columns=formulas.SCHEDULE_COLUMNS)),
        visualization.create_budget_chart(pd.DataFrame(), 1000),
    ):
        assert isinstance(fig, go.Figure)
        assert fig.layout.title.text == "No data to display"


def test_allocation_chart():
    fig = visualization.create_allocation_chart(_recomputed_catalog().to_frame())
    assert len(fig.data) > 0
    assert fig.layout.yaxis.title.text == "Allocation (%)"


def test_recommendation_pie_chart():
    fig = visualization.create_recommendation_pie_chart(_recomputed_catalog().to_frame(), title="Mine")
    assert fig.data[0].type == 'pie'
    assert fig.layout.title.text == "Mine"


def test_pie_chart_with_zero_income_is_empty():
    fig = visualization.create_recommendation_pie_chart(_recomputed_catalog(0).to_frame())
    assert fig.layout.title.text == "No data to display"


def test_budget_chart():
    budget = generate_smart_budget(_recomputed_catalog(), 5000)
    fig = visualization.create_budget_chart(budget.to_frame(), 5000)
    assert len(fig.data) == 1
    assert len(fig.data[0].y) == len(budget)


def test_amortization_chart():
    schedule = formulas.amortization_schedule(20_000, 5.0, 5)
    fig = visualization.create_amortization_chart(schedule)
    assert [trace.name for trace in fig.data] == ['Principal', 'Interest', 'Balance']
    assert fig.layout.barmode == 'stack'
