"""
Tests for review_core/metrics_summary.py
"""

from __future__ import annotations

import pandas as pd

from review_core.data import EVALUATION_COLUMNS, PROJECT_COLUMNS
from review_core.metrics_summary import compute_summary
from tests.frames import empty_frame


def test_summary_counts(projects: pd.DataFrame, evaluations: pd.DataFrame) -> None:
    assert compute_summary(projects, evaluations) == {
        "totalProjects": 5,
        "newProjects": 2,
        "endingProjects": 1,
        "improvementProjects": 4,
    }


def test_summary_counts_rows_not_distinct_ids(projects: pd.DataFrame, evaluations: pd.DataFrame) -> None:
    summary = compute_summary(pd.concat([projects, projects], ignore_index=True), evaluations)

    assert summary["totalProjects"] == 10
    assert summary["newProjects"] == 4


def test_summary_of_empty_inputs() -> None:
    summary = compute_summary(empty_frame(PROJECT_COLUMNS), empty_frame(EVALUATION_COLUMNS))

    assert summary == {"totalProjects": 0, "newProjects": 0, "endingProjects": 0, "improvementProjects": 0}
    assert all(isinstance(v, int) for v in summary.values())
