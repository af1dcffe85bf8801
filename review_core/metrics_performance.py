from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from review_core.data import INDICATOR_KINDS, KIND_OUTPUT, parse_number, round_half_up
from review_core.join_index import ProjectIndex


def compute_type_distribution(performance: pd.DataFrame) -> List[Dict[str, Any]]:
    counts = pd.Series(dtype="int64")
    if not performance.empty and "indicator_kind" in performance.columns:
        kinds = performance["indicator_kind"]
        counts = kinds[kinds.isin(INDICATOR_KINDS)].value_counts()
    return [{"type": kind, "count": int(counts.get(kind, 0))} for kind in INDICATOR_KINDS]


def compute_achievement_rates(performance: pd.DataFrame) -> pd.Series:
    """Mean actual/target percentage of each project's valid output indicators.

    An indicator is valid when its target parses to a number > 0 and its actual
    parses to a number. Projects without one are absent. Sorted descending on the
    unrounded mean; ties keep the order projects first appear in ``performance``.
    """
    if performance.empty:
        return pd.Series(dtype="float64")
    df = performance.dropna(subset=["project_id"]).reset_index(drop=True)
    first_seen = df["project_id"].drop_duplicates()

    outputs = df[df["indicator_kind"].isin([KIND_OUTPUT])]
    outputs = outputs.assign(
        target=parse_number(outputs["target_value"]),
        actual=parse_number(outputs["actual_value"]),
    )
    valid = outputs[(outputs["target"] > 0) & outputs["actual"].notna()]
    if valid.empty:
        return pd.Series(dtype="float64")
    ratios = valid["actual"] / valid["target"] * 100
    means = ratios.groupby(valid["project_id"], sort=False).mean()
    means = means.reindex(pd.Index(first_seen)).dropna()
    return means.sort_values(ascending=False, kind="stable")


def compute_project_performance(performance: pd.DataFrame, index: ProjectIndex) -> List[Dict[str, Any]]:
    rates = compute_achievement_rates(performance)
    return [
        {
            "projectId": str(project_id),
            "achievement": round_half_up(rate, 1),
            "projectName": index.name_of(project_id),
            "ministry": index.ministry_of(project_id),
        }
        for project_id, rate in rates.items()
    ]


def compute_performance_metrics(performance: pd.DataFrame, index: ProjectIndex) -> Dict[str, Any]:
    return {
        "typeDistribution": compute_type_distribution(performance),
        "projectPerformance": compute_project_performance(performance, index),
    }
