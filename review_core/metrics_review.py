from __future__ import annotations

from typing import Any, Dict, List

import numpy as np
import pandas as pd

from review_core.config import DEFAULT_IMPROVEMENT_CASE_LIMIT
from review_core.data import (
    IMPROVEMENT_VERDICTS,
    VERDICT_FUNDAMENTAL,
    VERDICT_PARTIAL,
    VERDICTS,
    round_half_up,
    text_or,
)
from review_core.join_index import ProjectIndex
from review_core.metrics_distribution import compute_distribution
from review_core.sampling import sample_rows


def compute_review_distribution(evaluations: pd.DataFrame) -> List[Dict[str, Any]]:
    return compute_distribution(evaluations, "verdict", label="review")


def compute_ministry_reviews(evaluations: pd.DataFrame, index: ProjectIndex) -> List[Dict[str, Any]]:
    """Verdict counts and improvement rate per ministry.

    Only evaluations whose project id joins to a project with a ministry are
    counted. Verdicts outside the five known ones still count toward ``total``
    and get their own column.
    """
    if evaluations.empty or not len(index):
        return []
    base = evaluations.dropna(subset=["project_id", "verdict"])[["project_id", "verdict"]]
    projects = index.to_frame()[["project_id", "ministry"]]
    joined = base.merge(projects, on="project_id", how="inner").dropna(subset=["ministry"])
    if joined.empty:
        return []

    ministries = joined["ministry"].drop_duplicates()
    extra = [v for v in joined["verdict"].drop_duplicates() if v not in VERDICTS]
    counts = (
        joined.groupby(["ministry", "verdict"], sort=False)
        .size()
        .unstack(fill_value=0)
        .reindex(index=pd.Index(ministries), columns=list(VERDICTS) + extra, fill_value=0)
    )
    totals = counts.sum(axis=1)
    rates = (counts[VERDICT_PARTIAL] + counts[VERDICT_FUNDAMENTAL]) / totals * 100
    order = rates.sort_values(ascending=False, kind="stable").index

    rows: List[Dict[str, Any]] = []
    for ministry in order:
        row: Dict[str, Any] = {"ministry": str(ministry)}
        row.update({str(verdict): int(counts.at[ministry, verdict]) for verdict in counts.columns})
        row["total"] = int(totals[ministry])
        row["improvementRate"] = round_half_up(rates[ministry], 1)
        rows.append(row)
    return rows


def compute_improvement_cases(
    evaluations: pd.DataFrame,
    index: ProjectIndex,
    *,
    rng: np.random.Generator,
    limit: int = DEFAULT_IMPROVEMENT_CASE_LIMIT,
) -> List[Dict[str, Any]]:
    """Random highlight reel of improvement verdicts that carry a narrative.

    The selection differs between runs unless ``rng`` is seeded.
    """
    if evaluations.empty:
        return []
    mask = evaluations["verdict"].isin(IMPROVEMENT_VERDICTS) & evaluations["improvement"].notna()
    picked = sample_rows(evaluations[mask], limit, rng)
    return [
        {
            "projectId": text_or(row.project_id),
            "reviewType": str(row.verdict),
            "improvement": str(row.improvement),
            "projectName": index.name_of(row.project_id),
            "ministry": index.ministry_of(row.project_id),
        }
        for row in picked.itertuples(index=False)
    ]


def compute_review_metrics(
    evaluations: pd.DataFrame,
    index: ProjectIndex,
    *,
    rng: np.random.Generator,
    case_limit: int = DEFAULT_IMPROVEMENT_CASE_LIMIT,
) -> Dict[str, Any]:
    return {
        "reviewDistribution": compute_review_distribution(evaluations),
        "organizationReviewArray": compute_ministry_reviews(evaluations, index),
        "improvementCases": compute_improvement_cases(evaluations, index, rng=rng, limit=case_limit),
    }
