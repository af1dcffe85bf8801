from __future__ import annotations

from typing import Dict

import pandas as pd

from review_core.data import CATEGORY_ENDING, CATEGORY_NEW, IMPROVEMENT_VERDICTS


def _count_in(df: pd.DataFrame, column: str, values) -> int:
    if df.empty or column not in df.columns:
        return 0
    return int(df[column].isin(values).sum())


def compute_summary(projects: pd.DataFrame, evaluations: pd.DataFrame) -> Dict[str, int]:
    return {
        "totalProjects": int(len(projects)),
        "newProjects": _count_in(projects, "project_category", [CATEGORY_NEW]),
        "endingProjects": _count_in(projects, "project_category", [CATEGORY_ENDING]),
        "improvementProjects": _count_in(evaluations, "verdict", IMPROVEMENT_VERDICTS),
    }
