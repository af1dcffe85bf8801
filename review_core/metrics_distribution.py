from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from review_core.data import percentage


def _value_counts(df: pd.DataFrame, column: str) -> pd.Series:
    """Counts of non-empty values, descending, ties in first-seen order."""
    if df.empty or column not in df.columns:
        return pd.Series(dtype="int64")
    present = df[column].dropna()
    if present.empty:
        return pd.Series(dtype="int64")
    return present.groupby(present, sort=False).size().sort_values(ascending=False, kind="stable")


def _rows(counts: pd.Series, denominator: int, label: str) -> List[Dict[str, Any]]:
    return [
        {label: str(value), "count": int(count), "percentage": percentage(count, denominator)}
        for value, count in counts.items()
    ]


def compute_distribution(df: pd.DataFrame, column: str, *, label: str = "category") -> List[Dict[str, Any]]:
    """Share of every record; rows without ``column`` still count in the denominator."""
    return _rows(_value_counts(df, column), len(df), label)


def compute_present_distribution(df: pd.DataFrame, column: str, *, label: str = "category") -> List[Dict[str, Any]]:
    """Share of the records that have ``column`` set."""
    counts = _value_counts(df, column)
    return _rows(counts, int(counts.sum()), label)


def compute_ministry_distribution(projects: pd.DataFrame) -> List[Dict[str, Any]]:
    return compute_distribution(projects, "ministry")


def compute_project_category_distribution(projects: pd.DataFrame) -> List[Dict[str, Any]]:
    return compute_distribution(projects, "project_category")


def compute_expense_category_distribution(projects: pd.DataFrame) -> List[Dict[str, Any]]:
    return compute_distribution(projects, "expense_category")


def compute_contract_distribution(spending: pd.DataFrame) -> List[Dict[str, Any]]:
    return compute_present_distribution(spending, "contract_method", label="method")
