from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Dict, Iterable, Optional

import pandas as pd

from review_core.config import PipelineSettings
from review_core.errors import ParseError

logger = logging.getLogger(__name__)

UNKNOWN = "不明"

# 事業区分
CATEGORY_CONTINUING = "前年度事業"
CATEGORY_NEW = "新規開始事業"
CATEGORY_ENDING = "終了事業"

# 種別（アクティビティ・アウトプット・アウトカム）
KIND_ACTIVITY = "アクティビティ"
KIND_OUTPUT = "アウトプット"
KIND_OUTCOME = "アウトカム"
INDICATOR_KINDS = (KIND_ACTIVITY, KIND_OUTPUT, KIND_OUTCOME)

# 行政事業レビュー推進チームの所見
VERDICT_AS_IS = "現状通り"
VERDICT_PARTIAL = "事業内容の一部改善"
VERDICT_FUNDAMENTAL = "事業全体の抜本的な改善"
VERDICT_SCHEDULED_END = "終了予定"
VERDICT_ABOLISHED = "廃止"
VERDICTS = (VERDICT_AS_IS, VERDICT_PARTIAL, VERDICT_FUNDAMENTAL, VERDICT_SCHEDULED_END, VERDICT_ABOLISHED)
IMPROVEMENT_VERDICTS = (VERDICT_PARTIAL, VERDICT_FUNDAMENTAL)

PROJECT_COLUMNS = {
    "予算事業ID": "project_id",
    "政策所管府省庁": "ministry",
    "事業区分": "project_category",
    "主要経費": "expense_category",
    "事業名": "project_name",
}

EVALUATION_COLUMNS = {
    "予算事業ID": "project_id",
    "行政事業レビュー推進チームの所見": "verdict",
    "所見を踏まえた改善点／概算要求における反映状況": "improvement",
}

SPENDING_COLUMNS = {
    "契約方式等": "contract_method",
    "支出先名": "recipient_name",
    "法人種別": "recipient_type",
    "支出先の合計支出額": "amount",
}


def performance_columns(reference_year: int) -> Dict[str, str]:
    return {
        "予算事業ID": "project_id",
        "種別（アクティビティ・アウトプット・アウトカム）": "indicator_kind",
        f"{reference_year}年度目標値": "target_value",
        f"{reference_year}年度実績値": "actual_value",
    }


# ---------------- Helpers ----------------
def drop_duplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[:, ~df.columns.duplicated()]


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            series = df[col]
            if isinstance(series, pd.DataFrame):
                series = series.iloc[:, 0]
            series = series.astype("string").str.strip()
            series = series.replace({"": pd.NA})
            df[col] = series
    return df


def parse_number(series: pd.Series) -> pd.Series:
    """Parse text like ``"1,234.5"`` to float; anything unparseable becomes NaN."""
    cleaned = series.astype("string").str.replace(",", "", regex=False).str.strip().fillna("")
    return pd.to_numeric(cleaned.astype(object), errors="coerce").astype("float64")


def parse_amount(series: pd.Series) -> pd.Series:
    return parse_number(series).fillna(0.0)


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def percentage(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return round_half_up(part / whole * 100, 1)


def format_amount(value: int) -> str:
    return f"{int(value):,}"


def text_or(value: object, default: str = "") -> str:
    if value is None or pd.isna(value):
        return default
    s = str(value)
    return s if s else default


# ---------------- Loaders ----------------
def load_csv(path: Path, columns: Dict[str, str], *, dataset: str) -> pd.DataFrame:
    if not path.is_file():
        raise ParseError(dataset, path, "file not found")
    try:
        header = pd.read_csv(path, nrows=0, encoding="utf-8-sig").columns
        width = len(header)
        df = pd.read_csv(
            path,
            dtype=str,
            encoding="utf-8-sig",
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            index_col=False,
            on_bad_lines=lambda fields: fields[:width],
        )
    except pd.errors.EmptyDataError as exc:
        raise ParseError(dataset, path, "missing header row") from exc
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise ParseError(dataset, path, str(exc)) from exc

    df.columns = [str(c).strip() for c in df.columns]
    df = df.rename(columns=columns)
    df = drop_duplicate_columns(df)
    missing = [src for src, col in columns.items() if col not in df.columns]
    if missing:
        raise ParseError(dataset, path, f"missing required column(s): {', '.join(missing)}")

    # a row is blank only when every parsed column is, mapped or not
    filled = df.astype("string").replace(r"^\s*$", pd.NA, regex=True)
    df = df[filled.notna().any(axis=1)]

    df = df[list(columns.values())].copy()
    df = coerce_str_safe(df, columns.values())
    df = df.reset_index(drop=True)
    logger.info("Loaded %s dataset: %d rows from %s", dataset, len(df), path.name)
    return df


def load_projects(settings: PipelineSettings) -> pd.DataFrame:
    return load_csv(settings.basic_info_path, PROJECT_COLUMNS, dataset="basic information")


def load_performance(settings: PipelineSettings) -> pd.DataFrame:
    return load_csv(
        settings.performance_path,
        performance_columns(settings.reference_year),
        dataset="performance",
    )


def load_evaluations(settings: PipelineSettings) -> pd.DataFrame:
    return load_csv(settings.evaluation_path, EVALUATION_COLUMNS, dataset="evaluation")


def load_spending(settings: PipelineSettings) -> pd.DataFrame:
    return load_csv(settings.spending_path, SPENDING_COLUMNS, dataset="spending")


def load_review_data(settings: PipelineSettings) -> Dict[str, pd.DataFrame]:
    return {
        "projects": load_projects(settings),
        "performance": load_performance(settings),
        "evaluations": load_evaluations(settings),
        "spending": load_spending(settings),
    }
