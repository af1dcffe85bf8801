"""Pytest configuration and fixtures."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Callable, Dict, List

import pandas as pd
import pytest

from review_core.config import PipelineSettings
from review_core.data import (
    CATEGORY_CONTINUING,
    CATEGORY_ENDING,
    CATEGORY_NEW,
    EVALUATION_COLUMNS,
    KIND_ACTIVITY,
    KIND_OUTCOME,
    KIND_OUTPUT,
    PROJECT_COLUMNS,
    SPENDING_COLUMNS,
    VERDICT_AS_IS,
    VERDICT_FUNDAMENTAL,
    VERDICT_PARTIAL,
    performance_columns,
)
from review_core.join_index import ProjectIndex
from tests.frames import frame_from_rows

PERFORMANCE_COLUMNS = performance_columns(2023)


@pytest.fixture
def projects() -> pd.DataFrame:
    return frame_from_rows(
        [
            {"project_id": "P1", "ministry": "文部科学省", "project_category": CATEGORY_CONTINUING,
             "expense_category": "科学技術振興費", "project_name": "研究支援事業"},
            {"project_id": "P2", "ministry": "厚生労働省", "project_category": CATEGORY_NEW,
             "expense_category": "社会保障費", "project_name": "職業訓練事業"},
            {"project_id": "P3", "ministry": "文部科学省", "project_category": CATEGORY_NEW,
             "expense_category": "科学技術振興費", "project_name": "人材育成事業"},
            {"project_id": "P4", "ministry": "総務省", "project_category": CATEGORY_ENDING,
             "expense_category": None, "project_name": "地域活性化事業"},
            {"project_id": "P1", "ministry": "財務省", "project_category": CATEGORY_CONTINUING,
             "expense_category": "その他の事項経費", "project_name": "重複した事業"},
        ],
        PROJECT_COLUMNS,
    )


@pytest.fixture
def index(projects: pd.DataFrame) -> ProjectIndex:
    return ProjectIndex.build(projects)


@pytest.fixture
def performance() -> pd.DataFrame:
    return frame_from_rows(
        [
            {"project_id": "P1", "indicator_kind": KIND_OUTPUT, "target_value": "50", "actual_value": "75"},
            {"project_id": "P1", "indicator_kind": KIND_ACTIVITY, "target_value": "10", "actual_value": "10"},
            {"project_id": "P2", "indicator_kind": KIND_OUTPUT, "target_value": "50", "actual_value": "75"},
            {"project_id": "P2", "indicator_kind": KIND_OUTPUT, "target_value": "100", "actual_value": "50"},
            {"project_id": "P3", "indicator_kind": KIND_OUTPUT, "target_value": "0", "actual_value": "5"},
            {"project_id": "P3", "indicator_kind": KIND_OUTCOME, "target_value": "1", "actual_value": "1"},
            {"project_id": "X9", "indicator_kind": KIND_OUTPUT, "target_value": "1,000", "actual_value": "990"},
            {"project_id": "P4", "indicator_kind": "その他", "target_value": "1", "actual_value": "1"},
        ],
        PERFORMANCE_COLUMNS,
    )


@pytest.fixture
def evaluations() -> pd.DataFrame:
    return frame_from_rows(
        [
            {"project_id": "P1", "verdict": VERDICT_PARTIAL, "improvement": "対象を見直す"},
            {"project_id": "P2", "verdict": VERDICT_AS_IS, "improvement": None},
            {"project_id": "P3", "verdict": VERDICT_FUNDAMENTAL, "improvement": "抜本的に見直す"},
            {"project_id": "P4", "verdict": VERDICT_PARTIAL, "improvement": None},
            {"project_id": "X9", "verdict": VERDICT_FUNDAMENTAL, "improvement": "統合する"},
            {"project_id": "P2", "verdict": None, "improvement": None},
        ],
        EVALUATION_COLUMNS,
    )


@pytest.fixture
def spending() -> pd.DataFrame:
    return frame_from_rows(
        [
            {"contract_method": "一般競争契約", "recipient_name": "A社", "recipient_type": "株式会社", "amount": "1000"},
            {"contract_method": "随意契約", "recipient_name": "B市", "recipient_type": "地方公共団体", "amount": "500"},
            {"contract_method": "一般競争契約", "recipient_name": "A社", "recipient_type": "特殊法人", "amount": "2,000"},
            {"contract_method": None, "recipient_name": "C大学", "recipient_type": "学校法人", "amount": "abc"},
            {"contract_method": "企画競争", "recipient_name": None, "recipient_type": "株式会社", "amount": "300"},
            {"contract_method": "随意契約", "recipient_name": "D法人", "recipient_type": None, "amount": "700.6"},
        ],
        SPENDING_COLUMNS,
    )


def _write_csv(path: Path, header: List[str], rows: List[List[str]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        writer.writerows(rows)
    return path


@pytest.fixture
def write_csv() -> Callable[[Path, List[str], List[List[str]]], Path]:
    return _write_csv


@pytest.fixture
def csv_dir(tmp_path: Path) -> Path:
    """A directory holding all four RS extracts with a handful of rows."""
    src = tmp_path / "csv"
    src.mkdir()
    settings = PipelineSettings(input_dir=src)
    _write_csv(
        settings.basic_info_path,
        list(PROJECT_COLUMNS) + ["備考"],
        [
            ["P1", "文部科学省", CATEGORY_CONTINUING, "科学技術振興費", "研究支援事業", ""],
            ["P2", "厚生労働省", CATEGORY_NEW, "社会保障費", "職業訓練事業", ""],
            ["P3", "文部科学省", CATEGORY_ENDING, "科学技術振興費", "人材育成事業", "x"],
        ],
    )
    _write_csv(
        settings.performance_path,
        list(PERFORMANCE_COLUMNS),
        [
            ["P1", KIND_OUTPUT, "50", "75"],
            ["P2", KIND_OUTPUT, "100", "99"],
            ["P3", KIND_ACTIVITY, "1", "1"],
        ],
    )
    _write_csv(
        settings.evaluation_path,
        list(EVALUATION_COLUMNS),
        [
            ["P1", VERDICT_PARTIAL, "改善する"],
            ["P2", VERDICT_AS_IS, ""],
            ["P3", VERDICT_FUNDAMENTAL, "統合する"],
        ],
    )
    _write_csv(
        settings.spending_path,
        list(SPENDING_COLUMNS),
        [
            ["一般競争契約", "A社", "株式会社", "1000"],
            ["随意契約", "B市", "地方公共団体", "500"],
            ["一般競争契約", "A社", "株式会社", "250"],
        ],
    )
    return src


@pytest.fixture
def settings_for(tmp_path: Path) -> Callable[..., PipelineSettings]:
    def _make(input_dir: Path, **overrides: object) -> PipelineSettings:
        values: Dict[str, object] = {"input_dir": input_dir, "output_dir": tmp_path / "out", "seed": 7}
        values.update(overrides)
        return PipelineSettings(**values)

    return _make
