"""
Tests for review_core/metrics_spending.py - recipient types and top recipients
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from review_core.data import SPENDING_COLUMNS, UNKNOWN
from review_core.metrics_spending import compute_spending_metrics
from tests.frames import frame_from_rows


def _rows(n: int) -> pd.DataFrame:
    return frame_from_rows(
        [{"recipient_name": f"R{i}", "recipient_type": "株式会社", "amount": "10"} for i in range(n)],
        SPENDING_COLUMNS,
    )


class TestRecipientTypes:
    def test_amount_weighted_shares(self, spending: pd.DataFrame) -> None:
        metrics = compute_spending_metrics(spending, rng=np.random.default_rng(0))

        assert metrics["typeDistribution"] == [
            {"type": "特殊法人", "amount": 2000.0, "percentage": 52.6},
            {"type": "株式会社", "amount": 1300.0, "percentage": 34.2},
            {"type": "地方公共団体", "amount": 500.0, "percentage": 13.2},
            {"type": "学校法人", "amount": 0.0, "percentage": 0.0},
        ]

    def test_all_amounts_zero(self) -> None:
        df = frame_from_rows([{"recipient_type": "株式会社", "amount": "0"}], SPENDING_COLUMNS)
        metrics = compute_spending_metrics(df, rng=np.random.default_rng(0))

        assert metrics["typeDistribution"] == [{"type": "株式会社", "amount": 0.0, "percentage": 0.0}]
        assert metrics["topRecipients"] == []


class TestTopRecipients:
    def test_summed_per_name(self, spending: pd.DataFrame) -> None:
        rows = compute_spending_metrics(spending, rng=np.random.default_rng(0))["topRecipients"]

        assert rows == [
            {"name": "A社", "amount": 3000, "type": "特殊法人", "formattedAmount": "3,000"},
            {"name": "D法人", "amount": 701, "type": UNKNOWN, "formattedAmount": "701"},
            {"name": "B市", "amount": 500, "type": "地方公共団体", "formattedAmount": "500"},
        ]

    def test_top_n(self, spending: pd.DataFrame) -> None:
        rows = compute_spending_metrics(spending, rng=np.random.default_rng(0), top_n=1)["topRecipients"]

        assert [r["name"] for r in rows] == ["A社"]

    def test_large_amounts_are_grouped(self) -> None:
        df = frame_from_rows(
            [{"recipient_name": "E機構", "recipient_type": "独立行政法人", "amount": "1234567.5"}],
            SPENDING_COLUMNS,
        )
        (row,) = compute_spending_metrics(df, rng=np.random.default_rng(0))["topRecipients"]

        assert row["amount"] == 1234568
        assert row["formattedAmount"] == "1,234,568"


class TestSampling:
    def test_capped_input_is_sampled(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="review_core.metrics_spending"):
            metrics = compute_spending_metrics(_rows(100), rng=np.random.default_rng(5), sample_cap=10, top_n=50)

        assert len(metrics["topRecipients"]) == 10
        assert metrics["typeDistribution"][0]["amount"] == 100.0
        assert "sampled" in caplog.text

    def test_no_cap_uses_every_row(self) -> None:
        metrics = compute_spending_metrics(_rows(100), rng=np.random.default_rng(5), sample_cap=None, top_n=50)

        assert len(metrics["topRecipients"]) == 50
        assert metrics["typeDistribution"][0]["amount"] == 1000.0

    def test_seeded_sample_is_repeatable(self) -> None:
        first = compute_spending_metrics(_rows(100), rng=np.random.default_rng(9), sample_cap=10)
        second = compute_spending_metrics(_rows(100), rng=np.random.default_rng(9), sample_cap=10)

        assert first == second

    def test_empty_input(self) -> None:
        metrics = compute_spending_metrics(frame_from_rows([], SPENDING_COLUMNS), rng=np.random.default_rng(0))

        assert metrics == {"typeDistribution": [], "topRecipients": []}
