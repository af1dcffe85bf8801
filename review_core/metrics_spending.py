from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from review_core.config import DEFAULT_SPENDING_SAMPLE_CAP, DEFAULT_TOP_RECIPIENTS
from review_core.data import UNKNOWN, format_amount, parse_amount, percentage, round_half_up
from review_core.sampling import cap_rows

logger = logging.getLogger(__name__)


def compute_recipient_type_distribution(spending: pd.DataFrame) -> List[Dict[str, Any]]:
    typed = spending.dropna(subset=["recipient_type"])
    if typed.empty:
        return []
    sums = (
        typed.groupby("recipient_type", sort=False)["amount"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )
    total = float(sums.sum())
    return [
        {"type": str(kind), "amount": float(amount), "percentage": percentage(amount, total)}
        for kind, amount in sums.items()
    ]


def compute_top_recipients(spending: pd.DataFrame, *, top_n: int = DEFAULT_TOP_RECIPIENTS) -> List[Dict[str, Any]]:
    """Largest recipients by summed amount.

    Only rows with a name and a positive amount contribute. A recipient that
    appears under several organisation types keeps the last type seen.
    """
    paid = spending[spending["recipient_name"].notna() & (spending["amount"] > 0)]
    if paid.empty:
        return []
    recipients = (
        paid.groupby("recipient_name", sort=False)
        .agg(amount=("amount", "sum"), type=("recipient_type", "last"))
        .sort_values("amount", ascending=False, kind="stable")
        .head(top_n)
    )
    rows: List[Dict[str, Any]] = []
    for name, rec in recipients.iterrows():
        amount = int(round_half_up(rec["amount"]))
        kind = rec["type"]
        rows.append(
            {
                "name": str(name),
                "amount": amount,
                "type": UNKNOWN if pd.isna(kind) else str(kind),
                "formattedAmount": format_amount(amount),
            }
        )
    return rows


def compute_spending_metrics(
    spending: pd.DataFrame,
    *,
    rng: np.random.Generator,
    sample_cap: Optional[int] = DEFAULT_SPENDING_SAMPLE_CAP,
    top_n: int = DEFAULT_TOP_RECIPIENTS,
) -> Dict[str, Any]:
    """Amount-weighted recipient-type shares and the top recipients.

    Above ``sample_cap`` rows the figures come from a random subset and are
    approximate; pass ``sample_cap=None`` (or 0) to aggregate every row.
    """
    if spending.empty:
        return {"typeDistribution": [], "topRecipients": []}
    sampled = cap_rows(spending, sample_cap, rng)
    if len(sampled) < len(spending):
        logger.info("Using %d sampled spending rows out of %d", len(sampled), len(spending))
    df = sampled.assign(amount=parse_amount(sampled["amount"]))
    return {
        "typeDistribution": compute_recipient_type_distribution(df),
        "topRecipients": compute_top_recipients(df, top_n=top_n),
    }
