"""Batch driver: load the four RS extracts, aggregate, write the JSON artifacts.

Every payload is computed before the first file is written, so a failing
aggregator never leaves a half-refreshed output directory behind.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import pandas as pd

from review_core.config import PipelineSettings
from review_core.data import load_review_data
from review_core.join_index import ProjectIndex
from review_core.metrics_distribution import (
    compute_contract_distribution,
    compute_expense_category_distribution,
    compute_ministry_distribution,
    compute_project_category_distribution,
)
from review_core.metrics_performance import compute_performance_metrics
from review_core.metrics_review import compute_review_metrics
from review_core.metrics_spending import compute_spending_metrics
from review_core.metrics_summary import compute_summary
from review_core.sampling import spawn_rngs
from review_core.writer import ARTIFACT_FILES, write_artifacts

logger = logging.getLogger(__name__)

RANDOM_STREAMS = ("review", "spending")


@dataclass(frozen=True)
class PipelineResult:
    output_dir: Path
    files: List[Path] = field(default_factory=list)
    row_counts: Dict[str, int] = field(default_factory=dict)


def _tasks(
    data_ctx: Dict[str, pd.DataFrame],
    index: ProjectIndex,
    settings: PipelineSettings,
    rngs: Dict[str, np.random.Generator],
) -> Dict[str, Callable[[], Any]]:
    projects = data_ctx["projects"]
    performance = data_ctx["performance"]
    evaluations = data_ctx["evaluations"]
    spending = data_ctx["spending"]
    return {
        "summary": lambda: compute_summary(projects, evaluations),
        "ministry": lambda: compute_ministry_distribution(projects),
        "project_type": lambda: compute_project_category_distribution(projects),
        "expense_type": lambda: compute_expense_category_distribution(projects),
        "performance": lambda: compute_performance_metrics(performance, index),
        "review": lambda: compute_review_metrics(
            evaluations, index, rng=rngs["review"], case_limit=settings.improvement_case_limit
        ),
        "contract": lambda: compute_contract_distribution(spending),
        "spending": lambda: compute_spending_metrics(
            spending,
            rng=rngs["spending"],
            sample_cap=settings.spending_sample_cap,
            top_n=settings.top_recipients,
        ),
    }


def build_artifacts(
    data_ctx: Dict[str, pd.DataFrame],
    settings: PipelineSettings,
    *,
    rngs: Optional[Dict[str, np.random.Generator]] = None,
) -> Dict[str, Any]:
    index = ProjectIndex.build(data_ctx["projects"])
    logger.info("Indexed %d distinct projects", len(index))
    rngs = rngs or spawn_rngs(settings.seed, RANDOM_STREAMS)
    tasks = _tasks(data_ctx, index, settings, rngs)

    if settings.workers <= 1:
        payloads = {}
        for name, task in tasks.items():
            logger.info("Aggregating %s", name)
            payloads[name] = task()
        return payloads

    with ThreadPoolExecutor(max_workers=settings.workers) as executor:
        futures = {name: executor.submit(task) for name, task in tasks.items()}
        return {name: futures[name].result() for name in ARTIFACT_FILES}


def run_pipeline(settings: PipelineSettings) -> PipelineResult:
    logger.info("Loading RS extracts from %s", settings.input_dir)
    data_ctx = load_review_data(settings)
    payloads = build_artifacts(data_ctx, settings)
    logger.info("Writing %d artifacts to %s", len(payloads), settings.output_dir)
    files = write_artifacts(settings.output_dir, payloads, indent=settings.json_indent)
    logger.info("All artifacts written")
    return PipelineResult(
        output_dir=settings.output_dir,
        files=files,
        row_counts={name: int(len(df)) for name, df in data_ctx.items()},
    )
