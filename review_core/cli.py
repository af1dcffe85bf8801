"""Command line entry point: ``python -m review_core run``."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from review_core.config import PipelineSettings, get_settings
from review_core.errors import PipelineError
from review_core.pipeline import run_pipeline
from review_core.sample_data import write_sample_artifacts

console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str) -> None:
    """Set up logging with Rich handler."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _with_overrides(settings: PipelineSettings, overrides: Dict[str, Any]) -> PipelineSettings:
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return settings
    return PipelineSettings(**{**settings.model_dump(), **updates})


@click.group()
def main() -> None:
    """Build the RS dashboard data artifacts."""


@main.command()
@click.option("--input-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory holding the RS CSV extracts")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for the JSON artifacts")
@click.option("--seed", type=int, help="Seed for improvement-case and spending sampling")
@click.option("--sample-cap", type=int, help="Spending rows kept before aggregating (0 disables sampling)")
@click.option("--workers", type=int, help="Run aggregators in a thread pool of this size")
@click.option("--indent", type=int, help="Pretty-print JSON with this indent")
@click.option("--log-level", default="INFO", type=click.Choice(LOG_LEVELS), help="Set logging level")
def run(
    input_dir: Optional[Path],
    output_dir: Optional[Path],
    seed: Optional[int],
    sample_cap: Optional[int],
    workers: Optional[int],
    indent: Optional[int],
    log_level: str,
) -> None:
    """Aggregate the RS extracts into dashboard JSON artifacts."""
    setup_logging(log_level)
    logger = logging.getLogger(__name__)
    settings = _with_overrides(
        get_settings(),
        {
            "input_dir": input_dir,
            "output_dir": output_dir,
            "seed": seed,
            "spending_sample_cap": sample_cap,
            "workers": workers,
            "json_indent": indent,
        },
    )
    try:
        result = run_pipeline(settings)
    except PipelineError as exc:
        logger.error("Pipeline failed: %s", exc)
        sys.exit(1)
    except Exception:
        logger.exception("Pipeline failed with an unexpected error")
        sys.exit(1)
    counts = ", ".join(f"{name}={count}" for name, count in result.row_counts.items())
    logger.info("Done: %d files in %s (%s)", len(result.files), result.output_dir, counts)


@main.command()
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for the JSON artifacts")
@click.option("--log-level", default="INFO", type=click.Choice(LOG_LEVELS), help="Set logging level")
def sample(output_dir: Optional[Path], log_level: str) -> None:
    """Write fixed sample artifacts instead of aggregating real extracts."""
    setup_logging(log_level)
    logger = logging.getLogger(__name__)
    target = output_dir or get_settings().output_dir
    try:
        files = write_sample_artifacts(target)
    except PipelineError as exc:
        logger.error("Sample generation failed: %s", exc)
        sys.exit(1)
    logger.info("Wrote %d sample files to %s", len(files), target)
