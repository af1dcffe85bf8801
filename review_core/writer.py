from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import pandas as pd
from fastapi.encoders import jsonable_encoder

from review_core.errors import WriteError

logger = logging.getLogger(__name__)

ARTIFACT_FILES: Dict[str, str] = {
    "summary": "summary.json",
    "ministry": "ministryData.json",
    "project_type": "projectTypeData.json",
    "expense_type": "expenseTypeData.json",
    "performance": "performanceMetrics.json",
    "review": "reviewMetrics.json",
    "contract": "contractData.json",
    "spending": "spendingMetrics.json",
}


def _safe_float(value: object) -> Optional[float]:
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


JSON_ENCODERS: Dict[Any, Callable[[Any], Any]] = {
    type(pd.NA): lambda _: None,
    np.integer: int,
    float: _safe_float,
    np.floating: _safe_float,
    np.bool_: bool,
    np.ndarray: lambda arr: arr.tolist(),
}


def to_jsonable(value: Any) -> Any:
    """Plain JSON types for pandas/numpy values; NaN and inf become None."""
    return jsonable_encoder(value, custom_encoder=JSON_ENCODERS)


def dumps(payload: Any, indent: Optional[int] = None) -> str:
    return json.dumps(to_jsonable(payload), ensure_ascii=False, indent=indent)


def ensure_output_dir(output_dir: Path) -> None:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError("*", output_dir, f"cannot create output directory: {exc}") from exc


def write_artifact(output_dir: Path, name: str, payload: Any, *, indent: Optional[int] = None) -> Path:
    if name not in ARTIFACT_FILES:
        raise WriteError(name, None, "unknown artifact")
    path = output_dir / ARTIFACT_FILES[name]
    text = dumps(payload, indent=indent)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=output_dir, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as fh:
            tmp_name = fh.name
            fh.write(text)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise WriteError(name, path, str(exc)) from exc
    logger.info("Saved %s", path)
    return path


def write_artifacts(output_dir: Path, payloads: Dict[str, Any], *, indent: Optional[int] = None) -> List[Path]:
    missing = [name for name in ARTIFACT_FILES if name not in payloads]
    if missing:
        raise WriteError(", ".join(missing), output_dir, "artifact payload missing")
    ensure_output_dir(output_dir)
    return [write_artifact(output_dir, name, payloads[name], indent=indent) for name in ARTIFACT_FILES]
