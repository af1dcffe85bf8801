from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from review_core.data import UNKNOWN, text_or
from review_core.errors import JoinMiss


@dataclass(frozen=True)
class ProjectRecord:
    project_id: str
    ministry: Optional[str] = None
    project_category: Optional[str] = None
    expense_category: Optional[str] = None
    project_name: Optional[str] = None


def _optional(value: object) -> Optional[str]:
    return text_or(value) or None


class ProjectIndex:
    """Project id -> descriptive record. Duplicate ids resolve to the first row seen."""

    def __init__(self, records: Dict[str, ProjectRecord]) -> None:
        self._records = dict(records)

    @classmethod
    def build(cls, projects: pd.DataFrame) -> "ProjectIndex":
        records: Dict[str, ProjectRecord] = {}
        if projects.empty or "project_id" not in projects.columns:
            return cls(records)
        for row in projects.itertuples(index=False):
            project_id = _optional(getattr(row, "project_id", None))
            if project_id is None or project_id in records:
                continue
            records[project_id] = ProjectRecord(
                project_id=project_id,
                ministry=_optional(getattr(row, "ministry", None)),
                project_category=_optional(getattr(row, "project_category", None)),
                expense_category=_optional(getattr(row, "expense_category", None)),
                project_name=_optional(getattr(row, "project_name", None)),
            )
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, project_id: object) -> Optional[ProjectRecord]:
        if project_id is None or pd.isna(project_id):
            return None
        return self._records.get(str(project_id))

    def require(self, project_id: object) -> ProjectRecord:
        record = self.lookup(project_id)
        if record is None:
            raise JoinMiss(project_id)
        return record

    def name_of(self, project_id: object) -> str:
        try:
            return self.require(project_id).project_name or UNKNOWN
        except JoinMiss:
            return UNKNOWN

    def ministry_of(self, project_id: object) -> str:
        try:
            return self.require(project_id).ministry or UNKNOWN
        except JoinMiss:
            return UNKNOWN

    def to_frame(self) -> pd.DataFrame:
        """One row per indexed project, in first-seen order."""
        frame = pd.DataFrame(
            [
                {
                    "project_id": r.project_id,
                    "ministry": r.ministry,
                    "project_category": r.project_category,
                    "expense_category": r.expense_category,
                    "project_name": r.project_name,
                }
                for r in self._records.values()
            ],
            columns=["project_id", "ministry", "project_category", "expense_category", "project_name"],
        )
        return frame.astype("string")
