from __future__ import annotations

from pathlib import Path
from typing import Optional


class PipelineError(RuntimeError):
    """Base class for failures that abort a pipeline run."""


class ParseError(PipelineError):
    def __init__(self, dataset: str, path: Optional[Path], reason: str) -> None:
        self.dataset = dataset
        self.path = path
        self.reason = reason
        where = f" ({path})" if path is not None else ""
        super().__init__(f"Failed to load {dataset} dataset{where}: {reason}")


class WriteError(PipelineError):
    def __init__(self, artifact: str, path: Optional[Path], reason: str) -> None:
        self.artifact = artifact
        self.path = path
        self.reason = reason
        where = f" to {path}" if path is not None else ""
        super().__init__(f"Failed to write artifact {artifact}{where}: {reason}")


class JoinMiss(KeyError):
    """A project id that has no row in the basic-information dataset."""

    def __init__(self, project_id: object) -> None:
        self.project_id = project_id
        super().__init__(project_id)
