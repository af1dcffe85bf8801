from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ArtifactStatusModel(BaseModel):
    name: str
    file_name: str
    available: bool
    size_bytes: int = 0


class ArtifactListResponse(BaseModel):
    output_dir: str
    artifacts: List[ArtifactStatusModel] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    type: str
