from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from review_api.schemas import ArtifactListResponse, ArtifactStatusModel, ErrorResponse
from review_core.config import PipelineSettings, get_settings
from review_core.writer import ARTIFACT_FILES

app = FastAPI(title="RS Dashboard Data API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

FILE_TO_ARTIFACT = {file_name: name for name, file_name in ARTIFACT_FILES.items()}


def _error(status_code: int, message: str, kind: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message, type=kind).model_dump())


@app.get("/meta/artifacts", response_model=ArtifactListResponse)
def meta_artifacts(settings: PipelineSettings = Depends(get_settings)):
    artifacts = []
    for name, file_name in ARTIFACT_FILES.items():
        path = settings.output_dir / file_name
        available = path.is_file()
        artifacts.append(
            ArtifactStatusModel(
                name=name,
                file_name=file_name,
                available=available,
                size_bytes=path.stat().st_size if available else 0,
            )
        )
    return ArtifactListResponse(output_dir=str(settings.output_dir), artifacts=artifacts)


@app.get("/data/{file_name}")
def data_file(file_name: str, settings: PipelineSettings = Depends(get_settings)):
    if file_name not in FILE_TO_ARTIFACT:
        return _error(404, f"Unknown artifact: {file_name}", "NotFound")
    path = settings.output_dir / file_name
    try:
        content = path.read_bytes()
    except FileNotFoundError:
        return _error(503, f"Artifact {file_name} has not been built yet", "ArtifactUnavailable")
    except OSError as exc:
        logger.exception("reading %s failed", path)
        return _error(500, str(exc), type(exc).__name__)
    return Response(content=content, media_type="application/json; charset=utf-8")
