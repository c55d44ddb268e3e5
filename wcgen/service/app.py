"""FastAPI application entrypoint for wcgen service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, WcGenConfig, load_config
from ..fs import LocalFileSystem, MemoryFileSystem
from ..models import BuildPassState
from ..orchestrator import WebComponentOutput


class BuildRequest(BaseModel):
    path: str
    requires_full_build: bool = True
    is_rebuild: bool = False
    has_script_changes: bool = True
    dry_run: bool = False


class WriteFailure(BaseModel):
    path: str | None = None
    subject: str
    mode: str
    error: str


class BuildResponse(BaseModel):
    status: str
    skipped_reason: str | None = None
    written: List[str] = []
    generation_errors: List[str] = []
    failures: List[WriteFailure] = []


class HealthResponse(BaseModel):
    status: str


StageFactory = Callable[[WcGenConfig, bool], WebComponentOutput]


def _default_stage(config: WcGenConfig, dry_run: bool) -> WebComponentOutput:
    return WebComponentOutput(config, fs=MemoryFileSystem() if dry_run else LocalFileSystem())


def create_app(stage_factory: StageFactory = _default_stage) -> FastAPI:
    """Create the FastAPI application exposing the build stage."""

    app = FastAPI(title="wcgen Service", version="1.0.0")

    async def get_stage_factory() -> StageFactory:
        return stage_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/build", response_model=BuildResponse)
    async def build(
        payload: BuildRequest,
        factory: StageFactory = Depends(get_stage_factory),
    ) -> BuildResponse:
        loop = asyncio.get_running_loop()
        config = await loop.run_in_executor(None, load_config, Path(payload.path))
        stage = factory(config, payload.dry_run)
        state = BuildPassState(
            requires_full_build=payload.requires_full_build,
            is_rebuild=payload.is_rebuild,
            has_script_changes=payload.has_script_changes,
        )
        report = await stage.generate(state)

        if report.skipped:
            return BuildResponse(status="skipped", skipped_reason=report.skipped_reason)

        return BuildResponse(
            status="ok" if report.ok else "failed",
            written=report.written_paths,
            generation_errors=[str(error) for error in report.generation_errors],
            failures=[
                WriteFailure(
                    path=result.path,
                    subject=result.subject,
                    mode=str(result.mode),
                    error=str(result.error),
                )
                for result in report.failures
            ],
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
