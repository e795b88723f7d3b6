"""FastAPI application exposing sharpdoc analysis over HTTP."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from ..config import default_config
from ..engine import AnalysisEngine
from ..errors import (
    AnalysisFailure,
    AnalysisTimeout,
    InvalidArgumentError,
    NotFoundError,
)
from ..logging import get_logger
from ..models import AnalysisResult
from ..reports import (
    build_dependencies_resource,
    build_readme,
    build_structure_resource,
    build_summary,
    render_api_docs,
)
from ..toolchain import toolchain_available

_LOGGER = get_logger("service")


class AnalyzeRequest(BaseModel):
    path: str
    mode: Optional[str] = None


class DependenciesRequest(AnalyzeRequest):
    include_transitive: bool = False


class SummaryRequest(AnalyzeRequest):
    detailed: bool = False


class DocsRequest(BaseModel):
    path: str
    format: str = "markdown"


class ReadmeRequest(AnalyzeRequest):
    include_api_docs: bool = True


class RenderedResponse(BaseModel):
    path: str
    format: str
    content: str


class HealthResponse(BaseModel):
    status: str
    toolchain: bool


def _default_engine() -> AnalysisEngine:
    return AnalysisEngine(default_config())


def create_app(
    engine_factory: Callable[[], AnalysisEngine] = _default_engine,
) -> FastAPI:
    """Create the FastAPI application exposing sharpdoc operations."""

    app = FastAPI(title="SharpDoc Service", version="1.0.0")

    async def get_engine() -> AnalysisEngine:
        # A fresh engine per request keeps calls independent.
        return engine_factory()

    async def _analyze(engine: AnalysisEngine, payload: AnalyzeRequest) -> AnalysisResult:
        return await engine.analyze_async(payload.path, payload.mode)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", toolchain=toolchain_available())

    @app.post("/analyze")
    async def analyze(
        payload: AnalyzeRequest,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        result = await _analyze(engine, payload)
        return result.to_dict()

    @app.post("/dependencies")
    async def dependencies(
        payload: DependenciesRequest,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        result = await _analyze(engine, payload)
        report = engine.dependency_report(result, include_transitive=payload.include_transitive)
        return report.to_dict()

    @app.post("/quality")
    async def quality(
        payload: AnalyzeRequest,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> Dict[str, Any]:
        result = await _analyze(engine, payload)
        return engine.quality_report(result).to_dict()

    @app.post("/summary", response_model=RenderedResponse)
    async def summary(
        payload: SummaryRequest,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> RenderedResponse:
        result = await _analyze(engine, payload)
        return RenderedResponse(
            path=payload.path,
            format="markdown",
            content=build_summary(result, detailed=payload.detailed),
        )

    @app.post("/docs", response_model=RenderedResponse)
    async def docs(
        payload: DocsRequest,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> RenderedResponse:
        extracted = await engine.extract_api_docs_async(payload.path)
        fmt = "json" if payload.format.strip().lower() == "json" else "markdown"
        return RenderedResponse(
            path=payload.path, format=fmt, content=render_api_docs(extracted, fmt)
        )

    @app.post("/readme", response_model=RenderedResponse)
    async def readme(
        payload: ReadmeRequest,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> RenderedResponse:
        result = await _analyze(engine, payload)
        api_docs = None
        if payload.include_api_docs:
            try:
                api_docs = await engine.extract_api_docs_async(payload.path)
            except AnalysisFailure as exc:
                _LOGGER.warning("README for %s built without API documentation: %s", payload.path, exc)
        return RenderedResponse(
            path=payload.path, format="markdown", content=build_readme(result, api_docs)
        )

    @app.get("/resources/structure", response_class=PlainTextResponse)
    async def structure_resource(
        path: str,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> str:
        result = await engine.analyze_async(path)
        return build_structure_resource(result)

    @app.get("/resources/dependencies", response_class=PlainTextResponse)
    async def dependencies_resource(
        path: str,
        engine: AnalysisEngine = Depends(get_engine),
    ) -> str:
        result = await engine.analyze_async(path)
        return build_dependencies_resource(result)

    def _error(status: int, exc: Exception) -> JSONResponse:
        _LOGGER.error("Request failed with %d: %s", status, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_: Any, exc: NotFoundError) -> JSONResponse:
        return _error(404, exc)

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(_: Any, exc: InvalidArgumentError) -> JSONResponse:
        return _error(400, exc)

    @app.exception_handler(AnalysisTimeout)
    async def timeout_handler(_: Any, exc: AnalysisTimeout) -> JSONResponse:
        return _error(504, exc)

    @app.exception_handler(AnalysisFailure)
    async def analysis_failure_handler(_: Any, exc: AnalysisFailure) -> JSONResponse:
        return _error(500, exc)

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    toolchain_available()
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
