"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sharpdoc.config import AnalysisConfig, default_config
from sharpdoc.engine import AnalysisEngine
from sharpdoc.errors import AnalysisTimeout
from sharpdoc.models import ApiDocumentation, DocumentationEntry, group_documentation
from sharpdoc.service import create_app
from tests._fixtures.project_builder import ProjectBuilder


class _StubEngine(AnalysisEngine):
    """Filesystem-mode engine with canned API documentation."""

    def __init__(self) -> None:
        config = default_config()
        config.analysis = AnalysisConfig(mode="filesystem")
        super().__init__(config)
        self.doc_calls: list[str] = []

    def extract_api_docs(self, project_path: str | Path) -> ApiDocumentation:
        self.doc_calls.append(str(project_path))
        return ApiDocumentation(
            project_path=str(project_path),
            namespaces=group_documentation(
                [DocumentationEntry("Calculator", "Demo", "Class", "Computes X.")]
            ),
        )


class _SlowEngine(_StubEngine):
    def analyze(self, project_path: str | Path, mode: str | None = None):  # type: ignore[override]
        raise AnalysisTimeout("Filesystem analysis exceeded 30s", budget=30.0)


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(_StubEngine))


@pytest.fixture
def descriptor(project_builder: ProjectBuilder) -> Path:
    path = project_builder.project("App.csproj", packages=[("Serilog", "3.1.1")])
    project_builder.source("Program.cs", 9)
    return path


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert isinstance(data["toolchain"], bool)


def test_analyze_endpoint(client: TestClient, descriptor: Path) -> None:
    response = client.post("/analyze", json={"path": str(descriptor)})
    assert response.status_code == 200
    data = response.json()
    assert data["TotalLinesOfCode"] == 9
    assert data["Filesystem"]["TargetFramework"] == "net8.0"


def test_dependencies_and_quality_endpoints(client: TestClient, descriptor: Path) -> None:
    deps = client.post("/dependencies", json={"path": str(descriptor)}).json()
    quality = client.post("/quality", json={"path": str(descriptor)}).json()

    assert deps["TotalDirectDependencies"] == 1
    assert deps["ProjectDependencies"][0]["DirectDependencies"] == ["Serilog"]
    assert quality["Metrics"]["TotalFiles"] == 1


def test_docs_endpoint_formats(client: TestClient, descriptor: Path) -> None:
    markdown = client.post("/docs", json={"path": str(descriptor)}).json()
    as_json = client.post("/docs", json={"path": str(descriptor), "format": "json"}).json()

    assert markdown["format"] == "markdown"
    assert "**Calculator**" in markdown["content"]
    assert as_json["format"] == "json"
    assert '"Namespaces"' in as_json["content"]


def test_summary_and_readme_endpoints(client: TestClient, descriptor: Path) -> None:
    summary = client.post("/summary", json={"path": str(descriptor), "detailed": True}).json()
    readme = client.post("/readme", json={"path": str(descriptor)}).json()

    assert "## Detailed Metrics" in summary["content"]
    assert "## API Documentation" in readme["content"]


def test_resource_endpoints(client: TestClient, descriptor: Path) -> None:
    structure = client.get("/resources/structure", params={"path": str(descriptor)})
    dependencies = client.get("/resources/dependencies", params={"path": str(descriptor)})

    assert structure.status_code == 200
    assert structure.text.startswith("# Project Structure: App")
    assert "- Serilog" in dependencies.text


def test_missing_path_maps_to_404(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/analyze", json={"path": str(tmp_path / "Missing.csproj")})
    assert response.status_code == 404


def test_wrong_extension_maps_to_400(client: TestClient, project_builder: ProjectBuilder) -> None:
    project_builder.write({"notes.txt": "hi\n"})
    response = client.post("/analyze", json={"path": str(project_builder.path("notes.txt"))})
    assert response.status_code == 400


def test_timeout_maps_to_504(descriptor: Path) -> None:
    client = TestClient(create_app(_SlowEngine))
    response = client.post("/analyze", json={"path": str(descriptor)})
    assert response.status_code == 504
    assert "exceeded" in response.json()["detail"]
