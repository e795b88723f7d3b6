"""Report builders that consume analysis results and API documentation."""

from .api_docs import normalise_format, render_api_docs
from .insights import (
    DependencyReport,
    QualityReport,
    Recommendation,
    build_dependency_report,
    build_quality_report,
    quality_recommendations,
)
from .markdown import (
    build_dependencies_resource,
    build_readme,
    build_structure_resource,
    build_summary,
)

__all__ = [
    "DependencyReport",
    "QualityReport",
    "Recommendation",
    "build_dependencies_resource",
    "build_dependency_report",
    "build_quality_report",
    "build_readme",
    "build_structure_resource",
    "build_summary",
    "normalise_format",
    "quality_recommendations",
    "render_api_docs",
]
