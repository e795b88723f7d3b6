"""Semantic and filesystem analyzers plus the API documentation extractor."""

from __future__ import annotations

from .base import ProjectAnalyzer, validate_descriptor
from .documentation import DocumentationExtractor, extract_xml_element
from .filesystem import FilesystemAnalyzer
from .semantic import SemanticAnalyzer

__all__ = [
    "DocumentationExtractor",
    "FilesystemAnalyzer",
    "ProjectAnalyzer",
    "SemanticAnalyzer",
    "extract_xml_element",
    "validate_descriptor",
]
