"""Tests for sharpdoc.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from sharpdoc.config import ConfigError, SharpDocConfig, WalkLimits, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, SharpDocConfig)
    assert config.root == tmp_path.resolve()
    assert config.analysis.mode == "auto"
    assert config.analysis.timeout_seconds == 30.0
    assert config.analysis.limits == WalkLimits()
    assert config.docs.format == "markdown"
    assert config.docs.include_api_docs is True


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".sharpdoc.yml"
    config_file.write_text(
        """
analysis:
  mode: Filesystem
  timeout_seconds: 12.5
  limits:
    source_files: 40
    subdirectories: "3"
    snapshot_files: -1
docs:
  format: json
  include_api_docs: "no"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.analysis.mode == "filesystem"
    assert config.analysis.timeout_seconds == 12.5
    assert config.analysis.limits.source_files == 40
    assert config.analysis.limits.subdirectories == 3
    assert config.analysis.limits.snapshot_files == 20
    assert config.docs.format == "json"
    assert config.docs.include_api_docs is False


def test_load_config_finds_file_next_to_descriptor(tmp_path: Path) -> None:
    (tmp_path / ".sharpdoc.yml").write_text("analysis:\n  mode: semantic\n", encoding="utf-8")

    config = load_config(tmp_path / "App.csproj")

    assert config.analysis.mode == "semantic"


def test_non_positive_timeout_keeps_default(tmp_path: Path) -> None:
    (tmp_path / ".sharpdoc.yml").write_text("analysis:\n  timeout_seconds: 0\n", encoding="utf-8")

    assert load_config(tmp_path).analysis.timeout_seconds == 30.0


def test_unknown_mode_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".sharpdoc.yml").write_text("analysis:\n  mode: roslyn\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".sharpdoc.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".sharpdoc.yml").write_text("analysis: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
