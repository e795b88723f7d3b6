"""Helper utilities for writing throwaway .NET project trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Iterable, Mapping

SDK_PROJECT = """\
<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <TargetFramework>{framework}</TargetFramework>
  </PropertyGroup>
  <ItemGroup>
{packages}
  </ItemGroup>
</Project>
"""


class ProjectBuilder:
    """Writes solution, project and source files under a temporary root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "workspace"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the workspace."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def source(self, relative: str, lines: int) -> Path:
        """Write a C# file with exactly ``lines`` lines."""
        body = "".join(f"// line {index}\n" for index in range(lines))
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    def project(
        self,
        relative: str,
        *,
        packages: Iterable[tuple[str, str]] = (),
        framework: str = "net8.0",
    ) -> Path:
        """Write an SDK-style project file declaring ``packages``."""
        package_lines = "\n".join(
            f'    <PackageReference Include="{name}" Version="{version}" />'
            for name, version in packages
        )
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            SDK_PROJECT.format(framework=framework, packages=package_lines), encoding="utf-8"
        )
        return path

    def path(self, relative: str = "") -> Path:
        """Return a path inside the workspace root."""
        return self.root / relative if relative else self.root


__all__ = ["ProjectBuilder"]
