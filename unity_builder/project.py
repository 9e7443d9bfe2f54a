"""Unity project detection and settings parsing (file-based, no editor needed)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from unity_builder.exceptions import ProjectError, ProjectVersionError


def is_unity_project(path: Path) -> bool:
    """Check if path is a valid Unity project.

    A valid Unity project contains:
    - Assets/ directory
    - ProjectSettings/ directory
    - ProjectSettings/ProjectVersion.txt file
    """
    if not path.is_dir():
        return False

    return (
        (path / "Assets").is_dir()
        and (path / "ProjectSettings").is_dir()
        and (path / "ProjectSettings/ProjectVersion.txt").is_file()
    )


@dataclass(frozen=True)
class ProjectVersion:
    """Unity editor version the project was saved with."""

    version: str
    revision: str | None = None

    @classmethod
    def from_file(cls, project_path: Path) -> ProjectVersion:
        """Parse ProjectSettings/ProjectVersion.txt.

        Raises:
            ProjectVersionError: If file not found or invalid format.
        """
        version_file = project_path / "ProjectSettings/ProjectVersion.txt"

        if not version_file.exists():
            raise ProjectVersionError(
                f"ProjectVersion.txt not found: {version_file}",
                code="PROJECT_VERSION_NOT_FOUND",
            )

        content = version_file.read_text(encoding="utf-8")

        # m_EditorVersion: 2022.3.10f1
        version_match = re.search(r"m_EditorVersion:\s*(.+)", content)
        if not version_match:
            raise ProjectVersionError(
                "Invalid ProjectVersion.txt format: m_EditorVersion not found",
                code="PROJECT_VERSION_INVALID",
            )

        # m_EditorVersionWithRevision: 2022.3.10f1 (abc123)
        revision: str | None = None
        revision_match = re.search(r"m_EditorVersionWithRevision:\s*.+\(([^)]+)\)", content)
        if revision_match:
            revision = revision_match.group(1).strip()

        return cls(version=version_match.group(1).strip(), revision=revision)


@dataclass(frozen=True)
class ProjectSettings:
    """Player settings read from ProjectSettings.asset."""

    product_name: str
    company_name: str
    bundle_version: str
    android_version_code: int

    @classmethod
    def from_file(cls, project_path: Path) -> ProjectSettings:
        """Parse ProjectSettings/ProjectSettings.asset (YAML).

        Raises:
            ProjectError: If the asset file does not exist.
        """
        settings_file = project_path / "ProjectSettings/ProjectSettings.asset"

        if not settings_file.exists():
            raise ProjectError(
                f"ProjectSettings.asset not found: {settings_file}",
                code="PROJECT_SETTINGS_NOT_FOUND",
            )

        content = settings_file.read_text(encoding="utf-8")

        def extract_value(key: str, default: str = "") -> str:
            match = re.search(rf"^\s*{key}:[ \t]*(.+)$", content, re.MULTILINE)
            return match.group(1).strip() if match else default

        def extract_int(key: str, default: int = 0) -> int:
            match = re.search(rf"^\s*{key}:\s*(\d+)", content, re.MULTILINE)
            return int(match.group(1)) if match else default

        return cls(
            product_name=extract_value("productName", "Unknown"),
            company_name=extract_value("companyName", "Unknown"),
            bundle_version=extract_value("bundleVersion", "0.1"),
            android_version_code=extract_int("AndroidBundleVersionCode", 1),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_name": self.product_name,
            "company_name": self.company_name,
            "bundle_version": self.bundle_version,
            "android_version_code": self.android_version_code,
        }
