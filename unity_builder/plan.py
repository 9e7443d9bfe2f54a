"""Typed build plan derived from validated command-line options."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from unity_builder.exceptions import OptionsError, ProjectError
from unity_builder.options import BUILD_TARGET_FLAG, CUSTOM_BUILD_NAME_FLAG
from unity_builder.project import ProjectSettings, is_unity_project
from unity_builder.results import ExitCode
from unity_builder.targets import BuildTarget, parse_target

logger = logging.getLogger(__name__)

APP_BUNDLE_SUFFIX = ".aab"


def _parse_version_code(raw: str | None) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise OptionsError(
            f"Invalid argument -androidVersionCode: {raw!r} is not an integer",
            code="INVALID_ANDROID_VERSION_CODE",
        ) from None


def _project_bundle_version(project_path: Path) -> str | None:
    if not is_unity_project(project_path):
        return None
    try:
        return ProjectSettings.from_file(project_path).bundle_version
    except ProjectError as e:
        logger.debug(f"No bundle version fallback: {e.message}")
        return None


@dataclass(frozen=True)
class BuildPlan:
    """What the editor-side build step is asked to produce.

    Signing credentials are deliberately not part of the plan.
    """

    project_path: Path
    target: BuildTarget
    output_path: Path
    build_name: str
    build_version: str | None = None
    android_version_code: int | None = None
    android_app_bundle: bool = False

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> BuildPlan:
        """Create a plan from options that passed validate_options().

        ``buildVersion`` falls back to the project's bundleVersion when absent.

        Raises:
            OptionsError: If the build target or Android version code is invalid.
        """
        try:
            target = parse_target(options[BUILD_TARGET_FLAG])
        except ValueError as e:
            raise OptionsError(str(e), code="INVALID_BUILD_TARGET", exit_code=ExitCode.INVALID_BUILD_TARGET) from None

        project_path = Path(options["projectPath"])
        output_path = Path(options["customBuildPath"])

        build_version = options.get("buildVersion") or _project_bundle_version(project_path)

        return cls(
            project_path=project_path,
            target=target,
            output_path=output_path,
            build_name=options[CUSTOM_BUILD_NAME_FLAG],
            build_version=build_version,
            android_version_code=_parse_version_code(options.get("androidVersionCode")),
            android_app_bundle=(
                target is BuildTarget.ANDROID and options["customBuildPath"].endswith(APP_BUNDLE_SUFFIX)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "project_path": str(self.project_path),
            "target": self.target.value,
            "output_path": str(self.output_path),
            "build_name": self.build_name,
            "build_version": self.build_version,
            "android_version_code": self.android_version_code,
            "android_app_bundle": self.android_app_bundle,
        }
