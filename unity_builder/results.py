"""Build results: exit codes, build summary parsing, and reporting."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any

from unity_builder.exceptions import SummaryError

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Process exit codes understood by the build orchestrator"""

    SUCCESS = 0
    BUILD_FAILED = 101
    BUILD_CANCELLED = 102
    BUILD_UNKNOWN = 103
    MISSING_PROJECT_PATH = 110
    MISSING_BUILD_TARGET = 120
    INVALID_BUILD_TARGET = 121
    MISSING_CUSTOM_BUILD_PATH = 130


class BuildResult(str, Enum):
    """Outcome reported by the editor's build pipeline"""

    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> BuildResult:
        """Parse a result name, case-insensitively. Anything unrecognized is UNKNOWN."""
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        logger.debug(f"Unrecognized build result {value!r}, treating as Unknown")
        return cls.UNKNOWN


_EXIT_CODES = {
    BuildResult.SUCCEEDED: ExitCode.SUCCESS,
    BuildResult.FAILED: ExitCode.BUILD_FAILED,
    BuildResult.CANCELLED: ExitCode.BUILD_CANCELLED,
    BuildResult.UNKNOWN: ExitCode.BUILD_UNKNOWN,
}

_RESULT_MESSAGES = {
    BuildResult.SUCCEEDED: "Build succeeded!",
    BuildResult.FAILED: "Build failed!",
    BuildResult.CANCELLED: "Build cancelled!",
    BuildResult.UNKNOWN: "Build result is unknown!",
}


def exit_code_for(result: BuildResult) -> ExitCode:
    """Map a build result to the process exit code."""
    return _EXIT_CODES.get(result, ExitCode.BUILD_UNKNOWN)


def result_message(result: BuildResult) -> str:
    return _RESULT_MESSAGES.get(result, _RESULT_MESSAGES[BuildResult.UNKNOWN])


@dataclass(frozen=True)
class BuildSummary:
    """Summary of a finished player build.

    Attributes:
        result: Overall build outcome.
        total_time: Build duration in seconds.
        total_warnings: Number of warnings emitted.
        total_errors: Number of errors emitted.
        total_size: Output size in bytes.
    """

    result: BuildResult
    total_time: float = 0.0
    total_warnings: int = 0
    total_errors: int = 0
    total_size: int = 0

    @property
    def exit_code(self) -> ExitCode:
        return exit_code_for(self.result)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BuildSummary:
        """Create summary from the editor's JSON (camelCase keys).

        Raises:
            SummaryError: If a numeric field is not a number.
        """
        if not isinstance(data, dict):
            raise SummaryError("Build summary must be a JSON object", code="SUMMARY_INVALID")

        try:
            return cls(
                result=BuildResult.parse(data.get("result")),
                total_time=float(data.get("totalTime", 0.0)),
                total_warnings=int(data.get("totalWarnings", 0)),
                total_errors=int(data.get("totalErrors", 0)),
                total_size=int(data.get("totalSize", 0)),
            )
        except (TypeError, ValueError) as e:
            raise SummaryError(f"Invalid build summary field: {e}", code="SUMMARY_INVALID") from e

    @classmethod
    def from_file(cls, path: Path) -> BuildSummary:
        """Load summary JSON written by the editor.

        Raises:
            SummaryError: If file not found or not valid JSON.
        """
        if not path.exists():
            raise SummaryError(f"Build summary not found: {path}", code="SUMMARY_NOT_FOUND")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SummaryError(f"Build summary is not valid JSON: {e}", code="SUMMARY_INVALID") from e

        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "result": self.result.value,
            "exit_code": int(self.exit_code),
            "total_time": self.total_time,
            "total_warnings": self.total_warnings,
            "total_errors": self.total_errors,
            "total_size": self.total_size,
        }


def banner(title: str) -> list[str]:
    """Boxed section banner used to delimit output phases."""
    rule = "#" * 27
    return ["", rule, f"#{title.center(25)}#", rule, ""]


def format_summary(summary: BuildSummary) -> list[str]:
    """Render the build results report as plain text lines."""
    return [
        *banner("Build results"),
        f"Duration: {summary.total_time:.2f}s",
        f"Warnings: {summary.total_warnings}",
        f"Errors: {summary.total_errors}",
        f"Size: {summary.total_size} bytes",
        "",
    ]
