"""Exceptions raised by unity-builder."""

from __future__ import annotations


class UnityBuilderError(Exception):
    """Base error for unity-builder operations"""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class OptionsError(UnityBuilderError):
    """Command-line options are missing or invalid.

    Carries the process exit code the orchestrator expects for this failure.
    """

    def __init__(self, message: str, code: str | None = None, exit_code: int = 1):
        super().__init__(message, code)
        self.exit_code = exit_code


class ProjectError(UnityBuilderError):
    """Unity project not found or malformed"""

    pass


class ProjectVersionError(ProjectError):
    """ProjectVersion.txt missing or unreadable"""

    pass


class SummaryError(UnityBuilderError):
    """Build summary file missing or malformed"""

    pass
