"""Unity batch-mode build shim.

Parses the editor's command-line build parameters, validates them, and maps
the build result back to a process exit code.

Usage:
    from unity_builder import parse_command_line_arguments, validate_options

    options = validate_options(parse_command_line_arguments(sys.argv))
"""

from unity_builder.exceptions import (
    OptionsError,
    ProjectError,
    ProjectVersionError,
    SummaryError,
    UnityBuilderError,
)
from unity_builder.options import (
    display_value,
    parse_command_line_arguments,
    redact_options,
    validate_options,
)
from unity_builder.plan import BuildPlan
from unity_builder.results import BuildResult, BuildSummary, ExitCode, exit_code_for
from unity_builder.targets import BuildTarget, is_known_target

__all__ = [
    "BuildPlan",
    "BuildResult",
    "BuildSummary",
    "BuildTarget",
    "ExitCode",
    "OptionsError",
    "ProjectError",
    "ProjectVersionError",
    "SummaryError",
    "UnityBuilderError",
    "display_value",
    "exit_code_for",
    "is_known_target",
    "parse_command_line_arguments",
    "redact_options",
    "validate_options",
]
