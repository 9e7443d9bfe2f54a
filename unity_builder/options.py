"""Command-line option parsing and validation.

Parses the editor's process-start tokens (``-flag value`` and bare ``-flag``)
into a flat mapping, redacting signing secrets from diagnostic output, and
validates the flags a build cannot run without.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from unity_builder.config import DEFAULT_BUILD_NAME, HIDDEN_PLACEHOLDER, SECRET_FLAGS
from unity_builder.exceptions import OptionsError
from unity_builder.results import ExitCode, banner
from unity_builder.targets import is_known_target

logger = logging.getLogger(__name__)

# Type alias for diagnostic line sink
Echo = Callable[[str], None]

FLAG_PREFIX = "-"
BUILD_TARGET_FLAG = "buildTarget"
CUSTOM_BUILD_NAME_FLAG = "customBuildName"


@dataclass(frozen=True)
class RequiredFlag:
    """A flag that must be present, and the exit code used when it is not."""

    name: str
    exit_code: ExitCode
    code: str


# Checked in order; the first missing flag wins.
REQUIRED_FLAGS: tuple[RequiredFlag, ...] = (
    RequiredFlag("projectPath", ExitCode.MISSING_PROJECT_PATH, "MISSING_PROJECT_PATH"),
    RequiredFlag(BUILD_TARGET_FLAG, ExitCode.MISSING_BUILD_TARGET, "MISSING_BUILD_TARGET"),
    RequiredFlag("customBuildPath", ExitCode.MISSING_CUSTOM_BUILD_PATH, "MISSING_CUSTOM_BUILD_PATH"),
)


def _log_echo(line: str) -> None:
    logger.info(line)


def is_flag(token: str) -> bool:
    return token.startswith(FLAG_PREFIX)


def is_secret(flag: str) -> bool:
    return flag in SECRET_FLAGS


def display_value(flag: str, value: str) -> str:
    """Value as shown in diagnostic output: quoted, or hidden for secret flags."""
    if is_secret(flag):
        return HIDDEN_PLACEHOLDER
    return f'"{value}"'


def redact_options(options: Mapping[str, str]) -> dict[str, str]:
    """Copy of options with secret values replaced by the placeholder."""
    return {flag: HIDDEN_PLACEHOLDER if is_secret(flag) else value for flag, value in options.items()}


def parse_command_line_arguments(
    tokens: Sequence[str],
    echo: Echo | None = None,
) -> dict[str, str]:
    """Extract flags and their optional values from process-start tokens.

    A token starting with ``-`` is a flag. Its value is the following token
    (leading dashes stripped) unless there is none or it is itself a flag, in
    which case the value is empty. Tokens that are neither flags nor a flag's
    value are ignored. A repeated flag keeps its last value.

    Args:
        tokens: Process-start tokens, e.g. ``sys.argv``.
        echo: Sink for diagnostic lines. Defaults to the module logger.

    Returns:
        Mapping from flag name (without dashes) to value.
    """
    echo = echo or _log_echo
    options: dict[str, str] = {}

    for line in banner("Parsing settings"):
        echo(line)

    for current, token in enumerate(tokens):
        if not is_flag(token):
            continue
        flag = token.lstrip(FLAG_PREFIX)

        following = current + 1
        has_value = following < len(tokens) and not is_flag(tokens[following])
        value = tokens[following].lstrip(FLAG_PREFIX) if has_value else ""

        if flag in options:
            logger.debug(f"Flag {flag!r} given more than once, keeping last value")
        echo(f'Found flag "{flag}" with value {display_value(flag, value)}.')
        options[flag] = value

    echo("")
    echo("#" * 27)
    return options


def validate_options(
    options: Mapping[str, str],
    default_build_name: str = DEFAULT_BUILD_NAME,
    echo: Echo | None = None,
) -> dict[str, str]:
    """Check required flags and fill in the build name default.

    Checks stop at the first failure: a missing build target is reported
    once, without a second invalid-target failure for the same cause.

    Args:
        options: Parsed options.
        default_build_name: Used when ``customBuildName`` is absent or empty.
        echo: Sink for notices. Defaults to the module logger.

    Returns:
        New mapping guaranteed to contain ``customBuildName``.

    Raises:
        OptionsError: For the first unmet requirement, with its exit code.
    """
    echo = echo or _log_echo
    validated = dict(options)

    for required in REQUIRED_FLAGS:
        if required.name not in validated:
            raise OptionsError(
                f"Missing argument -{required.name}",
                code=required.code,
                exit_code=required.exit_code,
            )
        if required.name == BUILD_TARGET_FLAG and not is_known_target(validated[BUILD_TARGET_FLAG]):
            raise OptionsError(
                f"Invalid argument -{BUILD_TARGET_FLAG}: {validated[BUILD_TARGET_FLAG]!r} is not a known build target",
                code="INVALID_BUILD_TARGET",
                exit_code=ExitCode.INVALID_BUILD_TARGET,
            )

    build_name = validated.get(CUSTOM_BUILD_NAME_FLAG)
    if build_name is None:
        echo(f"Missing argument -{CUSTOM_BUILD_NAME_FLAG}, defaulting to {default_build_name}.")
        validated[CUSTOM_BUILD_NAME_FLAG] = default_build_name
    elif build_name == "":
        echo(f"Invalid argument -{CUSTOM_BUILD_NAME_FLAG}, defaulting to {default_build_name}.")
        validated[CUSTOM_BUILD_NAME_FLAG] = default_build_name

    return validated


def parse_and_validate(
    tokens: Iterable[str],
    default_build_name: str = DEFAULT_BUILD_NAME,
    echo: Echo | None = None,
) -> dict[str, str]:
    """Parse tokens then validate them. See the two steps for details."""
    options = parse_command_line_arguments(list(tokens), echo=echo)
    return validate_options(options, default_build_name=default_build_name, echo=echo)
