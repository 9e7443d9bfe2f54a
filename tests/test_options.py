"""Tests for unity_builder/options.py - Argument parsing, redaction and validation"""

from __future__ import annotations

import pytest

from unity_builder.config import HIDDEN_PLACEHOLDER, SECRET_FLAGS
from unity_builder.exceptions import OptionsError
from unity_builder.options import (
    REQUIRED_FLAGS,
    display_value,
    parse_and_validate,
    parse_command_line_arguments,
    redact_options,
    validate_options,
)
from unity_builder.results import ExitCode


@pytest.fixture
def lines() -> list[str]:
    return []


@pytest.fixture
def valid_options() -> dict[str, str]:
    return {
        "projectPath": "/repo",
        "buildTarget": "StandaloneWindows64",
        "customBuildPath": "./out.exe",
    }


class TestParseCommandLineArguments:
    def test_flag_with_value(self, lines: list[str]) -> None:
        result = parse_command_line_arguments(["-projectPath", "/repo"], echo=lines.append)

        assert result == {"projectPath": "/repo"}

    def test_bare_flag_at_end_has_empty_value(self, lines: list[str]) -> None:
        result = parse_command_line_arguments(["-batchmode"], echo=lines.append)

        assert result == {"batchmode": ""}

    def test_flag_followed_by_flag_has_empty_value(self, lines: list[str]) -> None:
        result = parse_command_line_arguments(["-quit", "-batchmode", "-nographics"], echo=lines.append)

        assert result == {"quit": "", "batchmode": "", "nographics": ""}

    def test_leading_dashes_stripped_from_flag(self, lines: list[str]) -> None:
        result = parse_command_line_arguments(["--buildTarget", "Android"], echo=lines.append)

        assert result == {"buildTarget": "Android"}

    def test_non_flag_tokens_ignored(self, lines: list[str]) -> None:
        tokens = ["/Applications/Unity/Unity", "stray", "-projectPath", "/repo", "another"]

        result = parse_command_line_arguments(tokens, echo=lines.append)

        assert result == {"projectPath": "/repo"}

    def test_duplicate_flag_keeps_last_value(self, lines: list[str]) -> None:
        result = parse_command_line_arguments(
            ["-buildTarget", "Android", "-buildTarget", "iOS"],
            echo=lines.append,
        )

        assert result == {"buildTarget": "iOS"}

    def test_value_is_consumed_not_treated_as_flag(self, lines: list[str]) -> None:
        result = parse_command_line_arguments(["-customBuildName", "release-1"], echo=lines.append)

        assert result == {"customBuildName": "release-1"}

    def test_empty_tokens(self, lines: list[str]) -> None:
        assert parse_command_line_arguments([], echo=lines.append) == {}

    def test_every_unconsumed_flag_becomes_key(self, lines: list[str]) -> None:
        tokens = ["Unity", "-a", "1", "-b", "-c", "x", "y", "-d"]

        result = parse_command_line_arguments(tokens, echo=lines.append)

        assert set(result) == {"a", "b", "c", "d"}
        assert result == {"a": "1", "b": "", "c": "x", "d": ""}

    def test_echoes_banner_and_one_line_per_flag(self, lines: list[str]) -> None:
        parse_command_line_arguments(["-projectPath", "/repo", "-quit"], echo=lines.append)

        found = [line for line in lines if line.startswith("Found flag")]
        assert found == [
            'Found flag "projectPath" with value "/repo".',
            'Found flag "quit" with value "".',
        ]
        assert any("Parsing settings" in line for line in lines)

    def test_secret_value_never_echoed(self, lines: list[str]) -> None:
        parse_command_line_arguments(
            ["-androidKeystorePass", "hunter2", "-androidKeyaliasName", "release", "-androidKeyaliasPass", "s3cret"],
            echo=lines.append,
        )

        output = "\n".join(lines)
        assert "hunter2" not in output
        assert "release" not in output
        assert "s3cret" not in output
        assert output.count(HIDDEN_PLACEHOLDER) == 3

    def test_secret_value_still_stored(self, lines: list[str]) -> None:
        result = parse_command_line_arguments(["-androidKeystorePass", "hunter2"], echo=lines.append)

        assert result["androidKeystorePass"] == "hunter2"

    def test_default_echo_uses_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("INFO", logger="unity_builder.options")

        parse_command_line_arguments(["-projectPath", "/repo"])

        assert 'Found flag "projectPath" with value "/repo".' in caplog.text


class TestDisplayValue:
    @pytest.mark.parametrize("flag", SECRET_FLAGS)
    def test_secret_flags_hidden(self, flag: str) -> None:
        assert display_value(flag, "value") == HIDDEN_PLACEHOLDER

    def test_secret_set_is_exactly_three_signing_flags(self) -> None:
        assert set(SECRET_FLAGS) == {"androidKeystorePass", "androidKeyaliasName", "androidKeyaliasPass"}

    def test_keystore_name_is_not_secret(self) -> None:
        assert display_value("androidKeystoreName", "user.keystore") == '"user.keystore"'

    def test_plain_flag_quoted(self) -> None:
        assert display_value("buildTarget", "Android") == '"Android"'

    def test_plain_flag_empty_value(self) -> None:
        assert display_value("quit", "") == '""'


class TestRedactOptions:
    def test_replaces_only_secret_values(self) -> None:
        options = {"buildTarget": "Android", "androidKeyaliasPass": "s3cret"}

        result = redact_options(options)

        assert result == {"buildTarget": "Android", "androidKeyaliasPass": HIDDEN_PLACEHOLDER}

    def test_does_not_mutate_input(self) -> None:
        options = {"androidKeystorePass": "hunter2"}

        redact_options(options)

        assert options == {"androidKeystorePass": "hunter2"}


class TestValidateOptions:
    def test_valid_options_default_build_name(self, valid_options: dict[str, str], lines: list[str]) -> None:
        result = validate_options(valid_options, echo=lines.append)

        assert result["customBuildName"] == "TestBuild"
        assert lines == ["Missing argument -customBuildName, defaulting to TestBuild."]

    def test_empty_build_name_defaulted(self, valid_options: dict[str, str], lines: list[str]) -> None:
        valid_options["customBuildName"] = ""

        result = validate_options(valid_options, echo=lines.append)

        assert result["customBuildName"] == "TestBuild"
        assert lines == ["Invalid argument -customBuildName, defaulting to TestBuild."]

    def test_given_build_name_unchanged(self, valid_options: dict[str, str], lines: list[str]) -> None:
        valid_options["customBuildName"] = "release-1"

        result = validate_options(valid_options, echo=lines.append)

        assert result["customBuildName"] == "release-1"
        assert lines == []

    def test_custom_default_build_name(self, valid_options: dict[str, str], lines: list[str]) -> None:
        result = validate_options(valid_options, default_build_name="Nightly", echo=lines.append)

        assert result["customBuildName"] == "Nightly"

    def test_does_not_mutate_input(self, valid_options: dict[str, str], lines: list[str]) -> None:
        validate_options(valid_options, echo=lines.append)

        assert "customBuildName" not in valid_options

    def test_missing_project_path(self, valid_options: dict[str, str]) -> None:
        del valid_options["projectPath"]

        with pytest.raises(OptionsError) as exc_info:
            validate_options(valid_options)

        assert exc_info.value.exit_code == ExitCode.MISSING_PROJECT_PATH == 110
        assert exc_info.value.message == "Missing argument -projectPath"

    def test_missing_build_target(self, valid_options: dict[str, str]) -> None:
        del valid_options["buildTarget"]

        with pytest.raises(OptionsError) as exc_info:
            validate_options(valid_options)

        assert exc_info.value.exit_code == 120
        assert exc_info.value.code == "MISSING_BUILD_TARGET"

    def test_unknown_build_target(self, valid_options: dict[str, str]) -> None:
        valid_options["buildTarget"] = "Dreamcast"

        with pytest.raises(OptionsError) as exc_info:
            validate_options(valid_options)

        assert exc_info.value.exit_code == 121

    def test_build_target_is_case_sensitive(self, valid_options: dict[str, str]) -> None:
        valid_options["buildTarget"] = "android"

        with pytest.raises(OptionsError) as exc_info:
            validate_options(valid_options)

        assert exc_info.value.exit_code == 121

    def test_empty_build_target_is_invalid(self, valid_options: dict[str, str]) -> None:
        valid_options["buildTarget"] = ""

        with pytest.raises(OptionsError) as exc_info:
            validate_options(valid_options)

        assert exc_info.value.exit_code == 121

    def test_missing_custom_build_path(self, valid_options: dict[str, str]) -> None:
        del valid_options["customBuildPath"]

        with pytest.raises(OptionsError) as exc_info:
            validate_options(valid_options)

        assert exc_info.value.exit_code == 130

    def test_first_unmet_requirement_wins(self) -> None:
        with pytest.raises(OptionsError) as exc_info:
            validate_options({"buildTarget": "StandaloneWindows64"})

        assert exc_info.value.exit_code == 110

    def test_missing_build_target_reported_once(self) -> None:
        with pytest.raises(OptionsError) as exc_info:
            validate_options({"projectPath": "/repo", "customBuildPath": "./out"})

        assert exc_info.value.exit_code == 120

    def test_invalid_target_checked_before_build_path(self) -> None:
        with pytest.raises(OptionsError) as exc_info:
            validate_options({"projectPath": "/repo", "buildTarget": "Nope"})

        assert exc_info.value.exit_code == 121

    def test_required_flags_table_order(self) -> None:
        assert [(r.name, int(r.exit_code)) for r in REQUIRED_FLAGS] == [
            ("projectPath", 110),
            ("buildTarget", 120),
            ("customBuildPath", 130),
        ]


class TestParseAndValidate:
    def test_example_tokens(self, lines: list[str]) -> None:
        tokens = ["-projectPath", "/repo", "-buildTarget", "StandaloneWindows64", "-customBuildPath", "./out.exe"]

        result = parse_and_validate(tokens, echo=lines.append)

        assert result == {
            "projectPath": "/repo",
            "buildTarget": "StandaloneWindows64",
            "customBuildPath": "./out.exe",
            "customBuildName": "TestBuild",
        }

    def test_missing_project_and_build_path(self, lines: list[str]) -> None:
        with pytest.raises(OptionsError) as exc_info:
            parse_and_validate(["-buildTarget", "StandaloneWindows64"], echo=lines.append)

        assert exc_info.value.exit_code == 110

    def test_accepts_iterator(self, lines: list[str]) -> None:
        tokens = iter(["-projectPath", "/repo", "-buildTarget", "iOS", "-customBuildPath", "out"])

        result = parse_and_validate(tokens, echo=lines.append)

        assert result["buildTarget"] == "iOS"
