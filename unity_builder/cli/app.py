"""
unity-builder - Typer Application
==================================

Commands for validating the editor's build parameters, previewing the
resulting build plan, and turning a finished build's summary into the
process exit code the orchestrator expects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path
from typing import Annotated

import typer

from unity_builder.cli.output import (
    console,
    err_console,
    print_error,
    print_info,
    print_json,
    print_key_value,
    print_line,
    print_success,
    print_targets_table,
    print_warning,
)
from unity_builder.config import CONFIG_FILE_NAME, LOG_FORMAT, BuilderConfig
from unity_builder.exceptions import OptionsError, ProjectError, SummaryError, UnityBuilderError
from unity_builder.options import Echo, parse_and_validate, redact_options
from unity_builder.plan import BuildPlan
from unity_builder.project import ProjectVersion, is_unity_project
from unity_builder.results import BuildSummary, format_summary, result_message
from unity_builder.targets import BuildTarget

logger = logging.getLogger(__name__)

# Editor-style tokens (-projectPath, -buildTarget, ...) are forwarded untouched
PASSTHROUGH_SETTINGS = {"ignore_unknown_options": True}

TokensArgument = Annotated[
    list[str] | None,
    typer.Argument(
        help="Editor command-line tokens, e.g. -projectPath . -buildTarget Android",
        show_default=False,
    ),
]


# =============================================================================
# Context Object
# =============================================================================


@dataclass
class CLIContext:
    """Context object shared across commands via ctx.obj."""

    config: BuilderConfig
    json_mode: bool = False

    @property
    def echo(self) -> Echo:
        """Diagnostic sink; stderr in JSON mode so stdout stays parseable."""
        if self.json_mode:
            return lambda line: err_console.print(line, markup=False, highlight=False, soft_wrap=True)
        return print_line


# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    name="unity-builder",
    help="unity-builder - Validate Unity batch-mode build parameters and map build results to exit codes",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help=f"Config file (default: nearest {CONFIG_FILE_NAME})",
            envvar="UNITY_BUILDER_CONFIG",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output JSON format",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug logging",
        ),
    ] = False,
) -> None:
    """unity-builder - Unity batch-mode build shim."""
    config = BuilderConfig.load(config_path)

    log_level = logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger("unity_builder").setLevel(log_level)

    ctx.obj = CLIContext(config=config, json_mode=json_output)


# =============================================================================
# Basic Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show CLI version."""
    try:
        ver = pkg_version("unity-builder")
    except PackageNotFoundError:
        ver = "unknown"
    console.print(f"unity-builder {ver}")


@app.command(context_settings=PASSTHROUGH_SETTINGS)
def validate(ctx: typer.Context, tokens: TokensArgument = None) -> None:
    """Parse and validate build parameters.

    Exits 110/120/121/130 on the first missing or invalid required flag.

    Examples:
        unity-builder validate -projectPath . -buildTarget StandaloneWindows64 -customBuildPath ./out.exe
    """
    context: CLIContext = ctx.obj
    try:
        options = parse_and_validate(
            tokens or [],
            default_build_name=context.config.default_build_name,
            echo=context.echo,
        )
    except OptionsError as e:
        print_error(e.message, e.code)
        raise typer.Exit(int(e.exit_code)) from None

    if context.json_mode:
        print_json(redact_options(options))
    else:
        print_success(f"Validated {len(options)} option(s)")


@app.command(context_settings=PASSTHROUGH_SETTINGS)
def plan(ctx: typer.Context, tokens: TokensArgument = None) -> None:
    """Validate build parameters and show the resulting build plan."""
    context: CLIContext = ctx.obj
    try:
        options = parse_and_validate(
            tokens or [],
            default_build_name=context.config.default_build_name,
            echo=context.echo,
        )
        build_plan = BuildPlan.from_options(options)
    except OptionsError as e:
        print_error(e.message, e.code)
        raise typer.Exit(int(e.exit_code)) from None

    if context.json_mode:
        print_json(build_plan.to_dict())
        return

    print_key_value(build_plan.to_dict(), title="Build plan")
    if not is_unity_project(build_plan.project_path):
        print_warning(f"{build_plan.project_path} is not a Unity project on this machine")
        return
    try:
        print_info(f"Project saved with Unity {ProjectVersion.from_file(build_plan.project_path).version}")
    except ProjectError as e:
        print_warning(e.message)


@app.command()
def report(
    ctx: typer.Context,
    summary_file: Annotated[
        Path,
        typer.Argument(help="Build summary JSON written by the editor"),
    ],
) -> None:
    """Print build results and exit with the code for the build outcome.

    Exit codes: 0 succeeded, 101 failed, 102 cancelled, 103 unknown.
    """
    context: CLIContext = ctx.obj
    try:
        summary = BuildSummary.from_file(summary_file)
    except SummaryError as e:
        print_error(e.message, e.code)
        raise typer.Exit(1) from None

    if context.json_mode:
        print_json(summary.to_dict())
    else:
        for line in format_summary(summary):
            print_line(line)
        print_line(result_message(summary.result))

    logger.debug(f"Build result {summary.result.value} -> exit code {int(summary.exit_code)}")
    raise typer.Exit(int(summary.exit_code))


@app.command()
def targets(
    ctx: typer.Context,
    include_legacy: Annotated[
        bool,
        typer.Option("--legacy", "-l", help="Include obsolete targets"),
    ] = False,
) -> None:
    """List known build targets."""
    context: CLIContext = ctx.obj
    shown = [t for t in BuildTarget if include_legacy or not t.is_legacy]

    if context.json_mode:
        print_json([t.value for t in shown])
    else:
        print_targets_table(shown)


# =============================================================================
# Config Commands
# =============================================================================

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show current configuration."""
    context: CLIContext = ctx.obj
    config_file = BuilderConfig._find_config_file()

    data = {
        "config_file": str(config_file) if config_file else None,
        "default_build_name": context.config.default_build_name,
        "log_level": context.config.log_level,
    }
    if context.json_mode:
        print_json(data)
    else:
        print_key_value(data, title="=== unity-builder Configuration ===")


@config_app.command("init")
def config_init(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Generate default .unity-builder.toml configuration file."""
    output_path = output or Path(CONFIG_FILE_NAME)

    if output_path.exists() and not force:
        print_error(f"{output_path} already exists. Use --force to overwrite.")
        raise typer.Exit(1) from None

    try:
        output_path.write_text(BuilderConfig().to_toml(), encoding="utf-8")
    except OSError as e:
        print_error(f"Cannot write {output_path}: {e}")
        raise typer.Exit(1) from None
    print_success(f"Created {output_path}")


# =============================================================================
# Entry Point
# =============================================================================


def cli_main() -> None:
    """CLI entry point."""
    try:
        app()
    except UnityBuilderError as e:
        print_error(e.message, e.code)
        raise SystemExit(1) from None


if __name__ == "__main__":
    cli_main()
