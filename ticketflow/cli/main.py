"""Main CLI entry point for ticketflow."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from ticketflow import __version__
from ticketflow.cli.errors import CLIError, ErrorCode, from_prompt_error
from ticketflow.cli.output import (
    OutputFormat,
    OutputWriter,
    handle_error,
    new_status_writer,
    parse_output_format,
)
from ticketflow.ui.policy import InteractionSignals, classify
from ticketflow.ui.prompts import PromptError, PromptOption, confirm, prompt
from ticketflow.utils.config import DEFAULT_CONFIG_FILE, ConfigError, load_config
from ticketflow.utils.log import LoggingConfigError, LoggingOptions, configure_logging


def _fail(ctx: click.Context, exc: BaseException) -> NoReturn:
    writer: OutputWriter = ctx.obj["writer"]
    if isinstance(exc, PromptError):
        exc = from_prompt_error(exc)
    writer.error(exc)
    sys.exit(1)


def _parse_option(raw: str, default_key: str | None) -> PromptOption:
    """Parse ``KEY`` or ``KEY=DESCRIPTION``."""
    key, _, description = raw.partition("=")
    key = key.strip()
    if not key:
        raise click.BadParameter(f"empty option key in {raw!r}", param_hint="--option")
    return PromptOption(
        key=key,
        description=description.strip() or key,
        is_default=key == default_key,
    )


@click.group()
@click.version_option(version=__version__, prog_name="ticketflow")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="Project config file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default=None,
    help="Output format (default: output.default_format from config)",
)
@click.option(
    "--no-interactive",
    is_flag=True,
    help="Never prompt; use default answers (same as TICKETFLOW_NON_INTERACTIVE=true)",
)
@click.option("--log-level", default="", help="Log level (debug, info, warn, error)")
@click.option("--log-format", default="", help="Log format (text, json)")
@click.option("--log-output", default="", help="Log output (stderr, stdout, or file path)")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_path: Path,
    output_format: str | None,
    no_interactive: bool,
    log_level: str,
    log_format: str,
    log_output: str,
) -> None:
    """Ticket workflow helper: interactive decisions with safe non-interactive defaults."""
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        handle_error(
            CLIError(
                ErrorCode.CONFIG_INVALID,
                "Invalid configuration file",
                details=str(exc),
                suggestions=[f"Fix or remove {config_path}"],
            ),
            parse_output_format(output_format) if output_format else None,
        )
        sys.exit(1)

    fmt = parse_output_format(output_format or config.output.default_format)
    writer = OutputWriter(fmt, pretty=config.output.json_pretty)

    flags = LoggingOptions(level=log_level, format=log_format, output=log_output)
    if verbose and not flags.level:
        flags.level = "debug"
    try:
        configure_logging(flags.merged_over(config.logging.to_options()))
    except LoggingConfigError as exc:
        writer.error(
            CLIError(
                ErrorCode.CONFIG_INVALID,
                "Cannot set up logging",
                details=str(exc),
                suggestions=["Check --log-output points to a writable file"],
            )
        )
        sys.exit(1)

    signals = InteractionSignals.from_env()
    if no_interactive:
        signals = signals.with_override("true")

    ctx.ensure_object(dict)
    ctx.obj["format"] = fmt
    ctx.obj["writer"] = writer
    ctx.obj["status"] = new_status_writer(fmt)
    ctx.obj["signals"] = signals


@cli.command("mode")
@click.pass_context
def mode_command(ctx: click.Context) -> None:
    """Show whether prompts will wait for input."""
    mode = classify(ctx.obj["signals"])
    writer: OutputWriter = ctx.obj["writer"]
    if ctx.obj["format"] is OutputFormat.JSON:
        writer.print_result({"mode": str(mode)})
    else:
        writer.print_result(str(mode))


@cli.command("choose")
@click.argument("message")
@click.option(
    "-o",
    "--option",
    "raw_options",
    multiple=True,
    required=True,
    help="Option as KEY or KEY=DESCRIPTION (repeatable)",
)
@click.option("-d", "--default", "default_key", default=None, help="Key used without a terminal")
@click.pass_context
def choose_command(
    ctx: click.Context,
    message: str,
    raw_options: tuple[str, ...],
    default_key: str | None,
) -> None:
    """Ask a single-choice question and print the chosen key."""
    options = [_parse_option(raw, default_key) for raw in raw_options]
    if default_key is not None and not any(opt.is_default for opt in options):
        raise click.BadParameter(
            f"{default_key!r} is not one of the options", param_hint="--default"
        )

    try:
        key = prompt(
            message,
            options,
            signals=ctx.obj["signals"],
            status=ctx.obj["status"],
        )
    except PromptError as exc:
        _fail(ctx, exc)

    writer: OutputWriter = ctx.obj["writer"]
    if ctx.obj["format"] is OutputFormat.JSON:
        writer.print_result({"choice": key})
    else:
        writer.print_result(key)


@cli.command("confirm")
@click.argument("message")
@click.option("--default-yes", is_flag=True, help="Answer yes when no terminal is available")
@click.pass_context
def confirm_command(ctx: click.Context, message: str, default_yes: bool) -> None:
    """Ask a yes/no question. Exit status is 0 for yes and 1 for no."""
    confirmed = confirm(
        message,
        default_yes=default_yes,
        signals=ctx.obj["signals"],
        status=ctx.obj["status"],
    )

    writer: OutputWriter = ctx.obj["writer"]
    if ctx.obj["format"] is OutputFormat.JSON:
        writer.print_result({"confirmed": confirmed})
    else:
        writer.print_result("yes" if confirmed else "no")
    if not confirmed:
        ctx.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
