"""
Command-line interface for specdoc using Click.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from .app import SpecdocApp
from .app_logger import set_default_logger
from .config import BuildConfig, DEFAULT_HOST, DEFAULT_PORT
from .logging_config import (
    FORMAT_NAMES,
    ConfigurableAppLogger,
    HandlerConfig,
    LogFormat,
    LogHandler,
    LoggingConfig,
    VerbosityLevel,
    handlers_from_names,
)


def _configure_logging(
    verbose: int,
    quiet: bool,
    log_level: Optional[str],
    log_format: str,
    log_file: Optional[str],
    log_handlers: Optional[str],
    log_exclude: Optional[str],
    log_include_only: Optional[str],
) -> ConfigurableAppLogger:
    """Configure logging based on CLI options."""
    config = LoggingConfig()

    if quiet:
        config.verbosity = VerbosityLevel.QUIET
    elif verbose:
        config.verbosity = VerbosityLevel.VERBOSE

    if log_level:
        config.global_level = log_level.upper()

    config.global_format = FORMAT_NAMES.get(log_format, LogFormat.SIMPLE)

    if log_handlers:
        handler_configs = handlers_from_names(log_handlers, log_file)
        if handler_configs:
            config.handlers = handler_configs
    elif log_file:
        # Add file handler in addition to console
        config.handlers = [
            HandlerConfig(type=LogHandler.CONSOLE),
            HandlerConfig(type=LogHandler.ROTATING_FILE, filename=log_file),
        ]

    if log_exclude:
        config.exclude_components = [c.strip() for c in log_exclude.split(",")]

    if log_include_only:
        config.include_only_components = [
            c.strip() for c in log_include_only.split(",")
        ]

    logger = ConfigurableAppLogger(config)
    set_default_logger(logger)
    return logger


def version_callback(ctx, _, value):
    """Callback for the version option that prints the version and exits."""
    if not value or ctx.resilient_parsing:
        return
    from . import __version__

    click.echo(f"specdoc version {__version__}")
    ctx.exit()


@click.command()
@click.argument(
    "root",
    type=click.Path(
        exists=True, file_okay=False, dir_okay=True, readable=True, path_type=Path
    ),
    default=".",
    metavar="[ROOT]",
)
@click.option(
    "--watch",
    "-w",
    is_flag=True,
    help="Serve the output and rebuild when sources change",
)
@click.option(
    "--spec-dir",
    envvar="SPECDOC_SPEC_DIR",
    help="Spec source directory, relative to ROOT (default: spec)",
)
@click.option(
    "--output-dir",
    envvar="SPECDOC_OUTPUT_DIR",
    help="Output directory, relative to ROOT (default: build)",
)
@click.option(
    "--metadata",
    envvar="SPECDOC_METADATA",
    help="Metadata JSON file, relative to the spec directory (default: metadata.json)",
)
@click.option(
    "--title",
    envvar="SPECDOC_TITLE",
    help="Title of the generated index page",
)
@click.option(
    "--host",
    envvar="SPECDOC_HOST",
    default=DEFAULT_HOST,
    show_default=True,
    help="Dev server bind address (watch mode)",
)
@click.option(
    "--port",
    envvar="SPECDOC_PORT",
    type=click.IntRange(0, 65535),
    default=DEFAULT_PORT,
    show_default=True,
    help="Dev server port (watch mode)",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity",
)
@click.option(
    "--quiet", "-q", is_flag=True, help="Reduce output to warnings and errors only"
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    help="Set explicit log level (overrides verbose/quiet)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "simple", "detailed"], case_sensitive=False),
    default="simple",
    help="Log output format",
)
@click.option(
    "--json",
    "json_format",
    is_flag=True,
    help="Use JSON log format (alias for --log-format json)",
)
@click.option(
    "--log-file", type=click.Path(), help="Write logs to file (in addition to console)"
)
@click.option(
    "--log-handlers",
    help="Comma-separated list of log handlers (console,file,rotating,null)",
)
@click.option(
    "--log-exclude", help="Comma-separated list of components to exclude from logging"
)
@click.option(
    "--log-include-only",
    help="Comma-separated list of components to include in logging (excludes all others)",
)
@click.option(
    "--version",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=version_callback,
    help="Show version and exit",
)
@click.help_option("--help", "-h")
def main(
    root: Path,
    watch: bool,
    spec_dir: Optional[str],
    output_dir: Optional[str],
    metadata: Optional[str],
    title: Optional[str],
    host: str,
    port: int,
    verbose: int,
    quiet: bool,
    log_level: Optional[str],
    log_format: str,
    json_format: bool,
    log_file: Optional[str],
    log_handlers: Optional[str],
    log_exclude: Optional[str],
    log_include_only: Optional[str],
) -> None:
    """
    Build versioned Markdown specs into static HTML.

    ROOT is the project directory holding the spec sources (spec/) and
    receiving the output (build/). Every spec/*.md file with a v<N> token in
    its name is rendered to build/<name>.html, and build/index.html lists the
    versions newest first.

    Examples:

        specdoc

        specdoc ~/my-spec --watch

        specdoc . --output-dir public --title "My Spec Versions"

        specdoc -w --port 9000 --log-level DEBUG
    """
    if json_format:
        log_format = "json"

    _configure_logging(
        verbose,
        quiet,
        log_level,
        log_format,
        log_file,
        log_handlers,
        log_exclude,
        log_include_only,
    )

    config = BuildConfig.from_root(
        root,
        spec_dir=spec_dir,
        output_dir=output_dir,
        metadata=metadata,
        index_title=title,
        host=host,
        port=port,
    )

    try:
        exit_code = SpecdocApp(config).run(watch=watch)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
