"""
Command-line interface for art-size-reader.

This module implements the `artsize` command using Click, with rich-click
for colored help output. It only translates flags into a ConfigBuilder,
runs the Walker and prints the final status.

Usage:
    # Report covers smaller than 500x500
    artsize -i ~/Music -t 500x500

    # Square covers between 500x500 and 1500x1500, at most 800 kB
    artsize -i ~/Music -t 500x500 -m 1500x1500 -r -s 800

    # Write findings to a logfile and offending files to a playlist
    artsize -i ~/Music -t 500x500 -l ~/artsize.log -p ~/broken_covers.m3u

    # Take option defaults from a YAML file
    artsize -i ~/Music --config ~/.artsize.yaml

Exit Codes:
    0   - Finished (violations and per-file errors do not count as failure)
    1   - Configuration error (bad path, bad threshold, unwritable output)
    2   - Nothing to check (neither --threshold nor --size)
    130 - Interrupted by user
"""

import sys
from pathlib import Path
from typing import Optional

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "artsize": [
        {
            "name": "Input",
            "options": ["--input", "--config"],
        },
        {
            "name": "Checks",
            "options": ["--threshold", "--max-threshold", "--ratio", "--size"],
        },
        {
            "name": "Outputs",
            "options": ["--logfile", "--playlist"],
        },
        {
            "name": "Info",
            "options": ["--verbose", "--version", "--help"],
        },
    ],
}

from art_size_reader import __version__
from art_size_reader.audit import Reporter, RunSummary, Walker
from art_size_reader.core import (
    ArtSizeReaderError,
    ConfigBuilder,
    ConfigError,
    get_logger,
    load_defaults,
    setup_logging,
    shutdown_logging,
)

logger = get_logger(__name__)


EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_NOTHING_TO_CHECK = 2
EXIT_INTERRUPTED = 130

MISSING_CHECKS_MESSAGE = "ERROR(S):\n  -t/--threshold and/or -s/--size are required."


@click.command(name="artsize")
@click.option(
    "-i", "--input", "input_path",
    type=str,
    required=True,
    metavar="<path>",
    help="MP3 file or directory to analyze"
)
@click.option(
    "-t", "--threshold",
    type=str,
    default=None,
    metavar="<WxH>",
    help="Report covers smaller than this resolution, e.g. 500x500"
)
@click.option(
    "-m", "--max-threshold",
    type=str,
    default=None,
    metavar="<WxH>",
    help="Report covers larger than this resolution, e.g. 1500x1500"
)
@click.option(
    "-r", "--ratio",
    is_flag=True,
    help="Report covers that are not square"
)
@click.option(
    "-s", "--size",
    type=float,
    default=None,
    metavar="<kB>",
    help="Report covers larger than this many kilobytes"
)
@click.option(
    "-l", "--logfile",
    type=str,
    default=None,
    metavar="<file>",
    help="Append findings to this file instead of the console"
)
@click.option(
    "-p", "--playlist",
    type=str,
    default=None,
    metavar="<file>",
    help="Append offending files to this playlist"
)
@click.option(
    "--config", "config_file",
    type=click.Path(path_type=Path),
    default=None,
    metavar="<file.yaml>",
    help="YAML file with option defaults"
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show debug messages (skipped directories, unexpected failures)"
)
@click.version_option(__version__, "--version", prog_name="art-size-reader")
@click.pass_context
def cli(
    ctx: click.Context,
    input_path: str,
    threshold: Optional[str],
    max_threshold: Optional[str],
    ratio: bool,
    size: Optional[float],
    logfile: Optional[str],
    playlist: Optional[str],
    config_file: Optional[Path],
    verbose: bool
) -> None:
    """
    art-size-reader: Audit the embedded cover art of MP3 files.

    Reads the cover of every MP3 file under the input path and reports
    covers that are too small, too large, not square or too heavy.
    Files are never modified.

    \b
    EXAMPLES:
        artsize -i ~/Music -t 500x500
        artsize -i ~/Music -t 500x500 -m 1500x1500 -r -s 800
        artsize -i song.mp3 -s 300 -p ~/broken_covers.m3u
    """
    builder = ConfigBuilder(
        target_path=input_path,
        threshold=threshold,
        max_threshold=max_threshold,
        ratio=ratio,
        size=size,
        logfile=logfile,
        playlist=playlist,
    )

    exit_code, summary = _run_audit(ctx, builder, config_file, verbose)

    if exit_code == EXIT_OK and summary is not None and summary.errors == 0:
        click.echo("\nFinished!")
    else:
        click.echo("\nFinished with errors!")

    ctx.exit(exit_code)


def _run_audit(
    ctx: click.Context,
    builder: ConfigBuilder,
    config_file: Path | None,
    verbose: bool
) -> tuple[int, RunSummary | None]:
    """
    Build the configuration and run the audit.

    Args:
        ctx: Click context, used to print the help text.
        builder: Builder holding the values given on the command line.
        config_file: Optional YAML file with defaults.
        verbose: Enable debug logging.

    Returns:
        Process exit code, and the run summary if the scan took place.
        Files that could not be read are counted in the summary but do
        not change the exit code.
    """
    setup_logging(verbose=verbose, color=sys.stderr.isatty())

    try:
        if config_file is not None:
            builder.apply_defaults(load_defaults(config_file.expanduser()))

        if not builder.has_checks:
            click.echo(MISSING_CHECKS_MESSAGE)
            click.echo(ctx.get_help())
            return EXIT_NOTHING_TO_CHECK, None

        with builder.build() as config:
            reporter = Reporter(logfile=config.logfile, playlist=config.playlist)
            summary = Walker(config, reporter).run()

        logger.info(
            f"Scanned {summary.scanned} files: "
            f"{summary.violations} with violations, {summary.errors} unreadable"
        )
        return (EXIT_OK if summary.success else EXIT_NOTHING_TO_CHECK), summary

    except ConfigError as e:
        click.echo(f"Error: {e.message}", err=True)
        if e.details:
            logger.debug(f"Details: {e.details}")
        return EXIT_CONFIG_ERROR, None

    except ArtSizeReaderError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        return EXIT_CONFIG_ERROR, None

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        return EXIT_INTERRUPTED, None

    finally:
        shutdown_logging()


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `artsize` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
