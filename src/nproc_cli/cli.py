"""
CLI module for handling command-line interface operations.
"""

import logging

import click
from pydantic import ValidationError

from .constants import LONG_OPTIONS, PROGRAM_NAME
from .exceptions import ConfigurationError, CpuQueryError
from .logging import setup_cli_logging
from .models.request import Request
from .resolver import resolve
from .utils.config import load_settings
from .utils.system import CpuQuerySource, get_cpu_query_source

log = logging.getLogger(__name__)

# ctx.meta key marking an invocation without any arguments
NO_ARGUMENTS = "nproc.no_arguments"


def expand_abbreviation(name: str) -> str:
    """Expand an unambiguous prefix of a long option name, the way getopt_long does."""
    if name in LONG_OPTIONS:
        return name
    candidates = [option for option in LONG_OPTIONS if option.startswith(name)]
    return candidates[0] if len(candidates) == 1 else name


CONTEXT_SETTINGS = {
    "token_normalize_func": expand_abbreviation,
    # operands are accepted and ignored
    "allow_extra_args": True,
}


def configure_logging():
    """Read the settings and set up diagnostics on stderr."""
    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as e:
        raise click.ClickException(str(e)) from e
    try:
        setup_cli_logging(settings.log_file, settings.log_level)
    except OSError as e:
        raise click.ClickException(f"Cannot open log file '{settings.log_file}': {e}") from e


def report(request: Request | None, source: CpuQuerySource | None = None):
    """
    Print the line resolved for the request to stdout.

    :param request: The parsed flags, or ``None`` when nproc was run without any arguments.
    :param source: Where to read CPU counts from; defaults to the source for the running platform.
    """
    if source is None:
        source = get_cpu_query_source()
    try:
        line = resolve(request, source)
    except CpuQueryError as e:
        log.error("CPU query failed: %s", e)
        log.debug("CPU query traceback:", exc_info=True)
        raise click.ClickException(str(e)) from e
    click.echo(line)


class NprocCommand(click.Command):
    """
    A click Command with nproc's exit status and argument handling.

    Usage errors exit with status 1, and an invocation without any arguments
    skips option parsing entirely.
    """

    def __init__(self, *args, source: CpuQuerySource | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.source = source

    def parse_args(self, ctx, args):
        if not args:
            ctx.meta[NO_ARGUMENTS] = True
            ctx.args = []
            return []
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx):
        configure_logging()
        if ctx.meta.get(NO_ARGUMENTS):
            log.debug("No arguments given, reporting usable CPUs.")
            report(None, self.source)
            return None
        return super().invoke(ctx)


def build_cli(source: CpuQuerySource | None = None):
    """
    Factory for building the CLI application.

    :param source: Where to read CPU counts from; defaults to the source for the running platform.
    """

    @click.command(
        name=PROGRAM_NAME,
        cls=NprocCommand,
        source=source,
        context_settings=CONTEXT_SETTINGS,
        add_help_option=False,
        help="Print the number of processing units available to the current process.",
    )
    @click.option("--all", "include_all", is_flag=True, help="Print the number of installed processors.")
    @click.option("--online", "include_online", is_flag=True, help="Print the number of online processors.")
    @click.option(
        "--usable",
        "include_usable",
        is_flag=True,
        help="Print the number of processors this process may run on (the default).",
    )
    @click.option(
        "--ignore",
        "ignore_count",
        metavar="COUNT",
        type=click.IntRange(min=0),
        default=None,
        help="Exclude COUNT processors, but never report fewer than one.",
    )
    @click.option("--help", "show_help", is_flag=True, help="Print a usage summary.")
    @click.option("--version", "show_version", is_flag=True, help="Print the program name and version.")
    @click.pass_context
    def cli(
        ctx: click.Context,
        include_all: bool,
        include_online: bool,
        include_usable: bool,
        ignore_count: int | None,
        show_help: bool,
        show_version: bool,
    ):
        if ctx.args:
            log.debug(f"Ignoring operands: {ctx.args}")

        request = Request(
            include_all=include_all,
            include_online=include_online,
            include_usable=include_usable,
            ignore_count=ignore_count,
            show_help=show_help,
            show_version=show_version,
        )
        log.debug(f"Parsed request: {request!r}")

        report(request, ctx.command.source)

    return cli


def main():
    """
    Main entry point for the CLI application.
    """
    cli = build_cli()
    cli(prog_name=PROGRAM_NAME)


if __name__ == "__main__":
    main()
