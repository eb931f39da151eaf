"""Command line entry point for hired.

Parses the options, builds the configuration, probes the terminal and the
optional tools once, then plays the announcement inside a terminal session
that always restores the terminal.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import click

from hired import __version__
from hired.cli.verbosity import VerbosityManager
from hired.config import load_config
from hired.models import Config
from hired.scene import SceneRunner
from hired.terminal import Terminal, probe_terminal, terminal_session
from hired.tools import probe_capabilities
from hired.utils.exceptions import ConfigurationError, TerminalError
from hired.utils.logging_config import setup_logging
from hired.utils.time import Clock

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def run_announcement(
    config: Config,
    stream: IO[str] | None = None,
    clock: Clock | None = None,
) -> None:
    """Play the announcement scene once.

    Args:
        config: Loaded configuration
        stream: Output stream (stdout by default)
        clock: Clock for every delay in the scene

    """
    stream = stream if stream is not None else sys.stdout
    profile = probe_terminal(stream)
    capabilities = probe_capabilities(config.display.external_tools)
    logger.info("Using %s", capabilities.describe())

    terminal = Terminal(stream, profile)
    runner = SceneRunner(terminal, config.display, capabilities, clock=clock or Clock())
    with terminal_session(terminal):
        runner.run()


def _configure_logging(verbosity: VerbosityManager, config: Config | None = None) -> None:
    """Set up logging; ``-v`` flags win over the configured level."""
    level: int | str = verbosity.logging_level
    log_file = None
    if config is not None:
        log_file = config.logging.file
        if verbosity.verbosity_count == 0:
            level = config.logging.level.value
    setup_logging(
        level=level,
        log_file=log_file,
        rich_tracebacks=verbosity.should_show_stack_trace(),
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--name", help="Your name")
@click.option("--company", help="Company you are joining")
@click.option("--role", help="Your new position")
@click.option("--start", help="Start date")
@click.option("--message", help="Message typed at the end ({name} {company} {role} {start})")
@click.option("--logo", help="Logo file (.ans/.ansi/.txt art, or an image)")
@click.option("--speed", help="Typing speed in characters per second")
@click.option("--pause", type=float, help="Pause between beats in seconds")
@click.option("--type-results", metavar="yes|no", help="Type command results as well")
@click.option("--quiet-border", metavar="yes|no", help="Hide the horizontal rules")
@click.option("--bar-steps", type=click.IntRange(min=1), help="Main progress bar resolution")
@click.option("--cursor", "use_cursor", metavar="yes|no", help="Draw a faux typing cursor")
@click.option("--cursor-sym", "cursor_glyph", help="Glyph used as the faux cursor")
@click.option("--thanks", multiple=True, help="Name to thank (repeatable)")
@click.option(
    "--external-tools/--no-external-tools",
    default=None,
    help="Use figlet, lolcat, pv, chafa and jp2a when installed",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: verbose, -vv: debug, -vvv: trace)",
)
@click.version_option(__version__, prog_name="hired")
@click.pass_context
def cli(ctx: click.Context, config_file: str | None, verbose: int, **options: Any) -> None:
    """Announce your new job with an animated terminal scene."""
    verbosity = VerbosityManager.from_count(verbose)
    _configure_logging(verbosity)

    try:
        config = load_config(config_file, options)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from None
    _configure_logging(verbosity, config)
    logger.debug("Display configuration: %s", config.display.model_dump())

    try:
        run_announcement(config)
    except KeyboardInterrupt:
        logger.debug("Interrupted")
        ctx.exit(EXIT_INTERRUPTED)
    except TerminalError as e:
        raise click.ClickException(str(e)) from None


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
