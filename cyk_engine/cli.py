"""Command-line interface for cyk_engine."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from cyk_engine import __version__
from cyk_engine.core.config import Config
from cyk_engine.core.diagnostic import DiagnosticSink
from cyk_engine.core.report import Reporter
from cyk_engine.loader import load
from cyk_engine.recognizer import Recognizer
from cyk_engine.splitters import get_splitter, list_splitters

EXIT_USAGE = 2


@click.command()
@click.version_option(version=__version__)
@click.argument("file", type=click.Path(exists=True, dir_okay=False), required=False)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to config file (.cyk_engine.toml)",
)
@click.option("--start", help="Start symbol (overrides the grammar file and config)")
@click.option("--splitter", help="Splitter used for rule targets and input")
@click.option("--input", "input_text", help="Input string to recognize instead of the one in FILE")
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Output format",
)
@click.option("--show-table", is_flag=True, help="Print the non-empty cells of the recognition table")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--list-splitters",
    "list_splitters_flag",
    is_flag=True,
    help="List all available splitters and exit",
)
def main(
    file: Optional[str],
    config: Optional[str],
    start: Optional[str],
    splitter: Optional[str],
    input_text: Optional[str],
    format: Optional[str],
    show_table: bool,
    verbose: bool,
    list_splitters_flag: bool,
):
    """
    cyk-engine - check whether an input is derivable from a grammar.

    FILE is either a text file of "A => B C" rules plus one input line, or a
    YAML grammar file (.yaml/.yml).

    Examples:

        # Recognize the input line of a rules file
        cyk-engine --start e --splitter element molecule.txt

        # Check another string against the same grammar
        cyk-engine --input "a b" grammar.yaml

        # Output as JSON, including the table
        cyk-engine --format=json --show-table grammar.yaml
    """
    if list_splitters_flag:
        _print_splitters()
        sys.exit(0)

    if file is None:
        raise click.UsageError("Missing argument 'FILE'.")

    # Load configuration
    try:
        cfg = Config.from_file(Path(config)) if config else Config.from_file()
    except ValueError as e:
        click.echo(f"Error reading config: {e}", err=True)
        sys.exit(EXIT_USAGE)

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, cfg.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        problem = load(file)
    except (ValueError, yaml.YAMLError, OSError) as e:
        click.echo(f"Error reading {file}: {e}", err=True)
        sys.exit(EXIT_USAGE)

    # Command line beats the grammar file, which beats the config file
    if problem.start_symbol:
        cfg.start_symbol = problem.start_symbol
    if problem.splitter:
        cfg.splitter = problem.splitter
    if start:
        cfg.start_symbol = start
    if splitter:
        cfg.splitter = splitter
    if format:
        cfg.output_format = format
    if show_table:
        cfg.show_table = True

    try:
        split = get_splitter(cfg.splitter)
    except KeyError as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        sys.exit(EXIT_USAGE)

    text = input_text if input_text is not None else problem.input_text
    if not text:
        logger.warning("no input to recognize in %s", file)

    diagnostics = DiagnosticSink()
    normalized = problem.grammar.convert_to_normal_form(cfg.start_symbol, split, diagnostics)
    result = Recognizer(normalized, cfg.start_symbol).recognize_text(text, split)

    reporter = Reporter(output_format=cfg.output_format, show_table=cfg.show_table)
    exit_code = reporter.report(result, diagnostics.diagnostics)
    sys.exit(exit_code)


def _print_splitters():
    """Print all available splitters."""
    click.echo("Available Splitters:\n")
    for name, info in sorted(list_splitters().items()):
        click.echo(f"  {name:<12} {info['description']}")


if __name__ == "__main__":
    main()
