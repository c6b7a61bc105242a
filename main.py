"""
Main entry point for the TextDiff command line tool.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading and per-run overrides
- Reading both inputs (files or standard input)
- Running the diff and writing the export
- Exit codes (0 identical, 1 different, 2 trouble)
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List

from textdiff import __version__
from textdiff.core.diff.text_diff import TextDiffEngine
from textdiff.core.models import DiffMode, DiffTooLargeError
from textdiff.services.export import export
from textdiff.services.file_io import FileIOService
from textdiff.services.settings import ApplicationSettings, OutputFormat, SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "textdiff"

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_TROUBLE = 2

STDIN_MARKER = "-"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments.

    Option fields left as None fall back to the loaded settings.
    """
    left_path: str = ""
    right_path: str = ""
    ignore_case: Optional[bool] = None
    ignore_whitespace: Optional[bool] = None
    mode: Optional[DiffMode] = None
    output_format: Optional[OutputFormat] = None
    line_numbers: Optional[bool] = None
    show_stats: Optional[bool] = None
    max_cells: Optional[int] = None
    swap: bool = False
    output_path: Optional[str] = None
    encoding: Optional[str] = None
    config_file: Optional[str] = None
    reset_settings: bool = False
    log_level: str = "WARNING"


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure logging. Console output goes to stderr so that stdout only
    carries the diff.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    logging.getLogger('chardet').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Argument Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Compare two texts line by line or word by word",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt              Line diff of two files
  %(prog)s -iw old.txt new.txt          Ignore case and surrounding whitespace
  %(prog)s --words draft.md final.md    Word diff
  cat new.txt | %(prog)s old.txt -      Read the right side from stdin
  %(prog)s -f json -o diff.json a b     Export as JSON
        """
    )

    parser.add_argument('left', help='Left/original file ("-" for stdin)')
    parser.add_argument('right', help='Right/modified file ("-" for stdin)')

    # Comparison options
    parser.add_argument(
        '-i', '--ignore-case',
        action='store_true',
        default=None,
        help='Compare case-insensitively'
    )
    parser.add_argument(
        '-w', '--ignore-whitespace',
        action='store_true',
        default=None,
        help='Ignore leading/trailing whitespace of each line (line mode)'
    )
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        '--lines',
        dest='mode',
        action='store_const',
        const=DiffMode.LINES,
        help='Compare line by line (default)'
    )
    mode_group.add_argument(
        '--words',
        dest='mode',
        action='store_const',
        const=DiffMode.WORDS,
        help='Compare word by word'
    )
    parser.add_argument(
        '-s', '--swap',
        action='store_true',
        help='Swap the left and right inputs'
    )
    parser.add_argument(
        '--max-cells',
        type=int,
        default=None,
        help='Refuse comparisons needing more LCS table cells (0 = unlimited)'
    )

    # Output options
    parser.add_argument(
        '-f', '--format',
        choices=['plain', 'json'],
        default=None,
        help='Output format'
    )
    parser.add_argument(
        '-n', '--line-numbers',
        action='store_true',
        default=None,
        help='Show line numbers in plain output'
    )
    parser.add_argument(
        '--no-stats',
        dest='show_stats',
        action='store_false',
        default=None,
        help='Omit the summary in plain output'
    )
    parser.add_argument(
        '-o', '--output',
        help='Write the diff to a file instead of stdout'
    )
    parser.add_argument(
        '--encoding',
        help='Force input encoding (auto-detect if omitted)'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Configuration file path'
    )
    parser.add_argument(
        '--reset-settings',
        action='store_true',
        help='Reset all settings to defaults'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {__version__}'
    )

    parsed = parser.parse_args(args)

    if parsed.left == STDIN_MARKER and parsed.right == STDIN_MARKER:
        parser.error("only one side can be read from stdin")

    if parsed.max_cells is not None and parsed.max_cells < 0:
        parser.error("--max-cells must be 0 (unlimited) or a positive number")

    result = CommandLineArgs(left_path=parsed.left, right_path=parsed.right)
    result.ignore_case = parsed.ignore_case
    result.ignore_whitespace = parsed.ignore_whitespace
    result.mode = parsed.mode
    result.line_numbers = parsed.line_numbers
    result.show_stats = parsed.show_stats
    result.max_cells = parsed.max_cells
    result.swap = parsed.swap
    result.output_path = parsed.output
    result.encoding = parsed.encoding
    result.config_file = parsed.config
    result.reset_settings = parsed.reset_settings

    if parsed.format:
        result.output_format = OutputFormat.from_string(parsed.format)

    result.log_level = 'DEBUG' if parsed.verbose else parsed.log_level

    return result


# =============================================================================
# Settings
# =============================================================================

def setup_settings(args: CommandLineArgs) -> ApplicationSettings:
    """Load settings and apply this run's command line overrides."""
    manager = SettingsManager(Path(args.config_file) if args.config_file else None)

    if args.reset_settings:
        logging.info(f"Resetting settings at {manager.settings_path}")
        settings = manager.reset()
    else:
        settings = manager.settings

    comparison = settings.comparison
    if args.ignore_case is not None:
        comparison.ignore_case = args.ignore_case
    if args.ignore_whitespace is not None:
        comparison.ignore_whitespace = args.ignore_whitespace
    if args.mode is not None:
        comparison.mode = args.mode
    if args.max_cells is not None:
        comparison.max_cells = args.max_cells or None

    output = settings.output
    if args.output_format is not None:
        output.format = args.output_format
    if args.line_numbers is not None:
        output.show_line_numbers = args.line_numbers
    if args.show_stats is not None:
        output.show_stats = args.show_stats

    return settings


# =============================================================================
# Input
# =============================================================================

def read_input(
    source: str,
    file_io_service: FileIOService,
    encoding: Optional[str] = None
) -> str:
    """
    Read one side of the comparison.

    Raises:
        IOError: If the source cannot be read as text
    """
    if source == STDIN_MARKER:
        result = file_io_service.decode(sys.stdin.buffer.read(), encoding, source="<stdin>")
    else:
        result = file_io_service.read_file(source, encoding=encoding)

    if not result.success:
        raise IOError(result.error)

    logging.debug(f"Read {source} ({result.content.size} bytes, {result.content.encoding})")
    return result.content.content


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Command line entry point.

    Returns:
        Exit code (0 identical, 1 different, 2 trouble)
    """
    args = parse_arguments(argv)
    setup_logging(args.log_level)

    settings = setup_settings(args)
    comparison = settings.comparison
    output = settings.output

    file_io_service = FileIOService()
    try:
        left_text = read_input(args.left_path, file_io_service, args.encoding)
        right_text = read_input(args.right_path, file_io_service, args.encoding)
    except IOError as e:
        logging.error(f"{e}")
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return EXIT_TROUBLE

    engine = TextDiffEngine(comparison.to_options(), comparison.max_cells)
    try:
        if args.swap:
            outcome = engine.swap(left_text, right_text)
        else:
            outcome = engine.compare(left_text, right_text)
    except DiffTooLargeError as e:
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return EXIT_TROUBLE

    rendered = export(
        outcome,
        output.format,
        comparison.mode,
        show_line_numbers=output.show_line_numbers,
        show_stats=output.show_stats
    )

    if args.output_path:
        write_result = file_io_service.write_file(args.output_path, rendered + "\n")
        if not write_result.success:
            print(f"{APP_NAME}: {write_result.error}", file=sys.stderr)
            return EXIT_TROUBLE
        logging.info(f"Wrote {write_result.bytes_written} bytes to {args.output_path}")
    else:
        print(rendered)

    return EXIT_IDENTICAL if outcome.is_identical else EXIT_DIFFERENT


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
