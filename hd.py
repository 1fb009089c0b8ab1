#!/usr/bin/env python3
"""
hd - hex display CLI
Entry point for the hex_display package.
"""

import argparse
import io
import os
import sys
from typing import List, Optional

import argcomplete

from hex_display import HexDumper, ReverseParser
from hex_display.config import DumpConfig, create_default_config
from hex_display.exceptions import ConfigError, HexDisplayError, InputReadError, OutputWriteError
from hex_display.logging_config import get_logger, setup_logging
from hex_display.styles import AnsiStyler

logger = get_logger('cli')

FORCE_COLOR_VARIABLES = ('ALWAYS_COLOR', 'CLICOLOR_FORCE', 'FORCE_COLOR')

EPILOG = """Environment variables:
  - NO_COLOR: Disable colors entirely
  - ALWAYS_COLOR: Always enable colors

  - CLICOLOR_FORCE: Same as ALWAYS_COLOR
  - FORCE_COLOR: Same as ALWAYS_COLOR
"""


def parse_count(value: str) -> int:
    """Parse a byte count given in decimal, hex (0x..) or octal (0o..)."""
    try:
        return int(value, 0)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid byte count: '{value}'") from e


def width_completer(prefix, parsed_args, **kwargs):
    """Custom completer for --width with common row widths."""
    widths = ['8', '16', '24', '32', '48', '64']
    return [w for w in widths if w.startswith(prefix)]


def group_completer(prefix, parsed_args, **kwargs):
    """Custom completer for --group suggesting divisors of the chosen width."""
    width = getattr(parsed_args, 'width', None) or 16
    groups = [str(g) for g in range(1, width + 1) if width % g == 0]
    return [g for g in groups if g.startswith(prefix)]


def numeric_completer(prefix, parsed_args, **kwargs):
    """Custom completer for --numeric with the known digit classes."""
    classes = ['octal', 'decimal', 'hexadecimal', 'none']
    return [c for c in classes if c.startswith(prefix)]


def color_enabled(mode: Optional[str], stream) -> bool:
    """
    Decide whether to colorize output.

    Args:
        mode: 'always', 'never', or 'auto'/None for detection
        stream: Stream whose TTY status is used for detection

    Returns:
        True if colors should be used
    """
    if mode == 'always':
        return True
    if mode == 'never':
        return False
    if os.environ.get('NO_COLOR'):
        return False
    if any(os.environ.get(name) for name in FORCE_COLOR_VARIABLES):
        return True
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Hex Display: hex dump with width-aware Unicode text',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('input', nargs='*',
                        help='Files to read (default: standard input)')
    width_arg = parser.add_argument('-w', '--width', type=int,
                                    help='Number of bytes to print per row (default 16)')
    width_arg.completer = width_completer
    group_arg = parser.add_argument('-g', '--group', type=int,
                                    help='Number of bytes to group within a row (default 2)')
    group_arg.completer = group_completer
    parser.add_argument('-s', '--skip', type=parse_count,
                        help='Skip this many bytes from the start of the input')
    parser.add_argument('-n', '--length', type=parse_count,
                        help='Stop after dumping this many bytes')
    parser.add_argument('-r', '--reverse', action='store_true',
                        help='Convert a dump back into binary')
    numeric_arg = parser.add_argument('-N', '--numeric', metavar='CLASS',
                                      help='Highlight digits of this class: o/octal, d/decimal, '
                                           'h/x/hexadecimal, or none (default decimal)')
    numeric_arg.completer = numeric_completer
    parser.add_argument('-u', '--uppercase', action='store_true',
                        help='Use uppercase hex digits')
    parser.add_argument('--color', choices=['auto', 'always', 'never'],
                        help='Colorize output (default auto)')
    parser.add_argument('--config', type=str,
                        help='Path to a JSON configuration file')
    parser.add_argument('--create-config', type=str, metavar='PATH',
                        help='Create a default configuration file and exit')
    parser.add_argument('--log-level', default='NONE',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'NONE'],
                        help='Set logging level (NONE = disable logging)')
    parser.add_argument('--debug-modules', type=str,
                        help='Comma-separated list of modules to debug (e.g., chunker,reverse)')
    return parser


def load_config(args: argparse.Namespace) -> DumpConfig:
    """Merge the optional config file with command line overrides."""
    config = DumpConfig.from_json(args.config) if args.config else DumpConfig()

    color = None
    if args.color is not None or not args.config:
        color = color_enabled(args.color, sys.stdout)

    config = config.replace(
        width=args.width,
        group=args.group,
        skip=args.skip,
        length=args.length,
        color=color,
        reverse=True if args.reverse else None,
        uppercase=True if args.uppercase else None,
        numeric=args.numeric,
    )
    logger.debug(f"Using {config}")
    return config


def write_stdout(text: str):
    """Write text to stdout, raising OutputWriteError on failure."""
    try:
        sys.stdout.write(text)
    except OSError as e:
        raise OutputWriteError("Unable to write to standard output") from e


def run_forward(config: DumpConfig, inputs: List[str]):
    """Dump stdin or every input file to stdout."""
    dumper = HexDumper(config)

    if not inputs:
        dumper.run(sys.stdin.buffer, sys.stdout)
        return

    show_header = len(inputs) > 1
    for index, path in enumerate(inputs):
        if show_header:
            header = f"[{path}]"
            if config.color:
                header = f"{AnsiStyler.BRIGHT_YELLOW}{header}{AnsiStyler.RESET}"
            prefix = '\n' if index else ''
            write_stdout(f"{prefix}{header}\n")

        try:
            f = open(path, 'rb')
        except OSError as e:
            raise InputReadError(f"Unable to read file: {path}") from e
        with f:
            dumper.run(f, sys.stdout)


def run_reverse(config: DumpConfig, inputs: List[str]):
    """Rebuild binary data from a dump on stdin or in a file."""
    if len(inputs) > 1:
        raise ConfigError("Reverse mode takes at most one input")

    parser = ReverseParser(config)
    if not inputs:
        source = io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8', errors='replace')
        parser.restore(source, sys.stdout.buffer)
        return

    try:
        f = open(inputs[0], 'r', encoding='utf-8', errors='replace')
    except OSError as e:
        raise InputReadError(f"Unable to read file: {inputs[0]}") from e
    with f:
        parser.restore(f, sys.stdout.buffer)


def report_error(error: BaseException):
    """Print an error and its chain of causes to stderr."""
    use_color = color_enabled(None, sys.stderr)
    label, caused = 'Error', 'Caused by'
    if use_color:
        label = f"{AnsiStyler.BRIGHT_RED}{label}{AnsiStyler.RESET}"
        caused = f"{AnsiStyler.BRIGHT_YELLOW}{caused}{AnsiStyler.RESET}"

    print(f"{label}: {error}", file=sys.stderr)
    cause = error.__cause__
    while cause is not None:
        print(f"  {caused}: {cause}", file=sys.stderr)
        cause = cause.__cause__


def silence_stdout():
    """Point stdout at devnull so the interpreter's final flush cannot fail again."""
    try:
        fileno = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fileno)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    if args.create_config:
        created = create_default_config(args.create_config)
        if created:
            print(f"Created default config: {created}")
        else:
            print(f"Config file already exists: {args.create_config}")
        return 0

    # Setup logging
    module_levels = {}
    if args.debug_modules:
        for module in args.debug_modules.split(','):
            module_levels[module.strip()] = 'DEBUG'
    log_level = args.log_level
    if module_levels and log_level == 'NONE':
        log_level = 'WARNING'
    setup_logging(log_level, module_levels, color_enabled(None, sys.stderr))

    try:
        config = load_config(args)
    except ConfigError as e:
        parser.print_usage(sys.stderr)
        report_error(e)
        return 1

    try:
        if config.reverse:
            run_reverse(config, args.input)
        else:
            run_forward(config, args.input)
    except OutputWriteError as e:
        # Exit quietly if the stdout pipe was closed
        if isinstance(e.__cause__, BrokenPipeError):
            silence_stdout()
            return 1
        report_error(e)
        return 1
    except HexDisplayError as e:
        report_error(e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
