"""Command line interface for hash-it.

Usage:
    hash-it "some text"                 # every algorithm, table output
    hash-it -a sha256 -f plain "text"   # one algorithm
    echo -n secret | hash-it -a ntlm -u # read the text from stdin
    hash-it --list
    hash-it --set format=json --set uppercase=true
    hash-it --show-settings

Logging is off unless -v is given; repeat it for more detail
(error, warn, info, debug). Use --logfile to send log records to a file
instead of stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from typing import Optional

import colorama
from colorama import Fore, Style

from . import __version__
from .engine import HashEngine
from .errors import HashItError
from .formatters import format_bytes, format_output, write_output
from .settings import (
    effective_settings,
    parse_assignment,
    reset_settings,
    set_setting,
    settings_path,
)
from .validation import OUTPUT_FORMATS, validate_input

logger = logging.getLogger(__name__)

DESCRIPTION = "Generate multiple hash types from text input"

_LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname).3s %(name)s %(message)s"
_LOG_DATEFMT = "%y-%m-%d %H:%M:%S"


def create_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hash-it", description=DESCRIPTION)
    p.add_argument(
        "text", nargs="?", help="Text to hash (if not provided, will read from stdin)"
    )
    p.add_argument(
        "-a", "--algorithm", help="Specific algorithm to use (default: all)"
    )
    p.add_argument(
        "-f",
        "--format",
        dest="format",
        default=None,
        help=f"Output format: {', '.join(OUTPUT_FORMATS)} (default: table)",
    )
    p.add_argument("-o", "--output", help="Output to file instead of console")
    p.add_argument(
        "-l", "--list", action="store_true", help="List all supported algorithms"
    )
    # store_const with a None default so unset flags fall back to settings
    p.add_argument(
        "-u",
        "--uppercase",
        action="store_const",
        const=True,
        default=None,
        help="Output hash in uppercase",
    )
    p.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const=True,
        default=None,
        help="Suppress headers and formatting",
    )
    p.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const=False,
        default=None,
        help="Disable colored output",
    )
    p.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Compute algorithms on this many threads (default: 1)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging level (goes error, warn, info, debug)",
    )
    p.add_argument("--logfile", help="The file where we should log all logging messages")
    p.add_argument(
        "--set",
        dest="set_values",
        action="append",
        metavar="KEY=VALUE",
        help="Store a default setting (format, uppercase, color, quiet, workers)",
    )
    p.add_argument(
        "--reset-settings",
        action="store_true",
        help="Remove stored settings and go back to the built-in defaults",
    )
    p.add_argument(
        "--show-settings",
        action="store_true",
        help="Print the settings in effect and where they are stored",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def configure_logging(verbosity: int, logfile: Optional[str] = None) -> None:
    root = logging.getLogger()
    if not verbosity:
        root.addHandler(logging.NullHandler())
        return

    loglevels = [logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]
    level = loglevels[min(verbosity, len(loglevels)) - 1]

    if logfile:
        handler = logging.FileHandler(logfile)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATEFMT))

    root.setLevel(level)
    root.addHandler(handler)


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if enabled else text


def read_stdin(color: bool) -> str:
    if sys.stdin.isatty():
        print(
            _paint(
                "Enter text to hash (press Ctrl+D when finished):", Fore.YELLOW, color
            ),
            file=sys.stderr,
        )
    return sys.stdin.read().strip()


def _list_algorithms(engine: HashEngine, color: bool) -> None:
    print(_paint("Supported Hash Algorithms:", Fore.CYAN, color))
    for algo in engine.list_supported_algorithms():
        print(_paint(f"  - {algo}", Fore.WHITE, color))


def _update_settings(args: argparse.Namespace, color: bool) -> None:
    # runs before stored settings are loaded so a broken file can be reset
    if args.reset_settings:
        removed = reset_settings()
        msg = "Stored settings removed" if removed else "No stored settings to remove"
        print(_paint(msg, Fore.GREEN, color))
    for assignment in args.set_values or []:
        key, value = parse_assignment(assignment)
        path = set_setting(key, value)
        print(_paint(f"Saved {key} = {json.dumps(value)} to {path}", Fore.GREEN, color))


def _show_settings(opts: dict, color: bool) -> None:
    print(_paint(f"Settings file: {settings_path()}", Fore.CYAN, color))
    print(json.dumps(opts, indent=2, sort_keys=True))


def run(args: argparse.Namespace) -> int:
    if args.reset_settings or args.set_values:
        _update_settings(args, args.color is not False and sys.stdout.isatty())
        return 0

    opts = effective_settings(
        {
            "format": args.format,
            "uppercase": args.uppercase,
            "color": args.color,
            "quiet": args.quiet,
            "workers": args.workers,
        }
    )
    # main reports errors with the same color choice
    args.color = bool(opts["color"])
    color = args.color and sys.stdout.isatty()
    err_color = args.color and sys.stderr.isatty()
    engine = HashEngine(workers=opts["workers"])

    if args.show_settings:
        _show_settings(opts, color)
        return 0

    if args.list:
        _list_algorithms(engine, color)
        return 0

    text = args.text
    if not text:
        text = read_stdin(color)

    validation = validate_input(
        text, algorithm=args.algorithm, output_format=opts["format"], registry=engine.registry
    )
    if not validation.valid:
        print(_paint(f"Error: {validation.error}", Fore.RED, err_color), file=sys.stderr)
        return 1

    logger.info("hashing %s of input", format_bytes(len(text.encode("utf-8", "surrogatepass"))))
    results = engine.compute_digests(
        text, selector=args.algorithm, uppercase=bool(opts["uppercase"])
    )
    for algorithm, failure in results.failures().items():
        logger.error("%s: %s", algorithm, failure.reason)

    if args.output:
        # files never get ANSI escapes
        output = format_output(results, opts["format"], color=False, quiet=bool(opts["quiet"]))
        write_output(output, args.output)
        if not opts["quiet"]:
            print(_paint(f"Results written to: {args.output}", Fore.GREEN, color))
    else:
        print(format_output(results, opts["format"], color=color, quiet=bool(opts["quiet"])))
    return 0


def main(argv=None) -> int:
    """Run the hash-it command line tool and return its exit status."""
    if argv is None:
        argv = sys.argv[1:]

    args = create_parser().parse_args(argv)
    configure_logging(args.verbose, args.logfile)
    colorama.just_fix_windows_console()

    try:
        return run(args)
    except HashItError as exc:
        color = args.color is not False and sys.stderr.isatty()
        print(_paint(f"Error: {exc}", Fore.RED, color), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("", file=sys.stderr)
        return 1
    except Exception:  # the tool reports every failure and exits 1
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
