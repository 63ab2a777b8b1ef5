"""
PyOLS command-line tools.

Usage:
    pyols-learn [FILE] [--summary] [-v]
    pyols-learngen OUTPUT INPUT_COUNT MIN MAX STEP FUNCTION [FUNCTION ...] [-v]

pyols-learn reads a learning file (default: learn.dat), fits the training
rows by OLS and prints one line of predicted outputs per prediction row.

pyols-learngen writes one line per grid point: the inputs followed by the
value of each requested function. Function indices:
    0 identity      x0
    1 increment     x0 + 1
    2 double        2 x0
    3 square        x0²
    4 sum           x0 + x1
    5 product       x0 x1
    6 3-way sum     x0 + x1 + x2
    7 weighted sum  x0 + 2x1 + 3x2 + 4x3 + 5x4

Exit status:
    0  success
    1  malformed input, dimension mismatch, singular matrix, I/O failure
    2  usage error
"""

import argparse
import logging
import sys
from pathlib import Path

from pyols.core.datasource import DEFAULT_DATA_FILE, LearningTable, write_matrix
from pyols.core.exceptions import PyOLSError, UsageError, ValidationError
from pyols.generator import TargetFunction, iter_rows, write_rows
from pyols.regression import fit_table

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(f"{self.prog}: {message}", prog=self.prog)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _function_table() -> str:
    lines = ["function indices:"]
    for function in TargetFunction:
        lines.append(f"  {int(function)}  {function.name.lower():<14} reads {function.arity} input(s)")
    return "\n".join(lines)


def _add_verbose(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress to stderr'
    )


# ============================================================
# pyols-learn
# ============================================================

def build_learn_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='pyols-learn',
        description='Fit a learning file by OLS and print predictions.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'file',
        nargs='?',
        default=DEFAULT_DATA_FILE,
        metavar='FILE',
        help=f'Learning file (default: {DEFAULT_DATA_FILE})'
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Print the fit summary to stderr'
    )
    _add_verbose(parser)
    return parser


def _run_learn(argv: list[str] | None) -> int:
    args = build_learn_parser().parse_args(argv)
    _configure_logging(args.verbose)

    table = LearningTable.from_file(args.file)
    solution, predictions = fit_table(table)

    write_matrix(predictions, sys.stdout)
    if args.summary:
        print(solution.summary(), file=sys.stderr)
    return EXIT_OK


def learn_main(argv: list[str] | None = None) -> int:
    """Entry point for pyols-learn."""
    return _guarded(_run_learn, argv)


# ============================================================
# pyols-learngen
# ============================================================

def build_learngen_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='pyols-learngen',
        description='Generate training rows on a uniform input grid.',
        epilog=_function_table(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('output', metavar='OUTPUT', help='File to write')
    parser.add_argument('input_count', metavar='INPUT_COUNT', type=int, help='Inputs per row')
    parser.add_argument('minimum', metavar='MIN', type=float, help='Range minimum')
    parser.add_argument('maximum', metavar='MAX', type=float, help='Range maximum (inclusive)')
    parser.add_argument('step', metavar='STEP', type=float, help='Range step')
    parser.add_argument(
        'functions',
        metavar='FUNCTION',
        type=int,
        nargs='+',
        help='Function index (0-7), one or more'
    )
    _add_verbose(parser)
    return parser


def _run_learngen(argv: list[str] | None) -> int:
    parser = build_learngen_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    # iter_rows checks every argument up front, before the output file is created
    try:
        rows = iter_rows(
            args.input_count, args.minimum, args.maximum, args.step, args.functions
        )
    except ValidationError as e:
        raise UsageError(f"{parser.prog}: {e}", prog=parser.prog) from e

    output = Path(args.output)
    with output.open('w', encoding='utf-8') as stream:
        written = write_rows(rows, stream)
    logger.info("Wrote %d rows to %s", written, output)
    return EXIT_OK


def learngen_main(argv: list[str] | None = None) -> int:
    """Entry point for pyols-learngen."""
    return _guarded(_run_learngen, argv)


# ============================================================
# Error reporting
# ============================================================

def _guarded(run, argv: list[str] | None) -> int:
    """Run a tool, turning library errors into a message and exit status."""
    try:
        return run(argv)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except (PyOLSError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

