"""
sqlpretty/__main__.py

Package entry point for running sqlpretty as a module:

    python -m sqlpretty [FILE] [--minify] [--indent N] [--case CASE] [--dialect NAME]

This also serves as the target for the console script entry point defined in
pyproject.toml:

    sqlpretty [FILE] ...

Behaviour:
- FILE (or '-' for stdin) is transformed once and the result printed or written to -o.
- With no FILE and an interactive terminal, the REPL starts.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .driver import Mode, analyze, run
from .errors import SqlPrettyError
from .keywords import keywords_for
from .options import DEFAULT_INDENT_SIZE, FormatOptions, KeywordCase
from .repl import Session, format_stats, repl

# Upper bound applied by the command line before calling the engine.
MAX_INDENT = 8


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sqlpretty", description="Format or minify SQL.")
    ap.add_argument("file", nargs="?", help="SQL file to read ('-' for stdin); omit for the REPL")
    ap.add_argument("-m", "--minify", action="store_true", help="minify instead of formatting")
    ap.add_argument("-i", "--indent", type=int, default=DEFAULT_INDENT_SIZE,
                    help=f"spaces per indentation level (max {MAX_INDENT})")
    ap.add_argument("-c", "--case", default="upper", choices=[c.value for c in KeywordCase],
                    help="keyword casing")
    ap.add_argument("-d", "--dialect", default="ansi", help="keyword set: ansi, mysql, postgresql, sqlite")
    ap.add_argument("-s", "--stats", action="store_true", help="print statistics to stderr")
    ap.add_argument("-o", "--output", help="write the result to this .sql file")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for `python -m sqlpretty` and the installed `sqlpretty` command.

    Args:
        argv: Arguments without the program name; sys.argv[1:] when None.

    Returns:
        Exit code: 0 on success, 1 on a formatting error.
    """
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = FormatOptions(
            indent_size=min(args.indent, MAX_INDENT),
            keyword_case=KeywordCase.parse(args.case),
            dialect_keywords=keywords_for(args.dialect),
        )
    except SqlPrettyError as e:
        print(e, file=sys.stderr)
        return 1
    mode = Mode.MINIFY if args.minify else Mode.FORMAT

    if args.file is None and sys.stdin.isatty():
        return repl(Session(options=options, mode=mode, show_stats=args.stats, dialect=args.dialect.lower()))

    if args.file is None or args.file == "-":
        source = sys.stdin.read()
    else:
        try:
            source = Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            print(f"Cannot read {args.file}: {e.strerror}", file=sys.stderr)
            return 1

    result = run(source, mode, options)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(result.output + "\n", encoding="utf-8")
    else:
        print(result.output)

    if args.stats:
        print(format_stats(analyze(source, options)), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
