"""
sqlpretty/repl.py

Interactive REPL (Read-Eval-Print Loop) for the sqlpretty formatter.

Responsibilities:
- Read SQL over several lines until a ';' appears outside literals and comments
- Print the formatted (or minified) result, or the error message
- Provide small meta-commands to change options during a session:
    - .help
    - .exit / .quit
    - .mode format|minify
    - .indent <n>
    - .case upper|lower|preserve
    - .dialect <name>
    - .options
    - .samples / .sample <n>
    - .stats
"""

from __future__ import annotations

from dataclasses import dataclass

try:
    import readline  # noqa: F401
except ImportError:
    # readline is optional; if missing, REPL still works.
    readline = None  # type: ignore[assignment]

from .driver import Mode, analyze, run
from .errors import FormatError, SqlPrettyError
from .keywords import ANSI_KEYWORDS, DIALECTS, keywords_for
from .lexer import tokenize
from .options import FormatOptions, KeywordCase
from .results import SqlStats
from .samples import SAMPLES, get_sample


PROMPT = "sqlpretty> "
PROMPT_CONT = "....> "


@dataclass
class Session:
    """
    Mutable REPL settings; each SQL buffer is formatted with a snapshot of them.

    Attributes:
        options: Current FormatOptions.
        mode: Mode.FORMAT or Mode.MINIFY.
        show_stats: Print SqlStats after each result.
        dialect: Name of the active dialect (for .options).
    """
    options: FormatOptions
    mode: Mode = Mode.FORMAT
    show_stats: bool = False
    dialect: str = "ansi"


def is_complete_statement(buf: str, keywords: frozenset[str] = ANSI_KEYWORDS) -> bool:
    """
    Decide whether the current buffer contains at least one complete statement.

    A statement is complete when a ';' punctuation token exists. Text still inside
    an unterminated literal or block comment is never complete.

    Args:
        buf: Current accumulated input buffer.
        keywords: Keyword set for the lexer.

    Returns:
        True if complete, else False.
    """
    try:
        tokens = tokenize(buf, keywords)
    except FormatError:
        return False
    return any(t.is_punct(";") for t in tokens)


def format_stats(stats: SqlStats) -> str:
    """Render SqlStats as a single comment line."""
    return (
        f"-- {stats.characters} chars, {stats.words} words, "
        f"{stats.statements} statement(s), {len(stats.keywords)} keyword(s)"
    )


def print_help() -> None:
    print("Meta commands:")
    print("  .help                        show this help")
    print("  .mode format|minify          choose the transformation")
    print("  .indent <n>                  spaces per indentation level")
    print("  .case upper|lower|preserve   keyword casing")
    print(f"  .dialect <name>              keyword set ({', '.join(sorted(DIALECTS))})")
    print("  .options                     show current settings")
    print("  .samples                     list sample queries")
    print("  .sample <n>                  format sample query n")
    print("  .stats                       toggle statistics output")
    print("  .exit / .quit                exit")
    print()
    print("SQL ends with ';'. Example:")
    print("  select id,name from users where active=1;")


def print_options(session: Session) -> None:
    opts = session.options
    print(f"mode={session.mode.value} indent={opts.indent_size} "
          f"case={opts.keyword_case.value} dialect={session.dialect} "
          f"stats={'on' if session.show_stats else 'off'}")


def process(session: Session, sql: str) -> None:
    """
    Transform a SQL buffer with the session's settings and print the outcome.

    Args:
        session: Current session.
        sql: SQL text (one or more statements).
    """
    result = run(sql, session.mode, session.options)
    if not result.ok:
        print(f"Error: {result.error}")
        return
    print(result.output)
    if session.show_stats:
        print(format_stats(analyze(sql, session.options)))


def run_meta(session: Session, line: str) -> bool:
    """
    Execute one meta command.

    Args:
        session: Session to update in place.
        line: The stripped input line, starting with '.'.

    Returns:
        False when the REPL should exit, True otherwise.
    """
    parts = line.split()
    cmd = parts[0].lower()
    args = parts[1:]

    if cmd in (".exit", ".quit"):
        return False

    if cmd == ".help":
        print_help()
        return True

    if cmd == ".options":
        print_options(session)
        return True

    if cmd == ".stats":
        session.show_stats = not session.show_stats
        print(f"stats {'on' if session.show_stats else 'off'}")
        return True

    if cmd == ".samples":
        for n, sample in enumerate(SAMPLES, start=1):
            print(f"  {n}. {sample.name}: {sample.sql}")
        return True

    if len(args) != 1:
        print(f"Usage: {cmd} <value>. Type .help")
        return True
    value = args[0]

    try:
        if cmd == ".mode":
            session.mode = Mode(value.lower())
        elif cmd == ".indent":
            if not value.lstrip("-").isdigit():
                print(f"Not a number: {value}")
                return True
            session.options = session.options.with_changes(indent_size=int(value)).validate()
        elif cmd == ".case":
            session.options = session.options.with_changes(keyword_case=KeywordCase.parse(value))
        elif cmd == ".dialect":
            session.options = session.options.with_changes(dialect_keywords=keywords_for(value))
            session.dialect = value.lower()
        elif cmd == ".sample":
            sample = get_sample(value)
            print(f"-- {sample.name}")
            process(session, sample.sql)
            return True
        else:
            print(f"Unknown command: {cmd}. Type .help")
            return True
    except ValueError:
        print(f"Unknown mode: {value}. Use format or minify")
        return True
    except KeyError:
        print(f"No such sample: {value}. Type .samples")
        return True
    except SqlPrettyError as e:
        print(e)
        return True

    print_options(session)
    return True


def repl(session: Session) -> int:
    """
    Run the interactive REPL.

    Args:
        session: Initial settings.

    Returns:
        Process exit code (0 on normal exit).
    """
    print("sqlpretty REPL")
    print("Type .help for commands. End SQL with ';'.")

    buf = ""
    while True:
        try:
            prompt = PROMPT if not buf else PROMPT_CONT
            line = input(prompt)
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            # Clear current buffer on Ctrl+C
            print()
            buf = ""
            continue

        line_stripped = line.strip()

        # Meta commands only apply if we're not in the middle of a multi-line SQL buffer.
        if not buf and line_stripped.startswith("."):
            if not run_meta(session, line_stripped):
                return 0
            continue

        buf += line + "\n"
        if not is_complete_statement(buf, session.options.dialect_keywords):
            continue

        try:
            process(session, buf)
        except Exception as e:
            # Unexpected internal error; keep REPL alive but show message
            print(f"Internal error: {e}")

        buf = ""
