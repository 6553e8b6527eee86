"""
sqlpretty/formatter.py

Pretty-printer over the lexer's token stream.

Responsibilities:
- Regenerate all whitespace: line breaks before major clauses, one list item per
  line, stacked AND/OR conditions, indented parenthesized lists and subqueries
- Re-case keyword tokens per FormatOptions.keyword_case
- Leave the text of every other token untouched (literals, identifiers, comments)

Notes:
- Source whitespace is never copied, which makes formatting idempotent. The only
  facts read from it are whether a comment started its own line, and whether an
  unknown symbol was glued to its neighbour (@param, $1, x::int).
- A paren group "breaks" (one item per line) when it holds a comma at its own
  depth or starts with a subquery; otherwise it stays inline: COUNT(*), NOW().
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .keywords import (
    BOOLEAN_KEYWORDS,
    CLAUSE_STARTERS,
    CLAUSE_SUPPRESSORS,
    LEADING_ONLY_CLAUSES,
    MAJOR_CLAUSES,
    OPEN_CLAUSES,
    SUBQUERY_STARTERS,
    VALUE_KEYWORDS,
)
from .lexer import Token, TokenKind
from .minifier import needs_separator
from .options import FormatOptions


NONE = "none"
SPACE = "space"
NEWLINE = "newline"

# Longest first, so LEFT OUTER JOIN wins over LEFT JOIN.
_CLAUSES_BY_LENGTH = sorted(MAJOR_CLAUSES, key=len, reverse=True)
_MAX_CLAUSE_WORDS = 8


@dataclass(frozen=True)
class Separator:
    """
    Whitespace to emit between two tokens.

    Attributes:
        kind: NONE, SPACE or NEWLINE
        level: Indentation level for NEWLINE
        forced: Set after a line comment; nothing may glue onto that line
    """
    kind: str
    level: int = 0
    forced: bool = False


@dataclass
class Frame:
    """
    Indentation context: the statement itself or one open paren group.

    Attributes:
        base: Level of clause keywords in this frame.
        body: Level of list items and AND/OR lines.
        breaks: Whether commas, AND/OR and clauses start new lines here.
        open_level: Level of the line holding the "(" (closing paren goes there).
        started: Whether any code token was emitted in this frame yet.
        in_between: A BETWEEN is waiting for its AND.
    """
    base: int
    body: int
    breaks: bool
    open_level: int = 0
    started: bool = False
    in_between: bool = False


def _statement_frame() -> Frame:
    return Frame(base=0, body=0, breaks=True)


@dataclass
class Formatter:
    """
    Single-use formatter over one token stream.

    Attributes:
        tokens: Tokens produced by tokenize().
        options: Validated FormatOptions.
    """
    tokens: list[Token]
    options: FormatOptions
    toks: list[Token] = field(init=False, default_factory=list)
    ws_before: list[bool] = field(init=False, default_factory=list)
    nl_before: list[bool] = field(init=False, default_factory=list)
    breaking_groups: set[int] = field(init=False, default_factory=set)
    out: list[str] = field(init=False, default_factory=list)
    frames: list[Frame] = field(init=False, default_factory=lambda: [_statement_frame()])
    line_level: int = field(init=False, default=0)
    pending: Separator | None = field(init=False, default=None)
    prev: Token | None = field(init=False, default=None)
    prev_code: Token | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        ws = False
        nl = False
        for tok in self.tokens:
            if tok.kind is TokenKind.WHITESPACE:
                ws = True
                nl = nl or "\n" in tok.text or "\r" in tok.text
                continue
            self.toks.append(tok)
            self.ws_before.append(ws)
            self.nl_before.append(nl)
            ws = nl = False
        self._scan_groups()

    # ---------------- analysis ----------------

    def _scan_groups(self) -> None:
        """Find the paren groups that break (comma at own depth, or subquery)."""
        stack: list[int] = []
        for i, tok in enumerate(self.toks):
            if tok.is_punct("("):
                if self._starts_subquery(i + 1):
                    self.breaking_groups.add(i)
                stack.append(i)
            elif tok.is_punct(")"):
                if stack:
                    stack.pop()
            elif tok.is_punct(","):
                if stack:
                    self.breaking_groups.add(stack[-1])
            elif tok.is_punct(";"):
                stack.clear()

    def _starts_subquery(self, j: int) -> bool:
        while j < len(self.toks) and self.toks[j].is_comment:
            j += 1
        if j >= len(self.toks):
            return False
        tok = self.toks[j]
        return tok.kind is TokenKind.KEYWORD and tok.normalized in SUBQUERY_STARTERS

    def _keyword_run(self, i: int) -> list[str]:
        words: list[str] = []
        while (
            i < len(self.toks)
            and len(words) < _MAX_CLAUSE_WORDS
            and self.toks[i].kind is TokenKind.KEYWORD
        ):
            words.append(self.toks[i].normalized)
            i += 1
        return words

    def _match_clause(self, i: int) -> int:
        """
        Check whether a major clause starts at toks[i].

        Returns:
            Number of keyword tokens the clause spans, 0 if none.
        """
        tok = self.toks[i]
        if tok.kind is not TokenKind.KEYWORD or tok.normalized not in CLAUSE_STARTERS:
            return 0
        frame = self.frames[-1]
        if not frame.breaks:
            return 0
        prev = self.prev_code
        if prev is not None and prev.kind is TokenKind.KEYWORD and prev.normalized in CLAUSE_SUPPRESSORS:
            return 0

        words = self._keyword_run(i)
        if words[0] in OPEN_CLAUSES:
            n = 1
            while n < len(words) and words[n] not in CLAUSE_STARTERS:
                n += 1
            return n
        for seq in _CLAUSES_BY_LENGTH:
            if tuple(words[:len(seq)]) == seq:
                if seq[0] in LEADING_ONLY_CLAUSES and frame.started:
                    return 0
                return len(seq)
        return 0

    def _is_unary(self) -> bool:
        prev = self.prev_code
        if prev is None or prev.kind is TokenKind.OPERATOR:
            return True
        if prev.is_punct("(") or prev.is_punct(",") or prev.is_punct(";"):
            return True
        return prev.kind is TokenKind.KEYWORD and prev.normalized not in VALUE_KEYWORDS

    # ---------------- separators ----------------

    def _before(self, tok: Token) -> Separator | None:
        """The token's own rule for what precedes it; None means no opinion."""
        frame = self.frames[-1]
        if tok.kind is TokenKind.KEYWORD and tok.normalized in BOOLEAN_KEYWORDS and frame.breaks:
            if tok.normalized == "AND" and frame.in_between:
                return None
            return Separator(NEWLINE, frame.body)
        if tok.is_punct(")"):
            if len(self.frames) == 1 or not frame.breaks:
                return Separator(NONE)
            return Separator(NEWLINE, frame.open_level)
        if tok.is_punct("."):
            return Separator(NONE)
        if tok.is_punct("("):
            if self.prev is not None and self.prev.kind is TokenKind.IDENTIFIER:
                return Separator(NONE)
            return Separator(SPACE)
        return None

    def _resolve(self, i: int, tok: Token, before: Separator | None) -> Separator | None:
        """Combine the previous token's pending rule with this token's own rule."""
        if self.prev is None:
            return None
        pending = self.pending
        if pending is not None and pending.forced:
            if before is not None and before.kind == NEWLINE:
                return before
            return Separator(NEWLINE, pending.level)
        if before is not None and (before.kind == NEWLINE or tok.is_punct(")")):
            return before
        if tok.is_punct(",") or tok.is_punct(";"):
            return Separator(NONE)
        if pending is not None:
            return pending
        if before is not None:
            return before
        if TokenKind.UNKNOWN in (tok.kind, self.prev.kind) and not self.ws_before[i]:
            return Separator(NONE)
        return Separator(SPACE)

    def _write(self, sep: Separator | None, tok: Token) -> None:
        if sep is not None:
            if sep.kind == NONE and self.prev is not None and needs_separator(self.prev, tok):
                sep = Separator(SPACE)
            if sep.kind == NEWLINE:
                self.out.append("\n" + self.options.indent(sep.level))
                self.line_level = sep.level
            elif sep.kind == SPACE:
                self.out.append(" ")
        if tok.kind is TokenKind.KEYWORD:
            self.out.append(self.options.keyword_case.apply(tok.text))
        else:
            self.out.append(tok.text)

    def _pending_level(self) -> int:
        if self.pending is not None and self.pending.kind == NEWLINE:
            return self.pending.level
        return self.line_level

    # ---------------- emitters ----------------

    def _emit_comment(self, i: int, tok: Token) -> None:
        if self.prev is None:
            sep = None
        elif self.nl_before[i]:
            sep = Separator(NEWLINE, self._pending_level())
        else:
            sep = Separator(SPACE)
        self._write(sep, tok)
        self.prev = tok
        if tok.kind is TokenKind.LINE_COMMENT:
            self.pending = Separator(NEWLINE, self._pending_level(), forced=True)

    def _emit_clause(self, i: int, n: int) -> None:
        frame = self.frames[-1]
        first = self.toks[i]
        self._write(self._resolve(i, first, Separator(NEWLINE, frame.base)), first)
        for tok in self.toks[i + 1:i + n]:
            self.out.append(" ")
            self.out.append(self.options.keyword_case.apply(tok.text))
        frame.body = frame.base + 1
        frame.started = True
        frame.in_between = False
        self.prev = self.prev_code = self.toks[i + n - 1]
        self.pending = Separator(NEWLINE, frame.body)

    def _emit_token(self, i: int, tok: Token) -> None:
        frame = self.frames[-1]
        self._write(self._resolve(i, tok, self._before(tok)), tok)

        after: Separator | None = None
        if tok.is_punct("("):
            if i in self.breaking_groups:
                level = self.line_level + 1
                self.frames.append(Frame(base=level, body=level, breaks=True, open_level=self.line_level))
                after = Separator(NEWLINE, level)
            else:
                self.frames.append(
                    Frame(base=self.line_level, body=self.line_level, breaks=False, open_level=self.line_level)
                )
                after = Separator(NONE)
        elif tok.is_punct(")"):
            if len(self.frames) > 1:
                self.frames.pop()
        elif tok.is_punct(","):
            if frame.breaks:
                after = Separator(NEWLINE, frame.body)
        elif tok.is_punct(";"):
            self.frames = [_statement_frame()]
            frame = self.frames[0]
            after = Separator(NEWLINE, 0)
        elif tok.is_punct("."):
            after = Separator(NONE)
        elif tok.kind is TokenKind.OPERATOR and tok.text in ("+", "-") and self._is_unary():
            after = Separator(NONE)
        elif tok.kind is TokenKind.KEYWORD:
            if tok.normalized == "BETWEEN":
                frame.in_between = True
            elif tok.normalized == "AND":
                frame.in_between = False

        if not tok.is_punct(";"):
            frame.started = True
        self.prev = self.prev_code = tok
        self.pending = after

    def run(self) -> str:
        """Format the whole stream and return the output text."""
        i = 0
        while i < len(self.toks):
            tok = self.toks[i]
            if tok.is_comment:
                self._emit_comment(i, tok)
                i += 1
                continue
            n = self._match_clause(i)
            if n:
                self._emit_clause(i, n)
                i += n
                continue
            self._emit_token(i, tok)
            i += 1
        return "".join(self.out)


def format_tokens(tokens: list[Token], options: FormatOptions | None = None) -> str:
    """
    Pretty-print a token stream.

    Args:
        tokens: Tokens produced by tokenize().
        options: FormatOptions; defaults are used when omitted.

    Returns:
        Formatted SQL text (no trailing newline).
    """
    return Formatter(list(tokens), options or FormatOptions()).run()
