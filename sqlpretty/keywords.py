"""
sqlpretty/keywords.py

Keyword tables used by the lexer and the formatter.

Responsibilities:
- Provide the built-in ANSI-ish reserved word list and per-dialect extensions
- Describe the major clauses that start a new section of a statement
- Look dialects up by name for the CLI/REPL

Notes:
- Function names (COUNT, SUM, NOW, ...) and data types (INTEGER, VARCHAR, ...)
  are deliberately absent: they lex as identifiers, so the formatter keeps
  function-call spacing for them: COUNT(*), VARCHAR(255).
- All entries are uppercase; lookups uppercase the word first.
"""

from __future__ import annotations

from .errors import InvalidOption


ANSI_KEYWORDS: frozenset[str] = frozenset({
    # Queries
    "SELECT", "FROM", "WHERE", "GROUP", "BY", "HAVING", "ORDER", "LIMIT", "OFFSET",
    "FETCH", "FIRST", "NEXT", "ROWS", "ROW", "ONLY", "DISTINCT", "ALL", "AS",
    "ASC", "DESC", "NULLS", "WITH", "RECURSIVE", "OVER", "PARTITION", "FOR",
    # Joins
    "JOIN", "INNER", "LEFT", "RIGHT", "FULL", "OUTER", "CROSS", "NATURAL", "ON", "USING",
    # Set operations
    "UNION", "INTERSECT", "EXCEPT",
    # DML
    "INSERT", "INTO", "VALUES", "UPDATE", "SET", "DELETE", "DEFAULT",
    # DDL
    "CREATE", "ALTER", "DROP", "TRUNCATE", "TABLE", "VIEW", "INDEX", "UNIQUE",
    "PRIMARY", "KEY", "FOREIGN", "REFERENCES", "CONSTRAINT", "CHECK", "SCHEMA",
    "DATABASE", "PROCEDURE", "FUNCTION", "TRIGGER", "SEQUENCE", "ADD", "COLUMN",
    "RENAME", "TO", "CASCADE", "RESTRICT", "TEMPORARY", "IF",
    # Predicates and expressions
    "AND", "OR", "NOT", "IN", "IS", "NULL", "LIKE", "BETWEEN", "EXISTS", "ANY",
    "SOME", "CASE", "WHEN", "THEN", "ELSE", "END", "TRUE", "FALSE", "ESCAPE",
    "COLLATE",
    # Transactions and privileges
    "BEGIN", "COMMIT", "ROLLBACK", "SAVEPOINT", "TRANSACTION", "GRANT", "REVOKE",
})

MYSQL_KEYWORDS: frozenset[str] = ANSI_KEYWORDS | {
    "REPLACE", "IGNORE", "DUPLICATE", "AUTO_INCREMENT", "ENGINE", "STRAIGHT_JOIN",
    "SHOW", "DESCRIBE", "EXPLAIN", "USE", "REGEXP", "RLIKE", "DIV", "XOR", "UNSIGNED",
    "LOCK", "UNLOCK", "TABLES",
}

POSTGRESQL_KEYWORDS: frozenset[str] = ANSI_KEYWORDS | {
    "RETURNING", "ILIKE", "SIMILAR", "LATERAL", "CONFLICT", "DO", "NOTHING",
    "MATERIALIZED", "CONCURRENTLY", "EXPLAIN", "ANALYZE", "VACUUM", "OWNER",
}

SQLITE_KEYWORDS: frozenset[str] = ANSI_KEYWORDS | {
    "PRAGMA", "AUTOINCREMENT", "GLOB", "VACUUM", "ATTACH", "DETACH", "CONFLICT",
    "ABORT", "FAIL", "IGNORE", "REPLACE", "WITHOUT", "ROWID", "EXPLAIN",
}

DIALECTS: dict[str, frozenset[str]] = {
    "ansi": ANSI_KEYWORDS,
    "mysql": MYSQL_KEYWORDS,
    "postgresql": POSTGRESQL_KEYWORDS,
    "sqlite": SQLITE_KEYWORDS,
}

DIALECT_ALIASES: dict[str, str] = {
    "postgres": "postgresql",
    "pg": "postgresql",
    "mariadb": "mysql",
    "sql": "ansi",
}


# Major clauses, as word sequences. Longest sequences are tried first, so
# "LEFT OUTER JOIN" wins over "LEFT JOIN".
MAJOR_CLAUSES: tuple[tuple[str, ...], ...] = (
    ("SELECT", "DISTINCT"),
    ("SELECT", "ALL"),
    ("SELECT",),
    ("FROM",),
    ("WHERE",),
    ("GROUP", "BY"),
    ("HAVING",),
    ("ORDER", "BY"),
    ("LIMIT",),
    ("OFFSET",),
    ("JOIN",),
    ("INNER", "JOIN"),
    ("CROSS", "JOIN"),
    ("NATURAL", "JOIN"),
    ("LEFT", "JOIN"),
    ("LEFT", "OUTER", "JOIN"),
    ("RIGHT", "JOIN"),
    ("RIGHT", "OUTER", "JOIN"),
    ("FULL", "JOIN"),
    ("FULL", "OUTER", "JOIN"),
    ("UNION", "ALL"),
    ("UNION", "DISTINCT"),
    ("UNION",),
    ("INTERSECT",),
    ("EXCEPT",),
    ("INSERT", "INTO"),
    ("INSERT",),
    ("UPDATE",),
    ("DELETE", "FROM"),
    ("DELETE",),
    ("SET",),
    ("WITH", "RECURSIVE"),
    ("WITH",),
    ("RETURNING",),
)

# DDL clause starters: absorb every keyword that directly follows
# (CREATE TABLE IF NOT EXISTS, DROP VIEW, ALTER TABLE, ...).
OPEN_CLAUSES: frozenset[str] = frozenset({"CREATE", "ALTER", "DROP", "TRUNCATE"})

# A clause word directly after one of these is part of an expression,
# e.g. ON DELETE CASCADE, FOR UPDATE, IS DISTINCT FROM.
CLAUSE_SUPPRESSORS: frozenset[str] = frozenset({"ON", "FOR", "DISTINCT", "DELETE", "UPDATE"})

# WITH only starts a clause at the start of a statement or subquery
# (not in WITH TIME ZONE, WITH CHECK OPTION, ...).
LEADING_ONLY_CLAUSES: frozenset[str] = frozenset({"WITH"})

BOOLEAN_KEYWORDS: frozenset[str] = frozenset({"AND", "OR"})

# A paren group opening with one of these is a subquery.
SUBQUERY_STARTERS: frozenset[str] = frozenset({"SELECT", "WITH", "INSERT", "UPDATE", "DELETE"})

# Keywords that end an operand: a following + or - is binary (END - 1, NULL + x).
VALUE_KEYWORDS: frozenset[str] = frozenset({"END", "NULL", "TRUE", "FALSE"})

CLAUSE_STARTERS: frozenset[str] = frozenset(seq[0] for seq in MAJOR_CLAUSES) | OPEN_CLAUSES


def is_keyword(word: str, keywords: frozenset[str] = ANSI_KEYWORDS) -> bool:
    """Case-insensitive keyword lookup."""
    return word.upper() in keywords


def keywords_for(dialect: str) -> frozenset[str]:
    """
    Return the keyword set of a dialect.

    Args:
        dialect: Dialect name (ansi, mysql, postgresql, sqlite or an alias), any case.

    Returns:
        Frozen set of uppercase keywords.

    Raises:
        InvalidOption: if the dialect is unknown.
    """
    name = dialect.strip().lower()
    name = DIALECT_ALIASES.get(name, name)
    if name not in DIALECTS:
        raise InvalidOption("dialect", dialect)
    return DIALECTS[name]
