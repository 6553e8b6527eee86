import pytest

from sqlpretty import FormatOptions, KeywordCase, TokenKind, format_sql, tokenize
from sqlpretty.samples import SAMPLES


def test_simple_select():
    out = format_sql("select id,name from users where active=1;")
    assert out == "SELECT\n  id,\n  name\nFROM\n  users\nWHERE\n  active = 1;"


def test_literal_is_not_a_clause_boundary():
    out = format_sql("SELECT 'FROM nowhere' AS label;")
    assert out == "SELECT\n  'FROM nowhere' AS label;"


def test_join_sample():
    out = format_sql(SAMPLES[1].sql)
    assert out == (
        "SELECT\n"
        "  u.id,\n"
        "  u.name,\n"
        "  o.order_date,\n"
        "  o.total\n"
        "FROM\n"
        "  users u\n"
        "INNER JOIN\n"
        "  orders o ON u.id = o.user_id\n"
        "WHERE\n"
        "  o.status = 'completed'\n"
        "  AND o.total > 100\n"
        "ORDER BY\n"
        "  o.total DESC\n"
        "LIMIT\n"
        "  10;"
    )


def test_insert_values_lists():
    out = format_sql("INSERT INTO products (name,price) VALUES ('Laptop',999.99),('Mouse',29.99);")
    assert out == (
        "INSERT INTO\n"
        "  products(\n"
        "    name,\n"
        "    price\n"
        "  ) VALUES (\n"
        "    'Laptop',\n"
        "    999.99\n"
        "  ),\n"
        "  (\n"
        "    'Mouse',\n"
        "    29.99\n"
        "  );"
    )


def test_and_or_stack_but_between_stays_inline():
    out = format_sql("select * from t where a between 1 and 5 and b = 2 or c = 3;")
    assert out == (
        "SELECT\n  *\nFROM\n  t\nWHERE\n"
        "  a BETWEEN 1 AND 5\n"
        "  AND b = 2\n"
        "  OR c = 3;"
    )


def test_function_calls_stay_inline():
    out = format_sql("select count(*), max(price) from products;")
    assert out == "SELECT\n  count(*),\n  max(price)\nFROM\n  products;"


def test_subquery_is_indented():
    out = format_sql("select id from users where id in (select user_id from orders);")
    assert out == (
        "SELECT\n  id\nFROM\n  users\nWHERE\n"
        "  id IN (\n"
        "    SELECT\n"
        "      user_id\n"
        "    FROM\n"
        "      orders\n"
        "  );"
    )


def test_with_clause_and_union():
    out = format_sql("with recent as (select id from t) select * from recent union all select 1;")
    assert out == (
        "WITH\n"
        "  recent AS (\n"
        "    SELECT\n"
        "      id\n"
        "    FROM\n"
        "      t\n"
        "  )\n"
        "SELECT\n  *\nFROM\n  recent\n"
        "UNION ALL\n"
        "SELECT\n  1;"
    )


def test_group_by_having_order_by():
    out = format_sql("select dept, count(*) from emp group by dept having count(*) > 1 order by dept;")
    assert out == (
        "SELECT\n  dept,\n  count(*)\nFROM\n  emp\n"
        "GROUP BY\n  dept\n"
        "HAVING\n  count(*) > 1\n"
        "ORDER BY\n  dept;"
    )


def test_create_table():
    out = format_sql(
        "create table if not exists users (id integer primary key, email varchar(255) not null);"
    )
    assert out == (
        "CREATE TABLE IF NOT EXISTS\n"
        "  users(\n"
        "    id integer PRIMARY KEY,\n"
        "    email varchar(255) NOT NULL\n"
        "  );"
    )


def test_on_delete_is_not_a_clause():
    out = format_sql("alter table b add constraint fk foreign key (a_id) references a (id) on delete set null;")
    assert out == (
        "ALTER TABLE\n"
        "  b ADD CONSTRAINT fk FOREIGN KEY (a_id) REFERENCES a(id) ON DELETE SET NULL;"
    )


def test_statements_start_on_new_lines():
    assert format_sql("select 1; select 2;") == "SELECT\n  1;\nSELECT\n  2;"


def test_unary_minus_attaches():
    out = format_sql("select -1, a - -b from t;")
    assert out == "SELECT\n  -1,\n  a - -b\nFROM\n  t;"


def test_unknown_symbols_keep_adjacency():
    out = format_sql("select @total, $1, x::int from t;")
    assert out == "SELECT\n  @total,\n  $1,\n  x::int\nFROM\n  t;"


def test_qualified_keyword_is_left_alone():
    assert format_sql("select t.order from t;") == "SELECT\n  t.order\nFROM\n  t;"


def test_trailing_line_comment_stays_on_its_line():
    out = format_sql("SELECT a, -- first\n b FROM t;")
    assert out == "SELECT\n  a, -- first\n  b\nFROM\n  t;"


def test_comment_on_own_line():
    out = format_sql("SELECT a\n-- note\nFROM t;")
    assert out == "SELECT\n  a\n  -- note\nFROM\n  t;"


def test_block_comment_content_untouched():
    out = format_sql("select /* keep   select from */ x from t;")
    assert out == "SELECT /* keep   select from */\n  x\nFROM\n  t;"


def test_indent_size():
    out = format_sql("select a from t;", FormatOptions(indent_size=4))
    assert out == "SELECT\n    a\nFROM\n    t;"


def test_keyword_case_lower_and_preserve():
    sql = "SELECT Id FROM T where X = 'Where';"
    assert format_sql(sql, FormatOptions(keyword_case=KeywordCase.LOWER)) == (
        "select\n  Id\nfrom\n  T\nwhere\n  X = 'Where';"
    )
    assert format_sql(sql, FormatOptions(keyword_case=KeywordCase.PRESERVE)) == (
        "SELECT\n  Id\nFROM\n  T\nwhere\n  X = 'Where';"
    )


def test_dialect_clause():
    sql = "insert into t (a) values (1) returning id;"
    assert format_sql(sql) == "INSERT INTO\n  t(a) VALUES (1) returning id;"
    assert format_sql(sql, FormatOptions.for_dialect("postgresql")) == (
        "INSERT INTO\n  t(a) VALUES (1)\nRETURNING\n  id;"
    )


def test_empty_and_blank_input():
    assert format_sql("") == ""
    assert format_sql("  \n\t ") == ""


IDEMPOTENCE_INPUTS = [s.sql for s in SAMPLES] + [
    "select id,name from users where active=1;",
    "SELECT a, -- first\n b FROM t; /* tail */",
    "select x from (select a, b from t where a in (1, 2)) s where s.a between 1 and 2;",
    "select case when a > 0 then 'pos' else 'neg' end - 1 from t;",
    "select @v, $1, x :: int, -(-1) from t;",
    "create table t (id int, name varchar(20), primary key (id));",
    "select 1 .5, 'a' 'b', a - -1, b / *c from t;",
    "\n\n-- lead\n\nselect   1\n\n\n;",
]


@pytest.mark.parametrize("sql", IDEMPOTENCE_INPUTS)
@pytest.mark.parametrize("case", list(KeywordCase))
def test_format_is_idempotent(sql, case):
    opts = FormatOptions(indent_size=3, keyword_case=case)
    once = format_sql(sql, opts)
    assert format_sql(once, opts) == once


@pytest.mark.parametrize("sql", IDEMPOTENCE_INPUTS)
def test_format_keeps_token_sequence(sql):
    def code(s):
        return [
            (t.kind, t.text.upper() if t.kind is TokenKind.KEYWORD else t.text)
            for t in tokenize(s)
            if t.kind is not TokenKind.WHITESPACE
        ]

    assert code(format_sql(sql)) == code(sql)


def test_case_fidelity():
    sql = "select MixedCase, 'select me' from Tbl where Col = 'Where';"
    out = format_sql(sql)
    for tok in tokenize(out):
        if tok.kind is TokenKind.KEYWORD:
            assert tok.text == tok.text.upper()
    assert "MixedCase" in out and "'select me'" in out and "Tbl" in out and "'Where'" in out


def test_no_blank_lines_or_trailing_spaces():
    out = format_sql("\n\n\nselect a,\n\n\n b\n\n\nfrom t ;\n\n\n select 2 ;\n\n")
    assert "\n\n" not in out
    assert all(line == line.rstrip() for line in out.split("\n"))
