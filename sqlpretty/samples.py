"""
sqlpretty/samples.py

Sample queries offered by the REPL (.samples / .sample N).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Sample:
    name: str
    sql: str


SAMPLES: tuple[Sample, ...] = (
    Sample(
        "simple select",
        "SELECT id,name,email FROM users WHERE active=1 ORDER BY name ASC;",
    ),
    Sample(
        "join",
        "SELECT u.id,u.name,o.order_date,o.total FROM users u INNER JOIN orders o "
        "ON u.id=o.user_id WHERE o.status='completed' AND o.total>100 "
        "ORDER BY o.total DESC LIMIT 10;",
    ),
    Sample(
        "multi-row insert",
        "INSERT INTO products (name,price,category,created_at) VALUES "
        "('Laptop',999.99,'Electronics',NOW()),('Mouse',29.99,'Accessories',NOW()),"
        "('Keyboard',79.99,'Accessories',NOW());",
    ),
    Sample(
        "update with join",
        "UPDATE users u SET u.last_login=NOW(),u.login_count=u.login_count+1 "
        "FROM user_sessions s WHERE u.id=s.user_id AND s.session_id='abc123';",
    ),
)


def get_sample(key: int | str) -> Sample:
    """
    Look a sample up by 1-based index or by name (case-insensitive).

    Raises:
        KeyError: if no sample matches.
    """
    if isinstance(key, int) or str(key).isdigit():
        idx = int(key) - 1
        if 0 <= idx < len(SAMPLES):
            return SAMPLES[idx]
        raise KeyError(key)
    wanted = str(key).strip().lower()
    for sample in SAMPLES:
        if sample.name == wanted:
            return sample
    raise KeyError(key)
