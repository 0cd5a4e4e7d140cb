"""
SQL text helpers shared by the statement renderers.

- `Dialect` - supported target engines (placeholder spelling only)
- `quote_identifier()` - quote a table name
- `limit_sql()`, `offset_sql()`, `order_by_sql()` - trailing fragments
"""
from enum import Enum


class Dialect(str, Enum):
    """Target SQL engine family.

    Only the positional placeholder spelling depends on it: PostgreSQL uses
    `$n`, the others use `?`.
    """
    POSTGRESQL = 'postgresql'
    MYSQL = 'mysql'
    SQLITE = 'sqlite'

    @classmethod
    def names(cls) -> list[str]:
        return [d.value for d in cls]


def get_dialect(dialect: 'Dialect | str') -> Dialect:
    """Resolve a dialect name or member.

    Raises
        ValueError: If dialect is unsupported
    """
    if isinstance(dialect, Dialect):
        return dialect
    try:
        return Dialect(str(dialect).lower())
    except ValueError:
        raise ValueError(f'dialect must be one of: {Dialect.names()}') from None


def quote_identifier(identifier: str) -> str:
    """Safely quote a table name.

    Parameters
        identifier: Table name

    Returns
        Double-quoted identifier with embedded quotes doubled
    """
    return '"' + identifier.replace('"', '""') + '"'


def limit_sql(limit: int) -> str:
    """Return the LIMIT fragment, or '' when limit is not positive.
    """
    if limit > 0:
        return f' LIMIT {limit:d}'
    return ''


def offset_sql(offset: int) -> str:
    """Return the OFFSET fragment, or '' when offset is not positive.
    """
    if offset > 0:
        return f' OFFSET {offset:d}'
    return ''


def order_by_sql(order_by: str) -> str:
    """Return the ORDER BY fragment for a raw, caller-supplied ordering.

    The string is injected verbatim and is never parameterized.
    """
    if order_by:
        return f' ORDER BY {order_by}'
    return ''
