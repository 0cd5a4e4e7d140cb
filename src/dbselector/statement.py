"""
Statement assembly for each statement kind.

    SELECT {*|count(*)} FROM "t" [WHERE ...] [ORDER BY ...] [LIMIT n] [OFFSET n]
    DELETE FROM "t" [WHERE ...] [RETURNING ...]
    UPDATE "t" SET f = :f1, ... [WHERE ...] [RETURNING ...]
    INSERT INTO "t" [(c1, c2) VALUES (...), (...)] [RETURNING ...]

Every renderer takes the statement state and the namer of the current render
and returns (sql, binds). Binds are numbered in the order their placeholders
appear in the text.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dbselector.clauses import ClauseList, OrderItem, SetItem
from dbselector.exceptions import MappingError
from dbselector.mapper import insert_columns, map_columns, read_values
from dbselector.params import ParameterNamer
from dbselector.sql import limit_sql, offset_sql, order_by_sql
from dbselector.sql import quote_identifier
from dbselector.where import render_where

logger = logging.getLogger(__name__)


class StatementKind(str, Enum):
    SELECT = 'SELECT'
    DELETE = 'DELETE'
    UPDATE = 'UPDATE'
    INSERT = 'INSERT'


@dataclass
class StatementState:
    """Everything a selector accumulates before rendering."""
    table: str = ''
    kind: StatementKind | None = None
    clauses: ClauseList = field(default_factory=ClauseList)
    order_by: str = ''
    orders: list[OrderItem] = field(default_factory=list)
    limit: int = 0
    offset: int = 0
    count: bool = False
    sets: list[SetItem] = field(default_factory=list)
    rows: list[Any] = field(default_factory=list)
    returning: str = ''


def returning_sql(returning: str) -> str:
    if returning:
        return ' RETURNING ' + returning
    return ''


def render_select(state: StatementState, namer: ParameterNamer) -> tuple[str, dict[str, Any]]:
    """Render a SELECT statement.

    A raw ORDER BY string wins over bound orderings. Bound orderings bind
    the field name itself.
    """
    selection = 'count(*)' if state.count else '*'
    sql = f'SELECT {selection} FROM {quote_identifier(state.table)}'
    where, binds = render_where(state.clauses, namer)
    sql += where

    if state.order_by:
        sql += order_by_sql(state.order_by)
    elif state.orders:
        items = []
        for order in state.orders:
            bind_name, ph = namer.next_name(order.field)
            binds[bind_name] = order.field
            items.append(f'{ph} {order.direction}')
        sql += ' ORDER BY ' + ', '.join(items)

    sql += limit_sql(state.limit)
    sql += offset_sql(state.offset)
    return sql, binds


def render_delete(state: StatementState, namer: ParameterNamer) -> tuple[str, dict[str, Any]]:
    sql = f'DELETE FROM {quote_identifier(state.table)}'
    where, binds = render_where(state.clauses, namer)
    sql += where
    sql += returning_sql(state.returning)
    return sql, binds


def render_update(state: StatementState, namer: ParameterNamer) -> tuple[str, dict[str, Any]]:
    """Render an UPDATE statement; SET binds are numbered before WHERE binds.
    """
    binds: dict[str, Any] = {}
    assignments = []
    for item in state.sets:
        bind_name, ph = namer.next_name(item.field)
        binds[bind_name] = item.value
        assignments.append(f' {item.field} = {ph}')

    sql = f'UPDATE {quote_identifier(state.table)} SET' + ','.join(assignments)
    where, where_binds = render_where(state.clauses, namer)
    sql += where
    sql += returning_sql(state.returning)
    binds.update(where_binds)
    return sql, binds


def render_values(rows: list[Any], namer: ParameterNamer) -> tuple[str, dict[str, Any]]:
    """Render the column list and VALUES groups for INSERT.

    Columns come from the first row only; every row is read with the same
    field positions.

    Raises
        MappingError: If any row cannot be mapped or read
    """
    binds: dict[str, Any] = {}
    if not rows:
        return '', binds

    mappings = insert_columns(map_columns(rows[0]))
    groups = []
    for row in rows:
        placeholders = []
        for mapping, value in zip(mappings, read_values(row, mappings)):
            bind_name, ph = namer.next_name(mapping.column)
            binds[bind_name] = value
            placeholders.append(ph)
        groups.append('(' + ', '.join(placeholders) + ')')

    columns = ', '.join(m.column for m in mappings)
    return f' ({columns}) VALUES ' + ', '.join(groups), binds


def render_insert(state: StatementState, namer: ParameterNamer) -> tuple[str, dict[str, Any]]:
    sql = f'INSERT INTO {quote_identifier(state.table)}'
    try:
        values, binds = render_values(state.rows, namer)
    except MappingError as err:
        logger.error(f'Failed to map INSERT rows for {state.table!r}: {err}')
        raise
    sql += values
    sql += returning_sql(state.returning)
    return sql, binds


_RENDERERS = {
    StatementKind.SELECT: render_select,
    StatementKind.DELETE: render_delete,
    StatementKind.UPDATE: render_update,
    StatementKind.INSERT: render_insert,
}


def render_statement(state: StatementState, namer: ParameterNamer) -> tuple[str, dict[str, Any]]:
    """Render the statement for the state's kind (SELECT when unset).
    """
    kind = state.kind or StatementKind.SELECT
    sql, binds = _RENDERERS[kind](state, namer)
    logger.debug(f'Rendered {kind.value} on {state.table!r} with {len(binds)} bind(s)')
    return sql, binds
