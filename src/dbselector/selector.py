"""
Fluent selector producing a parameterized statement and its binds.

    >>> sel = Selector().select_from('user').where('name', '=', 'Vova')
    >>> sel.render()
    ('SELECT * FROM "user" WHERE name = :name1', {'name1': 'Vova'})

The first condition should be `where()`/`where_in()`, later ones
`and_()`/`or_()`. Field names, operators and raw ORDER BY strings are
written into the SQL verbatim and must never come from untrusted input;
only values are bound. Without `strict` the clause grammar is not checked.

A selector is a single-writer object: build it, then render it. Each render
call numbers its binds from 1, so rendering twice yields the same result.
"""
from dataclasses import fields, replace
from typing import Any

from dbselector.clauses import Connector, OrderItem, SetItem
from dbselector.mapper import is_record
from dbselector.options import SelectorOptions
from dbselector.params import ParameterNamer, positional_binds
from dbselector.sql import get_dialect, limit_sql, offset_sql, order_by_sql
from dbselector.statement import StatementKind, StatementState
from dbselector.statement import render_statement
from dbselector.where import check_grammar, render_where, where_fragment
from more_itertools import collapse

from libb import load_options


class Selector:
    """Accumulates statement state through chained calls.

    Args:
        options: SelectorOptions, dict of options, config key, or None
        config: Configuration object (for loading from config files)
        **kw: Option overrides (dialect, parameter_prefix, strict)
    """

    def __init__(self, options: SelectorOptions | dict[str, Any] | None = None,
                 config: Any | None = None, **kw: Any) -> None:
        if isinstance(options, SelectorOptions):
            for f in fields(options):
                kw.pop(f.name, None)
        else:
            options_func = load_options(cls=SelectorOptions)(lambda o, c: o)
            options = options_func(options, config, **kw)
        self.options = replace(options)
        self.state = StatementState()

    def __repr__(self) -> str:
        kind = self.state.kind.value if self.state.kind else 'SELECT'
        return f'<Selector {kind} {self.state.table!r} clauses={len(self.state.clauses)}>'

    #
    # configuration
    #

    def set_parameter_prefix(self, prefix: str) -> 'Selector':
        """Set the prefix applied to every named bind (`q1_` -> `:q1_name1`).
        """
        self.options.parameter_prefix = prefix or ''
        return self

    def set_dialect(self, dialect: str) -> 'Selector':
        self.options.dialect = get_dialect(dialect).value
        return self

    #
    # statement kind
    #

    def _statement(self, kind: StatementKind, table: str) -> 'Selector':
        self.state.table = table
        self.state.kind = kind
        return self

    def select_from(self, table: str) -> 'Selector':
        return self._statement(StatementKind.SELECT, table)

    def delete_from(self, table: str) -> 'Selector':
        return self._statement(StatementKind.DELETE, table)

    def update_table(self, table: str) -> 'Selector':
        return self._statement(StatementKind.UPDATE, table)

    def insert_into(self, table: str) -> 'Selector':
        return self._statement(StatementKind.INSERT, table)

    select = select_from
    delete = delete_from
    update = update_table
    insert = insert_into

    #
    # WHERE section
    #

    def where(self, field: str, operator: str, value: Any) -> 'Selector':
        """Add `WHERE field operator :value`.
        """
        self.state.clauses.add_predicate(Connector.WHERE, field, operator, value)
        return self

    def and_(self, field: str, operator: str, value: Any) -> 'Selector':
        self.state.clauses.add_predicate(Connector.AND, field, operator, value)
        return self

    def or_(self, field: str, operator: str, value: Any) -> 'Selector':
        self.state.clauses.add_predicate(Connector.OR, field, operator, value)
        return self

    def where_in(self, field: str, values: Any) -> 'Selector':
        """Add `WHERE field IN (...)`; an empty set renders `WHERE true`.
        """
        self.state.clauses.add_in(Connector.WHERE, field, values)
        return self

    def and_in(self, field: str, values: Any) -> 'Selector':
        """Add `AND field IN (...)`; an empty set adds nothing.
        """
        self.state.clauses.add_in(Connector.AND, field, values)
        return self

    def or_in(self, field: str, values: Any) -> 'Selector':
        """Add `OR field IN (...)`; an empty set adds nothing.
        """
        self.state.clauses.add_in(Connector.OR, field, values)
        return self

    def open_bracket(self) -> 'Selector':
        """Open a bracket before the next condition.
        """
        self.state.clauses.open_bracket()
        return self

    def close_bracket(self) -> 'Selector':
        self.state.clauses.close_bracket()
        return self

    #
    # ordering and row shaping
    #

    def order_by(self, order: str) -> 'Selector':
        """Set a raw ORDER BY string; bound orderings are then ignored.
        """
        self.state.order_by = order
        return self

    def order_bind(self, field: str, direction: str = 'asc') -> 'Selector':
        """Add a bound ORDER BY entry; unknown directions become `asc`.
        """
        self.state.orders.append(OrderItem.create(field, direction))
        return self

    order_by_raw = order_by
    order_by_bound = order_bind

    def limit(self, limit: int) -> 'Selector':
        self.state.limit = limit
        return self

    def offset(self, offset: int) -> 'Selector':
        self.state.offset = offset
        return self

    def count(self) -> 'Selector':
        """Project `count(*)` instead of `*`.
        """
        self.state.count = True
        return self

    def set(self, field: str, value: Any) -> 'Selector':
        self.state.sets.append(SetItem(field, value))
        return self

    def values(self, rows: Any) -> 'Selector':
        """Add rows to INSERT; columns are taken from the first row.

        Accepts an iterable of rows or a single row value.
        """
        if rows is None:
            return self
        if is_record(rows):
            rows = [rows]
        self.state.rows.extend(rows)
        return self

    def returning(self, *columns: Any) -> 'Selector':
        """Append columns to the RETURNING list (comma-joined, verbatim).
        """
        names = [str(c) for c in collapse(columns) if c]
        if not names:
            return self
        if self.state.returning:
            names.insert(0, self.state.returning)
        self.state.returning = ','.join(names)
        return self

    #
    # rendering
    #

    def _namer(self, positional: bool) -> ParameterNamer:
        return ParameterNamer(prefix=self.options.parameter_prefix,
                              positional=positional,
                              dialect=self.options.dialect)

    def _render(self, positional: bool) -> tuple[str, dict[str, Any]]:
        if self.options.strict:
            check_grammar(self.state.clauses)
        return render_statement(self.state, self._namer(positional))

    def render(self) -> tuple[str, dict[str, Any]]:
        """Render with named placeholders.

        Returns
            Tuple of SQL text and a mapping of bind name to value

        Raises
            MappingError: If INSERT rows cannot be mapped to columns
            GrammarError: If strict and the clause grammar is malformed
        """
        return self._render(positional=False)

    def render_positional(self) -> tuple[str, list[Any]]:
        """Render with positional placeholders (`$n` or `?` by dialect).

        Returns
            Tuple of SQL text and bind values ordered by placeholder number
        """
        sql, binds = self._render(positional=True)
        return sql, positional_binds(binds)

    sql = render
    raw_sql = render_positional

    def where_sql(self) -> tuple[str, dict[str, Any]]:
        """Render only the WHERE conditions, without the WHERE keyword.
        """
        if self.options.strict:
            check_grammar(self.state.clauses)
        sql, binds = render_where(self.state.clauses, self._namer(positional=False))
        return where_fragment(sql), binds

    def limit_sql(self) -> str:
        return limit_sql(self.state.limit)

    def offset_sql(self) -> str:
        return offset_sql(self.state.offset)

    def order_by_sql(self) -> str:
        return order_by_sql(self.state.order_by)
