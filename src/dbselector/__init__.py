"""
Fluent builder for parameterized SELECT, INSERT, UPDATE and DELETE statements.

Statements can be started either as:
- Module functions: dbselector.select_from('user').where(...)
- Selector methods: Selector().select_from('user').where(...)

Rendering returns the SQL text and its binds; nothing is executed.
"""
__version__ = '0.1.1'

from typing import Any

from dbselector.clauses import Clause, ClauseKind, ClauseList, Connector
from dbselector.exceptions import GrammarError, MappingError, SelectorError
from dbselector.mapper import FieldSpec, column
from dbselector.options import SelectorOptions
from dbselector.selector import Selector
from dbselector.sql import Dialect
from dbselector.statement import StatementKind


def select_from(table: str, **kw: Any) -> Selector:
    """Start a SELECT on `table`.
    """
    return Selector(**kw).select_from(table)


def delete_from(table: str, **kw: Any) -> Selector:
    """Start a DELETE on `table`.
    """
    return Selector(**kw).delete_from(table)


def update_table(table: str, **kw: Any) -> Selector:
    """Start an UPDATE on `table`.
    """
    return Selector(**kw).update_table(table)


def insert_into(table: str, **kw: Any) -> Selector:
    """Start an INSERT into `table`.
    """
    return Selector(**kw).insert_into(table)


__all__ = [
    'Selector',
    'SelectorOptions',
    'select_from',
    'delete_from',
    'update_table',
    'insert_into',
    'Clause',
    'ClauseKind',
    'ClauseList',
    'Connector',
    'Dialect',
    'StatementKind',
    'FieldSpec',
    'column',
    'SelectorError',
    'MappingError',
    'GrammarError',
]
