"""
WHERE clause entries and the ordered list that accumulates them.

Clauses render in insertion order. Brackets are textual markers only;
their balance is not tracked here.
"""
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from libb import isiterable


class Connector(str, Enum):
    """Logical keyword prefixed to a rendered predicate."""
    WHERE = 'WHERE'
    AND = 'AND'
    OR = 'OR'


class ClauseKind(Enum):
    """Discriminant of the clause variant."""
    PREDICATE = auto()       # field operator value
    IN = auto()              # field IN (values...)
    TRUE = auto()            # true
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()


@dataclass(slots=True, frozen=True)
class Clause:
    """One unit of WHERE state."""
    kind: ClauseKind
    connector: Connector | None = None
    field: str = ''
    operator: str = ''
    value: Any = None
    values: tuple = ()

    @classmethod
    def predicate(cls, connector: Connector, field: str, operator: str, value: Any) -> 'Clause':
        return cls(ClauseKind.PREDICATE, connector, field, operator, value)

    @classmethod
    def in_set(cls, connector: Connector, field: str, values: Iterable[Any]) -> 'Clause':
        return cls(ClauseKind.IN, connector, field, 'IN', values=tuple(values))

    @classmethod
    def true(cls, connector: Connector = Connector.WHERE) -> 'Clause':
        return cls(ClauseKind.TRUE, connector)

    @classmethod
    def bracket(cls, is_open: bool) -> 'Clause':
        return cls(ClauseKind.OPEN_BRACKET if is_open else ClauseKind.CLOSE_BRACKET)

    @property
    def is_bracket(self) -> bool:
        return self.kind in {ClauseKind.OPEN_BRACKET, ClauseKind.CLOSE_BRACKET}


@dataclass(slots=True, frozen=True)
class OrderItem:
    """Bound ORDER BY entry; the field name itself is the bind value."""
    field: str
    direction: str = 'asc'

    @classmethod
    def create(cls, field: str, direction: str = 'asc') -> 'OrderItem':
        direction = (direction or '').lower()
        if direction not in {'asc', 'desc'}:
            direction = 'asc'
        return cls(field, direction)


@dataclass(slots=True, frozen=True)
class SetItem:
    """UPDATE assignment."""
    field: str
    value: Any


def _as_values(values: Any) -> list[Any]:
    if values is None:
        return []
    if isinstance(values, str | bytes) or not isiterable(values):
        return [values]
    return list(values)


class ClauseList:
    """Ordered, append-only sequence of clauses.
    """

    def __init__(self) -> None:
        self._clauses: list[Clause] = []

    def __iter__(self):
        return iter(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __getitem__(self, index):
        return self._clauses[index]

    def __repr__(self) -> str:
        return f'ClauseList({self._clauses!r})'

    def append(self, clause: Clause) -> None:
        self._clauses.append(clause)

    def add_predicate(self, connector: Connector, field: str, operator: str, value: Any) -> None:
        self.append(Clause.predicate(connector, field, operator, value))

    def add_in(self, connector: Connector, field: str, values: Any) -> None:
        """Append a set-membership test.

        An empty set under WHERE becomes `WHERE true`; an empty set under
        AND/OR appends nothing, so narrowing a filter by nothing is a no-op.
        """
        values = _as_values(values)
        if values:
            self.append(Clause.in_set(connector, field, values))
        elif connector == Connector.WHERE:
            self.append(Clause.true(connector))

    def open_bracket(self) -> None:
        self.append(Clause.bracket(True))

    def close_bracket(self) -> None:
        self.append(Clause.bracket(False))
