"""
Bind parameter naming.

A `ParameterNamer` hands out unique bind names for a single render call:

    named:       hint 'name', prefix 'q1_'  ->  ('q1_name1', ':q1_name1')
    positional:  PostgreSQL                 ->  ('$1', '$1')
                 MySQL / SQLite             ->  ('$1', '?')

Positional bind names are always the ordinal key `$n` so the ordered value
list can be rebuilt with `positional_binds()`.
"""
from typing import Any

from dbselector.sql import Dialect, get_dialect


class ParameterNamer:
    """Strictly increasing bind counter for one statement render.

    Every name consumes exactly one counter value, so names are never
    reused or skipped within a render.
    """

    def __init__(self, prefix: str = '', positional: bool = False,
                 dialect: Dialect | str = Dialect.POSTGRESQL) -> None:
        self.prefix = prefix
        self.positional = positional
        self.dialect = get_dialect(dialect)
        self.counter = 0

    def _bind_name(self, hint: str) -> str:
        self.counter += 1
        if self.positional:
            return f'${self.counter}'
        return f'{self.prefix}{hint}{self.counter}'

    def placeholder(self, bind_name: str) -> str:
        """Placeholder text for a bind name produced by this namer.
        """
        if not self.positional:
            return ':' + bind_name
        if self.dialect == Dialect.POSTGRESQL:
            return bind_name
        return '?'

    def next_name(self, hint: str) -> tuple[str, str]:
        """Return (bind_name, placeholder) for the next parameter.
        """
        bind_name = self._bind_name(hint)
        return bind_name, self.placeholder(bind_name)

    def next_names(self, hint: str, count: int) -> list[tuple[str, str]]:
        """Return `count` consecutive (bind_name, placeholder) pairs.
        """
        if count < 1:
            return []
        return [self.next_name(hint) for _ in range(count)]


def in_placeholders(placeholders: list[str]) -> str:
    """Render placeholders as a parenthesized IN list: `(:a1,:a2)`.
    """
    return '(' + ','.join(placeholders) + ')'


def positional_binds(binds: dict[str, Any]) -> list[Any]:
    """Rebuild the ordered value list from `$n`-keyed binds.

    Looks up `$1` through `$N` where N is the number of binds; keys that
    were never generated are skipped.
    """
    result = []
    for i in range(1, len(binds) + 1):
        key = f'${i}'
        if key in binds:
            result.append(binds[key])
    return result
