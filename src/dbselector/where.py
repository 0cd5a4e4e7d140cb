"""
WHERE fragment rendering.

Single left-to-right scan over the clause list with one piece of state, the
pending open-bracket buffer:

    open bracket   -> buffer += ' ('
    close bracket  -> emit ') '
    predicate      -> emit ' {CONNECTOR}{buffer} {field} {op} {placeholder}'
    IN             -> emit ' {CONNECTOR}{buffer} {field} IN (p1,p2,...)'
    true           -> emit ' {CONNECTOR}{buffer} true'

The connector keyword is emitted as tagged on the clause. Field names and
operators are injected verbatim; only values are bound.
"""
from collections.abc import Iterable
from typing import Any

from dbselector.clauses import Clause, ClauseKind, Connector
from dbselector.exceptions import GrammarError
from dbselector.params import ParameterNamer, in_placeholders


def render_where(clauses: Iterable[Clause], namer: ParameterNamer) -> tuple[str, dict[str, Any]]:
    """Render clauses into a WHERE fragment and its binds.

    Parameters
        clauses: Clauses in insertion order
        namer: Parameter namer for the current render

    Returns
        Tuple of fragment (leading space, '' when empty) and bind mapping
    """
    binds: dict[str, Any] = {}
    parts: list[str] = []
    open_brackets = ''

    for clause in clauses:
        match clause.kind:
            case ClauseKind.OPEN_BRACKET:
                open_brackets += ' ('
                continue
            case ClauseKind.CLOSE_BRACKET:
                parts.append(') ')
                continue
            case ClauseKind.PREDICATE:
                bind_name, ph = namer.next_name(clause.field)
                binds[bind_name] = clause.value
                body = f'{clause.field} {clause.operator} {ph}'
            case ClauseKind.IN:
                names = namer.next_names(clause.field, len(clause.values))
                for (bind_name, _), value in zip(names, clause.values):
                    binds[bind_name] = value
                body = f'{clause.field} IN {in_placeholders([ph for _, ph in names])}'
            case ClauseKind.TRUE:
                body = 'true'
        parts.append(f' {clause.connector.value}{open_brackets} {body}')
        open_brackets = ''

    return ''.join(parts), binds


def where_fragment(sql: str) -> str:
    """Strip the leading ' WHERE ' from a rendered fragment.
    """
    if len(sql) > 6:
        return sql[6:].lstrip()
    return ''


def check_grammar(clauses: Iterable[Clause]) -> None:
    """Validate connector placement and bracket balance.

    Raises
        GrammarError: If the first predicate is not WHERE, a later predicate
            is WHERE, a bracket is unmatched, or a bracket pair is empty
    """
    depth = 0
    seen_predicate = False
    previous = None

    for position, clause in enumerate(clauses):
        if clause.kind == ClauseKind.OPEN_BRACKET:
            depth += 1
        elif clause.kind == ClauseKind.CLOSE_BRACKET:
            if depth == 0:
                raise GrammarError(f'Unmatched close bracket at clause {position}')
            if previous is not None and previous.kind == ClauseKind.OPEN_BRACKET:
                raise GrammarError(f'Empty brackets at clause {position}')
            depth -= 1
        else:
            if not seen_predicate and clause.connector != Connector.WHERE:
                raise GrammarError(
                    f'First condition must use WHERE, got {clause.connector.value} '
                    f'at clause {position}')
            if seen_predicate and clause.connector == Connector.WHERE:
                raise GrammarError(f'Repeated WHERE at clause {position}')
            seen_predicate = True
        previous = clause

    if depth:
        raise GrammarError(f'{depth} unclosed bracket(s)')
