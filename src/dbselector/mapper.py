"""
Row value to column mapping for INSERT statements.

A row value describes its fields in declaration order. Each field maps to a
column named after the field itself, unless it carries a column override:

    @dataclass
    class Post:
        Id: int = 0
        Title: str = ''                       # column 'Title'
        AuthorId: int = column('author_id')   # column 'author_id'
        Cache: dict = column('-')             # excluded

Names are used verbatim; no case transformation is applied.

Supported row shapes:
- dataclass instances (override in field metadata under `db`)
- objects implementing `__db_fields__()` returning `FieldSpec` items
- named tuples, e.g. rows from `DataFrame.itertuples()`
- mappings with string keys
"""
import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dbselector.exceptions import MappingError

logger = logging.getLogger(__name__)

DB_TAG = 'db'
EXCLUDE = '-'


@dataclass(slots=True, frozen=True)
class FieldSpec:
    """Declared field of a row value and its optional column override."""
    name: str
    column: Any = None


@dataclass(slots=True, frozen=True)
class ColumnMapping:
    """Resolved column name and the position of its field in the row."""
    column: str
    index: int


def column(name: str, **kw: Any) -> Any:
    """Declare a dataclass field mapped to column `name` ('-' excludes it).
    """
    metadata = dict(kw.pop('metadata', None) or {})
    metadata[DB_TAG] = name
    return dataclasses.field(metadata=metadata, **kw)


def _is_namedtuple(row: Any) -> bool:
    return isinstance(row, tuple) and hasattr(row, '_fields')


def is_record(row: Any) -> bool:
    """Check if a value is a single row in one of the supported shapes.
    """
    return (hasattr(type(row), '__db_fields__')
            or (dataclasses.is_dataclass(row) and not isinstance(row, type))
            or _is_namedtuple(row)
            or isinstance(row, Mapping))


def describe_fields(row: Any) -> list[FieldSpec]:
    """List the declared fields of a row value in declaration order.

    Raises
        MappingError: If the value is not record-like
    """
    if hasattr(type(row), '__db_fields__'):
        return list(row.__db_fields__())
    if dataclasses.is_dataclass(row) and not isinstance(row, type):
        return [FieldSpec(f.name, f.metadata.get(DB_TAG))
                for f in dataclasses.fields(row)]
    if _is_namedtuple(row):
        return [FieldSpec(name) for name in row._fields]
    if isinstance(row, Mapping):
        keys = list(row)
        bad = [k for k in keys if not isinstance(k, str)]
        if bad:
            raise MappingError(f'Mapping keys must be strings, got {bad[0]!r}')
        return [FieldSpec(k) for k in keys]
    raise MappingError(f'Cannot map {type(row).__name__} value: not a record-like shape')


def _resolve_column(spec: FieldSpec) -> str:
    if spec.column is None:
        return spec.name
    if not isinstance(spec.column, str) or not spec.column:
        raise MappingError(f'Malformed column annotation on field {spec.name!r}: {spec.column!r}')
    return spec.column


def map_columns(row: Any) -> list[ColumnMapping]:
    """Map a row value to ordered (column, field index) pairs.

    Fields annotated with '-' are skipped; indexes keep counting them so
    they still address the declared field position.
    """
    mappings = []
    for index, spec in enumerate(describe_fields(row)):
        name = _resolve_column(spec)
        if name == EXCLUDE:
            continue
        mappings.append(ColumnMapping(name, index))
    return mappings


def _read_field(row: Any, spec: FieldSpec, index: int) -> Any:
    if _is_namedtuple(row):
        return row[index]
    if isinstance(row, Mapping):
        return row[spec.name]
    return getattr(row, spec.name)


def read_values(row: Any, mappings: list[ColumnMapping]) -> list[Any]:
    """Read the values addressed by `mappings` from a row value.

    Raises
        MappingError: If a field cannot be read
    """
    specs = describe_fields(row)
    values = []
    for mapping in mappings:
        try:
            spec = specs[mapping.index]
            values.append(_read_field(row, spec, mapping.index))
        except (AttributeError, KeyError, IndexError) as err:
            raise MappingError(
                f'Cannot read field #{mapping.index} ({mapping.column}) '
                f'from {type(row).__name__}: {err}') from err
    return values


def insert_columns(mappings: list[ColumnMapping]) -> list[ColumnMapping]:
    """Drop primary key columns, i.e. any column named 'id' in any case.
    """
    kept = [m for m in mappings if m.column.lower() != 'id']
    if len(kept) != len(mappings):
        logger.debug(f'Skipped {len(mappings) - len(kept)} id column(s) for INSERT')
    return kept
