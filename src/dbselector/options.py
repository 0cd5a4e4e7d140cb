from dataclasses import dataclass

from dbselector.sql import Dialect, get_dialect

from libb import ConfigOptions

__all__ = [
    'SelectorOptions',
]


@dataclass
class SelectorOptions(ConfigOptions):
    """Options

    supported dialects: `postgresql`, `mysql`, `sqlite`

    - dialect: Positional placeholder spelling, `$n` for postgresql and
      `?` otherwise (default: postgresql)
    - parameter_prefix: Prefix applied to every named bind (default: '')
    - strict: Reject malformed clause grammar with GrammarError instead of
      rendering it verbatim (default: False)
    """
    dialect: str = 'postgresql'
    parameter_prefix: str = ''
    strict: bool = False

    def __post_init__(self):
        self.dialect = get_dialect(self.dialect).value
        self.parameter_prefix = self.parameter_prefix or ''

    @property
    def dialect_enum(self) -> Dialect:
        return Dialect(self.dialect)
