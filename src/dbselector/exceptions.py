"""
Selector-specific exception classes.
"""


class SelectorError(Exception):
    """Base class for all selector module errors.
    """


class MappingError(SelectorError):
    """Error reflecting a row value into columns for INSERT.

    Raised when the value is not record-like, a declared field cannot be
    read, or a column annotation is malformed.
    """


class GrammarError(SelectorError):
    """Error in the clause grammar of a strict selector.

    Covers unbalanced or empty brackets and misplaced WHERE/AND/OR
    connectors.
    """
