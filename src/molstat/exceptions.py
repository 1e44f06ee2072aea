"""Exceptions raised by molstat."""


class MolstatError(Exception):
    """Base exception for all molstat errors."""
    pass


class SchemaError(MolstatError):
    """Raised when a molecule table has missing, extra or malformed columns."""
    pass


class EmptyInputError(MolstatError):
    """Raised when a statistic is requested over zero records."""
    pass


class ZeroTotalError(MolstatError, ZeroDivisionError):
    """Raised when the total weight of a statistic is zero."""
    pass


class OutputFormatError(MolstatError):
    """Raised when a figure cannot be saved in the requested format."""
    pass
