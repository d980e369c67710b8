"""
Exceptions raised while setting up a stack iterator.

Each class also derives from the builtin exception a caller would expect for
the same mistake, so `except TypeError` and friends keep working.
"""


class StackError(Exception):
    pass


class InvalidArgumentError(StackError, TypeError):
    """
    An argument is not of the kind the iterator can work with.
    """


class InvalidOptionError(InvalidArgumentError):
    """
    A recognized option holds a value of the wrong type.
    """


class DimensionRangeError(StackError, IndexError, ValueError):
    """
    A dimension index does not address any dimension of the array.
    """


class DimensionOrderError(StackError, ValueError):
    pass


class DimensionUniquenessError(StackError, ValueError):
    pass


class ReadOnlyError(StackError, PermissionError, ValueError):
    """
    Writable views were requested over an array that is itself read-only.
    """
