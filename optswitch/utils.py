"""
small helpers for the parser module.
"""
from typing import final


@final
class UnsetType:
    """falsy marker for keyword options the caller left out (None is a real value)."""

    __slots__ = ()

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


Unset = UnsetType()


def nullify(value, default=None, /):
    return default if value is Unset else value


def rename(name, /):
    """
    decorator giving a generated wrapper a readable __name__ and __qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("callable name must be a string")

    def apply(function):
        function.__name__ = function.__qualname__ = name
        return function

    return apply


__all__ = ("UnsetType", "Unset", "nullify", "rename")
