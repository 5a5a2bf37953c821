"""
Fixed sets of accepted values for a switch argument.

A ValueDomain keeps an ordered list of (display name, value) pairs and resolves
user input by unique prefix:

    >>> domain = ValueDomain(["binary", "ascii", "auto"])
    >>> domain.lookup("as")
    'ascii'
    >>> domain.lookup("a")   # raises AmbiguousValue("ascii, auto")
"""
from collections.abc import Mapping, Iterable

from .faults import InvalidValue, AmbiguousValue


class ValueDomain[_T]:
    """
    ordered (display name, value) pairs with unique-prefix lookup.

    built from
    - a Mapping: keys are the display names, values are what lookup() returns.
    - any other Iterable: each item is its own value, displayed as str(item).
    """

    def __init__(self, values, /):
        if isinstance(values, Mapping):
            entries = [(str(name), value) for name, value in values.items()]
        elif isinstance(values, Iterable) and not isinstance(values, str):
            entries = [(str(value), value) for value in values]
        else:
            raise TypeError("value domain must be built from a mapping or an iterable of values")
        if not entries:
            raise ValueError("value domain cannot be empty")
        self._entries = tuple(entries)

    @property
    def names(self):
        return tuple(name for name, _ in self._entries)

    def lookup(self, input, /):
        """
        resolve `input` to a single value.

        - no name starts with input        → InvalidValue listing every name
        - exactly one name starts with it  → that value
        - several, one of them equal       → the exact match
        - several, none equal              → AmbiguousValue listing the candidates
        """
        candidates = [(name, value) for name, value in self._entries if name.startswith(input)]
        if not candidates:
            raise InvalidValue(", ".join(self.names))
        if len(candidates) == 1:
            return candidates[0][1]
        for name, value in candidates:
            if name == input:
                return value
        raise AmbiguousValue(", ".join(name for name, _ in candidates))

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "value-domain(%s)" % ", ".join(map(repr, self.names))


__all__ = ("ValueDomain",)
