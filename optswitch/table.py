"""
The ordered collection of registered switches.

Invariants
- at most one switch owns a given short name;
- at most one switch owns a given long name;
- insertion order is kept (help display, candidate listing).

A newly registered switch evicts the switch sharing its short name and the one
sharing its long name; those may be two different switches.
"""
from .faults import InvalidOptionError, AmbiguousOptionError
from .switches import Separator
from .tokens import SwitchMatch


class SwitchTable:

    def __init__(self):
        self._switches = []

    def _index(self, predicate):
        for index, switch in enumerate(self._switches):
            if predicate(switch):
                return index
        return None

    def register(self, switch, /):
        """
        append `switch`, first removing any switch that shares its short name
        and any switch that shares its long name.
        """
        if not isinstance(switch, Separator):
            if switch.names.short:
                index = self._index(lambda x: x.names.short == switch.names.short)
                if index is not None:
                    del self._switches[index]
            if switch.names.long:
                index = self._index(lambda x: x.names.long == switch.names.long)
                if index is not None:
                    del self._switches[index]
        self._switches.append(switch)
        return switch

    def find_by_short(self, name, display, /):
        """
        return the switch owning short name `name` (exact match only).
        """
        if name:
            for switch in self._switches:
                if not isinstance(switch, Separator) and switch.names.short == name:
                    return switch
        raise InvalidOptionError(display)

    def find_by_long(self, name, joined, display, /):
        """
        resolve a full or abbreviated long name into a SwitchMatch carrying `joined`.

        `display` is the raw token, used for fault messages.
        """
        candidates = [switch for switch in self._switches if switch.partial_match(name)]
        if not candidates:
            raise InvalidOptionError(display)
        if len(candidates) > 1:
            exact = [switch for switch in candidates if switch.exact_match(name)]
            if len(exact) != 1:
                raise AmbiguousOptionError(display, "    (%s)" % ", ".join(
                    ("--no-" if switch.negated_match(name) else "--") + switch.names.long
                    for switch in candidates
                ))
            candidates = exact
        switch, = candidates
        return SwitchMatch(switch, True, joined, switch.negated_match(name))

    def has_short(self, name, /):
        return bool(name) and any(switch.names.short == name for switch in self._switches if not isinstance(switch, Separator))

    def has_long(self, name, /):
        return bool(name) and any(switch.names.long == name for switch in self._switches if not isinstance(switch, Separator))

    @property
    def entries(self):
        return [switch.entry for switch in self._switches]

    def __iter__(self):
        return iter(self._switches)

    def __len__(self):
        return len(self._switches)

    def __contains__(self, switch):
        return switch in self._switches


__all__ = ("SwitchTable",)
