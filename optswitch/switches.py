r"""
Switch definitions.

Name specifications (validated when a switch is defined)
- short: "-x" or "-x ARG"; x is exactly one non-space character and ARG is
  free text shown in help only.
- long:  "--name", "--name ARG", "--name=ARG" or "--name[=ARG]"; the name may
  not contain whitespace, '=' or '['. The "--no-" prefix is reserved for the
  negated form of boolean switches.
- at least one of the two must be non-blank.
When both specs carry an ARG, the long one wins in the help display.

Switch family
- Separator               display only, never matches
- NoArgSwitch             callback(config)
- BoolSwitch              callback(value, config); --no-<name> passes False
- ArgSwitch               callback(value, config), argument required
- OptArgSwitch            callback(value | None, config)
- ArgSwitchWithValues     as ArgSwitch, value resolved through a ValueDomain
- OptArgSwitchWithValues  as OptArgSwitch, value resolved through a ValueDomain
- ListArgSwitch           callback(list, config), argument split on ','

Every switch exposes process(argument, negated, config, display) which returns
the updated configuration value.
"""
import re
from typing import NamedTuple

from .faults import *
from .help import HelpEntry

_SHORT_SPEC = re.compile(r"-(\S)(?:\s+(.+))?", re.DOTALL)
_LONG_SPEC = re.compile(r"--([^\s=\[]+)(?:(\[=|=|\s+)(\S.*))?", re.DOTALL)
_LONG_NEGATED = re.compile(r"--no-.*", re.DOTALL)


class Names(NamedTuple):
    short: str
    long: str
    display: str

    @property
    def negated(self):
        return "no-" + self.long if self.long else ""

    def __str__(self):
        return self.display


def parse_names(short, long, /, negatable=False):
    """
    validate a (short, long) name specification pair and build its Names.

    raises SwitchDefinitionError on malformed or blank specifications.
    """
    name = arg = ""
    if short := short.strip():
        if not (match := _SHORT_SPEC.fullmatch(short)):
            raise SwitchDefinitionError(
                "Invalid short name specification: " + short,
                code=FaultCode.MALFORMED_SHORT_NAME,
            )
        name, arg = match[1], match[2] or ""

    lname = delimiter = ""
    if long := long.strip():
        if _LONG_NEGATED.fullmatch(long):
            raise SwitchDefinitionError(
                "Invalid long name specification: %s  (the prefix '--no-' is reserved for boolean switches)" % long,
                code=FaultCode.RESERVED_PREFIX,
            )
        if not (match := _LONG_SPEC.fullmatch(long)):
            raise SwitchDefinitionError(
                "Invalid long name specification: " + long,
                code=FaultCode.MALFORMED_LONG_NAME,
            )
        lname = match[1]
        if match[3]:
            delimiter = match[2] if match[2] in ("=", "[=") else " "
            arg = match[3]

    if not name and not lname:
        raise SwitchDefinitionError(
            "Both long and short name specifications cannot be blank",
            code=FaultCode.BLANK_NAMES,
        )

    ldisplay = "[no-]" + lname if negatable else lname
    delimiter = delimiter or " "
    match name, lname, arg:
        case _, "", "":
            display = "-%s" % name
        case "", _, "":
            display = "    --%s" % ldisplay
        case _, "", _:
            display = "-%s %s" % (name, arg)
        case _, _, "":
            display = "-%s, --%s" % (name, ldisplay)
        case "", _, _:
            display = "    --%s%s%s" % (ldisplay, delimiter, arg)
        case _:
            display = "-%s, --%s%s%s" % (name, ldisplay, delimiter, arg)
    return Names(name, lname, display)


def _detail(exception):
    return "    (%s)" % exception if str(exception) else ""


def convert(converter, text, display, /):
    """
    run `converter` over `text`, mapping value failures to parse faults.
    """
    try:
        return converter(text)
    except AmbiguousValue as exception:
        raise AmbiguousArgumentError(display, _detail(exception)) from None
    except ValueError as exception:
        raise InvalidArgumentError(display, _detail(exception)) from None


class Switch:
    """
    base of every switch; matching is done on the long name only, short names
    are looked up exactly by the switch table.
    """
    takes_arg = False
    requires_arg = False
    negatable = False

    def __init__(self, names, info=(), callback=None, /):
        self.names = names
        self.info = tuple(info)
        self._callback = callback

    def exact_match(self, name, /):
        return bool(self.names.long) and name == self.names.long

    def partial_match(self, name, /):
        return bool(self.names.long) and self.names.long.startswith(name)

    def negated_match(self, name, /):
        return False

    def process(self, argument, negated, config, display, /):
        raise NotImplementedError

    @property
    def entry(self):
        return HelpEntry(self.names.display, self.info)

    def __repr__(self):
        return "%s(names=%r)" % (re.sub(r"(?<!^)(?=[A-Z])", r"-", type(self).__name__).lower(), self.names.display.strip())


class Separator(Switch):

    def __init__(self, text, /):
        super().__init__(Names("", "", ""))
        self.text = text

    def process(self, argument, negated, config, display, /):
        return config

    @property
    def entry(self):
        return HelpEntry(self.text, verbatim=True)

    def __repr__(self):
        return "separator(text=%r)" % self.text


class NoArgSwitch(Switch):

    def process(self, argument, negated, config, display, /):
        return self._callback(config)


class BoolSwitch(Switch):
    negatable = True

    def exact_match(self, name, /):
        return bool(self.names.long) and name in (self.names.long, self.names.negated)

    def partial_match(self, name, /):
        return bool(self.names.long) and (self.names.long.startswith(name) or self.names.negated.startswith(name))

    def negated_match(self, name, /):
        # A prefix of both forms resolves to the positive one.
        if not self.names.long:
            return False
        if name == self.names.negated:
            return True
        return self.names.negated.startswith(name) and not self.names.long.startswith(name)

    def process(self, argument, negated, config, display, /):
        return self._callback(not negated, config)


class ArgSwitch(Switch):
    takes_arg = True
    requires_arg = True

    def __init__(self, names, info, converter, callback, /):
        super().__init__(names, info, callback)
        self._converter = converter

    def process(self, argument, negated, config, display, /):
        if argument is None:
            raise RuntimeError("internal error: no argument for %r" % self)
        return self._callback(convert(self._converter, argument, display), config)


class OptArgSwitch(ArgSwitch):
    requires_arg = False

    def process(self, argument, negated, config, display, /):
        if argument is None:
            return self._callback(None, config)
        return self._callback(convert(self._converter, argument, display), config)


class ArgSwitchWithValues(ArgSwitch):

    def __init__(self, names, info, domain, callback, /):
        super().__init__(names, info, domain.lookup, callback)
        self.domain = domain


class OptArgSwitchWithValues(OptArgSwitch):

    def __init__(self, names, info, domain, callback, /):
        super().__init__(names, info, domain.lookup, callback)
        self.domain = domain


class ListArgSwitch(ArgSwitch):

    def process(self, argument, negated, config, display, /):
        if argument is None:
            raise RuntimeError("internal error: no argument for %r" % self)
        values = [convert(self._converter, item, display) for item in argument.split(",")]
        return self._callback(values, config)


__all__ = (
    "Names",
    "parse_names",
    "convert",
    "Switch",
    "Separator",
    "NoArgSwitch",
    "BoolSwitch",
    "ArgSwitch",
    "OptArgSwitch",
    "ArgSwitchWithValues",
    "OptArgSwitchWithValues",
    "ListArgSwitch",
)
