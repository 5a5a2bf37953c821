"""
optswitch faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
- OptionParserException: base type carrying message + options; knows how to render
  itself with rich and how to surface itself (raise, or print and exit in shell mode).
- ParseFault family: parse-time faults, each carrying the exact offending token
  text (`display`) and an optional parenthetical `detail`.
- SwitchDefinitionError: registration-time faults (bad name specifications).
- InvalidValue / AmbiguousValue: raised by converters and value domains; the parser
  wraps them into InvalidArgumentError / AmbiguousArgumentError.
- ConverterNotFoundError: internal lookup failure, not a parse fault.
- trigger(): central entry point to surface a fault with runtime options.

Message shape
- "<kind>: <display><detail>", e.g.
    invalid option: --expret
    invalid argument: -c abc    (single character expected)
    ambiguous option: --te    (--test, --text)
  The kind prefixes are stable so callers can match on them.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - switch resolution (1111x): INVALID_OPTION, NEEDLESS_ARGUMENT, AMBIGUOUS_OPTION
    - switch arguments (1112x): ARGUMENT_MISSING, INVALID_ARGUMENT, AMBIGUOUS_ARGUMENT
    - definitions (115xx): BLANK_NAMES, MALFORMED_SHORT_NAME, MALFORMED_LONG_NAME,
      RESERVED_PREFIX

    normalize() allows host remapping to custom labels while keeping codes stable.
    """
    # --- switch resolution (111xx) ---
    INVALID_OPTION       = 11112
    NEEDLESS_ARGUMENT    = 11113
    AMBIGUOUS_OPTION     = 11115

    # --- switch arguments (112xx) ---
    ARGUMENT_MISSING     = 11121
    INVALID_ARGUMENT     = 11124
    AMBIGUOUS_ARGUMENT   = 11126

    # --- definitions (115xx) ---
    BLANK_NAMES          = 11501
    MALFORMED_SHORT_NAME = 11502
    MALFORMED_LONG_NAME  = 11503
    RESERVED_PREFIX      = 11504

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _progname(options):
    main = __import__("__main__")
    if hasattr(main, "__prog__"):
        return main.__prog__
    if prog := options.get("prog"):
        return prog
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "optswitch"


class OptionParserException(Exception):
    """
    base of every fault raised by optswitch.

    class-level defaults (__fault__, __title__, __hint__) can be overridden per
    instance through the `code`, `title` and `hint` options.
    """
    __fault__ = None
    __title__ = "option parser error"
    __hint__ = ""

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", type(self).__fault__)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def hint(self):
        return self.options.get("hint", type(self).__hint__)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        header = Text.assemble(
            "[ ",
            text(_progname(self.options), styler("prog-name")),
            " — ",
            text(self.code.normalize() if self.code is not None else "-", styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        parts = [message]
        if self.hint:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        self.options.get("exit", sys.exit)(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseFault(OptionParserException):
    """
    a fault raised while walking the token list.

    - display: the offending token text, extended by the plucked value when one
      was taken from the following token (e.g. "-n curt").
    - detail: optional suffix, usually "    (reason)".
    """
    __prefix__ = "parse error"

    def __init__(self, display, detail="", /, **options):
        super().__init__("%s: %s%s" % (type(self).__prefix__, display, detail), **options)
        self.display = display
        self.detail = detail

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.display, self.detail, **{**self.options, **overrides})


class ArgumentMissingError(ParseFault):
    __prefix__ = "argument missing"
    __fault__ = FaultCode.ARGUMENT_MISSING
    __title__ = "argument missing"
    __hint__ = "pass a value after the switch, or join it (-nVALUE, --name=VALUE)"


class InvalidArgumentError(ParseFault):
    __prefix__ = "invalid argument"
    __fault__ = FaultCode.INVALID_ARGUMENT
    __title__ = "invalid argument"
    __hint__ = "check the value given to the switch"


class AmbiguousArgumentError(ParseFault):
    __prefix__ = "ambiguous argument"
    __fault__ = FaultCode.AMBIGUOUS_ARGUMENT
    __title__ = "ambiguous argument"
    __hint__ = "type more of the value so that it matches only one choice"


class NeedlessArgumentError(ParseFault):
    __prefix__ = "needless argument"
    __fault__ = FaultCode.NEEDLESS_ARGUMENT
    __title__ = "needless argument"
    __hint__ = "remove everything from '='"


class InvalidOptionError(ParseFault):
    __prefix__ = "invalid option"
    __fault__ = FaultCode.INVALID_OPTION
    __title__ = "invalid option"
    __hint__ = "run with --help to see the available options"


class AmbiguousOptionError(ParseFault):
    __prefix__ = "ambiguous option"
    __fault__ = FaultCode.AMBIGUOUS_OPTION
    __title__ = "ambiguous option"
    __hint__ = "type more of the option name so that it matches only one option"


class SwitchDefinitionError(OptionParserException):
    """
    raised at registration time when a switch cannot be defined.
    """
    __title__ = "invalid switch definition"


class InvalidValue(ValueError):
    """
    raised by converters and value domains when a value is not acceptable.

    the message (possibly empty) becomes the detail of an InvalidArgumentError.
    """


class AmbiguousValue(ValueError):
    """
    raised by value domains when a value prefix matches several choices.
    """


class ConverterNotFoundError(LookupError):
    """
    raised when no converter is registered for a value type.

    this is a programming error in the host application, not a parse fault.
    """


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see OptionParserException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - outside shell mode the fault is raised; in shell mode it is printed with rich
      and the exit callable (sys.exit by default) receives status 1.

    typical options
    - shell, fancy, colorful, console, exit, prog.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "OptionParserException",
    "ParseFault",
    "ArgumentMissingError",
    "InvalidArgumentError",
    "AmbiguousArgumentError",
    "NeedlessArgumentError",
    "InvalidOptionError",
    "AmbiguousOptionError",
    "SwitchDefinitionError",
    "InvalidValue",
    "AmbiguousValue",
    "ConverterNotFoundError",
    "trigger",
)
