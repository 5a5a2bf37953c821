r"""
optswitch parser: register switches, then fold a token list into a configuration value.

What this module provides
- OptionParser: the registration API (flag, bool, reqd, optl, list, args, arg,
  separator), the tokenizer/dispatcher (parse, parse_known) and the help surface (help,
  print_help, auto-help).
- ArgsCollector: converts the collected positional arguments and hands them to
  the registered positional handler.

Core ideas
- The configuration value belongs to the caller. Every matched switch calls
  its callback with the current value and continues with whatever the callback
  returns; the parser never looks inside it.
- Converters are resolved when a switch is defined, so an unknown value type
  fails at registration (ConverterNotFoundError), not while parsing.
- Faults abort the whole parse call. Outside shell mode they are raised; in
  shell mode they are printed with rich and the exit callable receives 1.

Quick start
    from dataclasses import dataclass, replace
    from optswitch import OptionParser

    @dataclass(frozen=True)
    class Config:
        verbose: bool = False
        level: int = 0
        files: tuple = ()

    cli = OptionParser("usage: tool [options] FILE...")

    @cli.bool("-v", "--verbose", "Print more output")
    def on_verbose(value, config):
        return replace(config, verbose=value)

    @cli.reqd("-l", "--level LEVEL", "Set the level", type=int)
    def on_level(level, config):
        return replace(config, level=level)

    @cli.args()
    def on_files(files, config):
        return replace(config, files=tuple(files))

    config = cli.parse(["-vl3", "--no-verb", "a.txt"], Config())

Token grammar (first match wins)
- "--"             stop; everything after it is positional
- "-"              positional (stdin marker)
- "--name=value"   long switch with a joined value (may be empty)
- "--name"         long switch, possibly abbreviated
- "-c" / "-cREST"  short switch; REST is its argument or more clustered switches
- anything else    positional
"""
import builtins
import re
import sys
from typing import NamedTuple

from rich.console import Console

from .converters import ValueConverterRegistry
from .domains import ValueDomain
from .faults import *
from .help import HelpFormatter
from .switches import *
from .table import SwitchTable
from .tokens import *
from .utils import *

_LONG_WITH_ARG = re.compile(r"--([^=]+)=(.*)", re.DOTALL)
_LONG = re.compile(r"--(.+)", re.DOTALL)
_SHORT = re.compile(r"-(.)(.+)?", re.DOTALL)


def _as_domain(values):
    # A prebuilt domain is shared as is, so one domain can back several switches.
    return values if isinstance(values, ValueDomain) else ValueDomain(values)


class ArgsCollector:
    """
    converts positional arguments and passes them to a handler.

    - each=False: callback(values, config) once with the full ordered list.
    - each=True:  callback(value, config) once per positional, in order.
    """

    def __init__(self, converter, callback, /, each=False):
        self._converter = converter
        self._callback = callback
        self.each = each

    def process(self, args, config, /):
        values = [convert(self._converter, arg, arg) for arg in args]
        if not self.each:
            return self._callback(values, config)
        for value in values:
            config = self._callback(value, config)
        return config


class _Step(NamedTuple):
    token: Terminate | PositionalArg | SwitchMatch
    display: str


class OptionParser:
    """
    declarative switch table plus the parse loop that drives it.

    Parameters
    - banner: str
      Text shown above the switch list in help.
    - auto_help: bool
      Register "-h, --help" before parsing/rendering unless a switch already
      owns short name "h" or long name "help".
    - shell: bool
      Render parse faults with rich and call exit(1) instead of raising.
    - colorful / fancy: bool
      Styling of rich output (help and faults).
    - console: rich Console used for help and, when given, for faults.
    - exit: callable receiving the exit status (sys.exit by default).
    - prog: program name used in fault headers.
    """

    def __init__(
            self,
            banner="",
            /,
            *,
            auto_help=True,
            shell=False,
            colorful=True,
            fancy=False,
            console=Unset,
            exit=Unset,
            prog=Unset,
    ):
        if not isinstance(banner, str):
            raise TypeError("banner must be a string")
        self.banner = banner
        self.auto_help = auto_help
        self.shell = shell
        self.colorful = colorful
        self.fancy = fancy
        self.prog = prog
        self.switches = SwitchTable()
        self.converters = ValueConverterRegistry.defaults()
        self.formatter = HelpFormatter()
        self._console = console
        self._exit = nullify(exit, sys.exit)
        self._collector = None

    @property
    def console(self):
        if self._console is Unset:
            self._console = Console()
        return self._console

    # --- registration ---

    def add_converter(self, key, function, /):
        """
        register (or replace) the converter used for switches declared with type=key.
        """
        return self.converters.register(key, function)

    def _registrar(self, name, factory):
        @rename(name)
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@%s() must be applied to a callable" % name)
            return self.switches.register(factory(callback))
        return wrapper

    def separator(self, text, /):
        return self.switches.register(Separator(text))

    def flag(self, short, long, /, *info):
        """
        switch without argument: callback(config) -> config.
        """
        names = parse_names(short, long)
        return self._registrar("flag", lambda callback: NoArgSwitch(names, info, callback))

    def bool(self, short, long, /, *info):
        """
        boolean switch: callback(value, config) -> config.

        "--name" passes True, "--no-name" passes False; the short name passes True.
        """
        names = parse_names(short, long, negatable=True)
        return self._registrar("bool", lambda callback: BoolSwitch(names, info, callback))

    def reqd(self, short, long, /, *info, type=str, values=Unset):
        """
        switch with a required argument: callback(value, config) -> config.

        values: a sequence or mapping restricting the argument to a fixed set,
        matched by unique prefix; it replaces the converter for `type`.
        """
        names = parse_names(short, long)
        if values is not Unset:
            domain = _as_domain(values)
            return self._registrar("reqd", lambda callback: ArgSwitchWithValues(names, info, domain, callback))
        converter = self.converters.resolve(type)
        return self._registrar("reqd", lambda callback: ArgSwitch(names, info, converter, callback))

    def optl(self, short, long, /, *info, type=str, values=Unset):
        """
        switch with an optional argument: callback(value | None, config) -> config.

        A separated argument is only taken when it does not look like a switch.
        """
        names = parse_names(short, long)
        if values is not Unset:
            domain = _as_domain(values)
            return self._registrar("optl", lambda callback: OptArgSwitchWithValues(names, info, domain, callback))
        converter = self.converters.resolve(type)
        return self._registrar("optl", lambda callback: OptArgSwitch(names, info, converter, callback))

    def list(self, short, long, /, *info, type=str):
        """
        switch with a required comma separated argument: callback(values, config) -> config.
        """
        names = parse_names(short, long)
        converter = self.converters.resolve(type)
        return self._registrar("list", lambda callback: ListArgSwitch(names, info, converter, callback))

    def args(self, type=str):
        """
        positional handler called once with every positional: callback(values, config).
        """
        return self._collect("args", type, each=False)

    def arg(self, type=str):
        """
        positional handler called once per positional: callback(value, config).
        """
        return self._collect("arg", type, each=True)

    def _collect(self, name, type, /, each):
        converter = self.converters.resolve(type)

        @rename(name)
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@%s() must be applied to a callable" % name)
            self._collector = ArgsCollector(converter, callback, each=each)
            return callback

        return wrapper

    # --- help ---

    def _add_auto_help(self):
        if not self.auto_help or self.switches.has_short("h") or self.switches.has_long("help"):
            return

        @self.flag("-h", "--help", "Show this message")
        def show_help(config):
            self.print_help()
            self._exit(0)
            return config

    @property
    def help(self):
        self._add_auto_help()
        return self.formatter.render(self.banner, self.switches.entries)

    def print_help(self):
        self._add_auto_help()
        self.console.print(
            self.formatter.renderable(self.banner, self.switches.entries, colorful=self.colorful),
            soft_wrap=True,
            highlight=False,
        )

    def __str__(self):
        return self.help

    def __rich__(self):
        self._add_auto_help()
        return self.formatter.renderable(self.banner, self.switches.entries, colorful=self.colorful)

    # --- parsing ---

    def trigger(self, fault, /):
        options = {
            "shell": self.shell,
            "fancy": self.fancy,
            "colorful": self.colorful,
            "exit": self._exit,
        }
        if self._console is not Unset:
            options["console"] = self._console
        if self.prog is not Unset:
            options["prog"] = self.prog
        trigger(fault, **options)

    def _next_token(self, buffer):
        """
        consume one token (or a cluster head) from the buffer and classify it.
        """
        if not buffer:
            return _Step(Terminate(), "")
        display = token = buffer.pop_front()
        if token == "--":
            return _Step(Terminate(), display)
        if token == "-":
            return _Step(PositionalArg(token), display)
        if match := _LONG_WITH_ARG.fullmatch(token):
            return _Step(self.switches.find_by_long(match[1], match[2], display), display)
        if match := _LONG.fullmatch(token):
            return _Step(self.switches.find_by_long(match[1], None, display), display)
        if match := _SHORT.fullmatch(token):
            switch = self.switches.find_by_short(match[1], display)
            return _Step(SwitchMatch(switch, False, match[2], False), display)
        return _Step(PositionalArg(token), display)

    def _attach(self, match, buffer, display):
        """
        decide the argument handed to a matched switch; returns (argument, display).
        """
        if match.joined is not None:
            if match.switch.takes_arg:
                return match.joined, display
            if match.long_form:
                raise NeedlessArgumentError(display)
            # Short cluster: re-scan the remainder as its own switch token.
            buffer.push_front("-" + match.joined)
            return None, display
        if not match.switch.takes_arg:
            return None, display
        if match.switch.requires_arg:
            # Greedy: whatever comes next is the argument, "--" included.
            if not buffer:
                raise ArgumentMissingError(display)
        else:
            following = buffer.peek()
            if following is None or (following.startswith("-") and len(following) > 1):
                return None, display
        argument = buffer.pop_front()
        return argument, "%s %s" % (display, argument)

    def _parse(self, buffer, config):
        positionals = []
        while True:
            token, display = self._next_token(buffer)
            match token:
                case Terminate():
                    positionals.extend(buffer.drain())
                    break
                case PositionalArg(value):
                    positionals.append(value)
                case SwitchMatch():
                    argument, display = self._attach(token, buffer, display)
                    config = token.switch.process(argument, token.negated, config, display)
        if positionals and self._collector is not None:
            config = self._collector.process(positionals, config)
        return config, positionals

    def parse_known(self, tokens, config, /):
        """
        parse `tokens` like parse(), returning (config, positionals).

        positionals are the raw non-switch tokens in order, whether or not a
        positional handler consumed them. In shell mode a fault yields None if
        exit returns.
        """
        if isinstance(tokens, str):
            raise TypeError("parse() tokens must be an iterable of strings, not a string")
        tokens = builtins.list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() tokens must be strings")
        self._add_auto_help()
        try:
            return self._parse(ArgBuffer(tokens), config)
        except ParseFault as fault:
            self.trigger(fault)
            return None

    def parse(self, tokens, config, /):
        """
        parse `tokens` (argv without the program name) starting from `config`.

        Returns the configuration value produced by the last callback. Any
        ParseFault aborts the call; in shell mode it is printed and exit(1) is
        called, and None is returned if exit returns.
        """
        result = self.parse_known(tokens, config)
        if result is None:
            return None
        return result[0]


__all__ = (
    "ArgsCollector",
    "OptionParser",
)
