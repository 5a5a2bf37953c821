r"""
optswitch value converters.

A converter is a plain `str -> T` callable. Converters are looked up by a type
key when a switch is *defined*, never while parsing: each switch closes over
the concrete function it was given.

Type keys provided by default
- str            identity
- int            unbounded integer (decimal, 0x hex, leading-zero octal)
- Int16/32/64    same syntax, range checked for the given signed width
- float          64-bit float, infinities rejected
- Float32        single precision, values rounded to the nearest float32
- Char           one character, or an escape: \b \t \n \f \r, \NNN (octal),
                 \xHH (hex), \uXXXX (unicode)
- pathlib.Path   filesystem path

Failure protocol
- raise InvalidValue (or any ValueError) with a short reason; the parser turns
  it into "invalid argument: <token>    (<reason>)".
- raise AmbiguousValue when a value matches several choices.
"""
import math
import re
import struct
from pathlib import Path
from typing import NewType

from .faults import InvalidValue, ConverterNotFoundError

Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)
Char = NewType("Char", str)

_HEX = re.compile(r"(-)?0[xX]([0-9a-fA-F]+)")
_OCT = re.compile(r"(-)?0([0-7]+)")
_DEC = re.compile(r"[-+]?[0-9]+")
# Halfway between the largest float32 and 2**128; anything at or beyond it rounds to infinity.
_FLOAT32_OVERFLOW = (2 - 2 ** -24) * 2.0 ** 127

_ESCAPES = {
    "\\b": "\b",
    "\\t": "\t",
    "\\n": "\n",
    "\\f": "\f",
    "\\r": "\r",
}
_OCTAL = re.compile(r"\\([0-3][0-7]{2}|[0-7]{1,2})")
_HEXCHAR = re.compile(r"\\[xX]([0-9a-fA-F]{1,2})")
_UNICODE = re.compile(r"\\u([0-9a-fA-F]{4})")


def _radix(text):
    """
    split a numeric literal into (digits, base), keeping the sign on the digits.
    """
    if match := _HEX.fullmatch(text):
        return (match[1] or "") + match[2], 16
    if match := _OCT.fullmatch(text):
        return (match[1] or "") + match[2], 8
    if _DEC.fullmatch(text):
        return text, 10
    return None, 10


def integer(text, /, bits=None):
    """
    convert an integer literal, optionally checking it fits a signed width.
    """
    digits, base = _radix(text)
    if digits is None:
        raise InvalidValue("integer expected")
    value = int(digits, base)
    if bits is not None and not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise InvalidValue("%d-bit integer expected" % bits)
    return value


def double(text, /):
    if "_" in text or text != text.strip():
        raise InvalidValue("float expected")
    try:
        value = float(text)
    except ValueError:
        raise InvalidValue("float expected") from None
    if math.isinf(value):
        raise InvalidValue("float expected")
    return value


def single(text, /):
    value = double(text)
    if abs(value) >= _FLOAT32_OVERFLOW:
        raise InvalidValue("32-bit float expected")
    # Round through the single precision representation.
    return struct.unpack("f", struct.pack("f", value))[0]


def character(text, /):
    if text in _ESCAPES:
        return _ESCAPES[text]
    if match := _OCTAL.fullmatch(text):
        return chr(int(match[1], 8))
    if match := _HEXCHAR.fullmatch(text):
        return chr(int(match[1], 16))
    if match := _UNICODE.fullmatch(text):
        return chr(int(match[1], 16))
    if len(text) == 1:
        return text
    raise InvalidValue("single character expected")


class ValueConverterRegistry:
    """
    mapping from a type key to a `str -> T` converter.

    registration order matters only in that a later registration for the same
    key replaces the earlier one.
    """

    def __init__(self, converters=(), /):
        self._converters = {}
        for key, function in dict(converters).items():
            self.register(key, function)

    def register(self, key, function, /):
        if not callable(function):
            raise TypeError("converter for %r must be callable" % (key,))
        self._converters[key] = function
        return function

    def resolve(self, key, /):
        try:
            return self._converters[key]
        except (KeyError, TypeError):
            raise ConverterNotFoundError("no converter registered for %r" % (key,)) from None

    def __contains__(self, key):
        try:
            return key in self._converters
        except TypeError:
            return False

    def copy(self):
        return type(self)(self._converters)

    @classmethod
    def defaults(cls):
        """
        build a registry seeded with the default converters.
        """
        return cls({
            str: str,
            int: integer,
            Int16: lambda text: integer(text, bits=16),
            Int32: lambda text: integer(text, bits=32),
            Int64: lambda text: integer(text, bits=64),
            float: double,
            Float32: single,
            Char: character,
            Path: Path,
        })


__all__ = (
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "Char",
    "ValueConverterRegistry",
)
