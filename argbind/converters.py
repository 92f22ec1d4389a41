"""
Value conversion: a closed set of tagged variants, one per supported type.

Each Converter member carries its own parse routine and is selected once,
at registration time, from the Python type the caller asks for (or from the
type of the value already held by the bound storage). Conversion never
raises on bad input: it returns a Conversion, truthy on success, that carries
either the converted value or a short reason.

Variants
- INTEGER  (int):   ASCII base-10, optional sign, must fit a signed 32-bit int.
- FLOAT    (float): decimal or exponential notation; overflow to infinity fails.
- TEXT     (str):   identity, always succeeds.
- PRESENCE (bool):  flags only; its value comes from presence, never a token.
"""
import builtins
import enum
import math
import re
from typing import NamedTuple

from .utils import Unset

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class Conversion(NamedTuple):
    value: object = Unset
    error: str | None = None

    def __bool__(self):
        return self.error is None


def _integer(token):
    if not _INTEGER.fullmatch(token):
        if not token:
            return Conversion(error="empty input")
        return Conversion(error="not a base-10 integer")
    # int() refuses digit strings past sys.get_int_max_str_digits(), leading
    # zeros included; more than ten significant digits never fit the range.
    digits = token.lstrip("+-").lstrip("0") or "0"
    if len(digits) > 10:
        return Conversion(error="out of range [%d, %d]" % (INT_MIN, INT_MAX))
    value = int(digits, 10)
    if token.startswith("-"):
        value = -value
    if not INT_MIN <= value <= INT_MAX:
        return Conversion(error="out of range [%d, %d]" % (INT_MIN, INT_MAX))
    return Conversion(value)


def _float(token):
    if not _FLOAT.fullmatch(token):
        if not token:
            return Conversion(error="empty input")
        return Conversion(error="not a decimal or exponential number")
    value = float(token)
    if math.isinf(value):
        return Conversion(error="out of range")
    return Conversion(value)


class Converter(enum.Enum):
    INTEGER = int
    FLOAT = float
    TEXT = str
    PRESENCE = bool

    @property
    def typename(self):
        match self:
            case Converter.INTEGER:
                return "integer"
            case Converter.FLOAT:
                return "floating-point"
            case Converter.TEXT:
                return "text"
            case Converter.PRESENCE:
                return "boolean"

    @classmethod
    def of(cls, type, /):
        """
        Select the variant for a Python type; unsupported types are a
        programming error and raise TypeError.
        """
        try:
            return cls(type)
        except (ValueError, TypeError):
            supported = ", ".join(member.value.__name__ for member in cls)
            raise TypeError("unsupported value type %r (expected one of: %s)" % (type, supported)) from None

    @classmethod
    def infer(cls, value, /):
        """
        Select the variant from the type of a value already held by storage.
        """
        if value is Unset:
            raise TypeError("cannot infer a value type from unset storage; pass 'type' explicitly")
        return cls.of(builtins.type(value))

    def convert(self, token, /):
        """
        Convert one raw token; never raises for string input.
        """
        if not isinstance(token, str):
            raise TypeError("convert() argument must be a string")
        match self:
            case Converter.INTEGER:
                return _integer(token)
            case Converter.FLOAT:
                return _float(token)
            case Converter.TEXT:
                return Conversion(token)
            case Converter.PRESENCE:
                raise TypeError("presence values are not converted from tokens")


__all__ = (
    "Conversion",
    "Converter",
    "INT_MIN",
    "INT_MAX",
)
