r"""
Name validation per argument kind.

Grammars (ASCII only, so the result never depends on the locale)
- flag / option: r"--?[A-Za-z](-?[A-Za-z0-9]+)*"
  • one or two hyphens, then a letter
  • further segments are separated by single hyphens and may carry digits
  • accepted: "-f", "-v", "--verbose", "--use-float32", "-long-name"
  • rejected: "", "-", "--", "foo", "--1bad", "---x", "--bad_name", "--x-"
- positional: r"[A-Za-z_][A-Za-z0-9_]*"
  • a plain identifier; it can never begin with a hyphen, which keeps
    positional names apart from switches at registration time.

Flags and options share one grammar: they are told apart at parse time by
whether a value is consumed, not by their spelling.
"""
import enum
import re

_SWITCH = re.compile(r"--?[A-Za-z](-?[A-Za-z0-9]+)*")
_POSITIONAL = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
# Tokens such as "-5" or "-2.5e3" are values, not switches.
_NUMBER = re.compile(r"-(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class NameKind(enum.Enum):
    FLAG = "flag"
    OPTION = "option"
    POSITIONAL = "positional"

    @property
    def pattern(self):
        return _POSITIONAL if self is NameKind.POSITIONAL else _SWITCH


def validate(name, kind, /):
    """
    Tell whether `name` is a valid argument name for `kind`.

    Pure and deterministic: non-string names simply yield False.
    """
    if not isinstance(kind, NameKind):
        raise TypeError("validate() kind must be a NameKind")
    if not isinstance(name, str):
        return False
    return kind.pattern.fullmatch(name) is not None


def describe(kind, /):
    """
    Human-readable grammar for `kind`, used as the 'expected' part of faults.
    """
    if kind is NameKind.POSITIONAL:
        return "an identifier (a letter or '_' followed by letters, digits or '_')"
    return "'-' or '--' followed by a letter, then letters, digits or single hyphens"


def is_switch(token, /):
    """
    Classify a raw command-line token as switch-like (flag or option).

    A token is switch-like when it starts with a hyphen, unless it is the
    lone "-" (conventional stdin placeholder) or a negative number.
    """
    return token.startswith("-") and token != "-" and _NUMBER.fullmatch(token) is None


__all__ = (
    "NameKind",
    "validate",
    "describe",
    "is_switch",
)
