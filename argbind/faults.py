"""
argbind faults (registration and parse errors), outcomes, and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault, grouped by
  phase so logs and searches stay predictable.
- ArgumentFault: base type carrying a one-line message plus structured options
  (offending name, expected grammar or type, raw token, position, hint ...).
  Faults are exceptions so they can be raised on demand, but the core never
  raises them: every fallible operation returns an Outcome.
- Outcome: truthy on success, falsy on failure; `.fault` is the structured
  fault, `.unwrap()` raises it for callers who prefer exceptions.

Rendering
- Faults implement the rich `__rich__` protocol: a header
  "[ prog — code | title ]", the message, and an arrow-led hint. Panel chrome
  (fancy) and colors (colorful) are runtime options; styles can be overridden
  by a `__styles__` mapping and codes relabeled by a `__codes__` mapping on
  `__main__`, and `__prog__` overrides the program name.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registration (2110x): INVALID_NAME, DUPLICATE_NAME
    - switches (2111x): UNKNOWN_ARGUMENT, MISSING_VALUE, CONVERSION_FAILED,
      UNEXPECTED_VALUE
    - positionals (2112x): TOO_MANY_POSITIONALS, MISSING_POSITIONAL
    - prompt (2113x): MALFORMED_PROMPT
    """
    # --- registration errors ---
    INVALID_NAME         = 21101
    DUPLICATE_NAME       = 21102

    # --- switch errors ---
    UNKNOWN_ARGUMENT     = 21111
    MISSING_VALUE        = 21112
    CONVERSION_FAILED    = 21113
    UNEXPECTED_VALUE     = 21114

    # --- positional errors ---
    TOO_MANY_POSITIONALS = 21121
    MISSING_POSITIONAL   = 21122

    # --- prompt errors ---
    MALFORMED_PROMPT     = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentFault(Exception):
    """
    base type of every registration/parse fault.

    the message is a single lowercase sentence; everything an external
    formatter may need lives in `options` (read-only):
    - code, title, hint: always present
    - name, kind, expected, existing, index, token, type, suggestions,
      names, supplied: present depending on the fault
    - prog, colorful, fancy: rendering context added by the parser
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options["code"]

    def __rich__(self):
        main = __import__("__main__")

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

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.options["title"].title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationFault(ArgumentFault): ...
class ParseFault(ArgumentFault): ...


class InvalidNameError(RegistrationFault): ...
class DuplicateNameError(RegistrationFault): ...

class UnknownArgumentError(ParseFault): ...
class MissingValueError(ParseFault): ...
class ConversionError(ParseFault): ...
class UnexpectedValueError(ParseFault): ...
class TooManyPositionalsError(ParseFault): ...
class MissingPositionalError(ParseFault): ...
class MalformedPromptError(ParseFault): ...


class Outcome:
    """
    result of a registration or parse call.

    usage
        if not (outcome := parser.parse_args(tokens)):
            console.print(outcome.fault)
    """
    __slots__ = ("fault",)

    def __init__(self, fault=None, /):
        if fault is not None and not isinstance(fault, ArgumentFault):
            raise TypeError("Outcome() argument must be an argument fault")
        self.fault = fault

    def __bool__(self):
        return self.fault is None

    def unwrap(self):
        """
        raise the carried fault, if any; return None on success.
        """
        if self.fault is not None:
            raise self.fault

    def __repr__(self):
        if self.fault is None:
            return "Outcome(ok)"
        return f"Outcome({type(self.fault).__name__}: {self.fault.message})"

    def __rich_repr__(self):
        yield "ok", self.fault is None
        yield "fault", self.fault, None


__all__ = (
    "FaultCode",
    "ArgumentFault",
    "RegistrationFault",
    "ParseFault",
    "InvalidNameError",
    "DuplicateNameError",
    "UnknownArgumentError",
    "MissingValueError",
    "ConversionError",
    "UnexpectedValueError",
    "TooManyPositionalsError",
    "MissingPositionalError",
    "MalformedPromptError",
    "Outcome",
)
