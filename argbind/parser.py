"""
argbind parser: registration surface and the single-pass parse engine.

What this module provides
- ArgumentParser(program_name, program_description): owns a Registry and
  exposes add_flag / add_option / add_positional and parse_args. Every one
  of them returns an Outcome instead of raising for user input.

Parse algorithm (one left-to-right scan, no backtracking)
- "--" ends switch processing; every later token is positional.
- a switch-like token ("-x", "--name", "--name=value") is looked up in the
  shared flag/option namespace:
  • flag   → its storage is set to True;
  • option → the inline value, or else the next token, is converted and
    written (the next token is taken as-is, even if it starts with '-').
- any other token feeds the next positional, in registration order.
- after the scan, every registered positional must have been filled.

Failure policy
- the scan stops at the first fault; bindings written before the failing
  token keep their new values (there is no rollback).
- a string prompt shlex cannot split fails before any token is scanned.

Preconditions
- registration must be complete before the first parse_args call; adding
  arguments afterwards raises RuntimeError.
- a parser is not safe for concurrent use; parse_args may be re-run
  sequentially with new tokens.

Quick start
    from argbind import ArgumentParser, Ref

    verbose, count, path = Ref(False), Ref(1), Ref("")
    parser = ArgumentParser("tool", "does things")
    parser.add_flag("-v", verbose)
    parser.add_option("--count", count)        # int, inferred from Ref(1)
    parser.add_positional("path", path, str)

    if not (outcome := parser.parse_args(["--count", "42", "-v", "./README.md"])):
        rich.print(outcome.fault)
"""
import functools
import logging
import shlex
import sys
from collections.abc import Iterable

from .bindings import FlagBinding, Registry
from .faults import *
from .names import is_switch
from .utils import *

logger: logging.Logger = logging.getLogger("argbind.parser")


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, ...)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _tokenize(prompt):
    """
    Normalize a prompt into a list of raw tokens.

    - Unset: sys.argv[1:]
    - str: shell-like string, split with shlex.split
    - Iterable[str]: used as-is (tokens are not trimmed; "" is a valid value)
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse_args() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse_args() argument must be a string or an iterable of strings")


class ArgumentParser:
    """
    Registration + dispatch core bound to caller-owned storage.

    Properties
    - program_name / program_description: as given at construction.
    - flags / options: read-only name → binding mappings.
    - positionals: bindings in registration (match) order.
    - colorful / fancy: rendering options stamped onto every fault.
    """
    program_name = mirror("program_name")
    program_description = mirror("program_description")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(self, program_name, program_description, /, *, colorful=True, fancy=False):
        if not isinstance(program_name, str):
            raise TypeError("ArgumentParser() program name must be a string")
        if not isinstance(program_description, str):
            raise TypeError("ArgumentParser() program description must be a string")
        self._program_name = program_name
        self._program_description = program_description
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._registry = Registry()
        self._sealed = False

    @property
    def flags(self):
        return self._registry.flags

    @property
    def options(self):
        return self._registry.options

    @property
    def positionals(self):
        return self._registry.positionals

    def __repr__(self):
        return f"ArgumentParser({self._program_name!r}, {self._program_description!r})"

    def __rich_repr__(self):
        yield self._program_name
        yield self._program_description
        yield "switches", dict(self._registry.switches)
        yield "positionals", self._registry.positionals

    def _stamp(self, outcome, /):
        # attach the rendering context the faults need to draw themselves
        if outcome:
            return outcome
        return Outcome(outcome.fault.__replace__(
            prog=self._program_name,
            colorful=self._colorful,
            fancy=self._fancy,
        ))

    def _fail(self, fault, /):
        logger.info("%s: parse failed (%s): %s", self._program_name, fault.code.name, fault.message)
        return self._stamp(Outcome(fault))

    def _ensure_open(self):
        if self._sealed:
            raise RuntimeError("cannot register arguments after parsing has started")

    def add_flag(self, name, storage, /):
        """
        Register a presence-only flag writing True into `storage` when seen.

        Fails with InvalidNameError or DuplicateNameError (shared flag/option
        namespace). Storage is never touched at registration time.
        """
        self._ensure_open()
        return self._stamp(self._registry.register_flag(name, storage))

    def add_option(self, name, storage, type=Unset, /):
        """
        Register a named option consuming exactly one value token.

        `type` is one of int, float or str; when omitted it is inferred from
        the value `storage` currently holds.
        """
        self._ensure_open()
        return self._stamp(self._registry.register_option(name, storage, type))

    def add_positional(self, name, storage, type=Unset, /):
        """
        Register a mandatory positional; registration order is match order.
        """
        self._ensure_open()
        return self._stamp(self._registry.register_positional(name, storage, type))

    def parse_args(self, prompt=Unset, /):
        """
        Scan `prompt` once and write converted values into bound storage.

        Returns an Outcome carrying one of: MalformedPromptError,
        UnknownArgumentError, UnexpectedValueError, MissingValueError,
        ConversionError, TooManyPositionalsError, MissingPositionalError.
        """
        try:
            tokens = _tokenize(prompt)
        except ValueError as error:
            # shlex.split: unbalanced quotes or a dangling escape
            if not isinstance(prompt, str):
                raise
            self._sealed = True
            return self._fail(MalformedPromptError(
                "cannot split prompt into tokens (%s)" % str(error).lower(),
                title="malformed prompt",
                code=FaultCode.MALFORMED_PROMPT,
                hint="close every quote and escape a trailing backslash",
                prompt=prompt,
                reason=str(error),
            ))
        self._sealed = True

        positionals = self._registry.positionals
        logger.debug("%s: parsing %d token(s) against %d binding(s)", self._program_name, len(tokens), len(self._registry))

        index = 0
        cursor = 0
        switching = True

        while index < len(tokens):
            token = tokens[index]

            if switching and token == "--":
                switching = False
                index += 1
                continue

            if switching and is_switch(token):
                name, separator, inline = token.partition("=")
                binding = self._registry.lookup(name)

                if binding is None:
                    suggestions = self._registry.suggest(name)
                    try:
                        hint = "did you mean %r?" % suggestions[0]
                    except IndexError:
                        hint = "check the registered flags and options"
                    return self._fail(UnknownArgumentError(
                        "unknown option or flag %r at %s position" % (name, _ordinal(index + 1)),
                        title="unknown option or flag",
                        code=FaultCode.UNKNOWN_ARGUMENT,
                        hint=hint,
                        name=name,
                        index=index,
                        token=token,
                        suggestions=tuple(suggestions),
                    ))

                if isinstance(binding, FlagBinding):
                    if separator:
                        return self._fail(UnexpectedValueError(
                            "flag %r at %s position cannot take a value" % (name, _ordinal(index + 1)),
                            title="flag cannot take a value",
                            code=FaultCode.UNEXPECTED_VALUE,
                            hint="remove everything from '=' (for example: %s)" % name,
                            name=name,
                            index=index,
                            token=token,
                        ))
                    binding.mark()
                    index += 1
                    continue

                if separator:
                    raw, step = inline, 1
                elif index + 1 < len(tokens):
                    raw, step = tokens[index + 1], 2
                else:
                    return self._fail(MissingValueError(
                        "option %r at %s position requires a value" % (name, _ordinal(index + 1)),
                        title="missing option value",
                        code=FaultCode.MISSING_VALUE,
                        hint="pass a %s value after it (for example: %s <value>)" % (binding.converter.typename, name),
                        name=name,
                        index=index,
                        type=binding.converter.value,
                    ))

                if not (conversion := binding.assign(raw)):
                    return self._fail(ConversionError(
                        "option %r at %s position expects %s value, got %r (%s)" % (
                            name, _ordinal(index + 1), _article(binding.converter.typename), raw, conversion.error
                        ),
                        title="invalid option value",
                        code=FaultCode.CONVERSION_FAILED,
                        hint="pass %s value" % _article(binding.converter.typename),
                        name=name,
                        index=index + step - 1,
                        token=raw,
                        type=binding.converter.value,
                        reason=conversion.error,
                    ))
                index += step
                continue

            if cursor >= len(positionals):
                return self._fail(TooManyPositionalsError(
                    "unexpected positional argument %r at %s position" % (token, _ordinal(index + 1)),
                    title="unexpected positional",
                    code=FaultCode.TOO_MANY_POSITIONALS,
                    hint="remove this extra value; %d positional(s) expected" % len(positionals),
                    index=index,
                    token=token,
                    expected=len(positionals),
                ))

            binding = positionals[cursor]
            if not (conversion := binding.assign(token)):
                return self._fail(ConversionError(
                    "positional %r at %s position expects %s value, got %r (%s)" % (
                        binding.name, _ordinal(index + 1), _article(binding.converter.typename), token, conversion.error
                    ),
                    title="invalid positional value",
                    code=FaultCode.CONVERSION_FAILED,
                    hint="pass %s value" % _article(binding.converter.typename),
                    name=binding.name,
                    index=index,
                    token=token,
                    type=binding.converter.value,
                    reason=conversion.error,
                ))
            cursor += 1
            index += 1

        if cursor < len(positionals):
            missing = tuple(binding.name for binding in positionals[cursor:])
            return self._fail(MissingPositionalError(
                "missing positional argument(s): %s" % ", ".join(missing),
                title="missing positional",
                code=FaultCode.MISSING_POSITIONAL,
                hint="%d positional(s) expected, %d given" % (len(positionals), cursor),
                names=missing,
                supplied=cursor,
                expected=len(positionals),
            ))

        logger.debug("%s: parsed %d token(s)", self._program_name, len(tokens))
        return Outcome()


def _article(typename, /):
    return ("an " if typename[0] in "aeiou" else "a ") + typename


__all__ = (
    "ArgumentParser",
)
