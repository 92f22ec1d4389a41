"""
Bindings and the binding registry.

Overview
- Bindings
  • FlagBinding: presence-only; marking it writes True into its storage.
  • OptionBinding[_T]: named, consumes exactly one value token.
  • PositionalBinding[_T]: unnamed on the command line, matched by position.
  Each binding pairs a validated name with a caller-owned storage handle and
  the Converter selected at registration time. Fields are exposed read-only.

- Registry
  • One namespace shared by flags and options (they share surface syntax),
    and a separate, ordered sequence of positionals (matched by position,
    so their names never collide with switches).
  • register_flag / register_option / register_positional return an Outcome;
    a failed registration leaves the registry untouched.

Programming errors (not user input) raise immediately:
- TypeError for non-string names, storage without get()/set(), unsupported
  or non-inferable value types, and boolean options/positionals.
"""
import difflib
import logging
import re
from types import MappingProxyType
from typing import Generic, TypeVar

from .converters import Converter
from .faults import *
from .names import NameKind, validate, describe
from .storage import is_storage
from .utils import *

logger: logging.Logger = logging.getLogger("argbind.bindings")

_T = TypeVar("_T")


class BindingType(type):
    """
    Metaclass giving bindings a typename, read-only fields and stable reprs.

    - __typename__ is derived from the class name ("OptionBinding" →
      "option-binding") and used in diagnostics.
    - every name listed in __introspectable__ becomes a read-only property
      mirroring the private "_<name>" field.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


class Binding(metaclass=BindingType):
    __introspectable__ = ("name", "kind", "storage", "converter")

    __kind__ = Unset

    def __init__(self, name, storage, converter, /):
        self._name = name
        self._kind = type(self).__kind__
        self._storage = storage
        self._converter = converter


class FlagBinding(Binding):
    """
    Presence-only binding: its storage is left alone unless the flag is seen.
    """
    __kind__ = NameKind.FLAG

    def __init__(self, name, storage, /):
        super().__init__(name, storage, Converter.PRESENCE)

    def mark(self):
        self._storage.set(True)


class ValueBinding(Binding):
    def assign(self, token, /):
        """
        Convert `token` and write it into storage on success.

        Returns the Conversion; on failure storage keeps its prior value.
        """
        conversion = self._converter.convert(token)
        if conversion:
            self._storage.set(conversion.value)
        return conversion


class OptionBinding(ValueBinding, Generic[_T]):
    __kind__ = NameKind.OPTION


class PositionalBinding(ValueBinding, Generic[_T]):
    __kind__ = NameKind.POSITIONAL


def _resolve_converter(name, storage, type, /):
    if type is Unset:
        try:
            converter = Converter.infer(storage.get())
        except TypeError as exception:
            raise TypeError("%r: %s" % (name, exception)) from None
    else:
        converter = Converter.of(type)
    if converter is Converter.PRESENCE:
        raise TypeError("%r: boolean values are only supported by flags" % name)
    return converter


class Registry:
    """
    Holds every binding of a parser, per argument kind.

    Invariants
    - names are unique across flags and options combined;
    - positional names are unique among positionals;
    - positionals keep registration order.
    """

    def __init__(self):
        self._switches = {}
        self._positionals = []
        # positionals are matched by order; this set only guards collisions
        self._names = set()

    @property
    def switches(self):
        return MappingProxyType(self._switches)

    @property
    def flags(self):
        return MappingProxyType({
            name: binding for name, binding in self._switches.items() if isinstance(binding, FlagBinding)
        })

    @property
    def options(self):
        return MappingProxyType({
            name: binding for name, binding in self._switches.items() if isinstance(binding, OptionBinding)
        })

    @property
    def positionals(self):
        return tuple(self._positionals)

    def lookup(self, name, /):
        return self._switches.get(name)

    def suggest(self, name, /):
        """
        Close matches for an unknown switch, best first.
        """
        return difflib.get_close_matches(name, self._switches.keys(), 5)

    def __contains__(self, name):
        return name in self._switches or name in self._names

    def __len__(self):
        return len(self._switches) + len(self._positionals)

    def _check(self, name, storage, kind, /):
        if not isinstance(name, str):
            raise TypeError("%s name must be a string" % kind.value)
        if not is_storage(storage):
            raise TypeError("%s %r storage must provide get() and set() methods" % (kind.value, name))

    def _reject(self, name, kind, /):
        if not validate(name, kind):
            return InvalidNameError(
                "%r is not an appropriate %s name" % (name, kind.value),
                title="invalid %s name" % kind.value,
                code=FaultCode.INVALID_NAME,
                hint="use %s" % describe(kind),
                name=name,
                kind=kind,
                expected=describe(kind),
            )
        if kind is NameKind.POSITIONAL:
            existing = NameKind.POSITIONAL if name in self._names else None
        else:
            existing = getattr(self._switches.get(name), "kind", None)
        if existing is not None:
            if kind is NameKind.POSITIONAL:
                message = "another positional named %r has already been registered" % name
            else:
                message = "%r has already been registered as %s %s" % (
                    name,
                    "an" if existing is NameKind.OPTION else "a",
                    existing.value
                )
            return DuplicateNameError(
                message,
                title="duplicate %s name" % kind.value,
                code=FaultCode.DUPLICATE_NAME,
                hint="pick a name that is not registered yet",
                name=name,
                kind=kind,
                existing=existing,
            )
        return None

    def _outcome(self, fault, /):
        logger.info("registration rejected (%s): %s", fault.code.name, fault.message)
        return Outcome(fault)

    def register_flag(self, name, storage, /):
        self._check(name, storage, NameKind.FLAG)
        if fault := self._reject(name, NameKind.FLAG):
            return self._outcome(fault)
        self._switches[name] = FlagBinding(name, storage)
        logger.debug("registered flag %r", name)
        return Outcome()

    def register_option(self, name, storage, type=Unset, /):
        self._check(name, storage, NameKind.OPTION)
        converter = _resolve_converter(name, storage, type)
        if fault := self._reject(name, NameKind.OPTION):
            return self._outcome(fault)
        self._switches[name] = OptionBinding(name, storage, converter)
        logger.debug("registered %s option %r", converter.typename, name)
        return Outcome()

    def register_positional(self, name, storage, type=Unset, /):
        self._check(name, storage, NameKind.POSITIONAL)
        converter = _resolve_converter(name, storage, type)
        if fault := self._reject(name, NameKind.POSITIONAL):
            return self._outcome(fault)
        self._names.add(name)
        self._positionals.append(PositionalBinding(name, storage, converter))
        logger.debug("registered %s positional %r at position %d", converter.typename, name, len(self._positionals))
        return Outcome()


__all__ = (
    "Binding",
    "FlagBinding",
    "OptionBinding",
    "PositionalBinding",
    "Registry",
)

# Keep the metaclass out of star-imports and docs; not part of the public API.
del BindingType
