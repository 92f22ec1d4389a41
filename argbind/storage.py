"""
Caller-owned storage handles.

The registry never owns the values it writes. Every binding holds a small
handle that reads and writes a location the caller controls:

- Ref(value): a mutable cell; read the result back through `ref.value`.
- Attr(target, name): an attribute of a caller-owned object (namespace,
  dataclass instance, module, ...).
- Item(target, key): a key of a caller-owned mutable mapping.

Any object exposing callable `get()` and `set(value)` is accepted as storage,
so applications can plug their own locations in.

Precondition
- A handle must not outlive the object it points into, and two bindings
  should not share a handle unless last-write-wins is intended.

Example
    >>> count = Ref(0)
    >>> parser.add_option("--count", count, int)
    >>> parser.parse_args(["--count", "42"])
    >>> count.value
    42
"""
from .utils import Unset


class Ref:
    """
    Mutable cell holding a single caller-owned value.
    """
    __slots__ = ("value",)

    def __init__(self, value=Unset, /):
        self.value = value

    def get(self):
        return self.value

    def set(self, value, /):
        self.value = value

    def __repr__(self):
        return f"Ref({self.value!r})"

    def __rich_repr__(self):
        yield self.value


class Attr:
    """
    Handle over the attribute `name` of a caller-owned object.

    Reading a missing attribute yields Unset rather than raising, so an
    attribute can be bound before it exists.
    """
    __slots__ = ("target", "name")

    def __init__(self, target, name, /):
        if not isinstance(name, str):
            raise TypeError("Attr() name must be a string")
        self.target = target
        self.name = name

    def get(self):
        return getattr(self.target, self.name, Unset)

    def set(self, value, /):
        setattr(self.target, self.name, value)

    def __repr__(self):
        return f"Attr({type(self.target).__name__}, {self.name!r})"

    def __rich_repr__(self):
        yield type(self.target).__name__
        yield self.name


class Item:
    """
    Handle over the key `key` of a caller-owned mutable mapping.
    """
    __slots__ = ("target", "key")

    def __init__(self, target, key, /):
        if not hasattr(target, "__setitem__"):
            raise TypeError("Item() target must be a mutable mapping")
        self.target = target
        self.key = key

    def get(self):
        try:
            return self.target[self.key]
        except KeyError:
            return Unset

    def set(self, value, /):
        self.target[self.key] = value

    def __repr__(self):
        return f"Item({self.key!r})"

    def __rich_repr__(self):
        yield self.key


def is_storage(object, /):
    """
    Tell whether `object` can be used as a binding's storage handle.
    """
    return callable(getattr(object, "get", None)) and callable(getattr(object, "set", None))


__all__ = (
    "Ref",
    "Attr",
    "Item",
    "is_storage",
)
