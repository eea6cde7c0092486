"""
Coreargs utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the flag model, the positional accountant,
  the value converters and the frontend.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- infer(input, keys)
  • Abbreviation matching shared by long options and enumerated values:
    exact match wins, otherwise every key the input is a non-empty prefix of.

Stability and contract
- Names not in __all__ are internal and may change without notice.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> infer("fo", ("follow", "force", "format"))
    ('follow', 'force', 'format')
    >>> infer("force", ("force", "force-all"))
    ('force',)
"""
import builtins
import functools
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType


class UnsetType:
    """
    Sentinel type used to mark “no value provided”.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (UnsetType, ())

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Return a read-only view of a container; other objects are returned as-is.

    - Sequence (non-string) → tuple
    - Mapping → MappingProxyType
    - Set → frozenset
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, tuple)):
        return tuple(object)
    elif isinstance(object, Mapping) and not isinstance(object, MappingProxyType):
        return MappingProxyType(object)
    elif isinstance(object, Set) and not isinstance(object, frozenset):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns a
    read-only view for container types, so the declarative model cannot be
    mutated through its public API once built.

    Example
    - Given self._spellings, declare spellings = mirror("spellings").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def infer(input, keys, /):
    """
    Find which of 'keys' the user meant by typing 'input'.

    Contract
    - An exact match always wins and is returned alone, even when other keys
      also start with 'input'.
    - Otherwise every key for which 'input' is a non-empty prefix is returned,
      in the order the keys were given.

    The caller decides what zero, one, or several candidates mean; long
    options and enumerated values both use this routine so the two
    abbreviation layers cannot drift apart.

    Returns
    - tuple[str, ...]: the exact match, or the prefix candidates (possibly empty).
    """
    candidates = []
    for key in keys:
        if key == input:
            return (key,)
        if input and key.startswith(input):
            candidates.append(key)
    return tuple(candidates)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "infer",
)
