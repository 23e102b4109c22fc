r"""
slimargs argument model.

Overview
- Kinds (a closed set; every kind is sealed against subclassing)
  • Signal: named, presence-only; matching it stops the parse with a SignalRequested
    outcome (e.g., -h/--help, --version). Never required, publishes no value.
  • Boolean: named, presence-only flag; publishes True when matched.
  • Value[_T]: one token decoded through a codec. Named (an option) or unnamed
    (an operand, matched by position).
  • Sink[_T]: unnamed trailing operand collecting every remaining operand token
    into a list.

- Shared accessors (read-only)
  • short_name, long_name, value_name, descr, required, has_value, is_sink, dest.
  • Value/Sink also expose codec, default and default_text.

Defaults
- The default of a Value is encoded by its codec once, at construction, and kept in
  default_text for help display. A None default has no text.
- A Sink starts every parse from a fresh copy of its default collection, so
  pre-existing elements are kept and parsed tokens are appended after them.

Validation highlights
- short_name: one character or None ("" is accepted as None).
- long_name: non-empty string or None ("" is accepted as None).
- Named kinds must specify at least one name; operands and sinks have none.
- value_name and descr must be strings (empty allowed).

Construction normally goes through Parser.add_signal/add_flag/add_option/
add_operand/add_sink, which also assign the dest key and check for duplicates.
"""
import functools
import operator
import re

from . import codecs
from .utils import *


class ArgumentType(type):
    """
    Metaclass giving argument kinds stable introspection.

    Responsibilities
    - Expose every name in __introspectable__ as a read-only property over "_<name>".
    - Provide __repr__/__rich_repr__ built from __displayable__ (or __introspectable__).
    - Derive __typename__ from the class name ("Value" → "value") for messages.
    - Seal classes created with sealed=True against subclassing.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        introspectable = namespace.get("__introspectable__", ())
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: property(operator.attrgetter("_" + name)) for name in introspectable
            },
        )

        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_names(cls, short_name, long_name, /, *, named):
    """
    Internal: validate and normalize the short/long names of an argument.

    Returns
    - (short_name, long_name) with empty strings turned into None.

    Raises
    - TypeError: a name is not a string/None, or a named kind has no name,
      or an unnamed kind (operand, sink) has one.
    - ValueError: a short name is not exactly one character.
    """
    short_name = short_name or None
    long_name = long_name or None

    if not isinstance(short_name, str | None):
        raise TypeError(f"{cls.__typename__} short name must be a string")
    elif isinstance(short_name, str) and len(short_name) != 1:
        raise ValueError(f"{cls.__typename__} short name must be a single character")

    if not isinstance(long_name, str | None):
        raise TypeError(f"{cls.__typename__} long name must be a string")

    if named and short_name is None and long_name is None:
        raise TypeError(f"{cls.__typename__} must specify at least one name")
    if not named and (short_name is not None or long_name is not None):
        raise TypeError(f"{cls.__typename__} operands are matched by position and cannot have names")

    return short_name, long_name


def _sanitize_text(cls, field, value, /):
    if not isinstance(value, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    return value


def _sanitize_dest(cls, dest, /):
    if dest is Unset:
        return Unset
    if not isinstance(dest, str):
        raise TypeError(f"{cls.__typename__} 'dest' must be a string")
    elif not (dest := dest.strip()):
        raise ValueError(f"{cls.__typename__} 'dest' cannot be empty")
    return dest


class Argument(metaclass=ArgumentType):
    """
    Shared base of the four argument kinds. Not instantiable, not extensible
    outside this module.
    """
    __introspectable__ = (
        "short_name",
        "long_name",
        "value_name",
        "descr",
        "required",
        "dest",
    )
    __displayable__ = ("short_name", "long_name", "value_name", "required", "dest")

    has_value = False
    is_sink = False
    default_text = ""

    def __init_subclass__(cls, **options):
        if cls.__module__ != __name__:
            raise TypeError("argument kinds are a closed set and cannot be extended")
        super().__init_subclass__(**options)

    def __init__(self, short_name, long_name, value_name, descr, required, dest, /, *, named):
        if type(self) is Argument:
            raise TypeError("type 'Argument' cannot be instantiated directly")
        self._short_name, self._long_name = _sanitize_names(type(self), short_name, long_name, named=named)
        self._value_name = _sanitize_text(type(self), "value name", value_name)
        self._descr = _sanitize_text(type(self), "descr", descr)
        if not isinstance(required, bool):
            raise TypeError(f"{type(self).__typename__} 'required' must be a bool")
        self._required = required
        self._dest = _sanitize_dest(type(self), dest)

    def _bind(self, dest, /):
        # Called once by the parser when the dest key was derived rather than given.
        self._dest = dest
        return self


class Signal(Argument, sealed=True):
    """
    Presence-only argument that interrupts the parse when matched.

    The interruption wins over every other check still pending, including missing
    required arguments, so -h/--help works on an otherwise incomplete command line.
    """
    __displayable__ = ("short_name", "long_name")

    def __init__(self, short_name=None, long_name=None, descr=""):
        super().__init__(short_name, long_name, "", descr, False, Unset, named=True)


class Boolean(Argument, sealed=True):
    """Presence-only flag: publishes True once matched, its default otherwise."""
    __displayable__ = ("short_name", "long_name", "required", "dest", "default")

    def __init__(self, short_name=None, long_name=None, descr="", required=False, *, default=False, dest=Unset):
        super().__init__(short_name, long_name, "", descr, required, dest, named=True)
        if not isinstance(default, bool):
            raise TypeError("boolean 'default' must be a bool")
        self._default = default

    @property
    def default(self):
        return self._default


class Value(Argument, sealed=True):
    """
    Value-bearing argument, an option when named and an operand when not.

    Parameters
    - type: a type or a TextCodec; resolved to a codec immediately (see codecs.resolve).
    - default: published when the argument is not matched; encoded right away into
      default_text. Unset and None both mean “no default” for display purposes.
    """
    __displayable__ = ("short_name", "long_name", "value_name", "required", "dest", "codec", "default")

    has_value = True

    def __init__(
            self,
            short_name=None,
            long_name=None,
            value_name="",
            descr="",
            required=False,
            *,
            type=str,
            default=Unset,
            dest=Unset,
            named=True,
    ):
        super().__init__(short_name, long_name, value_name, descr, required, dest, named=named)
        self._codec = codecs.resolve(type)
        self._default = coalesce(default)
        # Captured before any parse can happen, so help always shows the initial value.
        self._default_text = "" if self._default is None else self._codec.encode(self._default)

    @property
    def codec(self):
        return self._codec

    @property
    def default(self):
        return self._default

    @property
    def default_text(self):
        return self._default_text


class Sink(Argument, sealed=True):
    """
    Trailing operand collecting zero or more tokens, in order, into a list.

    Help never shows a default annotation for a sink.
    """
    __displayable__ = ("value_name", "required", "dest", "codec", "default")

    has_value = True
    is_sink = True

    def __init__(self, value_name="", descr="", required=False, *, type=str, default=Unset, dest=Unset):
        super().__init__(None, None, value_name, descr, required, dest, named=False)
        self._codec = codecs.resolve(type)
        default = coalesce(default, ())
        if isinstance(default, str | bytes) or not hasattr(default, "__iter__"):
            raise TypeError("sink 'default' must be an iterable collection")
        self._default = tuple(default)

    @property
    def codec(self):
        return self._codec

    @property
    def default(self):
        return self._default


__all__ = (
    "Argument",
    "Signal",
    "Boolean",
    "Value",
    "Sink",
)
