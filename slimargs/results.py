"""
slimargs parse outcomes.

Parser.parse never raises for user input; it returns exactly one of:
- Parsed(values): every token was consumed and every required argument was found.
- SignalRequested(short_name, long_name, argument): a signal argument (e.g. --help)
  was matched; the caller usually renders help and exits successfully.
- Failed(error): the first ParseError met during the walk.

All three are named tuples, so callers can pattern-match on them:

    match parser.parse(sys.argv):
        case Parsed(values):
            run(values.threads, values.files)
        case SignalRequested(long_name="help"):
            parser.print_help()
        case Failed(error):
            rich.print(error)

unwrap() offers the exception-flavored alternative: it returns the values,
or raises the ParseError / SignalInterrupt carried by the outcome.
"""
from collections import namedtuple
from collections.abc import Mapping
from types import MappingProxyType

from .arguments import Argument
from .faults import SignalInterrupt


class Values(Mapping):
    """
    Read-only mapping of parsed values keyed by argument dest.

    Lookups
    - values["threads"]  by dest key
    - values[argument]   by the Argument handle returned at registration
    - values.threads     attribute access for dest keys that are identifiers

    Dests that collide with Mapping methods (keys, items, values, get) or are not
    identifiers ("?") are only reachable by item access.
    """
    __slots__ = ("_values",)

    def __init__(self, values, /):
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))

    def __getitem__(self, key):
        if isinstance(key, Argument):
            key = key.dest
        return self._values[key]

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"'Values' object has no attribute {name!r}") from None

    def __setattr__(self, name, value):
        raise AttributeError("'Values' object is read-only")

    def __contains__(self, key):
        if isinstance(key, Argument):
            key = key.dest
        return key in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"Values({dict(self._values)!r})"

    def __rich_repr__(self):
        yield from self._values.items()


class Parsed(namedtuple("Parsed", ("values",))):
    __slots__ = ()

    def unwrap(self):
        return self.values


class SignalRequested(namedtuple("SignalRequested", ("short_name", "long_name", "argument"))):
    __slots__ = ()

    def unwrap(self):
        raise SignalInterrupt(self.argument)


class Failed(namedtuple("Failed", ("error",))):
    __slots__ = ()

    def unwrap(self):
        raise self.error


__all__ = (
    "Values",
    "Parsed",
    "SignalRequested",
    "Failed",
)
