"""
slimargs internal helpers.

- Unset: the "argument omitted" marker used for keyword defaults where None is itself
  a meaningful value (an option whose default really is None). Falsy, prints as
  "Unset", survives copy/pickle as the same object, and cannot be subclassed.
- coalesce(value, default): turn Unset into a default, leaving every other value,
  falsy ones included, untouched.
- logger: the "slimargs" logger. The package never installs handlers; hosts decide
  where records go and at which level.
"""
import functools
import logging
from typing import final

logger = logging.getLogger("slimargs")


@final
class UnsetType:
    """
    Type of the Unset marker; every call returns the one shared instance.
    """

    def __or__(self, other, /):
        # lets Unset take part in isinstance unions: str | Unset
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

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        # pickled by name, so unpickling yields the module-level instance
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, object otherwise.

    - coalesce(Unset, 80) -> 80
    - coalesce(0, 80)     -> 0
    - coalesce(None, 80)  -> None
    """
    return default if object is Unset else object


Unset = UnsetType()


__all__ = (
    "coalesce",
    "UnsetType",
    "Unset",
    "logger",
)
