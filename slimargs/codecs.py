"""
slimargs value codecs: text to typed value, and back for default display.

Overview
- TextCodec (protocol)
  • decode(text) -> value, raising ConversionError when the text does not fit.
  • encode(value) -> str, used to render captured defaults in help.
  Anything providing both methods can be passed wherever a type is accepted.

- Integer(bits, signed)
  • Fixed-width integers: int8 … int64, uint8 … uint64, plus the unbounded `integer`
    (used for builtin int) and `boolean` (0 or 1, used for builtin bool values).
  • Decimal unless the text contains an 'x'/'X' anywhere, then hexadecimal for the whole
    token (sign and '0x' marker allowed). A leading zero never means octal: "010" is 10.
  • Unsigned targets reject any text containing '-' up front, so negative input can
    never wrap around.
  • Always encoded as a plain decimal literal.

- String: identity decode (no trimming); encoded inside double quotes.
- Generic(type): decode calls type(text) after trimming trailing whitespace;
  encode is str(value). Used for float, enums and other callable types.
  The type decides the accepted syntax, so float also takes "nan", "inf", "infinity"
  and digit separators such as "1_000".
- Codec(decode, encode=str): adapter for plain functions.

- resolve(type): pick the codec for a type once, at registration time.
- decode(type, text) / encode(type, value): one-shot helpers over resolve().
"""
import builtins
import re
from typing import Protocol, runtime_checkable

from .faults import ConversionError, FaultCode

# isspace() in the C locale; str.isspace() and \s also accept unicode spaces
_SPACES = " \t\n\v\f\r"

_DECIMAL = re.compile(r"[ \t\n\v\f\r]*(?P<sign>[+-]?)(?P<digits>[0-9]+)")
_HEXADECIMAL = re.compile(r"[ \t\n\v\f\r]*(?P<sign>[+-]?)(?:0[xX])?(?P<digits>[0-9a-fA-F]+)")


@runtime_checkable
class TextCodec(Protocol):
    def decode(self, text, /): ...
    def encode(self, value, /): ...


class Integer:
    """
    Integer codec bounded by a bit width and signedness.

    Parameters
    - bits: int | None
      Width of the representable range; None means unbounded (Python int).
    - signed: bool
      Two's complement range when True, [0, 2**bits) otherwise.
    - name: str
      Label used in repr().
    - cast: callable
      Applied to the decoded number (bool for the `boolean` codec).

    Range
    - minimum/maximum are None for the unbounded codec.
    """
    __slots__ = ("bits", "signed", "name", "cast", "minimum", "maximum")

    def __init__(self, bits, signed=True, name="integer", *, cast=int):
        if bits is not None and (not isinstance(bits, int) or bits < 1):
            raise ValueError("integer 'bits' must be a positive int or None")
        self.bits = bits
        self.signed = signed
        self.name = name
        self.cast = cast
        if bits is None:
            self.minimum = 0 if not signed else None
            self.maximum = None
        elif signed:
            self.minimum = -(1 << (bits - 1))
            self.maximum = (1 << (bits - 1)) - 1
        else:
            self.minimum = 0
            self.maximum = (1 << bits) - 1

    def decode(self, text, /):
        # Detect underflow first, otherwise "-1" could be mistaken for a valid magnitude.
        if not self.signed and "-" in text:
            raise ConversionError(
                "Cannot parse unsigned integer: " + text,
                code=FaultCode.CANNOT_PARSE_UNSIGNED,
                title="cannot parse unsigned integer",
                text=text,
            )

        pattern = _HEXADECIMAL if "x" in text or "X" in text else _DECIMAL
        if match := pattern.fullmatch(text):
            value = int(match["digits"], 16 if pattern is _HEXADECIMAL else 10)
            if match["sign"] == "-":
                value = -value
            if (
                (self.minimum is None or value >= self.minimum) and
                (self.maximum is None or value <= self.maximum)
            ):
                return self.cast(value)

        raise ConversionError(
            "Cannot parse integer: " + text,
            code=FaultCode.CANNOT_PARSE_INTEGER,
            title="cannot parse integer",
            text=text,
        )

    def encode(self, value, /):
        # bool and int subclasses render as plain numbers, never as names
        return str(int(value))

    def __repr__(self):
        return f"Integer({self.name})"


class String:
    """Identity codec for str targets; defaults render inside double quotes."""
    __slots__ = ()

    def decode(self, text, /):
        return text

    def encode(self, value, /):
        return '"' + value + '"'

    def __repr__(self):
        return "String()"


class Generic:
    """
    Codec built on a type's own textual capability: type(text) to parse, str() to render.

    Behavior
    - Trailing whitespace is trimmed before the call; whitespace-only text fails.
    - ValueError, TypeError and ArithmeticError raised by the type become ConversionError.
    """
    __slots__ = ("type",)

    def __init__(self, type, /):
        if not callable(type):
            raise TypeError("generic codec 'type' must be callable")
        self.type = type

    def decode(self, text, /):
        if stripped := text.rstrip(_SPACES):
            try:
                return self.type(stripped)
            except (ValueError, TypeError, ArithmeticError):
                pass
        raise ConversionError("Cannot parse value: " + text, text=text)

    def encode(self, value, /):
        return str(value)

    def __repr__(self):
        return f"Generic({getattr(self.type, '__name__', self.type)!r})"


class Codec(Generic):
    """
    Codec assembled from two functions.

    Example
        >>> yesno = Codec({"yes": True, "no": False}.__getitem__, lambda x: "yes" if x else "no")
    """
    __slots__ = ("render",)

    def __init__(self, decode, encode=str, /):
        super().__init__(decode)
        if not callable(encode):
            raise TypeError("codec 'encode' must be callable")
        self.render = encode

    def decode(self, text, /):
        try:
            return self.type(text)
        except (ValueError, TypeError, ArithmeticError, KeyError):
            raise ConversionError("Cannot parse value: " + text, text=text) from None

    def encode(self, value, /):
        return self.render(value)

    def __repr__(self):
        return f"Codec({getattr(self.type, '__name__', self.type)!r})"


int8 = Integer(8, True, "int8")
int16 = Integer(16, True, "int16")
int32 = Integer(32, True, "int32")
int64 = Integer(64, True, "int64")
uint8 = Integer(8, False, "uint8")
uint16 = Integer(16, False, "uint16")
uint32 = Integer(32, False, "uint32")
uint64 = Integer(64, False, "uint64")
integer = Integer(None, True, "integer")
boolean = Integer(1, False, "boolean", cast=bool)
string = String()


def resolve(type, /):
    """
    Return the TextCodec used for a type.

    Resolution order
    - a TextCodec instance is returned unchanged;
    - bool → boolean (checked before int, bool being an int subclass);
    - int → integer (unbounded), str → string;
    - any other callable → Generic(type).

    Raises
    - TypeError: when the object is neither a codec nor callable.
    """
    # Classes declaring decode/encode methods are types to construct, not codecs.
    if isinstance(type, TextCodec) and not isinstance(type, builtins.type):
        return type
    if type is bool:
        return boolean
    if type is int:
        return integer
    if type is str:
        return string
    if callable(type):
        return Generic(type)
    raise TypeError("codec must be a type, a callable or provide decode() and encode()")


def decode(type, text, /):
    """Decode text with the codec resolved for type."""
    return resolve(type).decode(text)


def encode(type, value, /):
    """Encode value with the codec resolved for type."""
    return resolve(type).encode(value)


__all__ = (
    "TextCodec",
    "Integer",
    "String",
    "Generic",
    "Codec",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "integer",
    "boolean",
    "string",
    "resolve",
    "decode",
    "encode",
)
