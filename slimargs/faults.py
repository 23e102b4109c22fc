"""
slimargs faults (parse errors, the signal interrupt) and their rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
  Codes are grouped by domain to keep logs and searches predictable.
- ParseError: base type that carries a message and read-only context options,
  and knows how to render itself through rich.
- SignalInterrupt: the non-error early exit raised when a signal argument
  (e.g. --help) is matched. It is converted into a SignalRequested outcome
  by Parser.parse and never reaches callers of parse() as an exception.

Messages
- The message of every error is fixed by a template with the offending token,
  name or value interpolated verbatim (e.g. "Unexpected argument: 4"), so that
  str(error) is stable and can be compared by callers and tests.

Integration
- The host application may expose __codes__, __styles__ and __prog__ in
  __main__ to remap fault codes, restyle the rendering, or name the program.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping (by high-level domain)
    - conversion (2110x)
      • CANNOT_PARSE_INTEGER, CANNOT_PARSE_UNSIGNED, CANNOT_PARSE_VALUE
    - options (2210x)
      • UNKNOWN_OPTION_NAME, MISSING_VALUE, UNEXPECTED_OPTION_VALUE
    - operands (2310x)
      • UNEXPECTED_OPTION, UNEXPECTED_ARGUMENT
    - validation (2410x)
      • MISSING_REQUIRED_ARGUMENT
    """
    # --- conversion errors (21xxx) ---
    CANNOT_PARSE_INTEGER        = 21101
    CANNOT_PARSE_UNSIGNED       = 21102
    CANNOT_PARSE_VALUE          = 21103

    # --- option errors (22xxx) ---
    UNKNOWN_OPTION_NAME         = 22101
    MISSING_VALUE               = 22102
    UNEXPECTED_OPTION_VALUE     = 22103

    # --- operand errors (23xxx) ---
    UNEXPECTED_OPTION           = 23101
    UNEXPECTED_ARGUMENT         = 23102

    # --- validation errors (24xxx) ---
    MISSING_REQUIRED_ARGUMENT   = 24101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    Base class of every failure reported by Parser.parse.

    Attributes
    - message: str, the fixed-template message (also str(error)).
    - options: read-only mapping with context; always holds 'code' and 'title',
      plus whatever the raising site knows ('token', 'name', 'text', 'argument').
    """
    code = None
    title = "parse error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"code": self.code, "title": self.title} | options)
        self.code = self.options["code"]
        self.title = self.options["title"]

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
        } | getattr(main, "__styles__", {}))

        header = Text.assemble("[ ")
        if prog := getattr(main, "__prog__", ""):
            header.append(prog, styles["prog-name"]).append(" — ")
        if isinstance(code := self.options["code"], FaultCode):
            header.append(code.normalize(), styles["code"]).append(" | ")
        header.append(self.options["title"].title(), styles["error-title"]).append(" ]")

        return Group(header, Text(self.message, styles["error-message"]))


class ConversionError(ParseError):
    code = FaultCode.CANNOT_PARSE_VALUE
    title = "cannot parse value"

class UnknownOptionNameError(ParseError):
    code = FaultCode.UNKNOWN_OPTION_NAME
    title = "unknown option"

class MissingValueError(ParseError):
    code = FaultCode.MISSING_VALUE
    title = "missing option value"

class UnexpectedOptionValueError(ParseError):
    code = FaultCode.UNEXPECTED_OPTION_VALUE
    title = "unexpected option value"

class UnexpectedOptionError(ParseError):
    code = FaultCode.UNEXPECTED_OPTION
    title = "unexpected option"

class UnexpectedArgumentError(ParseError):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"

class MissingRequiredArgumentError(ParseError):
    code = FaultCode.MISSING_REQUIRED_ARGUMENT
    title = "missing required argument"


class SignalInterrupt(Exception):
    """
    Raised when a signal argument is matched; it short-circuits the rest of
    the parse, including required-argument validation.

    This is not a ParseError. Parser.parse turns it into SignalRequested;
    SignalRequested.unwrap() raises it again for callers preferring exceptions.
    """

    def __init__(self, argument, /):
        super().__init__(argument.short_name, argument.long_name)
        self.argument = argument
        self.short_name = argument.short_name
        self.long_name = argument.long_name

    def __repr__(self):
        return f"SignalInterrupt(short_name={self.short_name!r}, long_name={self.long_name!r})"


__all__ = (
    "FaultCode",
    "ParseError",
    "ConversionError",
    "UnknownOptionNameError",
    "MissingValueError",
    "UnexpectedOptionValueError",
    "UnexpectedOptionError",
    "UnexpectedArgumentError",
    "MissingRequiredArgumentError",
    "SignalInterrupt",
)
