"""
slimargs parser: registration, settings, parsing and help entry points.

What this module provides
- Parser: declares options (signals, flags, value options) and operands (values, one
  trailing sink), parses a token list into a Parsed / SignalRequested / Failed outcome,
  and renders help from the same declarations.

Grammar (one POSIX-like convention)
- long option:   --name, --name=value, --name value
- short options: -a, -abc (flags combined), -ovalue, -o value, -abo value
- terminator:    -- (every later token is an operand, whatever its shape)
- operand:       anything else, matched by position in declaration order

Parse walk (one pass, first failure wins)
1. utility name: the first token is the program name (a configured utility_name wins,
   the token is consumed anyway)
2. options: terminator, long option or short option group, until none matches
3. operands: each declared operand in order; a sink takes every remaining token.
   An option-shaped token in an operand position fails unless terminated.
4. a trailing terminator is consumed, any other leftover token fails
5. required arguments: options first, then operands, in declaration order

Value precedence
- The value slot of an option accepts any token, even "-s" or "--": options win.
- Operand slots reject option-shaped tokens until the terminator was seen.

Quick example
    >>> from slimargs import Parser, Parsed, int32
    >>> parser = Parser("Copy files.")
    >>> show_help = parser.add_signal("h", "help", "Show this help.")
    >>> jobs = parser.add_option("j", "jobs", "N", "Worker count.", type=int32, default=1)
    >>> files = parser.add_sink("FILE", "Files to copy.", True, dest="files")
    >>> match parser.parse(["cp", "-j4", "a", "b"]):
    ...     case Parsed(values): print(values.jobs, values.files)
    4 ['a', 'b']
"""
import re
import sys
from collections import deque

from rich.console import Console

from .arguments import Signal, Boolean, Value, Sink
from .faults import *
from .formatting import HelpFormatter
from .results import Values, Parsed, SignalRequested, Failed
from .utils import *


def _prefix(name, value, /, *, single=False, allow_empty=True):
    if not isinstance(value, str):
        raise TypeError(f"parser {name!r} must be a string")
    if single and len(value) != 1 and (value or not allow_empty):
        raise ValueError(f"parser {name!r} must be a single character")
    if not allow_empty and not value:
        raise ValueError(f"parser {name!r} cannot be empty")
    return value


def _setting(name, /, *, single=False, allow_empty=True):
    """Read/write property over "_<name>" validating string settings."""
    def getter(self):
        return getattr(self, "_" + name)

    def setter(self, value):
        setattr(self, "_" + name, _prefix(name, value, single=single, allow_empty=allow_empty))

    return property(getter, setter)


def _size(name, /):
    """Read/write property over "_<name>" clamping negative sizes to zero."""
    def getter(self):
        return getattr(self, "_" + name)

    def setter(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"parser {name!r} must be an int")
        setattr(self, "_" + name, max(value, 0))

    return property(getter, setter)


class Parser:
    """
    Declarative command-line parser.

    Settings (constructor keywords, also writable attributes)
    - short_prefix: one character starting short options (default "-").
    - long_prefix: string starting long options (default "--"); "" disables them.
    - separator: one character between a long name and its merged value (default "=");
      "" or None disables merged long values.
    - terminator: token ending option recognition (default "--"); "" disables it.
    - usage_title / options_title / operands_title: section titles; "" hides a section.
    - utility_name: fixed program name; otherwise the first parsed token is shown.
    - options_usage / operands_usage: replace the generated usage tokens of a group.
    - default_intro: text before default values in help (default "default: "); ""
      disables default annotations.
    - help_width / help_indent: layout sizes (default 80 and 2), clamped to zero.
    - colorful: style the rendered help (plain text is identical either way).

    Registration
    - add_signal, add_flag, add_option, add_operand and add_sink each return the created
      Argument; the handle can be used to read its value from Parsed.values.
    """
    short_prefix = _setting("short_prefix", single=True, allow_empty=False)
    long_prefix = _setting("long_prefix")
    terminator = _setting("terminator")
    usage_title = _setting("usage_title")
    options_title = _setting("options_title")
    operands_title = _setting("operands_title")
    options_usage = _setting("options_usage")
    operands_usage = _setting("operands_usage")
    default_intro = _setting("default_intro")
    prolog = _setting("prolog")
    epilog = _setting("epilog")
    help_width = _size("help_width")
    help_indent = _size("help_indent")

    def __init__(
            self,
            prolog="",
            epilog="",
            *,
            short_prefix="-",
            long_prefix="--",
            separator="=",
            terminator="--",
            usage_title="USAGE",
            options_title="OPTIONS",
            operands_title="OPERANDS",
            utility_name=Unset,
            options_usage="",
            operands_usage="",
            default_intro="default: ",
            help_width=80,
            help_indent=2,
            colorful=False,
    ):
        self.prolog = prolog
        self.epilog = epilog
        self.short_prefix = short_prefix
        self.long_prefix = long_prefix
        self.separator = separator
        self.terminator = terminator
        self.usage_title = usage_title
        self.options_title = options_title
        self.operands_title = operands_title
        self.utility_name = utility_name
        self.options_usage = options_usage
        self.operands_usage = operands_usage
        self.default_intro = default_intro
        self.help_width = help_width
        self.help_indent = help_indent
        self.colorful = colorful

        self._options = []
        self._operands = []
        self._dests = {}
        self._program = ""

        # per-parse state (reset by parse)
        self._tokens = deque()
        self._terminated = False
        self._done = set()
        self._namespace = {}

    # ---- Settings ----

    @property
    def separator(self):
        return self._separator

    @separator.setter
    def separator(self, value):
        self._separator = _prefix("separator", "" if value is None else value, single=True)

    @property
    def utility_name(self):
        """Configured utility name, else the program name read by the last parse."""
        return coalesce(self._utility, self._program)

    @utility_name.setter
    def utility_name(self, value):
        self._utility = Unset if value is Unset or value == "" else _prefix("utility_name", value)

    @property
    def colorful(self):
        return self._colorful

    @colorful.setter
    def colorful(self, value):
        if not isinstance(value, bool):
            raise TypeError("parser 'colorful' must be a bool")
        self._colorful = value

    @property
    def options(self):
        return tuple(self._options)

    @property
    def operands(self):
        return tuple(self._operands)

    # ---- Arguments ----

    def _register(self, group, argument, fallback, /):
        """
        Internal: add an argument to a group after checking names and dest for clashes.
        Signals publish no value and take no dest.
        """
        if argument.short_name is not None:
            if any(other.short_name == argument.short_name for other in self._options):
                raise ValueError(f"duplicate short option name {argument.short_name!r}")
        if argument.long_name is not None:
            if any(other.long_name == argument.long_name for other in self._options):
                raise ValueError(f"duplicate long option name {argument.long_name!r}")

        if not isinstance(argument, Signal):
            dest = coalesce(argument.dest, fallback)
            if dest in self._dests:
                raise ValueError(f"duplicate dest {dest!r}; pass an explicit dest to tell them apart")
            self._dests[dest] = argument._bind(dest)

        group.append(argument)
        logger.debug("Registered %r", argument)
        return argument

    @staticmethod
    def _derive(text, /):
        return re.sub(r"\W+", "_", text.strip()).strip("_").lower()

    def _named(self, argument, /):
        # punctuation names ("?", "#") normalize to nothing and are kept verbatim
        name = argument.long_name or argument.short_name
        return self._derive(name) or name

    def add_signal(self, short_name=None, long_name=None, descr=""):
        """
        Declare a signal such as -h/--help or --version.

        Matching it ends the parse with SignalRequested, skipping every pending check.
        """
        return self._register(self._options, Signal(short_name, long_name, descr), Unset)

    def add_flag(self, short_name=None, long_name=None, descr="", required=False, *, default=False, dest=Unset):
        """Declare a presence-only option; its value is True once matched."""
        argument = Boolean(short_name, long_name, descr, required, default=default, dest=dest)
        return self._register(self._options, argument, self._named(argument))

    def add_option(
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
    ):
        """
        Declare an option taking one value, converted through type (a type or a TextCodec).

        The default is published when the option is absent and shown in help unless the
        option is required.
        """
        argument = Value(short_name, long_name, value_name, descr, required, type=type, default=default, dest=dest)
        return self._register(self._options, argument, self._named(argument))

    def add_operand(self, value_name="", descr="", required=False, *, type=str, default=Unset, dest=Unset):
        """Declare a positional operand; operands are filled in declaration order."""
        argument = Value(None, None, value_name, descr, required, type=type, default=default, dest=dest, named=False)
        return self._register(self._operands, argument, self._derive(value_name) or "operand%d" % len(self._operands))

    def add_sink(self, value_name="", descr="", required=False, *, type=str, default=Unset, dest=Unset):
        """
        Declare a sink collecting every remaining operand into a list.

        The list starts with the elements of default; parsed tokens are appended.
        """
        argument = Sink(value_name, descr, required, type=type, default=default, dest=dest)
        return self._register(self._operands, argument, self._derive(value_name) or "operand%d" % len(self._operands))

    # ---- Classifier ----

    def _looks_like_long_option(self, token):
        return (
            not self._terminated and
            bool(self._long_prefix) and
            len(token) > len(self._long_prefix) and
            token.startswith(self._long_prefix)
        )

    def _looks_like_short_option(self, token):
        return (
            not self._terminated and
            len(token) > 1 and
            token[0] == self._short_prefix
        )

    # ---- Parse ----

    def parse(self, tokens=Unset):
        """
        Parse tokens (default: sys.argv) and return the outcome.

        Returns
        - Parsed(values) on success,
        - SignalRequested(short_name, long_name, argument) when a signal was matched,
        - Failed(error) with the first ParseError otherwise.

        The first token is the program name; an empty list is valid.
        """
        tokens = coalesce(tokens, sys.argv)
        if isinstance(tokens, str | bytes):
            raise TypeError("parse() tokens must be a sequence of strings, not a single string")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() tokens must be strings")

        self._tokens = deque(tokens)
        self._terminated = False
        self._done = set()
        self._namespace = {}

        for argument in self._dests.values():
            match argument:
                case Boolean() | Value():
                    self._namespace[argument.dest] = argument.default
                case Sink():
                    self._namespace[argument.dest] = list(argument.default)

        try:
            self._parse_utility()
            self._parse_options()
            self._parse_operands()
            self._parse_terminator()

            self._check_end()
            self._check_required(self._options)
            self._check_required(self._operands)
        except SignalInterrupt as signal:
            logger.debug("Signal requested: %r", signal.argument)
            return SignalRequested(signal.short_name, signal.long_name, signal.argument)
        except ParseError as error:
            logger.debug("Parse failed: %s", error)
            return Failed(error)

        return Parsed(Values(self._namespace))

    def parse_or_raise(self, tokens=Unset):
        """Like parse(), but return the values or raise ParseError / SignalInterrupt."""
        return self.parse(tokens).unwrap()

    def _parse_utility(self):
        if not self._tokens:
            return
        program = self._tokens.popleft()
        if self._utility is Unset:
            self._program = program

    def _parse_options(self):
        while self._tokens:
            if self._parse_terminator():
                break
            if self._parse_long_option():
                continue
            if self._parse_short_options():
                continue
            break

    def _parse_terminator(self):
        if (
            not self._tokens or
            self._terminated or
            not self._terminator or
            self._tokens[0] != self._terminator
        ):
            return False

        self._tokens.popleft()
        self._terminated = True
        logger.debug("Terminator %r seen, options are no longer recognized", self._terminator)
        return True

    def _parse_long_option(self):
        if not self._tokens or not self._looks_like_long_option(self._tokens[0]):
            return False

        token = self._tokens.popleft()
        name = token[len(self._long_prefix):]
        separator = value = ""
        if self._separator:
            name, separator, value = name.partition(self._separator)

        option = self._get_long_option(name)
        if option.has_value:
            if separator:
                self._consume(option, value)
            else:
                if not self._tokens:
                    raise MissingValueError("Cannot find value for option: " + token, token=token, argument=option)
                self._consume(option, self._tokens.popleft())
        elif separator:
            raise UnexpectedOptionValueError("Unexpected option value: " + token, token=token, argument=option)

        self._complete(option)
        return True

    def _parse_short_options(self):
        if not self._tokens or not self._looks_like_short_option(self._tokens[0]):
            return False

        token = self._tokens.popleft()
        names = deque(token[1:])

        while names:
            option = self._get_short_option(names.popleft())
            if option.has_value:
                if names:
                    # the rest of the group is the merged value
                    self._consume(option, "".join(names))
                    names.clear()
                else:
                    if not self._tokens:
                        raise MissingValueError("Cannot find value for option: " + token, token=token, argument=option)
                    self._consume(option, self._tokens.popleft())
            self._complete(option)

        return True

    def _parse_operands(self):
        for operand in self._operands:
            self._parse_operand(operand)

    def _parse_operand(self, operand):
        while True:
            self._parse_terminator()
            if not self._tokens:
                break

            token = self._tokens[0]
            if self._looks_like_long_option(token) or self._looks_like_short_option(token):
                raise UnexpectedOptionError("Unexpected option: " + token, token=token, argument=operand)

            self._consume(operand, self._tokens.popleft())
            self._complete(operand)
            if not operand.is_sink:
                break

    def _check_end(self):
        if self._tokens:
            token = self._tokens[0]
            raise UnexpectedArgumentError("Unexpected argument: " + token, token=token)

    def _check_required(self, arguments):
        for argument in arguments:
            if argument.required and argument not in self._done:
                name = self._expand_name(argument)
                raise MissingRequiredArgumentError(
                    "Cannot find required argument: " + name,
                    name=name,
                    argument=argument,
                )

    def _expand_name(self, argument):
        if argument.short_name is not None:
            return self._short_prefix + argument.short_name
        if argument.long_name is not None:
            return self._long_prefix + argument.long_name
        return argument.value_name

    def _get_long_option(self, name):
        if name:
            for option in self._options:
                if option.long_name == name:
                    return option
        raise UnknownOptionNameError("Unknown option name: " + name, name=name)

    def _get_short_option(self, name):
        for option in self._options:
            if option.short_name == name:
                return option
        raise UnknownOptionNameError("Unknown option name: " + name, name=name)

    def _consume(self, argument, text):
        """Decode one token into the value of argument."""
        match argument:
            case Value():
                self._namespace[argument.dest] = argument.codec.decode(text)
            case Sink():
                self._namespace[argument.dest].append(argument.codec.decode(text))
            case _:
                raise TypeError(f"{type(argument).__typename__} does not take a value")
        logger.debug("Consumed %r for %r", text, argument.dest)

    def _complete(self, argument):
        """Mark argument as satisfied; a signal interrupts the parse right here."""
        self._done.add(argument)
        match argument:
            case Signal():
                raise SignalInterrupt(argument)
            case Boolean():
                self._namespace[argument.dest] = True

    # ---- Help ----

    def render_help(self):
        """Return the help message as a rich Text (styled when colorful)."""
        return HelpFormatter(self).render()

    def format_help(self):
        """Return the help message as plain text."""
        return self.render_help().plain

    def print_help(self, console=None):
        """Print the help message through a rich console (stdout by default)."""
        console = console or Console()
        console.print(self.render_help(), soft_wrap=True, end="")

    def __rich__(self):
        return self.render_help()

    def __str__(self):
        return self.format_help()

    def __repr__(self):
        return f"Parser(options={len(self._options)}, operands={len(self._operands)})"


__all__ = (
    "Parser",
)
