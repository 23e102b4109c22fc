"""
slimargs help layout: usage line, glossaries and word wrapping.

Layout
- prolog paragraph (optional), followed by a blank line
- usage section: title, then the utility name and one token per option and operand
  ("-a" when required, "[-b VALUE]" when optional, "FILES..." for a sink), wrapped
  with a hanging indent of twice the help indent
- options and operands glossaries: title, then one entry per argument with the
  names in the left column and the description (plus "(default: ...)") in the
  right column, aligned on the widest name column of the section
- epilog paragraph (optional)

Word wrap
- Text is split on spaces (runs of spaces collapse) and on newlines (forced breaks).
- A token that does not fit in the width starts a new line at the hanging indent,
  unless nothing was written past the hanging indent yet: overlong tokens are never
  split and are placed on their own line.

Every section is assembled as a rich Text. Styles are only applied when the parser is
colorful, so the plain text is identical in both modes. Override the palette through
a __styles__ mapping in __main__.
"""
from collections import defaultdict

from rich.text import Text

from .arguments import Signal

NEWLINE = "\n"


def tokenize(text, /):
    """
    Split text into words and forced line breaks.

    Spaces separate words and never produce tokens; every newline becomes a "\\n" token.

    Example
    - "First\\nSecond  line" -> ["First", "\\n", "Second", "line"]
    """
    tokens = []
    for index, line in enumerate(text.split(NEWLINE)):
        if index:
            tokens.append(NEWLINE)
        tokens.extend(filter(None, line.split(" ")))
    return tokens


def wrap(out, tokens, width, position, hanging, style="", /):
    """
    Append tokens to out, wrapping at width.

    Parameters
    - out: Text receiving the output.
    - tokens: iterable of str | Text; "\\n" is a forced break.
    - width: maximum line width (columns).
    - position: column where the first token starts (text before it is already written).
    - hanging: indentation of every continuation line.
    - style: style applied to str tokens.

    Returns
    - the column after the last written token.
    """
    spaces = 0

    for token in tokens:
        newline = isinstance(token, str) and token == NEWLINE
        overflow = position + spaces + len(token) > width

        if newline or (overflow and position > hanging):
            out.append(NEWLINE)
            position = 0
            spaces = hanging
            if newline:
                continue

        out.append(" " * spaces)
        if isinstance(token, Text):
            out.append(token)
        else:
            out.append(token, style)
        position += spaces + len(token)
        spaces = 1

    return position


class HelpFormatter:
    """
    Render the help message of a parser.

    The formatter only reads the parser: its settings (prefixes, titles, usage strings,
    default intro, width, indent, prolog, epilog, colorful) and its registered options
    and operands. It never touches parse state.
    """

    def __init__(self, parser, /):
        self.parser = parser

        self.styles = defaultdict(str, {
            # === Head sections ===
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "description-section": "italic #A3A3A3",  # Neutral gray
            "epilog-section": "#737373",  # Dim footer gray

            # === Groups / arguments ===
            "group-label": "bold #FFFFFF",  # Pure white headers
            "argument-description": "#9CA3AF",  # Muted gray
            "default-value": "italic #9CA3AF",

            # === Names / metavars ===
            "option-name": "bold #00E6FF",  # CYAN for options
            "signal-name": "bold #22C55E",  # GREEN for signals
            "metavar": "bold #FFD600",  # AMBER for parameters
        } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(self, style):
        return self.styles[style] if self.parser.colorful else ""

    def text(self, fragment, style=""):
        return Text(fragment, self.styler(style))

    def name(self, argument):
        """Usage/glossary label of a named argument: short form preferred."""
        if argument.short_name is not None:
            return self.parser.short_prefix + argument.short_name
        if argument.long_name is not None:
            return self.parser.long_prefix + argument.long_name
        return ""

    def name_style(self, argument):
        return "signal-name" if isinstance(argument, Signal) else "option-name"

    def usage_token(self, argument):
        token = Text()
        if name := self.name(argument):
            token.append(name, self.styler(self.name_style(argument)))

        if argument.has_value:
            if token:
                token.append(" ")
            token.append(argument.value_name, self.styler("metavar"))

        if not argument.required:
            token = Text.assemble("[", token, "]")

        if argument.is_sink:
            token.append("...")

        return token

    def usage_tokens(self, override, arguments, /):
        if override:
            return [self.text(override, "usage-section")]
        return [self.usage_token(argument) for argument in arguments]

    def paragraph(self, out, paragraph, style, /):
        if not paragraph:
            return
        wrap(out, tokenize(paragraph), self.parser.help_width, 0, 0, self.styler(style))
        out.append("\n\n")

    def usage(self, out):
        parser = self.parser
        if not parser.usage_title:
            return

        tokens = []
        if utility := parser.utility_name:
            tokens.append(self.text(utility, "program-name"))
        tokens.extend(self.usage_tokens(parser.options_usage, parser.options))
        tokens.extend(self.usage_tokens(parser.operands_usage, parser.operands))

        indent = parser.help_indent
        out.append(parser.usage_title, self.styler("usage-label")).append("\n")
        out.append(" " * indent)
        wrap(out, tokens, parser.help_width, indent, indent * 2)
        out.append("\n\n")

    def term(self, argument, any_short, /):
        """
        Left glossary column: "-s, --long VALUE" with alignment padding when only some
        arguments of the section have a short name.
        """
        parser = self.parser
        term = Text()

        if any_short:
            if argument.short_name is None:
                term.append("  ")
            else:
                term.append(parser.short_prefix + argument.short_name, self.styler(self.name_style(argument)))

        if argument.long_name is not None:
            if any_short:
                term.append(", " if argument.short_name is not None else "  ")
            term.append(parser.long_prefix + argument.long_name, self.styler(self.name_style(argument)))

        if argument.has_value:
            if term:
                term.append(" ")
            term.append(argument.value_name, self.styler("metavar"))

        return term

    def glossary(self, out, title, arguments, /):
        parser = self.parser
        if not title or not arguments:
            return

        any_short = any(argument.short_name is not None for argument in arguments)
        entries = []

        for argument in arguments:
            descr = tokenize(argument.descr)
            if parser.default_intro and not argument.required and argument.default_text:
                descr.append(self.text("(" + parser.default_intro + argument.default_text + ")", "default-value"))
            entries.append((self.term(argument, any_short), descr))

        out.append(title, self.styler("group-label")).append("\n")

        indent = parser.help_indent
        tab = indent + max(len(term) for term, _ in entries) + indent
        for term, descr in entries:
            out.append(" " * indent).append(term).append(" " * (tab - indent - len(term)))
            wrap(out, descr, parser.help_width, tab, tab, self.styler("argument-description"))
            out.append("\n")

        out.append("\n")

    def render(self):
        """Assemble prolog, usage, options, operands and epilog into one Text."""
        parser = self.parser
        out = Text()
        self.paragraph(out, parser.prolog, "description-section")
        self.usage(out)
        self.glossary(out, parser.options_title, parser.options)
        self.glossary(out, parser.operands_title, parser.operands)
        self.paragraph(out, parser.epilog, "epilog-section")
        return out


__all__ = (
    "tokenize",
    "wrap",
    "HelpFormatter",
)
