"""
chatargs faults (parsing errors and warnings) and rendering.

Scope
- ParsingError: canonical, stable codes for every user-input problem a parser
  step can report. They are data, stored in ParsedArgument.error, and are never
  raised across the pipeline boundary.
- AmbiguousChoiceWarning: configuration-time warning for one-of values that
  collide once case is ignored.
- report(): build a rich renderable describing the failed arguments of a
  ParsedCommand, position first (“second argument …”).
- emit(): print that report to a console.

UX goals
- Position-first messages: every message names the ordinal position of the
  argument so users can map the complaint back to what they typed.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The core never decides what to do with an error; a caller (e.g. middleware
  with an error handler) can hand the ParsedCommand to report()/emit().
"""
import functools
from collections import defaultdict
from enum import StrEnum

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class ParsingError(StrEnum):
    """
    canonical parsing error codes (stable identifiers).

    - MISSING: no token left and no default configured.
    - SYNTAX_ERROR: the consumed text cannot be converted to the target shape.
    - OUT_OF_RANGE: the converted number violates a configured bound.
    - FLOAT_REJECTED: the converted number is not integral and integers are required.
    - VALUE_NOT_LISTED: the token is not one of the accepted one-of values.
    """
    MISSING          = "MISSING"
    SYNTAX_ERROR     = "SYNTAX_ERROR"
    OUT_OF_RANGE     = "OUT_OF_RANGE"
    FLOAT_REJECTED   = "FLOAT_REJECTED"
    VALUE_NOT_LISTED = "VALUE_NOT_LISTED"

    @property
    def title(self):
        """
        short, lowercased label used as the report header.
        """
        return _COPY[self][0]

    @property
    def hint(self):
        """
        one actionable sentence shown under the message.
        """
        return _COPY[self][2]

    def describe(self, position, raw=None, /):
        """
        return the position-first message for an argument at a 1-based position.
        """
        message = _COPY[self][1]
        if raw is None:
            return message % _ordinal(position)
        return message % _ordinal(position) + " (got %r)" % raw


# title, message (ordinal first), hint
_COPY = {
    ParsingError.MISSING: (
        "missing argument",
        "%s argument is missing",
        "add the missing value after the command",
    ),
    ParsingError.SYNTAX_ERROR: (
        "syntax error",
        "%s argument cannot be read as the expected type",
        "check the value for typos",
    ),
    ParsingError.OUT_OF_RANGE: (
        "out of range",
        "%s argument is outside the allowed range",
        "pick a value inside the allowed bounds",
    ),
    ParsingError.FLOAT_REJECTED: (
        "whole number required",
        "%s argument must be a whole number",
        "drop the decimal part",
    ),
    ParsingError.VALUE_NOT_LISTED: (
        "value not listed",
        "%s argument is not one of the accepted values",
        "use one of the listed values",
    ),
}


class AmbiguousChoiceWarning(UserWarning):
    """
    Emitted while configuring a case-insensitive one-of step whose accepted
    values collide once lowercased. Only the first colliding value can ever match.
    """


_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def _ordinal(number):
    """
    Position label: words up to "tenth", then "11th", "21st", "112th", ...
    """
    if 1 <= number <= len(_WORDS):
        return _WORDS[number - 1]
    suffix = "th" if number % 100 in (11, 12, 13) else {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def report(parsed, /, *, colorful=True, fancy=False, width=Unset):
    """
    build a rich renderable for the failed arguments of a ParsedCommand.

    layout
    - header: "[ <command> — <n> invalid argument(s) ]"
    - one block per failed argument: "<code> | <title>", the position-first
      message, and a "→ hint" line.
    - fancy wraps everything in a Panel (optionally `width` wide); otherwise a
      plain Group is returned.

    styles
    - defaults below can be overridden by a __styles__ mapping in __main__.
    """
    main = __import__("__main__")

    styles = defaultdict(str, {
        # header parts
        "command": "bold #E6E6F0",  # near-white command name
        "title": "bold #FF4DA6",  # friendly pinky title

        # per-argument block
        "code": "bold #00E5FF",  # neon cyan error code
        "error-title": "#FF4DA6",
        "error-message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    } | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        return Text(str(fragment), styles[style] if colorful else "")

    errors = parsed.errors
    header = Text.assemble(
        "[ ",
        text(parsed.command or "(no command)", "command"),
        " — ",
        text("%d invalid argument%s" % (len(errors), "" if len(errors) == 1 else "s"), "title"),
        " ]",
    )

    blocks = []
    for index, argument in errors:
        error = argument.error
        blocks.append(Text.assemble(text(error.value, "code"), " | ", text(error.title, "error-title")))
        blocks.append(text(error.describe(index + 1, argument.raw), "error-message"))
        blocks.append(Text.assemble(text(" → ", "hint-arrow"), text(error.hint, "hint")))

    if fancy:
        return Panel(Group(*blocks), title=header, title_align="left", width=coalesce(width))
    return Group(header, *blocks)


def emit(parsed, /, *, output=Unset, **options):
    """
    print the report of `parsed` when it carries errors.

    parameters
    - output: rich Console to print to (defaults to the module stderr console).
    - options: forwarded to report().

    returns
    - True when something was printed, False for an error-free command.
    """
    if parsed.ok:
        return False
    coalesce(output, console).print(report(parsed, **options))
    return True


__all__ = (
    "ParsingError",
    "AmbiguousChoiceWarning",
    "report",
    "emit",
)
