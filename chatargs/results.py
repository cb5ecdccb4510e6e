"""
chatargs results: what parser steps and compiled parsers hand back.

- ParsedArgument: one parsed value, the raw text it came from, and an
  optional ParsingError. A value is present exactly when no error is set;
  a default applied to missing input is a success without raw text.
- ParserResult: the ParsedArgument of one step plus the unconsumed tokens,
  always a suffix slice of the tokens the step received.
- ParsedCommand: the command token, the untouched input line and one
  ParsedArgument per pipeline step, in declaration order.

All three are named tuples: immutable, structurally comparable and cheap to
build once per step/invocation.
"""
from typing import NamedTuple


class ParsedArgument(NamedTuple):
    value: object = None
    raw: str | None = None
    error: object = None

    @classmethod
    def success(cls, value, raw=None, /):
        """
        Build a successful argument. A missing raw text means the value is a default.
        """
        return cls(value, raw, None)

    @classmethod
    def failure(cls, error, raw=None, /):
        """
        Build a failed argument carrying `error` and, if known, the offending raw text.
        """
        if error is None:
            raise TypeError("ParsedArgument.failure() requires an error")
        return cls(None, raw, error)

    @property
    def ok(self):
        return self.error is None


class ParserResult(NamedTuple):
    result: ParsedArgument
    unconsumed: tuple = ()


class ParsedCommand(NamedTuple):
    command: str
    raw: str
    args: tuple = ()

    @property
    def ok(self):
        """
        True when no argument carries an error.
        """
        return all(argument.error is None for argument in self.args)

    @property
    def errors(self):
        """
        (index, argument) pairs for every failed argument, in step order.
        """
        return tuple((index, argument) for index, argument in enumerate(self.args) if argument.error is not None)

    @property
    def values(self):
        """
        The parsed values in step order (None where a step failed).
        """
        return tuple(argument.value for argument in self.args)


__all__ = (
    "ParsedArgument",
    "ParserResult",
    "ParsedCommand",
)
