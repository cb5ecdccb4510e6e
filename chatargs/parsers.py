"""
chatargs type parsers.

Each parser takes the tokens still available to its step (a tuple of Token)
and a validated configuration, consumes a prefix of the tokens and returns a
ParserResult whose `unconsumed` is the matching suffix slice. Parsers never
raise on bad input: problems come back as ParsingError values.

- number(tokens, config): one token (strict) or the longest run of leading
  tokens whose concatenation converts to a new number (non-strict).
- string(tokens, config): exactly one token, verbatim.
- one_of(tokens, config): exactly one token, checked against accepted values.
- rest(tokens): every remaining token, joined with single spaces.

Empty input: number/string/one_of return their default (no raw text) or a
MISSING error; rest returns an empty string.
"""
import math

from .configs import StringConfig, NumberConfig
from .faults import ParsingError
from .results import ParsedArgument, ParserResult
from .tokens import substring
from .utils import Unset, coalesce


def _missing(config):
    if config.default is not None:
        return ParserResult(ParsedArgument.success(config.default))
    return ParserResult(ParsedArgument.failure(ParsingError.MISSING))


def _grow(tokens, convert):
    """
    Non-strict scan: concatenate leading tokens one at a time and keep the
    longest prefix that converts to a value different from the previous valid
    one. Returns (value, index of the last consumed token).

    - A prefix that repeats the last valid value (a prefix-stopping converter
      ignoring the new text) does not move the boundary.
    - The first failing prefix after a valid one ends the number.
    - When nothing converts, the first token is reported as consumed with Unset.
    """
    value = last = Unset
    text = ""
    for index, token in enumerate(tokens):
        text += token.text
        candidate = convert(text)
        if candidate is Unset:
            if last is not Unset:
                break
            continue
        if last is not Unset and candidate == value:
            continue
        value, last = candidate, index
    return value, coalesce(last, 0)


def number(tokens, config=Unset, /):
    """
    Parse a number from the leading token(s).

    Validation order on the converted value:
    SYNTAX_ERROR (not a number), OUT_OF_RANGE (outside [min, max]),
    FLOAT_REJECTED (non-integral with reject_floats), then half-up rounding
    when `round` is set. The raw text is the original span of every consumed
    token, spacing included.
    """
    config = coalesce(config, _NUMBER)
    if not tokens:
        return _missing(config)

    if config.strict:
        value, last = config.converter(tokens[0].text), 0
    else:
        value, last = _grow(tokens, config.converter)

    raw = substring(tokens[0], tokens[last])
    unconsumed = tokens[last + 1:]

    if value is Unset:
        return ParserResult(ParsedArgument.failure(ParsingError.SYNTAX_ERROR, raw), unconsumed)

    if (config.min is not None and value < config.min) or (config.max is not None and value > config.max):
        return ParserResult(ParsedArgument.failure(ParsingError.OUT_OF_RANGE, raw), unconsumed)

    if config.reject_floats and int(value) != value:
        return ParserResult(ParsedArgument.failure(ParsingError.FLOAT_REJECTED, raw), unconsumed)

    if config.round:
        if int(value) == value:
            value = int(value)
        else:
            # half-up: floor(value + 1/2) without mixing float into exact number types
            value = math.floor(value * 2 + 1) // 2

    return ParserResult(ParsedArgument.success(value, raw), unconsumed)


def string(tokens, config=Unset, /):
    """
    Consume one token and return its text as both value and raw text.
    """
    config = coalesce(config, _STRING)
    if not tokens:
        return _missing(config)

    text = tokens[0].text
    return ParserResult(ParsedArgument.success(text, text), tokens[1:])


def one_of(tokens, config, /):
    """
    Consume one token and accept it only if it is listed in `config.accepted`.

    Case-insensitive configs return the accepted spelling as the value; the
    raw text is always what the user typed. A rejected token is still consumed.
    """
    if not tokens:
        return _missing(config)

    text = tokens[0].text
    if config.case_sensitive:
        value = text if text in config.accepted else None
    else:
        value = config.folded.get(text.lower())

    if value is None:
        return ParserResult(ParsedArgument.failure(ParsingError.VALUE_NOT_LISTED, text), tokens[1:])
    return ParserResult(ParsedArgument.success(value, text), tokens[1:])


def rest(tokens, /):
    """
    Consume every remaining token; value and raw text are the single-space join.
    Never fails, not even on empty input.
    """
    text = " ".join(token.text for token in tokens)
    return ParserResult(ParsedArgument.success(text, text), tokens[len(tokens):])


_NUMBER = NumberConfig()
_STRING = StringConfig()


__all__ = (
    "number",
    "string",
    "one_of",
    "rest",
)
