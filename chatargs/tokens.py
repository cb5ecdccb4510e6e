"""
chatargs tokenizer: split a command line into offset-carrying tokens.

What this module provides
- Token: an immutable slice of the original line (text plus start/end offsets
  and a reference to the line itself).
- tokenize(text, delimiter): split a line on a delimiter pattern (whitespace by
  default), keeping every non-empty run as a Token.
- substring(first, last): rebuild the exact original text spanning two tokens,
  inter-token spacing included.

Why offsets
- Parsers report the `raw` text they consumed. For multi-token values (e.g. a
  number typed as "1 000") the raw text must be what the user typed, not a
  re-join of the token texts, so every Token remembers where it came from.

Example
    >>> tokens = tokenize("/pay  1 000 to bob")
    >>> [token.text for token in tokens]
    ['/pay', '1', '000', 'to', 'bob']
    >>> substring(tokens[1], tokens[2])
    '1 000'
"""
import re
from typing import NamedTuple

from .utils import Unset

WHITESPACE = re.compile(r"\s+")


class Token(NamedTuple):
    """
    A delimiter-free run of the original line.

    Fields
    - text: the token text.
    - start / end: offsets in `source` (end is exclusive).
    - source: the whole line the token was cut from.
    """
    text: str
    start: int
    end: int
    source: str

    @property
    def eol(self):
        """
        The original line from the beginning of this token up to the end of the line.
        """
        return self.source[self.start:]

    def __repr__(self):
        return "token(%r, %d, %d)" % (self.text, self.start, self.end)


def tokenize(text, /, delimiter=WHITESPACE):
    """
    Split `text` into a tuple of Tokens.

    Parameters
    - text: str
      The raw line. An empty (or delimiter-only) line yields an empty tuple.
    - delimiter: re.Pattern | str
      Pattern matching the separators. Empty runs between two separators are
      dropped, so leading/trailing/repeated separators never produce tokens.

    Raises
    - TypeError: when text is not a string or delimiter is not a pattern.
    """
    if not isinstance(text, str):
        raise TypeError("tokenize() argument must be a string")
    if isinstance(delimiter, str):
        delimiter = re.compile(delimiter)
    elif not isinstance(delimiter, re.Pattern):
        raise TypeError("tokenize() delimiter must be a string or a compiled pattern")

    tokens = []
    start = 0
    for match in delimiter.finditer(text):
        if match.start() > start:
            tokens.append(Token(text[start:match.start()], start, match.start(), text))
        start = match.end()
    if start < len(text):
        tokens.append(Token(text[start:], start, len(text), text))
    return tuple(tokens)


def substring(first, last=Unset, /):
    """
    Return the original text spanning `first` through `last` (inclusive).

    When `last` is omitted the span runs to the end of the line.

    Raises
    - ValueError: when the tokens come from different lines or `last` starts
      before `first`.
    """
    if last is Unset:
        return first.eol
    if first.source is not last.source and first.source != last.source:
        raise ValueError("substring() tokens must come from the same line")
    if last.start < first.start:
        raise ValueError("substring() last token cannot precede the first one")
    return first.source[first.start:last.end]


__all__ = (
    "Token",
    "WHITESPACE",
    "tokenize",
    "substring",
)
