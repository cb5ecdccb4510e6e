"""
chatargs numeric converters.

A converter turns a piece of text into a number. Failure is an explicit
outcome: convert() returns the Unset sentinel instead of a number, so no
caller has to test for a NaN float to know the text was not numeric.

Provided
- Converter: abstract base; subclasses implement convert(text).
- DecimalConverter: locale-agnostic decimal notation (sign, digits, optional
  fraction and exponent). Integers come back as int, the rest as float.
- LeadingIntegerConverter: reads the longest leading integer and ignores the
  rest of the text ("12abc" -> 12), like C's atoi-family parsers.
- CallableConverter: adapts any plain callable (int, float, a locale-bound
  parser, ...) raising ValueError/TypeError/ArithmeticError on bad input.
- as_converter(object): normalize Unset / Converter / callable into a Converter.

Non-finite results (nan, inf) are treated as failed conversions by every
converter shipped here.
"""
import math
import re
from abc import ABC, abstractmethod
from numbers import Real

from .utils import Unset


class Converter(ABC):
    """
    Capability “text -> number, or Unset when the text is not a number”.
    """

    @abstractmethod
    def convert(self, text, /):
        ...

    def __call__(self, text, /):
        return self.convert(text)

    def __repr__(self):
        return "%s()" % type(self).__name__


def _checked(value):
    """
    Return `value` if it is a finite real number, Unset for nan/inf.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError("converters must produce real numbers, got %r" % type(value).__name__)
    if not math.isfinite(value):
        return Unset
    return value


def _integer(digits):
    """
    int(digits), or Unset past the interpreter's integer string conversion limit.
    """
    try:
        return int(digits)
    except ValueError:
        return Unset


class DecimalConverter(Converter):
    """
    Plain decimal notation: "+1000", "-12.5", ".5", "1e3".

    Thousands separators, underscores, hex/octal prefixes and the words
    "nan"/"inf" are rejected; locale-specific formats belong in a custom converter.
    """
    pattern = re.compile(r"[+-]?(?:(?P<integer>\d+)(?P<fraction>\.\d*)?|\.\d+)(?P<exponent>[eE][+-]?\d+)?")

    def convert(self, text, /):
        match = self.pattern.fullmatch(text.strip())
        if not match:
            return Unset
        if match["integer"] is not None and match["fraction"] is None and match["exponent"] is None:
            return _integer(match.group())
        return _checked(float(match.group()))


class LeadingIntegerConverter(Converter):
    """
    Longest leading (optionally signed) integer of the text; Unset when the
    text does not start with one. Growing "12" into "12abc" keeps returning 12.
    """
    pattern = re.compile(r"\s*([+-]?\d+)")

    def convert(self, text, /):
        match = self.pattern.match(text)
        if not match:
            return Unset
        return _integer(match.group(1))


class CallableConverter(Converter):
    """
    Wrap a plain callable. Exceptions signalling bad input become Unset.
    """

    def __init__(self, function, /):
        if not callable(function):
            raise TypeError("CallableConverter() argument must be callable")
        self.function = function

    def convert(self, text, /):
        try:
            value = self.function(text)
        except (ValueError, TypeError, ArithmeticError):
            return Unset
        return _checked(value)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.function)


DEFAULT_CONVERTER = DecimalConverter()


def as_converter(object=Unset, /):
    """
    Normalize a converter option.

    - Unset      → DEFAULT_CONVERTER
    - Converter  → itself
    - callable   → CallableConverter(object)

    Raises
    - TypeError for anything else.
    """
    if object is Unset:
        return DEFAULT_CONVERTER
    if isinstance(object, Converter):
        return object
    if callable(object):
        return CallableConverter(object)
    raise TypeError("converter must be a Converter or a callable")


__all__ = (
    "Converter",
    "DecimalConverter",
    "LeadingIntegerConverter",
    "CallableConverter",
    "DEFAULT_CONVERTER",
    "as_converter",
)
