r"""
chatargs parser configurations.

Overview
- StringConfig: optional default for the string step.
- NumberConfig: default, inclusive bounds, rounding/float policy, strict mode
  and the numeric converter for the number step.
- OneOfConfig: accepted values, optional default and case sensitivity for the
  one-of step.

Every config is validated once, when it is constructed (i.e. while the
pipeline is being assembled), never per parse. A bad configuration is a
programming mistake and raises TypeError/ValueError immediately.

Metadata (sanitized on construction)
- default: Unset or a value of the step's type. Explicit None is rejected;
  omit the parameter instead.
- min/max (NumberConfig): Unset or real numbers (bool excluded), min <= max,
  and a default must lie inside them.
- converter (NumberConfig): Unset (decimal notation), a Converter, or a callable.
- accepted (OneOfConfig): non-empty iterable of strings without duplicates
  (order is kept: in case-insensitive mode the first match is canonical).

Introspection
- Fields listed in __introspectable__ are exposed as read-only properties and
  drive __repr__/__rich_repr__.

Quick example:
    >>> NumberConfig(min=0, max=100, reject_floats=True)
    number-config(default=None, min=0, max=100, round=False, reject_floats=True, strict=False, converter=DecimalConverter())
    >>> NumberConfig(min=10, max=5)
    Traceback (most recent call last):
    ValueError: number-config 'min' cannot be greater than 'max'
"""
import functools
import operator
import re
import warnings
from collections.abc import Iterable
from numbers import Real
from types import MappingProxyType

from .converters import as_converter
from .faults import AmbiguousChoiceWarning
from .utils import *


class ParserConfig:
    """
    Base of the step configurations: read-only properties and stable reprs.
    """
    __introspectable__ = ()

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower()
        for name in cls.__introspectable__:
            setattr(cls, name, mirror(name))

    def __repr__(self):
        return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


def _sanitize_default(cls, metadata, kind, label, /):
    """
    Internal: the default must be Unset or an instance of `kind` (bool excluded).
    Stored as None when omitted.
    """
    default = metadata["default"]
    if default is not Unset and (not isinstance(default, kind) or isinstance(default, bool)):
        raise TypeError(f"{cls.__typename__} 'default' must be {label}")
    metadata["default"] = coalesce(default)


def _sanitize_flags(cls, metadata, /, *names):
    """
    Internal: boolean switches must be actual booleans.
    """
    for name in names:
        if not isinstance(metadata[name], bool):
            raise TypeError(f"{cls.__typename__} {name!r} must be a boolean")


class StringConfig(ParserConfig):
    """
    Configuration of the string step: a single optional default.
    """
    __introspectable__ = ("default",)

    def __init__(self, *, default=Unset):
        metadata = {"default": default}
        _sanitize_default(type(self), metadata, str, "a string")
        self._default = metadata["default"]


class NumberConfig(ParserConfig):
    """
    Configuration of the number step.

    Parameters
    - default: Unset | Real
      Value returned (without raw text) when no token is left.
    - min / max: Unset | Real
      Inclusive bounds; a parsed value outside them is OUT_OF_RANGE.
    - round: bool
      Round the parsed value half-up to an integer.
    - reject_floats: bool
      Report FLOAT_REJECTED for non-integral values. Wins over `round`.
    - strict: bool
      Consume exactly one token. When False, leading tokens are concatenated
      as long as that keeps producing a new number ("+ 1 000" -> 1000).
    - converter: Unset | Converter | Callable[[str], Real]
      Text-to-number capability; see chatargs.converters.
    """
    __introspectable__ = (
        "default",
        "min",
        "max",
        "round",
        "reject_floats",
        "strict",
        "converter",
    )

    def __init__(
            self,
            *,
            default=Unset,
            min=Unset,
            max=Unset,
            round=False,
            reject_floats=False,
            strict=False,
            converter=Unset,
    ):
        cls = type(self)
        metadata = {
            "default": default,
            "min": min,
            "max": max,
            "round": round,
            "reject_floats": reject_floats,
            "strict": strict,
            "converter": converter,
        }
        _sanitize_default(cls, metadata, Real, "a number")
        _sanitize_flags(cls, metadata, "round", "reject_floats", "strict")

        for name in ("min", "max"):
            bound = metadata[name]
            if bound is not Unset and (not isinstance(bound, Real) or isinstance(bound, bool)):
                raise TypeError(f"{cls.__typename__} {name!r} must be a number")
            metadata[name] = coalesce(bound)

        low, high, default = metadata["min"], metadata["max"], metadata["default"]
        if low is not None and high is not None and low > high:
            raise ValueError(f"{cls.__typename__} 'min' cannot be greater than 'max'")
        if default is not None:
            if low is not None and default < low:
                raise ValueError(f"{cls.__typename__} 'default' cannot be lower than 'min'")
            if high is not None and default > high:
                raise ValueError(f"{cls.__typename__} 'default' cannot be greater than 'max'")

        metadata["converter"] = as_converter(converter)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class OneOfConfig(ParserConfig):
    """
    Configuration of the one-of step.

    Parameters
    - accepted: Iterable[str]
      The accepted values. Sequences must not contain duplicates; sets are
      taken in iteration order.
    - default: Unset | str
      Value returned when no token is left; must be one of `accepted`.
    - case_sensitive: bool
      When False, a token matches the first accepted value equal to it once
      both are lowercased, and the accepted spelling is returned.
    """
    __introspectable__ = (
        "accepted",
        "default",
        "case_sensitive",
    )

    def __init__(self, accepted, /, *, default=Unset, case_sensitive=True):
        cls = type(self)
        if isinstance(accepted, str) or not isinstance(accepted, Iterable):
            raise TypeError(f"{cls.__typename__} 'accepted' must be an iterable of strings")

        sanitized = []
        for value in accepted:
            if not isinstance(value, str):
                raise TypeError(f"{cls.__typename__} 'accepted' must only contain strings")
            if value in sanitized:
                raise ValueError(f"{cls.__typename__} 'accepted' cannot contain duplicates")
            sanitized.append(value)
        if not sanitized:
            raise ValueError(f"{cls.__typename__} 'accepted' cannot be empty")

        metadata = {"default": default, "case_sensitive": case_sensitive}
        _sanitize_default(cls, metadata, str, "a string")
        _sanitize_flags(cls, metadata, "case_sensitive")
        if metadata["default"] is not None and metadata["default"] not in sanitized:
            raise ValueError(f"{cls.__typename__} default {metadata['default']!r} is not an accepted value")

        folded = {}
        for value in sanitized:
            if folded.setdefault(value.lower(), value) != value and not case_sensitive:
                warnings.warn(
                    AmbiguousChoiceWarning(
                        f"{cls.__typename__} value {value!r} is shadowed by {folded[value.lower()]!r} when case is ignored"
                    ),
                    stacklevel=2,
                )

        self._accepted = tuple(sanitized)
        self._default = metadata["default"]
        self._case_sensitive = case_sensitive
        self._folded = MappingProxyType(folded)

    @property
    def folded(self):
        """
        Lowercased value -> canonical accepted value (first one wins).
        """
        return self._folded


__all__ = (
    "ParserConfig",
    "StringConfig",
    "NumberConfig",
    "OneOfConfig",
)
