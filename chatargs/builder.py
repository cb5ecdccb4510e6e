"""
chatargs builder layer: declare argument steps, compile them into a parser.

What this module provides
- ArgParserBuilder: fluent, append-only declaration of parser steps
  (number, string, one_of, rest, custom). Every declaration validates its
  configuration immediately and returns the same builder for chaining.
- ArgParser: the compiled, immutable pipeline. Calling it with a line of text
  returns a ParsedCommand. It shares nothing mutable with the builder, so it
  can be reused (and called concurrently) after the builder changes.
- OnErrorAction: what middleware built by to_middleware() does when at least
  one argument failed.

Pipeline
- tokenize the line, pop the first token as the command (including any "/"),
  then hand the remaining tokens to each step in declaration order. Each step
  consumes a prefix and passes the suffix on; steps that run out of tokens
  apply their own empty-input policy.

Quick start
    from chatargs import ArgParserBuilder

    parser = (
        ArgParserBuilder()
        .number(min=1, max=100, reject_floats=True)
        .one_of(("USD", "EUR"), case_sensitive=False)
        .rest()
        .to_parser()
    )
    parsed = parser("/pay 1 0 eur lunch money")
    # parsed.args[0].value == 10, parsed.args[1].value == "EUR",
    # parsed.args[2].value == "lunch money"
"""
import functools
from enum import StrEnum

import structlog

from . import parsers
from .configs import StringConfig, NumberConfig, OneOfConfig
from .results import ParsedCommand, ParserResult
from .tokens import WHITESPACE, tokenize
from .utils import Unset, coalesce, rename

logger = structlog.get_logger(__name__)


class OnErrorAction(StrEnum):
    """
    Built-in reactions to a command with invalid arguments.

    - IGNORE: call the handler anyway; it inspects the errors itself.
    - CALL_NEXT: skip the handler and call `next` instead.
    """
    IGNORE = "IGNORE"
    CALL_NEXT = "CALL_NEXT"


def _call_next(context, parsed, next, /):
    return next()


def _resolve_config(cls, config, options, method):
    """
    Internal: accept either a ready config object or its keyword options.
    """
    if config is Unset:
        return cls(**options)
    if options:
        raise TypeError(f"{method}() takes either a config or keyword options, not both")
    if not isinstance(config, cls):
        raise TypeError(f"{method}() config must be a {cls.__name__}")
    return config


def _checked_step(step):
    """
    Wrap a custom step so its result honours the pipeline contract: a
    ParserResult whose unconsumed tokens are a suffix of the step's input.
    """
    @functools.wraps(step)
    def wrapper(tokens):
        result = step(tokens)
        if not isinstance(result, ParserResult):
            raise TypeError(f"custom step {step!r} must return a ParserResult")
        size = len(result.unconsumed)
        if size > len(tokens) or tuple(result.unconsumed) != tuple(tokens[len(tokens) - size:]):
            raise ValueError(f"custom step {step!r} returned tokens that are not a suffix of its input")
        return ParserResult(result.result, tokens[len(tokens) - size:])

    return wrapper


class ArgParser:
    """
    Compiled argument pipeline: `parser(text) -> ParsedCommand`.

    Instances are immutable and hold no per-call state.
    """
    __slots__ = ("_steps", "_delimiter")

    def __init__(self, steps, /, delimiter=WHITESPACE):
        object.__setattr__(self, "_steps", tuple(steps))
        object.__setattr__(self, "_delimiter", delimiter)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    @property
    def steps(self):
        return self._steps

    @property
    def delimiter(self):
        return self._delimiter

    def __call__(self, text, /):
        tokens = tokenize(text, self._delimiter)
        command = tokens[0].text if tokens else ""

        args = []
        remaining = tokens[1:]
        for step in self._steps:
            result = step(remaining)
            args.append(result.result)
            remaining = result.unconsumed

        return ParsedCommand(command, text, tuple(args))

    def __len__(self):
        return len(self._steps)

    def __repr__(self):
        return "arg-parser(steps=%d)" % len(self._steps)

    def __rich_repr__(self):
        yield "steps", self._steps
        yield "delimiter", self._delimiter.pattern if hasattr(self._delimiter, "pattern") else self._delimiter


class ArgParserBuilder:
    """
    Fluent declaration of argument steps.

    Each argument becomes a step: a callable `(tokens) -> ParserResult` bound
    to a validated, immutable configuration. The builder stays mutable while it
    is being configured; to_parser() snapshots it into an independent ArgParser.

    Parameters
    - delimiter: re.Pattern | str
      Separator pattern used to tokenize the incoming line (whitespace by default).
    """

    def __init__(self, *, delimiter=WHITESPACE):
        self._steps = []
        self._delimiter = delimiter
        self._on_error = Unset

    @property
    def steps(self):
        return tuple(self._steps)

    def number(self, config=Unset, /, **options):
        """
        Add a step extracting a number. See NumberConfig for the options.
        """
        config = _resolve_config(NumberConfig, config, options, "number")
        self._steps.append(rename(_bind(parsers.number, config), "number"))
        return self

    def string(self, config=Unset, /, **options):
        """
        Add a step extracting a single word. See StringConfig for the options.
        """
        config = _resolve_config(StringConfig, config, options, "string")
        self._steps.append(rename(_bind(parsers.string, config), "string"))
        return self

    def one_of(self, accepted, /, **options):
        """
        Add a step extracting one of the accepted values.

        `accepted` is either a ready OneOfConfig or the accepted values, in
        which case the keyword options are forwarded to OneOfConfig.
        """
        if isinstance(accepted, OneOfConfig):
            config = _resolve_config(OneOfConfig, accepted, options, "one_of")
        else:
            config = OneOfConfig(accepted, **options)
        self._steps.append(rename(_bind(parsers.one_of, config), "one_of"))
        return self

    def rest(self):
        """
        Add a step collecting the remaining text, space-normalized.
        """
        self._steps.append(parsers.rest)
        return self

    def custom(self, step, /):
        """
        Add an arbitrary step `(tokens) -> ParserResult`.
        """
        if not callable(step):
            raise TypeError("custom() argument must be callable")
        self._steps.append(_checked_step(step))
        return self

    def on_error(self, action=OnErrorAction.IGNORE, /):
        """
        Choose what middleware built from this builder does on invalid arguments:
        an OnErrorAction or a handler `(context, parsed, next)` called instead
        of the regular one.
        """
        if action == OnErrorAction.IGNORE:
            self._on_error = Unset
        elif action == OnErrorAction.CALL_NEXT:
            self._on_error = _call_next
        elif callable(action):
            self._on_error = action
        else:
            raise TypeError("on_error() argument must be an OnErrorAction or a callable")
        return self

    def to_parser(self):
        """
        Freeze the declared steps into an ArgParser.
        """
        parser = ArgParser(self._steps, delimiter=self._delimiter)
        logger.debug("arg_parser_compiled", steps=[getattr(step, "__name__", repr(step)) for step in parser.steps])
        return parser

    def to_middleware(self, handler, /, parser=Unset, *, text=Unset):
        """
        Build a `(context, next)` middleware around `handler(context, parsed, next)`.

        Parameters
        - handler: called with the ParsedCommand of the context's text.
        - parser: an already compiled ArgParser to reuse (defaults to to_parser()).
        - text: `(context) -> str` extractor (defaults to message_text).

        Behavior
        - Without an error handler (OnErrorAction.IGNORE) the handler is always called.
        - Otherwise a command with at least one failed argument goes to the
          error handler instead; the regular handler is not called.
        """
        if not callable(handler):
            raise TypeError("to_middleware() handler must be callable")
        if parser is Unset:
            parser = self.to_parser()
        elif not isinstance(parser, ArgParser):
            raise TypeError("to_middleware() parser must be an ArgParser")
        extract = coalesce(text, message_text)
        if not callable(extract):
            raise TypeError("to_middleware() text must be callable")
        on_error = self._on_error

        @rename("middleware")
        def middleware(context, next, /):
            parsed = parser(extract(context) or "")
            if on_error is not Unset and not parsed.ok:
                logger.debug(
                    "arguments_rejected",
                    command=parsed.command,
                    errors=[(index, str(argument.error)) for index, argument in parsed.errors],
                )
                return on_error(context, parsed, next)
            return handler(context, parsed, next)

        middleware.parser = parser
        return middleware

    def __repr__(self):
        return "arg-parser-builder(steps=%d)" % len(self._steps)


def message_text(context, /):
    """
    Default text extractor: `context.message.text`, or "" when the context
    carries no message or the message has no text.
    """
    return getattr(getattr(context, "message", None), "text", None) or ""


def _bind(parser, config):
    """
    Internal: bind a parser function to its configuration as a one-argument step.
    """
    def step(tokens):
        return parser(tokens, config)

    step.config = config
    return step


__all__ = (
    "ArgParser",
    "ArgParserBuilder",
    "OnErrorAction",
    "message_text",
)
