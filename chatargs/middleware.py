"""
chatargs middleware wiring: attach a parsed argument list to a handler.

The engine knows nothing about transports. Whatever framework delivers the
message only has to call the returned middleware as `middleware(context, next)`;
the handler receives `(context, parsed, next)` where `parsed` is the
ParsedCommand of the context's text.

Invocation modes
- Direct:
    middleware = middleware_with_args(builder, handler)
- Configurer function instead of a builder:
    middleware = middleware_with_args(lambda b: b.number().rest(), handler)
- Decorator:
    @middleware_with_args(lambda b: b.string().on_error(OnErrorAction.CALL_NEXT))
    def greet(context, parsed, next): ...

Async frameworks work unchanged: whatever the handler returns (a coroutine
included) is returned by the middleware.
"""
from .builder import ArgParserBuilder
from .utils import Unset, rename


def _resolve_builder(source):
    """
    Internal: a configured builder is used as-is; a callable configures a fresh one.
    """
    if isinstance(source, ArgParserBuilder):
        return source
    if callable(source):
        builder = ArgParserBuilder()
        source(builder)
        return builder
    raise TypeError("middleware_with_args() source must be an ArgParserBuilder or a callable configuring one")


def middleware_with_args(source, handler=Unset, /, *, text=Unset):
    """
    Turn a handler able to read arguments into a `(context, next)` middleware.

    Parameters
    - source: ArgParserBuilder | Callable[[ArgParserBuilder], None]
      A configured builder, or a function that configures a new one.
    - handler: Unset | Callable[[context, ParsedCommand, next], Any]
      When Unset, a decorator is returned.
    - text: Unset | Callable[[context], str]
      Text extractor forwarded to ArgParserBuilder.to_middleware().

    Returns
    - the middleware, or a decorator producing it.
    """
    builder = _resolve_builder(source)

    @rename("middleware_with_args")
    def wrapper(handler, /):
        if not callable(handler):
            raise TypeError("@middleware_with_args() must be applied to a callable")
        return builder.to_middleware(handler, text=text)

    return wrapper(handler) if handler is not Unset else wrapper


__all__ = (
    "middleware_with_args",
)
