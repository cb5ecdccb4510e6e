"""
Middleware wiring tests.

Scope
- ArgParserBuilder.to_middleware(): handler invocation, error policies
  (IGNORE, CALL_NEXT, custom handler), text extraction, reuse of a parser.
- middleware_with_args(): builder and configurer sources, direct and decorator forms.

Contexts are plain namespaces carrying `message.text`, the shape most chat
frameworks hand to their middlewares.
"""
import unittest
from types import SimpleNamespace
from unittest import TestCase
from unittest.mock import Mock

from structlog.testing import capture_logs

from chatargs import ArgParserBuilder, OnErrorAction, ParsingError, message_text, middleware_with_args


def context(text):
    return SimpleNamespace(message=SimpleNamespace(text=text))


class ToMiddlewareTest(TestCase):

    def setUp(self):
        self.handler = Mock(return_value="handled")
        self.next = Mock(return_value="next")

    def testHandlerReceivesParsedCommand(self):
        middleware = ArgParserBuilder().number().number().to_middleware(self.handler)
        ctx = context("/add 2 3")
        self.assertEqual(middleware(ctx, self.next), "handled")
        (received, parsed, next), _ = self.handler.call_args
        self.assertIs(received, ctx)
        self.assertIs(next, self.next)
        self.assertEqual(parsed.values, (2, 3))
        self.next.assert_not_called()

    def testIgnoreCallsHandlerOnErrors(self):
        middleware = ArgParserBuilder().number().on_error(OnErrorAction.IGNORE).to_middleware(self.handler)
        middleware(context("/add x"), self.next)
        parsed = self.handler.call_args.args[1]
        self.assertIs(parsed.args[0].error, ParsingError.SYNTAX_ERROR)

    def testCallNextSkipsHandler(self):
        middleware = ArgParserBuilder().number().on_error(OnErrorAction.CALL_NEXT).to_middleware(self.handler)
        self.assertEqual(middleware(context("/add x"), self.next), "next")
        self.handler.assert_not_called()
        self.next.assert_called_once_with()

    def testCallNextStillHandlesValidInput(self):
        middleware = ArgParserBuilder().number().on_error(OnErrorAction.CALL_NEXT).to_middleware(self.handler)
        self.assertEqual(middleware(context("/add 1"), self.next), "handled")
        self.next.assert_not_called()

    def testCustomErrorHandler(self):
        on_error = Mock(return_value="rejected")
        middleware = ArgParserBuilder().number().on_error(on_error).to_middleware(self.handler)
        ctx = context("/add")
        self.assertEqual(middleware(ctx, self.next), "rejected")
        received, parsed, next = on_error.call_args.args
        self.assertIs(received, ctx)
        self.assertIs(parsed.args[0].error, ParsingError.MISSING)
        self.assertIs(next, self.next)
        self.handler.assert_not_called()

    def testRejectionIsLogged(self):
        middleware = ArgParserBuilder().number().on_error(OnErrorAction.CALL_NEXT).to_middleware(self.handler)
        with capture_logs() as logs:
            middleware(context("/add x"), self.next)
        self.assertEqual([entry["event"] for entry in logs], ["arguments_rejected"])
        self.assertEqual(logs[0]["command"], "/add")
        self.assertEqual(logs[0]["errors"], [(0, "SYNTAX_ERROR")])

    def testCustomTextExtractor(self):
        middleware = ArgParserBuilder().string().to_middleware(self.handler, text=lambda ctx: ctx["body"])
        middleware({"body": "/echo hi"}, self.next)
        self.assertEqual(self.handler.call_args.args[1].values, ("hi",))

    def testContextWithoutMessage(self):
        middleware = ArgParserBuilder().rest().to_middleware(self.handler)
        middleware(SimpleNamespace(), self.next)
        parsed = self.handler.call_args.args[1]
        self.assertEqual(parsed.command, "")
        self.assertEqual(parsed.values, ("",))

    def testReusesGivenParser(self):
        builder = ArgParserBuilder().string()
        parser = builder.to_parser()
        middleware = builder.to_middleware(self.handler, parser)
        self.assertIs(middleware.parser, parser)

    def testInvalidArguments(self):
        builder = ArgParserBuilder()
        with self.assertRaises(TypeError):
            builder.to_middleware(5)
        with self.assertRaises(TypeError):
            builder.to_middleware(self.handler, "parser")
        with self.assertRaises(TypeError):
            builder.to_middleware(self.handler, text="message")
        with self.assertRaises(TypeError):
            builder.on_error("sometimes")


class MiddlewareWithArgsTest(TestCase):

    def setUp(self):
        self.next = Mock(return_value="next")

    def testDirectFormWithBuilder(self):
        handler = Mock(return_value="handled")
        middleware = middleware_with_args(ArgParserBuilder().string(), handler)
        self.assertEqual(middleware(context("/greet bob"), self.next), "handled")
        self.assertEqual(handler.call_args.args[1].values, ("bob",))

    def testDirectFormWithConfigurer(self):
        handler = Mock()
        middleware = middleware_with_args(lambda builder: builder.number().rest(), handler)
        middleware(context("/tip 5 thanks a lot"), self.next)
        self.assertEqual(handler.call_args.args[1].values, (5, "thanks a lot"))

    def testDecoratorForm(self):
        @middleware_with_args(lambda builder: builder.string().on_error(OnErrorAction.CALL_NEXT))
        def greet(context, parsed, next):
            return "hello " + parsed.args[0].value

        self.assertEqual(greet(context("/greet bob"), self.next), "hello bob")
        self.assertEqual(greet(context("/greet"), self.next), "next")
        self.assertEqual(greet.__name__, "middleware")

    def testInvalidSource(self):
        with self.assertRaises(TypeError):
            middleware_with_args(5, Mock())

    def testDecoratorRequiresCallable(self):
        with self.assertRaises(TypeError):
            middleware_with_args(ArgParserBuilder())(5)


class MessageTextTest(TestCase):

    def testExtraction(self):
        self.assertEqual(message_text(context("/start")), "/start")
        self.assertEqual(message_text(context(None)), "")
        self.assertEqual(message_text(object()), "")


if __name__ == '__main__':
    unittest.main()
