from typing import Iterable

from .bridge.wsgi import TEnviron, TStartResponse, WSGIBridge
from .chain import Node, append, build, invoke, units
from .context import Context
from .handler import (
	ContextHandler,
	ContextHandlerFunction,
	Handler,
	HandlerFunction,
	PlainHandler,
	PlainHandlerFunction,
	TContextHandlerFunction,
	THandlerFunction,
	TPlainHandlerFunction,
	TRequest,
	wrap,
	wrapContext,
)
from .response import ResponseWrapper, ResponseWriter
from . import server


class Stack(PlainHandler, ContextHandler):
	"""A stack of handler units, invoked in the order they were registered.

	A stack is itself a plain handler, a context handler and a WSGI
	application, so it can be nested in another stack or given to any WSGI
	server.

	Registration mutates the chain without any locking: register every unit
	before the stack starts serving requests.

	Each unit adds a few frames to the call stack while a request goes down
	the chain, so a stack of a few hundred units reaches the interpreter's
	recursion limit (`sys.getrecursionlimit()`) and fails with
	`RecursionError`."""

	def __init__(self, *handlers: Handler):
		self.head: Node = build(handlers)

	def register(self, handler: Handler) -> "Stack":
		append(self, handler)
		return self

	def registerMiddleware(self, function: THandlerFunction) -> "Stack":
		return self.register(HandlerFunction(function))

	def registerAdapter(self, handler: PlainHandler) -> "Stack":
		return self.register(wrap(handler))

	def registerFunction(self, function: TPlainHandlerFunction) -> "Stack":
		return self.registerAdapter(PlainHandlerFunction(function))

	def registerContextHandler(self, handler: ContextHandler) -> "Stack":
		return self.register(wrapContext(handler))

	def registerContextFunction(self, function: TContextHandlerFunction) -> "Stack":
		return self.registerContextHandler(ContextHandlerFunction(function))

	def serve(self, writer: ResponseWriter, request: TRequest) -> None:
		invoke(self.head, ResponseWrapper(writer), request, Context.Background())

	def serveContext(
		self, context: Context, writer: ResponseWriter, request: TRequest
	) -> None:
		invoke(self.head, ResponseWrapper(writer), request, context)

	def listUnits(self) -> list[Handler]:
		return units(self.head)

	def run(self, address: str | None = None) -> None:
		server.run(self, address)

	def __call__(
		self, environ: TEnviron, startResponse: TStartResponse
	) -> Iterable[bytes]:
		return WSGIBridge(self)(environ, startResponse)

	def __repr__(self) -> str:
		return f"Stack({', '.join(repr(_) for _ in self.listUnits())})"


# EOF
