from abc import ABC, abstractmethod
from typing import Any, Callable, TypeAlias

from .context import Context, context
from .response import ResponseWriter

# --
# # Handler units
#
# A handler unit is one link's worth of request handling. Chain-aware units
# (`Handler`) receive a continuation and decide whether, and when, the rest
# of the chain runs. Plain units (`PlainHandler`, `ContextHandler`) know
# nothing about the chain and are lifted into one with `wrap` and
# `wrapContext`, which always continue.
#
# The continuation takes optional replacements for the writer, the request
# and the context: `next()` passes everything along unchanged.

# The request is owned by the host HTTP stack and passed through untouched
TRequest: TypeAlias = Any
TNext: TypeAlias = Callable[..., None]
THandlerFunction: TypeAlias = Callable[[ResponseWriter, TRequest, TNext], None]
TPlainHandlerFunction: TypeAlias = Callable[[ResponseWriter, TRequest], None]
TContextHandlerFunction: TypeAlias = Callable[
	[Context, ResponseWriter, TRequest], None
]


class Handler(ABC):
	"""A chain-aware unit. `serve` should call `next` exactly once to yield
	to the rest of the chain, or return without calling it to stop there."""

	@abstractmethod
	def serve(self, writer: ResponseWriter, request: TRequest, next: TNext) -> None:
		...


class PlainHandler(ABC):
	@abstractmethod
	def serve(self, writer: ResponseWriter, request: TRequest) -> None:
		...


class ContextHandler(ABC):
	@abstractmethod
	def serveContext(
		self, context: Context, writer: ResponseWriter, request: TRequest
	) -> None:
		...


class HandlerFunction(Handler):
	"""Allows the use of ordinary functions as chain-aware units."""

	__slots__ = ["function"]

	def __init__(self, function: THandlerFunction):
		self.function: THandlerFunction = function

	def serve(self, writer: ResponseWriter, request: TRequest, next: TNext) -> None:
		self.function(writer, request, next)

	def __repr__(self) -> str:
		return f"HandlerFunction({getattr(self.function, '__qualname__', self.function)})"


class PlainHandlerFunction(PlainHandler):
	__slots__ = ["function"]

	def __init__(self, function: TPlainHandlerFunction):
		self.function: TPlainHandlerFunction = function

	def serve(self, writer: ResponseWriter, request: TRequest) -> None:
		self.function(writer, request)

	def __repr__(self) -> str:
		return f"PlainHandlerFunction({getattr(self.function, '__qualname__', self.function)})"


class ContextHandlerFunction(ContextHandler):
	__slots__ = ["function"]

	def __init__(self, function: TContextHandlerFunction):
		self.function: TContextHandlerFunction = function

	def serveContext(
		self, context: Context, writer: ResponseWriter, request: TRequest
	) -> None:
		self.function(context, writer, request)

	def __repr__(self) -> str:
		return f"ContextHandlerFunction({getattr(self.function, '__qualname__', self.function)})"


class Adapter(Handler):
	"""Lifts a plain handler into a unit that runs it and then always calls
	the continuation. `handler` gives access to the adapted object."""

	__slots__ = ["handler"]

	def __init__(self, handler: PlainHandler):
		self.handler: PlainHandler = handler

	def serve(self, writer: ResponseWriter, request: TRequest, next: TNext) -> None:
		self.handler.serve(writer, request)
		next()

	def __repr__(self) -> str:
		return f"Adapter({self.handler!r})"


class ContextAdapter(Handler):
	"""Like `Adapter`, for context handlers. The handler only reads the
	context: it has no way of passing new values to the next units."""

	__slots__ = ["handler"]

	def __init__(self, handler: ContextHandler):
		self.handler: ContextHandler = handler

	def serve(self, writer: ResponseWriter, request: TRequest, next: TNext) -> None:
		self.handler.serveContext(context(), writer, request)
		next()

	def __repr__(self) -> str:
		return f"ContextAdapter({self.handler!r})"


def wrap(handler: PlainHandler) -> Handler:
	return Adapter(handler)


def wrapContext(handler: ContextHandler) -> Handler:
	return ContextAdapter(handler)


class Void(Handler):
	"""Accepts the request and does nothing, never continuing."""

	def serve(self, writer: ResponseWriter, request: TRequest, next: TNext) -> None:
		pass

	def __repr__(self) -> str:
		return "Void"


VOID: Handler = Void()


# EOF
