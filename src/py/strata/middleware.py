import time

from .handler import Handler, TNext, TRequest
from .response import ResponseWrapper, ResponseWriter
from .utils.logging import exception, info

# --
# # Stock handler units
#
# Ready-made units to register first on a stack. `RequestLogger` and
# `Recovery` both act after their continuation returns, so they see
# everything the rest of the chain did.


def observed(writer: ResponseWriter) -> tuple[int | None, int | None, bool]:
	"""Returns the status, size and written flag observed on the writer,
	when it is a `ResponseWrapper`."""
	if isinstance(writer, ResponseWrapper):
		return writer.status(), writer.size(), writer.written()
	else:
		return None, None, False


class RequestLogger(Handler):
	"""Logs each request once the rest of the chain has handled it."""

	def serve(self, writer: ResponseWriter, request: TRequest, next: TNext) -> None:
		started = time.monotonic()
		next()
		status, size, _ = observed(writer)
		info(
			"Request served",
			Method=getattr(request, "method", None),
			Path=getattr(request, "path", None),
			Status=status,
			Size=size,
			Duration=f"{(time.monotonic() - started) * 1000:0.2f}ms",
		)


class Recovery(Handler):
	"""Turns an exception raised further down the chain into a `500`
	response, unless a response was already started. With `reraise`, the
	exception is propagated once the response is written."""

	BODY: bytes = b"Internal Server Error"

	def __init__(self, *, reraise: bool = False):
		self.reraise: bool = reraise

	def serve(self, writer: ResponseWriter, request: TRequest, next: TNext) -> None:
		try:
			next()
		except Exception as e:
			exception(e, "Handler failed")
			_, _, written = observed(writer)
			if not written:
				writer.headers["Content-Type"] = "text/plain"
				writer.writeHeader(500)
				writer.write(self.BODY)
			if self.reraise:
				raise


# EOF
