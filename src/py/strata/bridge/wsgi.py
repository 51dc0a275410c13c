from http import HTTPStatus
from typing import Any, Callable, Iterable, TypeAlias
from urllib.parse import parse_qsl

from mypy_extensions import VarArg

from ..config import LOG_REQUESTS
from ..handler import PlainHandler
from ..http.model import HTTPRequest, headerlist
from ..response import ResponseWriter
from ..utils.logging import event, warning

# --
# # WSGI bridge
#
# Exposes a plain handler (usually a `Stack`) as a WSGI application. WSGI
# wants the status and headers in one go, so the status write is what starts
# the response: headers changed after it are not sent.

TEnviron: TypeAlias = dict[str, Any]
TStartResponse: TypeAlias = Callable[
	[str, list[tuple[str, str]], VarArg(Any)], Callable[[bytes], Any]
]


def statusline(status: int) -> str:
	try:
		return f"{status} {HTTPStatus(status).phrase}"
	except ValueError:
		return f"{status} Unknown Status"


class WSGIResponseWriter(ResponseWriter):
	"""Buffers the body chunks, which are returned to the WSGI server once
	the chain is done."""

	def __init__(self, startResponse: TStartResponse):
		self.startResponse: TStartResponse = startResponse
		self.headers: dict[str, str] = {}
		self.status: int | None = None
		self.chunks: list[bytes] = []

	def writeHeader(self, status: int) -> None:
		if self.status is not None:
			warning("Status already sent", Status=status, Sent=self.status)
			return
		self.status = status
		self.startResponse(statusline(status), headerlist(self.headers))

	def write(self, data: bytes) -> int:
		if self.status is None:
			self.writeHeader(200)
		self.chunks.append(bytes(data))
		return len(data)

	def finish(self) -> list[bytes]:
		"""Starts the response if nothing did, and returns the body."""
		if self.status is None:
			self.writeHeader(200)
		return self.chunks


def request(environ: TEnviron) -> HTTPRequest:
	headers: dict[str, str] = {
		k[5:].replace("_", "-"): v for k, v in environ.items() if k.startswith("HTTP_")
	}
	for k in ("CONTENT_TYPE", "CONTENT_LENGTH"):
		if environ.get(k):
			headers[k.replace("_", "-")] = environ[k]
	return HTTPRequest(
		method=environ.get("REQUEST_METHOD", "GET"),
		path=environ.get("PATH_INFO") or "/",
		query=dict(parse_qsl(environ.get("QUERY_STRING", ""))),
		headers=headers,
		body=environ.get("wsgi.input"),
		protocol=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
		environ=environ,
	)


class WSGIBridge:
	def __init__(self, handler: PlainHandler, *, logRequests: bool = LOG_REQUESTS):
		self.handler: PlainHandler = handler
		self.logRequests: bool = logRequests

	def __call__(
		self, environ: TEnviron, startResponse: TStartResponse
	) -> Iterable[bytes]:
		req = request(environ)
		if self.logRequests:
			event(req.method, req.path)
		writer = WSGIResponseWriter(startResponse)
		self.handler.serve(writer, req)
		return writer.finish()


# EOF
