from functools import lru_cache
from typing import Any, BinaryIO, Callable, TypeVar
from urllib.parse import parse_qsl

T = TypeVar("T")

# Header names come from clients
HEADERNAME_CACHE_SIZE: int = 1024


@lru_cache(maxsize=HEADERNAME_CACHE_SIZE)
def headername(name: str) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	return "-".join(_.capitalize() for _ in name.split("-"))


def headerlist(headers: dict[str, str]) -> list[tuple[str, str]]:
	return [(headername(k), v) for k, v in headers.items()]


class HTTPRequest:
	"""The request as received from the host HTTP stack. Handler units can
	attach their own attributes, the body is only read when asked for."""

	def __init__(
		self,
		method: str,
		path: str,
		query: dict[str, str] | None = None,
		headers: dict[str, str] | None = None,
		body: bytes | BinaryIO | None = None,
		protocol: str = "HTTP/1.1",
		environ: dict[str, Any] | None = None,
	):
		self.method: str = method
		self.path: str = path
		self.query: dict[str, str] = query or {}
		self.protocol: str = protocol
		self.headers: dict[str, str] = {
			headername(k): v for k, v in (headers or {}).items()
		}
		self.environ: dict[str, Any] = environ or {}
		self._body: bytes | BinaryIO | None = body

	@staticmethod
	def Create(
		method: str = "GET",
		uri: str = "/",
		headers: dict[str, str] | None = None,
		body: bytes | None = None,
	) -> "HTTPRequest":
		path, _, query = uri.partition("?")
		return HTTPRequest(
			method=method,
			path=path or "/",
			query=dict(parse_qsl(query)),
			headers=headers,
			body=body,
		)

	def header(self, name: str) -> str | None:
		return self.headers.get(headername(name))

	def param(
		self,
		name: str,
		default: T | None = None,
		processor: Callable[[str | T | None], str | T | None] | None = None,
	) -> str | T | None:
		v = self.query.get(name, default)
		return processor(v) if processor else v

	@property
	def contentType(self) -> str | None:
		return self.header("Content-Type")

	@property
	def contentLength(self) -> int | None:
		n = self.header("Content-Length")
		return int(n) if n else None

	@property
	def body(self) -> bytes:
		"""Reads the whole body, at most `Content-Length` bytes when the
		body is a stream."""
		if self._body is None:
			self._body = b""
		elif not isinstance(self._body, bytes):
			n = self.contentLength
			self._body = self._body.read(n) if n else b""
		return self._body

	def __str__(self) -> str:
		return f"Request({self.method} {self.path}{f'?{self.query}' if self.query else ''} {self.headers})"


# EOF
