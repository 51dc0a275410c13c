from typing import Any

from .http.model import HTTPRequest
from .response import ResponseWriter


class ResponseRecorder(ResponseWriter):
	"""An in-memory sink that keeps every operation it receives, in order,
	in `log` as `("status", code)` and `("write", data)` pairs."""

	def __init__(self) -> None:
		self.headers: dict[str, str] = {}
		self.code: int = 200
		self.headerWritten: bool = False
		self.body: bytearray = bytearray()
		self.log: list[tuple[str, Any]] = []

	def writeHeader(self, status: int) -> None:
		self.log.append(("status", status))
		if not self.headerWritten:
			self.code = status
			self.headerWritten = True

	def write(self, data: bytes) -> int:
		if not self.headerWritten:
			self.headerWritten = True
		self.log.append(("write", bytes(data)))
		self.body += data
		return len(data)

	@property
	def text(self) -> str:
		return self.body.decode("utf8")


def request(
	method: str = "GET",
	path: str = "/",
	headers: dict[str, str] | None = None,
	body: bytes = b"",
) -> HTTPRequest:
	"""Builds a request, `path` may carry a query string."""
	return HTTPRequest.Create(method=method, uri=path, headers=headers, body=body)


# EOF
