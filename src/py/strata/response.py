from abc import ABC, abstractmethod

__doc__ = """
Response sinks. A `ResponseWriter` is what handler units write to, the
`ResponseWrapper` decorates the sink of one request so that units can observe
the status and the number of bytes written so far.
"""


class ResponseWriter(ABC):
	"""The raw response sink of a single request: headers are mutable until
	the status is written, the first body write implies a `200` status."""

	headers: dict[str, str]

	@abstractmethod
	def writeHeader(self, status: int) -> None:
		...

	@abstractmethod
	def write(self, data: bytes) -> int:
		...


class ResponseWrapper(ResponseWriter):
	"""Forwards everything to the wrapped sink, unchanged, while recording
	the first status set and the total body size."""

	__slots__ = ["writer", "_status", "_size", "_written"]

	def __init__(self, writer: ResponseWriter):
		self.writer: ResponseWriter = writer
		self._status: int = 200
		self._size: int = 0
		self._written: bool = False

	@property  # type: ignore[override]
	def headers(self) -> dict[str, str]:
		return self.writer.headers

	def writeHeader(self, status: int) -> None:
		if not self._written:
			self._status = status
			self._written = True
		self.writer.writeHeader(status)

	def write(self, data: bytes) -> int:
		if not self._written:
			# The sink applies its own default status on first write, we
			# only record it.
			self._status = 200
			self._written = True
		n = self.writer.write(data)
		self._size += len(data)
		return n

	def status(self) -> int:
		return self._status

	def size(self) -> int:
		return self._size

	def written(self) -> bool:
		return self._written

	def __str__(self) -> str:
		return f"ResponseWrapper({self._status} {self._size}b {self.writer})"


# EOF
