from socketserver import ThreadingMixIn
from typing import Any, NamedTuple
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from .bridge.wsgi import WSGIBridge
from .config import HOST, LOG_REQUESTS, PORT
from .handler import PlainHandler
from .utils.logging import debug, error, event, info


class ServerOptions(NamedTuple):
	host: str = HOST
	port: int = PORT
	logRequests: bool = LOG_REQUESTS


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
	"""One thread per request, each going through `serve` on its own."""

	daemon_threads = True


class RequestHandler(WSGIRequestHandler):
	def log_message(self, format: str, *args: Any) -> None:
		# Requests are already logged by the bridge
		debug(format % args, Client=self.address_string())


def parseAddress(
	address: str | None, options: ServerOptions = ServerOptions()
) -> tuple[str, int]:
	"""Parses `host:port`, `:port` (all interfaces) or `host` (default
	port)."""
	if not address:
		return options.host, options.port
	host, sep, port = address.rpartition(":")
	if not sep:
		return address, options.port
	return host or "0.0.0.0", int(port)  # nosec: B104


def run(
	handler: PlainHandler,
	address: str | None = None,
	*,
	logRequests: bool = LOG_REQUESTS,
) -> None:
	"""Serves the handler forever on the given address. Failing to bind is
	fatal: there is no caller left to report it to, so the process exits."""
	host: str = address or f"{HOST}:{PORT}"
	port: int | None = None
	try:
		host, port = parseAddress(address)
		server = make_server(
			host,
			port,
			WSGIBridge(handler, logRequests=logRequests),
			server_class=ThreadingWSGIServer,
			handler_class=RequestHandler,
		)
	# An unparseable or out of range port fails like a busy one
	except (OSError, ValueError, OverflowError) as e:
		error(
			f"Unable to bind to {host if port is None else f'{host}:{port}'}, aborting.",
			"HOSTPORTERR",
			Reason=str(e),
		)
		raise SystemExit(1) from e
	info("listening on", icon="🚀", Host=host, Port=port)
	with server:
		try:
			server.serve_forever()
		except KeyboardInterrupt:
			event("ManualShutdown")
	event("EOK")


# EOF
