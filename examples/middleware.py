"""
Middleware Example

Features shown:
- `RequestLogger` and `Recovery` stock units
- A chain-aware authentication unit that stops the chain
- Security headers set before the rest of the chain runs
- Passing the authenticated user down through the request context
- Timing measured around the continuation

Usage:
    python middleware.py

Test with:
    curl http://localhost:3000/public
    curl -H "Authorization: Bearer valid-token" http://localhost:3000/protected
    curl -H "Authorization: Bearer invalid-token" http://localhost:3000/protected
    curl http://localhost:3000/error
"""

import json
import time

from strata import Stack, context
from strata.middleware import Recovery, RequestLogger
from strata.utils.logging import info


def security_headers(writer, request, next):
	"""Headers must be set before anything writes the status."""
	writer.headers["X-Content-Type-Options"] = "nosniff"
	writer.headers["X-Frame-Options"] = "DENY"
	next()


def response_time(writer, request, next):
	started = time.time()
	next()
	info("Response time", Path=request.path, Duration=f"{time.time() - started:.3f}s")


def auth(writer, request, next):
	if not request.path.startswith("/protected"):
		return next()
	header = request.header("Authorization") or ""
	if header != "Bearer valid-token":
		writer.writeHeader(401)
		writer.write(b"Unauthorized\n")
		return
	info("Authentication successful", Path=request.path)
	next(context=context().withValue("user", {"id": 123, "name": "John Doe"}))


def endpoint(writer, request, next):
	if request.path == "/error":
		raise RuntimeError("Simulated error for testing")
	payload = {
		"path": request.path,
		"user": context().value("user"),
		"protected": request.path.startswith("/protected"),
	}
	writer.headers["Content-Type"] = "application/json"
	writer.write(json.dumps(payload).encode())


if __name__ == "__main__":
	info("Starting middleware example")
	stack = Stack(RequestLogger(), Recovery())
	stack.registerMiddleware(security_headers)
	stack.registerMiddleware(response_time)
	stack.registerMiddleware(auth)
	stack.registerMiddleware(endpoint)
	info("Registered units", Count=len(stack.listUnits()))
	stack.run(":3000")

# EOF
