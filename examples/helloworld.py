"""
Basic Hello World Example

The simplest possible Strata stack: a single plain function registered with
`registerFunction`, served by the built-in server.

Usage:
    python helloworld.py

Test with:
    curl http://localhost:3000/anything
"""

from strata import Stack
from strata.utils.logging import info

count: int = 0


def hello_world(writer, request):
	global count
	count += 1
	info(f"Hello World request #{count}", Path=request.path)
	writer.headers["Content-Type"] = "text/plain"
	writer.write(f"Hello, World! #{count} (path: {request.path})".encode())


if __name__ == "__main__":
	info("Starting Hello World stack")
	info("  curl http://localhost:3000/anything")
	Stack().registerFunction(hello_world).run(":3000")

# EOF
