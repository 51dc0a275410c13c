import sys
from .stack import Stack
from .middleware import Recovery, RequestLogger
from .utils.logging import info


def hello(writer, request):
	writer.headers["Content-Type"] = "text/plain"
	writer.write(b"Hello, World!\n")


def main(args: list[str] = sys.argv[1:]) -> None:
	info("Starting Strata demo stack")
	Stack(RequestLogger(), Recovery()).registerFunction(hello).run(
		args[0] if args else None
	)


if __name__ == "__main__":
	main()

# EOF
