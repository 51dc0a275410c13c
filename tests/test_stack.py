import sys

import pytest

from strata import HandlerFunction, PlainHandler, Stack
from strata.response import ResponseWrapper
from strata.testing import ResponseRecorder, request


def tracer(trace: list[str], name: str) -> HandlerFunction:
	def handler(writer, request, next):
		trace.append(f"enter:{name}")
		next()
		trace.append(f"exit:{name}")

	return HandlerFunction(handler)


def test_onion_order():
	trace: list[str] = []
	stack = Stack()
	for name in ("U1", "U2", "U3"):
		stack.register(tracer(trace, name))
	stack.serve(ResponseRecorder(), request())
	assert trace == [
		"enter:U1",
		"enter:U2",
		"enter:U3",
		"exit:U3",
		"exit:U2",
		"exit:U1",
	]


def test_short_circuit():
	trace: list[str] = []
	observed: list[int] = []

	def stop(writer, request, next):
		trace.append("enter:U2")
		writer.writeHeader(403)

	def status(writer, request, next):
		next()
		observed.append(writer.status())

	stack = Stack(HandlerFunction(status), tracer(trace, "U1"))
	stack.registerMiddleware(stop)
	stack.register(tracer(trace, "U3"))
	response = ResponseRecorder()
	stack.serve(response, request())
	assert trace == ["enter:U1", "enter:U2", "exit:U1"]
	assert observed == [403]
	assert response.code == 403


def test_list_units():
	stack = Stack()
	assert stack.listUnits() == []
	units = [tracer([], "A"), tracer([], "B"), tracer([], "A")]
	for _ in units:
		stack.register(_)
	assert stack.listUnits() == units
	assert stack.listUnits() == units


def test_list_units_registered_unit_is_callable():
	stack = Stack()
	stack.registerMiddleware(lambda w, r, n: w.writeHeader(200))
	(unit,) = stack.listUnits()
	response = ResponseRecorder()
	unit.serve(response, request(), None)
	assert response.code == 200
	assert response.log == [("status", 200)]


def test_empty_stack_writes_nothing():
	response = ResponseRecorder()
	Stack().serve(response, request())
	assert response.log == []
	assert response.code == 200


def test_concrete_scenario():
	observed: list[ResponseWrapper] = []

	def p1(writer, request):
		observed.append(writer)
		writer.write(b"foo")
		writer.writeHeader(200)

	def p2(writer, request, next):
		writer.write(b"bar")
		next()
		writer.write(b"baz")

	stack = Stack()
	stack.registerFunction(p1)
	stack.registerMiddleware(p2)
	response = ResponseRecorder()
	stack.serve(response, request())

	assert response.log == [
		("write", b"foo"),
		("status", 200),
		("write", b"bar"),
		("write", b"baz"),
	]
	assert response.text == "foobarbaz"
	assert observed[0].status() == 200
	assert observed[0].size() == 9
	units = stack.listUnits()
	assert len(units) == 2
	assert units[0].handler.function is p1
	assert units[1].function is p2


def test_wrapper_observes_status_and_size():
	seen: list[tuple[int, int]] = []

	def outer(writer, request, next):
		next()
		seen.append((writer.status(), writer.size()))

	def bad_request(writer, request, next):
		writer.writeHeader(400)
		writer.write(b"12345")
		next()

	stack = Stack(HandlerFunction(outer))
	stack.register(tracer([], "before"))
	stack.registerMiddleware(bad_request)
	stack.register(tracer([], "after"))
	stack.serve(ResponseRecorder(), request())
	assert seen == [(400, 5)]


def test_adapters_always_continue():
	trace: list[str] = []

	class Plain(PlainHandler):
		def serve(self, writer, request):
			trace.append("plain")

	stack = Stack()
	stack.registerAdapter(Plain())
	stack.registerFunction(lambda w, r: trace.append("function"))
	stack.register(tracer(trace, "last"))
	stack.serve(ResponseRecorder(), request())
	assert trace == ["plain", "function", "enter:last", "exit:last"]


def test_next_can_replace_writer_and_request():
	seen: list = []
	replacement = request("POST", "/other")
	recorder = ResponseRecorder()

	def swap(writer, request, next):
		next(recorder, replacement)

	stack = Stack(HandlerFunction(swap))
	stack.registerFunction(lambda w, r: seen.append((w, r)))
	stack.serve(ResponseRecorder(), request())
	assert seen == [(recorder, replacement)]


def test_double_next_runs_rest_twice():
	trace: list[str] = []

	def twice(writer, request, next):
		next()
		next()

	stack = Stack(HandlerFunction(twice))
	stack.registerFunction(lambda w, r: trace.append("run"))
	stack.serve(ResponseRecorder(), request())
	assert trace == ["run", "run"]


def test_errors_propagate():
	trace: list[str] = []

	def fail(writer, request, next):
		writer.write(b"partial")
		raise RuntimeError("boom")

	stack = Stack(tracer(trace, "U1"))
	stack.registerMiddleware(fail)
	stack.register(tracer(trace, "U3"))
	response = ResponseRecorder()
	with pytest.raises(RuntimeError, match="boom"):
		stack.serve(response, request())
	assert trace == ["enter:U1"]
	assert response.text == "partial"


def test_none_unit_fails_when_invoked():
	stack = Stack()
	stack.register(None)
	assert stack.listUnits() == [None]
	with pytest.raises(AttributeError):
		stack.serve(ResponseRecorder(), request())


def test_nested_stack():
	trace: list[str] = []
	inner = Stack(tracer(trace, "inner"))
	outer = Stack(tracer(trace, "outer"))
	outer.registerAdapter(inner)
	outer.register(tracer(trace, "last"))
	outer.serve(ResponseRecorder(), request())
	assert trace == [
		"enter:outer",
		"enter:inner",
		"exit:inner",
		"enter:last",
		"exit:last",
		"exit:outer",
	]


def test_register_is_chainable():
	stack = Stack().registerFunction(lambda w, r: None).registerFunction(
		lambda w, r: None
	)
	assert len(stack.listUnits()) == 2


def test_long_stack_within_limit():
	trace: list[str] = []
	stack = Stack()
	for i in range(100):
		stack.register(tracer(trace, str(i)))
	stack.serve(ResponseRecorder(), request())
	assert trace[:2] == ["enter:0", "enter:1"]
	assert trace[-2:] == ["exit:1", "exit:0"]
	assert len(trace) == 200


def test_stack_deeper_than_recursion_limit():
	stack = Stack()
	for i in range(sys.getrecursionlimit()):
		stack.register(tracer([], str(i)))
	with pytest.raises(RecursionError):
		stack.serve(ResponseRecorder(), request())


# EOF
