from strata.chain import Link, Terminal, append, build, invoke, units
from strata.context import Context
from strata.handler import VOID, HandlerFunction
from strata.testing import ResponseRecorder, request


class Holder:
	def __init__(self, *handlers):
		self.head = build(handlers)


def tracer(trace: list[str], name: str) -> HandlerFunction:
	def handler(writer, request, next):
		trace.append(f"enter:{name}")
		next()
		trace.append(f"exit:{name}")

	return HandlerFunction(handler)


def run(head) -> None:
	invoke(head, ResponseRecorder(), request(), Context.Background())


def test_build_empty_is_terminal():
	head = build([])
	assert isinstance(head, Terminal)
	assert head.handler is VOID
	assert head.next is head
	assert units(head) == []


def test_build_keeps_order_and_duplicates():
	a, b = HandlerFunction(lambda w, r, n: n()), HandlerFunction(lambda w, r, n: n())
	head = build([a, b, a])
	assert units(head) == [a, b, a]
	node = head
	for _ in range(3):
		assert isinstance(node, Link)
		node = node.next
	assert isinstance(node, Terminal)


def test_append_to_empty_replaces_head():
	holder = Holder()
	a = HandlerFunction(lambda w, r, n: n())
	append(holder, a)
	assert isinstance(holder.head, Link)
	assert holder.head.handler is a
	assert isinstance(holder.head.next, Terminal)


def test_append_reuses_terminal():
	a, b = HandlerFunction(lambda w, r, n: n()), HandlerFunction(lambda w, r, n: n())
	holder = Holder(a)
	terminal = holder.head.next
	head = holder.head
	append(holder, b)
	assert holder.head is head
	assert holder.head.next.handler is b
	assert holder.head.next.next is terminal
	assert units(holder.head) == [a, b]


def test_append_after_build_is_equivalent():
	built: list[str] = []
	run(build([tracer(built, "A"), tracer(built, "B"), tracer(built, "C")]))

	appended: list[str] = []
	holder = Holder(tracer(appended, "A"), tracer(appended, "B"))
	append(holder, tracer(appended, "C"))
	run(holder.head)

	assert appended == built
	assert built == ["enter:A", "enter:B", "enter:C", "exit:C", "exit:B", "exit:A"]


def test_terminal_never_continues():
	run(build([]))
	trace: list[str] = []
	run(build([tracer(trace, "A")]))
	assert trace == ["enter:A", "exit:A"]


# EOF
