from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Protocol, TypeAlias, Union

from .context import Context, CurrentContext
from .handler import VOID, Handler, TRequest
from .response import ResponseWriter

__doc__ = """
The middleware chain: a singly linked list of `Link` nodes, each holding one
handler unit, ending with exactly one `Terminal`. The terminal's unit accepts
the request and never continues, so traversal stops there without the
invoker having to check for the end of the chain.
"""


@dataclass(slots=True, eq=False)
class Terminal:
	"""Marks the end of a chain, and is the whole chain when it is empty."""

	handler: Handler = field(default=VOID, init=False)

	@property
	def next(self) -> "Terminal":
		return self


@dataclass(slots=True, eq=False)
class Link:
	handler: Handler
	next: "Node"


Node: TypeAlias = Union[Link, Terminal]


class Holder(Protocol):
	"""Anything that owns the head slot of a chain."""

	head: Node


def build(handlers: Iterable[Handler]) -> Node:
	"""Builds a chain with the handlers in the given order. Duplicates are
	kept as separate links."""
	node: Node = Terminal()
	# Built back to front so that each link can point at the rest
	for handler in reversed(list(handlers)):
		node = Link(handler, node)
	return node


def append(holder: Holder, handler: Handler) -> None:
	"""Adds the handler at the end of the chain held by `holder`, reusing the
	existing terminal. Walks the whole chain, which is fine as units are
	registered at setup time."""
	pre: Optional[Link] = None
	curr: Node = holder.head
	while isinstance(curr, Link):
		pre = curr
		curr = curr.next
	if pre is None:
		holder.head = Link(handler, Terminal())
	else:
		pre.next = Link(handler, curr)


def links(head: Node) -> Iterator[Link]:
	node: Node = head
	while isinstance(node, Link):
		yield node
		node = node.next


def units(head: Node) -> list[Handler]:
	"""Returns the handler of every link, excluding the terminal."""
	return [_.handler for _ in links(head)]


def invoke(
	node: Node,
	writer: ResponseWriter,
	request: TRequest,
	ctx: Context,
) -> None:
	"""Runs the node's handler with a continuation that invokes the next node.
	Anything the handler raises propagates as is."""

	def next(
		w: Optional[ResponseWriter] = None,
		r: Optional[TRequest] = None,
		*,
		context: Optional[Context] = None,
	) -> None:
		invoke(
			node.next,
			writer if w is None else w,
			request if r is None else r,
			ctx if context is None else context,
		)

	token = CurrentContext.set(ctx)
	try:
		node.handler.serve(writer, request, next)
	finally:
		CurrentContext.reset(token)


# EOF
