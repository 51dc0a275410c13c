from contextvars import ContextVar
from typing import Any, ClassVar, Optional

__doc__ = """
Request-scoped values that flow down the chain. A unit derives a new context
with `withValue` and hands it to its continuation: every unit after it sees
the value, the units before it never do.
"""


class Context:
	"""An immutable link in a chain of key/value pairs, looked up from the
	most recent value back to the root."""

	__slots__ = ["parent", "key", "_value"]

	BACKGROUND: ClassVar["Context"]

	@classmethod
	def Background(cls) -> "Context":
		return cls.BACKGROUND

	def __init__(
		self, parent: Optional["Context"] = None, key: Any = None, value: Any = None
	):
		self.parent: Optional[Context] = parent
		self.key: Any = key
		self._value: Any = value

	def withValue(self, key: Any, value: Any) -> "Context":
		return Context(self, key, value)

	def value(self, key: Any, default: Any = None) -> Any:
		ctx: Optional[Context] = self
		while ctx is not None and ctx.parent is not None:
			if ctx.key == key:
				return ctx._value
			ctx = ctx.parent
		return default

	def __contains__(self, key: Any) -> bool:
		missing = object()
		return self.value(key, missing) is not missing

	def __str__(self) -> str:
		items: list[str] = []
		ctx: Optional[Context] = self
		while ctx is not None and ctx.parent is not None:
			items.insert(0, f"{ctx.key!r}={ctx._value!r}")
			ctx = ctx.parent
		return f"Context({', '.join(items)})"


# Shared by every thread, created once at import
Context.BACKGROUND = Context()

CurrentContext: ContextVar[Context] = ContextVar("CurrentContext")


def context() -> Context:
	"""Returns the context of the handler unit currently running, or the
	background context outside of a chain."""
	return CurrentContext.get(Context.Background())


# EOF
