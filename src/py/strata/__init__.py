from .handler import (
	Handler,
	HandlerFunction,
	PlainHandler,
	PlainHandlerFunction,
	ContextHandler,
	ContextHandlerFunction,
	wrap,
	wrapContext,
)  # NOQA: F401
from .context import Context, context  # NOQA: F401
from .response import ResponseWriter, ResponseWrapper  # NOQA: F401
from .stack import Stack  # NOQA: F401
from .server import run  # NOQA: F401


# EOF
