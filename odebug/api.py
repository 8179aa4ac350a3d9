"""Process-wide logger instances, configured once at import.

    from odebug.api import odebug, trace, chain

    odebug("Simple debug message")
    odebug("Formatted message: {}", 42)
    odebug.to("custom.log", "Message in custom file")
    trace.parser.tokens.emit("Message with headers")      # parser.log, > parser > tokens
    trace["explicit.log"].cache.miss("key={}", key)       # explicit.log, > cache
    odebug(chain("Error details").to_file("errors.log").with_header("ERROR"))
"""

from odebug.config import load_config
from odebug.dispatcher import Dispatcher, PathCall
from odebug.models import chain

odebug = Dispatcher(load_config())
trace = PathCall(odebug)

__all__ = ["odebug", "trace", "chain"]
