"""Error taxonomy. None of these ever reach the code that calls the logger."""


class OdebugError(Exception):
    """Base class for failures inside the logging pipeline."""


class PathResolutionFailed(OdebugError):
    """Raised when the output directory cannot be discovered or created."""


class InvalidCallShape(OdebugError):
    """Raised when a draft call cannot be normalized into a log entry."""


class WriteFailed(OdebugError):
    """Raised when opening, appending to, or flushing a log file fails."""
