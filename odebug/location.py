"""Call-site capture from the Python call stack."""

import os
import sys

from odebug.models import Location

UNKNOWN = Location("<unknown>", 1)


def _display_path(filename: str) -> str:
    """Show paths under the working directory relative to it, others absolute."""
    path = os.path.abspath(filename)
    try:
        cwd = os.getcwd()
        if os.path.commonpath([path, cwd]) == cwd:
            return os.path.relpath(path, cwd)
    except (OSError, ValueError):
        pass
    return path


def capture_location(depth: int = 1) -> Location:
    """Return the location `depth` frames above the function calling this one."""
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return UNKNOWN
    try:
        filename = frame.f_code.co_filename
        if filename.startswith("<"):
            return Location(filename, max(frame.f_lineno or 1, 1))
        return Location(_display_path(filename), max(frame.f_lineno or 1, 1))
    finally:
        del frame
