"""Render a LogEntry as the on-disk text block."""

from odebug.models import LogEntry

SEPARATOR_LINE = "-" * 59
LOCATION_PREFIX = "[at "
LOCATION_SUFFIX = "]"
HEADER_PREFIX = "> "
HEADER_JOINER = " > "


def format_header(headers) -> str | None:
    if not headers:
        return None
    return HEADER_PREFIX + HEADER_JOINER.join(headers)


def format_location(location) -> str:
    return f"{LOCATION_PREFIX}{location}{LOCATION_SUFFIX}"


def format_block(location, headers, message: str) -> str:
    lines = [SEPARATOR_LINE, format_location(location)]
    header = format_header(headers)
    if header is not None:
        lines.append(header)
    lines.append(SEPARATOR_LINE)
    lines.append(message)
    return "\n".join(lines)


def format_entry(entry: LogEntry) -> str:
    """Location, header chain (omitted when empty), then the message.

    The block carries no trailing newline; the sink terminates it.
    """
    return format_block(entry.location, entry.headers, entry.message)
