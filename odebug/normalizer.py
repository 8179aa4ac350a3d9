"""Normalize the supported call shapes into a canonical LogEntry."""

import os

from odebug.errors import InvalidCallShape
from odebug.models import (
    ChainDraft,
    ExplicitFilePathDraft,
    FileDraft,
    Location,
    LogEntry,
    PathDraft,
    PlainDraft,
)

DEFAULT_FILE = "debug.log"
DEFAULT_EXTENSION = ".log"


def render_message(message, args: tuple = ()) -> str:
    """Render the payload, applying str.format when arguments are given."""
    text = str(message)
    if not args:
        return text
    try:
        return text.format(*args)
    except (IndexError, KeyError, ValueError) as e:
        raise InvalidCallShape(f"Format arguments do not match {text!r}: {e}") from e


def _check_file_name(name) -> str:
    name = str(name) if name is not None else ""
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if not name or name in (".", "..") or any(sep in name for sep in separators):
        raise InvalidCallShape(f"Invalid target file name: {name!r}")
    return name


def _split_path(segments) -> tuple[tuple[str, ...], str]:
    """Return (headers, operation) for a path; the last segment is never a header."""
    segments = tuple(segments)
    if not segments:
        raise InvalidCallShape("Path call has zero segments")
    for segment in segments:
        if not isinstance(segment, str) or not segment.isidentifier():
            raise InvalidCallShape(f"Invalid path segment: {segment!r}")
    return segments[:-1], segments[-1]


def normalize(
    draft,
    location: Location,
    default_file: str = DEFAULT_FILE,
    extension: str = DEFAULT_EXTENSION,
) -> LogEntry:
    """Turn one draft call into a LogEntry."""
    if isinstance(draft, PlainDraft):
        message = render_message(draft.message, draft.args)
        headers, target = (), default_file

    elif isinstance(draft, FileDraft):
        message = render_message(draft.message, draft.args)
        headers, target = (), draft.file_name

    elif isinstance(draft, PathDraft):
        headers, _operation = _split_path(draft.segments)
        message = render_message(draft.message, draft.args)
        target = headers[0] + extension if headers else default_file

    elif isinstance(draft, ExplicitFilePathDraft):
        headers, _operation = _split_path(draft.segments)
        message = render_message(draft.message, draft.args)
        target = draft.file_name

    elif isinstance(draft, ChainDraft):
        chain = draft.chain
        message = render_message(chain.value, chain.args)
        headers = tuple(chain.headers)
        # to_file wins regardless of where it appeared in the chain
        target = chain.file_name if chain.file_name is not None else default_file

    else:
        raise InvalidCallShape(f"Unsupported call shape: {type(draft).__name__}")

    return LogEntry(
        message=message,
        headers=headers,
        target_file=_check_file_name(target),
        location=location,
    )
