"""Read odebug files back as entries: parse blocks, filter by header, search."""

import os
from dataclasses import dataclass

from odebug.formatter import (
    HEADER_JOINER,
    HEADER_PREFIX,
    LOCATION_PREFIX,
    LOCATION_SUFFIX,
    SEPARATOR_LINE,
    format_block,
)


@dataclass(frozen=True)
class StoredEntry:
    """One block parsed back from a log file."""

    location: str
    headers: tuple[str, ...]
    message: str

    def render(self) -> str:
        return format_block(self.location, self.headers, self.message)

    def summary(self) -> str:
        first_line = self.message.split("\n", 1)[0]
        parts = [self.location]
        if self.headers:
            parts.append(HEADER_PREFIX + HEADER_JOINER.join(self.headers))
        parts.append(first_line)
        return "  ".join(parts)


def _is_location(line: str) -> bool:
    return line.startswith(LOCATION_PREFIX) and line.endswith(LOCATION_SUFFIX)


def _starts_block(lines: list[str], i: int) -> bool:
    return (
        lines[i] == SEPARATOR_LINE
        and i + 1 < len(lines)
        and _is_location(lines[i + 1])
    )


def parse_entries(text: str) -> list[StoredEntry]:
    """Split file text into entries; lines outside any block are skipped.

    Trailing newlines of a message are not preserved.
    """
    lines = text.split("\n")
    entries = []
    i = 0
    while i < len(lines):
        if not _starts_block(lines, i):
            i += 1
            continue
        location = lines[i + 1][len(LOCATION_PREFIX):-len(LOCATION_SUFFIX)]
        j = i + 2
        headers = ()
        if j < len(lines) and lines[j].startswith(HEADER_PREFIX):
            headers = tuple(lines[j][len(HEADER_PREFIX):].split(HEADER_JOINER))
            j += 1
        if j >= len(lines) or lines[j] != SEPARATOR_LINE:
            i += 1
            continue
        j += 1
        body_start = j
        while j < len(lines) and not _starts_block(lines, j):
            j += 1
        message = "\n".join(lines[body_start:j]).rstrip("\n")
        entries.append(StoredEntry(location, headers, message))
        i = j
    return entries


def list_log_files(log_dir: str) -> list[str]:
    """Regular files in log_dir sorted by name; empty if the dir is missing."""
    if not os.path.isdir(log_dir):
        return []
    return sorted(
        name for name in os.listdir(log_dir)
        if os.path.isfile(os.path.join(log_dir, name))
    )


def read_entries(log_dir: str, filename: str) -> list[StoredEntry]:
    path = os.path.join(log_dir, filename)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return parse_entries(f.read())


def filter_by_header(entries, tag: str) -> list[StoredEntry]:
    return [entry for entry in entries if tag in entry.headers]


def search_entries(log_dir: str, text: str) -> list[tuple[str, StoredEntry]]:
    """Entries whose message or any header contains text, as (filename, entry)."""
    results = []
    for filename in list_log_files(log_dir):
        try:
            entries = read_entries(log_dir, filename)
        except OSError:
            continue
        for entry in entries:
            if text in entry.message or any(text in h for h in entry.headers):
                results.append((filename, entry))
    return results
