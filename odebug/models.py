"""Log entry data model, draft call shapes, and the chaining builder."""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class Location:
    source_path: str
    line: int

    def __str__(self) -> str:
        return f"{self.source_path}:{self.line}"


@dataclass(frozen=True)
class LogEntry:
    message: str
    headers: tuple[str, ...]
    target_file: str
    location: Location


@dataclass(frozen=True)
class Chain:
    """Builder mirroring ``"msg".to_file(...).with_header(...)`` call chains.

    Each modifier returns a new Chain, so a partially built chain can be
    reused as a template.
    """

    value: Any
    args: tuple = ()
    headers: tuple[str, ...] = ()
    file_name: str | None = None

    def with_header(self, tag) -> "Chain":
        return replace(self, headers=self.headers + (str(tag),))

    def to_file(self, name) -> "Chain":
        return replace(self, file_name=str(name))


def chain(value, *args) -> Chain:
    """Start a chain: ``chain("v={}", 3).with_header("A").to_file("x.log")``."""
    return Chain(value, args)


# Draft call shapes handed to the normalizer, one per supported invocation.


@dataclass(frozen=True)
class PlainDraft:
    message: Any
    args: tuple = ()


@dataclass(frozen=True)
class FileDraft:
    file_name: str
    message: Any
    args: tuple = ()


@dataclass(frozen=True)
class PathDraft:
    segments: tuple[str, ...]
    message: Any
    args: tuple = ()


@dataclass(frozen=True)
class ExplicitFilePathDraft:
    file_name: str
    segments: tuple[str, ...]
    message: Any
    args: tuple = ()


@dataclass(frozen=True)
class ChainDraft:
    chain: Chain


DraftCall = PlainDraft | FileDraft | PathDraft | ExplicitFilePathDraft | ChainDraft
