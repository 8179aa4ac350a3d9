"""Single entry point: gate, then normalize → format → append."""

from dataclasses import replace

from odebug.config import Config
from odebug.formatter import format_entry
from odebug.location import capture_location
from odebug.models import (
    Chain,
    ChainDraft,
    ExplicitFilePathDraft,
    FileDraft,
    PathDraft,
    PlainDraft,
)
from odebug.normalizer import normalize
from odebug.resolver import PathResolver
from odebug.sink import FileSink


class Dispatcher:
    """Routes log calls to files under the resolved debug directory.

    Every surface returns True when the entry was written and False when it
    was gated off or dropped. Nothing raised inside the pipeline escapes.
    """

    def __init__(
        self,
        config: Config,
        resolver: PathResolver | None = None,
        sink: FileSink | None = None,
        debug_mode: bool = __debug__,
    ):
        self._config = config
        self._resolver = resolver or PathResolver(config)
        self._sink = sink or FileSink(fsync=config.fsync_writes)
        self.enabled = config.always_log or debug_mode
        self.dropped = 0

    @property
    def config(self) -> Config:
        return self._config

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    def __call__(self, message, *args) -> bool:
        """Plain message, or a Chain built with to_file / with_header.

        Extra args passed alongside a Chain extend the chain's own format args.
        """
        if not self.enabled:
            return False
        if isinstance(message, Chain):
            if args:
                message = replace(message, args=message.args + args)
            draft = ChainDraft(message)
        else:
            draft = PlainDraft(message, args)
        return self.dispatch(draft, capture_location())

    def to(self, file_name, message, *args) -> bool:
        """Route a message to an explicit file."""
        if not self.enabled:
            return False
        return self.dispatch(FileDraft(file_name, message, args), capture_location())

    def dispatch(self, draft, location) -> bool:
        if not self.enabled:
            return False
        try:
            entry = normalize(
                draft,
                location,
                default_file=self._config.default_file,
                extension=self._config.file_extension,
            )
            block = format_entry(entry)
            path = self._resolver.resolve() / entry.target_file
            self._sink.append(path, block)
        except Exception:
            # Logging must never become a new failure in the host program.
            self.dropped += 1
            return False
        return True


class PathCall:
    """Attribute-path surface: ``trace.a.b.op(msg)`` and ``trace["f.log"].x.op(msg)``.

    Every segment but the last becomes a header; the last names the
    operation and only documents the call site.
    """

    def __init__(self, dispatcher: Dispatcher, segments: tuple = (), file_name=None):
        self._dispatcher = dispatcher
        self._segments = segments
        self._file_name = file_name

    def __getattr__(self, name):
        # Dunders stay real attribute lookups (copy, pickle, repr machinery)
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return PathCall(self._dispatcher, self._segments + (name,), self._file_name)

    def __getitem__(self, file_name):
        return PathCall(self._dispatcher, self._segments, file_name)

    def __call__(self, message, *args) -> bool:
        if not self._dispatcher.enabled:
            return False
        if self._file_name is not None:
            draft = ExplicitFilePathDraft(self._file_name, self._segments, message, args)
        else:
            draft = PathDraft(self._segments, message, args)
        return self._dispatcher.dispatch(draft, capture_location())

    def __repr__(self):
        path = ".".join(self._segments)
        if self._file_name is not None:
            return f"PathCall[{self._file_name!r}]({path})"
        return f"PathCall({path})"
