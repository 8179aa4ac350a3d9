"""Output directory resolution: build-artifact dir, workspace root, or project root."""

import logging
import os
import tomllib
from pathlib import Path

from odebug.config import Config
from odebug.errors import PathResolutionFailed

logger = logging.getLogger(__name__)

PROJECT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg")
BUILD_DIR_NAME = "build"
BUILD_SUBDIR = "odebug"
DEBUG_DIR_NAME = ".debug"


def _walk_up(start: Path):
    yield start
    yield from start.parents


def find_project_root(start: Path) -> Path | None:
    """Walk up from start to the first directory holding a project marker."""
    for directory in _walk_up(start):
        if any((directory / marker).exists() for marker in PROJECT_MARKERS):
            return directory
    return None


def _declares_workspace(pyproject: Path) -> bool:
    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return "workspace" in data.get("tool", {}).get("uv", {})


def find_workspace_root(start: Path) -> Path | None:
    """Walk up from start to the first pyproject.toml declaring [tool.uv.workspace]."""
    for directory in _walk_up(start):
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and _declares_workspace(pyproject):
            return directory
    return None


class PathResolver:
    """Picks the directory log files are written under.

    Nothing is cached between calls: the project layout is re-derived from
    the working directory each time `resolve` runs.
    """

    def __init__(self, config: Config, cwd: str | os.PathLike | None = None):
        self._config = config
        self._cwd = cwd
        self._warned = False

    def _start(self) -> Path:
        return Path(self._cwd).resolve() if self._cwd else Path.cwd()

    def _root(self, start: Path) -> Path:
        if self._config.use_workspace_root:
            workspace = find_workspace_root(start)
            if workspace is not None:
                return workspace
            if not self._warned:
                logger.warning("Could not find workspace root, falling back to project root")
                self._warned = True
        return find_project_root(start) or start

    def base_dir(self) -> Path:
        """Compute the base directory without touching the filesystem beyond discovery."""
        start = self._start()
        if self._config.output_to_build_dir:
            if self._config.target_dir:
                build_root = Path(self._config.target_dir)
                if not build_root.is_absolute():
                    build_root = start / build_root
            else:
                build_root = self._root(start) / BUILD_DIR_NAME
            return build_root / BUILD_SUBDIR
        return self._root(start) / DEBUG_DIR_NAME

    def resolve(self) -> Path:
        """Return the base directory, creating it (and parents) if missing."""
        try:
            directory = self.base_dir()
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise PathResolutionFailed(f"Cannot prepare log directory: {e}") from e
        return directory
