"""Named filesystem locations (executable, supporting files, resources, docs, scratch) with memoized resolution."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from desktop_options.config import DOCS_BUNDLE_TRAVERSAL
from desktop_options.platform import Platform, PlatformProfile

logger = logging.getLogger(__name__)

BUNDLE_DESCRIPTOR = "Info.plist"
SCRATCH_CHILD = "tmp"


class ResolutionStrategy(str, Enum):
    """How a ResolvedPath was arrived at."""

    EXPLICIT = "explicit"  # set by the host at startup
    DEVELOPER = "developer"  # sibling inside a source checkout
    INSTALLED = "installed"  # installed package layout
    BUNDLE = "bundle"  # macOS .app bundle layout
    FALLBACK = "fallback"  # caller-supplied default
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ResolvedPath:
    """An absolute path (None when unresolved) and the strategy that produced it."""

    path: Path | None
    strategy: ResolutionStrategy

    @classmethod
    def unresolved(cls) -> ResolvedPath:
        return cls(None, ResolutionStrategy.UNRESOLVED)

    @property
    def empty(self) -> bool:
        return self.path is None

    def exists(self) -> bool:
        return self.path is not None and self.path.exists()

    def __str__(self) -> str:
        return "" if self.path is None else str(self.path)


def _normalized(path: Path) -> Path:
    """Collapse ".." segments lexically; symlinks are left alone."""
    return Path(os.path.normpath(path))


def find_executable(argv0: str) -> Path:
    """
    Absolute path of the running executable given argv[0].
    Bare names are looked up on PATH. Raises FileNotFoundError when nothing exists.
    """
    if not argv0:
        raise FileNotFoundError("argv[0] is empty")
    candidate = Path(argv0)
    if not candidate.exists() and candidate.parent == Path("."):
        found = shutil.which(argv0)
        if found is None:
            raise FileNotFoundError(f"{argv0} not found on PATH")
        candidate = Path(found)
    return candidate.resolve(strict=True)


class PathResolver:
    """
    Resolves the shell's named locations once per process.

    Each accessor caches its first successful result in an Optional field;
    nothing is ever re-resolved, even if the filesystem changes afterwards.
    """

    def __init__(
        self,
        profile: PlatformProfile,
        argv0: str | None = None,
        docs_bundle_traversal: str = DOCS_BUNDLE_TRAVERSAL,
        locate_executable: Callable[[str], Path] = find_executable,
    ) -> None:
        self.profile = profile
        self._argv0 = argv0 if argv0 is not None else (sys.argv[0] if sys.argv and sys.argv[0] else sys.executable)
        self._docs_bundle_traversal = docs_bundle_traversal
        self._locate_executable = locate_executable

        self._scripts: Path | None = None
        self._scratch_root: Path | None = None

        self._executable: ResolvedPath | None = None
        self._supporting: ResolvedPath | None = None
        self._resources: ResolvedPath | None = None
        self._docs: ResolvedPath | None = None
        self._scratch_temp: Path | None = None

    # --- explicit locations set by the host ---

    def scripts_path(self) -> ResolvedPath:
        if self._scripts is None:
            return ResolvedPath.unresolved()
        return ResolvedPath(self._scripts, ResolutionStrategy.EXPLICIT)

    def set_scripts_path(self, path: Path | str) -> None:
        self._scripts = Path(path)

    @property
    def scratch_root(self) -> Path | None:
        return self._scratch_root

    def set_scratch_root(self, path: Path | str | None) -> None:
        """Set the process-wide scratch root. Forgets any previously resolved scratch temp dir."""
        self._scratch_root = Path(path) if path else None
        self._scratch_temp = None

    # --- resolved locations ---

    def executable_path(self) -> ResolvedPath:
        if self._executable is None:
            try:
                found = self._locate_executable(self._argv0)
            except OSError as e:
                logger.error("Could not determine executable path from %r: %s", self._argv0, e)
                return ResolvedPath.unresolved()
            self._executable = ResolvedPath(found, ResolutionStrategy.INSTALLED)
        return self._executable

    def supporting_file_path(self) -> ResolvedPath:
        """
        Install root: one level above the executable's directory.
        On bundle platforms a sibling Info.plist means we are inside an .app
        and supporting files live in its Resources folder instead.
        """
        if self._supporting is None:
            executable = self.executable_path()
            if executable.empty:
                return ResolvedPath.unresolved()
            install = _normalized(executable.path.parent / "..")
            resolved = ResolvedPath(install, ResolutionStrategy.INSTALLED)
            if self.profile.bundle_layout and (install / BUNDLE_DESCRIPTOR).exists():
                resolved = ResolvedPath(install / "Resources", ResolutionStrategy.BUNDLE)
            self._supporting = resolved
        return self._supporting

    def resources_path(self) -> ResolvedPath:
        if self._resources is None:
            scripts = self.scripts_path()
            if not scripts.empty and (scripts.path / "resources").exists():
                # developer configuration: 'resources' is a sibling of the executable
                self._resources = ResolvedPath(scripts.path / "resources", ResolutionStrategy.DEVELOPER)
            else:
                supporting = self.supporting_file_path()
                if supporting.empty:
                    return ResolvedPath.unresolved()
                self._resources = ResolvedPath(supporting.path / "resources", supporting.strategy)
        return self._resources

    def docs_path(self) -> ResolvedPath:
        """First existing docs candidate; the last candidate is returned even if it does not exist."""
        if self._docs is None:
            supporting = self.supporting_file_path()
            if supporting.empty:
                return ResolvedPath.unresolved()
            candidates = [
                ResolvedPath(supporting.path / "www" / "docs", supporting.strategy),
                ResolvedPath(_normalized(supporting.path / "../gwt/www/docs"), ResolutionStrategy.DEVELOPER),
            ]
            if self.profile.bundle_layout:
                candidates.append(
                    ResolvedPath(
                        _normalized(supporting.path / self._docs_bundle_traversal), ResolutionStrategy.DEVELOPER
                    )
                )
            chosen = candidates[-1]
            for candidate in candidates:
                if candidate.exists():
                    chosen = candidate
                    break
            self._docs = chosen
        return self._docs

    def scratch_temp_dir(self, default: Path | None = None) -> ResolvedPath:
        """
        <scratch root>/tmp, created if needed. Returns default (strategy FALLBACK)
        when no scratch root is set, the root is missing, or creation fails.
        """
        if self._scratch_temp is None:
            root = self._scratch_root
            if root is None or not root.is_dir():
                return ResolvedPath(default, ResolutionStrategy.FALLBACK)
            self._scratch_temp = root / SCRATCH_CHILD
        try:
            self._scratch_temp.mkdir(exist_ok=True)
        except OSError as e:
            logger.warning("Could not create scratch temp dir %s: %s", self._scratch_temp, e)
            return ResolvedPath(default, ResolutionStrategy.FALLBACK)
        return ResolvedPath(self._scratch_temp, ResolutionStrategy.EXPLICIT)

    def clean_up_scratch_temp_dir(self) -> None:
        """Remove <scratch root>/tmp if it exists. Safe to call repeatedly."""
        root = self._scratch_root
        if root is None:
            return
        temp = self._scratch_temp or root / SCRATCH_CHILD
        if not temp.exists():
            return
        try:
            shutil.rmtree(temp)
        except OSError as e:
            logger.warning("Could not remove scratch temp dir %s: %s", temp, e)

    # --- Windows helper executables ---

    def _helper_path(self, dev_subdir: str, exe_name: str, what: str) -> Path:
        self.profile.require(Platform.WINDOWS, what)
        parent = self.scripts_path().path
        if parent is None:
            parent = Path()
        # detect dev configuration
        if parent.name == "desktop":
            parent = parent / dev_subdir
        return parent / exe_name

    def urlopener_path(self) -> Path:
        return self._helper_path("urlopener", "urlopener.exe", "urlopener")

    def rsinverse_path(self) -> Path:
        return self._helper_path("synctex/rsinverse", "rsinverse.exe", "rsinverse")
