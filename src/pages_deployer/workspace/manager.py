"""Staging directory management and build output synchronization."""

from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Sequence, Union

from ..paths import METADATA_EXCLUDES, PROTECTED_FILES, STAGING_DIR_NAME

logger = logging.getLogger(__name__)


def parse_clean_exclude(raw: Union[List[str], str, None]) -> List[str]:
    """Turn the clean-exclude input into a list of patterns.

    Accepts a list or a JSON-encoded list. Anything unparsable is logged and
    treated as an empty list.
    """
    if not raw:
        return []
    try:
        items = json.loads(raw) if isinstance(raw, str) else raw
        if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
            raise ValueError("expected a list of strings")
    except ValueError as exc:
        logger.warning(
            "There was an error parsing your CLEAN_EXCLUDE items (%s). "
            "Please refer to the README for more details. ❌",
            exc,
        )
        return []
    return [item for item in items if item]


def matches_any(relative: PurePosixPath, is_dir: bool, patterns: Iterable[str]) -> bool:
    """Match a path against rsync style exclude patterns.

    - ``name``: matches any path component's final name
    - ``dir/name``: matches the trailing components of the path
    - ``/dir/name``: anchored, matches the path relative to the sync root
    - trailing ``/``: only matches directories

    Globs apply per component, so ``*`` never crosses a ``/``.
    """
    parts = relative.parts
    for pattern in patterns:
        dir_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        if not pattern or (dir_only and not is_dir):
            continue
        if "/" not in pattern:
            if fnmatchcase(relative.name, pattern):
                return True
            continue
        wanted = pattern.lstrip("/").split("/")
        candidate = parts if pattern.startswith("/") else parts[-len(wanted):]
        if len(candidate) == len(wanted) and all(
            fnmatchcase(part, glob) for part, glob in zip(candidate, wanted)
        ):
            return True
    return False


@dataclass
class SyncResult:
    """Counts collected while mirroring the build output."""

    copied: int = 0
    deleted: int = 0
    deleted_paths: List[str] = field(default_factory=list)


class StagingWorkspace:
    """Owns the staging worktree directory inside the workspace."""

    def __init__(self, workspace: Path, dir_name: str = STAGING_DIR_NAME) -> None:
        self.workspace = Path(workspace)
        self.dir_name = dir_name
        self.path = self.workspace / dir_name

    def destination(self, target_folder: Optional[str] = None) -> Path:
        if target_folder:
            return self.path / target_folder.strip("/")
        return self.path

    def synchronize(
        self,
        source: Path,
        *,
        target_folder: Optional[str] = None,
        clean: bool = False,
        clean_exclude: Sequence[str] = (),
        source_is_root: bool = False,
    ) -> SyncResult:
        """Mirror ``source`` into the staging directory.

        Files are copied over whatever is staged. With ``clean`` set, staged
        entries missing from ``source`` are deleted unless an exclusion pattern
        or one of the protected hosting files covers them.
        """
        source = Path(source)
        if not source.is_dir():
            raise FileNotFoundError(f"Build folder does not exist or is not a directory: {source}")

        skip = list(METADATA_EXCLUDES)
        if source_is_root:
            skip.append(self.dir_name)

        dest = self.destination(target_folder)
        dest.mkdir(parents=True, exist_ok=True)

        result = SyncResult()
        self._copy_tree(source, dest, PurePosixPath(), skip, result)
        if clean:
            protected = [*skip, *clean_exclude, *PROTECTED_FILES]
            self._delete_extraneous(source, dest, PurePosixPath(), protected, result)
        logger.debug("Synchronized %d files, deleted %d entries", result.copied, result.deleted)
        return result

    def cleanup(self) -> None:
        if self.path.exists():
            shutil.rmtree(self.path, ignore_errors=True)

    def _copy_tree(
        self,
        src_dir: Path,
        dest_dir: Path,
        relative: PurePosixPath,
        skip: List[str],
        result: SyncResult,
    ) -> None:
        for child in sorted(src_dir.iterdir()):
            rel = relative / child.name
            is_dir = child.is_dir() and not child.is_symlink()
            if matches_any(rel, is_dir, skip):
                continue
            target = dest_dir / child.name

            if is_dir:
                if target.is_symlink() or (target.exists() and not target.is_dir()):
                    _remove(target)
                target.mkdir(exist_ok=True)
                self._copy_tree(child, target, rel, skip, result)
                continue

            if target.exists() or target.is_symlink():
                _remove(target)
            if child.is_symlink():
                os.symlink(os.readlink(child), target)
            else:
                shutil.copy2(child, target)
            result.copied += 1

    def _delete_extraneous(
        self,
        src_dir: Path,
        dest_dir: Path,
        relative: PurePosixPath,
        protected: List[str],
        result: SyncResult,
    ) -> None:
        for child in sorted(dest_dir.iterdir()):
            rel = relative / child.name
            is_dir = child.is_dir() and not child.is_symlink()
            if matches_any(rel, is_dir, protected):
                continue
            counterpart = src_dir / child.name
            missing = not (counterpart.exists() or counterpart.is_symlink())
            if missing and not (is_dir and _contains_match(child, rel, protected)):
                _remove(child)
                result.deleted += 1
                result.deleted_paths.append(rel.as_posix())
            elif is_dir:
                # A missing counterpart makes every unprotected entry below extraneous
                self._delete_extraneous(counterpart, child, rel, protected, result)


def _contains_match(directory: Path, relative: PurePosixPath, patterns: List[str]) -> bool:
    for child in directory.iterdir():
        rel = relative / child.name
        is_dir = child.is_dir() and not child.is_symlink()
        if matches_any(rel, is_dir, patterns):
            return True
        if is_dir and _contains_match(child, rel, patterns):
            return True
    return False


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
