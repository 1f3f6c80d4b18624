# patchforge/store.py
import contextlib
import logging
import os
import shutil
import tempfile
from typing import Iterator, List, Optional, Sequence

from .errors.path import PathViolation
from .errors.store import StoreError
from .models.edits import Document
from .utils.gitignore import get_gitignore

log = logging.getLogger(__name__)

__all__ = ["ProjectStore", "DEFAULT_EXCLUDE"]

# Staging area for user uploads; never offered to the patch engine.
DEFAULT_EXCLUDE = ("uploads/",)


def _normalized_path(base_real: str, rel_path: str) -> str:
    """
    Join and normalize a project-relative path while enforcing containment.
    Raises PathViolation if the resolved path escapes base_real.
    """
    target_path = os.path.join(base_real, *rel_path.split("/"))
    resolved = os.path.abspath(target_path)
    if os.path.commonpath([base_real, resolved]) != base_real:
        raise PathViolation(f"Path traversal attempt detected for '{rel_path}'")
    return resolved


def _backup_path(dest: str, backup_ext: str) -> str:
    ext = backup_ext if backup_ext.startswith(".") else "." + backup_ext
    return dest + ext


class ProjectStore:
    """
    Text documents under a project root.

    Enumeration skips `.git/`, anything the project's .gitignore excludes and
    the `exclude` patterns (gitwildmatch syntax, "uploads/" by default).
    Writes are atomic by default: content is staged to a temp file in the
    destination directory and promoted with os.replace().
    """

    def __init__(
        self,
        root: str,
        *,
        exclude: Sequence[str] = DEFAULT_EXCLUDE,
        atomic: bool = True,
        backup_ext: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        self.root = os.path.realpath(root)
        self.exclude = tuple(exclude)
        if backup_ext:
            # Backups must not be offered back as documents.
            self.exclude += ("*" + _backup_path("", backup_ext),)
        self.atomic = atomic
        self.backup_ext = backup_ext
        self.encoding = encoding
        if not os.path.isdir(self.root):
            raise StoreError(f"Project root '{root}' is not a directory")

    def list_paths(self) -> List[str]:
        """Project-relative POSIX paths of every visible document, sorted."""
        spec = get_gitignore(self.root, extra=self.exclude)
        paths: List[str] = []
        for current, dirs, files in os.walk(self.root):
            rel_dir = os.path.relpath(current, self.root).replace(os.sep, "/")
            rel_dir = "" if rel_dir == "." else rel_dir + "/"
            # Prune ignored directories so os.walk never descends into them.
            dirs[:] = sorted(d for d in dirs if not spec.match_file(rel_dir + d + "/"))
            for name in sorted(files):
                rel = rel_dir + name
                if not spec.match_file(rel):
                    paths.append(rel)
        return paths

    def read(self, path: str) -> str:
        resolved = _normalized_path(self.root, path)
        try:
            with open(resolved, "r", encoding=self.encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"Failed to read '{path}': {e}") from e

    def documents(self) -> Iterator[Document]:
        """Yield a snapshot of every readable text document."""
        for path in self.list_paths():
            try:
                content = self.read(path)
            except StoreError as e:
                log.warning(f"  - WARNING: Skipping unreadable document: {e}")
                continue
            yield Document(path=path, content=content)

    def write(self, path: str, content: str) -> None:
        dest = _normalized_path(self.root, path)
        dirpath = os.path.dirname(dest)
        try:
            os.makedirs(dirpath, exist_ok=True)
            if self.backup_ext and os.path.exists(dest):
                shutil.copy2(dest, _backup_path(dest, self.backup_ext))
            if not self.atomic:
                with open(dest, "w", encoding=self.encoding) as f:
                    f.write(content)
                return

            fd, tmp = tempfile.mkstemp(prefix=".pf-", suffix=".tmp", dir=dirpath)
            try:
                with os.fdopen(fd, "w", encoding=self.encoding) as f:
                    f.write(content)
                os.replace(tmp, dest)  # atomic within a filesystem
            except BaseException:
                with contextlib.suppress(OSError):
                    os.remove(tmp)
                raise
        except OSError as e:
            raise StoreError(f"Failed to write '{path}': {e}") from e
