"""
Filesystem access for JSON log files.
"""
import logging
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

LOG_FILE_PATTERN = "*.json"


class LogStore:
    """Lists, counts, reads and deletes log files on local disk."""

    def list_logs(self, root: PathLike, recursive: bool = False) -> List[str]:
        """List log files under root, sorted by path.

        A missing directory yields an empty list.
        """
        root = Path(root)
        if not root.is_dir():
            return []

        matches = root.rglob(LOG_FILE_PATTERN) if recursive else root.glob(LOG_FILE_PATTERN)
        return sorted(str(path) for path in matches if path.is_file())

    def list_projects(self, root: PathLike) -> List[str]:
        """List project names (top-level directories) under the global root.

        Hidden directories, such as Logdog's own log folder, are skipped.
        """
        root = Path(root)
        if not root.is_dir():
            return []

        try:
            return sorted(entry.name for entry in root.iterdir()
                          if entry.is_dir() and not entry.name.startswith("."))
        except OSError as e:
            logger.warning("Cannot scan global log root %s: %s", root, e)
            return []

    def count_entries(self, path: PathLike) -> int:
        """Count non-blank lines; unreadable files count as empty."""
        count = 0
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                for line in f:
                    if line.strip():
                        count += 1
        except OSError:
            return 0
        return count

    def read_lines(self, path: PathLike) -> List[str]:
        """Read stripped non-blank lines. Raises OSError if the file cannot be read."""
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return [line.strip() for line in f if line.strip()]

    def remove(self, path: PathLike) -> None:
        """Delete a log file. The OSError of a failed delete propagates."""
        os.remove(path)
        logger.info("Deleted log file %s", path)

    def mod_time_before(self, path: PathLike, cutoff: datetime) -> bool:
        """True if the file was last modified before cutoff.

        A file that cannot be stat'ed is never considered old.
        """
        try:
            mtime = os.stat(path).st_mtime
        except OSError:
            return False
        return datetime.fromtimestamp(mtime) < cutoff

    def select_old_logs(self, paths: List[str], retention_days: int,
                        now: Optional[datetime] = None) -> List[str]:
        """Return the paths older than the retention threshold."""
        cutoff = (now or datetime.now()) - timedelta(days=retention_days)
        return [path for path in paths if self.mod_time_before(path, cutoff)]

    def clear_old_logs(self, paths: List[str], retention_days: int,
                       now: Optional[datetime] = None) -> Tuple[int, List[str]]:
        """Delete every log older than the retention threshold.

        Returns the number deleted and one message per failed file; a failure
        never stops the remaining deletions.
        """
        deleted = 0
        errors = []
        for path in self.select_old_logs(paths, retention_days, now):
            try:
                self.remove(path)
            except OSError as e:
                logger.warning("Failed to delete %s: %s", path, e)
                errors.append(f"Failed to delete {os.path.basename(path)}: {e}")
            else:
                deleted += 1
        return deleted, errors


# Shared store instance
log_store = LogStore()
