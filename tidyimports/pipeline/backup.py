from __future__ import annotations

import hashlib
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_DIR_PREFIX = "tidyimports-"


class BackupLocator:
    """
    Hands out collision-free backup paths for one invocation.

    All backups of a run live in one fresh directory created lazily (only
    when the first file actually changes) under the system temp dir, or
    under `root` when configured. Names embed a hash of the absolute source
    path, so two files called `__init__.py` never share a backup.
    Safe to share between worker threads.
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = Path(root) if root is not None else None
        self._dir: Optional[Path] = None
        self._lock = threading.Lock()

    @property
    def directory(self) -> Optional[Path]:
        return self._dir

    def _ensure_dir(self) -> Path:
        with self._lock:
            if self._dir is None:
                if self._root is not None:
                    self._root.mkdir(parents=True, exist_ok=True)
                    base = str(self._root)
                else:
                    base = None
                self._dir = Path(tempfile.mkdtemp(prefix=_DIR_PREFIX, dir=base))
                logger.info("backup directory created | dir=%s", self._dir)
            return self._dir

    def backup_path_for(self, path: Path) -> Path:
        resolved = Path(os.path.realpath(path))
        digest = hashlib.sha256(str(resolved).encode("utf-8", errors="surrogatepass")).hexdigest()[:12]
        return self._ensure_dir() / f"{resolved.name}.{digest}.bak"

    def write_backup(self, path: Path, data: bytes) -> Path:
        """
        Store `data` as the backup of `path`. Exclusive create: an existing
        backup is never overwritten.
        """
        dest = self.backup_path_for(path)
        with open(dest, "xb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        return dest
