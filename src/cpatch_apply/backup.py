"""Whole-file backup and restore for the patch target."""
from __future__ import annotations

import os
import shutil
from pathlib import Path
from warnings import warn

from cpatch_core.protocol import BACKUP_SUFFIX


def backup_path_for(path: Path) -> Path:
    path = Path(path)
    return path.with_name(path.name + BACKUP_SUFFIX)


def has_backup(path: Path) -> bool:
    return backup_path_for(path).is_file()


def create_backup(path: Path) -> Path | None:
    """Copy ``path`` to ``path.backup``, overwriting any previous backup.

    Returns the backup path, or None if the copy failed (the cause is warned).
    """
    backup = backup_path_for(path)
    try:
        shutil.copy2(path, backup)
    except OSError as e:
        warn(f"Failed to create backup: {e}")
        return None
    return backup


def restore_backup(path: Path) -> bool:
    """Move ``path.backup`` back over ``path``.

    Uses os.replace, so ``path`` always names either the old file or the
    restored one. The backup is consumed on success.
    """
    path = Path(path)
    backup = backup_path_for(path)
    if not backup.is_file():
        warn(f"Backup not found: {backup}")
        return False
    try:
        os.replace(backup, path)
    except OSError as e:
        warn(f"Failed to restore backup: {e}")
        return False
    return True
