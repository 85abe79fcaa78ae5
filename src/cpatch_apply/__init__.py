"""clientpatch apply - backup, validate and write a PatchSet."""
from .backup import backup_path_for, create_backup, has_backup, restore_backup
from .engine import apply_patches
from .writer import ByteWriter

__all__ = ["ByteWriter", "apply_patches", "backup_path_for", "create_backup", "has_backup", "restore_backup"]
