"""clientpatch core - patch model, constants and tables."""
from .client_table import client_patch_set
from .patchset import PatchEntry, PatchSet
from .tables import dump_patch_table, load_patch_table

__all__ = ["PatchEntry", "PatchSet", "client_patch_set", "load_patch_table", "dump_patch_table"]
