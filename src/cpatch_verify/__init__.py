"""clientpatch verifier - read-only checks of a target executable."""
from .logic import inspect_patches, verify_executable

__all__ = ["verify_executable", "inspect_patches"]
