"""clientpatch - apply a PatchSet to the target executable."""
from __future__ import annotations

from pathlib import Path

from cpatch_core.patchset import PatchSet
from cpatch_core.protocol import (
    DEFAULT_EXPECTED_SIZE,
    STAGE_BACKING_UP,
    STAGE_DONE,
    STAGE_PATCHING,
    STAGE_VALIDATED,
    STAGE_VALIDATING,
)
from cpatch_verify.const import ERRORS
from cpatch_verify.logic import verify_executable

from .backup import create_backup
from .writer import ByteWriter


def _result(status: str, stage: str, backup: Path | None, errors: list[dict], entries: list[dict]) -> dict:
    return {
        "status": status,
        "stage": stage,
        "backup": str(backup) if backup else None,
        "error_count": len(errors),
        "errors": errors,
        "entries": entries,
    }


def _error(code: str, **extra) -> dict:
    err = {"code": code, "message": ERRORS[code]}
    err.update(extra)
    return err


def apply_patches(
    path: Path,
    patch_set: PatchSet,
    expected_size: int = DEFAULT_EXPECTED_SIZE,
) -> dict:
    """Back up, validate, then write every entry of ``patch_set`` into ``path``.

    Hard failures before the first write (missing file, backup, validation,
    open) return status FAIL with the stage they happened in. Once patching
    starts every entry is attempted; the run ends PASS if all entries were
    written and PARTIAL otherwise, with per-entry outcomes in ``entries``.
    """
    path = Path(path)

    # 1. Target must exist before anything touches the disk
    if not path.is_file():
        return _result("FAIL", STAGE_VALIDATING, None, [_error("E_NOT_FOUND", path=str(path))], [])

    # 2. Safety net
    backup = create_backup(path)
    if backup is None:
        return _result("FAIL", STAGE_BACKING_UP, None, [_error("E_BACKUP", path=str(path))], [])

    # 3. Exact-size gate
    check = verify_executable(path, expected_size)
    if check["status"] != "PASS":
        return _result("FAIL", STAGE_VALIDATING, backup, [_error("E_VALIDATION")] + check["errors"], [])

    # 4-6. Patch under a single owned stream
    entries: list[dict] = []
    errors: list[dict] = []
    try:
        with open(path, "r+b") as f:
            writer = ByteWriter(f, size_limit=check["size"])
            for idx, entry in enumerate(patch_set):
                rep = {"index": idx, "offset": entry.offset, "length": len(entry), "label": entry.label}
                if writer.write_entry(entry):
                    rep["status"] = "WRITTEN"
                else:
                    rep["status"] = "FAILED"
                    rep["detail"] = writer.last_error
                    errors.append(_error("E_WRITE", index=idx, offset=entry.offset, detail=writer.last_error))
                entries.append(rep)
    except OSError as e:
        if not entries:
            return _result("FAIL", STAGE_VALIDATED, backup, [_error("E_OPEN", path=str(path), detail=str(e))], [])
        # Failure while flushing/closing after writes were issued
        errors.append(_error("E_WRITE", detail=str(e)))
        return _result("PARTIAL", STAGE_PATCHING, backup, errors, entries)

    status = "PARTIAL" if errors else "PASS"
    return _result(status, STAGE_DONE, backup, errors, entries)
