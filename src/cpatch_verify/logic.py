import os
from pathlib import Path
from cpatch_core.patchset import PatchSet
from cpatch_core.protocol import DEFAULT_EXPECTED_SIZE
from .const import ERRORS


def _fail(code: str, size=None, **extra) -> dict:
    err = {"code": code, "message": ERRORS[code]}
    err.update(extra)
    return {"status": "FAIL", "error_count": 1, "errors": [err], "size": size}


def verify_executable(path: Path, expected_size: int = DEFAULT_EXPECTED_SIZE) -> dict:
    path = Path(path)
    if not path.is_file():
        return _fail("E_NOT_FOUND", path=str(path))

    try:
        with open(path, "rb") as f:
            size = f.seek(0, os.SEEK_END)
    except OSError as e:
        return _fail("E_OPEN", path=str(path), detail=str(e))

    # Fixed offsets only make sense for one exact build: no tolerance.
    if size != expected_size:
        return _fail("E_SIZE_MISMATCH", size=size, expected=expected_size, found=size)

    return {"status": "PASS", "error_count": 0, "errors": [], "size": size}


def inspect_patches(path: Path, patch_set: PatchSet) -> dict:
    """Report, per entry, whether the bytes on disk already equal the patch data."""
    path = Path(path)
    if not path.is_file():
        res = _fail("E_NOT_FOUND", path=str(path))
        res["entries"] = []
        return res

    entries = []
    try:
        with open(path, "rb") as f:
            size = f.seek(0, os.SEEK_END)
            for idx, entry in enumerate(patch_set):
                rep = {"index": idx, "offset": entry.offset, "length": len(entry), "label": entry.label}
                if entry.end > size:
                    rep["status"] = "OUT_OF_RANGE"
                else:
                    f.seek(entry.offset)
                    rep["status"] = "APPLIED" if f.read(len(entry)) == entry.data else "DIFFERS"
                entries.append(rep)
    except OSError as e:
        res = _fail("E_OPEN", path=str(path), detail=str(e))
        res["entries"] = []
        return res

    applied = sum(1 for e in entries if e["status"] == "APPLIED")
    if entries and applied == len(entries):
        status = "APPLIED"
    elif applied == 0:
        status = "NOT_APPLIED"
    else:
        status = "MIXED"
    return {"status": status, "applied": applied, "total": len(entries), "size": size, "entries": entries}
