"""Load and dump external patch tables (.json, .csv, .parquet)."""
from __future__ import annotations

import json
import numbers
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from .patchset import PatchEntry, PatchSet

SUPPORTED_SUFFIXES = (".json", ".csv", ".parquet")


def parse_int(value) -> int:
    """Parse an offset/count given as int, decimal string or 0x-prefixed hex."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    s = str(value).strip()
    base = 16 if s.lower().startswith("0x") else 10
    try:
        return int(s, base=base)
    except ValueError as e:
        raise ValueError(f"Invalid integer: {value!r}") from e


def _parse_data(value) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, list):
        return bytes(parse_int(v) for v in value)
    if isinstance(value, bool) or not isinstance(value, (str, numbers.Integral)):
        raise ValueError(f"Invalid patch data: {value!r}")
    if isinstance(value, numbers.Integral):
        # A bare number is one byte value, never hex digits
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value out of range: {value!r}")
        return bytes([int(value)])
    s = value.replace(" ", "").replace(":", "")
    if s.lower().startswith("0x"):
        s = s[2:]
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise ValueError(f"Invalid hex data: {value!r}") from e


def _missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def entry_from_record(rec: dict) -> PatchEntry:
    if "offset" not in rec or "data" not in rec:
        raise ValueError(f"Patch record needs 'offset' and 'data': {rec!r}")
    offset = parse_int(rec["offset"])
    data = _parse_data(rec["data"])
    label = rec.get("label")
    label = "" if _missing(label) else str(label)

    repeat = rec.get("repeat")
    if not _missing(repeat):
        if len(data) != 1:
            raise ValueError(f"'repeat' needs exactly one data byte at offset {offset:#x}")
        return PatchEntry.repeat(offset, data[0], parse_int(repeat), label)
    return PatchEntry(offset, data, label)


def _load_records(path: Path) -> list[dict]:
    suffix = path.suffix.lower()
    if suffix == ".json":
        obj = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(obj, dict):
            obj = obj.get("patches", [])
        if not isinstance(obj, list):
            raise ValueError("JSON patch table must be a list of records")
        return obj
    if suffix == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
    elif suffix == ".parquet":
        df = pd.read_parquet(path)
    else:
        raise ValueError(f"Unsupported patch table format: {path.suffix or path.name}")
    return df.to_dict(orient="records")


def load_patch_table(path: Path) -> PatchSet:
    """Read a patch table file into a PatchSet, preserving row order."""
    path = Path(path)
    return PatchSet(entry_from_record(rec) for rec in _load_records(path))


def _records(patch_set: PatchSet) -> list[dict]:
    return [
        {"offset": f"{e.offset:#x}", "data": e.data.hex(), "label": e.label}
        for e in patch_set
    ]


def dump_patch_table(patch_set: PatchSet, path: Path) -> None:
    """Write a PatchSet in the format implied by the file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported patch table format: {path.suffix or path.name}")

    records = _records(patch_set)
    if suffix == ".json":
        path.write_text(json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        return

    df = pd.DataFrame(records, columns=["offset", "data", "label"])
    if suffix == ".csv":
        df.to_csv(path, index=False)
        return

    schema = pa.schema(
        [
            ("offset", pa.int64()),
            ("data", pa.binary()),
            ("label", pa.string()),
        ]
    )
    df["offset"] = [e.offset for e in patch_set]
    df["data"] = [e.data for e in patch_set]
    table = pa.Table.from_pandas(df, schema=schema, preserve_index=False)
    pq.write_table(table, path)
