import sys
from pathlib import Path

from cpatch_core.client_table import client_patch_set
from cpatch_core.tables import SUPPORTED_SUFFIXES, dump_patch_table

def main():
    if len(sys.argv) != 2:
        print("Usage: export_table.py <out.json|out.csv|out.parquet>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    if p.suffix.lower() not in SUPPORTED_SUFFIXES:
        print(f"Unsupported format: {p.suffix or p.name}")
        raise SystemExit(2)

    patch_set = client_patch_set()
    dump_patch_table(patch_set, p)
    print(f"Wrote {len(patch_set)} entries ({patch_set.max_end():#x} max end) to {p}")

if __name__ == "__main__":
    main()
