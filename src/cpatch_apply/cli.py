"""clientpatch - patch the 1.12.1 client executable."""
from __future__ import annotations

import json
from pathlib import Path

import click

from cpatch_core.client_table import client_patch_set
from cpatch_core.protocol import DEFAULT_EXPECTED_SIZE
from cpatch_core.tables import load_patch_table, parse_int
from cpatch_apply.backup import restore_backup
from cpatch_apply.engine import apply_patches

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}

_STAGE_MESSAGES = {
    "E_NOT_FOUND": "Executable not found at: {path}",
    "E_BACKUP": "Backup creation failed. Aborting.",
    "E_VALIDATION": "Executable validation failed. Aborting.",
    "E_OPEN": "Failed to open executable for patching.",
}


def _size_option(ctx, param, value):
    try:
        return parse_int(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _report(result: dict, exe: Path) -> None:
    for err in result["errors"]:
        code = err["code"]
        if code in _STAGE_MESSAGES:
            click.echo(_STAGE_MESSAGES[code].format(path=exe), err=True)
        elif code == "E_WRITE":
            where = f" at {err['offset']:#x}" if "offset" in err else ""
            click.echo(f"Entry {err.get('index', '?')}{where} failed: {err.get('detail')}", err=True)
        else:
            click.echo(f"{err['message']}", err=True)


@click.command()
@click.argument("exe", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--table", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Patch table (.json/.csv/.parquet); defaults to the bundled client table")
@click.option("--expected-size", default=hex(DEFAULT_EXPECTED_SIZE), callback=_size_option,
              show_default=True, help="Exact size in bytes (decimal or 0x hex)")
@click.option("--restore", is_flag=True, help="Restore EXE from EXE.backup instead of patching")
@click.option("--allow-partial", is_flag=True, help="Exit 0 even if some entries failed to write")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def main(exe: Path, table: Path | None, expected_size: int, restore: bool, allow_partial: bool, as_json: bool) -> None:
    """Patch the client executable EXE in place (a backup is kept at EXE.backup)."""
    if restore:
        if not restore_backup(exe):
            click.echo(f"Failed to restore backup for: {exe}", err=True)
            raise SystemExit(1)
        click.echo(f"Backup restored to: {exe}")
        return

    try:
        patch_set = load_patch_table(table) if table else client_patch_set()
    except (OSError, ValueError) as e:
        # Fail closed with a single-line reason.
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)

    result = apply_patches(exe, patch_set, expected_size)

    if as_json:
        click.echo(json.dumps(result, **CANONICAL_JSON_KW))
    else:
        _report(result, exe)

    if result["status"] == "FAIL":
        raise SystemExit(1)

    if not as_json:
        click.echo(f"Backup created at: {result['backup']}")
        written = sum(1 for e in result["entries"] if e["status"] == "WRITTEN")
        click.echo(f"  Entries written: {written}/{len(result['entries'])}")

    if result["status"] == "PARTIAL":
        if not as_json:
            click.echo("Patching finished with failed entries.", err=True)
        if not allow_partial:
            raise SystemExit(1)
        return

    if not as_json:
        click.echo("Patching completed successfully.")


if __name__ == "__main__":
    main()
