import json
from pathlib import Path
import click
from cpatch_core.client_table import client_patch_set
from cpatch_core.tables import load_patch_table, parse_int
from .logic import inspect_patches, verify_executable
from cpatch_core.protocol import DEFAULT_EXPECTED_SIZE

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _size_option(ctx, param, value):
    try:
        return parse_int(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


@click.group()
def main():
    pass

@main.command("exe")
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--expected-size", default=hex(DEFAULT_EXPECTED_SIZE), callback=_size_option,
              show_default=True, help="Exact size in bytes (decimal or 0x hex)")
def exe_cmd(path: Path, expected_size: int):
    result = verify_executable(path, expected_size)
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))
    if result["status"] != "PASS":
        raise SystemExit(1)

@main.command("status")
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--table", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Patch table (.json/.csv/.parquet); defaults to the bundled client table")
def status_cmd(path: Path, table: Path | None):
    try:
        patch_set = load_patch_table(table) if table else client_patch_set()
    except (OSError, ValueError) as e:
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)
    result = inspect_patches(path, patch_set)
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))
    if result["status"] == "FAIL":
        raise SystemExit(1)

if __name__ == "__main__":
    main()
