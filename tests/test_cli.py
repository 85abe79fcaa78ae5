import json
import os
import subprocess
import sys
from pathlib import Path

from click.testing import CliRunner

from cpatch_apply.cli import main as cpatch
from cpatch_verify.cli import main as cpatch_verify


def run(cmd, cwd):
    env = dict(os.environ, PYTHONPATH=str(Path(cwd) / "src"))
    return subprocess.run(cmd, cwd=cwd, env=env, check=False, capture_output=True, text=True)


def test_missing_argument_exits_nonzero(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    r = run([sys.executable, "-m", "cpatch_apply.cli"], cwd=repo)
    assert r.returncode != 0
    assert "Missing argument" in r.stderr


def test_nonexistent_target(tmp_path):
    exe = tmp_path / "WoW.exe"
    r = CliRunner().invoke(cpatch, [str(exe)])
    assert r.exit_code == 1
    assert "Executable not found at" in r.output
    assert list(tmp_path.iterdir()) == []


def test_patch_then_restore(tmp_path):
    exe = tmp_path / "WoW.exe"
    exe.write_bytes(bytes(64))
    table = tmp_path / "t.json"
    table.write_text(json.dumps([{"offset": "0x10", "data": "eb"}, {"offset": 20, "data": "90", "repeat": 3}]))

    runner = CliRunner()
    r = runner.invoke(cpatch, [str(exe), "--table", str(table), "--expected-size", "0x40"])
    assert r.exit_code == 0, r.output
    assert "Patching completed successfully." in r.output
    data = exe.read_bytes()
    assert data[0x10] == 0xEB and data[20:23] == b"\x90" * 3

    r = runner.invoke(cpatch, [str(exe), "--restore"])
    assert r.exit_code == 0, r.output
    assert exe.read_bytes() == bytes(64)
    assert not (tmp_path / "WoW.exe.backup").exists()


def test_validation_failure_exits_one(tmp_path):
    exe = tmp_path / "WoW.exe"
    exe.write_bytes(bytes(10))
    r = CliRunner().invoke(cpatch, [str(exe), "--json"])
    assert r.exit_code == 1
    result = json.loads(r.output.strip().splitlines()[-1])
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_VALIDATION"
    assert exe.read_bytes() == bytes(10)


def test_partial_run(tmp_path):
    exe = tmp_path / "WoW.exe"
    exe.write_bytes(bytes(8))
    table = tmp_path / "t.csv"
    table.write_text("offset,data\n1,ff\n7,0102\n")

    args = [str(exe), "--table", str(table), "--expected-size", "8"]
    runner = CliRunner()
    assert runner.invoke(cpatch, args).exit_code == 1
    assert runner.invoke(cpatch, args + ["--allow-partial"]).exit_code == 0
    assert exe.read_bytes() == b"\x00\xff" + bytes(6)


def test_bad_table_fails_closed(tmp_path):
    exe = tmp_path / "WoW.exe"
    exe.write_bytes(bytes(8))
    table = tmp_path / "t.json"
    table.write_text('[{"offset": -1, "data": "00"}]')
    r = CliRunner().invoke(cpatch, [str(exe), "--table", str(table)])
    assert r.exit_code == 1
    assert "FATAL" in r.output
    assert not (tmp_path / "WoW.exe.backup").exists()


def test_restore_without_backup(tmp_path):
    exe = tmp_path / "WoW.exe"
    exe.write_bytes(b"x")
    r = CliRunner().invoke(cpatch, [str(exe), "--restore"])
    assert r.exit_code == 1


def test_verify_cli(tmp_path):
    exe = tmp_path / "WoW.exe"
    exe.write_bytes(bytes(16))
    runner = CliRunner()

    r = runner.invoke(cpatch_verify, ["exe", str(exe), "--expected-size", "16"])
    assert r.exit_code == 0
    assert json.loads(r.output)["status"] == "PASS"

    r = runner.invoke(cpatch_verify, ["exe", str(exe)])
    assert r.exit_code == 1

    table = tmp_path / "t.json"
    table.write_text('[{"offset": 0, "data": "00"}, {"offset": 1, "data": "01"}]')
    r = runner.invoke(cpatch_verify, ["status", str(exe), "--table", str(table)])
    assert r.exit_code == 0
    assert json.loads(r.output)["status"] == "MIXED"


def test_verify_status_bad_table_fails_closed(tmp_path):
    exe = tmp_path / "WoW.exe"
    exe.write_bytes(bytes(16))
    table = tmp_path / "t.json"
    table.write_text('[{"offset": 0, "data": 1.5}]')
    r = CliRunner().invoke(cpatch_verify, ["status", str(exe), "--table", str(table)])
    assert r.exit_code == 1
    assert "FATAL" in r.output
    assert r.exception is None or isinstance(r.exception, SystemExit)
