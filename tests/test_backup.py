import shutil

import pytest

from cpatch_apply.backup import backup_path_for, create_backup, has_backup, restore_backup


def test_backup_path():
    assert str(backup_path_for("dir/WoW.exe")).endswith("WoW.exe.backup")


def test_create_backup_is_byte_identical_and_overwrites(make_target):
    p = make_target(256)
    backup_path_for(p).write_bytes(b"stale")
    b = create_backup(p)
    assert b == backup_path_for(p)
    assert b.read_bytes() == p.read_bytes()
    assert has_backup(p)


def test_create_backup_missing_source(tmp_path):
    with pytest.warns(UserWarning, match="Failed to create backup"):
        assert create_backup(tmp_path / "missing.exe") is None
    assert not backup_path_for(tmp_path / "missing.exe").exists()


def test_create_backup_copy_error(make_target, monkeypatch):
    p = make_target(16)

    def boom(*a, **kw):
        raise OSError("No space left on device")

    monkeypatch.setattr(shutil, "copy2", boom)
    with pytest.warns(UserWarning, match="No space left"):
        assert create_backup(p) is None


def test_restore_after_mutation(make_target):
    p = make_target(512)
    original = p.read_bytes()
    create_backup(p)
    p.write_bytes(b"\x00" * 512)
    assert restore_backup(p)
    assert p.read_bytes() == original
    assert not backup_path_for(p).exists()


def test_restore_without_backup_changes_nothing(make_target):
    p = make_target(64)
    before = sorted(x.name for x in p.parent.iterdir())
    with pytest.warns(UserWarning, match="Backup not found"):
        assert not restore_backup(p)
    assert sorted(x.name for x in p.parent.iterdir()) == before
    assert p.read_bytes() == bytes(range(64))


def test_restore_when_target_is_gone(make_target):
    p = make_target(64)
    create_backup(p)
    p.unlink()
    assert restore_backup(p)
    assert p.read_bytes() == bytes(range(64))
