import pytest


@pytest.fixture
def make_target(tmp_path):
    """Create a target file of ``size`` bytes with a deterministic pattern."""

    def _make(size: int = 0x1000, name: str = "WoW.exe"):
        p = tmp_path / name
        p.write_bytes(bytes(i & 0xFF for i in range(size)))
        return p

    return _make
