"""Generate a synthetic target of the expected client size for dry runs."""
import sys
from pathlib import Path

from cpatch_core.protocol import DEFAULT_EXPECTED_SIZE

def generate_client(out_path: str, size: int = DEFAULT_EXPECTED_SIZE, fill: int = 0) -> Path:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "wb") as f:
        if fill:
            chunk = bytes([fill]) * (64 * 1024)
            remaining = size
            while remaining:
                n = min(remaining, len(chunk))
                f.write(chunk[:n])
                remaining -= n
        else:
            # Sparse where the filesystem allows it
            f.truncate(size)
    print(f"GENERATED: {out} ({size:#x} bytes)")
    return out

if __name__ == "__main__":
    # Usage:
    #   python tools/make_dummy_client.py OUT [--size N] [--fill BYTE]
    args = [a for a in sys.argv[1:] if a]

    def pop_value(arg_list: list[str], flag: str, default: int) -> tuple[int, list[str]]:
        """Remove ``flag VALUE`` from an argv-style list, parsing VALUE as int/0x hex."""
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return int(arg_list[i + 1], 0), arg_list[:i] + arg_list[i + 2:]

    size, args = pop_value(args, "--size", DEFAULT_EXPECTED_SIZE)
    fill, args = pop_value(args, "--fill", 0)

    out = args[0] if len(args) > 0 else "WoW.exe"
    generate_client(out, size=size, fill=fill)
