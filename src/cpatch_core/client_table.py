"""Bundled patch table for the 1.12.1 client (0x757C00 bytes)."""
from __future__ import annotations

from .patchset import PatchEntry, PatchSet
from .protocol import JMP_SHORT, NOP

# Mouse flicker / camera snap with high report-rate mice: hook + trampoline
_MOUSE_HOOK = bytes.fromhex("e971f00b00f813d4008b1dfc")
_MOUSE_POLL = bytes.fromhex(
    "8d4df05157ff15dcf59d008b45f08b15"
    "f813d400e97a0ff4ff"
)
_MOUSE_CLAMP = bytes.fromhex(
    "89e58b05fc13d4008b0df813d400ebc2"
    "7d0383c10183c03283c1323b0decbcca00"
    "7e0383e9013b05f0bcca007e0383e80183"
    "e93283e832890df813d4008905fc13d400"
    "89ec5de9b4f7ffffec5dc3c3"
)
_MOUSE_ENTRY = bytes.fromhex("83f8327d0383c00183f932eb31")


def client_patch_set() -> PatchSet:
    return PatchSet(
        [
            PatchEntry.byte(0x2A7, 0xC0, "Remote code execution exploit"),
            PatchEntry.byte(0xE94, JMP_SHORT, "Windowed mode to full screen"),
            PatchEntry.repeat(0x2E1C67, NOP, 11, "Melee swing on right-click"),
            PatchEntry.byte(0x33D7C9, JMP_SHORT, "NPC attack animation when turning"),
            PatchEntry.byte(0x355BF, JMP_SHORT, "Ghost attack when NPC evades combat"),
            PatchEntry.repeat(0x33E0D6, NOP, 22, "Missing pre-cast animation for spells"),
            PatchEntry(0x16D899, b"\x05\x01\x00\x00\x00", "Mail timeout"),
            PatchEntry.byte(0x2DB241, 50, "Area trigger timer precision"),
            PatchEntry(
                0x5CFBC0,
                bytes.fromhex("c705748ed300ffffffffc3"),
                "Blue Moon",
            ),
            PatchEntry(0x469A2C, _MOUSE_HOOK, "Mouse flicker: hook"),
            PatchEntry(0x528AA2, _MOUSE_POLL, "Mouse flicker: cursor poll"),
            PatchEntry(0x4691B1, _MOUSE_CLAMP, "Mouse flicker: clamp"),
            PatchEntry(0x469183, _MOUSE_ENTRY, "Mouse flicker: entry"),
        ]
    )
