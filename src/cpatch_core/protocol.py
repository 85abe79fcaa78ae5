"""clientpatch protocol constants.

Single source of truth for the target layout and on-disk naming.
Keep this file stable. Patcher and verifier must remain synchronized.
"""

# Target executable: 1.12.1 client, exact byte length
DEFAULT_EXPECTED_SIZE = 0x757C00

# Backup artifact: <path> + BACKUP_SUFFIX
BACKUP_SUFFIX = ".backup"

# Stage reported in an apply result: where the run stopped
STAGE_VALIDATING = "validating"  # existence and exact-size checks
STAGE_BACKING_UP = "backing_up"
STAGE_VALIDATED = "validated"  # gate passed, opening the stream
STAGE_PATCHING = "patching"
STAGE_DONE = "done"

# Byte values
NOP = 0x90
JMP_SHORT = 0xEB
