ERRORS = {
  "E_NOT_FOUND": "Executable not found",
  "E_OPEN": "Failed to open executable",
  "E_SIZE_MISMATCH": "Validation failed: unexpected file size",
  "E_BACKUP": "Backup creation failed",
  "E_VALIDATION": "Executable validation failed",
  "E_WRITE": "Failed to write patch entry",
}
