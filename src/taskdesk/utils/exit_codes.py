"""
Exit codes for taskdesk.

Semantic exit codes so scripts and agents driving the CLI can tell what
happened without parsing output.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Resource not found
ERROR_NOT_FOUND = 5

# Operation result kind -> exit code
_RESULT_EXIT_CODES = {
    "ok": SUCCESS,
    "not_found": ERROR_NOT_FOUND,
    "validation_error": ERROR_INVALID_ARGS,
    "error": ERROR_GENERAL,
}


def exit_code_for(kind: str) -> int:
    """Get the exit code for an operation result kind."""
    return _RESULT_EXIT_CODES.get(kind, ERROR_GENERAL)


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")
