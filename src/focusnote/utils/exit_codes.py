"""
Exit codes for focusnote.

Semantic exit codes so scripts can tell what went wrong without parsing output.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Task or session not found
ERROR_NOT_FOUND = 5

# Operation not valid right now (session already open, already closed, ...)
ERROR_INVALID_STATE = 7

# Storage backend failure
ERROR_PERSISTENCE = 8


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_INVALID_STATE: "ERROR_INVALID_STATE",
        ERROR_PERSISTENCE: "ERROR_PERSISTENCE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_NOT_FOUND: "Task or session not found",
        ERROR_INVALID_STATE: "Operation not allowed in the current state",
        ERROR_PERSISTENCE: "Storage error - check the data directory",
    }
    return descriptions.get(code, "Unknown error")
