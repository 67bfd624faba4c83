"""
Exit codes for Datimer.

Every fatal error maps to its own code so wrapper scripts can tell a broken
terminal from a broken log file.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments (reserved by click/typer for usage errors)
ERROR_INVALID_ARGS = 2

# Terminal could not be put into cbreak mode, or output file not creatable
ERROR_TERMINAL = 3

# Writing to the terminal failed mid-session
ERROR_RENDER = 4

# Writing the history log failed
ERROR_PERSISTENCE = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_TERMINAL: "ERROR_TERMINAL",
        ERROR_RENDER: "ERROR_RENDER",
        ERROR_PERSISTENCE: "ERROR_PERSISTENCE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Stopwatch exited cleanly",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments",
        ERROR_TERMINAL: "Terminal or output file could not be initialised",
        ERROR_RENDER: "Writing to the terminal failed",
        ERROR_PERSISTENCE: "Writing the history log failed",
    }
    return descriptions.get(code, "Unknown error")
