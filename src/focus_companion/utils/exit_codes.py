"""Process exit codes for Focus Companion CLI.

Scripts wrapping the CLI can tell a rejected token from an unreachable
server or a missing session without parsing the error text.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
# No token stored, or the server rejected it (401/403)
ERROR_AUTH_FAILURE = 3
# Server unreachable or any other non-2xx answer
ERROR_NETWORK = 4
ERROR_NOT_FOUND = 5

_EXIT_CODES: dict[int, tuple[str, str]] = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or validation error"),
    ERROR_AUTH_FAILURE: (
        "ERROR_AUTH_FAILURE",
        "Authentication failure - run 'focus-companion auth login'",
    ),
    ERROR_NETWORK: ("ERROR_NETWORK", "Network or API error - check connection"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Session not found"),
}


def get_exit_code_name(code: int) -> str:
    """Symbolic name of *code*, used in log lines."""
    if code in _EXIT_CODES:
        return _EXIT_CODES[code][0]
    return f"UNKNOWN({code})"


def get_exit_code_description(code: int) -> str:
    """Hint shown to the user after a failed command."""
    if code in _EXIT_CODES:
        return _EXIT_CODES[code][1]
    return "Unknown error"
