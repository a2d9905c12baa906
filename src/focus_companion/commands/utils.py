"""Shared helpers for command modules."""

import logging

import httpx
import typer

from focus_companion.api.errors import APIError, FocusCompanionError, MissingCredentialsError
from focus_companion.utils import exit_codes
from focus_companion.utils.ui.formatters import format_error

logger = logging.getLogger(__name__)

# Failures a command reports through handle_api_error
API_ERRORS = (FocusCompanionError, httpx.HTTPError)


def exit_code_for(exception: Exception) -> int:
    """Map an exception to a semantic exit code."""
    if isinstance(exception, MissingCredentialsError):
        return exit_codes.ERROR_AUTH_FAILURE
    if isinstance(exception, APIError):
        if exception.is_auth_error:
            return exit_codes.ERROR_AUTH_FAILURE
        if exception.is_not_found:
            return exit_codes.ERROR_NOT_FOUND
        return exit_codes.ERROR_NETWORK
    if isinstance(exception, httpx.HTTPError):
        return exit_codes.ERROR_NETWORK
    return exit_codes.ERROR_GENERAL


def handle_api_error(exception: Exception, action: str) -> None:
    """Report a failed command and exit with the matching code."""
    code = exit_code_for(exception)
    logger.error("Error %s: %s [%s]", action, exception, exit_codes.get_exit_code_name(code))
    format_error(f"Error {action}: {str(exception)}")
    if code != exit_codes.ERROR_GENERAL:
        format_error(exit_codes.get_exit_code_description(code))
    raise typer.Exit(code)
