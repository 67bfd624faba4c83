"""Custom exceptions for Datimer."""

from datimer.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_PERSISTENCE,
    ERROR_RENDER,
    ERROR_TERMINAL,
)


class DatimerError(Exception):
    """Base exception for all Datimer errors."""

    exit_code = ERROR_GENERAL


class TerminalInitError(DatimerError):
    """Raised when cbreak mode or the output file cannot be set up at startup."""

    exit_code = ERROR_TERMINAL


class RenderError(DatimerError):
    """Raised when writing to the terminal fails."""

    exit_code = ERROR_RENDER


class PersistenceError(DatimerError):
    """Raised when the history log cannot be written."""

    exit_code = ERROR_PERSISTENCE
