"""Early error handler for failures before logging is configured.

This module provides a simple error handler that can be used while the
command line entry point is still loading its configuration. It ensures
critical errors are visible to users even if the logging system fails to
initialize.
"""

import sys
from datetime import datetime
from typing import Any


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Handle errors that occur before logging is configured.

    Writes formatted error messages to stderr so they are visible even if the
    logging system is not yet initialized.

    Args:
        error_type: Type of error (e.g., "CONFIG_ERROR", "LOGGING_FILE_ERROR")
        message: Main error message
        details: Optional dictionary of additional error details
    """
    timestamp = datetime.now().isoformat()

    sys.stderr.write(f"\n[{timestamp}] {error_type}: {message}\n")

    if details:
        sys.stderr.write("Details:\n")
        for key, value in details.items():
            sys.stderr.write(f"  {key}: {value}\n")

    sys.stderr.flush()


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    sys.stderr.write("\n\nBuild interrupted by user (Ctrl+C)\n")
    sys.stderr.flush()
