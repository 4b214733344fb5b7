"""
CLI constants for tubelist.

This module provides shared constants for CLI commands including:
- Exit codes following Unix conventions
- Table display limits for consistent output
- The log format used by ``--verbose``

NOTE: Domain constants should remain in their domain modules.
This module is for CLI-wide shared values only.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Exit Codes
# =============================================================================
# Following Unix conventions and POSIX standards for exit codes.

EXIT_SUCCESS: Final[int] = 0
"""Operation completed normally."""

EXIT_USER_ERROR: Final[int] = 1
"""
User error: invalid input or an ID that cannot be resolved.

Examples:
- Empty search query
- URL that is not a YouTube link
- Mix playlist (RD prefix)
"""

EXIT_SYSTEM_ERROR: Final[int] = 2
"""
System error: network failure or an upstream response that cannot be used.

Examples:
- Connection timeout or non-success HTTP status
- Private or deleted playlist (error alert)
- Page data not found after all retries
"""

EXIT_CANCELLED: Final[int] = 3
"""
User cancelled: operation cancelled via Ctrl+C.

This follows the convention of using exit code 3 for user-initiated
cancellations that are not errors.
"""

# =============================================================================
# Table Display Limits
# =============================================================================

MAX_TITLE_WIDTH: Final[int] = 50
"""Maximum width for title columns in tables (characters)."""

MAX_CHANNEL_WIDTH: Final[int] = 25
"""Maximum width for channel name columns in tables (characters)."""

# =============================================================================
# Logging
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
"""Format of log lines written to stderr by ``--verbose``."""

LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
"""Timestamp format of log lines."""
