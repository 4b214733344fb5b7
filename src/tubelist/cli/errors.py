"""
Standardized error message helpers for CLI commands.

Provides:
- Error display formatters with a consistent multi-part format
- Rich panel wrappers for error/warning display
- Mapping from tubelist exceptions to error categories and exit codes

Error Format:
    Title -> Problem -> Expected -> Got -> Hint

Examples:
    >>> format_error("Input", "mixes not supported")
    'Error: Input: mixes not supported'

    >>> format_error(
    ...     "Input",
    ...     "not a known youtube link",
    ...     expected="a playlist ID or a youtube.com URL",
    ...     got="https://example.com/x"
    ... )
    'Error: Input: not a known youtube link
       Expected: a playlist ID or a youtube.com URL
       Got: https://example.com/x'
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tubelist.cli.constants import EXIT_SYSTEM_ERROR, EXIT_USER_ERROR
from tubelist.exceptions import (
    ExhaustedRetriesError,
    InputError,
    TransportError,
    TubelistError,
    UpstreamAlertError,
    UpstreamShapeError,
)

# Module-level console for CLI error display
console = Console(stderr=True)


# =============================================================================
# Error Categories
# =============================================================================

class ErrorCategory:
    """
    Standard error categories for CLI commands.

    Categories map to specific error types:
    - INPUT: Caller input could not be used
    - UPSTREAM: YouTube reported an error or returned an unknown shape
    - NETWORK: Request failed or returned a non-success status
    - RETRIES: Page data could not be recovered after retrying
    """

    INPUT = "Input"
    UPSTREAM = "Upstream"
    NETWORK = "Network"
    RETRIES = "Retries Exhausted"


def get_exit_code_for_category(category: str) -> int:
    """
    Map error category to appropriate exit code.

    Examples
    --------
    >>> get_exit_code_for_category(ErrorCategory.INPUT)
    1
    >>> get_exit_code_for_category(ErrorCategory.NETWORK)
    2
    """
    category_to_exit_code = {
        ErrorCategory.INPUT: EXIT_USER_ERROR,
        ErrorCategory.UPSTREAM: EXIT_SYSTEM_ERROR,
        ErrorCategory.NETWORK: EXIT_SYSTEM_ERROR,
        ErrorCategory.RETRIES: EXIT_SYSTEM_ERROR,
    }
    return category_to_exit_code.get(category, EXIT_SYSTEM_ERROR)


def category_for_error(error: TubelistError) -> str:
    """Return the error category of a tubelist exception."""
    if isinstance(error, InputError):
        return ErrorCategory.INPUT
    if isinstance(error, (UpstreamAlertError, UpstreamShapeError)):
        return ErrorCategory.UPSTREAM
    if isinstance(error, ExhaustedRetriesError):
        return ErrorCategory.RETRIES
    if isinstance(error, TransportError):
        return ErrorCategory.NETWORK
    return ErrorCategory.UPSTREAM


# =============================================================================
# Error Formatting Functions
# =============================================================================

def format_error(
    category: str,
    message: str,
    expected: Optional[str] = None,
    got: Optional[str] = None,
    hint: Optional[str] = None,
) -> str:
    """
    Format error message in standardized multi-part format.

    Parameters
    ----------
    category : str
        Error category. Use ErrorCategory constants for consistency.
    message : str
        Human-readable error description.
    expected : Optional[str]
        Description of expected format/value (optional).
    got : Optional[str]
        Actual value that was received (optional).
    hint : Optional[str]
        Actionable suggestion for resolving the error (optional).

    Returns
    -------
    str
        Formatted error message string.
    """
    lines = [f"Error: {category}: {message}"]

    if expected is not None:
        lines.append(f"   Expected: {expected}")

    if got is not None:
        lines.append(f"   Got: {got}")

    if hint is not None:
        lines.append(f"   Hint: {hint}")

    return "\n".join(lines)


def hint_for_error(error: TubelistError) -> Optional[str]:
    """Return an actionable hint for errors that have one."""
    if isinstance(error, ExhaustedRetriesError) and error.dump_path is not None:
        return f"The last response was saved to {error.dump_path}"
    if isinstance(error, TransportError) and error.status_code == 429:
        return "YouTube is rate limiting requests; wait before retrying."
    return None


# =============================================================================
# Rich Panel Display Functions
# =============================================================================

def display_error_panel(
    category: str,
    message: str,
    expected: Optional[str] = None,
    got: Optional[str] = None,
    hint: Optional[str] = None,
    title: str = "Error",
) -> None:
    """
    Display formatted error in a Rich panel.

    Examples
    --------
    >>> display_error_panel(ErrorCategory.INPUT, "mixes not supported")
    # Displays a red-bordered panel with formatted error
    """
    formatted = format_error(category, message, expected, got, hint)
    console.print(
        Panel(
            f"[red]{escape(formatted)}[/red]",
            title=title,
            border_style="red",
        )
    )


def display_warning_panel(
    message: str,
    title: str = "Warning",
    extra_info: Optional[str] = None,
) -> None:
    """
    Display warning message in a Rich panel.

    Parameters
    ----------
    message : str
        Warning message to display.
    title : str
        Panel title (default: "Warning").
    extra_info : Optional[str]
        Additional information to display below the message.
    """
    content = f"[yellow]{message}[/yellow]"
    if extra_info:
        content += f"\n\n{extra_info}"

    console.print(
        Panel(
            content,
            title=title,
            border_style="yellow",
        )
    )


def display_tubelist_error(error: TubelistError) -> int:
    """
    Display a tubelist exception and return the exit code for it.

    Returns
    -------
    int
        Exit code matching the error category.
    """
    category = category_for_error(error)
    got = getattr(error, "value", None)
    display_error_panel(category, error.message, got=got, hint=hint_for_error(error))
    return get_exit_code_for_category(category)
