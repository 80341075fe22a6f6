"""HTTP error helpers for the API routes."""
from __future__ import annotations

from fastapi import HTTPException


def bad_request(message: str) -> HTTPException:
    """Create a 400 Bad Request exception.

    Args:
        message: Description of what was wrong with the request

    Returns:
        HTTPException with status 400
    """
    return HTTPException(status_code=400, detail=message)


def invalid_format(format_name: str, error_type: str | None = None) -> HTTPException:
    """Create a 400 Bad Request exception for format errors.

    Args:
        format_name: The file or payload that was invalid
        error_type: Optional short description of the problem

    Returns:
        HTTPException with status 400
    """
    detail = f"Invalid game format: {format_name}"
    if error_type:
        detail = f"Invalid game format ({error_type}): {format_name}"
    return HTTPException(status_code=400, detail=detail)


def internal_error(error: Exception) -> HTTPException:
    """Create a 500 Internal Server Error for invariant violations."""
    return HTTPException(
        status_code=500,
        detail=f"Equilibrium search failed: {safe_error_message(error)}",
    )


def safe_error_message(error: Exception) -> str:
    """Extract a safe error message from an exception.

    Avoids leaking internal details while preserving useful information.

    Args:
        error: The exception to extract message from

    Returns:
        A safe string representation of the error
    """
    # Configuration problems describe user input, so they are safe to echo
    if isinstance(error, ValueError):
        return str(error)
    return type(error).__name__
