"""
Standardized response models for API endpoints.

All API responses follow a consistent envelope for success and error cases.
"""

from typing import Any
from fastapi.responses import JSONResponse


def success_response(
    status_code: int,
    message: str,
    data: Any = None
) -> dict:
    """
    Create a success response.

    Args:
        status_code: HTTP status code (200, 201, etc.)
        message: Success message
        data: Response data

    Returns:
        dict: Standardized success response
    """
    return {
        "status_code": status_code,
        "message": message,
        "data": data,
        "error": None
    }


def error_response(
    status_code: int,
    message: str,
    error_code: str,
    error_message: str
) -> dict:
    """
    Create an error response.

    Args:
        status_code: HTTP status code (400, 403, 404, etc.)
        message: General error message
        error_code: Specific error code
        error_message: Detailed error message

    Returns:
        dict: Standardized error response

    Example:
        >>> error_response(403, "Authentication failed", "SIGNATURE_MISMATCH", "Signature verification failed!")
        {
            "status_code": 403,
            "message": "Authentication failed",
            "data": None,
            "error": {
                "code": "SIGNATURE_MISMATCH",
                "message": "Signature verification failed!"
            }
        }
    """
    return {
        "status_code": status_code,
        "message": message,
        "data": None,
        "error": {
            "code": error_code,
            "message": error_message
        }
    }


def error_json_response(status_code: int, message: str, error_code: str, error_message: str) -> JSONResponse:
    """Helper to create JSON error response with proper status code."""
    response = error_response(
        status_code=status_code,
        message=message,
        error_code=error_code,
        error_message=error_message
    )
    return JSONResponse(status_code=status_code, content=response)
