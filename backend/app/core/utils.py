"""
Utility functions for the application.
"""
from typing import Any, Dict


def format_response(data: Any = None, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(message: str) -> Dict[str, Any]:
    """Format error response."""
    return {"error": message}
