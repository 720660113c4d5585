"""
HTTP error helpers.

Every error leaves the service as an HTTPException carrying a
{"code", "message"} detail.
"""

from __future__ import annotations

from fastapi import HTTPException, status


def unauthorized(message: str = "Unauthorized") -> HTTPException:
    """
    Authorization failure.

    Used both for non-members and for ids that do not resolve, so a caller
    outside the workspace cannot tell the two apart.
    """
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": "UNAUTHORIZED", "message": message},
    )


def bad_request(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": code, "message": message},
    )


def not_found(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": code, "message": message},
    )
