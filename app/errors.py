"""Structured error helpers for API responses."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.payload = build_error_payload(code, message, details)


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


def order_not_found(order_number: str) -> AppError:
    return AppError(
        status.HTTP_404_NOT_FOUND,
        "order_not_found",
        f"Order {order_number} not found",
        {"order_number": order_number},
    )


def order_exists(order_number: str) -> AppError:
    return AppError(
        status.HTTP_409_CONFLICT,
        "order_exists",
        f"Order {order_number} already exists",
        {"order_number": order_number},
    )


def unknown_stage(raw_status: str, vocabulary: str) -> AppError:
    return AppError(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "unknown_stage",
        f"Status {raw_status!r} is not a stage of the {vocabulary} vocabulary",
        {"status": raw_status, "vocabulary": vocabulary},
    )


def user_exists(username: str) -> AppError:
    return AppError(
        status.HTTP_409_CONFLICT,
        "user_exists",
        f"Username {username} is already registered",
        {"username": username},
    )
