"""Helpers shared by the proxy routers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Request

from spoonacular_proxy.errors import (
    InputValidationError,
    OperationFailedError,
    UpstreamError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from spoonacular_proxy.containers import AppContainer
    from spoonacular_proxy.services.spoonacular import SpoonacularService

_logger = logging.getLogger(__name__)


def get_service(request: Request) -> SpoonacularService:
    """Return the Spoonacular service from the app container."""
    container: AppContainer = request.app.state.container
    return container.spoonacular_service


def require(value: str | None, message: str, example: str | None = None) -> str:
    """Return a required value or raise a validation error."""
    if value is None or not str(value).strip():
        raise InputValidationError(message, example=example)
    return value


def parse_id(raw: str | None, message: str) -> int:
    """Parse a decimal path id, rejecting anything int() would not accept."""
    if raw is None or not raw.strip().isdecimal():
        raise InputValidationError(message)
    try:
        return int(raw)
    except ValueError as exc:
        raise InputValidationError(message) from exc


async def run_operation(
    call: Awaitable[dict[str, object]], error: str
) -> dict[str, object]:
    """Await an upstream-backed call, wrapping upstream failures."""
    try:
        return await call
    except UpstreamError as exc:
        _logger.error("%s: %s", error, exc.message)
        raise OperationFailedError(error, exc.message) from exc
