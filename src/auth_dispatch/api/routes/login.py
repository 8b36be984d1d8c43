"""Login Routes

Exposes the login dispatcher over HTTP. The request body is handed to the
dispatcher as-is; the provider named by its ``type`` field decides the
outcome.

Key Endpoints:
- POST /api/v1/auth/login: Login with any registered provider
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from auth_dispatch.core.auth import LoginDispatcher, LoginResult

router = APIRouter(prefix="/api/v1/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


def get_login_dispatcher(request: Request) -> LoginDispatcher:
    """Get the dispatcher built at application startup."""
    dispatcher = getattr(request.app.state, "login_dispatcher", None)
    if dispatcher is None:
        raise RuntimeError("Login dispatcher not initialized")
    return dispatcher


def to_response(result: LoginResult) -> Response:
    """Send a LoginResult: text body, JSON body or no body at all."""
    if result.body is None:
        return Response(status_code=result.status)
    if isinstance(result.body, str):
        return PlainTextResponse(result.body, status_code=result.status)
    return JSONResponse(result.body, status_code=result.status)


async def read_body(request: Request) -> Any:
    """Decode the JSON body; a malformed body is treated as an empty one."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.info("Login request with malformed JSON body")
        return None


@router.post("/login")
async def login(
    request: Request,
    dispatcher: LoginDispatcher = Depends(get_login_dispatcher),
):
    """Authenticate with the provider named in the body's ``type`` field.

    Returns:
        The provider's status and body (a token on success)
    """
    body = await read_body(request)
    result = await dispatcher.handle(body)
    return to_response(result)
