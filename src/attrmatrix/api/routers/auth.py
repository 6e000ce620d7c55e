"""
Auth router — admin login and session check.

POST /auth/login
GET  /auth/verify
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from attrmatrix.api.auth import ADMIN_USERNAME, issue_admin_token
from attrmatrix.api.deps import Settings
from attrmatrix.api.middleware.errors import problem_response, status_for_error_code
from attrmatrix.api.schemas.common import SuccessResponse
from attrmatrix.api.schemas.matrix import LoginBody, SessionSchema, TokenSchema
from attrmatrix.core.errors import MatrixError
from attrmatrix.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=SuccessResponse[TokenSchema])
def login(body: LoginBody, settings: Settings, request: Request):
    """Exchange the admin password for a bearer token.

    Example:
        POST /api/auth/login
        {"password": "s3cret"}

        Response:
        {"data": {"token": "eyJ...", "username": "admin", "token_type": "bearer"}}
    """
    try:
        token = issue_admin_token(body.password, settings)
    except MatrixError as exc:
        logger.info("login_failed", code=exc.code)
        return problem_response(
            status=status_for_error_code(exc.code),
            title=exc.message,
            instance=request.url.path,
            errors=[{"code": exc.code, "message": exc.message}],
        )

    logger.info("login_succeeded", username=ADMIN_USERNAME)
    return SuccessResponse(data=TokenSchema(token=token, username=ADMIN_USERNAME))


@router.get("/verify", response_model=SuccessResponse[SessionSchema])
def verify(request: Request):
    """Report the caller's session.  Reaching this handler means the token was accepted."""
    return SuccessResponse(
        data=SessionSchema(authenticated=True, username=getattr(request.state, "user", None))
    )
