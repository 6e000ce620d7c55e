"""
Bearer-token authentication middleware.

When a JWT secret is configured, every API request must carry
``Authorization: Bearer <token>`` with a token issued by
``POST /auth/login``.  Unauthenticated requests receive a 401
ProblemDetail.

Public paths (no auth required) are matched exactly, never by suffix:
row and column names travel in the path, so ``/api/row/docs`` is as
protected as any other row.  ``create_app`` passes:
  - ``/health``
  - ``<prefix>/docs``, ``<prefix>/redoc``, ``<prefix>/openapi.json``
  - ``<prefix>/auth/login``

CORS preflight (``OPTIONS``) always passes.
"""

from __future__ import annotations

from jose import JWTError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from attrmatrix.api.auth import decode_access_token
from attrmatrix.api.middleware.errors import problem_response
from attrmatrix.core.logging import get_logger

logger = get_logger(__name__)


def public_paths(prefix: str) -> frozenset[str]:
    """Exact paths served without a token under API *prefix*."""
    return frozenset(
        {
            "/health",
            f"{prefix}/docs",
            f"{prefix}/redoc",
            f"{prefix}/openapi.json",
            f"{prefix}/auth/login",
        }
    )


def _unauthorized(detail: str, path: str) -> Response:
    return problem_response(
        status=401,
        title="Unauthorized",
        detail=detail,
        instance=path,
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject requests that lack a valid bearer token.

    If ``secret`` is ``None`` (the default), authentication is disabled
    and all requests pass through.

    Parameters
    ----------
    app:
        The ASGI application to wrap.
    secret:
        HMAC secret the tokens are signed with.  ``None`` disables
        enforcement.
    algorithm:
        JWT signing algorithm.
    public:
        Paths that skip the token check, compared for equality.
    """

    def __init__(
        self,
        app: object,
        secret: str | None = None,
        algorithm: str = "HS256",
        public: frozenset[str] = frozenset(),
    ) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._secret = secret
        self._algorithm = algorithm
        self._public = public

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.user = None

        if self._secret is None:
            return await call_next(request)

        if request.method == "OPTIONS" or request.url.path in self._public:
            return await call_next(request)

        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return _unauthorized("Authentication required", request.url.path)

        try:
            claims = decode_access_token(token, self._secret, algorithm=self._algorithm)
        except JWTError:
            logger.info("token_rejected", path=request.url.path)
            return _unauthorized("Invalid or expired token", request.url.path)

        request.state.user = claims.get("username") or claims.get("sub")
        return await call_next(request)
