"""
Admin gate middleware for the dashboard endpoints
"""
import logging
from typing import Callable
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sophia_recruit.config import settings

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/api/admin"
ADMIN_HEADER = "X-Admin-Password"


def check_admin_password(password: str) -> bool:
    """
    Plaintext comparison against ADMIN_PASSWORD.

    This is a placeholder gate, NOT a security boundary: anyone who can read
    the configuration or sniff a request has the password. Put a real
    identity provider in front of the dashboard before exposing it.
    """
    return bool(password) and password == settings.ADMIN_PASSWORD


class AdminGateMiddleware(BaseHTTPMiddleware):
    """
    Require the admin password on dashboard endpoints

    Protected endpoints expect the header:
    X-Admin-Password: <password>
    """

    # Reachable without the header so the dashboard can check a password
    PUBLIC_ENDPOINTS = [
        f"{ADMIN_PREFIX}/login",
    ]

    async def dispatch(self, request: Request, call_next: Callable) -> object:
        path = request.url.path

        if not path.startswith(ADMIN_PREFIX) or path in self.PUBLIC_ENDPOINTS:
            return await call_next(request)

        # Skip preflight requests
        if request.method == "OPTIONS":
            return await call_next(request)

        password = request.headers.get(ADMIN_HEADER)

        if not password:
            logger.warning(f"Missing admin password for {request.method} {path}")
            return JSONResponse(
                status_code=401,
                content={"detail": f"Missing admin password. Please provide {ADMIN_HEADER} header."}
            )

        if not check_admin_password(password):
            logger.warning(f"Wrong admin password for {request.method} {path}")
            return JSONResponse(status_code=403, content={"detail": "Mot de passe incorrect"})

        request.state.admin = True
        return await call_next(request)
