"""Basic Auth — gate for the statements endpoints.

Invariants:
    - Credentials compared in constant time against LRS_USERNAME / LRS_PASSWORD
    - Missing or wrong credentials raise AuthenticationError (401 + WWW-Authenticate)
"""

import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from statement_gate.config import get_settings
from statement_gate.core.errors import AuthenticationError, ErrorContext

logger = logging.getLogger(__name__)

_basic = HTTPBasic(auto_error=False)


async def require_basic_auth(
    request: Request,
    credentials: HTTPBasicCredentials | None = Depends(_basic),
) -> str:
    """FastAPI dependency — returns the authenticated username."""
    settings = get_settings()
    if credentials is None or not (
        _matches(credentials.username, settings.lrs_username)
        and _matches(credentials.password, settings.lrs_password)
    ):
        logger.warning(
            "Rejected statements request",
            extra={"error_code": "UNAUTHORIZED", "path": request.url.path},
        )
        raise AuthenticationError(ErrorContext(request_path=request.url.path))
    return credentials.username


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))
