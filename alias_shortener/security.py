"""
HTTP basic auth for the /url routes.
"""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from alias_shortener.config import Settings
from alias_shortener.dependencies import get_settings_dep

REALM = "url-shortener"

basic_auth = HTTPBasic(realm=REALM, auto_error=False)


def require_basic_auth(
    credentials: HTTPBasicCredentials = Depends(basic_auth),
    settings: Settings = Depends(get_settings_dep),
) -> str:
    """Check the request's credentials against the configured user."""
    if credentials is not None:
        user_ok = secrets.compare_digest(
            credentials.username.encode("utf-8"), settings.http_user.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode("utf-8"), settings.http_password.encode("utf-8")
        )
        if user_ok and password_ok:
            return credentials.username

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": f'Basic realm="{REALM}"'},
    )
