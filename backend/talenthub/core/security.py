from fastapi import Depends
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .config import get_settings
from .exceptions import UnauthorizedError

external_id_header = APIKeyHeader(name="X-External-Id", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def decode_identity_token(token: str) -> str:
    """Return the external user id (``sub``) asserted by an identity-provider token."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.identity_token_secret,
            algorithms=[settings.identity_token_algorithm],
        )
    except JWTError:
        raise UnauthorizedError("Invalid identity token.")
    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError("Invalid identity token.")
    return str(subject)


def get_external_identity(
    header_value: str | None = Depends(external_id_header),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    settings = get_settings()
    if settings.identity_token_secret:
        if credentials is None:
            raise UnauthorizedError()
        return decode_identity_token(credentials.credentials)
    if not header_value or not header_value.strip():
        raise UnauthorizedError()
    return header_value.strip()


def get_optional_external_identity(
    header_value: str | None = Depends(external_id_header),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    if header_value is None and credentials is None:
        return None
    return get_external_identity(header_value=header_value, credentials=credentials)
