from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)


def extract_optional_bearer_token(
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """Return a caller-supplied GitHub token, if one was sent.

    Requests without an Authorization header fall back to the server token.

    Raises:
        HTTPException: If an Authorization header is present but malformed.
    """

    if credentials is None:
        return None

    if credentials.scheme.lower() != "bearer" or not credentials.credentials.strip():
        raise HTTPException(
            status_code=401,
            detail="Authorization header must be a non-empty Bearer token",
        )

    return credentials.credentials.strip()
