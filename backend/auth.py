import hmac

from fastapi import Header, HTTPException, status

from config import settings


def _token_matches(token: str) -> bool:
    return hmac.compare_digest(
        token.encode("utf-8"), settings.admin_password.encode("utf-8")
    )


async def require_admin(
    authorization: str | None = Header(default=None),
) -> None:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing auth token"
        )
    token = authorization.split(" ", 1)[1]
    if not _token_matches(token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
