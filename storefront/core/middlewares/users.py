from fastapi import Depends, HTTPException, status

from storefront.auth.auth import AuthRouter
from storefront.enums.role import Role

auth_router = AuthRouter()
get_token_payload = auth_router.get_token_payload


def require_admin(payload: dict = Depends(get_token_payload)) -> dict:
    """Libera só tokens com a claim role=ADMIN."""
    if payload.get("role") != Role.ADMIN.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return payload
