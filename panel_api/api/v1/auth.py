"""Authentication API endpoints.

Tokens are issued by the panel's identity provider and validated here
statelessly with the shared JWT secret. Only token introspection lives in
this service.
"""

from fastapi import APIRouter, Request

from panel_api.auth.dependencies import CurrentUser
from panel_api.rate_limit import limiter
from panel_api.schemas.auth import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
@limiter.limit("30/minute")
async def get_current_user_info(request: Request, current_user: CurrentUser) -> UserResponse:
    """Return the authenticated user's profile from JWT claims."""
    return UserResponse.model_validate(current_user)
