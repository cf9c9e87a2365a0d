"""Authentication endpoints"""

from fastapi import APIRouter, Depends, status

from taskflow.api.dependencies import get_auth_service, get_current_user
from taskflow.schemas.auth import AuthResponse, CurrentUser, LoginRequest, RegisterRequest
from taskflow.schemas.common import ApiResponse
from taskflow.schemas.user import UserProfileResponse
from taskflow.services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["Authentication"])


def _auth_response(user, token: str) -> ApiResponse[AuthResponse]:
    return ApiResponse(
        data=AuthResponse(
            user=UserProfileResponse.model_validate(user),
            token=token,
            expires_in=AuthService.token_lifetime_seconds(),
        )
    )


@router.post(
    "/auth/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new organization together with its first admin

    - **email**, **password**: credentials of the admin user
    - **name**: admin display name
    - **organizationName**: name of the new organization (slug is derived from it)
    """
    user, token = await auth_service.register(data)
    return _auth_response(user, token)


@router.post("/auth/login", response_model=ApiResponse[AuthResponse])
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and return a bearer token

    Unknown emails and wrong passwords get the same 401 response.
    """
    user, token = await auth_service.login(data)
    return _auth_response(user, token)


@router.get("/me", response_model=ApiResponse[UserProfileResponse])
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Current user profile including the organization"""
    user = await auth_service.get_profile(current_user.id)
    return ApiResponse(data=UserProfileResponse.model_validate(user))
