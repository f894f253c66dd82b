import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps.services import get_auth_service
from app.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from app.services.auth import AuthService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    register_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create an account."""
    try:
        user = await auth_service.register(register_data)
        return UserResponse.model_validate(user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to register user", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to register user")


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Check credentials. Always 200; ``success`` carries the outcome."""
    try:
        return await auth_service.login(login_data)
    except Exception as e:
        logger.error("Failed to log in", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to log in")
