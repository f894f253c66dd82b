from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import hash_password, verify_password
from app.models.user import User
from app.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from app.services.identity import normalize_email

logger = structlog.get_logger(__name__)


class AuthService:
    """Account registration and credential checks.

    Login issues no token; it only confirms the credentials and returns the
    profile.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def register(self, register_data: RegisterRequest) -> User:
        email = normalize_email(register_data.email)
        if await self.get_user_by_email(email):
            raise ValueError("Email is already registered")

        user = User(
            name=register_data.name.strip(),
            email=email,
            password_hash=hash_password(register_data.password),
        )
        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Failed to register user due to integrity constraint", error=str(e)
            )
            raise ValueError("Email is already registered")
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to register user", error=str(e))
            raise

        logger.info("User registered", user_id=user.id, email=user.email)
        return user

    async def login(self, login_data: LoginRequest) -> LoginResponse:
        user = await self.get_user_by_email(login_data.email)
        if user is None or not verify_password(login_data.password, user.password_hash):
            logger.warning("Login failed", email=normalize_email(login_data.email))
            return LoginResponse(success=False, message="Invalid credentials")

        logger.info("Login successful", user_id=user.id)
        return LoginResponse(
            success=True,
            message="Login successful",
            user=UserResponse.model_validate(user),
        )
