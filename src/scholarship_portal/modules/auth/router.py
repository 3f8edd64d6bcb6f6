"""Registration and login router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.core.database import get_db
from scholarship_portal.core.rate_limit import login_rate_limit
from scholarship_portal.core.security import hash_password, verify_password
from scholarship_portal.modules.auth.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from scholarship_portal.modules.users.models import UserRole
from scholarship_portal.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()


def _email_taken() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={
            "error": "EMAIL_ALREADY_REGISTERED",
            "message": "Email already registered",
        },
    )


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": "INVALID_CREDENTIALS",
            "message": "Invalid credentials",
        },
    )


@router.post("/register", response_model=RegisterResponse)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    """
    Register a new student account.

    Args:
        data: Name, email, password and optional age/gender
        db: Database session

    Returns:
        The new user's id

    Raises:
        HTTPException 409: Email already registered
        HTTPException 500: Database or hashing failure
    """
    try:
        if await UserRepository.email_exists(db, data.email):
            logger.warning(f"Registration attempt for existing email: {data.email}")
            raise _email_taken()

        user = await UserRepository.create(
            db,
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            age=data.age,
            gender=data.gender,
            role=UserRole.USER,
        )

    except HTTPException:
        raise
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        logger.warning(f"Duplicate email on insert: {data.email}")
        raise _email_taken() from e
    except Exception as e:
        logger.exception(f"Registration failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "Server error: registration failed. Please try again later.",
            },
        ) from e

    return RegisterResponse(success=True, user_id=user.id)


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(login_rate_limit)],
)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Check email and password.

    Unknown email and wrong password produce the same 401 response.

    Raises:
        HTTPException 401: Invalid credentials
        HTTPException 429: Too many attempts from this client
    """
    try:
        user = await UserRepository.get_by_email(db, credentials.email)
    except Exception as e:
        logger.exception(f"Login lookup failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "INTERNAL_ERROR", "message": "Server error"},
        ) from e

    if not user:
        logger.warning(f"Login attempt for non-existent email: {credentials.email}")
        raise _invalid_credentials()

    if not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Invalid password for user: {credentials.email}")
        raise _invalid_credentials()

    logger.info(f"User logged in: {user.email} (role: {user.role.value})")

    return LoginResponse(
        success=True,
        user=UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            age=user.age,
            gender=user.gender,
        ),
    )
