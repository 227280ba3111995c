import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile
from lawvault.exceptions import AuthError, ConflictError, ValidationError
from lawvault.models.user import User
from lawvault.schemas.user import LoginRequest, SignupRequest
from lawvault.security import hash_password_async, verify_password_async
from lawvault.services.upload_service import UploadService

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "client"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _present(value: Optional[str]) -> Optional[str]:
    """Return the value if it carries any non-whitespace text, else None."""
    if value is None or not value.strip():
        return None
    return value


def _stripped(value: Optional[str]) -> Optional[str]:
    value = _present(value)
    return value.strip() if value else None


class AccountService:
    """Signup and login against the users table."""

    def __init__(self, uploads: UploadService, bcrypt_rounds: int = 10):
        self.uploads = uploads
        self.bcrypt_rounds = bcrypt_rounds

    async def find_by_email(self, email: str, db: AsyncSession) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()

    async def signup(
        self,
        data: SignupRequest,
        db: AsyncSession,
        photo: Optional[UploadFile] = None,
    ) -> User:
        name = _present(data.name) or _present(data.username)
        email = _present(data.email)
        password = _present(data.password)
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")

        email = normalize_email(email)
        if await self.find_by_email(email, db):
            logger.info("Signup rejected, email already registered: %s", email)
            raise ConflictError("User already exists with this email")

        password_hash = await hash_password_async(data.password, self.bcrypt_rounds)
        photo_ref = await self.uploads.save(photo) if photo is not None else None

        user = User(
            name=name.strip(),
            email=email,
            password_hash=password_hash,
            photo=photo_ref,
            role=_stripped(data.role) or DEFAULT_ROLE,
            gender=_stripped(data.gender),
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost the race against a concurrent signup for the same email
            await db.rollback()
            if photo_ref:
                self.uploads.delete(photo_ref)
            logger.info("Signup rejected by unique index: %s", email)
            raise ConflictError("User already exists with this email")
        await db.refresh(user)
        await db.commit()

        logger.info("User registered: id=%s email=%s", user.id, user.email)
        return user

    async def login(self, data: LoginRequest, db: AsyncSession) -> User:
        email = _present(data.email)
        password = data.password
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.find_by_email(email, db)
        # Same error for unknown email and wrong password
        if not user or not await verify_password_async(password, user.password_hash):
            logger.info("Failed login for %s", normalize_email(email))
            raise AuthError("Invalid email or password")

        logger.info("User logged in: id=%s", user.id)
        return user
