from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from uigen.core.core import Service
from uigen.core.modules.user.models import User
from uigen.core.modules.user.validators import normalize_email, password_fits_bcrypt, validate_credentials
from uigen.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages user accounts and password checks."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create unique index for email lookups."""
        await self._collection.create_index([("email", 1)], unique=True)

    async def get_user(self, user_id: UUID) -> User:
        """Get user by ID."""
        user = await self._collection.find_one({"_id": user_id})
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(user)

    async def find_user_by_email(self, email: str) -> User | None:
        user = await self._collection.find_one({"email": normalize_email(email)})
        return None if user is None else User.model_validate(user)

    async def create_user(self, email: str, password: str) -> User:
        """Create user with hashed password."""
        validate_credentials(email, password)
        email = normalize_email(email)
        if await self.find_user_by_email(email) is not None:
            raise ValidationError("Email already registered")

        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        user = User(email=email, password_hash=password_hash)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ValidationError("Email already registered") from e
        logger.info("user_created", user_id=str(user.id))
        return user

    async def verify_credentials(self, email: str, password: str) -> User | None:
        """Return the user if the password matches its stored hash."""
        if not password_fits_bcrypt(password):
            return None
        user = await self.find_user_by_email(email)
        if user is None:
            return None
        if not bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8")):
            return None
        return user
