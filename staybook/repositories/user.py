"""
User repository for account lookup, registration and password checks.
"""

from staybook.database import Storage
from staybook.models.user import User
from staybook.repositories.base import IDENTIFIER, BaseRepository
from staybook.schemas.user import UserCreate, UserRecord
from staybook.utils.query_builder import build_insert
from typing import Any, Mapping, Optional, Union
import logging

logger = logging.getLogger(__name__)

SELECT_BY_EMAIL = "SELECT * FROM users WHERE email = $1"
SELECT_BY_ID = "SELECT * FROM users WHERE id = $1"


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user accounts.
    """

    def __init__(self, storage: Storage):
        super().__init__(UserRecord, storage)

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        """
        Get user by exact email address.

        Args:
            email: Email address to search for

        Returns:
            User record if found, None otherwise
        """
        user = await self.fetch_one(SELECT_BY_EMAIL, [email])
        if user:
            logger.debug(f"Retrieved user by email: {email}")
        else:
            logger.debug(f"User with email {email} not found")
        return user

    async def get_by_id(self, user_id: Any) -> Optional[UserRecord]:
        """
        Get user by primary key.

        Args:
            user_id: Integer id, or its decimal string form

        Returns:
            User record if found, None otherwise

        Raises:
            InvalidRecordError: If user_id is not an integer
        """
        user_id = self.coerce(IDENTIFIER, user_id, "user id")
        user = await self.fetch_one(SELECT_BY_ID, [user_id])
        if not user:
            logger.debug(f"User with id {user_id} not found")
        return user

    async def create_user(self, user_data: Union[UserCreate, Mapping[str, Any]]) -> Optional[UserRecord]:
        """
        Insert a new user and return the stored row.

        A plain-text password is hashed before insert; a value that already
        is a bcrypt hash is stored unchanged.

        Args:
            user_data: name, email and password

        Returns:
            Created user record including its generated id

        Raises:
            InvalidRecordError: If the input is incomplete or malformed
            DuplicateRecordError: If the email is already registered
            StorageError: If the statement fails
        """
        user_in = self.validate_input(UserCreate, user_data)

        password = user_in.password
        if not User.is_password_hash(password):
            password = User.hash_password(password)

        statement, params = build_insert(
            "users",
            [("name", user_in.name), ("email", user_in.email), ("password", password)],
        )
        created_user = await self.fetch_one(statement, params)
        if created_user:
            logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def authenticate_user(self, email: str, password: str) -> Optional[UserRecord]:
        """
        Authenticate user with email and password.

        Returns:
            User record if authentication successful, None otherwise
        """
        user = await self.get_by_email(email)

        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not User.verify_password(password, user.password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        logger.info(f"User authenticated successfully: {email}")
        return user
