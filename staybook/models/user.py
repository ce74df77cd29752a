"""
User table definition and password hashing helpers.
Handles guest and owner accounts of the booking application.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from staybook.database import Base
from staybook.config import settings
from passlib.context import CryptContext

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


class User(Base):
    """
    Account of a guest or property owner.
    The password column stores a bcrypt hash, never the plain text.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login email address - must be unique"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"

    @staticmethod
    def is_password_hash(value: str) -> bool:
        """Check whether a value is already a hash produced by pwd_context."""
        return pwd_context.identify(value) is not None

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string

        Raises:
            ValueError: If password is empty
        """
        if not password:
            raise ValueError("Password cannot be empty")

        return pwd_context.hash(password)

    @staticmethod
    def verify_password(password: str, hashed_password: str) -> bool:
        """
        Verify a password against a stored hash.

        Args:
            password: Plain text password to verify
            hashed_password: Stored bcrypt hash

        Returns:
            True if password matches, False otherwise
        """
        if not password or not hashed_password or not User.is_password_hash(hashed_password):
            return False
        return pwd_context.verify(password, hashed_password)
