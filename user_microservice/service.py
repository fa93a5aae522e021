"""User service: business rules between the HTTP layer and the store.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from dataclasses import dataclass

from .errors import DuplicateEmailError, NotFoundError, ValidationError
from .models import User
from .repository import UserRepository
from .security import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass
class UserPayload:
    """Client-supplied user fields. ``id`` and ``createdAt`` are never read."""
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    password: str | None = None

    @classmethod
    def from_json(cls, data: dict) -> "UserPayload":
        for key in ("email", "firstName", "lastName", "password"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ValidationError(f"{key} must be a string")
        return cls(
            email=data.get("email"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            password=data.get("password"),
        )


class UserService:
    def __init__(self, repository: UserRepository, hasher: PasswordHasher):
        self.repository = repository
        self.hasher = hasher

    def create(self, payload: UserPayload) -> User:
        """Register a new user.

        Raises:
            DuplicateEmailError: email already registered
            ValidationError: no password supplied
            ConstraintViolationError: the insert lost a race or a required
                field is missing
        """
        if self.repository.exists_by_email(payload.email):
            raise DuplicateEmailError(payload.email)
        if not payload.password:
            raise ValidationError("Password is required")

        user = User(
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            password_hash=self.hasher.hash(payload.password),
        )
        return self.repository.insert(user)

    def get_all(self) -> list[User]:
        return self.repository.find_all()

    def get_by_id(self, user_id: int) -> User | None:
        return self.repository.find_by_id(user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.repository.find_by_email(email)

    def update(self, user_id: int, payload: UserPayload) -> User:
        """Overwrite names and email; replace the hash only for a non-empty password.

        Email uniqueness against other users is left to the table's unique
        constraint, which surfaces as ConstraintViolationError.
        """
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")

        user.first_name = payload.first_name
        user.last_name = payload.last_name
        user.email = payload.email
        if payload.password:
            user.password_hash = self.hasher.hash(payload.password)
            logger.info("Password changed", extra={"userId": user_id})

        return self.repository.update(user)

    def delete(self, user_id: int) -> None:
        if self.repository.find_by_id(user_id) is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        self.repository.delete_by_id(user_id)

    def search(self, first_name: str | None = None, last_name: str | None = None) -> list[User]:
        # Fixed priority, not a combinable filter
        if first_name is not None and last_name is not None:
            return self.repository.find_by_first_and_last_name(first_name, last_name)
        if first_name is not None:
            return self.repository.find_by_first_name(first_name, case_insensitive=True)
        if last_name is not None:
            return self.repository.find_by_last_name_contains(last_name)
        return self.repository.find_all()

    def count(self) -> int:
        return self.repository.count()

    def count_by_first_name(self, first_name: str) -> int:
        """Exact, case-sensitive match, unlike the first-name search."""
        return self.repository.count_by_first_name(first_name)

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user whose stored hash matches ``password``, else None."""
        user = self.repository.find_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            return None
        return user
