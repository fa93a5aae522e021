"""SQLAlchemy-backed store for User records."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import ConstraintViolationError, NotFoundError
from .models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Explicit queries over the ``users`` table.

    Each write commits its own transaction. Integrity failures roll the
    session back and surface as ConstraintViolationError; anything else
    (connectivity, driver errors) propagates as raised.
    """

    def __init__(self, session: Session):
        self.session = session

    # ── read operations ──────────────────────────────────────

    def find_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def find_by_email(self, email: str) -> User | None:
        return self.session.execute(
            select(User).where(User.email == email).limit(1)
        ).scalar_one_or_none()

    def exists_by_email(self, email: str) -> bool:
        found = self.session.execute(
            select(User.id).where(User.email == email).limit(1)
        ).scalar()
        return found is not None

    def find_all(self) -> list[User]:
        return list(self.session.execute(select(User).order_by(User.id)).scalars())

    def find_by_first_name(self, name: str, case_insensitive: bool = True) -> list[User]:
        if case_insensitive:
            clause = func.upper(User.first_name) == func.upper(name)
        else:
            clause = User.first_name == name
        return list(self.session.execute(select(User).where(clause).order_by(User.id)).scalars())

    def find_by_last_name_contains(self, substring: str) -> list[User]:
        stmt = select(User).where(User.last_name.contains(substring, autoescape=True)).order_by(User.id)
        return list(self.session.execute(stmt).scalars())

    def find_by_first_and_last_name(self, first_name: str, last_name: str) -> list[User]:
        stmt = (
            select(User)
            .where(User.first_name == first_name, User.last_name == last_name)
            .order_by(User.id)
        )
        return list(self.session.execute(stmt).scalars())

    def count(self) -> int:
        return self.session.execute(select(func.count(User.id))).scalar_one()

    def count_by_first_name(self, name: str) -> int:
        return self.session.execute(
            select(func.count(User.id)).where(User.first_name == name)
        ).scalar_one()

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> User:
        self.session.add(user)
        self._commit("insert", email=user.email)
        logger.info("User inserted", extra={"userId": user.id})
        return user

    def update(self, user: User) -> User:
        # pending changes on ``user`` must not flush before the existence check
        with self.session.no_autoflush:
            exists = user.id is not None and self.session.get(User, user.id) is not None
        if not exists:
            raise NotFoundError(f"User not found with id: {user.id}")
        # detached or freshly built instances carry their state into the session
        merged = self.session.merge(user)
        user_id = merged.id
        self._commit("update", user_id=user_id)
        logger.info("User updated", extra={"userId": user_id})
        return merged

    def delete_by_id(self, user_id: int) -> None:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        self.session.delete(user)
        self._commit("delete", user_id=user_id)
        logger.info("User deleted", extra={"userId": user_id})

    def _commit(self, operation: str, user_id: int | None = None, email: str | None = None) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(
                "Constraint violation",
                extra={"operation": operation, "userId": user_id, "email": email, "error": str(e.orig)},
            )
            raise ConstraintViolationError(f"Constraint violation on {operation}") from e
