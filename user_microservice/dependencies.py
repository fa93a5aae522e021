"""Per-request wiring of the user service."""

from flask import current_app, g

from . import db
from .repository import UserRepository
from .security import PasswordHasher
from .service import UserService


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(
        method=current_app.config["PASSWORD_HASH_METHOD"],
        salt_length=current_app.config["PASSWORD_SALT_LENGTH"],
    )


def get_user_service() -> UserService:
    if "user_service" not in g:
        g.user_service = UserService(UserRepository(db.session), get_password_hasher())
    return g.user_service
