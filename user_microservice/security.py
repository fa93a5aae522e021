"""Password hashing built on werkzeug's salted hash tokens."""

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher:
    """Hash and verify passwords.

    Tokens look like ``method$salt$hash`` so each one carries its own
    parameters and a fresh random salt; hashing the same password twice
    yields two different tokens.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16):
        self.method = method
        self.salt_length = salt_length

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self.method, salt_length=self.salt_length)

    def verify(self, password: str | None, token: str | None) -> bool:
        """Return True if ``password`` matches ``token``.

        A malformed token is a mismatch, not an error.
        """
        if not password or not token:
            return False
        try:
            return check_password_hash(token, password)
        except ValueError:
            # unknown method or bad parameters in the token header
            return False
