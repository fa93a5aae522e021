"""Environment-driven settings for the app factory."""

import os


def normalize_database_url(database_url: str, sslmode: str | None = "require") -> str:
    # Render/Heroku hand out postgres URLs without the psycopg3 driver
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql+psycopg://", 1)
    elif database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+psycopg://", 1)
    if sslmode and database_url.startswith("postgresql+psycopg://") and "sslmode=" not in database_url:
        sep = "&" if "?" in database_url else "?"
        database_url = f"{database_url}{sep}sslmode={sslmode}"
    return database_url


def load_config() -> dict:
    # DATABASE_SSLMODE="" leaves the URL untouched
    sslmode = os.getenv("DATABASE_SSLMODE", "require") or None

    return {
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev-key"),
        "SQLALCHEMY_DATABASE_URI": normalize_database_url(
            os.getenv("DATABASE_URL", "sqlite:///local.db"), sslmode
        ),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "BASIC_AUTH_USERNAME": os.getenv("BASIC_AUTH_USERNAME", "user"),
        # empty -> a random password is generated at startup
        "BASIC_AUTH_PASSWORD": os.getenv("BASIC_AUTH_PASSWORD", ""),
        # stored users may log in with email + password only when enabled
        "BASIC_AUTH_ALLOW_USERS": os.getenv("BASIC_AUTH_ALLOW_USERS", "false").lower() in ("1", "true", "yes"),
        "AUTH_REALM": os.getenv("AUTH_REALM", "User Microservice"),
        "PASSWORD_HASH_METHOD": os.getenv("PASSWORD_HASH_METHOD", "scrypt"),
        "PASSWORD_SALT_LENGTH": int(os.getenv("PASSWORD_SALT_LENGTH", "16")),
        "CORS_ORIGINS": os.getenv("CORS_ORIGINS", "*"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "SERVICE_NAME": "User Microservice",
        "SERVICE_VERSION": "1.0.0",
    }
