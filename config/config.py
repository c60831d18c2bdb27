"""Settings shared by every environment, read from the process environment."""

import os


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "user_directory"),
        "pool_name": os.getenv("DB_POOL_NAME", "user_directory_pool"),
        "pool_size": int(os.getenv("DB_POOL_MAX", "10")),
        "connection_timeout": int(os.getenv("DB_CONNECTION_TIMEOUT", "30")),
    }


# Hash work factor (bcrypt cost)
BCRYPT_SALT_ROUNDS = int(os.getenv("BCRYPT_SALT_ROUNDS", "10"))

# Max JSON body size, e.g. "10kb", "1mb" or a byte count
BODY_LIMIT = os.getenv("BODY_LIMIT", "10kb")

LOG_LEVEL = os.getenv("LOG_LEVEL") or None

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))

# Per-client request budget, in Flask-Limiter notation
RATE_LIMIT = os.getenv("RATE_LIMIT", "100 per 15 minutes")
RATE_LIMIT_ENABLED = bool(int(os.getenv("RATE_LIMIT_ENABLED", "1")))

# Comma-separated allowed origins; "*" allows any
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()] or "*"
