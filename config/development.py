import os

from config.config import (
    BCRYPT_SALT_ROUNDS,
    BODY_LIMIT,
    CORS_ORIGINS,
    HOST,
    LOG_LEVEL,
    PORT,
    RATE_LIMIT,
    RATE_LIMIT_ENABLED,
    db_config_from_env,
)

ENVIRONMENT = "development"

DB_CONFIG = db_config_from_env(default_password="dev-password")

DEBUG = True

# If enabled, the app applies database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
