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

ENVIRONMENT = "production"

DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
