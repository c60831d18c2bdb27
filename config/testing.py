import os

from config.config import (
    BODY_LIMIT,
    CORS_ORIGINS,
    HOST,
    LOG_LEVEL,
    PORT,
    RATE_LIMIT,
    RATE_LIMIT_ENABLED,
    db_config_from_env,
)

ENVIRONMENT = "testing"

DB_CONFIG = db_config_from_env(default_password="test-password")

# Cheapest cost bcrypt accepts, so test runs stay fast
BCRYPT_SALT_ROUNDS = int(os.getenv("BCRYPT_SALT_ROUNDS", "4"))

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
