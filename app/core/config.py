import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./events.db")

# Redis configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Registration lock
REGISTRATION_LOCK_ENABLED = _env_bool("REGISTRATION_LOCK_ENABLED", "true")
REGISTRATION_LOCK_TIMEOUT = int(os.getenv("REGISTRATION_LOCK_TIMEOUT", "10"))
REGISTRATION_LOCK_BLOCKING_TIMEOUT = int(os.getenv("REGISTRATION_LOCK_BLOCKING_TIMEOUT", "5"))

# Celery
CELERY_TASK_ALWAYS_EAGER = _env_bool("CELERY_TASK_ALWAYS_EAGER", "false")

# Credentials
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

# Application
SEED_SAMPLE_DATA = _env_bool("SEED_SAMPLE_DATA", "true")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def get_redis_url():
    return REDIS_URL


def get_database_url():
    return DATABASE_URL
