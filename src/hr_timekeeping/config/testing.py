import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_timekeeping_test"),
}

JWT_SECRET = "test-jwt-secret-0123456789abcdef0123"
JWT_ALGORITHM = "HS256"

# Fixed key so ciphertext written by one test run stays readable
FIELD_ENCRYPTION_KEY = "x3f8Jb5Qm1e0bq7qH2u6g4lP9cYtKz2vR8nW0sD5aE4="

LOG_LEVEL = "WARNING"
LOG_JSON = False

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
