"""Environment-backed values shared by every settings module."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "") -> dict:
    # mysql-connector keyword arguments
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "praetor"),
    }


JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Account ensured by the seed step
ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin User")
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "password")
