import os
from dotenv import load_dotenv

load_dotenv()

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def is_test_env() -> bool:
    return os.environ.get("CMS_ENV", "").lower() == "test"


def _default_path(name):
    # Test runs get their own data directory and credential file
    if is_test_env():
        return os.path.join(_PROJECT_ROOT, "tests", name)
    return os.path.join(_PROJECT_ROOT, name)


class Config:
    """Application configuration loaded from environment variables."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")

    # Storage
    DATA_DIR = os.environ.get("CMS_DATA_DIR", _default_path("data"))
    USERS_FILE = os.environ.get("CMS_USERS_FILE", _default_path("users.yml"))

    # Documents and uploads
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024  # 5 MB
    DOCUMENT_EXTENSIONS = {".md", ".txt"}
    IMAGE_EXTENSIONS = {".jpg", ".png"}

    # Auth
    BCRYPT_LOG_ROUNDS = int(os.environ.get("BCRYPT_LOG_ROUNDS", 12))
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")


class TestConfig(Config):
    TESTING = True
    BCRYPT_LOG_ROUNDS = 4
    RATELIMIT_ENABLED = False
