import os
from pathlib import Path
BASE_DIR = Path(__file__).resolve().parent

def _flag(name, default):
    return os.environ.get(name, default).lower() in ("1", "true", "yes", "on")

class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", f"sqlite:///{(BASE_DIR / 'university.db').as_posix()}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # default admin account provisioned by the role seeder
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@xyz.edu.jo")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "Admin@123")
    SEED_ON_STARTUP = _flag("SEED_ON_STARTUP", "true")

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    WTF_CSRF_ENABLED = False
    SEED_ON_STARTUP = False
    LOG_LEVEL = "DEBUG"
