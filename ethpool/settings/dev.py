from .base import *

DEBUG = True
ALLOWED_HOSTS = ["*"]

# For quick local dev without Docker: use SQLite if no DB env is set
if os.getenv("USE_SQLITE", "1") == "1":
    DATABASES["default"] = {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }

# Local operator so `pool_reward` works out of the box
POOL_OPERATOR_ADDRESS = os.getenv("POOL_OPERATOR_ADDRESS", "dev-operator")

LOGGING["loggers"]["ethpool"]["level"] = os.getenv("POOL_LOG_LEVEL", "DEBUG").upper()
