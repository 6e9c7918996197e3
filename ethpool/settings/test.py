from .base import *

DEBUG = False
ALLOWED_HOSTS = ["*"]

# SQLite has no row locks; set POOL_TEST_POSTGRES=1 to run the lock tests
# against the Postgres configured in base.
if os.getenv("POOL_TEST_POSTGRES", "0") != "1":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

POOL_REWARD_SCALE = 10**18
POOL_OPERATOR_ADDRESS = "team"

CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
