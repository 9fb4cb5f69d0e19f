from .base import *

DEBUG = False

SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

NAVIGATION_DEFAULT_PAGE_SIZE = 20
NAVIGATION_MAX_PAGE_SIZE = 50

LOGGING["loggers"]["navigation"]["level"] = "WARNING"
