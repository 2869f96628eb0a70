# notifhub/settings.py
from pathlib import Path
from dotenv import load_dotenv
import os
import dj_database_url

# ────────────────────────────────
# BASE / ENV
# ────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent
DOTENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=str(DOTENV_PATH), override=False)

def env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() in {"1", "true", "yes", "on"}

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-key")  # ⚠️ à remplacer en prod
DEBUG = env_bool("DJANGO_DEBUG", True)

_raw_hosts = os.getenv("DJANGO_ALLOWED_HOSTS", "")
ALLOWED_HOSTS = [h.strip() for h in _raw_hosts.split(",") if h.strip()] or ["localhost", "127.0.0.1", "testserver"]

# ────────────────────────────────
# APPS
# ────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Projet
    "activity_notification.apps.ActivityNotificationConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "notifhub.urls"
WSGI_APPLICATION = "notifhub.wsgi.application"

# ────────────────────────────────
# TEMPLATES
# ────────────────────────────────
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "activity_notification.context_processors.unopened_notification_count",
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# ────────────────────────────────
# NOTIFICATIONS
# ────────────────────────────────
ACTIVITY_NOTIFICATION = {
    # "app_label.Model" ou {"model": ..., "resource_name": ..., "resources_name": ...}
    "TARGETS": [
        {"model": "auth.User", "resource_name": "user", "resources_name": "users"},
    ],
    "LAYOUT_ROOT": os.getenv("NOTIFICATION_LAYOUT_ROOT", "layouts"),
    "INDEX_LIMIT": int(os.getenv("NOTIFICATION_INDEX_LIMIT", "0")) or None,
    "BASE_URL": os.getenv("NOTIFICATION_BASE_URL", "http://localhost:8000"),
}

# ────────────────────────────────
# AUTH
# ────────────────────────────────
LOGIN_URL = "/admin/login/"

# ────────────────────────────────
# DATABASE
# ────────────────────────────────
DATABASES = {}
DB_URL = os.getenv("DATABASE_URL")

if DB_URL:
    DATABASES["default"] = dj_database_url.parse(DB_URL, conn_max_age=600)
else:
    DATABASES["default"] = {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }

# ────────────────────────────────
# I18N / L10N
# ────────────────────────────────
LANGUAGE_CODE = "fr"
USE_I18N = True
TIME_ZONE = "Europe/Paris"
USE_TZ = True
LOCALE_PATHS = [BASE_DIR / "locale"]

STATIC_URL = "/static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ────────────────────────────────
# LOGGING (console)
# ────────────────────────────────
LOG_LEVEL = os.getenv("DJANGO_LOG_LEVEL", "INFO" if not DEBUG else "DEBUG")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django.request": {"handlers": ["console"], "level": "ERROR", "propagate": False},
        "activity_notification": {"level": os.getenv("NOTIFICATION_LOG_LEVEL", LOG_LEVEL)},
    },
}
