import os
from pathlib import Path

import structlog

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("WEBOOK_SECRET_KEY", "webook-insecure-dev-key-change-me-in-production")

DEBUG = os.environ.get("WEBOOK_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = os.environ.get("WEBOOK_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "order",
]

# json api authenticated by jwt, no session or csrf
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "webook.urls"

WSGI_APPLICATION = "webook.wsgi.application"

DB_ENGINE = os.environ.get("WEBOOK_DB_ENGINE", "django.db.backends.sqlite3")

if DB_ENGINE == "django.db.backends.sqlite3":
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.environ.get("WEBOOK_DB_NAME", str(BASE_DIR / "webook.sqlite3")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.environ.get("WEBOOK_DB_NAME", "webook"),
            "USER": os.environ.get("WEBOOK_DB_USER", "root"),
            "PASSWORD": os.environ.get("WEBOOK_DB_PASSWORD", ""),
            "HOST": os.environ.get("WEBOOK_DB_HOST", "127.0.0.1"),
            "PORT": os.environ.get("WEBOOK_DB_PORT", ""),
        }
    }

CACHES = {
    "default": {
        "BACKEND": os.environ.get("WEBOOK_CACHE_BACKEND", "django.core.cache.backends.locmem.LocMemCache"),
        "LOCATION": os.environ.get("WEBOOK_CACHE_LOCATION", "webook"),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "zh-hans"

TIME_ZONE = "Asia/Shanghai"

USE_I18N = True

USE_TZ = True

# order module
ORDER_PRODUCT_SERVICE = os.environ.get("WEBOOK_ORDER_PRODUCT_SERVICE", "")
ORDER_CREDIT_SERVICE = os.environ.get("WEBOOK_ORDER_CREDIT_SERVICE", "")
ORDER_PAYMENT_SERVICE = os.environ.get("WEBOOK_ORDER_PAYMENT_SERVICE", "")
ORDER_PAY_DEADLINE_MINUTES = int(os.environ.get("WEBOOK_ORDER_PAY_DEADLINE_MINUTES", "30"))
ORDER_REQUEST_ID_TTL = int(os.environ.get("WEBOOK_ORDER_REQUEST_ID_TTL", str(24 * 60 * 60)))
ORDER_PREVIEW_WORKERS = int(os.environ.get("WEBOOK_ORDER_PREVIEW_WORKERS", "3"))
ORDER_PURCHASE_POLICY = "请注意: 虚拟商品、一旦支持成功不退、不换,请谨慎操作"

LOG_LEVEL = os.environ.get("WEBOOK_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.dev.ConsoleRenderer(colors=False),
            "foreign_pre_chain": [
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django.db.backends": {
            "level": "WARNING",
        },
    },
}

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)
