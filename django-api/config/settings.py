"""Django settings for the booking API.

Values come from the environment through ``config.env``; see that module
for variable names and defaults.
"""

from config.env import get_env, split_list

env = get_env()

SECRET_KEY = env.secret_key
DEBUG = env.debug
ALLOWED_HOSTS = split_list(env.allowed_hosts)

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "booking",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

# Events and schedules are read from the upstream API; nothing is persisted.
DATABASES = {}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "booking",
    }
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "standard"},
    },
    "root": {"handlers": ["console"], "level": env.log_level},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}

BOOKING_API_BASE_URL = env.booking_api_base_url
BOOKING_HTTP_TIMEOUT = env.booking_http_timeout
BOOKING_EVENT_CACHE_TTL = env.booking_event_cache_ttl
BOOKING_DRAFT_TTL = env.booking_draft_ttl
BOOKING_SUGGESTED_COUPONS = split_list(env.booking_suggested_coupons)
