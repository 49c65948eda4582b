"""
Django settings for the CinéConnect API.

Every deployment-specific value comes from the environment; a `.env` file
next to `manage.py` is loaded first for local development.
"""
import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def env_bool(name, default=False):
    return os.getenv(name, str(default)).strip().lower() in ('1', 'true', 'yes', 'on')


def env_list(name, default=''):
    return [item.strip() for item in os.getenv(name, default).split(',') if item.strip()]


SECRET_KEY = os.getenv(
    'SECRET_KEY',
    'django-insecure-cineconnect-development-key-change-me-before-deploying-anywhere',
)

DEBUG = env_bool('DEBUG', False)

ALLOWED_HOSTS = env_list('ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'corsheaders',
    'rest_framework',
    'rest_framework_simplejwt.token_blacklist',
    'django_filters',
    'drf_spectacular',

    'users',
    'films',
    'reviews',
    'friends',
    'messaging',
    'watchlist',
    'realtime',
    'security',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'security.middleware.RequestAuditMiddleware',
]

ROOT_URLCONF = 'cineconnect.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'cineconnect.wsgi.application'
ASGI_APPLICATION = 'cineconnect.asgi.application'


# Database: PostgreSQL when DB_NAME is configured, SQLite otherwise

if os.getenv('DB_NAME'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('DB_NAME'),
            'USER': os.getenv('DB_USER', 'postgres'),
            'PASSWORD': os.getenv('DB_PASSWORD', ''),
            'HOST': os.getenv('DB_HOST', 'localhost'),
            'PORT': os.getenv('DB_PORT', '5432'),
            'CONN_MAX_AGE': int(os.getenv('DB_CONN_MAX_AGE', '60')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_USER_MODEL = 'users.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
     'OPTIONS': {'min_length': 8}},
]


# Cache: Redis in deployments, local memory otherwise

REDIS_URL = os.getenv('REDIS_URL', '')

if REDIS_URL:
    CACHES = {
        'default': {
            'BACKEND': 'django_redis.cache.RedisCache',
            'LOCATION': REDIS_URL,
            'OPTIONS': {
                'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            },
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'cineconnect',
        }
    }


# Internationalization

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# CORS: the SPA sends the refresh cookie, so credentials must be allowed

FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:5173')
CORS_ALLOWED_ORIGINS = env_list('CORS_ALLOWED_ORIGINS', FRONTEND_URL)
CORS_ALLOW_CREDENTIALS = True


# Django REST Framework

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PAGINATION_CLASS': 'cineconnect.pagination.ClampedPagination',
    'PAGE_SIZE': 20,
    'DEFAULT_THROTTLE_CLASSES': [
        'rest_framework.throttling.AnonRateThrottle',
        'rest_framework.throttling.UserRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'anon': os.getenv('THROTTLE_ANON_RATE', '300/min'),
        'user': os.getenv('THROTTLE_USER_RATE', '600/min'),
        'auth': os.getenv('THROTTLE_AUTH_RATE', '20/min'),
    },
    'EXCEPTION_HANDLER': 'cineconnect.exceptions.exception_handler',
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=int(os.getenv('JWT_ACCESS_MINUTES', '15'))),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=int(os.getenv('JWT_REFRESH_DAYS', '30'))),
    'ROTATE_REFRESH_TOKENS': True,
    'BLACKLIST_AFTER_ROTATION': True,
    'AUTH_HEADER_TYPES': ('Bearer',),
    'USER_ID_FIELD': 'user_id',
    'USER_ID_CLAIM': 'user_id',
}

# Refresh tokens travel in an httpOnly cookie scoped to the auth endpoints
REFRESH_COOKIE = {
    'key': 'refresh_token',
    'path': '/api/v1/auth/',
    'httponly': True,
    'secure': env_bool('REFRESH_COOKIE_SECURE', not DEBUG),
    'samesite': 'Lax',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'CinéConnect API',
    'DESCRIPTION': 'Discover, rate and discuss films with friends',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}


# Film metadata provider (OMDb)

OMDB_API_KEY = os.getenv('OMDB_API_KEY', '')
OMDB_BASE_URL = os.getenv('OMDB_BASE_URL', 'https://www.omdbapi.com/')
OMDB_TIMEOUT = float(os.getenv('OMDB_TIMEOUT', '10'))
METADATA_CACHE_TIMEOUT = 60 * 60 * 24
FILM_METADATA_MAX_AGE_DAYS = int(os.getenv('FILM_METADATA_MAX_AGE_DAYS', '30'))


# Abuse control: IPs above this many requests in an hour are flagged as suspicious

SECURITY_MAX_REQUESTS_PER_HOUR = int(os.getenv('SECURITY_MAX_REQUESTS_PER_HOUR', '3000'))

# Only trust X-Forwarded-For when a reverse proxy in front of the app sets it
USE_X_FORWARDED_FOR = env_bool('USE_X_FORWARDED_FOR', False)


# Celery

CELERY_BROKER_URL = REDIS_URL or 'redis://localhost:6379/0'
CELERY_RESULT_BACKEND = CELERY_BROKER_URL
CELERY_TASK_ALWAYS_EAGER = env_bool('CELERY_TASK_ALWAYS_EAGER', False)
CELERY_BEAT_SCHEDULE = {
    'detect-anomalies': {
        'task': 'security.tasks.detect_anomalies',
        'schedule': 60 * 60,
    },
    'refresh-stale-films': {
        'task': 'films.tasks.refresh_stale_films',
        'schedule': 60 * 60 * 24,
    },
}


# Socket.IO: set SOCKETIO_MESSAGE_QUEUE to a Redis URL to fan out events between workers

SOCKETIO_MESSAGE_QUEUE = os.getenv('SOCKETIO_MESSAGE_QUEUE', '')


# Logging

REQUEST_LOG_FILE = os.getenv('REQUEST_LOG_FILE', '')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': os.getenv('LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}

if REQUEST_LOG_FILE:
    LOGGING['handlers']['request_file'] = {
        'class': 'logging.FileHandler',
        'filename': REQUEST_LOG_FILE,
        'formatter': 'verbose',
    }
    LOGGING['loggers']['security.middleware'] = {
        'handlers': ['request_file'],
        'level': 'INFO',
        'propagate': True,
    }
