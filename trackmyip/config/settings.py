"""
Django settings for the TrackMyIP project.

Only the parts of Django that TrackMyIP uses are enabled:
- the ORM on a local SQLite file
- the trackmyip app (models, signals, management commands)
- REST framework serializers for rendering and validating records

Everything configurable is read from environment variables so the same
settings work for the CLI, the tests and any embedding front-end.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'trackmyip-local-only')

DEBUG = os.environ.get('DJANGO_DEBUG', '0') == '1'

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'rest_framework',
    'trackmyip',
]

# TrackMyIP database (one table of geolocations plus runtime settings)
TRACKMYIP_DATABASE_PATH = os.environ.get(
    'TRACKMYIP_DB',
    str(BASE_DIR / 'TrackMyIP.db'),
)

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': TRACKMYIP_DATABASE_PATH,
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

USE_TZ = True
TIME_ZONE = 'UTC'

# ipstack API
# The key can be overridden at runtime with `manage.py api_key --set ...`,
# which stores it in the database (see trackmyip.settings_store).
IPSTACK_API_KEY = os.environ.get('IPSTACK_API_KEY', '')
IPSTACK_BASE_URL = os.environ.get('IPSTACK_BASE_URL', 'http://api.ipstack.com/')
IPSTACK_TIMEOUT = int(os.environ.get('IPSTACK_TIMEOUT', '10'))

# Always-resolvable host used to tell a bad key apart from everything else
IPSTACK_PROBE_QUERY = 'www.google.pl'

REST_FRAMEWORK = {
    'UNAUTHENTICATED_USER': None,
}

LOG_LEVEL = os.environ.get('TRACKMYIP_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'trackmyip': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
    },
}
