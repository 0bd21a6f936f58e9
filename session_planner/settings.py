"""
Django settings for session_planner project.

The booking core keeps no state, so no database is configured.
"""

import os

SECRET_KEY = os.environ.get('SESSION_PLANNER_SECRET_KEY', 'insecure-dev-key-change-me')

DEBUG = os.environ.get('SESSION_PLANNER_DEBUG', 'false').lower() == 'true'

ALLOWED_HOSTS = os.environ.get('SESSION_PLANNER_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

INSTALLED_APPS = [
    'rest_framework',
    'bookings',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'session_planner.urls'

WSGI_APPLICATION = 'session_planner.wsgi.application'

DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
    'UNAUTHENTICATED_USER': None,
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'bookings': {
            'handlers': ['console'],
            'level': os.environ.get('SESSION_PLANNER_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
    },
}
