"""
Django settings for the shopfront project.

Only the HTML client rendering is configured here; the shop backend that
provides orders, baskets and catalog data is connected through
HTML_CLIENT_CONTROLLERS.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-shopfront-development-key')

DEBUG = os.environ.get('DJANGO_DEBUG', 'False').lower() in ('true', '1', 'yes')

ALLOWED_HOSTS = [host for host in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if host]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',
    'htmlclient',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.locale.LocaleMiddleware',
]

ROOT_URLCONF = 'shopfront.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
            ],
        },
    },
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

EMAIL_BACKEND = os.environ.get('DJANGO_EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
DEFAULT_FROM_EMAIL = os.environ.get('DJANGO_DEFAULT_FROM_EMAIL', 'shop@localhost')

# HTML clients
#
# Nested configuration read by the clients with slash separated keys, e.g.
# "client/html/catalog/filter/subparts" or
# "client/html/email/payment/pdf/decorators/local".
HTML_CLIENT_CONFIG = {
    'client': {
        'html': {
            'common': {
                'decorators': {
                    'default': [],
                },
            },
            'catalog': {
                'lists': {'url': {'target': 'catalog-list'}},
                'tree': {'url': {'target': 'catalog-tree', 'args': {'catid': 'f_catid'}}},
                'filter': {
                    'subparts': ['supplier'],
                    'button': True,
                },
            },
            'basket': {
                'related': {
                    'subparts': ['bought'],
                },
            },
            'email': {
                'payment': {
                    'subparts': ['pdf'],
                    'pdf': {
                        'subparts': [],
                    },
                },
            },
        },
    },
}

# Controller factories (dotted paths) creating the domain collaborators per request
HTML_CLIENT_CONTROLLERS = {}

HTML_CLIENT_PDF_RENDERER = 'htmlclient.printing.weasyprint_renderer.WeasyPrintRenderer'
HTML_CLIENT_PDF_STYLESHEETS = []

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
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
        'level': 'WARNING',
    },
    'loggers': {
        'htmlclient': {
            'handlers': ['console'],
            'level': os.environ.get('HTML_CLIENT_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
