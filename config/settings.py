import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'synkros-insecure-dev-key')
DEBUG = os.environ.get('DJANGO_DEBUG', '') == '1'
ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'synkros',
]

DATABASES = {
    # Sync ledger.
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('SYNKROS_LEDGER_PATH', str(BASE_DIR / 'synkros.db')),
    },
    # Authoritative product catalog, read only.
    'catalog': {
        'ENGINE': os.environ.get('CATALOG_DB_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.environ.get('CATALOG_DB_NAME', str(BASE_DIR / 'catalog.db')),
        'HOST': os.environ.get('CATALOG_DB_HOST', ''),
        'PORT': os.environ.get('CATALOG_DB_PORT', ''),
        'USER': os.environ.get('CATALOG_DB_USER', ''),
        'PASSWORD': os.environ.get('CATALOG_DB_PASSWORD', ''),
    },
}
DATABASE_ROUTERS = ['synkros.routers.CatalogRouter']

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
USE_TZ = True
TIME_ZONE = 'UTC'

CATALOG_SOURCE_TABLE = os.environ.get('CATALOG_SOURCE_TABLE', 'PRODUCTOS')
CATALOG_SOURCE_COLUMNS = {
    'code': 'CODIGO_PRODUCTO',
    'name': 'NOMBRE_PRODUCTO',
    'price': 'PREVTA1_PRODUCTO',
    'owner': 'AUTOR',
    'photo': 'FOTO',
}

INGESTION_API_BASE_URL = os.environ.get('INGESTION_API_BASE_URL', 'http://localhost:3000')
INGESTION_API_KEY = os.environ.get('INGESTION_API_KEY', '')
INGESTION_TIMEOUT = float(os.environ.get('INGESTION_TIMEOUT', '30'))

ASSET_STAGING_DIR = os.environ.get('ASSET_STAGING_DIR', str(BASE_DIR / 'temp'))
SYNC_INTERVAL_SECONDS = int(os.environ.get('SYNC_INTERVAL_SECONDS', '3600'))

CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', 'redis://localhost:6379/0')
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_BEAT_SCHEDULE = {
    'sync-catalog': {
        'task': 'synkros.sync_catalog',
        'schedule': SYNC_INTERVAL_SECONDS,
    },
}

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
        'synkros': {
            'handlers': ['console'],
            'level': os.environ.get('SYNKROS_LOG_LEVEL', 'INFO'),
        },
    },
}
