from pathlib import Path

from decouple import Csv, config

from config.structlog_config import configure_logging

# -------------------------------
# Diretórios base
# -------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# -------------------------------
# Segurança e debug
# -------------------------------
SECRET_KEY = config('SECRET_KEY', default='dev-insecure-secret-key')
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

# -------------------------------
# Logging
# -------------------------------
LOG_LEVEL = config('LOG_LEVEL', default='INFO')
JSON_LOGS = config('JSON_LOGS', default=False, cast=bool)

LOGGING_CONFIG = None
configure_logging(level=LOG_LEVEL, json_logs=JSON_LOGS)

# -------------------------------
# Hash de senhas
# -------------------------------
BCRYPT_ROUNDS = config('BCRYPT_ROUNDS', default=12, cast=int)

# -------------------------------
# Apps, Middleware
# -------------------------------
INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'plugins.django_interface.apps.DjangoInterfaceConfig',
    'clinica_api.apps.ClinicaConfig',
]

MIDDLEWARE = [
    'django.middleware.common.CommonMiddleware',
]

# -------------------------------
# Banco de Dados
# -------------------------------
DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE.endswith('sqlite3'):
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME':   config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE':   DB_ENGINE,
            'NAME':     config('DB_NAME'),
            'USER':     config('DB_USER'),
            'PASSWORD': config('DB_PASS'),
            'HOST':     config('DB_HOST', default='localhost'),
            'PORT':     config('DB_PORT', default='5432'),
        }
    }

# -------------------------------
# Internacionalização
# -------------------------------
LANGUAGE_CODE = config('LANGUAGE_CODE', default='pt-br')
TIME_ZONE     = config('TIME_ZONE', default='America/Sao_Paulo')
USE_I18N      = True
USE_TZ        = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
