#!/usr/bin/env python

"""
    Configurations for Biblioteca

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import os


# Determine environment
TESTING = os.getenv("TESTING", "false").lower() == "true"
ENVIRONMENT = os.environ.get('BIBLIOTECA_ENV', 'development')

# API server configuration
HOST = os.environ.get('BIBLIOTECA_HOST', 'localhost')
PORT = int(os.environ.get('BIBLIOTECA_PORT', 3000))
WORKERS = int(os.environ.get('BIBLIOTECA_WORKERS', 1))
DEBUG = bool(int(os.environ.get('BIBLIOTECA_DEBUG', 0)))
LOG_LEVEL = os.environ.get('BIBLIOTECA_LOG_LEVEL', 'info')
CORS_ORIGINS = [
    origin.strip() for origin in
    os.environ.get('BIBLIOTECA_CORS_ORIGINS', '*').split(',')
    if origin.strip()
]

OPTIONS = {
    'host': HOST,
    'port': PORT,
    'log_level': LOG_LEVEL,
    'reload': DEBUG,
    'workers': WORKERS,
}

# Lending policy
LOAN_PERIOD_DAYS = int(os.environ.get('BIBLIOTECA_LOAN_DAYS', 30))
DEFAULT_LIMIT = 50
MAX_LIMIT = 100
SEED_DATA = os.environ.get('BIBLIOTECA_SEED', 'false').lower() == 'true'

DB_BACKEND = os.environ.get('DB_BACKEND', 'sqlite')
DB_PATH = os.environ.get('DB_PATH', './biblioteca.db')
DB_CONFIG = {
    'user': os.environ.get('DB_USER', 'postgres'),
    'password': os.environ.get('DB_PASSWORD'),
    'host': os.environ.get('DB_HOST', 'localhost'),
    'port': int(os.environ.get('DB_PORT', '5432')),
    'dbname': os.environ.get('DB_NAME', 'biblioteca'),
}

# Database configuration
if TESTING:
    DB_URI = "sqlite:///:memory:"
elif os.environ.get('BIBLIOTECA_DB_URI'):
    DB_URI = os.environ['BIBLIOTECA_DB_URI']
elif DB_BACKEND == 'postgresql':
    DB_URI = 'postgresql+psycopg2://{user}:{password}@{host}:{port}/{dbname}'.format(**DB_CONFIG)
else:
    DB_URI = f"sqlite:///{DB_PATH}"

__all__ = [
    'TESTING', 'ENVIRONMENT', 'HOST', 'PORT', 'DEBUG', 'LOG_LEVEL', 'OPTIONS',
    'CORS_ORIGINS', 'LOAN_PERIOD_DAYS', 'DEFAULT_LIMIT', 'MAX_LIMIT',
    'SEED_DATA', 'DB_URI', 'DB_CONFIG',
]
