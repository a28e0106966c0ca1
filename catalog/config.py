import os

class BaseConfig:
    SECRET_KEY = os.getenv('SECRET_KEY', 'change-me')
    APPER_PROJECT_ID = os.getenv('APPER_PROJECT_ID', '')
    APPER_PUBLIC_KEY = os.getenv('APPER_PUBLIC_KEY', '')
    APPER_API_URL = os.getenv('APPER_API_URL', 'https://api.apper.io/v1')
    APPER_TIMEOUT = int(os.getenv('APPER_TIMEOUT', '10'))
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False

class DevConfig(BaseConfig):
    DEBUG = True
    ENV = 'development'

class ProdConfig(BaseConfig):
    DEBUG = False
    ENV = 'production'
    SESSION_COOKIE_SECURE = True
