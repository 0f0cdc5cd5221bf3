import os
from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '.env'))

DEFAULT_CORS_ORIGINS = [
    'http://localhost:5173',
    'http://127.0.0.1:5173',
    'http://localhost:8080',
    'http://localhost:3000',
]


def _normalize_database_url(database_url):
    # SQLAlchemy wants postgresql://, some hosts still hand out postgres://
    if database_url and database_url.startswith('postgres://'):
        return database_url.replace('postgres://', 'postgresql://', 1)
    return database_url


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    """Base configuration"""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    SQLALCHEMY_DATABASE_URI = None  # Set in __init__
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }

    CORS_ORIGINS = DEFAULT_CORS_ORIGINS

    OFFICE_TIMEZONE = os.environ.get('OFFICE_TIMEZONE', 'Asia/Kolkata')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    MAX_CONTENT_LENGTH = 4 * 1024 * 1024  # 4MB JSON bodies

    ENV_NAME = 'base'

    @staticmethod
    def get_database_url():
        """Database URL string from the environment, SQLite file otherwise"""
        database_url = _normalize_database_url(os.environ.get('DATABASE_URL'))
        return database_url or 'sqlite:///' + os.path.join(basedir, 'instance', 'stpi_portal.db')

    def __init__(self):
        self.SQLALCHEMY_DATABASE_URI = self.get_database_url()
        cors_origins = os.environ.get('CORS_ORIGINS')
        if cors_origins:
            self.CORS_ORIGINS = _split_origins(cors_origins)


class DevelopmentConfig(Config):
    """Development configuration for local testing"""
    DEBUG = True
    ENV_NAME = 'development'

    def __init__(self):
        super().__init__()

        dev_database_url = _normalize_database_url(os.environ.get('DEV_DATABASE_URL'))
        if dev_database_url:
            self.SQLALCHEMY_DATABASE_URI = dev_database_url


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    ENV_NAME = 'production'

    def __init__(self):
        super().__init__()

        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable is required for production")
        self.SECRET_KEY = secret_key

        database_url = os.environ.get('DATABASE_URL')
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required for production")
        self.SQLALCHEMY_DATABASE_URI = _normalize_database_url(database_url)

        if not self.SQLALCHEMY_DATABASE_URI.startswith('sqlite'):
            self.SQLALCHEMY_ENGINE_OPTIONS = {
                'pool_recycle': 3600,
                'pool_pre_ping': True,
                'pool_size': 10,
                'max_overflow': 20,
                'pool_timeout': 30,
            }


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    ENV_NAME = 'testing'

    def __init__(self):
        super().__init__()
        self.SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
        self.SQLALCHEMY_ENGINE_OPTIONS = {}
        self.CORS_ORIGINS = ['*']


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config_name():
    """Detect environment from the process environment"""

    flask_env = os.environ.get('FLASK_ENV', '').lower()
    if flask_env in ['production', 'testing', 'development']:
        return flask_env

    if os.environ.get('TESTING') or os.environ.get('CI'):
        return 'testing'

    return 'development'


def validate_config(config_name=None):
    """Check that production has what it needs"""
    if (config_name or get_config_name()) == 'production':
        required_vars = ['SECRET_KEY', 'DATABASE_URL']
        missing_vars = [var for var in required_vars if not os.environ.get(var)]
        if missing_vars:
            return False, f"Missing required environment variables: {', '.join(missing_vars)}"

    return True, "Configuration is valid"


__all__ = [
    'config',
    'get_config_name',
    'validate_config',
]
