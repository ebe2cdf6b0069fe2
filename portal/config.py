import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET = 'dev-secret-key-change-in-production'


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY') or DEFAULT_SECRET

    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL', 'postgresql://postgres@localhost:5432/patient_portal'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Connection pool: pool_size + max_overflow is the hard connection cap,
    # pool_timeout bounds how long a request waits for a free connection.
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_size': int(os.getenv('DB_POOL_SIZE', '10')),
        'max_overflow': int(os.getenv('DB_POOL_OVERFLOW', '40')),
        'pool_recycle': int(os.getenv('DB_POOL_RECYCLE', '300')),
        'pool_timeout': int(os.getenv('DB_POOL_TIMEOUT', '5')),
    }

    # Tokens
    JWT_SECRET_KEY = os.getenv('JWT_SECRET') or SECRET_KEY
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv('JWT_ACCESS_EXPIRES_HOURS', '24')))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv('JWT_REFRESH_EXPIRES_DAYS', '7')))
    JWT_TOKEN_LOCATION = ['headers']

    # Password digests (Flask-Bcrypt reads BCRYPT_LOG_ROUNDS)
    BCRYPT_LOG_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '10'))

    # Pagination
    DEFAULT_PAGE_LIMIT = 10
    MESSAGE_PAGE_LIMIT = 20
    MAX_PAGE_LIMIT = 100

    # Store failures carry the driver message only when this is set
    EXPOSE_STORE_ERRORS = False

    CORS_ORIGINS = os.getenv('FRONTEND_URL', 'http://localhost:3000')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'logs/app.log')

    @classmethod
    def validate(cls):
        pass


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    EXPOSE_STORE_ERRORS = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    SECRET_KEY = os.getenv('SECRET_KEY')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET') or SECRET_KEY

    SQLALCHEMY_ENGINE_OPTIONS = {
        **Config.SQLALCHEMY_ENGINE_OPTIONS,
        'pool_recycle': int(os.getenv('DB_POOL_RECYCLE', '10')),
        'connect_args': {
            'connect_timeout': 5,
            'options': '-c statement_timeout=30000'
        }
    }

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')

    @classmethod
    def validate(cls):
        """Refuse to boot with missing or default secrets"""
        if not cls.SECRET_KEY or cls.SECRET_KEY == DEFAULT_SECRET:
            raise ValueError("SECRET_KEY environment variable must be set in production and must not be the default value")
        if not cls.JWT_SECRET_KEY or cls.JWT_SECRET_KEY == DEFAULT_SECRET:
            raise ValueError("JWT_SECRET environment variable must be set in production")


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URL', 'sqlite:///:memory:')
    # The in-memory SQLite pool takes no sizing options
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SECRET_KEY = 'testing-secret'
    JWT_SECRET_KEY = 'testing-jwt-secret'
    BCRYPT_LOG_ROUNDS = 4


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Get configuration based on FLASK_ENV"""
    env = os.getenv('FLASK_ENV', 'development')
    return config.get(env, config['default'])
