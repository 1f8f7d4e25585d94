import enum
import secrets

from schooldesk.constants import SITE_NAME


class Config:
    """Base configuration."""

    SECRET_KEY = secrets.token_bytes(24)
    BABEL_TRANSLATION_DIRECTORIES = "translations"
    JSON_SORT_KEYS = False
    SITE_NAME = SITE_NAME
    ADMIN_PASSWORD = None


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    SECRET_KEY = "testing"


class ConfigType(enum.Enum):
    DEVELOPMENT = DevelopmentConfig
    PRODUCTION = ProductionConfig
    TESTING = TestingConfig
