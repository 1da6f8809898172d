import os
from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """Raised once at startup when the configuration cannot be used."""


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name, default):
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Namespaces every collection, like /artifacts/<app_id>/public/data/...
    APP_ID = os.getenv("APP_ID", "default-app-id")
    DEFAULT_SITE_ID = os.getenv("DEFAULT_SITE_ID", "demo")
    SERVICE_TYPES = _env_list("SERVICE_TYPES", ["appointment", "report"])

    REQUIRE_ADMIN_ROLE = _env_bool("REQUIRE_ADMIN_ROLE", False)
    CUSTOM_TOKEN_SECRET = os.getenv("CUSTOM_TOKEN_SECRET")
    STREAM_KEEPALIVE_SECONDS = float(os.getenv("STREAM_KEEPALIVE_SECONDS", "15"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///sitecms-dev.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    APP_ID = "test-app"
    DEFAULT_SITE_ID = "demo"
    SERVICE_TYPES = ["appointment", "report"]
    REQUIRE_ADMIN_ROLE = False
    CUSTOM_TOKEN_SECRET = "custom-token-secret-with-enough-length-for-hs256"
    STREAM_KEEPALIVE_SECONDS = 0.05


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def validate_config(config):
    """
    Checks the loaded Flask config once, before any collaborator is built.
    """
    missing = [
        key for key in ("SECRET_KEY", "JWT_SECRET_KEY", "SQLALCHEMY_DATABASE_URI", "APP_ID")
        if not config.get(key)
    ]
    if missing:
        raise ConfigError(f"Missing configuration values: {', '.join(missing)}")

    if not config.get("SERVICE_TYPES"):
        raise ConfigError("SERVICE_TYPES must list at least one service type")

    if not config.get("DEFAULT_SITE_ID"):
        raise ConfigError("DEFAULT_SITE_ID must not be empty")

    if config.get("STREAM_KEEPALIVE_SECONDS", 0) <= 0:
        raise ConfigError("STREAM_KEEPALIVE_SECONDS must be positive")

    if not config.get("DEBUG") and not config.get("TESTING"):
        if config["SECRET_KEY"] == "dev-secret":
            raise ConfigError("SECRET_KEY must be set in production")
