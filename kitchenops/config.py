"""Environment-driven settings.

FLASK_ENV picks one of the config classes below. Values are read through
EnvReader, which falls back to the default and records a warning when a
variable is malformed; create_app() logs those warnings at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping

import pytz

_DEFAULT_ENV = "development"
_ENV_KEY = "FLASK_ENV"
_VALID_ENVS = {"development", "testing", "production"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_DEV_SECRET = "devkey-please-change-in-production"


@dataclass(frozen=True)
class EnvironmentInfo:
    name: str
    source: str
    raw_value: str


class EnvReader:
    def __init__(self, data: Mapping[str, str] | None = None):
        self._data = dict(data if data is not None else os.environ)
        self.warnings: list[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def _value(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is None:
            return None
        return value.strip() or None

    def str(self, key: str, default: str | None = None) -> str | None:
        value = self._value(key)
        return default if value is None else value

    def int(self, key: str, default: int = 0, *, minimum: int | None = None) -> int:
        value = self._value(key)
        if value is None:
            return default
        try:
            parsed = int(value)
        except ValueError:
            self.warn(f"{key} expected integer but received {value!r}; falling back to {default}.")
            return default
        if minimum is not None and parsed < minimum:
            self.warn(f"{key} must be at least {minimum}; falling back to {default}.")
            return default
        return parsed

    def decimal(self, key: str, default: str) -> Decimal:
        """Non-negative decimal, e.g. a rate in currency units."""
        value = self._value(key)
        if value is None:
            return Decimal(default)
        try:
            parsed = Decimal(value)
        except InvalidOperation:
            parsed = None
        if parsed is None or not parsed.is_finite() or parsed < 0:
            self.warn(f"{key} expected a non-negative number but received {value!r}; falling back to {default}.")
            return Decimal(default)
        return parsed

    def bool(self, key: str, default: bool = False) -> bool:
        value = self._value(key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        self.warn(f"{key} expected boolean but received {value!r}; falling back to {default}.")
        return default

    def timezone(self, key: str, default: str) -> str:
        value = self._value(key)
        if value is None:
            return default
        if value not in pytz.all_timezones_set:
            self.warn(f"{key}={value!r} is not a known timezone; falling back to {default}.")
            return default
        return value


def normalize_db_url(url: str | None) -> str | None:
    """SQLAlchemy 2.x only accepts the postgresql:// scheme."""
    if not url:
        return None
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _resolve_environment(reader: EnvReader) -> EnvironmentInfo:
    raw_value = reader.str(_ENV_KEY, _DEFAULT_ENV)
    normalized = raw_value.strip().lower()
    if normalized not in _VALID_ENVS:
        raise RuntimeError(
            f"Invalid {_ENV_KEY}={raw_value!r}. Expected one of {sorted(_VALID_ENVS)}."
        )
    return EnvironmentInfo(name=normalized, source=_ENV_KEY, raw_value=raw_value)


env = EnvReader()
ENV_INFO = _resolve_environment(env)


class BaseConfig:
    FLASK_ENV = ENV_INFO.name
    SECRET_KEY = env.str("SECRET_KEY", _DEV_SECRET)

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = None

    RATELIMIT_STORAGE_URI = env.str("RATELIMIT_STORAGE_URI") or env.str("REDIS_URL") or "memory://"
    RATELIMIT_ENABLED = env.bool("RATELIMIT_ENABLED", True)
    RATELIMIT_DEFAULT = env.str("RATELIMIT_DEFAULT", "5000 per hour;1000 per minute")

    CACHE_TYPE = env.str("CACHE_TYPE", "SimpleCache")
    CACHE_REDIS_URL = env.str("CACHE_REDIS_URL") or env.str("REDIS_URL")
    CACHE_DEFAULT_TIMEOUT = env.int("CACHE_DEFAULT_TIMEOUT", 120, minimum=0)
    DASHBOARD_CACHE_TTL = env.int("DASHBOARD_CACHE_TTL", 60, minimum=0)

    LOG_LEVEL = env.str("LOG_LEVEL", "WARNING")
    LOG_REDACT_PII = env.bool("LOG_REDACT_PII", True)

    # Labour rate for production cost, currency units per hour
    PRODUCTION_HOURLY_RATE = env.decimal("PRODUCTION_HOURLY_RATE", "15")
    BUSINESS_TIMEZONE = env.timezone("BUSINESS_TIMEZONE", "Asia/Kolkata")
    CURRENCY_CODE = env.str("CURRENCY_CODE", "INR").upper()
    CURRENCY_SYMBOL = env.str("CURRENCY_SYMBOL", "₹")


class DevelopmentConfig(BaseConfig):
    ENV = "development"
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = normalize_db_url(env.str("DATABASE_URL")) or "sqlite:///" + os.path.join(
        os.path.abspath(os.path.dirname(__file__)), "..", "instance", "kitchenops.db"
    )
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True, "pool_recycle": 3600}


class TestingConfig(BaseConfig):
    ENV = "testing"
    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    CACHE_TYPE = "SimpleCache"


class ProductionConfig(BaseConfig):
    ENV = "production"
    DEBUG = False
    TESTING = False
    SQLALCHEMY_DATABASE_URI = normalize_db_url(env.str("DATABASE_URL"))
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": env.int("SQLALCHEMY_POOL_SIZE", 10, minimum=1),
        "max_overflow": env.int("SQLALCHEMY_MAX_OVERFLOW", 20, minimum=0),
        "pool_pre_ping": True,
        "pool_recycle": 1800,
        "pool_timeout": env.int("SQLALCHEMY_POOL_TIMEOUT", 30, minimum=1),
    }
    LOG_LEVEL = env.str("LOG_LEVEL", "INFO")


if ENV_INFO.name == "production" and BaseConfig.SECRET_KEY == _DEV_SECRET:
    env.warn("SECRET_KEY is not set; CSRF tokens are signed with the development key.")

config_map = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}

Config = config_map[ENV_INFO.name]
ENV_DIAGNOSTICS = {
    "active": ENV_INFO.name,
    "source": ENV_INFO.source,
    "variables": {ENV_INFO.source: ENV_INFO.raw_value},
    "warnings": tuple(env.warnings),
}
