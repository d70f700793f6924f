import logging
import os
from typing import Any

from flask import Flask, jsonify
from flask_wtf.csrf import generate_csrf
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from .blueprints_registry import register_blueprints
from .config import ENV_DIAGNOSTICS, EnvReader, normalize_db_url
from .extensions import cache, csrf, db, limiter, migrate
from .logging_config import configure_logging
from .resilience import register_resilience_handlers

logger = logging.getLogger(__name__)

__version__ = "1.0.0"


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    os.makedirs(app.instance_path, exist_ok=True)

    _load_base_config(app, config)
    _configure_sqlite_engine_options(app)

    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    _configure_cache(app)
    _configure_rate_limiter(app)

    register_blueprints(app)
    from . import models  # noqa: F401  # ensure models registered for Alembic

    _add_core_routes(app)
    configure_logging(app)
    register_resilience_handlers(app)

    from .management import register_commands

    register_commands(app)
    _run_optional_create_all(app)

    return app


def _load_base_config(app: Flask, config: dict[str, Any] | None) -> None:
    app.config.from_object("kitchenops.config.Config")
    if config:
        app.config.update(config)
    app.config["ENV_DIAGNOSTICS"] = ENV_DIAGNOSTICS
    for warning in ENV_DIAGNOSTICS.get("warnings", ()):
        logger.warning("Environment configuration warning: %s", warning)

    if config and "DATABASE_URL" in config:
        app.config["SQLALCHEMY_DATABASE_URI"] = normalize_db_url(config["DATABASE_URL"])

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("DATABASE_URL must be set for this environment.")


def _configure_sqlite_engine_options(app: Flask) -> None:
    """SQLite takes no pool sizing; in-memory databases need one shared connection."""
    uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if not uri.startswith("sqlite"):
        return
    opts = {
        key: value
        for key, value in dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {}).items()
        if key not in ("pool_size", "max_overflow", "pool_timeout")
    }
    if uri in ("sqlite://", "sqlite:///:memory:"):
        opts["poolclass"] = StaticPool
        opts["connect_args"] = {"check_same_thread": False}
    else:
        # concurrent production logs wait for the write lock instead of failing at once
        opts.setdefault("connect_args", {"timeout": 15})
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = opts


_LOCAL_CACHE_TYPES = ("SimpleCache", "NullCache")


def _configure_cache(app: Flask) -> None:
    """Dashboard stats live here; RedisCache shares them across workers."""
    requested = app.config.get("CACHE_TYPE") or "SimpleCache"
    redis_url = app.config.get("CACHE_REDIS_URL")
    cache_config = {"CACHE_DEFAULT_TIMEOUT": app.config.get("CACHE_DEFAULT_TIMEOUT", 120)}

    if requested == "RedisCache" and redis_url:
        cache_config.update(CACHE_TYPE="RedisCache", CACHE_REDIS_URL=redis_url, CACHE_KEY_PREFIX="kitchenops:")
    elif requested in _LOCAL_CACHE_TYPES:
        cache_config["CACHE_TYPE"] = requested
    else:
        logger.warning("CACHE_TYPE=%s unavailable without CACHE_REDIS_URL; using SimpleCache.", requested)
        cache_config["CACHE_TYPE"] = "SimpleCache"

    cache.init_app(app, config=cache_config)
    logger.info("Cache backend: %s", cache_config["CACHE_TYPE"])
    if app.config.get("ENV") == "production" and cache_config["CACHE_TYPE"] == "SimpleCache":
        logger.warning("SimpleCache is per-process; dashboard figures may differ between workers.")


def _configure_rate_limiter(app: Flask) -> None:
    app.config["RATELIMIT_STORAGE_URI"] = app.config.get("RATELIMIT_STORAGE_URI") or "memory://"
    limiter.init_app(app)
    if app.config.get("ENV") == "production" and app.config["RATELIMIT_STORAGE_URI"].startswith("memory://"):
        logger.warning("Rate limiter is using in-memory storage; limits are per worker.")


def _run_optional_create_all(app: Flask) -> None:
    """Local convenience: SQLALCHEMY_CREATE_ALL=1 creates missing tables without Alembic."""
    if not (app.config.get("SQLALCHEMY_CREATE_ALL") or EnvReader().bool("SQLALCHEMY_CREATE_ALL", False)):
        logger.info("db.create_all() not enabled; Alembic migrations are the source of truth")
        return
    logger.info("Local dev: creating tables via db.create_all() (SQLALCHEMY_CREATE_ALL)")
    with app.app_context():
        db.create_all()


def _add_core_routes(app: Flask) -> None:
    """Add core application routes"""

    @app.route("/")
    def index():
        return jsonify({
            "service": "kitchenops",
            "version": __version__,
            "environment": app.config.get("ENV"),
        })

    @app.route("/health")
    @limiter.exempt
    def health():
        db.session.execute(text("SELECT 1"))
        return jsonify({"status": "ok"})

    @app.route("/csrf-token")
    def csrf_token():
        """Token for API clients; send it back in the X-CSRFToken header."""
        return jsonify({"csrf_token": generate_csrf()})
