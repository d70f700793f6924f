import logging
import os
from logging.config import fileConfig

from alembic import context
from flask import current_app
from sqlalchemy import create_engine

from kitchenops import models  # noqa: F401  registers every table on db.metadata
from kitchenops.config import normalize_db_url

config = context.config
fileConfig(config.config_file_name)
logger = logging.getLogger('alembic.env')

target_db = current_app.extensions['migrate'].db


def _engine():
    """ALEMBIC_DATABASE_URL wins over the app engine, e.g. for a direct (unpooled) URL."""
    override = normalize_db_url(os.environ.get('ALEMBIC_DATABASE_URL'))
    if override:
        return create_engine(override)
    return target_db.engine


def _render_url(engine) -> str:
    # configparser treats % as interpolation
    return engine.url.render_as_string(hide_password=False).replace('%', '%%')


def _skip_empty_autogenerate(context, revision, directives):
    if getattr(config.cmd_opts, 'autogenerate', False) and directives[0].upgrade_ops.is_empty():
        directives[:] = []
        logger.info('No schema changes detected; no revision written.')


def run_migrations_offline():
    context.configure(
        url=config.get_main_option('sqlalchemy.url'),
        target_metadata=target_db.metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    engine = _engine()
    options = dict(current_app.extensions['migrate'].configure_args)
    options['transaction_per_migration'] = True
    options.setdefault('process_revision_directives', _skip_empty_autogenerate)

    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_db.metadata, **options)
        with context.begin_transaction():
            context.run_migrations()


config.set_main_option('sqlalchemy.url', _render_url(_engine()))

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
