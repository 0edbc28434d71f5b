"""
Migration environment for the feed schema.

The connection URL comes from the application settings (DATABASE_URL or the
DB_* values) with the async driver swapped for its blocking counterpart.
"""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from format_api.core.database import DB_SYNC_URL, Base, import_models

alembic_cfg = context.config
if alembic_cfg.config_file_name:
    fileConfig(alembic_cfg.config_file_name)

# An explicit -x url=... wins over the application settings
alembic_cfg.set_main_option(
    'sqlalchemy.url',
    context.get_x_argument(as_dictionary=True).get('url', DB_SYNC_URL),
)

import_models()
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Render the migration SQL without connecting"""
    context.configure(
        url=alembic_cfg.get_main_option('sqlalchemy.url'),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        alembic_cfg.get_section(alembic_cfg.config_ini_section, {}),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        # SQLite needs batch mode for ALTER and the pragma for ON DELETE rules
        if connection.dialect.name == 'sqlite':
            connection.exec_driver_sql('PRAGMA foreign_keys=ON')
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == 'sqlite',
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
