# portfolio_api/migrations/env.py
from __future__ import annotations

import os
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

# alembic is run from the repository root; portfolio_api must be importable
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from portfolio_api.config import DATABASE_URL  # noqa: E402
from portfolio_api.database import Base  # noqa: E402
import portfolio_api.models  # noqa: F401,E402

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Same database the app uses unless ALEMBIC_DATABASE_URL points elsewhere
database_url = os.getenv("ALEMBIC_DATABASE_URL") or DATABASE_URL
config.set_main_option("sqlalchemy.url", database_url)

CONFIGURE_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
    # SQLite cannot ALTER most columns in place
    "render_as_batch": database_url.startswith("sqlite"),
}


def run_offline() -> None:
    context.configure(url=database_url, literal_binds=True, **CONFIGURE_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, **CONFIGURE_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
