import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

# --- Chargement de l'environnement ---
from dotenv import load_dotenv

# Ajoute la racine du projet au chemin de recherche de Python
sys.path.insert(0, os.path.realpath(os.path.join(os.path.dirname(__file__), '..')))
# Charge le fichier .env qui se trouve à la racine du projet
load_dotenv(os.path.join(os.path.dirname(__file__), '..', '.env'))

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# L'import du package enregistre tous les modèles dans Base.metadata
from prescriptions.models import Base  # noqa: E402
from prescriptions.config import settings  # noqa: E402

target_metadata = Base.metadata


def _database_url() -> str:
    return os.environ.get('DATABASE_URL') or settings.DATABASE_URL


def run_migrations_offline() -> None:
    """Génère le SQL des migrations sans connexion à la base."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Applique les migrations sur la base configurée."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration['sqlalchemy.url'] = _database_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        # render_as_batch : ALTER TABLE limité sous SQLite
        context.configure(
            connection=connection, target_metadata=target_metadata, render_as_batch=True
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
