from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from .config import settings


def configure_sqlite(engine: Engine) -> Engine:
    """
    Active les clés étrangères et laisse SQLAlchemy piloter les transactions
    SQLite (nécessaire pour les SAVEPOINT utilisés pendant les imports).
    """
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
        return configure_sqlite(engine)
    return create_engine(url, pool_pre_ping=True)


# L'objet 'engine' est le point d'entrée principal pour communiquer avec la BDD.
engine = _build_engine(settings.DATABASE_URL)

# La 'SessionLocal' est une "usine" à sessions de base de données.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """
    Crée les tables manquantes et insère la configuration par défaut.
    En production, le schéma est géré par Alembic ; ceci sert au démarrage local.
    """
    from .models import Base
    from .services import config_service

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        config_service.seed_defaults(db)
    finally:
        db.close()
