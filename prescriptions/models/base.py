import json

from sqlalchemy import Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

# Catalogue central où SQLAlchemy enregistre toutes les classes de modèles.
# C'est aussi ce qu'Alembic compare avec l'état de la base de données.
Base = declarative_base()


class JSONEncodedList(TypeDecorator):
    """
    Liste de chaînes stockée sous forme de texte JSON.

    La base ne voit qu'une colonne TEXT ('["A", "B"]') ; l'application
    manipule toujours une liste Python.
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return "[]"
        return json.dumps(list(value), ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if not value:
            return []
        try:
            parsed = json.loads(value)
        except ValueError:
            return [value]
        return parsed if isinstance(parsed, list) else [parsed]
