from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func

from .base import Base


class SearchLog(Base):
    """
    Trace de chaque recherche transverse (/api/search).
    """
    __tablename__ = "search_logs"

    id = Column(Integer, primary_key=True)
    query = Column(Text, nullable=False, index=True)
    search_type = Column(String(50), nullable=False, index=True)
    results_count = Column(Integer, nullable=False, default=0)
    user_id = Column(String(255))
    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), index=True)


class AppConfig(Base):
    """
    Paramètres d'exécution modifiables depuis l'interface (clé/valeur texte).
    """
    __tablename__ = "app_config"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    description = Column(Text)
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<AppConfig(key='{self.key}', value='{self.value}')>"
