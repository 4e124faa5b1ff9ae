from typing import List, Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from .config import settings
from .core.ai import AIService, create_ai_service
from .database import SessionLocal


def get_db():
    """
    Fournit une session de base de données par requête et la ferme ensuite.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_ai_service(db: Session = Depends(get_db)) -> AIService:
    """
    Construit le service IA en fonction du drapeau 'ai_enabled' stocké en base.
    """
    from .services import config_service

    enabled = config_service.get_config(db, "ai_enabled") == "true"
    return create_ai_service(settings, enabled=enabled)


class ListParams:
    """
    Paramètres communs des listes : recherche, filtre, tri et pagination.
    """

    def __init__(
        self,
        q: str = "",
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        offset: int = Query(0, ge=0),
        fields: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        sort_order: Optional[str] = Query(None, alias="sortOrder"),
    ):
        self.q = q.strip()
        self.limit = limit
        self.offset = offset
        self.fields: Optional[List[str]] = (
            [f.strip() for f in fields.split(",") if f.strip()] if fields else None
        )
        self.category = category.strip() if category and category.strip() else None
        self.sort_by = sort_by
        self.sort_order = sort_order

    def as_kwargs(self) -> dict:
        return {
            "query": self.q,
            "fields": self.fields,
            "category": self.category,
            "limit": self.limit,
            "offset": self.offset,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order,
        }
