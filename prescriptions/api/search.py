from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..core.ai import AIService
from ..services import search_service
from ..dependencies import get_ai_service, get_db

router = APIRouter(
    prefix="/search",
    tags=["Search"]
)


@router.post("", response_model=schemas.search.SearchResult)
def search(request: schemas.search.SearchRequest, db: Session = Depends(get_db),
           ai_service: AIService = Depends(get_ai_service)):
    """
    Recherche transverse sur une entité ou sur toutes ('all').
    """
    return search_service.search(db, request, ai_service=ai_service)
