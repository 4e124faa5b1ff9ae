from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SearchResponse(BaseModel, Generic[T]):
    """
    Enveloppe commune des listes paginées.
    """
    results: List[T]
    total: int
    has_more: bool


class ImportResult(BaseModel):
    """
    Bilan d'un lot d'import. 'imported' = insérés + mis à jour.
    """
    imported: int = 0
    inserted: int = 0
    updated: int = 0
    errors: int = 0


class DeleteResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
    details: Any = None
