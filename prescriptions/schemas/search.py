from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

SearchType = Literal["disease", "medication", "drug", "therapy", "finding", "prescription", "all"]


class SearchRequest(BaseModel):
    query: str = ""
    type: SearchType = "all"
    limit: int = Field(20, ge=1, le=1000)
    offset: int = Field(0, ge=0)
    ai_enabled: bool = False


class AISuggestionGroup(BaseModel):
    type: str
    items: List[Any] = []
    confidence: float
    reasoning: Optional[str] = None


class SearchResult(BaseModel):
    """
    Pour un type donné, 'results' est une liste ; pour 'all', c'est un
    dictionnaire de listes par entité.
    """
    results: Any
    total: int
    has_more: bool
    ai_suggestions: List[AISuggestionGroup] = []
