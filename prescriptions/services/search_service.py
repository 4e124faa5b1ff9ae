import logging
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from .. import models, schemas
from ..core.ai import AIService
from . import (
    config_service,
    disease_service,
    drug_service,
    finding_service,
    medication_service,
    prescription_service,
    therapy_service,
)

logger = logging.getLogger(__name__)

# Nombre de résultats par entité pour une recherche de type 'all'
ALL_TYPES_LIMIT = 5

# type -> (clé du regroupement 'all', fonction de recherche, schéma de sortie)
SEARCHERS = {
    "disease": ("diseases", disease_service.search_diseases, schemas.Disease),
    "medication": ("medications", medication_service.search_medications, schemas.Medication),
    "prescription": ("prescriptions", prescription_service.search_prescriptions, schemas.PrescriptionTemplate),
    "drug": ("drugs", drug_service.search_drugs, schemas.Drug),
    "therapy": ("therapies", therapy_service.search_therapies, schemas.Therapy),
    "finding": ("findings", finding_service.search_findings, schemas.Finding),
}


def _serialize(rows, schema) -> List[Dict[str, Any]]:
    return [schema.model_validate(row).model_dump(mode="json") for row in rows]


def _search_one(db: Session, search_type: str, query: str, limit: int, offset: int) -> Dict[str, Any]:
    _, searcher, schema = SEARCHERS[search_type]
    page = searcher(db, query=query, limit=limit, offset=offset)
    page["results"] = _serialize(page["results"], schema)
    return page


def _search_all(db: Session, query: str) -> Dict[str, Any]:
    grouped, total, has_more = {}, 0, False
    for search_type, (group_key, _, _) in SEARCHERS.items():
        page = _search_one(db, search_type, query, ALL_TYPES_LIMIT, 0)
        grouped[group_key] = page["results"]
        total += page["total"]
        has_more = has_more or page["has_more"]
    return {"results": grouped, "total": total, "has_more": has_more}


def _ai_suggestions(db: Session, query: str, ai_service: Optional[AIService]) -> List[Dict[str, Any]]:
    """
    Suggestions IA si le drapeau stocké et le service l'autorisent.
    Un échec est journalisé et n'interrompt pas la recherche.
    """
    try:
        if config_service.get_config(db, "ai_enabled") != "true":
            return []
        if ai_service is None or not ai_service.is_enabled():
            return []
        response = ai_service.search_enhancement(
            query, {"diseases": [], "medications": [], "prescriptions": []}
        )
        return response["suggestions"] if response else []
    except Exception as e:
        logger.error(f"Échec de l'enrichissement IA : {e}")
        return []


def log_search(db: Session, query: str, search_type: str, results_count: int,
               user_id: Optional[str] = None) -> None:
    db.add(models.SearchLog(
        query=query,
        search_type=search_type,
        results_count=results_count,
        user_id=user_id,
    ))
    db.commit()


def search(db: Session, request: schemas.search.SearchRequest,
           ai_service: Optional[AIService] = None) -> Dict[str, Any]:
    """
    Recherche transverse. Pour un type donné, délègue à la recherche de
    l'entité ; pour 'all', regroupe les premiers résultats de chaque entité.
    """
    query = request.query.strip()
    if request.type == "all":
        result = _search_all(db, query)
        results_count = sum(len(v) for v in result["results"].values())
    else:
        result = _search_one(db, request.type, query, request.limit, request.offset)
        results_count = len(result["results"])

    result["ai_suggestions"] = _ai_suggestions(db, query, ai_service) if request.ai_enabled else []

    log_search(db, query, request.type, results_count)
    logger.info(f"🔎 Recherche '{query}' ({request.type}) : {results_count} résultats")
    return result
