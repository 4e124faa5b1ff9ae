from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from .. import models, schemas
from .repository import EntityRepository

repository = EntityRepository(
    models.Therapy,
    searchable_fields=("name", "description", "category", "active_ingredient",
                       "dosage_form", "strength", "manufacturer"),
    default_fields=("name", "description", "active_ingredient", "category"),
    sortable_fields=("id", "name", "category", "active_ingredient", "dosage_form",
                     "created_at", "updated_at"),
    default_sort="name",
    required_fields=("name",),
)


def get_therapy_by_id(db: Session, therapy_id: int) -> Optional[models.Therapy]:
    return repository.get(db, therapy_id)


def search_therapies(db: Session, **params) -> Dict[str, Any]:
    return repository.search(db, **params)


def get_therapy_categories(db: Session) -> List[str]:
    return repository.categories(db)


def create_therapy(db: Session, therapy: schemas.TherapyCreate) -> models.Therapy:
    data = therapy.model_dump()
    if not data.get("category"):
        data["category"] = "General"
    return repository.create(db, data)


def update_therapy(db: Session, therapy_id: int, therapy_update: schemas.TherapyUpdate) -> Optional[models.Therapy]:
    return repository.update(db, therapy_id, therapy_update.model_dump(exclude_none=True))


def delete_therapy(db: Session, therapy_id: int) -> Optional[models.Therapy]:
    return repository.delete(db, therapy_id)


def import_therapies(db: Session, items: List[Any], replace_existing: bool = False) -> Dict[str, int]:
    return repository.bulk_import(db, items, replace_existing=replace_existing)
