from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from .. import models, schemas
from .repository import EntityRepository

repository = EntityRepository(
    models.Medication,
    searchable_fields=("name", "generic_name", "dosage_form", "strength", "manufacturer", "category"),
    default_fields=("name", "generic_name", "category"),
    sortable_fields=("id", "name", "generic_name", "dosage_form", "strength",
                     "manufacturer", "category", "created_at", "updated_at"),
    default_sort="name",
    required_fields=("name",),
)


def get_medication_by_id(db: Session, medication_id: int) -> Optional[models.Medication]:
    """
    Récupère un médicament par son ID.
    """
    return repository.get(db, medication_id)


def search_medications(db: Session, **params) -> Dict[str, Any]:
    return repository.search(db, **params)


def get_medication_categories(db: Session) -> List[str]:
    return repository.categories(db)


def create_medication(db: Session, medication: schemas.MedicationCreate) -> models.Medication:
    """
    Crée un nouveau médicament dans la base de données.
    """
    return repository.create(db, medication.model_dump())


def update_medication(db: Session, medication_id: int, medication_update: schemas.MedicationUpdate) -> Optional[models.Medication]:
    """
    Met à jour un médicament existant.
    """
    return repository.update(db, medication_id, medication_update.model_dump(exclude_none=True))


def delete_medication(db: Session, medication_id: int) -> Optional[models.Medication]:
    """
    Supprime un médicament. Refusé par la base s'il figure dans une ordonnance.
    """
    return repository.delete(db, medication_id)


def import_medications(db: Session, items: List[Any], replace_existing: bool = False) -> Dict[str, int]:
    return repository.bulk_import(db, items, replace_existing=replace_existing)
