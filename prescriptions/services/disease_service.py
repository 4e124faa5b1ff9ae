from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from .. import models, schemas
from .repository import EntityRepository

repository = EntityRepository(
    models.Disease,
    searchable_fields=("code", "name", "description", "category"),
    default_fields=("name", "code", "description"),
    sortable_fields=("id", "code", "name", "category", "created_at", "updated_at"),
    default_sort="code",
    natural_key="code",
    required_fields=("code", "name"),
)


def get_disease_by_id(db: Session, disease_id: int) -> Optional[models.Disease]:
    """
    Récupère une maladie par son ID.
    """
    return repository.get(db, disease_id)


def get_disease_by_code(db: Session, code: str) -> Optional[models.Disease]:
    """
    Récupère une maladie par son code CIM-10.
    """
    return repository.get_by_natural_key(db, code)


def search_diseases(db: Session, **params) -> Dict[str, Any]:
    """
    Recherche paginée (voir EntityRepository.search).
    """
    return repository.search(db, **params)


def get_disease_categories(db: Session) -> List[str]:
    return repository.categories(db)


def create_disease(db: Session, disease: schemas.DiseaseCreate) -> models.Disease:
    """
    Crée une nouvelle maladie dans la base de données.
    """
    data = disease.model_dump()
    if not data.get("category"):
        data["category"] = "General"
    return repository.create(db, data)


def update_disease(db: Session, disease_id: int, disease_update: schemas.DiseaseUpdate) -> Optional[models.Disease]:
    """
    Met à jour une maladie existante (seuls les champs non nuls sont appliqués).
    """
    return repository.update(db, disease_id, disease_update.model_dump(exclude_none=True))


def delete_disease(db: Session, disease_id: int) -> Optional[models.Disease]:
    """
    Supprime une maladie et ses associations aux ordonnances types.
    """
    return repository.delete(db, disease_id)


def import_diseases(db: Session, items: List[Any], replace_existing: bool = False) -> Dict[str, int]:
    """
    Importe un lot de maladies, dédoublonnées par code.
    """
    return repository.bulk_import(db, items, replace_existing=replace_existing)


def get_prescriptions_for_disease(db: Session, disease_id: int) -> List[models.PrescriptionTemplate]:
    """
    Ordonnances types actives liées à une maladie, par confiance décroissante.
    """
    return (
        db.query(models.PrescriptionTemplate)
        .join(models.DiseasePrescription,
              models.DiseasePrescription.prescription_template_id == models.PrescriptionTemplate.id)
        .filter(models.DiseasePrescription.disease_id == disease_id)
        .filter(models.PrescriptionTemplate.is_active.is_(True))
        .order_by(models.DiseasePrescription.confidence_score.desc(), models.PrescriptionTemplate.name)
        .all()
    )
