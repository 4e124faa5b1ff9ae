from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from .. import models, schemas
from .repository import EntityRepository


def _normalize_finding(item: Dict[str, Any]) -> Dict[str, Any]:
    # Un code vide ne doit pas entrer en conflit avec la contrainte d'unicité
    if isinstance(item.get("code"), str) and not item["code"].strip():
        item["code"] = None
    return item


repository = EntityRepository(
    models.Finding,
    searchable_fields=("code", "name", "description", "category"),
    default_fields=("name", "code", "description"),
    sortable_fields=("id", "code", "name", "category", "created_at", "updated_at"),
    default_sort="name",
    natural_key="code",
    required_fields=("name",),
    normalizer=_normalize_finding,
)


def get_finding_by_id(db: Session, finding_id: int) -> Optional[models.Finding]:
    return repository.get(db, finding_id)


def get_finding_by_code(db: Session, code: str) -> Optional[models.Finding]:
    return repository.get_by_natural_key(db, code)


def search_findings(db: Session, **params) -> Dict[str, Any]:
    return repository.search(db, **params)


def get_finding_categories(db: Session) -> List[str]:
    return repository.categories(db)


def create_finding(db: Session, finding: schemas.FindingCreate) -> models.Finding:
    """
    Crée un nouveau constat clinique.
    """
    data = _normalize_finding(finding.model_dump())
    if not data.get("category"):
        data["category"] = "General"
    return repository.create(db, data)


def update_finding(db: Session, finding_id: int, finding_update: schemas.FindingUpdate) -> Optional[models.Finding]:
    return repository.update(db, finding_id, finding_update.model_dump(exclude_none=True))


def delete_finding(db: Session, finding_id: int) -> Optional[models.Finding]:
    return repository.delete(db, finding_id)


def import_findings(db: Session, items: List[Any], replace_existing: bool = False) -> Dict[str, int]:
    return repository.bulk_import(db, items, replace_existing=replace_existing)


def get_prescriptions_for_finding(db: Session, finding_id: int) -> List[models.PrescriptionTemplate]:
    """
    Ordonnances types actives liées à un constat, par confiance décroissante.
    """
    return (
        db.query(models.PrescriptionTemplate)
        .join(models.FindingPrescription,
              models.FindingPrescription.prescription_template_id == models.PrescriptionTemplate.id)
        .filter(models.FindingPrescription.finding_id == finding_id)
        .filter(models.PrescriptionTemplate.is_active.is_(True))
        .order_by(models.FindingPrescription.confidence_score.desc(), models.PrescriptionTemplate.name)
        .all()
    )
