import logging
import traceback
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from .repository import EntityRepository

logger = logging.getLogger(__name__)

repository = EntityRepository(
    models.PrescriptionTemplate,
    searchable_fields=("name", "description", "created_by"),
    default_fields=("name", "description"),
    sortable_fields=("id", "name", "created_by", "created_at", "updated_at"),
    default_sort="name",
    category_column=None,
    # Les ordonnances supprimées (logiquement) n'apparaissent jamais en recherche
    base_filters=lambda: [models.PrescriptionTemplate.is_active.is_(True)],
)


def _detail_query(db: Session):
    return db.query(models.PrescriptionTemplate).options(
        selectinload(models.PrescriptionTemplate.items).selectinload(models.PrescriptionItem.medication),
        selectinload(models.PrescriptionTemplate.items).selectinload(models.PrescriptionItem.therapy),
        selectinload(models.PrescriptionTemplate.disease_links).selectinload(models.DiseasePrescription.disease),
        selectinload(models.PrescriptionTemplate.finding_links).selectinload(models.FindingPrescription.finding),
    )


def search_prescriptions(db: Session, **params) -> Dict[str, Any]:
    """
    Recherche paginée parmi les ordonnances types actives.
    """
    params.pop("category", None)
    return repository.search(db, **params)


def get_prescription_by_id(db: Session, prescription_id: int,
                           include_inactive: bool = False) -> Optional[models.PrescriptionTemplate]:
    """
    Récupère une ordonnance type avec ses lignes, maladies et constats.
    Une ordonnance désactivée n'est renvoyée que si 'include_inactive' est vrai.
    """
    query = _detail_query(db).filter(models.PrescriptionTemplate.id == prescription_id)
    if not include_inactive:
        query = query.filter(models.PrescriptionTemplate.is_active.is_(True))
    return query.first()


# ==============================================================================
# Vérification des références
# ==============================================================================
def _check_ids_exist(db: Session, model, ids: Iterable[int], label: str) -> None:
    wanted = set(ids)
    if not wanted:
        return
    found = {row[0] for row in db.query(model.id).filter(model.id.in_(wanted)).all()}
    missing = sorted(wanted - found)
    if missing:
        raise ValueError(f"{label} introuvable(s) : {', '.join(str(i) for i in missing)}")


def _check_references(db: Session, items: Optional[List[schemas.PrescriptionItemCreate]],
                      disease_ids: Optional[List[int]], finding_ids: Optional[List[int]]) -> None:
    items = items or []
    _check_ids_exist(db, models.Medication,
                     [i.medication_id for i in items if i.medication_id is not None], "Médicament(s)")
    _check_ids_exist(db, models.Therapy,
                     [i.therapy_id for i in items if i.therapy_id is not None], "Thérapie(s)")
    _check_ids_exist(db, models.Disease, disease_ids or [], "Maladie(s)")
    _check_ids_exist(db, models.Finding, finding_ids or [], "Constat(s)")


# ==============================================================================
# Assemblage
# ==============================================================================
def _build_items(items: List[schemas.PrescriptionItemCreate]) -> List[models.PrescriptionItem]:
    return [models.PrescriptionItem(**item.model_dump()) for item in items]


def _build_disease_links(disease_ids: Iterable[int]) -> List[models.DiseasePrescription]:
    # dict.fromkeys : dédoublonne en gardant l'ordre (équivalent d'un INSERT OR IGNORE)
    return [models.DiseasePrescription(disease_id=i, confidence_score=1.0) for i in dict.fromkeys(disease_ids)]


def _build_finding_links(finding_ids: Iterable[int]) -> List[models.FindingPrescription]:
    return [models.FindingPrescription(finding_id=i, confidence_score=1.0) for i in dict.fromkeys(finding_ids)]


def create_prescription(db: Session, prescription: schemas.PrescriptionCreate,
                        created_by: str = "user") -> models.PrescriptionTemplate:
    """
    Crée une ordonnance type, ses lignes et ses associations dans une seule
    transaction : en cas d'échec, rien n'est écrit.

    :raises ValueError: si un médicament, une thérapie, une maladie ou un
        constat référencé n'existe pas.
    """
    _check_references(db, prescription.items, prescription.disease_ids, prescription.finding_ids)

    db_prescription = models.PrescriptionTemplate(
        name=prescription.name,
        description=prescription.description,
        created_by=prescription.created_by or created_by,
        is_active=True,
    )
    db_prescription.items = _build_items(prescription.items)
    db_prescription.disease_links = _build_disease_links(prescription.disease_ids or [])
    db_prescription.finding_links = _build_finding_links(prescription.finding_ids or [])

    try:
        db.add(db_prescription)
        db.commit()
    except Exception as e:
        logger.error(f"❌ Création de l'ordonnance '{prescription.name}' annulée : {e}")
        logger.error(traceback.format_exc())
        db.rollback()
        raise

    logger.info(
        f"✅ Ordonnance {db_prescription.id} créée "
        f"({len(prescription.items)} lignes, {len(db_prescription.disease_links)} maladies, "
        f"{len(db_prescription.finding_links)} constats)"
    )
    return get_prescription_by_id(db, db_prescription.id, include_inactive=True)


def update_prescription(db: Session, prescription_id: int,
                        prescription_update: schemas.PrescriptionUpdate) -> Optional[models.PrescriptionTemplate]:
    """
    Met à jour une ordonnance type. Les lignes et associations fournies
    remplacent les existantes, dans la même transaction.
    """
    db_prescription = get_prescription_by_id(db, prescription_id, include_inactive=True)
    if not db_prescription:
        return None

    _check_references(db, prescription_update.items,
                      prescription_update.disease_ids, prescription_update.finding_ids)

    fields = prescription_update.model_dump(
        exclude_none=True, include={"name", "description", "created_by", "is_active"}
    )
    try:
        for key, value in fields.items():
            setattr(db_prescription, key, value)

        if prescription_update.items is not None:
            db_prescription.items = _build_items(prescription_update.items)
        if prescription_update.disease_ids is not None:
            db_prescription.disease_links = []
            db.flush()
            db_prescription.disease_links = _build_disease_links(prescription_update.disease_ids)
        if prescription_update.finding_ids is not None:
            db_prescription.finding_links = []
            db.flush()
            db_prescription.finding_links = _build_finding_links(prescription_update.finding_ids)

        db.commit()
    except Exception as e:
        logger.error(f"❌ Mise à jour de l'ordonnance {prescription_id} annulée : {e}")
        db.rollback()
        raise

    db.expire_all()
    return get_prescription_by_id(db, prescription_id, include_inactive=True)


def delete_prescription(db: Session, prescription_id: int) -> Optional[models.PrescriptionTemplate]:
    """
    Suppression logique : l'ordonnance est désactivée mais conservée.
    """
    db_prescription = db.query(models.PrescriptionTemplate).filter(
        models.PrescriptionTemplate.id == prescription_id
    ).first()
    if not db_prescription:
        return None

    db_prescription.is_active = False
    db.commit()
    db.refresh(db_prescription)
    logger.info(f"Ordonnance {prescription_id} désactivée")
    return db_prescription
