import logging
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional, Tuple

from .. import models, schemas
from ..schemas.drug import normalize_categories
from .repository import EntityRepository

logger = logging.getLogger(__name__)


def _normalize_drug(item: Dict[str, Any]) -> Dict[str, Any]:
    """
    Prépare un élément importé : code-barres en texte, catégories en liste.
    """
    barcode = item.get("barcode")
    if barcode is not None:
        barcode = str(barcode).strip()
        item["barcode"] = barcode or None
    if "categories" in item:
        item["categories"] = normalize_categories(item["categories"])
    return item


repository = EntityRepository(
    models.Drug,
    searchable_fields=("barcode", "atc_code", "active_ingredient", "product_name",
                       "description", "categories"),
    default_fields=("product_name", "active_ingredient", "atc_code"),
    sortable_fields=("id", "barcode", "atc_code", "active_ingredient", "product_name",
                     "created_at", "updated_at"),
    default_sort="product_name",
    category_column="categories",
    natural_key="barcode",
    normalizer=_normalize_drug,
)


def get_drug_by_id(db: Session, drug_id: int) -> Optional[models.Drug]:
    return repository.get(db, drug_id)


def get_drug_by_barcode(db: Session, barcode: str) -> Optional[models.Drug]:
    return repository.get_by_natural_key(db, barcode)


def search_drugs(db: Session, **params) -> Dict[str, Any]:
    return repository.search(db, **params)


def get_drug_categories(db: Session) -> List[str]:
    return repository.categories(db)


def create_drug(db: Session, drug: schemas.DrugCreate) -> Tuple[models.Drug, bool]:
    """
    Crée un produit, ou met à jour en place celui qui porte déjà le même
    code-barres (les champs non fournis restent inchangés).

    :return: (produit, True si créé)
    """
    db_drug, created = repository.upsert(db, drug.model_dump())
    if not created:
        logger.info(f"Code-barres {db_drug.barcode} déjà connu : produit {db_drug.id} mis à jour")
    return db_drug, created


def update_drug(db: Session, drug_id: int, drug_update: schemas.DrugUpdate) -> Optional[models.Drug]:
    return repository.update(db, drug_id, drug_update.model_dump(exclude_none=True))


def delete_drug(db: Session, drug_id: int) -> Optional[models.Drug]:
    return repository.delete(db, drug_id)


def import_drugs(db: Session, items: List[Any], replace_existing: bool = False) -> Dict[str, int]:
    """
    Importe un lot de produits, dédoublonnés par code-barres.
    """
    return repository.bulk_import(db, items, replace_existing=replace_existing)
