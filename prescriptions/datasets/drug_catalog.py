"""
Lecture et normalisation des catalogues de produits pharmaceutiques
(exports CSV, Excel ou JSON) avant leur envoi à /api/drugs/import.
"""

import logging
import math
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

CATEGORY_COLUMN = re.compile(r"^Category_\d+$", re.IGNORECASE)

# Clés acceptées pour chaque champ, par ordre de priorité
FIELD_ALIASES = {
    "barcode": ("barcode", "Barcode", "BARCODE"),
    "atc_code": ("ATC_code", "atc_code", "ATC"),
    "active_ingredient": ("Active_Ingredient", "active_ingredient"),
    "product_name": ("Product_Name", "product_name"),
    "description": ("Description", "description"),
}


@dataclass
class DrugImportOptions:
    include_barcode: bool = True
    include_atc: bool = True
    include_active_ingredient: bool = True
    include_product_name: bool = True
    include_categories: bool = True
    include_description: bool = True
    replace_existing: bool = False

    def includes(self, field: str) -> bool:
        return {
            "barcode": self.include_barcode,
            "atc_code": self.include_atc,
            "active_ingredient": self.include_active_ingredient,
            "product_name": self.include_product_name,
            "description": self.include_description,
        }[field]


def _clean_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        # Un code-barres lu comme nombre ne doit pas garder de '.0'
        if value.is_integer():
            value = int(value)
    text = str(value).strip()
    return text or None


def _first_value(row: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = _clean_value(row.get(key))
        if value is not None:
            return value
    return None


def normalize_drug_row(row: Dict[str, Any], options: Optional[DrugImportOptions] = None) -> Dict[str, Any]:
    """
    Transforme une ligne brute du catalogue en élément d'import.

    Les colonnes 'Category_1', 'Category_2', ... sont regroupées, dans leur
    ordre d'apparition, dans la liste 'categories'. Un champ désactivé dans
    les options ou vide vaut None.
    """
    options = options or DrugImportOptions()
    normalized: Dict[str, Any] = {}

    for field, aliases in FIELD_ALIASES.items():
        normalized[field] = _first_value(row, aliases) if options.includes(field) else None

    categories = []
    for key, value in (row or {}).items():
        if CATEGORY_COLUMN.match(str(key)):
            cleaned = _clean_value(value)
            if cleaned:
                categories.append(cleaned)
    normalized["categories"] = categories if options.include_categories and categories else None

    return normalized


def read_drug_file(path: str, options: Optional[DrugImportOptions] = None) -> List[Dict[str, Any]]:
    """
    Lit un catalogue CSV, XLSX ou JSON avec pandas et renvoie les lignes normalisées.

    :raises ValueError: si l'extension n'est pas prise en charge.
    """
    extension = os.path.splitext(path)[1].lower()
    if extension == ".csv":
        df = pd.read_csv(path, dtype=str)
    elif extension in (".xlsx", ".xls"):
        df = pd.read_excel(path, dtype=str)
    elif extension == ".json":
        df = pd.read_json(path, dtype=False)
    else:
        raise ValueError(f"Format de fichier non pris en charge : {extension}")

    df = df.astype(object).where(pd.notna(df), None)
    records = [normalize_drug_row(row, options) for row in df.to_dict(orient="records")]
    logger.info(f"{len(records)} produits lus depuis {path}")
    return records
