import json
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, field_validator


def normalize_categories(value) -> Optional[List[str]]:
    """
    Accepte une liste, une chaîne JSON ('["A","B"]') ou une chaîne séparée par
    des virgules, et renvoie une liste de chaînes non vides.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                value = json.loads(text)
            except ValueError:
                value = text.strip("[]").split(",")
        else:
            value = text.split(",")
    if not isinstance(value, (list, tuple)):
        value = [value]
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


# ==============================================================================
# Schéma de Base
# ==============================================================================
class DrugBase(BaseModel):
    """
    Produit du catalogue. Aucun champ n'est obligatoire : le jeu de données
    source est souvent incomplet.
    """
    barcode: Optional[str] = None
    atc_code: Optional[str] = None
    active_ingredient: Optional[str] = None
    product_name: Optional[str] = None
    description: Optional[str] = None


class DrugCreate(DrugBase):
    # Une chaîne est acceptée par commodité, elle est normalisée en liste
    categories: Optional[Union[List[str], str]] = None

    @field_validator("categories", mode="before")
    @classmethod
    def _normalize_categories(cls, value):
        return normalize_categories(value)

    @field_validator("barcode", mode="before")
    @classmethod
    def _strip_barcode(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None


class DrugUpdate(DrugCreate):
    pass


class Drug(DrugBase):
    id: int
    categories: List[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
