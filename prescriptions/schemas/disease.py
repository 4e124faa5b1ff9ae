from pydantic import BaseModel
from typing import Optional
from datetime import datetime

# ==============================================================================
# Schéma de Base
# ==============================================================================
class DiseaseBase(BaseModel):
    """
    Schéma de base pour une maladie, contenant les champs modifiables.
    """
    code: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None


# ==============================================================================
# Schéma pour la Création (ce que l'API attend dans un POST)
# ==============================================================================
class DiseaseCreate(DiseaseBase):
    pass


# ==============================================================================
# Schéma pour la Mise à Jour (ce que l'API attend dans un PUT)
# ==============================================================================
class DiseaseUpdate(BaseModel):
    """
    Mise à jour partielle : seuls les champs non nuls écrasent la valeur stockée.
    """
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


# ==============================================================================
# Schéma pour la Lecture (ce que l'API renvoie)
# ==============================================================================
class Disease(DiseaseBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
