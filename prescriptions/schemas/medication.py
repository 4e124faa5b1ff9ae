from pydantic import BaseModel
from typing import Optional
from datetime import datetime

# ==============================================================================
# Schéma de Base
# ==============================================================================
class MedicationBase(BaseModel):
    """
    Schéma de base pour un médicament, contenant les champs modifiables.
    """
    name: str
    generic_name: Optional[str] = None
    dosage_form: Optional[str] = None
    strength: Optional[str] = None
    manufacturer: Optional[str] = None
    category: Optional[str] = None


class MedicationCreate(MedicationBase):
    """
    Schéma utilisé pour créer un nouveau médicament.
    'name' est le seul champ strictement requis.
    """
    pass


class MedicationUpdate(BaseModel):
    """
    Schéma pour la mise à jour partielle d'un médicament.
    """
    name: Optional[str] = None
    generic_name: Optional[str] = None
    dosage_form: Optional[str] = None
    strength: Optional[str] = None
    manufacturer: Optional[str] = None
    category: Optional[str] = None


class Medication(MedicationBase):
    """
    Schéma complet pour représenter un médicament en réponse d'API.
    """
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
