from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .disease import Disease
from .finding import Finding
from .medication import Medication
from .therapy import Therapy


# ==============================================================================
# Lignes d'ordonnance
# ==============================================================================
class PrescriptionItemBase(BaseModel):
    """
    Ligne d'ordonnance : un médicament OU une thérapie, avec sa posologie.
    """
    medication_id: Optional[int] = None
    therapy_id: Optional[int] = None
    dosage: str = Field(..., min_length=1)
    frequency: str = Field(..., min_length=1)
    duration: str = Field(..., min_length=1)
    instructions: Optional[str] = None

    @model_validator(mode="after")
    def _single_target(self):
        if (self.medication_id is None) == (self.therapy_id is None):
            raise ValueError("Une ligne doit référencer soit un médicament, soit une thérapie.")
        return self


class PrescriptionItemCreate(PrescriptionItemBase):
    pass


class PrescriptionItem(BaseModel):
    id: int
    prescription_template_id: int
    medication_id: Optional[int] = None
    therapy_id: Optional[int] = None
    dosage: str
    frequency: str
    duration: str
    instructions: Optional[str] = None
    medication_name: Optional[str] = None
    therapy_name: Optional[str] = None
    medication: Optional[Medication] = None
    therapy: Optional[Therapy] = None

    class Config:
        from_attributes = True


# ==============================================================================
# Ordonnance type
# ==============================================================================
class PrescriptionTemplateBase(BaseModel):
    name: str
    description: Optional[str] = None
    created_by: Optional[str] = None


class PrescriptionCreate(PrescriptionTemplateBase):
    """
    Création d'une ordonnance type complète : lignes, maladies et constats
    associés. Au moins une ligne (médicament ou thérapie) est requise.
    """
    items: List[PrescriptionItemCreate] = Field(..., min_length=1)
    disease_ids: Optional[List[int]] = None
    finding_ids: Optional[List[int]] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Le nom de l'ordonnance est obligatoire.")
        return value


class PrescriptionUpdate(BaseModel):
    """
    Mise à jour partielle. 'items', 'disease_ids' et 'finding_ids', s'ils sont
    fournis, remplacent intégralement les ensembles existants.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None
    is_active: Optional[bool] = None
    items: Optional[List[PrescriptionItemCreate]] = None
    disease_ids: Optional[List[int]] = None
    finding_ids: Optional[List[int]] = None

    @field_validator("items")
    @classmethod
    def _items_not_empty(cls, value):
        if value is not None and len(value) == 0:
            raise ValueError("Une ordonnance doit contenir au moins une ligne.")
        return value


class PrescriptionTemplate(PrescriptionTemplateBase):
    id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PrescriptionDetail(PrescriptionTemplate):
    """
    Vue complète : l'ordonnance, ses lignes détaillées et ses associations.
    """
    items: List[PrescriptionItem] = []
    diseases: List[Disease] = []
    findings: List[Finding] = []
