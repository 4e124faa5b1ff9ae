from typing import List, Optional

from pydantic import BaseModel, Field

from .search import AISuggestionGroup


class AISearchResponse(BaseModel):
    suggestions: List[AISuggestionGroup] = []
    enhanced_query: Optional[str] = None


class DosageCalculationRequest(BaseModel):
    medication_id: int
    patient_weight: Optional[float] = Field(None, gt=0)
    patient_age: Optional[int] = Field(None, ge=0)
    condition: Optional[str] = None


class DosageCalculationResponse(BaseModel):
    recommended_dosage: str
    frequency: str
    duration: Optional[str] = None
    warnings: List[str] = []
    contraindications: List[str] = []


class PatientInfo(BaseModel):
    age: Optional[int] = None
    weight: Optional[float] = None


class SymptomsRequest(BaseModel):
    symptoms: List[str] = []
    patient_info: Optional[PatientInfo] = None


class PrescriptionValidation(BaseModel):
    is_valid: bool
    warnings: List[str] = []
    recommendations: List[str] = []
