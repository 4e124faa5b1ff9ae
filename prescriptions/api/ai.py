from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import schemas
from ..core.ai import AIService
from ..services import prescription_service
from ..dependencies import get_ai_service, get_db

router = APIRouter(
    prefix="/ai",
    tags=["AI"]
)


@router.post("/dosage", response_model=schemas.ai.DosageCalculationResponse)
def calculate_dosage(request: schemas.ai.DosageCalculationRequest,
                     ai_service: AIService = Depends(get_ai_service)):
    result = ai_service.calculate_dosage(request.model_dump())
    if result is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="AI features are disabled")
    return result


@router.post("/suggest-prescriptions")
def suggest_prescriptions(request: schemas.ai.SymptomsRequest,
                          ai_service: AIService = Depends(get_ai_service)):
    patient_info = request.patient_info.model_dump() if request.patient_info else None
    return {"results": ai_service.suggest_prescriptions(request.symptoms, patient_info)}


@router.post("/suggest-diseases")
def suggest_diseases(request: schemas.ai.SymptomsRequest,
                     ai_service: AIService = Depends(get_ai_service)):
    return {"results": ai_service.suggest_diseases(request.symptoms)}


@router.post("/validate/{prescription_id}", response_model=schemas.ai.PrescriptionValidation)
def validate_prescription(prescription_id: int, db: Session = Depends(get_db),
                          ai_service: AIService = Depends(get_ai_service)):
    """
    Vérification (factice) d'une ordonnance type existante.
    """
    db_prescription = prescription_service.get_prescription_by_id(db, prescription_id, include_inactive=True)
    if db_prescription is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prescription not found")
    payload = schemas.PrescriptionDetail.model_validate(db_prescription).model_dump(mode="json")
    return ai_service.validate_prescription(payload)
