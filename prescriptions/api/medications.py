from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List

from .. import schemas
from ..services import import_service, medication_service
from ..dependencies import ListParams, get_db

router = APIRouter(
    prefix="/medications",
    tags=["Medications"]
)


@router.get("", response_model=schemas.SearchResponse[schemas.Medication])
def read_medications(params: ListParams = Depends(), db: Session = Depends(get_db)):
    """
    Récupère une liste paginée de médicaments.
    """
    return medication_service.search_medications(db, **params.as_kwargs())


@router.get("/categories", response_model=List[str])
def read_medication_categories(db: Session = Depends(get_db)):
    return medication_service.get_medication_categories(db)


@router.post("", response_model=schemas.Medication, status_code=status.HTTP_201_CREATED)
def create_medication(medication_data: schemas.MedicationCreate, db: Session = Depends(get_db)):
    return medication_service.create_medication(db=db, medication=medication_data)


@router.post("/import", response_model=schemas.ImportResult, status_code=status.HTTP_201_CREATED)
async def import_medications(request: Request, db: Session = Depends(get_db)):
    items, replace_existing = import_service.parse_import_payload(await request.body(), "medications")
    return medication_service.import_medications(db, items, replace_existing=replace_existing)


@router.get("/{medication_id}", response_model=schemas.Medication)
def read_medication(medication_id: int, db: Session = Depends(get_db)):
    """
    Récupère un médicament par son ID.
    """
    db_medication = medication_service.get_medication_by_id(db, medication_id=medication_id)
    if db_medication is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medication not found")
    return db_medication


@router.put("/{medication_id}", response_model=schemas.Medication)
def update_medication(medication_id: int, medication_data: schemas.MedicationUpdate, db: Session = Depends(get_db)):
    db_medication = medication_service.update_medication(db, medication_id=medication_id, medication_update=medication_data)
    if db_medication is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medication not found")
    return db_medication


@router.delete("/{medication_id}", response_model=schemas.DeleteResponse)
def delete_medication(medication_id: int, db: Session = Depends(get_db)):
    if medication_service.delete_medication(db, medication_id=medication_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medication not found")
    return {"success": True}
