from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import schemas
from ..services import prescription_service
from ..dependencies import ListParams, get_db

router = APIRouter(
    prefix="/prescriptions",
    tags=["Prescriptions"]
)


@router.get("", response_model=schemas.SearchResponse[schemas.PrescriptionTemplate])
def read_prescriptions(params: ListParams = Depends(), db: Session = Depends(get_db)):
    """
    Recherche paginée parmi les ordonnances types actives.
    """
    return prescription_service.search_prescriptions(db, **params.as_kwargs())


@router.get("/{prescription_id}", response_model=schemas.PrescriptionDetail)
def read_prescription(prescription_id: int, include_inactive: bool = False, db: Session = Depends(get_db)):
    """
    Récupère une ordonnance type complète. Une ordonnance désactivée répond
    404, sauf avec include_inactive=true.
    """
    db_prescription = prescription_service.get_prescription_by_id(
        db, prescription_id=prescription_id, include_inactive=include_inactive
    )
    if db_prescription is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prescription not found")
    return db_prescription


@router.post("", response_model=schemas.PrescriptionDetail, status_code=status.HTTP_201_CREATED)
def create_prescription(prescription_data: schemas.PrescriptionCreate, db: Session = Depends(get_db)):
    """
    Crée une ordonnance type avec ses lignes et ses associations.
    """
    try:
        return prescription_service.create_prescription(db=db, prescription=prescription_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{prescription_id}", response_model=schemas.PrescriptionDetail)
def update_prescription(prescription_id: int, prescription_data: schemas.PrescriptionUpdate,
                        db: Session = Depends(get_db)):
    try:
        db_prescription = prescription_service.update_prescription(
            db, prescription_id=prescription_id, prescription_update=prescription_data
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if db_prescription is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prescription not found")
    return db_prescription


@router.delete("/{prescription_id}", response_model=schemas.DeleteResponse)
def delete_prescription(prescription_id: int, db: Session = Depends(get_db)):
    """
    Suppression logique (is_active = false).
    """
    if prescription_service.delete_prescription(db, prescription_id=prescription_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prescription not found")
    return {"success": True}
