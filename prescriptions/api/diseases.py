from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List

from .. import schemas
from ..services import disease_service, import_service
from ..dependencies import ListParams, get_db

router = APIRouter(
    prefix="/diseases",
    tags=["Diseases"]
)


@router.get("", response_model=schemas.SearchResponse[schemas.Disease])
def read_diseases(params: ListParams = Depends(), db: Session = Depends(get_db)):
    """
    Recherche paginée des maladies (q, fields, category, sortBy, sortOrder).
    """
    return disease_service.search_diseases(db, **params.as_kwargs())


@router.get("/categories", response_model=List[str])
def read_disease_categories(db: Session = Depends(get_db)):
    return disease_service.get_disease_categories(db)


@router.post("", response_model=schemas.Disease, status_code=status.HTTP_201_CREATED)
def create_disease(disease_data: schemas.DiseaseCreate, db: Session = Depends(get_db)):
    """
    Crée une nouvelle maladie.
    Vérifie l'unicité du code CIM-10.
    """
    if disease_service.get_disease_by_code(db, code=disease_data.code):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Disease with code '{disease_data.code}' already exists"
        )
    return disease_service.create_disease(db=db, disease=disease_data)


@router.post("/import", response_model=schemas.ImportResult, status_code=status.HTTP_201_CREATED)
async def import_diseases(request: Request, db: Session = Depends(get_db)):
    """
    Import d'un lot de maladies : {"diseases"|"items": [...], "replace_existing": bool}.
    """
    items, replace_existing = import_service.parse_import_payload(await request.body(), "diseases")
    return disease_service.import_diseases(db, items, replace_existing=replace_existing)


@router.get("/{disease_id}", response_model=schemas.Disease)
def read_disease(disease_id: int, db: Session = Depends(get_db)):
    db_disease = disease_service.get_disease_by_id(db, disease_id=disease_id)
    if db_disease is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Disease not found")
    return db_disease


@router.put("/{disease_id}", response_model=schemas.Disease)
def update_disease(disease_id: int, disease_data: schemas.DiseaseUpdate, db: Session = Depends(get_db)):
    """
    Met à jour une maladie (seuls les champs non nuls sont appliqués).
    """
    db_disease = disease_service.update_disease(db, disease_id=disease_id, disease_update=disease_data)
    if db_disease is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Disease not found")
    return db_disease


@router.delete("/{disease_id}", response_model=schemas.DeleteResponse)
def delete_disease(disease_id: int, db: Session = Depends(get_db)):
    if disease_service.delete_disease(db, disease_id=disease_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Disease not found")
    return {"success": True}


@router.get(
    "/{disease_id}/prescriptions",
    response_model=schemas.SearchResponse[schemas.PrescriptionTemplate],
    tags=["Disease-Prescription Relations"]
)
def get_prescriptions_for_disease(disease_id: int, db: Session = Depends(get_db)):
    """
    Ordonnances types actives associées à une maladie.
    """
    prescriptions = disease_service.get_prescriptions_for_disease(db, disease_id=disease_id)
    return {"results": prescriptions, "total": len(prescriptions), "has_more": False}
