from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List

from .. import schemas
from ..services import import_service, therapy_service
from ..dependencies import ListParams, get_db

router = APIRouter(
    prefix="/therapies",
    tags=["Therapies"]
)


@router.get("", response_model=schemas.SearchResponse[schemas.Therapy])
def read_therapies(params: ListParams = Depends(), db: Session = Depends(get_db)):
    return therapy_service.search_therapies(db, **params.as_kwargs())


@router.get("/categories", response_model=List[str])
def read_therapy_categories(db: Session = Depends(get_db)):
    return therapy_service.get_therapy_categories(db)


@router.post("", response_model=schemas.Therapy, status_code=status.HTTP_201_CREATED)
def create_therapy(therapy_data: schemas.TherapyCreate, db: Session = Depends(get_db)):
    return therapy_service.create_therapy(db=db, therapy=therapy_data)


@router.post("/import", response_model=schemas.ImportResult, status_code=status.HTTP_201_CREATED)
async def import_therapies(request: Request, db: Session = Depends(get_db)):
    items, replace_existing = import_service.parse_import_payload(await request.body(), "therapies")
    return therapy_service.import_therapies(db, items, replace_existing=replace_existing)


@router.get("/{therapy_id}", response_model=schemas.Therapy)
def read_therapy(therapy_id: int, db: Session = Depends(get_db)):
    db_therapy = therapy_service.get_therapy_by_id(db, therapy_id=therapy_id)
    if db_therapy is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Therapy not found")
    return db_therapy


@router.put("/{therapy_id}", response_model=schemas.Therapy)
def update_therapy(therapy_id: int, therapy_data: schemas.TherapyUpdate, db: Session = Depends(get_db)):
    db_therapy = therapy_service.update_therapy(db, therapy_id=therapy_id, therapy_update=therapy_data)
    if db_therapy is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Therapy not found")
    return db_therapy


@router.delete("/{therapy_id}", response_model=schemas.DeleteResponse)
def delete_therapy(therapy_id: int, db: Session = Depends(get_db)):
    if therapy_service.delete_therapy(db, therapy_id=therapy_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Therapy not found")
    return {"success": True}
