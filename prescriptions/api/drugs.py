from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List

from .. import schemas
from ..services import drug_service, import_service
from ..dependencies import ListParams, get_db

router = APIRouter(
    prefix="/drugs",
    tags=["Drugs"]
)


@router.get("", response_model=schemas.SearchResponse[schemas.Drug])
def read_drugs(params: ListParams = Depends(), db: Session = Depends(get_db)):
    """
    Priorité : filtre par catégorie > recherche texte > catalogue complet.
    """
    return drug_service.search_drugs(db, **params.as_kwargs())


@router.get("/categories", response_model=List[str])
def read_drug_categories(db: Session = Depends(get_db)):
    return drug_service.get_drug_categories(db)


@router.post("", response_model=schemas.Drug, status_code=status.HTTP_201_CREATED)
def create_drug(drug_data: schemas.DrugCreate, db: Session = Depends(get_db)):
    """
    Crée un produit ; un code-barres déjà connu met à jour le produit existant.
    """
    db_drug, _ = drug_service.create_drug(db=db, drug=drug_data)
    return db_drug


@router.post("/import", response_model=schemas.ImportResult, status_code=status.HTTP_201_CREATED)
async def import_drugs(request: Request, db: Session = Depends(get_db)):
    """
    Import d'un lot de produits : {"items": [...], "replace_existing": bool}.
    """
    items, replace_existing = import_service.parse_import_payload(await request.body(), "drugs")
    return drug_service.import_drugs(db, items, replace_existing=replace_existing)


@router.get("/{drug_id}", response_model=schemas.Drug)
def read_drug(drug_id: int, db: Session = Depends(get_db)):
    db_drug = drug_service.get_drug_by_id(db, drug_id=drug_id)
    if db_drug is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Drug not found")
    return db_drug


@router.put("/{drug_id}", response_model=schemas.Drug)
def update_drug(drug_id: int, drug_data: schemas.DrugUpdate, db: Session = Depends(get_db)):
    db_drug = drug_service.update_drug(db, drug_id=drug_id, drug_update=drug_data)
    if db_drug is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Drug not found")
    return db_drug


@router.delete("/{drug_id}", response_model=schemas.DeleteResponse)
def delete_drug(drug_id: int, db: Session = Depends(get_db)):
    if drug_service.delete_drug(db, drug_id=drug_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Drug not found")
    return {"success": True}
