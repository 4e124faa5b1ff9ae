from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List

from .. import schemas
from ..services import finding_service, import_service
from ..dependencies import ListParams, get_db

router = APIRouter(
    prefix="/findings",
    tags=["Findings"]
)


@router.get("", response_model=schemas.SearchResponse[schemas.Finding])
def read_findings(params: ListParams = Depends(), db: Session = Depends(get_db)):
    return finding_service.search_findings(db, **params.as_kwargs())


@router.get("/categories", response_model=List[str])
def read_finding_categories(db: Session = Depends(get_db)):
    return finding_service.get_finding_categories(db)


@router.post("", response_model=schemas.Finding, status_code=status.HTTP_201_CREATED)
def create_finding(finding_data: schemas.FindingCreate, db: Session = Depends(get_db)):
    """
    Crée un constat clinique. Le code, s'il est fourni, doit être unique.
    """
    if finding_data.code and finding_service.get_finding_by_code(db, code=finding_data.code):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Finding with code '{finding_data.code}' already exists"
        )
    return finding_service.create_finding(db=db, finding=finding_data)


@router.post("/import", response_model=schemas.ImportResult, status_code=status.HTTP_201_CREATED)
async def import_findings(request: Request, db: Session = Depends(get_db)):
    items, replace_existing = import_service.parse_import_payload(await request.body(), "findings")
    return finding_service.import_findings(db, items, replace_existing=replace_existing)


@router.get("/{finding_id}", response_model=schemas.Finding)
def read_finding(finding_id: int, db: Session = Depends(get_db)):
    db_finding = finding_service.get_finding_by_id(db, finding_id=finding_id)
    if db_finding is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Finding not found")
    return db_finding


@router.put("/{finding_id}", response_model=schemas.Finding)
def update_finding(finding_id: int, finding_data: schemas.FindingUpdate, db: Session = Depends(get_db)):
    db_finding = finding_service.update_finding(db, finding_id=finding_id, finding_update=finding_data)
    if db_finding is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Finding not found")
    return db_finding


@router.delete("/{finding_id}", response_model=schemas.DeleteResponse)
def delete_finding(finding_id: int, db: Session = Depends(get_db)):
    if finding_service.delete_finding(db, finding_id=finding_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Finding not found")
    return {"success": True}


@router.get(
    "/{finding_id}/prescriptions",
    response_model=schemas.SearchResponse[schemas.PrescriptionTemplate],
    tags=["Finding-Prescription Relations"]
)
def get_prescriptions_for_finding(finding_id: int, db: Session = Depends(get_db)):
    prescriptions = finding_service.get_prescriptions_for_finding(db, finding_id=finding_id)
    return {"results": prescriptions, "total": len(prescriptions), "has_more": False}
