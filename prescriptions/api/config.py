from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import schemas
from ..services import config_service
from ..dependencies import get_db

router = APIRouter(
    prefix="/config",
    tags=["Configuration"]
)


@router.get("/{key}", response_model=schemas.config.ConfigValue)
def read_config(key: str, db: Session = Depends(get_db)):
    value = config_service.get_config(db, key)
    if value is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Config not found")
    return {"key": key, "value": value}


@router.put("/{key}", response_model=schemas.config.ConfigValue)
def update_config(key: str, config_data: schemas.config.ConfigUpdate, db: Session = Depends(get_db)):
    entry = config_service.set_config(db, key, config_data.value)
    return {"key": entry.key, "value": entry.value}
