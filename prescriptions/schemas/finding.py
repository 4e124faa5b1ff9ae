from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class FindingBase(BaseModel):
    """
    Schéma de base pour un constat clinique. Seul le nom est obligatoire.
    """
    name: str
    code: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


class FindingCreate(FindingBase):
    pass


class FindingUpdate(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


class Finding(FindingBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
