from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TherapyBase(BaseModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    active_ingredient: Optional[str] = None
    dosage_form: Optional[str] = None
    strength: Optional[str] = None
    manufacturer: Optional[str] = None


class TherapyCreate(TherapyBase):
    pass


class TherapyUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    active_ingredient: Optional[str] = None
    dosage_form: Optional[str] = None
    strength: Optional[str] = None
    manufacturer: Optional[str] = None


class Therapy(TherapyBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
