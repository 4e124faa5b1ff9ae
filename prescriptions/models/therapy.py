from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func

from .base import Base


class Therapy(Base):
    """
    Thérapie (traitement non réduit à un médicament du catalogue), utilisable
    comme ligne d'ordonnance au même titre qu'un médicament.
    """
    __tablename__ = "therapies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    category = Column(String(255), index=True, default="General")
    active_ingredient = Column(Text)
    dosage_form = Column(String(100))
    strength = Column(String(100))
    manufacturer = Column(String(255))

    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Therapy(id={self.id}, name='{self.name}')>"
