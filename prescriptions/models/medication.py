from sqlalchemy import Column, Integer, String, TIMESTAMP, func

from .base import Base


class Medication(Base):
    """
    Médicament utilisable dans les lignes d'une ordonnance type.
    """
    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    generic_name = Column(String(255), index=True)
    dosage_form = Column(String(100), comment="Comprimé, gélule, sirop...")
    strength = Column(String(100), comment="500mg, 10ml...")
    manufacturer = Column(String(255))
    category = Column(String(255))

    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Medication(id={self.id}, name='{self.name}')>"
