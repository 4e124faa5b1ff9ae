from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship

from .base import Base


class Disease(Base):
    """
    Modèle SQLAlchemy pour la table des maladies (codes CIM-10).
    """
    __tablename__ = "diseases"

    id = Column(Integer, primary_key=True, index=True)

    # --- Identification et Classification ---
    code = Column(String(20), unique=True, nullable=False, index=True, comment="Code CIM-10")
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    category = Column(String(255), index=True, default="General")

    # --- Horodatage ---
    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    # --- Relations ---
    prescription_links = relationship(
        "DiseasePrescription",
        back_populates="disease",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Disease(id={self.id}, code='{self.code}')>"
