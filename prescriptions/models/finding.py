from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship

from .base import Base


class Finding(Base):
    """
    Constat clinique (signe, résultat d'examen). Même forme qu'une maladie,
    mais le code est facultatif.
    """
    __tablename__ = "findings"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    category = Column(String(255), index=True, default="General")

    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    prescription_links = relationship(
        "FindingPrescription",
        back_populates="finding",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Finding(id={self.id}, name='{self.name}')>"
