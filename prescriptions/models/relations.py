from sqlalchemy import (
    Column,
    Float,
    ForeignKey,
    Integer,
    TIMESTAMP,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .base import Base


class DiseasePrescription(Base):
    """
    Table d'association entre maladies et ordonnances types.

    'confidence_score' est stocké (toujours 1.0 à la création) et sert
    uniquement à ordonner les ordonnances d'une maladie.
    """
    __tablename__ = "disease_prescriptions"
    __table_args__ = (
        UniqueConstraint("disease_id", "prescription_template_id", name="uq_disease_prescription"),
    )

    id = Column(Integer, primary_key=True)
    disease_id = Column(Integer, ForeignKey("diseases.id", ondelete="CASCADE"), nullable=False, index=True)
    prescription_template_id = Column(
        Integer,
        ForeignKey("prescription_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    confidence_score = Column(Float, nullable=False, default=1.0)
    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())

    disease = relationship("Disease", back_populates="prescription_links")
    prescription_template = relationship("PrescriptionTemplate", back_populates="disease_links")

    def __repr__(self) -> str:
        return f"<DiseasePrescription(disease_id={self.disease_id}, template_id={self.prescription_template_id})>"


class FindingPrescription(Base):
    """
    Table d'association entre constats cliniques et ordonnances types.
    """
    __tablename__ = "finding_prescriptions"
    __table_args__ = (
        UniqueConstraint("finding_id", "prescription_template_id", name="uq_finding_prescription"),
    )

    id = Column(Integer, primary_key=True)
    finding_id = Column(Integer, ForeignKey("findings.id", ondelete="CASCADE"), nullable=False, index=True)
    prescription_template_id = Column(
        Integer,
        ForeignKey("prescription_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    confidence_score = Column(Float, nullable=False, default=1.0)
    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())

    finding = relationship("Finding", back_populates="prescription_links")
    prescription_template = relationship("PrescriptionTemplate", back_populates="finding_links")

    def __repr__(self) -> str:
        return f"<FindingPrescription(finding_id={self.finding_id}, template_id={self.prescription_template_id})>"
