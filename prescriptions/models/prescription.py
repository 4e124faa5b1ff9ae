from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    TIMESTAMP,
    func,
    true,
)
from sqlalchemy.orm import relationship

from .base import Base


class PrescriptionTemplate(Base):
    """
    Ordonnance type : un ensemble réutilisable de lignes (médicaments ou
    thérapies) associé à des maladies et des constats cliniques.

    La suppression est logique : 'is_active' passe à False et la ligne reste.
    """
    __tablename__ = "prescription_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    created_by = Column(String(255), comment="Identifiant du praticien")
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    # --- Relations ---
    items = relationship(
        "PrescriptionItem",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="PrescriptionItem.id"
    )
    disease_links = relationship(
        "DiseasePrescription",
        back_populates="prescription_template",
        cascade="all, delete-orphan"
    )
    finding_links = relationship(
        "FindingPrescription",
        back_populates="prescription_template",
        cascade="all, delete-orphan"
    )

    @property
    def diseases(self):
        return [link.disease for link in self.disease_links]

    @property
    def findings(self):
        return [link.finding for link in self.finding_links]

    def __repr__(self) -> str:
        return f"<PrescriptionTemplate(id={self.id}, name='{self.name}', is_active={self.is_active})>"


class PrescriptionItem(Base):
    """
    Ligne d'une ordonnance type. Elle référence soit un médicament, soit une
    thérapie, jamais les deux.
    """
    __tablename__ = "prescription_items"
    __table_args__ = (
        CheckConstraint(
            "(medication_id IS NOT NULL AND therapy_id IS NULL) "
            "OR (medication_id IS NULL AND therapy_id IS NOT NULL)",
            name="ck_prescription_items_single_target"
        ),
    )

    id = Column(Integer, primary_key=True)
    prescription_template_id = Column(
        Integer,
        ForeignKey("prescription_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    medication_id = Column(Integer, ForeignKey("medications.id"), nullable=True, index=True)
    therapy_id = Column(Integer, ForeignKey("therapies.id"), nullable=True, index=True)

    dosage = Column(String(255), nullable=False, comment="Ex: 1 comprimé")
    frequency = Column(String(255), nullable=False, comment="Ex: deux fois par jour")
    duration = Column(String(255), nullable=False, comment="Ex: 7 jours")
    instructions = Column(Text)

    template = relationship("PrescriptionTemplate", back_populates="items")
    medication = relationship("Medication")
    therapy = relationship("Therapy")

    @property
    def medication_name(self):
        return self.medication.name if self.medication else None

    @property
    def therapy_name(self):
        return self.therapy.name if self.therapy else None

    def __repr__(self) -> str:
        return f"<PrescriptionItem(id={self.id}, template={self.prescription_template_id})>"
