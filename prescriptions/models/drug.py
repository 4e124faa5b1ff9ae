from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func

from .base import Base, JSONEncodedList


class Drug(Base):
    """
    Entrée du catalogue plat de produits pharmaceutiques (code-barres, ATC).

    Distinct de 'Medication' : ces lignes proviennent d'un jeu de données
    externe et sont dédoublonnées par code-barres lors des imports.
    """
    __tablename__ = "drugs"

    id = Column(Integer, primary_key=True, index=True)
    barcode = Column(String(64), unique=True, nullable=True, index=True)
    atc_code = Column(String(20), index=True)
    active_ingredient = Column(Text)
    product_name = Column(String(512), index=True)
    categories = Column(JSONEncodedList, nullable=False, default=list, comment="Liste JSON")
    description = Column(Text)

    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Drug(id={self.id}, barcode='{self.barcode}')>"
