# ==============================================================================
# FICHIER D'INITIALISATION DU PACKAGE 'models'
# ------------------------------------------------------------------------------
# Centralise l'importation de toutes les classes de modèles SQLAlchemy, pour
# qu'elles soient accessibles via `from prescriptions import models` et
# enregistrées dans `Base.metadata` (utilisé par Alembic et create_all).
# ==============================================================================

# --- Modèle de Base ---
from .base import Base, JSONEncodedList

# --- Catalogues ---
from .disease import Disease
from .finding import Finding
from .medication import Medication
from .drug import Drug
from .therapy import Therapy

# --- Ordonnances types ---
from .prescription import PrescriptionTemplate, PrescriptionItem
from .relations import DiseasePrescription, FindingPrescription

# --- Suivi et configuration ---
from .tracking_models import SearchLog, AppConfig
