# ==============================================================================
# FICHIER D'INITIALISATION DU PACKAGE 'schemas'
# ------------------------------------------------------------------------------
# Les classes usuelles sont accessibles directement (`schemas.Disease`) ; les
# modules complets restent accessibles (`schemas.prescription.PrescriptionDetail`).
# ==============================================================================

from .common import SearchResponse, ImportResult, DeleteResponse, ErrorResponse
from .disease import DiseaseCreate, DiseaseBase, DiseaseUpdate, Disease
from .finding import FindingCreate, FindingBase, FindingUpdate, Finding
from .medication import MedicationCreate, MedicationBase, MedicationUpdate, Medication
from .therapy import TherapyCreate, TherapyBase, TherapyUpdate, Therapy
from .drug import DrugCreate, DrugBase, DrugUpdate, Drug
from .prescription import (
    PrescriptionItemCreate,
    PrescriptionItem,
    PrescriptionCreate,
    PrescriptionUpdate,
    PrescriptionTemplate,
    PrescriptionDetail,
)

from . import ai
from . import config
from . import search
