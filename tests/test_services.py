"""
Tests au niveau des services : dépôt générique, import isolé par SAVEPOINT,
transaction de création d'ordonnance, lecture des corps d'import.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from prescriptions import models, schemas
from prescriptions.services import (
    disease_service,
    drug_service,
    import_service,
    medication_service,
    prescription_service,
)


class TestBulkImport:

    def test_database_error_only_rejects_the_faulty_item(self, db):
        items = [
            {"code": "A00", "name": "Cholera"},
            {"code": "A01", "name": "Typhoid", "category": {"not": "bindable"}},
            {"code": "A02", "name": "Salmonella"},
        ]

        result = disease_service.import_diseases(db, items)

        assert result == {"imported": 2, "inserted": 2, "updated": 0, "errors": 1}
        codes = [row.code for row in db.query(models.Disease).order_by(models.Disease.code)]
        assert codes == ["A00", "A02"]

    def test_duplicate_codes_in_one_batch_are_merged(self, db):
        result = disease_service.import_diseases(db, [
            {"code": "A00", "name": "Cholera", "description": "first"},
            {"code": "A00", "name": "Cholera, unspecified"},
        ])

        assert result["inserted"] == 1
        assert result["updated"] == 1
        disease = disease_service.get_disease_by_code(db, "A00")
        assert disease.name == "Cholera, unspecified"
        assert disease.description == "first"

    def test_unknown_keys_are_ignored(self, db):
        result = medication_service.import_medications(db, [
            {"name": "Doliprane", "id": 999, "created_at": "yesterday", "colour": "white"},
        ])

        assert result["inserted"] == 1
        assert db.query(models.Medication).one().id != 999

    def test_drug_categories_are_normalized_on_import(self, db):
        drug_service.import_drugs(db, [{"barcode": 42, "categories": '["Analgesic", " Antipyretic "]'}])

        drug = drug_service.get_drug_by_barcode(db, "42")

        assert drug.categories == ["Analgesic", "Antipyretic"]


class TestSearchRepository:

    def test_has_more_boundary(self, db):
        medication_service.import_medications(db, [{"name": f"M{i}"} for i in range(4)])

        exact = medication_service.search_medications(db, limit=2, offset=2)
        partial = medication_service.search_medications(db, limit=2, offset=1)

        assert exact["has_more"] is False
        assert partial["has_more"] is True
        assert exact["total"] == 4

    def test_ties_are_broken_by_id(self, db):
        medication_service.import_medications(db, [{"name": "Same"} for _ in range(3)])

        ids = [m.id for m in medication_service.search_medications(db, limit=10)["results"]]

        assert ids == sorted(ids)

    def test_sort_order_is_case_insensitive(self, db):
        medication_service.import_medications(db, [{"name": "A"}, {"name": "B"}])

        names = [m.name for m in medication_service.search_medications(db, sort_order="Desc")["results"]]

        assert names == ["B", "A"]


class TestPrescriptionTransaction:

    def test_failed_insert_rolls_back_everything(self, db):
        disease = disease_service.create_disease(db, schemas.DiseaseCreate(code="J00", name="Cold"))
        # Ligne sans cible : rejetée par la contrainte CHECK au moment du commit
        bad_item = schemas.PrescriptionItemCreate.model_construct(
            medication_id=None, therapy_id=None, dosage="1", frequency="1/d", duration="1d", instructions=None
        )
        prescription = schemas.PrescriptionCreate.model_construct(
            name="Broken", description=None, created_by=None,
            items=[bad_item], disease_ids=[disease.id], finding_ids=None,
        )

        with pytest.raises(IntegrityError):
            prescription_service.create_prescription(db, prescription)

        assert db.query(models.PrescriptionTemplate).count() == 0
        assert db.query(models.PrescriptionItem).count() == 0
        assert db.query(models.DiseasePrescription).count() == 0

    def test_missing_therapy_raises_value_error(self, db):
        prescription = schemas.PrescriptionCreate(
            name="Physio", items=[schemas.PrescriptionItemCreate(therapy_id=7, dosage="1", frequency="1", duration="1")]
        )

        with pytest.raises(ValueError, match="7"):
            prescription_service.create_prescription(db, prescription)


class TestImportPayload:

    def test_bare_array(self):
        assert import_service.parse_import_payload(b'[{"code": "A00"}]', "diseases") == ([{"code": "A00"}], False)

    def test_collection_key_and_camel_case_flag(self):
        raw = b'{"diseases": [{"code": "A00"}], "replaceExisting": true}'

        assert import_service.parse_import_payload(raw, "diseases") == ([{"code": "A00"}], True)

    def test_items_key_wins(self):
        raw = b'{"items": [1], "drugs": [2], "replace_existing": true}'

        assert import_service.parse_import_payload(raw, "drugs") == ([1], True)

    @pytest.mark.parametrize("raw", [b"", b"{not json", b"42", b'{"diseases": "A00"}', b'{"other": []}'])
    def test_malformed_payloads_give_empty_list(self, raw):
        assert import_service.parse_import_payload(raw, "diseases") == ([], False)
