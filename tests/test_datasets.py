"""
Tests des outils d'import côté client : arborescence de diagnostics,
catalogue de produits, import par lots et anti-rebond de la recherche.
"""

import time

import pytest
import requests

from prescriptions.datasets.batch_importer import BatchImporter
from prescriptions.datasets.debounce import Debouncer
from prescriptions.datasets.diagnosis_tree import flatten_diagnosis_hierarchy, load_disease_records
from prescriptions.datasets.drug_catalog import DrugImportOptions, normalize_drug_row, read_drug_file

DIAGNOSIS_TREE = [
    {
        "code": "A00-B99",
        "desc": "Certain infectious diseases",
        "children": [
            {
                "code": "A00",
                "desc": "Cholera",
                "desc_full": "Cholera, unspecified",
                "children": [{"code": "A00.0", "desc": "Classical cholera"}],
            },
            {"desc": "Untitled group", "children": [{"code": "A01", "desc": "Typhoid"}]},
        ],
    },
    {"code": "Z99", "desc": "Dependence on machines"},
]


class TestDiagnosisTree:

    def test_flatten(self):
        records = {r["code"]: r for r in flatten_diagnosis_hierarchy(DIAGNOSIS_TREE)}

        assert list(records) == ["A00-B99", "A00", "A00.0", "A01", "Z99"]
        assert records["A00-B99"] == {
            "code": "A00-B99", "name": "Certain infectious diseases",
            "description": None, "category": "Certain infectious diseases",
        }
        assert records["A00"]["name"] == "Cholera, unspecified"
        assert records["A00"]["description"] == "Cholera"
        assert records["A00"]["category"] == "Certain infectious diseases"
        assert records["A00.0"]["category"] == "Cholera"
        assert records["A01"]["category"] == "Untitled group"
        assert records["Z99"]["category"] == "General"

    def test_load_flat_list(self):
        rows = [{"code": "A00", "name": "Cholera"}]

        assert load_disease_records(rows) == rows

    def test_load_wrapped_object(self):
        assert load_disease_records({"diseases": [{"code": "A00"}]}) == [{"code": "A00"}]

    def test_load_tree(self):
        assert len(load_disease_records(DIAGNOSIS_TREE)) == 5

    def test_load_rejects_unknown_shape(self):
        with pytest.raises(ValueError):
            load_disease_records({"items": []})


class TestDrugCatalog:

    def test_normalize_dataset_row(self):
        row = {
            "Barcode": 6111.0,
            "ATC_code": "N02BE01",
            "Active_Ingredient": "Paracetamol",
            "Product_Name": "  Doliprane ",
            "Category_1": "Analgesic",
            "Category_2": "",
            "category_3": "Antipyretic",
            "Description": None,
        }

        assert normalize_drug_row(row) == {
            "barcode": "6111",
            "atc_code": "N02BE01",
            "active_ingredient": "Paracetamol",
            "product_name": "Doliprane",
            "description": None,
            "categories": ["Analgesic", "Antipyretic"],
        }

    def test_key_aliases(self):
        row = {"BARCODE": "1", "ATC": "J01", "product_name": "Amoxil", "description": "Antibiotic"}

        normalized = normalize_drug_row(row)

        assert normalized["barcode"] == "1"
        assert normalized["atc_code"] == "J01"
        assert normalized["product_name"] == "Amoxil"
        assert normalized["categories"] is None

    def test_excluded_fields_are_dropped(self):
        options = DrugImportOptions(include_barcode=False, include_categories=False)

        normalized = normalize_drug_row({"barcode": "1", "Category_1": "X", "Product_Name": "A"}, options)

        assert normalized["barcode"] is None
        assert normalized["categories"] is None
        assert normalized["product_name"] == "A"

    def test_read_csv_keeps_leading_zeros(self, tmp_path):
        path = tmp_path / "drugs.csv"
        path.write_text(
            "Barcode,Product_Name,Category_1,Category_2\n"
            "0123,Aspirin,Analgesic,\n"
            "0456,Amoxil,,\n",
            encoding="utf-8",
        )

        records = read_drug_file(str(path))

        assert [r["barcode"] for r in records] == ["0123", "0456"]
        assert records[0]["categories"] == ["Analgesic"]
        assert records[1]["categories"] is None

    def test_read_unsupported_extension(self, tmp_path):
        path = tmp_path / "drugs.txt"
        path.write_text("nothing", encoding="utf-8")

        with pytest.raises(ValueError):
            read_drug_file(str(path))


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeClock:
    def __init__(self, step=10.0):
        self.now = -step
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


class TestBatchImporter:

    def _importer(self, session, sleeps, **kwargs):
        return BatchImporter(
            "http://api.test/", "/api/diseases/import", payload_key="diseases",
            session=session, clock=FakeClock(), sleep=sleeps.append, **kwargs
        )

    def test_failed_batch_counts_as_errors_and_import_continues(self):
        session = FakeSession([
            FakeResponse(201, {"imported": 100, "errors": 0}),
            requests.ConnectionError("refused"),
            FakeResponse(201, {"imported": 45, "errors": 5}),
        ])
        sleeps = []
        items = [{"code": f"D{i}"} for i in range(250)]

        progress = self._importer(session, sleeps).run(items, replace_existing=True)

        assert progress.total == 250
        assert progress.processed == 250
        assert progress.imported == 145
        assert progress.errors == 105
        assert progress.total_batches == 3
        assert sleeps == [0.05, 0.05]
        url, body = session.calls[0]
        assert url == "http://api.test/api/diseases/import"
        assert len(body["diseases"]) == 100
        assert body["replace_existing"] is True
        assert len(session.calls[2][1]["diseases"]) == 50

    def test_server_error_status_counts_whole_batch(self):
        session = FakeSession([FakeResponse(500)])

        progress = self._importer(session, []).run([{"code": "A"}, {"code": "B"}])

        assert progress.errors == 2
        assert progress.imported == 0

    def test_progress_and_eta(self):
        session = FakeSession([FakeResponse(201, {"imported": 2}) for _ in range(3)])
        snapshots = []

        self._importer(session, [], batch_size=2).run(
            [{"code": str(i)} for i in range(6)],
            on_progress=lambda p: snapshots.append(p.as_dict()),
        )

        assert len(snapshots) == 7
        before_batches = snapshots[1::2]
        assert [s["current_batch"] for s in before_batches] == [1, 2, 3]
        assert [s["processed"] for s in before_batches] == [0, 2, 4]
        assert [s["estimated_time_remaining"] for s in before_batches] == [0.0, 40.0, 15.0]
        assert snapshots[-1]["processed"] == 6
        assert snapshots[-1]["imported"] == 6

    def test_nothing_to_send(self):
        session = FakeSession([])

        progress = self._importer(session, []).run([])

        assert progress.total_batches == 0
        assert session.calls == []


class TestDebouncer:

    def test_only_last_call_fires(self):
        calls = []
        debounced = Debouncer(calls.append, delay=0.05)

        for query in ("c", "co", "col", "cold"):
            debounced(query)
        debounced.flush()

        assert calls == ["cold"]

    def test_cancel(self):
        calls = []
        debounced = Debouncer(calls.append, delay=0.05)

        debounced("cold")
        debounced.cancel()
        time.sleep(0.1)

        assert calls == []
