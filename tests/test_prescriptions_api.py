"""
Tests des ordonnances types : assemblage transactionnel, validation des
lignes, suppression logique et mise à jour par remplacement.
"""

import pytest


def _item(**target):
    return {"dosage": "1 tablet", "frequency": "twice daily", "duration": "7 days", **target}


@pytest.fixture
def catalog(make_disease, make_medication, make_therapy, make_finding):
    return {
        "disease": make_disease("J00", "Common cold"),
        "other_disease": make_disease("J02", "Pharyngitis"),
        "medication": make_medication("Paracetamol"),
        "therapy": make_therapy("Steam inhalation"),
        "finding": make_finding("Fever", code="R50"),
    }


@pytest.fixture
def prescription(client, catalog):
    response = client.post("/api/prescriptions", json={
        "name": "Cold treatment",
        "description": "Symptomatic care",
        "items": [
            _item(medication_id=catalog["medication"]["id"]),
            _item(therapy_id=catalog["therapy"]["id"], instructions="Twice a day"),
        ],
        "disease_ids": [catalog["disease"]["id"], catalog["disease"]["id"]],
        "finding_ids": [catalog["finding"]["id"]],
    })
    assert response.status_code == 201, response.text
    return response.json()


class TestCreatePrescription:

    def test_detail_view(self, prescription, catalog):
        assert prescription["is_active"] is True
        assert prescription["created_by"] == "user"
        assert len(prescription["items"]) == 2

        medication_item, therapy_item = prescription["items"]
        assert medication_item["medication_name"] == "Paracetamol"
        assert medication_item["therapy_id"] is None
        assert therapy_item["therapy_name"] == "Steam inhalation"
        assert therapy_item["instructions"] == "Twice a day"

        assert [d["code"] for d in prescription["diseases"]] == ["J00"]
        assert [f["name"] for f in prescription["findings"]] == ["Fever"]

    def test_linked_from_disease_and_finding(self, client, prescription, catalog):
        by_disease = client.get(f"/api/diseases/{catalog['disease']['id']}/prescriptions").json()
        by_finding = client.get(f"/api/findings/{catalog['finding']['id']}/prescriptions").json()

        assert by_disease["total"] == 1
        assert by_disease["has_more"] is False
        assert by_disease["results"][0]["id"] == prescription["id"]
        assert by_finding["results"][0]["name"] == "Cold treatment"

    def test_item_must_reference_exactly_one_target(self, client, catalog):
        both = _item(medication_id=catalog["medication"]["id"], therapy_id=catalog["therapy"]["id"])

        assert client.post("/api/prescriptions", json={"name": "x", "items": [both]}).status_code == 422
        assert client.post("/api/prescriptions", json={"name": "x", "items": [_item()]}).status_code == 422

    def test_at_least_one_item_is_required(self, client):
        response = client.post("/api/prescriptions", json={"name": "Empty", "items": []})

        assert response.status_code == 422
        assert response.json()["error"] == "Requête invalide"

    def test_blank_name_is_rejected(self, client, catalog):
        response = client.post("/api/prescriptions", json={
            "name": "   ", "items": [_item(medication_id=catalog["medication"]["id"])]
        })

        assert response.status_code == 422

    def test_unknown_reference_creates_nothing(self, client, catalog):
        response = client.post("/api/prescriptions", json={
            "name": "Broken",
            "items": [_item(medication_id=catalog["medication"]["id"]), _item(medication_id=9999)],
            "disease_ids": [catalog["disease"]["id"]],
        })

        assert response.status_code == 404
        assert "9999" in response.json()["error"]
        assert client.get("/api/prescriptions").json()["total"] == 0

    def test_unknown_disease_is_rejected(self, client, catalog):
        response = client.post("/api/prescriptions", json={
            "name": "Broken",
            "items": [_item(medication_id=catalog["medication"]["id"])],
            "disease_ids": [4242],
        })

        assert response.status_code == 404


class TestSoftDelete:

    def test_deleted_template_disappears_from_search(self, client, prescription):
        assert client.get("/api/prescriptions").json()["total"] == 1

        assert client.delete(f"/api/prescriptions/{prescription['id']}").json() == {"success": True}

        assert client.get("/api/prescriptions").json()["total"] == 0
        assert client.get("/api/prescriptions", params={"q": "Cold"}).json()["total"] == 0

    def test_deleted_template_is_hidden_unless_requested(self, client, prescription):
        client.delete(f"/api/prescriptions/{prescription['id']}")

        hidden = client.get(f"/api/prescriptions/{prescription['id']}")
        shown = client.get(f"/api/prescriptions/{prescription['id']}", params={"include_inactive": "true"})

        assert hidden.status_code == 404
        assert shown.status_code == 200
        assert shown.json()["is_active"] is False
        assert len(shown.json()["items"]) == 2

    def test_deleted_template_is_unlinked_from_disease_view(self, client, prescription, catalog):
        client.delete(f"/api/prescriptions/{prescription['id']}")

        data = client.get(f"/api/diseases/{catalog['disease']['id']}/prescriptions").json()

        assert data["total"] == 0

    def test_delete_unknown_template(self, client):
        assert client.delete("/api/prescriptions/999").status_code == 404


class TestUpdatePrescription:

    def test_items_and_links_are_replaced(self, client, prescription, catalog):
        response = client.put(f"/api/prescriptions/{prescription['id']}", json={
            "name": "Cold treatment v2",
            "items": [_item(therapy_id=catalog["therapy"]["id"])],
            "disease_ids": [catalog["other_disease"]["id"], catalog["disease"]["id"]],
            "finding_ids": [],
        })

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Cold treatment v2"
        assert body["description"] == "Symptomatic care"
        assert [i["therapy_name"] for i in body["items"]] == ["Steam inhalation"]
        assert sorted(d["code"] for d in body["diseases"]) == ["J00", "J02"]
        assert body["findings"] == []

    def test_fields_only_update_keeps_items(self, client, prescription):
        body = client.put(f"/api/prescriptions/{prescription['id']}", json={"description": "Updated"}).json()

        assert body["description"] == "Updated"
        assert len(body["items"]) == 2
        assert len(body["diseases"]) == 1

    def test_reactivation(self, client, prescription):
        client.delete(f"/api/prescriptions/{prescription['id']}")

        body = client.put(f"/api/prescriptions/{prescription['id']}", json={"is_active": True}).json()

        assert body["is_active"] is True
        assert client.get("/api/prescriptions").json()["total"] == 1

    def test_unknown_reference_leaves_template_untouched(self, client, prescription):
        response = client.put(f"/api/prescriptions/{prescription['id']}", json={
            "name": "Should not be saved", "finding_ids": [999],
        })

        assert response.status_code == 404
        assert client.get(f"/api/prescriptions/{prescription['id']}").json()["name"] == "Cold treatment"

    def test_empty_items_are_rejected(self, client, prescription):
        response = client.put(f"/api/prescriptions/{prescription['id']}", json={"items": []})

        assert response.status_code == 422

    def test_update_unknown_template(self, client):
        assert client.put("/api/prescriptions/999", json={"name": "x"}).status_code == 404
