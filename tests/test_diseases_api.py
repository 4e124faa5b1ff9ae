"""
Tests des routes /api/diseases : recherche, pagination, tri, CRUD et import.
"""

import json


class TestDiseaseSearch:
    """Recherche texte, filtre par catégorie et pagination."""

    def test_text_search_matches_name(self, client, make_disease):
        make_disease("E11", "Type 2 diabetes mellitus", category="Endocrine")
        make_disease("I10", "Essential hypertension", category="Circulatory")

        data = client.get("/api/diseases", params={"q": "diabetes"}).json()

        assert data["total"] == 1
        assert data["has_more"] is False
        assert data["results"][0]["code"] == "E11"

    def test_search_is_case_insensitive(self, client, make_disease):
        make_disease("E11", "Type 2 Diabetes mellitus")

        data = client.get("/api/diseases", params={"q": "DIABETES"}).json()

        assert data["total"] == 1

    def test_fields_restrict_searched_columns(self, client, make_disease):
        make_disease("E11", "Type 2 diabetes mellitus")

        by_code = client.get("/api/diseases", params={"q": "E11", "fields": "code"}).json()
        name_on_code = client.get("/api/diseases", params={"q": "diabetes", "fields": "code"}).json()

        assert by_code["total"] == 1
        assert name_on_code["total"] == 0

    def test_unknown_fields_fall_back_to_defaults(self, client, make_disease):
        make_disease("E11", "Type 2 diabetes mellitus")

        data = client.get("/api/diseases", params={"q": "diabetes", "fields": "bogus,  "}).json()

        assert data["total"] == 1

    def test_category_filter_takes_precedence_over_text(self, client, make_disease):
        make_disease("E11", "Type 2 diabetes mellitus", category="Endocrine")
        make_disease("E03", "Hypothyroidism", category="Endocrine")
        make_disease("I10", "Essential hypertension", category="Circulatory")

        data = client.get("/api/diseases", params={"q": "hypertension", "category": "Endocrine"}).json()

        assert data["total"] == 2
        assert {d["code"] for d in data["results"]} == {"E11", "E03"}

    def test_empty_query_returns_everything_sorted_by_code(self, client, make_disease):
        make_disease("I10", "Essential hypertension")
        make_disease("A09", "Gastroenteritis")
        make_disease("E11", "Type 2 diabetes mellitus")

        data = client.get("/api/diseases").json()

        assert [d["code"] for d in data["results"]] == ["A09", "E11", "I10"]

    def test_pagination(self, client):
        items = [{"code": f"D{i:03d}", "name": f"Disease {i}"} for i in range(45)]
        client.post("/api/diseases/import", json={"diseases": items})

        first = client.get("/api/diseases", params={"limit": 20, "offset": 0}).json()
        middle = client.get("/api/diseases", params={"limit": 20, "offset": 20}).json()
        last = client.get("/api/diseases", params={"limit": 20, "offset": 40}).json()

        assert first["total"] == 45
        assert len(first["results"]) == 20
        assert first["has_more"] is True
        assert middle["results"][0]["code"] == "D020"
        assert middle["has_more"] is True
        assert len(last["results"]) == 5
        assert last["has_more"] is False

    def test_sort_by_name_descending(self, client, make_disease):
        make_disease("A01", "Alpha")
        make_disease("B01", "Charlie")
        make_disease("C01", "Bravo")

        data = client.get("/api/diseases", params={"sortBy": "name", "sortOrder": "DESC"}).json()

        assert [d["name"] for d in data["results"]] == ["Charlie", "Bravo", "Alpha"]

    def test_unknown_sort_column_falls_back_to_default(self, client, make_disease):
        make_disease("B01", "Alpha")
        make_disease("A01", "Bravo")

        data = client.get("/api/diseases", params={"sortBy": "name; DROP TABLE diseases"}).json()

        assert [d["code"] for d in data["results"]] == ["A01", "B01"]

    def test_invalid_limit_is_rejected(self, client):
        response = client.get("/api/diseases", params={"limit": 0})

        assert response.status_code == 422
        assert response.json()["error"] == "Requête invalide"

    def test_categories_are_distinct_and_sorted(self, client, make_disease):
        make_disease("E11", "Diabetes", category="Endocrine")
        make_disease("E03", "Hypothyroidism", category="Endocrine")
        make_disease("I10", "Hypertension", category="Circulatory")

        assert client.get("/api/diseases/categories").json() == ["Circulatory", "Endocrine"]


class TestDiseaseCrud:

    def test_create_defaults_category(self, client):
        response = client.post("/api/diseases", json={"code": "J00", "name": "Common cold"})

        assert response.status_code == 201
        body = response.json()
        assert body["category"] == "General"
        assert body["id"] > 0
        assert body["created_at"]

    def test_create_duplicate_code_is_rejected(self, client, make_disease):
        make_disease("E11", "Type 2 diabetes mellitus")

        response = client.post("/api/diseases", json={"code": "E11", "name": "Other"})

        assert response.status_code == 400
        assert response.json() == {"error": "Disease with code 'E11' already exists"}

    def test_create_requires_code_and_name(self, client):
        response = client.post("/api/diseases", json={"name": "No code"})

        assert response.status_code == 422

    def test_read_missing_disease(self, client):
        response = client.get("/api/diseases/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Disease not found"}

    def test_update_only_overwrites_provided_fields(self, client, make_disease):
        disease = make_disease("E11", "Diabetes", description="Chronic", category="Endocrine")

        response = client.put(f"/api/diseases/{disease['id']}", json={"name": "Type 2 diabetes", "description": None})

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Type 2 diabetes"
        assert body["description"] == "Chronic"
        assert body["category"] == "Endocrine"

    def test_update_missing_disease(self, client):
        assert client.put("/api/diseases/999", json={"name": "x"}).status_code == 404

    def test_delete(self, client, make_disease):
        disease = make_disease("E11", "Diabetes")

        response = client.delete(f"/api/diseases/{disease['id']}")

        assert response.json() == {"success": True}
        assert client.get(f"/api/diseases/{disease['id']}").status_code == 404
        assert client.delete(f"/api/diseases/{disease['id']}").status_code == 404


class TestDiseaseImport:

    def test_import_inserts_and_counts_errors(self, client):
        payload = {
            "diseases": [
                {"code": "A00", "name": "Cholera", "category": "Infectious"},
                {"code": "A01", "name": "Typhoid fever"},
                {"code": "A02"},
                "not-an-object",
            ]
        }

        response = client.post("/api/diseases/import", json=payload)

        assert response.status_code == 201
        assert response.json() == {"imported": 2, "inserted": 2, "updated": 0, "errors": 2}
        assert client.get("/api/diseases").json()["total"] == 2

    def test_import_merges_existing_by_code(self, client, make_disease):
        make_disease("A00", "Cholera", description="Acute diarrhoea", category="Infectious")

        result = client.post("/api/diseases/import", json={
            "items": [{"code": "A00", "name": "Cholera, unspecified"}]
        }).json()
        disease = client.get("/api/diseases", params={"q": "A00"}).json()["results"][0]

        assert result["updated"] == 1
        assert disease["name"] == "Cholera, unspecified"
        assert disease["description"] == "Acute diarrhoea"
        assert disease["category"] == "Infectious"

    def test_import_replace_existing_overwrites_fields(self, client, make_disease):
        make_disease("A00", "Cholera", description="Acute diarrhoea", category="Infectious")

        client.post("/api/diseases/import", json={
            "diseases": [{"code": "A00", "name": "Cholera, unspecified"}],
            "replaceExisting": True,
        })
        disease = client.get("/api/diseases", params={"q": "A00"}).json()["results"][0]

        assert disease["name"] == "Cholera, unspecified"
        assert disease["description"] is None
        assert disease["category"] is None

    def test_bare_array_payload(self, client):
        response = client.post("/api/diseases/import", json=[{"code": "A00", "name": "Cholera"}])

        assert response.json()["inserted"] == 1

    def test_malformed_payload_imports_nothing(self, client):
        response = client.post(
            "/api/diseases/import",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 201
        assert response.json() == {"imported": 0, "inserted": 0, "updated": 0, "errors": 0}

    def test_flattened_tree_import(self, client):
        from prescriptions.datasets.diagnosis_tree import load_disease_records

        tree = [{
            "code": "A00-B99", "desc": "Infectious diseases",
            "children": [{"code": "A00", "desc": "Cholera"}],
        }]
        records = load_disease_records(tree)

        result = client.post("/api/diseases/import", content=json.dumps({"diseases": records})).json()

        assert result["inserted"] == 2
        assert client.get("/api/diseases/categories").json() == ["Infectious diseases"]
