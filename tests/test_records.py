import csv
import io
from datetime import date


NEW_PATIENT = {
    "first_name": "Rosa",
    "last_name": "Mendoza",
    "age": 34,
    "sex": "Female",
    "purok": "Purok 6",
    "contact": "09170000000",
}


def test_list_demo_patients(client):
    r = client.get("/api/patients")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 4
    assert [p["patient_id"] for p in body["patients"]] == ["1", "2", "3", "4"]


def test_search_patients(client):
    r = client.get("/api/patients", params={"search": "santos"})
    assert [p["first_name"] for p in r.json()["patients"]] == ["Maria"]
    r = client.get("/api/patients", params={"search": "purok 5"})
    assert [p["last_name"] for p in r.json()["patients"]] == ["Reyes"]


def test_create_patient_assigns_unique_id(client):
    first = client.post("/api/patients", json=NEW_PATIENT)
    second = client.post("/api/patients", json=NEW_PATIENT)
    assert first.status_code == 201
    assert second.status_code == 201
    a, b = first.json(), second.json()
    assert a["patient_id"] != b["patient_id"]
    assert a["patient_id"] not in {"1", "2", "3", "4", "5", "6"}
    assert a["last_visit"] == date.today().isoformat()
    assert a["address"] == "Poblacion"


def test_ids_survive_deletion(client):
    created = client.post("/api/patients", json=NEW_PATIENT).json()
    assert client.delete("/api/patients/2").status_code == 200
    again = client.post("/api/patients", json=NEW_PATIENT).json()
    ids = [p["patient_id"] for p in client.get("/api/patients").json()["patients"]]
    assert len(ids) == len(set(ids)) == 5
    assert created["patient_id"] in ids and again["patient_id"] in ids


def test_update_patient_partial(client):
    r = client.put("/api/patients/1", json={"age": 46, "purok": "Purok 2"})
    assert r.status_code == 200
    patient = client.get("/api/patients/1").json()
    assert patient["age"] == 46
    assert patient["purok"] == "Purok 2"
    assert patient["first_name"] == "Juan"


def test_patient_not_found(client):
    r = client.get("/api/patients/nope")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Patient nope not found"}
    assert client.put("/api/patients/nope", json={"age": 1}).status_code == 404
    assert client.delete("/api/patients/nope").status_code == 404


def test_patient_validation(client):
    assert client.post("/api/patients", json={**NEW_PATIENT, "age": -1}).status_code == 422
    assert client.post("/api/patients", json={**NEW_PATIENT, "sex": "Other"}).status_code == 422
    assert client.post("/api/patients", json={**NEW_PATIENT, "first_name": ""}).status_code == 422


def test_export_patients_csv(client):
    r = client.get("/api/patients/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert r.headers["content-disposition"] == (
        f"attachment; filename=patients_export_{date.today().isoformat()}.csv"
    )
    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0] == ["ID", "First Name", "Last Name", "Age", "Sex", "Purok", "Contact", "Last Visit"]
    assert rows[1] == ["1", "Juan", "Dela Cruz", "45", "Male", "Purok 1", "09123456789", "2024-02-15"]
    assert len(rows) == 5


def test_export_quotes_commas(client):
    client.post("/api/patients", json={**NEW_PATIENT, "last_name": "Cruz, Jr."})
    rows = list(csv.reader(io.StringIO(client.get("/api/patients/export").text)))
    assert rows[-1][2] == "Cruz, Jr."


def test_consultations_newest_first_with_names(client):
    body = client.get("/api/consultations").json()
    assert body["total"] == 3
    assert [c["consultation_id"] for c in body["consultations"]] == ["c3", "c1", "c2"]
    assert body["consultations"][0]["patient_name"] == "Pedro Penduko"


def test_create_consultation_splits_meds(client):
    r = client.post("/api/consultations", json={
        "patient_id": "4",
        "chief_complaint": "Headache",
        "diagnosis": "Hypertension",
        "treatment": "Low salt diet",
        "prescribed_meds": "Losartan,  Paracetamol , ,",
    })
    assert r.status_code == 201
    c = r.json()
    assert c["prescribed_meds"] == ["Losartan", "Paracetamol"]
    assert c["date"] == date.today().isoformat()
    assert c["patient_name"] == "Elena Reyes"
    assert client.get("/api/consultations").json()["consultations"][0]["consultation_id"] == c["consultation_id"]


def test_consultation_for_unknown_patient_has_no_name(client):
    r = client.post("/api/consultations", json={
        "patient_id": "999",
        "chief_complaint": "Fever",
        "diagnosis": "Flu",
    })
    assert r.status_code == 201
    assert r.json()["patient_name"] is None
    assert client.get(f"/api/consultations/{r.json()['consultation_id']}").status_code == 200
    assert client.get("/api/consultations/missing").status_code == 404


def test_filter_consultations_by_patient(client):
    body = client.get("/api/consultations", params={"patient_id": "2"}).json()
    assert [c["consultation_id"] for c in body["consultations"]] == ["c2"]


def test_medicines_crud(client):
    body = client.get("/api/medicines").json()
    assert body["total"] == 4

    r = client.post("/api/medicines", json={
        "name": "Ibuprofen",
        "category": "Analgesic",
        "stock": 20,
        "unit": "Tablets",
        "expiry_date": "2027-03-01",
    })
    assert r.status_code == 201
    med = r.json()
    assert med["low_stock"] is True

    r = client.put(f"/api/medicines/{med['medicine_id']}", json={"stock": 400})
    assert r.json()["stock"] == 400
    assert r.json()["low_stock"] is False

    assert [m["name"] for m in client.get("/api/medicines", params={"search": "analgesic"}).json()["medicines"]] == [
        "Paracetamol", "Ibuprofen",
    ]

    assert client.delete(f"/api/medicines/{med['medicine_id']}").status_code == 200
    assert client.get(f"/api/medicines/{med['medicine_id']}").status_code == 404


def test_medicine_stock_cannot_be_negative(client):
    assert client.put("/api/medicines/m1", json={"stock": -5}).status_code == 422
