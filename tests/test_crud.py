import pytest

from models.cases import Case
from models.ob_entries import OBEntry

MISSING_ID = "5f0000000000000000000000"

# (url, list key, item key, valid body, number field)
RESOURCES = [
    ("/api/cases", "cases", "case", {"title": "Burglary on 5th", "type": "Theft"}, "caseNumber"),
    ("/api/ob-entries", "obEntries", "obEntry", {"type": "Noise", "description": "Loud party"}, "obNumber"),
    ("/api/license-plates", "licensePlates", "licensePlate", {"plateNumber": "kaa 123b"}, None),
    ("/api/officers", "officers", "officer", {"firstName": "Ann", "lastName": "Mwangi"}, "badgeNumber"),
    ("/api/reports", "reports", "report", {"title": "Monthly stats", "type": "Incident"}, "reportNumber"),
    ("/api/police-vehicles", "vehicles", "vehicle", {"vehicleId": "PV-001"}, None),
    ("/api/profiles", "profiles", "profile", {"username": "ann", "department": "CID"}, None),
]


@pytest.mark.parametrize("url,list_key,item_key,body,number_field", RESOURCES)
def test_resource_lifecycle(user_client, url, list_key, item_key, body, number_field):
    created = user_client.post(url, json=body)
    assert created.status_code == 201, created.get_json()
    item = created.get_json()[item_key]
    assert item["id"] == item["_id"]
    if number_field:
        assert item[number_field]

    listed = user_client.get(url).get_json()[list_key]
    assert [i["id"] for i in listed] == [item["id"]]

    assert user_client.get(f"{url}/{item['id']}").status_code == 200

    updated = user_client.put(f"{url}/{item['id']}", json={"notes": "checked", "createdAt": "tampered"})
    assert updated.status_code == 200
    assert updated.get_json()[item_key]["notes"] == "checked"
    assert updated.get_json()[item_key]["createdAt"] == item["createdAt"]

    assert user_client.delete(f"{url}/{item['id']}").status_code == 200
    assert user_client.get(f"{url}/{item['id']}").status_code == 404


@pytest.mark.parametrize("url", [r[0] for r in RESOURCES])
def test_unknown_ids_are_not_found(user_client, url):
    assert user_client.get(f"{url}/{MISSING_ID}").status_code == 404
    assert user_client.put(f"{url}/{MISSING_ID}", json={"notes": "x"}).status_code == 404
    assert user_client.delete(f"{url}/{MISSING_ID}").status_code == 404
    assert user_client.delete(f"{url}/not-an-object-id").status_code == 404


def test_delete_missing_returns_false(app):
    assert Case.delete(MISSING_ID) is False
    assert Case.delete("garbage") is False


def test_update_with_same_values_still_matches(app):
    case = Case.create({"title": "Fraud", "type": "Fraud"})
    assert Case.update(case["_id"], {"title": "Fraud"}) is True


# -----------------------------
# Cases
# -----------------------------
def test_case_defaults_and_creator(user_client):
    case = user_client.post("/api/cases", json={"title": "Assault", "type": "Violence"}).get_json()["case"]
    me = user_client.get("/api/auth/me").get_json()["user"]

    assert case["priority"] == "Medium"
    assert case["status"] == "Open"
    assert case["createdById"] == me["id"]


def test_case_null_priority_and_status_get_defaults(user_client):
    response = user_client.post("/api/cases", json={"title": "Burglary", "type": "Property", "priority": None, "status": None})

    assert response.status_code == 201
    case = response.get_json()["case"]
    assert case["priority"] == "Medium"
    assert case["status"] == "Open"


def test_case_validation(user_client):
    assert user_client.post("/api/cases", json={"title": "No type"}).status_code == 400
    assert user_client.post("/api/cases", json={"title": "X", "type": "Y", "status": "Lost"}).status_code == 400


def test_case_filters(user_client):
    user_client.post("/api/cases", json={"title": "A", "type": "Theft", "status": "Closed"})
    user_client.post("/api/cases", json={"title": "B", "type": "Theft", "assignedOfficer": "ofc-7"})

    closed = user_client.get("/api/cases?status=Closed").get_json()["cases"]
    assert [c["title"] for c in closed] == ["A"]

    mine = user_client.get("/api/cases?assignedOfficer=ofc-7").get_json()["cases"]
    assert [c["title"] for c in mine] == ["B"]
    assert len(Case.find_by_officer("ofc-7")) == 1
    assert [c["title"] for c in Case.find_by_status("Closed")] == ["A"]


def test_duplicate_case_number_conflicts(user_client):
    body = {"title": "A", "type": "Theft", "caseNumber": "CASE-2025-ABCDEF"}
    assert user_client.post("/api/cases", json=body).status_code == 201
    assert user_client.post("/api/cases", json=body).status_code == 409


# -----------------------------
# OB entries
# -----------------------------
def test_ob_entry_defaults(user_client):
    entry = user_client.post("/api/ob-entries", json={"type": "Lost item", "description": "Wallet"}).get_json()["obEntry"]
    assert entry["status"] == "Pending"
    assert entry["officer"] == "Duty Officer"
    assert entry["date"] and entry["time"] and entry["dateTime"]
    assert entry["recordingOfficerId"]


def test_ob_entry_date_filter(user_client):
    user_client.post("/api/ob-entries", json={"type": "Noise", "description": "Party"})

    assert len(user_client.get("/api/ob-entries?dateFrom=2000-01-01").get_json()["obEntries"]) == 1
    assert user_client.get("/api/ob-entries?dateFrom=2999-01-01").get_json()["obEntries"] == []
    assert len(OBEntry.find_by_date_range(status="Pending")) == 1


# -----------------------------
# License plates
# -----------------------------
def test_plate_is_normalised_and_searchable(user_client):
    user_client.post("/api/license-plates", json={"plateNumber": "kbc  456d", "owner": "J. Otieno"})

    found = user_client.get("/api/license-plates/search/KBC 456D")
    assert found.status_code == 200
    assert found.get_json()["licensePlate"]["plateNumber"] == "KBC 456D"
    assert found.get_json()["licensePlate"]["status"] == "Active"

    assert user_client.get("/api/license-plates/search/ZZZ 000Z").status_code == 404


def test_duplicate_plate_conflicts(user_client):
    assert user_client.post("/api/license-plates", json={"plateNumber": "KDA 111A"}).status_code == 201
    assert user_client.post("/api/license-plates", json={"plateNumber": "kda 111a"}).status_code == 409


# -----------------------------
# Officers and reports
# -----------------------------
def test_officer_defaults_and_department_filter(user_client):
    officer = user_client.post("/api/officers", json={"firstName": "A", "lastName": "B", "department": "CID"}).get_json()["officer"]
    user_client.post("/api/officers", json={"firstName": "C", "lastName": "D", "department": "Traffic"})

    assert officer["status"] == "active"
    assert officer["badgeNumber"].startswith("OFC-")
    cid = user_client.get("/api/officers?department=CID").get_json()["officers"]
    assert [o["firstName"] for o in cid] == ["A"]


def test_report_defaults(user_client):
    report = user_client.post("/api/reports", json={"title": "Audit", "type": "Internal"}).get_json()["report"]
    assert report["status"] == "Pending"
    assert report["priority"] == "Medium"
    assert report["requestedBy"] == "officer"
    assert report["reportNumber"].startswith("RPT-")


# -----------------------------
# Police vehicles
# -----------------------------
def test_vehicle_location_and_status(user_client):
    vehicle = user_client.post("/api/police-vehicles", json={"vehicleId": "PV-002"}).get_json()["vehicle"]
    assert vehicle["status"] == "available"

    moved = user_client.patch(f"/api/police-vehicles/{vehicle['id']}/location", json={"location": [36.82, -1.29]})
    assert moved.status_code == 200
    assert moved.get_json()["vehicle"]["location"] == [36.82, -1.29]

    bad = user_client.patch(f"/api/police-vehicles/{vehicle['id']}/location", json={"location": [500, 0]})
    assert bad.status_code == 400

    status = user_client.patch(f"/api/police-vehicles/{vehicle['id']}/status", json={"status": "responding"})
    assert status.get_json()["vehicle"]["status"] == "responding"

    assert user_client.patch(f"/api/police-vehicles/{vehicle['id']}/status", json={"status": "flying"}).status_code == 400


# -----------------------------
# Current user's profile
# -----------------------------
def test_my_profile_is_created_from_user(user_client):
    response = user_client.get("/api/profile")
    assert response.status_code == 200
    profile = response.get_json()["user"]
    assert profile["username"] == "officer"
    assert profile["department"] == "Police Department"
    assert "password" not in profile


def test_my_profile_update_ignores_locked_fields(user_client):
    user_client.get("/api/profile")
    response = user_client.put("/api/profile", json={"phone": "+254700000000", "password": "x", "userId": "other"})

    profile = response.get_json()["user"]
    assert profile["phone"] == "+254700000000"
    assert profile["userId"] != "other"
    assert "password" not in profile


def test_lookup_helpers(app):
    from models.evidence import Evidence
    from models.geofiles import Geofile
    from models.officers import Officer
    from models.profiles import Profile
    from models.vehicles import PoliceVehicle

    evidence = Evidence.create({"type": "Audio", "description": "911 call", "location": "Dispatch"})
    assert Evidence.find_by_evidence_number(evidence["evidenceNumber"])["_id"] == evidence["_id"]
    assert len(Evidence.find_by_type("Audio")) == 1
    assert len(Evidence.find_by_status("Collected")) == 1
    assert Evidence.find_by_ob_id("ob-1") == []

    Geofile.create({"filename": "zones.kml", "fileType": "kml", "accessLevel": "public", "tags": ["zones"]})
    assert len(Geofile.find_by_type("kml")) == 1
    assert len(Geofile.find_by_access_level("public")) == 1
    assert len(Geofile.find_by_tags("zones")) == 1

    officer = Officer.create({"firstName": "Eve", "lastName": "Kamau"})
    assert Officer.find_by_badge_number(officer["badgeNumber"])["firstName"] == "Eve"

    PoliceVehicle.create({"vehicleId": "PV-009"})
    assert PoliceVehicle.find_by_vehicle_id("PV-009")["status"] == "available"

    Profile.create({"username": "eve"})
    assert Profile.find_by_username("eve") is not None
