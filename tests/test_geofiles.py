import io
import os
from datetime import timedelta

import pytest

from models.base import utcnow
from models.geofiles import Geofile, build_query, parse_tags, parse_metadata, parse_coordinates, haversine_m
from utils.exceptions import ValidationError


def _geofile(**fields):
    data = {"filename": "patrol.geojson", "fileType": "geojson"}
    data.update(fields)
    return Geofile.create(data)


def test_parse_tags():
    assert parse_tags(["a", " b ", ""]) == ["a", "b"]
    assert parse_tags('["x", "y"]') == ["x", "y"]
    assert parse_tags("x, y,z") == ["x", "y", "z"]
    assert parse_tags(None) == []


def test_parse_metadata():
    assert parse_metadata('{"creator": "Unit 4"}') == {"creator": "Unit 4"}
    assert parse_metadata(None) == {}
    with pytest.raises(ValidationError):
        parse_metadata("not json")
    with pytest.raises(ValidationError):
        parse_metadata("[1, 2]")


def test_parse_coordinates():
    assert parse_coordinates("[-122.4, 37.7]") == [-122.4, 37.7]
    assert parse_coordinates([1, 2]) == [1.0, 2.0]
    assert parse_coordinates("nope") is None


def test_build_query_escapes_search():
    query = build_query({"search": "a.b"})
    assert query["$or"][0]["filename"]["$regex"] == r"a\.b"
    assert query["$or"][0]["filename"]["$options"] == "i"


def test_search_matches_any_text_field(app):
    _geofile(filename="harbour.kml", fileType="kml")
    _geofile(description="Hotspots near the HARBOUR")
    _geofile(address="12 Harbour Road")
    _geofile(locationName="harbourside")
    _geofile(filename="airport.gpx", fileType="gpx", description="runway")

    results = Geofile.find_all({"search": "harbour"})

    assert len(results) == 4
    for doc in results:
        text = " ".join(str(doc.get(f, "")) for f in ("filename", "description", "address", "locationName"))
        assert "harbour" in text.lower()


def test_filters(app):
    _geofile(fileType="kml", accessLevel="public", tags=["traffic"])
    _geofile(fileType="csv", accessLevel="internal", tags=["crime", "night"])

    assert len(Geofile.find_all({"fileType": "KML"})) == 1
    assert len(Geofile.find_all({"accessLevel": "internal"})) == 1
    assert len(Geofile.find_all({"tags": ["night", "other"]})) == 1

    future = utcnow() + timedelta(days=1)
    assert Geofile.find_all({"dateFrom": future}) == []


def test_reads_structure_legacy_strings(app):
    Geofile.collection().insert_one({
        "filename": "old.csv",
        "fileType": "csv",
        "tags": '["legacy", "import"]',
        "metadata": '{"rows": 10}',
        "createdAt": utcnow()
    })

    doc = Geofile.find_all()[0]
    assert doc["tags"] == ["legacy", "import"]
    assert doc["metadata"] == {"rows": 10}


def test_create_defaults(app):
    doc = _geofile(tags="a,b", metadata='{"k": 1}')
    assert doc["downloadCount"] == 0
    assert doc["accessLevel"] == "internal"
    assert doc["tags"] == ["a", "b"]
    assert doc["metadata"] == {"k": 1}


def test_create_rejects_file_type(app):
    with pytest.raises(ValidationError):
        _geofile(fileType="docx")


def test_add_tags_merges(app):
    doc = _geofile(tags=["a", "b"])
    assert Geofile.add_tags(doc["_id"], ["b", "c"])
    assert Geofile.find_by_id(doc["_id"])["tags"] == ["a", "b", "c"]


def test_find_near(app):
    _geofile(filename="close", coordinates=[-122.4194, 37.7749])
    _geofile(filename="far", coordinates=[-118.2437, 34.0522])
    _geofile(filename="nowhere")

    results = Geofile.find_near(37.7750, -122.4195, radius=1000)
    assert [r["filename"] for r in results] == ["close"]
    assert results[0]["distance"] < 1000


def test_haversine():
    # San Francisco to Los Angeles is roughly 559 km
    assert 550000 < haversine_m(37.7749, -122.4194, 34.0522, -118.2437) < 570000


# -----------------------------
# HTTP
# -----------------------------
def test_list_route_filters(user_client):
    user_client.post("/api/geofiles", json={"filename": "river.kml", "fileType": "kml", "tags": ["water"]})
    user_client.post("/api/geofiles", json={"filename": "roads.csv", "fileType": "csv", "tags": ["traffic"]})

    body = user_client.get("/api/geofiles?search=RIVER").get_json()
    assert [g["filename"] for g in body["geofiles"]] == ["river.kml"]

    body = user_client.get("/api/geofiles?tags=traffic,other").get_json()
    assert [g["filename"] for g in body["geofiles"]] == ["roads.csv"]

    assert user_client.get("/api/geofiles?dateFrom=not-a-date").status_code == 400


def test_create_records_uploader(user_client):
    response = user_client.post("/api/geofiles", json={"filename": "river.kml", "fileType": "kml"})
    assert response.status_code == 201
    assert response.get_json()["geofile"]["uploadedBy"] == "officer"


def test_download_increments(user_client):
    created = user_client.post("/api/geofiles", json={"filename": "river.kml", "fileType": "kml"}).get_json()["geofile"]

    first = user_client.get(f"/api/geofiles/{created['id']}/download")
    assert first.status_code == 200
    assert first.get_json()["filename"] == "river.kml"

    user_client.post(f"/api/geofiles/{created['id']}/download")
    assert Geofile.find_by_id(created["id"])["downloadCount"] == 2

    assert user_client.get("/api/geofiles/5f0000000000000000000000/download").status_code == 404


def test_upload_route(user_client):
    data = {
        "filename": "Beat map",
        "description": "Patrol beats",
        "file": (io.BytesIO(b'{"type": "FeatureCollection", "features": []}'), "beats.geojson"),
    }
    response = user_client.post("/api/geofiles/upload", data=data, content_type="multipart/form-data")

    assert response.status_code == 201
    geofile = response.get_json()["geofile"]
    assert geofile["fileType"] == "geojson"
    assert geofile["originalName"] == "beats.geojson"
    assert geofile["fileUrl"].startswith("/uploads/")


def test_upload_requires_label(user_client):
    data = {"file": (io.BytesIO(b"x"), "beats.geojson")}
    response = user_client.post("/api/geofiles/upload", data=data, content_type="multipart/form-data")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Name/Label is required"


def test_upload_rejects_extension(user_client):
    data = {"filename": "Beat map", "file": (io.BytesIO(b"MZ"), "beats.exe")}
    response = user_client.post("/api/geofiles/upload", data=data, content_type="multipart/form-data")
    assert response.status_code == 400


def test_upload_with_bad_file_type_stores_nothing(user_client, app):
    data = {"filename": "Beat map", "fileType": "pdf", "file": (io.BytesIO(b"<kml/>"), "area.kml")}
    response = user_client.post("/api/geofiles/upload", data=data, content_type="multipart/form-data")

    assert response.status_code == 400
    folder = app.config["UPLOAD_FOLDER"]
    assert not os.path.isdir(folder) or os.listdir(folder) == []
    assert Geofile.find_all({}) == []


def test_stats_summary(user_client):
    user_client.post("/api/geofiles", json={"filename": "a.kml", "fileType": "kml", "accessLevel": "public"})
    user_client.post("/api/geofiles", json={"filename": "b.kml", "fileType": "kml"})

    stats = user_client.get("/api/geofiles/stats/summary").get_json()["stats"]
    assert stats["total"] == 2
    assert stats["byFileType"] == [{"fileType": "kml", "count": 2}]
    assert stats["totalDownloads"] == 0


def test_by_location_requires_coordinates(user_client):
    assert user_client.get("/api/geofiles/search/by-location?lat=abc").status_code == 400
