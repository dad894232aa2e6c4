from datetime import datetime

from conftest import XLSX_CONTENT_TYPE, UndefinedTableError
from poi_service.services import messages

HEADER = ["Title", "Latitude", "Longitude"]


def _seed(store, *titles):
    for i, title in enumerate(titles):
        store.rows.append({
            "id": f"0b9c3c57-7f43-4a57-9d0f-0d6f4fb1a00{i}",
            "title": title,
            "latitude": 37.5 + i,
            "longitude": 127.0,
            "created_at": datetime(2024, 5, 1, 9, 30),
        })


def test_upload_excel(client, store, make_xlsx):
    content = make_xlsx(HEADER, [["경복궁", 37.5796, 126.977], ["남산타워", 37.5512, 126.9882]])

    response = client.post(
        "/api/upload-excel",
        files={"excelFile": ("pois.xlsx", content, XLSX_CONTENT_TYPE)},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["statusCode"] == 200
    assert body["resultCnt"] == 2
    assert body["resultData"] == {"count": 2, "filename": "pois.xlsx"}
    assert "errorCode" not in body
    assert len(store.rows) == 2


def test_upload_without_file(client):
    response = client.post("/api/upload-excel")

    assert response.status_code == 400
    body = response.json()
    assert body["statusMessage"] == messages.NO_FILE_UPLOADED
    assert body["errorCode"] == 400
    assert body["errorMessage"] == messages.NO_FILE_UPLOADED


def test_upload_rejects_other_content_types(client):
    response = client.post(
        "/api/upload-excel",
        files={"excelFile": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json()["statusMessage"] == messages.ONLY_SPREADSHEETS


def test_upload_with_every_row_invalid(client, store, make_xlsx):
    content = make_xlsx(HEADER, [["", 0, 0]])

    response = client.post(
        "/api/upload-excel",
        files={"excelFile": ("pois.xlsx", content, XLSX_CONTENT_TYPE)},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["resultData"]["errors"] == ["Row 1: title is empty, latitude is invalid, longitude is invalid"]
    assert store.calls == []


def test_list_poi(client, store):
    _seed(store, "경복궁", "남산타워")

    response = client.get("/api/poi")

    assert response.status_code == 200
    body = response.json()
    assert body["resultCnt"] == 2
    assert body["statusMessage"] == messages.list_succeeded(2)
    assert body["resultData"][0]["title"] == "경복궁"
    assert body["resultData"][0]["createdAt"] == "2024-05-01T09:30:00Z"


def test_list_poi_before_first_upload(client, store):
    store.select_error = UndefinedTableError("relation \"poi\" does not exist")

    response = client.get("/api/poi")

    assert response.status_code == 200
    body = response.json()
    assert body["statusMessage"] == messages.COLLECTION_MISSING
    assert body["resultData"] == []
    assert body["resultCnt"] == 0


def test_list_poi_store_failure(client, store):
    store.select_error = ConnectionRefusedError("db down")

    response = client.get("/api/poi")

    assert response.status_code == 500
    assert response.json()["errorMessage"] == messages.LIST_FAILED


def test_search_poi(client, store):
    _seed(store, "경복궁", "창덕궁", "서울역")

    response = client.get("/api/poi/search", params={"searchText": " 궁 "})

    assert response.status_code == 200
    body = response.json()
    assert store.search_queries == ["궁"]
    assert [row["title"] for row in body["resultData"]] == ["경복궁", "창덕궁"]
    assert body["statusMessage"] == '"궁" 검색 결과: 2개'


def test_search_without_text(client, store):
    response = client.get("/api/poi/search")

    assert response.status_code == 200
    body = response.json()
    assert body["statusMessage"] == messages.ENTER_SEARCH_TEXT
    assert body["resultData"] == []
    assert store.calls == []


def test_search_store_failure(client, store):
    store.select_error = RuntimeError("boom")

    response = client.get("/api/poi/search", params={"searchText": "궁"})

    assert response.status_code == 500
    assert response.json()["statusMessage"] == messages.SEARCH_FAILED


def test_initialize_db_without_database(client):
    response = client.post("/api/initialize-db")
    assert response.status_code == 500
    assert response.json()["statusMessage"] == messages.INIT_DB_FAILED


def test_health_and_metrics(client):
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "poi_service_http_requests_total" in metrics.text
