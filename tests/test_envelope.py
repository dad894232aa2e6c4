import uuid
from datetime import datetime, timezone

from poi_service.schemas.poi import PoiResponse
from poi_service.services.envelope import OutcomeKind, build_envelope, build_err, build_ok


def test_success_payload_shape():
    payload = build_ok("2개의 POI 데이터를 조회했습니다.", [{"title": "a"}], 2).to_payload()
    assert list(payload) == ["statusCode", "statusMessage", "resultData", "resultCnt"]
    assert payload["statusCode"] == 200
    assert payload["resultCnt"] == 2


def test_error_payload_mirrors_status():
    payload = build_err(400, "파일이 업로드되지 않았습니다.").to_payload()
    assert payload == {
        "statusCode": 400,
        "statusMessage": "파일이 업로드되지 않았습니다.",
        "errorCode": 400,
        "errorMessage": "파일이 업로드되지 않았습니다.",
        "resultData": {},
        "resultCnt": 0,
    }


def test_outcome_kinds_map_to_status_codes():
    assert build_envelope(OutcomeKind.SUCCESS, "ok").status_code == 200
    assert build_envelope(OutcomeKind.CALLER_ERROR, "bad").status_code == 400
    assert build_envelope(OutcomeKind.SYSTEM_ERROR, "down").status_code == 500
    assert build_err(500, "down").is_error


def test_error_payload_keeps_diagnostics():
    payload = build_err(400, "invalid", {"errors": ["Row 1: title is empty"]}).to_payload()
    assert payload["resultData"] == {"errors": ["Row 1: title is empty"]}


def test_poi_rows_serialize_with_camel_case_timestamp():
    poi_id = uuid.uuid4()
    poi = PoiResponse.model_validate({
        "id": str(poi_id),
        "title": "경복궁",
        "latitude": "37.5796000000",
        "longitude": 126.977,
        "created_at": datetime(2024, 5, 1, 18, 0, tzinfo=timezone.utc),
    })
    payload = build_ok("ok", [poi], 1).to_payload()
    assert payload["resultData"] == [{
        "id": str(poi_id),
        "title": "경복궁",
        "latitude": 37.5796,
        "longitude": 126.977,
        "createdAt": "2024-05-01T18:00:00Z",
    }]
