"""
POI API Routes
Upload, list and search endpoints; every response is an ApiEnvelope.
"""
import logging
from typing import Optional

from fastapi import APIRouter, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse

from poi_service.schemas.envelope import ApiEnvelope
from poi_service.schemas.poi import PoiResponse
from poi_service.services import messages
from poi_service.services.envelope import build_err, build_ok
from poi_service.services.ingestion import PoiIngestionService
from poi_service.services.query import PoiQueryService, QueryResult

logger = logging.getLogger(__name__)

router = APIRouter()


def respond(envelope: ApiEnvelope) -> JSONResponse:
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_payload())


def _ingestion(request: Request) -> PoiIngestionService:
    return request.app.state.ingestion


def _queries(request: Request) -> PoiQueryService:
    return request.app.state.queries


def _query_envelope(result: QueryResult) -> ApiEnvelope:
    items = [PoiResponse.model_validate(item) for item in result.items]
    return build_ok(result.message, items, len(items))


@router.post("/upload-excel")
async def upload_excel(request: Request, excelFile: Optional[UploadFile] = File(None)):
    """Replace all POIs with the rows of an uploaded sheet (title, latitude, longitude columns)"""
    envelope = await _ingestion(request).upload(excelFile)
    return respond(envelope)


@router.get("/poi")
async def list_poi(request: Request):
    """Get all POI data"""
    try:
        result = await _queries(request).list_all()
    except Exception as e:
        logger.error(f"POI list failed: {e}", exc_info=True)
        return respond(build_err(500, messages.LIST_FAILED))
    return respond(_query_envelope(result))


@router.get("/poi/search")
async def search_poi(
    request: Request,
    searchText: Optional[str] = Query(None, description="Search keyword for POI names", examples=["경복궁"])
):
    """Search POI data by name"""
    try:
        result = await _queries(request).search_by_name(searchText)
    except Exception as e:
        logger.error(f"POI search failed for {searchText!r}: {e}", exc_info=True)
        return respond(build_err(500, messages.SEARCH_FAILED))
    return respond(_query_envelope(result))


@router.post("/initialize-db")
async def initialize_db(request: Request):
    """Drop and recreate the POI table"""
    database = getattr(request.app.state, "database", None)
    if database is None:
        return respond(build_err(500, messages.INIT_DB_FAILED))
    try:
        await database.init_schema(reset=True)
    except Exception as e:
        logger.error(f"POI table initialization failed: {e}", exc_info=True)
        return respond(build_err(500, messages.INIT_DB_FAILED))
    return respond(build_ok(messages.INIT_DB_DONE))
