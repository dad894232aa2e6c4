"""
Upload ingestion pipeline

upload -> temporary file -> rows -> candidate records -> validation ->
batch replace -> response envelope. The temporary file is removed before the
pipeline returns, whatever the outcome.
"""
import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from poi_service.errors import EmptyPoiDataError
from poi_service.schemas.envelope import ApiEnvelope
from poi_service.services import messages
from poi_service.services.envelope import build_err, build_ok
from poi_service.services.replace_engine import BatchReplaceEngine
from poi_service.services.row_parser import parse_row
from poi_service.services.sheet_reader import is_spreadsheet_upload, read_rows
from poi_service.services.validator import ValidationResult, validate_records
from poi_service.utils.metrics import record_upload

logger = logging.getLogger(__name__)

READ_CHUNK_BYTES = 1024 * 1024


class UploadTooLargeError(ValueError):
    pass


class PoiIngestionService:
    """Full-replace load of the POI collection from one uploaded sheet.

    ``upload`` is anything shaped like Starlette's ``UploadFile``: a
    ``filename``, a ``content_type`` and an async ``read(size)``.
    """

    def __init__(self, engine: BatchReplaceEngine, upload_dir: str = "uploads",
                 max_upload_bytes: int = 20 * 1024 * 1024):
        self._engine = engine
        self._upload_dir = upload_dir
        self._max_upload_bytes = max_upload_bytes

    async def upload(self, upload) -> ApiEnvelope:
        if upload is None or not getattr(upload, "filename", None):
            record_upload("invalid_request")
            return build_err(400, messages.NO_FILE_UPLOADED)

        filename = upload.filename
        if not is_spreadsheet_upload(upload.content_type):
            logger.warning(f"Rejected upload {filename}: content type {upload.content_type!r}")
            record_upload("invalid_request")
            return build_err(400, messages.ONLY_SPREADSHEETS)

        temp_path = None
        try:
            temp_path = await self._save_upload(upload)
            rows = await asyncio.to_thread(read_rows, temp_path, filename)
            validation = validate_records([parse_row(row) for row in rows])
        except UploadTooLargeError as e:
            logger.warning(f"Rejected upload {filename}: {e}")
            record_upload("invalid_request")
            return build_err(400, messages.FILE_TOO_LARGE)
        except Exception as e:
            logger.error(f"Failed to process upload {filename}: {e}", exc_info=True)
            record_upload("failed")
            return build_err(500, messages.FILE_PROCESSING_FAILED)
        finally:
            self._discard(temp_path)

        return await self._apply(filename, validation)

    async def _apply(self, filename: str, validation: ValidationResult) -> ApiEnvelope:
        accepted, errors = validation.accepted, validation.errors

        if errors:
            logger.warning(
                f"Validation errors in {filename}: accepted={len(accepted)}, "
                f"rejected={len(errors)}, errors={errors}"
            )
        if not accepted:
            if errors:
                record_upload("rejected", len(errors))
                return build_err(400, messages.VALIDATION_FAILED, {"errors": errors})
            record_upload("empty")
            return build_err(400, messages.EMPTY_POI_DATA)

        try:
            count = await self._engine.replace(accepted)
        except EmptyPoiDataError:
            record_upload("empty")
            return build_err(400, messages.EMPTY_POI_DATA)
        except Exception as e:
            logger.error(
                f"POI replace failed for {filename} ({len(accepted)} records): {e}",
                exc_info=True
            )
            record_upload("failed", len(errors))
            return build_err(500, messages.UPDATE_FAILED)

        record_upload("partial" if errors else "success", len(errors))
        logger.info(f"Upload {filename} stored {count} POIs")

        result_data = {"count": count, "filename": filename}
        if errors:
            result_data["errors"] = errors
        return build_ok(messages.update_succeeded(count, len(errors)), result_data, count)

    async def _save_upload(self, upload) -> str:
        os.makedirs(self._upload_dir, exist_ok=True)
        fd, path = tempfile.mkstemp(dir=self._upload_dir, suffix=Path(upload.filename).suffix)
        try:
            size = 0
            with os.fdopen(fd, "wb") as out:
                while True:
                    chunk = await upload.read(READ_CHUNK_BYTES)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self._max_upload_bytes:
                        raise UploadTooLargeError(
                            f"upload exceeds {self._max_upload_bytes} bytes"
                        )
                    out.write(chunk)
        except BaseException:
            self._discard(path)
            raise
        return path

    @staticmethod
    def _discard(path: Optional[str]):
        if not path:
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary upload {path}: {e}")
