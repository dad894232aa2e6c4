from datetime import datetime
from pathlib import Path
from typing import Callable

import openpyxl
import xlwt
import pytest
from fastapi.testclient import TestClient

from poi_service.config import Settings
from poi_service.errors import RELATION_NOT_FOUND_SQLSTATE
from poi_service.main import create_app

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class UndefinedTableError(Exception):
    """Stand-in for asyncpg's UndefinedTableError"""
    sqlstate = RELATION_NOT_FOUND_SQLSTATE


class FakePoiStore:
    """In-memory PoiStore that records every call"""

    def __init__(self):
        self.rows = []
        self.calls = []
        self.inserted_chunks = []
        self.search_queries = []
        self.delete_error = None
        self.select_error = None
        self.insert_errors = {}  # 1-based chunk number -> exception

    async def delete_all(self):
        self.calls.append("delete_all")
        if self.delete_error:
            raise self.delete_error
        deleted = len(self.rows)
        self.rows = []
        return deleted

    async def insert_many(self, records):
        self.calls.append("insert_many")
        self.inserted_chunks.append(list(records))
        error = self.insert_errors.get(len(self.inserted_chunks))
        if error:
            raise error
        for record in records:
            self.rows.append({
                "id": record.id,
                "title": record.title,
                "latitude": record.latitude,
                "longitude": record.longitude,
                "created_at": datetime(2024, 5, 1, 9, 30, 0),
            })
        return len(records)

    async def select_all(self):
        self.calls.append("select_all")
        if self.select_error:
            raise self.select_error
        return list(self.rows)

    async def select_where_name_contains(self, text):
        self.calls.append("select_where_name_contains")
        self.search_queries.append(text)
        if self.select_error:
            raise self.select_error
        return [row for row in self.rows if text in row["title"]]


class FakeUpload:
    """Minimal UploadFile look-alike"""

    def __init__(self, filename, content, content_type=XLSX_CONTENT_TYPE):
        self.filename = filename
        self.content_type = content_type
        self._content = content
        self._offset = 0

    async def read(self, size=-1):
        if size < 0:
            size = len(self._content) - self._offset
        chunk = self._content[self._offset:self._offset + size]
        self._offset += len(chunk)
        return chunk


@pytest.fixture()
def store() -> FakePoiStore:
    return FakePoiStore()


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture()
def settings(upload_dir: Path) -> Settings:
    return Settings(
        upload_dir=str(upload_dir),
        auto_init_db=False,
        log_file="",
        cors_origins=["http://testserver"],
    )


@pytest.fixture()
def client(settings: Settings, store: FakePoiStore):
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_xlsx(tmp_path: Path) -> Callable[..., bytes]:
    """Write a one-sheet workbook and return its bytes"""

    def _make(header, rows, name="pois.xlsx"):
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.append(list(header))
        for row in rows:
            ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path.read_bytes()

    return _make


@pytest.fixture()
def make_xls(tmp_path: Path) -> Callable[..., bytes]:
    """Write a one-sheet legacy BIFF workbook and return its bytes"""

    def _make(header, rows, name="pois.xls"):
        book = xlwt.Workbook()
        sheet = book.add_sheet("POI")
        for row_index, values in enumerate([header, *rows]):
            for col_index, value in enumerate(values):
                if value is not None:
                    sheet.write(row_index, col_index, value)
        path = tmp_path / name
        book.save(str(path))
        return path.read_bytes()

    return _make
