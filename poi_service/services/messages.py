"""User-facing response messages"""

NO_FILE_UPLOADED = "파일이 업로드되지 않았습니다."
ONLY_SPREADSHEETS = "엑셀 파일만 업로드할 수 있습니다."
FILE_TOO_LARGE = "업로드 파일이 허용된 크기를 초과했습니다."
VALIDATION_FAILED = "데이터 검증 중 오류가 발생했습니다."
EMPTY_POI_DATA = "POI 데이터가 비어있습니다."
UPDATE_FAILED = "POI 데이터 업데이트 중 오류가 발생했습니다."
FILE_PROCESSING_FAILED = "엑셀 파일 처리 중 오류가 발생했습니다."

LIST_FAILED = "POI 데이터를 조회할 수 없습니다."
SEARCH_FAILED = "POI 검색 중 오류가 발생했습니다."
ENTER_SEARCH_TEXT = "검색어를 입력해주세요."
COLLECTION_MISSING = "POI 테이블이 존재하지 않습니다. 엑셀 파일을 업로드해주세요."

INIT_DB_DONE = "POI 테이블이 초기화되었습니다."
INIT_DB_FAILED = "POI 테이블 초기화 중 오류가 발생했습니다."
INTERNAL_ERROR = "서버 내부 오류가 발생했습니다."


def update_succeeded(count: int, error_count: int = 0) -> str:
    message = f"{count}개의 POI 데이터가 성공적으로 업데이트되었습니다."
    if error_count:
        message += f" ({error_count}개 행에서 오류 발생)"
    return message


def list_succeeded(count: int) -> str:
    return f"{count}개의 POI 데이터를 조회했습니다."


def search_succeeded(search_text: str, count: int) -> str:
    return f'"{search_text}" 검색 결과: {count}개'
