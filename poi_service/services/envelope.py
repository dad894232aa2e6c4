"""Result envelope builder"""
from enum import Enum
from typing import Any, Optional

from poi_service.schemas.envelope import ApiEnvelope


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    CALLER_ERROR = "caller_error"
    SYSTEM_ERROR = "system_error"


STATUS_CODES = {
    OutcomeKind.SUCCESS: 200,
    OutcomeKind.CALLER_ERROR: 400,
    OutcomeKind.SYSTEM_ERROR: 500,
}


def build_envelope(kind: OutcomeKind, message: str, result_data: Any = None,
                   result_cnt: int = 0) -> ApiEnvelope:
    """Map an outcome to the uniform response shape"""
    return ApiEnvelope(
        status_code=STATUS_CODES[kind],
        status_message=message,
        result_data=result_data,
        result_cnt=result_cnt,
        is_error=kind is not OutcomeKind.SUCCESS,
    )


def build_ok(message: str, result_data: Any = None, result_cnt: int = 0) -> ApiEnvelope:
    return build_envelope(OutcomeKind.SUCCESS, message, result_data, result_cnt)


def build_err(code: int, message: str, result_data: Optional[Any] = None,
              result_cnt: int = 0) -> ApiEnvelope:
    kind = OutcomeKind.CALLER_ERROR if code < 500 else OutcomeKind.SYSTEM_ERROR
    return build_envelope(kind, message, {} if result_data is None else result_data, result_cnt)
