"""
Uniform response envelope for every POI API operation
"""
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel


class ApiEnvelope(BaseModel):
    """Status code, message, payload and item count of one operation.

    Serialized as ``{statusCode, statusMessage, resultData, resultCnt}``; error
    envelopes additionally mirror the status into ``errorCode`` and
    ``errorMessage``.
    """
    status_code: int
    status_message: str
    result_data: Any = None
    result_cnt: int = 0
    is_error: bool = False

    def to_payload(self) -> dict:
        payload = {
            "statusCode": self.status_code,
            "statusMessage": self.status_message,
        }
        if self.is_error:
            payload["errorCode"] = self.status_code
            payload["errorMessage"] = self.status_message
        payload["resultData"] = jsonable_encoder(self.result_data, by_alias=True, exclude_none=True)
        payload["resultCnt"] = self.result_cnt
        return payload
